"""HUD widget — resource counters, heat gauge and loop status."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from grift.data.balance import BALANCE
from grift.engine.economy import format_number, format_percent
from grift.engine.resources import Resources


def _heat_bar(heat: float, width: int = 20) -> str:
    fraction = min(max(heat / BALANCE.prestige.max_heat, 0.0), 1.0)
    filled = int(fraction * width)
    return "█" * filled + "░" * (width - filled)


class HUD(Widget):
    """Heads-up display showing the resource vector."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    money: reactive[str] = reactive("0")
    bots: reactive[str] = reactive("0")
    reputation: reactive[str] = reactive("0")
    crypto: reactive[str] = reactive("0")
    skill_points: reactive[str] = reactive("0")
    trust: reactive[str] = reactive("1")
    heat: reactive[float] = reactive(0.0)
    bot_price: reactive[str] = reactive("100")
    paused: reactive[bool] = reactive(False)

    def render(self) -> Text:
        text = Text()

        text.append("  === The Operation ===\n\n", style="bold cyan")
        if self.paused:
            text.append("  ⏸ PAUSED\n\n", style="bold yellow")

        text.append("  Money: ", style="dim")
        text.append(f"${self.money}\n", style="bold green")

        text.append("  Bots: ", style="dim")
        text.append(f"{self.bots}\n", style="green")
        text.append(f"  Next bot: ${self.bot_price}  [B]\n", style="dim")

        text.append("  Reputation: ", style="dim")
        text.append(f"{self.reputation}\n", style="green")

        text.append("  Crypto: ", style="dim")
        text.append(f"{self.crypto}\n", style="green")

        text.append("  Skill Points: ", style="dim")
        text.append(f"{self.skill_points}\n", style="green")

        text.append("\n")

        # Trust (prestige multiplier)
        text.append("  Trust: ", style="dim")
        text.append(f"×{self.trust}\n", style="bold yellow")

        text.append("\n")

        # Heat gauge
        max_heat = BALANCE.prestige.max_heat
        if self.heat >= max_heat:
            heat_style = "bold red"
        elif self.heat >= max_heat * 0.75:
            heat_style = "red"
        elif self.heat >= max_heat * 0.5:
            heat_style = "yellow"
        else:
            heat_style = "green"
        text.append("  Heat: ", style="dim")
        text.append(f"{self.heat:.1f}/{max_heat:.0f}\n", style=heat_style)
        text.append(f"  {_heat_bar(self.heat)}\n", style=heat_style)
        text.append(f"  {format_percent(min(self.heat / max_heat, 1.0))}\n", style="dim")

        return text

    def update_from_resources(self, res: Resources, bot_price: float, paused: bool) -> None:
        self.money = format_number(res.money)
        self.bots = format_number(res.bots)
        self.reputation = format_number(res.reputation)
        self.crypto = f"{res.crypto:.2f}"
        self.skill_points = format_number(res.skill_points)
        self.trust = format_number(res.trust)
        self.heat = res.heat
        self.bot_price = format_number(bot_price)
        self.paused = paused
