"""Prestige screen — pick Clean Escape or Snitch when the heat is on."""

from __future__ import annotations

import math

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Static

from grift.data.balance import BALANCE
from grift.engine.economy import format_number
from grift.engine.prestige import PrestigeChoice
from grift.engine.resources import Resources


class PrestigeScreen(Screen[str]):
    """Modal that dismisses with a ``PrestigeChoice`` value, or "" to back out.

    When the escape is forced the player can't back out.
    """

    BINDINGS = [
        Binding("c", "clean_escape", "Clean Escape", show=True),
        Binding("s", "snitch", "Snitch", show=True),
        Binding("escape", "cancel", "Back"),
    ]

    DEFAULT_CSS = """
    PrestigeScreen {
        background: $surface;
        align: center top;
        padding: 2 4;
    }

    #prestige-body {
        width: 100%;
        height: auto;
        padding: 0 2;
    }
    """

    def __init__(self, resources: Resources, forced: bool, **kwargs) -> None:
        super().__init__(**kwargs)
        self._resources = resources
        self._forced = forced

    def compose(self):
        with Vertical(id="prestige-body"):
            yield Static(id="prestige-text")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#prestige-text", Static).update(self._render_choices())

    # ── Actions ──────────────────────────────────────────────────

    def action_clean_escape(self) -> None:
        self.dismiss(PrestigeChoice.CLEAN_ESCAPE.value)

    def action_snitch(self) -> None:
        self.dismiss(PrestigeChoice.SNITCH.value)

    def action_cancel(self) -> None:
        if self._forced:
            self.app.notify("The feds are at the door. Pick one.", severity="error", timeout=2)
            return
        self.dismiss("")

    # ── Rendering ────────────────────────────────────────────────

    def _render_choices(self) -> Text:
        bal = BALANCE.prestige
        res = self._resources
        text = Text()

        if self._forced:
            text.append("🚨 THE HEAT IS ON 🚨\n", style="bold bright_red")
            text.append("You've drawn too much attention. Time to disappear.\n\n", style="dim italic")
        else:
            text.append("✦ CASH OUT ✦\n", style="bold bright_yellow")
            text.append("Walk away now and start over somewhere new.\n\n", style="dim italic")

        text.append("  Current trust: ", style="dim")
        text.append(f"×{format_number(res.trust)}\n\n", style="bold yellow")

        text.append("  [C] Clean Escape\n", style="bold cyan")
        text.append(
            f"      Trust ×{format_number(res.trust)} → ×{format_number(res.trust + bal.clean_escape_trust_gain)}\n",
            style="cyan",
        )
        text.append("      Everything else is left behind.\n\n", style="dim")

        snitch_trust = max(bal.min_trust, res.trust + bal.snitch_trust_penalty)
        text.append("  [S] Snitch\n", style="bold red")
        text.append(
            f"      Trust ×{format_number(res.trust)} → ×{format_number(snitch_trust)}\n",
            style="red",
        )
        keep = bal.snitch_keep_fraction
        text.append(
            f"      Keep ${format_number(math.floor(res.money * keep))}, "
            f"{format_number(math.floor(res.bots * keep))} bots, "
            f"{res.crypto * keep:.2f} crypto\n",
            style="dim",
        )

        if not self._forced:
            text.append("\n  [Esc] Keep grinding\n", style="dim")
        return text
