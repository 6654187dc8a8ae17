"""Scam board — every scam with its level, timer, payout and crew."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from grift.data.crew import employees_for_scam, manager_for_scam
from grift.engine.economy import format_duration, format_number
from grift.engine.session import GameSession


def _progress_bar(fraction: float, width: int = 16) -> str:
    filled = int(min(max(fraction, 0.0), 1.0) * width)
    return "▰" * filled + "▱" * (width - filled)


class ScamBoard(Widget):
    """Lists the catalog; the highlighted row is what the action keys hit."""

    DEFAULT_CSS = """
    ScamBoard {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    # Changes whenever something visible changes, to trigger a re-render
    fingerprint: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._session: GameSession | None = None
        self._selected: int = 0

    @property
    def selected(self) -> int:
        return self._selected

    def render(self) -> Text:
        text = Text()
        text.append("  ═══ Scams ═══\n\n", style="bold magenta")

        session = self._session
        if session is None:
            text.append("  Setting up shop...\n", style="dim italic")
            return text

        money = session.resources.resources.money
        for i, scam_id in enumerate(session.catalog):
            defn = session.catalog[scam_id]
            progress = session.scams.get(scam_id)
            cursor = "▶" if i == self._selected else " "

            if progress is None or not progress.is_unlocked:
                cost = defn.unlock_cost or 0
                style = "bold green" if money >= cost else "dim"
                text.append(f" {cursor} {defn.name} ", style=style)
                text.append(f"🔒 ${format_number(cost)}\n", style="red" if money < cost else "green")
                continue

            text.append(f" {cursor} {defn.name} ", style="bold white")
            text.append(f"Lv.{progress.level}", style="dim")
            if session.managers.is_scam_managed(scam_id):
                text.append("  ⚙ managed", style="cyan")
            text.append("\n")

            duration = session.duration_for(scam_id) or 0
            reward = session.reward_for(scam_id) or 0
            text.append(
                f"      +{format_number(reward)} {defn.resource_type.value} "
                f"every {format_duration(duration)}\n",
                style="green",
            )

            if session.is_running(scam_id):
                fraction = session.timer_progress(scam_id)
                text.append(f"      {_progress_bar(fraction)} ", style="yellow")
                text.append(f"{fraction * 100:.0f}%\n", style="dim")
            else:
                text.append("      idle — [Space] to run\n", style="dim italic")

            upgrade = session.upgrade_cost_for(scam_id) or 0
            text.append(
                f"      Upgrade: ${format_number(upgrade)}\n",
                style="green" if money >= upgrade else "red",
            )

            if i == self._selected:
                for emp in employees_for_scam(scam_id):
                    count = session.employees.count(emp.id)
                    cost = session.hire_cost_for(emp.id) or 0
                    text.append(f"      {emp.name} ×{count} ", style="cyan")
                    text.append(f"hire ${format_number(cost)} [H]\n", style="dim")
                manager = manager_for_scam(scam_id)
                if manager is not None and not session.managers.is_hired(manager.id):
                    text.append(f"      {manager.name} ", style="cyan")
                    text.append(f"manage ${format_number(manager.cost)} [M]\n", style="dim")

        return text

    def select(self, index: int) -> None:
        if self._session is None or not self._session.catalog:
            return
        self._selected = index % len(self._session.catalog)
        self.refresh()

    def selected_scam_id(self) -> str | None:
        if self._session is None:
            return None
        ids = list(self._session.catalog)
        return ids[self._selected] if ids else None

    def update_from_session(self, session: GameSession) -> None:
        self._session = session
        self.fingerprint = "|".join(
            f"{sid}:{session.timer_progress(sid):.2f}" for sid in session.catalog
        ) + f"|m:{session.resources.resources.money:.0f}|s:{self._selected}"
