"""Grift — Main Textual Application.

Wires the game session into a playable TUI.
"""

from __future__ import annotations

import time

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Header

from grift.data.balance import BALANCE
from grift.data.crew import employees_for_scam, manager_for_scam
from grift.engine.economy import bot_purchase_price, format_duration, format_number
from grift.engine.loop import OfflineProgress
from grift.engine.session import GameSession
from grift.engine.storage import clear_save, load_game, save_game
from grift.ui.hud import HUD
from grift.ui.prestige_screen import PrestigeScreen
from grift.ui.scam_board import ScamBoard


class GriftApp(App):
    """The Grift TUI game application."""

    TITLE = "Grift"
    SUB_TITLE = "Small time. For now."

    CSS = """
    #hud-panel {
        width: 36;
    }
    """

    BINDINGS = [
        Binding("up", "select(-1)", "Up", show=False),
        Binding("down", "select(1)", "Down", show=False),
        Binding("space", "start_scam", "Run", show=True, priority=True),
        Binding("u", "upgrade_scam", "Upgrade", show=True),
        Binding("l", "unlock_scam", "Unlock", show=True),
        Binding("h", "hire_employee", "Hire", show=True),
        Binding("m", "hire_manager", "Manager", show=True),
        Binding("b", "buy_bot", "Buy Bot", show=True),
        Binding("p", "prestige", "Cash Out", show=True),
        Binding("z", "toggle_pause", "Pause", show=True),
        Binding("ctrl+n", "new_game", "New Game", show=False),
        Binding("q", "quit_game", "Quit", show=True),
    ]

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session: GameSession = session or GameSession()
        self._restored = False
        if session is None:
            saved = load_game()
            if saved is not None:
                self._session.restore(saved)
                self._restored = True
        self._last_autosave: float = time.time()
        self._tick_timer: Timer | None = None
        self._prestige_open = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield ScamBoard(id="scam-board")
        yield Footer()

    def on_mount(self) -> None:
        """Credit time away, then start the game loop timer."""
        offline = self._session.catch_up() if self._restored else None
        self._session.start()
        interval = BALANCE.engine.tick_interval_ms / 1000.0
        self._tick_timer = self.set_interval(interval, self._game_tick)
        if offline is not None:
            self._report_offline(offline, "While you were away")
        self._sync_ui()

    def _game_tick(self) -> None:
        """Main game loop — called every tick interval."""
        for completion in self._session.tick():
            defn = self._session.catalog[completion.scam_id]
            if not self._session.managers.is_scam_managed(completion.scam_id):
                self.notify(
                    f"{defn.name}: +{format_number(completion.reward)} {completion.resource}",
                    severity="information", timeout=1,
                )

        if self._session.prestige_forced and not self._prestige_open:
            self._open_prestige(forced=True)

        now = time.time()
        if now - self._last_autosave >= BALANCE.save.autosave_interval_s:
            save_game(self._session.snapshot())
            self._last_autosave = now

        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push session state to all UI widgets."""
        res = self._session.resources.resources
        hud = self.query_one("#hud-panel", HUD)
        hud.update_from_resources(res, bot_purchase_price(res.bots), self._session.loop.is_paused)

        board = self.query_one("#scam-board", ScamBoard)
        board.update_from_session(self._session)

    def _report_offline(self, offline: OfflineProgress, heading: str) -> None:
        if offline.completed_scams <= 0:
            return
        earned = offline.earnings
        self.notify(
            f"{heading} ({format_duration(offline.elapsed_ms)}): "
            f"{offline.completed_scams} scams, +${format_number(earned.money)}, "
            f"+{format_number(earned.bots)} bots, +{earned.heat:.1f} heat",
            severity="warning", timeout=6,
        )

    def _selected(self) -> str | None:
        return self.query_one("#scam-board", ScamBoard).selected_scam_id()

    # ── Actions ──────────────────────────────────────

    def action_select(self, step: int) -> None:
        board = self.query_one("#scam-board", ScamBoard)
        board.select(board.selected + step)

    def action_start_scam(self) -> None:
        scam_id = self._selected()
        if scam_id is None or self._session.loop.is_paused:
            return
        if not self._session.start_scam(scam_id):
            if not self._session.scams.is_unlocked(scam_id):
                self.notify("Unlock it first. [L]", severity="error", timeout=1)

    def action_upgrade_scam(self) -> None:
        scam_id = self._selected()
        if scam_id is None:
            return
        if self._session.upgrade_scam(scam_id):
            level = self._session.scams.get(scam_id).level
            self.notify(f"Upgraded to Lv.{level}!", severity="information", timeout=1)
        else:
            self.notify("Can't afford that upgrade.", severity="error", timeout=1)

    def action_unlock_scam(self) -> None:
        scam_id = self._selected()
        if scam_id is None or self._session.scams.is_unlocked(scam_id):
            return
        if self._session.unlock_scam(scam_id):
            self.notify(f"Unlocked {self._session.catalog[scam_id].name}!", severity="warning", timeout=2)
        else:
            self.notify("Not enough money to unlock.", severity="error", timeout=1)

    def action_hire_employee(self) -> None:
        scam_id = self._selected()
        if scam_id is None:
            return
        for emp in employees_for_scam(scam_id):
            if self._session.hire_employee(emp.id):
                self.notify(f"Hired a {emp.name}.", severity="information", timeout=1)
                return
        self.notify("Nobody to hire you can afford.", severity="error", timeout=1)

    def action_hire_manager(self) -> None:
        scam_id = self._selected()
        manager = manager_for_scam(scam_id) if scam_id else None
        if manager is None or self._session.managers.is_hired(manager.id):
            return
        if self._session.hire_manager(manager.id):
            self.notify(f"{manager.name} now runs the show.", severity="warning", timeout=2)
        else:
            self.notify("Can't afford that manager.", severity="error", timeout=1)

    def action_buy_bot(self) -> None:
        if self._session.buy_bot():
            self.notify("Bot acquired.", severity="information", timeout=1)
        else:
            self.notify("Not enough money for a bot.", severity="error", timeout=1)

    def action_prestige(self) -> None:
        self._open_prestige(forced=self._session.prestige_forced)

    def _open_prestige(self, forced: bool) -> None:
        self._prestige_open = True
        self.push_screen(
            PrestigeScreen(self._session.resources.resources, forced),
            self._on_prestige_chosen,
        )

    def _on_prestige_chosen(self, choice: str | None) -> None:
        """Called when the PrestigeScreen is dismissed."""
        self._prestige_open = False
        if not choice:
            return
        result = self._session.execute_prestige(choice)
        save_game(self._session.snapshot())
        self._sync_ui()
        self.notify(
            f"✦ Fresh start. Trust ×{format_number(result.previous_trust)} → "
            f"×{format_number(result.new_trust)}",
            severity="warning", timeout=6,
        )

    def action_toggle_pause(self) -> None:
        if self._session.loop.is_paused:
            offline = self._session.resume()
            if offline is not None:
                self._report_offline(offline, "During the break")
        else:
            self._session.pause()
        self._sync_ui()

    def action_quit_game(self) -> None:
        """Save and quit."""
        save_game(self._session.snapshot())
        self._session.stop()
        self.exit()

    def action_new_game(self) -> None:
        """Wipe the save and start over from nothing."""
        clear_save()
        self._session = GameSession()
        self._session.start()
        self._sync_ui()
