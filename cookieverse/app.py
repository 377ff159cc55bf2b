"""Cookie Universe — Main Textual Application.

Wires a GameSession into a playable TUI.
"""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Header, Footer
from textual.timer import Timer

from cookieverse.data.balance import BALANCE
from cookieverse.data.generators import ALL_GENERATORS
from cookieverse.data.upgrades import ALL_UPGRADES
from cookieverse.engine.economy import PurchaseResult, available_upgrades
from cookieverse.engine.session import GameSession

from cookieverse.ui.hud import HUD
from cookieverse.ui.shop_panel import ShopPanel


GENERATOR_ORDER: tuple[str, ...] = tuple(ALL_GENERATORS)


class CookieverseApp(App):
    """The Cookie Universe TUI game application."""

    TITLE = "Cookie Universe"
    SUB_TITLE = "Click. Bake. Invest."

    BINDINGS = [
        Binding("space", "click", "Click", show=True, priority=True),
        Binding("enter", "click", "Click", show=False),
        Binding("1", "buy_generator(0)", "Buy #1", show=False),
        Binding("2", "buy_generator(1)", "Buy #2", show=False),
        Binding("3", "buy_generator(2)", "Buy #3", show=False),
        Binding("4", "buy_generator(3)", "Buy #4", show=False),
        Binding("5", "buy_generator(4)", "Buy #5", show=False),
        Binding("6", "buy_generator(5)", "Buy #6", show=False),
        Binding("u", "buy_upgrade(0)", "Upgrade #1", show=True),
        Binding("i", "buy_upgrade(1)", "Upgrade #2", show=False),
        Binding("q", "quit_game", "Quit", show=True),
    ]

    def __init__(self, session: GameSession | None = None, save_path: Path | None = None) -> None:
        super().__init__()
        # Try to resume a saved game, otherwise start fresh
        self._session: GameSession = session if session is not None else GameSession.resume(save_path)
        self._tick_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield ShopPanel(id="shop-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start the game loop timer."""
        self._tick_timer = self.set_interval(BALANCE.tick_interval_s, self._game_tick)
        self._sync_ui()

    def on_unmount(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.stop()

    def _game_tick(self) -> None:
        """Passive income — called BALANCE.tick_rate_hz times per second."""
        self._session.tick(BALANCE.tick_interval_s)
        self._flush_notifications()
        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push economy state to all UI widgets."""
        state = self._session.state
        self.query_one("#hud-panel", HUD).update_from_state(state)
        self.query_one("#shop-panel", ShopPanel).update_from_state(state)

    def _flush_notifications(self) -> None:
        for message in self._session.drain_notifications():
            self.notify(message, severity="error", timeout=3)

    def _report_purchase(self, result: PurchaseResult, name: str) -> None:
        if result.ok:
            self.notify(f"Purchased {name}!", severity="information", timeout=1)
        elif result.recoverable:
            self.notify("Not enough cookies!", severity="warning", timeout=1)
        # Anything else is already logged by the engine
        self._flush_notifications()
        self._sync_ui()

    # ── Actions ──────────────────────────────────────

    def action_click(self) -> None:
        self._session.click()
        self._flush_notifications()
        self._sync_ui()

    def action_buy_generator(self, index: int) -> None:
        """Purchase the generator at shop index (0-based)."""
        if index >= len(GENERATOR_ORDER):
            return
        gid = GENERATOR_ORDER[index]
        result = self._session.buy_generator(gid)
        self._report_purchase(result, ALL_GENERATORS[gid].name)

    def action_buy_upgrade(self, index: int) -> None:
        """Purchase the index-th upgrade still on offer (0-based)."""
        offered = available_upgrades(self._session.state)
        if index >= len(offered):
            return
        uid = offered[index].id
        result = self._session.buy_upgrade(uid)
        self._report_purchase(result, ALL_UPGRADES[uid].name)

    def action_quit_game(self) -> None:
        """Save and quit."""
        if self._session.save():
            self.notify("Game saved!", severity="information", timeout=2)
        self.exit()
