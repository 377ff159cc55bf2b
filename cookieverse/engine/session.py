"""Game session — one player's economy plus the lock and save bookkeeping.

Every intent and timer tick goes through a session so they are applied
one at a time, even when the host delivers them from several threads.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path

from cookieverse.data.balance import BALANCE
from cookieverse.engine.economy import (
    PurchaseResult,
    apply_manual_gain,
    purchase_generator,
    purchase_upgrade,
    tick,
)
from cookieverse.engine.economy_state import EconomyState, new_state
from cookieverse.engine.save import load_game, save_game, state_to_dict

SAVE_FAILED_MESSAGE = "Could not save progress. Playing on in memory."


class GameSession:
    """Serialises all engine operations over a single EconomyState."""

    def __init__(
        self,
        state: EconomyState | None = None,
        save_path: Path | None = None,
        autosave: bool = True,
    ) -> None:
        self.state: EconomyState = state if state is not None else new_state()
        self.save_path = save_path
        self.autosave = autosave
        self.notifications: list[str] = []
        self.lock = threading.Lock()
        self._last_catch_up: float = time.time()
        self._last_autosave: float = time.time()

    @classmethod
    def resume(cls, save_path: Path | None = None, autosave: bool = True) -> GameSession:
        """Continue the saved game at ``save_path``, or start fresh."""
        return cls(load_game(save_path), save_path=save_path, autosave=autosave)

    # ── Intents ──────────────────────────────────

    def click(self) -> float:
        with self.lock:
            earned = apply_manual_gain(self.state)
            self._snapshot()
            return earned

    def buy_generator(self, generator_id: str) -> PurchaseResult:
        with self.lock:
            result = purchase_generator(self.state, generator_id)
            if result.ok:
                self._snapshot()
            return result

    def buy_upgrade(self, upgrade_id: str) -> PurchaseResult:
        with self.lock:
            result = purchase_upgrade(self.state, upgrade_id)
            if result.ok:
                self._snapshot()
            return result

    # ── Timer ────────────────────────────────────

    def tick(self, elapsed: float | None = None, now: float | None = None) -> float:
        """Accrue one fixed-size tick (default ``BALANCE.tick_interval_s``)."""
        with self.lock:
            earned = tick(self.state, elapsed if elapsed is not None else BALANCE.tick_interval_s)
            self._maybe_autosave(time.time() if now is None else now)
            return earned

    def catch_up(self, now: float | None = None) -> float:
        """Accrue wall-clock time since the last catch-up (lazy hosts)."""
        with self.lock:
            now = time.time() if now is None else now
            dt = now - self._last_catch_up
            if dt <= 0:
                return 0.0
            self._last_catch_up = now
            # Cap catch-up to avoid mega-ticks after a long AFK
            earned = tick(self.state, min(dt, BALANCE.max_catch_up_s))
            self._maybe_autosave(now)
            return earned

    # ── Persistence ──────────────────────────────

    def save(self) -> bool:
        """Write the state now, regardless of the autosave setting."""
        with self.lock:
            return self._write()

    def snapshot(self) -> dict:
        """Read-only copy of the state for rendering."""
        with self.lock:
            data = state_to_dict(self.state)
            data["productionRate"] = self.state.production_rate
            return data

    def drain_notifications(self) -> list[str]:
        with self.lock:
            notes = list(self.notifications)
            self.notifications.clear()
            return notes

    def _write(self) -> bool:
        ok = save_game(self.state, self.save_path)
        if not ok:
            self.notifications.append(SAVE_FAILED_MESSAGE)
        return ok

    def _snapshot(self) -> None:
        if self.autosave:
            self._write()
            self._last_autosave = time.time()

    def _maybe_autosave(self, now: float) -> None:
        if self.autosave and now - self._last_autosave >= BALANCE.autosave_interval_s:
            self._write()
            self._last_autosave = now
