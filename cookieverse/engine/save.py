"""Save/load — persists the economy between sessions.

The engine only cares about the key set below; JSON on disk is the
default transport.
"""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path

from cookieverse.data.balance import BALANCE
from cookieverse.data.generators import ALL_GENERATORS
from cookieverse.data.upgrades import ALL_UPGRADES
from cookieverse.engine.economy import recompute_production_rate
from cookieverse.engine.economy_state import EconomyState

logger = logging.getLogger(__name__)

SAVE_FILENAME = "save.json"


def save_dir() -> Path:
    """Directory holding the save file (``COOKIEVERSE_HOME`` overrides)."""
    override = os.environ.get("COOKIEVERSE_HOME")
    if override:
        return Path(override)
    return Path.home() / ".cookieverse"


def default_save_path() -> Path:
    return save_dir() / SAVE_FILENAME


# ── Serialisation helpers ────────────────────────────────────────


def state_to_dict(state: EconomyState) -> dict:
    s = state
    return {
        "balance": s.balance,
        "lifetimeEarned": s.lifetime_earned,
        "ownedCounts": dict(s.owned_counts),
        "currentCost": dict(s.current_cost),
        # Catalog order keeps the file stable between saves
        "ownedUpgrades": [uid for uid in ALL_UPGRADES if uid in s.owned_upgrades],
    }


def _non_negative(value, default: float = 0.0) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    # NaN and infinities would break balance <= lifetime_earned
    if not math.isfinite(value):
        return default
    return max(value, 0.0)


def _expected_cost(gid: str, count: int) -> float:
    try:
        cost = float(ALL_GENERATORS[gid].base_cost) * BALANCE.economy.cost_growth ** count
    except OverflowError as exc:
        raise ValueError(f"Saved count for {gid!r} is out of range") from exc
    if not math.isfinite(cost):
        raise ValueError(f"Saved count for {gid!r} is out of range")
    return cost


def dict_to_state(d: dict) -> EconomyState:
    """Rebuild a state, backfilling anything the catalog gained since the save."""
    counts_d = d.get("ownedCounts") or {}
    costs_d = d.get("currentCost") or {}
    if not isinstance(counts_d, dict) or not isinstance(costs_d, dict):
        raise ValueError("ownedCounts and currentCost must be mappings")

    for gid in counts_d:
        if gid not in ALL_GENERATORS:
            logger.warning("Dropping saved count for retired generator %r", gid)

    owned_counts: dict[str, int] = {}
    current_cost: dict[str, float] = {}
    for gid in ALL_GENERATORS:
        count = int(_non_negative(counts_d.get(gid, 0)))
        owned_counts[gid] = count
        expected = _expected_cost(gid, count)
        saved_cost = _non_negative(costs_d.get(gid))
        if saved_cost <= 0:
            current_cost[gid] = expected
            continue
        if not math.isclose(saved_cost, expected, rel_tol=1e-9):
            logger.warning(
                "Saved cost %r for %r does not match %r owned (expected %r)",
                saved_cost, gid, count, expected,
            )
        current_cost[gid] = saved_cost

    owned_upgrades: set[str] = set()
    for uid in d.get("ownedUpgrades", []) or []:
        if uid in ALL_UPGRADES:
            owned_upgrades.add(uid)
        else:
            logger.warning("Dropping saved upgrade %r: not in catalog", uid)

    balance = _non_negative(d.get("balance", 0.0))
    lifetime = _non_negative(d.get("lifetimeEarned", 0.0))

    state = EconomyState(
        balance=balance,
        lifetime_earned=max(lifetime, balance),
        owned_counts=owned_counts,
        current_cost=current_cost,
        owned_upgrades=owned_upgrades,
    )
    # Any persisted rate may come from an older catalog
    recompute_production_rate(state)
    return state


def dumps_state(state: EconomyState) -> str:
    """Serialise to an opaque text blob."""
    return json.dumps(state_to_dict(state), indent=2)


def loads_state(blob: str) -> EconomyState:
    """Inverse of :func:`dumps_state`. Raises ValueError on malformed input."""
    data = json.loads(blob)
    if not isinstance(data, dict):
        raise ValueError("Save data must be a JSON object")
    return dict_to_state(data)


# ── Public API ───────────────────────────────────────────────────


def save_game(state: EconomyState, path: Path | None = None) -> bool:
    """Persist the state to disk. Returns False (and logs) on failure."""
    path = path or default_save_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_state(state))
    except OSError as exc:
        logger.warning("Could not write save file %s: %s", path, exc)
        return False
    return True


def load_game(path: Path | None = None) -> EconomyState | None:
    """Load a saved game from disk.  Returns None if no usable save exists."""
    path = path or default_save_path()
    if not path.exists():
        return None
    try:
        return loads_state(path.read_text())
    except (OSError, ValueError, TypeError, OverflowError) as exc:
        logger.warning("Ignoring unreadable save file %s: %s", path, exc)
        return None


def delete_save(path: Path | None = None) -> None:
    """Remove the save file (start over)."""
    path = path or default_save_path()
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not delete save file %s: %s", path, exc)
