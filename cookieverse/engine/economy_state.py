"""Economy state — single source of truth for one player's session."""

from __future__ import annotations

from dataclasses import dataclass, field

from cookieverse.data.generators import ALL_GENERATORS


def _base_costs() -> dict[str, float]:
    return {gid: float(g.base_cost) for gid, g in ALL_GENERATORS.items()}


def _zero_counts() -> dict[str, int]:
    return {gid: 0 for gid in ALL_GENERATORS}


@dataclass
class EconomyState:
    """Complete mutable economy for one session.

    Mutate only through ``cookieverse.engine.economy``; the engine keeps
    ``current_cost`` and ``production_rate`` consistent with ownership.
    """

    # ── Resources ────────────────────────────────────────
    balance: float = 0.0
    lifetime_earned: float = 0.0   # never decreases, not even on spend

    # ── Ownership: generator id → units owned ───────────
    owned_counts: dict[str, int] = field(default_factory=_zero_counts)
    # Price of the *next* unit of each generator
    current_cost: dict[str, float] = field(default_factory=_base_costs)

    # ── Upgrades bought (permanent) ──────────────────────
    owned_upgrades: set[str] = field(default_factory=set)

    # ── Derived / cache (recomputed after every purchase) ─
    production_rate: float = 0.0

    def count(self, generator_id: str) -> int:
        return self.owned_counts.get(generator_id, 0)

    def cost_of(self, generator_id: str) -> float:
        """Price of the next unit; falls back to the catalog base cost."""
        cost = self.current_cost.get(generator_id)
        if cost is None:
            return float(ALL_GENERATORS[generator_id].base_cost)
        return cost

    def has_upgrade(self, upgrade_id: str) -> bool:
        return upgrade_id in self.owned_upgrades


def new_state() -> EconomyState:
    """Fresh state: nothing owned, every cost at its base."""
    return EconomyState()
