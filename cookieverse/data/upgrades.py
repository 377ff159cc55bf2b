"""Upgrade definitions — one-time multipliers, each boosting one generator."""

from __future__ import annotations

from dataclasses import dataclass

from cookieverse.data.generators import ALL_GENERATORS, GeneratorDef


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single upgrade."""

    id: str
    name: str
    description: str
    # Generator whose per-unit output is multiplied
    target_generator_id: str
    multiplier: float
    # Fixed price; upgrades never escalate
    cost: float


REINFORCED_INDEX_FINGER = UpgradeDef(
    id="up_cursor",
    name="Reinforced Index Finger",
    description="Cursors are twice as efficient.",
    target_generator_id="cursor",
    multiplier=2.0,
    cost=100,
)

FORAGING_GRANDMAS = UpgradeDef(
    id="up_grandma",
    name="Foraging Grandmas",
    description="Grandmas bake twice as much.",
    target_generator_id="grandma",
    multiplier=2.0,
    cost=500,
)


# ── Registry ──────────────────────────────────────────────────────

ALL_UPGRADES: dict[str, UpgradeDef] = {
    u.id: u
    for u in [REINFORCED_INDEX_FINGER, FORAGING_GRANDMAS]
}


def validate_upgrades(
    upgrades: dict[str, UpgradeDef],
    generators: dict[str, GeneratorDef],
) -> None:
    """Raise ValueError if an upgrade is malformed or targets an unknown generator."""
    for uid, udef in upgrades.items():
        if uid != udef.id:
            raise ValueError(f"Upgrade registered as {uid!r} has id {udef.id!r}")
        if uid in generators:
            raise ValueError(f"Upgrade id {uid!r} collides with a generator id")
        if udef.target_generator_id not in generators:
            raise ValueError(
                f"Upgrade {uid!r} targets unknown generator {udef.target_generator_id!r}"
            )
        if udef.multiplier <= 1.0:
            raise ValueError(f"Upgrade {uid!r} multiplier must be greater than 1")
        if udef.cost <= 0:
            raise ValueError(f"Upgrade {uid!r} must have a positive cost")


def upgrades_targeting(generator_id: str) -> list[UpgradeDef]:
    """All upgrades that boost the given generator, in catalog order."""
    return [u for u in ALL_UPGRADES.values() if u.target_generator_id == generator_id]


validate_upgrades(ALL_UPGRADES, ALL_GENERATORS)
