"""Generator definitions — purchasable passive production units."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratorDef:
    """Definition of a single generator."""

    id: str
    name: str
    description: str
    icon: str
    # Cookies per second contributed by each owned unit, before upgrades
    base_production_rate: float
    # Cost of the first unit
    base_cost: float


CURSOR = GeneratorDef(
    id="cursor",
    name="Auto-Clicker",
    description="Clicks once every 10 seconds.",
    icon="🖱️",
    base_production_rate=0.1,
    base_cost=15,
)

GRANDMA = GeneratorDef(
    id="grandma",
    name="Cookie Grandma",
    description="A nice grandma to bake more cookies.",
    icon="👵",
    base_production_rate=1.0,
    base_cost=100,
)

FARM = GeneratorDef(
    id="farm",
    name="Cookie Farm",
    description="Grows cookie plants from cookie seeds.",
    icon="🌾",
    base_production_rate=8.0,
    base_cost=1_100,
)

MINE = GeneratorDef(
    id="mine",
    name="Cookie Mine",
    description="Mines out cookie dough and chocolate chips.",
    icon="⛏️",
    base_production_rate=47.0,
    base_cost=12_000,
)

FACTORY = GeneratorDef(
    id="factory",
    name="Cookie Factory",
    description="Mass produces high-quality cookies.",
    icon="🏭",
    base_production_rate=260.0,
    base_cost=130_000,
)

BANK = GeneratorDef(
    id="bank",
    name="Cookie Bank",
    description="Invests in cookie futures.",
    icon="🏦",
    base_production_rate=1_400.0,
    base_cost=1_400_000,
)


# ── Registry (shop order) ─────────────────────────────────────────

ALL_GENERATORS: dict[str, GeneratorDef] = {
    g.id: g
    for g in [CURSOR, GRANDMA, FARM, MINE, FACTORY, BANK]
}


def validate_generators(generators: dict[str, GeneratorDef]) -> None:
    """Raise ValueError if a generator definition is malformed."""
    for gid, gdef in generators.items():
        if gid != gdef.id:
            raise ValueError(f"Generator registered as {gid!r} has id {gdef.id!r}")
        if gdef.base_production_rate < 0:
            raise ValueError(f"Generator {gid!r} has a negative production rate")
        if gdef.base_cost <= 0:
            raise ValueError(f"Generator {gid!r} must have a positive base cost")


validate_generators(ALL_GENERATORS)
