"""Economy engine — cookie generation, purchases, and number formatting."""

from __future__ import annotations

import logging
from enum import Enum, auto

from cookieverse.data.balance import BALANCE
from cookieverse.data.generators import ALL_GENERATORS
from cookieverse.data.upgrades import ALL_UPGRADES, UpgradeDef, upgrades_targeting
from cookieverse.engine.economy_state import EconomyState

logger = logging.getLogger(__name__)


class PurchaseResult(Enum):
    """Outcome of a purchase attempt."""

    OK = auto()
    INSUFFICIENT_RESOURCES = auto()  # recoverable: tell the player
    UNKNOWN_GENERATOR = auto()       # presentation offered a bad id
    UNKNOWN_UPGRADE = auto()
    ALREADY_OWNED = auto()           # upgrade offered twice

    @property
    def ok(self) -> bool:
        return self is PurchaseResult.OK

    @property
    def recoverable(self) -> bool:
        return self is PurchaseResult.INSUFFICIENT_RESOURCES


# ── Production ───────────────────────────────────────────────────


def upgrade_multiplier(state: EconomyState, generator_id: str) -> float:
    """Product of the multipliers of every owned upgrade targeting a generator."""
    mult = 1.0
    for udef in upgrades_targeting(generator_id):
        if state.has_upgrade(udef.id):
            mult *= udef.multiplier
    return mult


def generator_contribution(state: EconomyState, generator_id: str) -> float:
    """Cookies per second produced by all owned units of one generator."""
    gdef = ALL_GENERATORS[generator_id]
    rate = gdef.base_production_rate * state.count(generator_id)
    return rate * upgrade_multiplier(state, generator_id)


def compute_production_rate(state: EconomyState) -> float:
    """Fold the whole generator catalog into one cookies-per-second figure.

    Always computed from scratch so repeated purchases cannot drift.
    """
    total = 0.0
    for gid in ALL_GENERATORS:
        total += generator_contribution(state, gid)
    return total


def recompute_production_rate(state: EconomyState) -> float:
    """Refresh the cached rate. Call after any change to ownership."""
    state.production_rate = compute_production_rate(state)
    return state.production_rate


# ── Earning ──────────────────────────────────────────────────────


def _earn(state: EconomyState, amount: float) -> None:
    state.balance += amount
    state.lifetime_earned += amount


def apply_manual_gain(state: EconomyState) -> float:
    """Handle a single click. Returns cookies earned."""
    earned = BALANCE.economy.manual_gain
    _earn(state, earned)
    return earned


def tick(state: EconomyState, elapsed: float) -> float:
    """Apply passive income for ``elapsed`` seconds. Returns cookies earned."""
    if elapsed <= 0:
        logger.debug("Ignoring tick with non-positive elapsed time %r", elapsed)
        return 0.0
    if state.production_rate <= 0:
        return 0.0

    earned = state.production_rate * elapsed
    _earn(state, earned)
    return earned


# ── Spending ─────────────────────────────────────────────────────


def can_afford_generator(state: EconomyState, generator_id: str) -> bool:
    """Check if the player can afford the next unit of a generator."""
    return state.balance >= state.cost_of(generator_id)


def can_afford_upgrade(state: EconomyState, upgrade_id: str) -> bool:
    """Check if the player can afford an upgrade."""
    return state.balance >= ALL_UPGRADES[upgrade_id].cost


def purchase_generator(state: EconomyState, generator_id: str) -> PurchaseResult:
    """Attempt to buy one unit of a generator."""
    if generator_id not in ALL_GENERATORS:
        logger.error("Purchase of unknown generator %r ignored", generator_id)
        return PurchaseResult.UNKNOWN_GENERATOR

    cost = state.cost_of(generator_id)
    if state.balance < cost:
        return PurchaseResult.INSUFFICIENT_RESOURCES

    state.balance -= cost
    state.owned_counts[generator_id] = state.count(generator_id) + 1
    # Never rounded; only the display rounds
    state.current_cost[generator_id] = cost * BALANCE.economy.cost_growth

    recompute_production_rate(state)
    return PurchaseResult.OK


def purchase_upgrade(state: EconomyState, upgrade_id: str) -> PurchaseResult:
    """Attempt to buy a one-time upgrade."""
    udef = ALL_UPGRADES.get(upgrade_id)
    if udef is None:
        logger.error("Purchase of unknown upgrade %r ignored", upgrade_id)
        return PurchaseResult.UNKNOWN_UPGRADE

    if upgrade_id in state.owned_upgrades:
        logger.warning("Upgrade %r is already owned; purchase ignored", upgrade_id)
        return PurchaseResult.ALREADY_OWNED

    if state.balance < udef.cost:
        return PurchaseResult.INSUFFICIENT_RESOURCES

    state.balance -= udef.cost
    state.owned_upgrades.add(upgrade_id)

    recompute_production_rate(state)
    return PurchaseResult.OK


def available_upgrades(state: EconomyState) -> list[UpgradeDef]:
    """Upgrades still on offer (unowned), in catalog order."""
    return [u for uid, u in ALL_UPGRADES.items() if uid not in state.owned_upgrades]


# ── Display ──────────────────────────────────────────────────────


def format_number(n: float) -> str:
    """Format a number with suffixes for readability."""
    if n < 0:
        return f"-{format_number(-n)}"

    for threshold, suffix in reversed(BALANCE.economy.suffixes):
        if n >= threshold:
            value = n / threshold
            if value >= 100:
                return f"{value:.0f}{suffix}"
            elif value >= 10:
                return f"{value:.1f}{suffix}"
            else:
                return f"{value:.2f}{suffix}"

    if n >= 100:
        return f"{n:.0f}"
    elif n == int(n):
        return str(int(n))
    else:
        return f"{n:.1f}"
