"""Balance constants — all tuning knobs in one place.

Generator costs follow: base_cost * (cost_growth ^ owned_count)
Upgrade costs are fixed.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for cookie generation and spending."""

    # Cookies earned per manual click
    manual_gain: float = 1.0

    # Generator cost scaling: cost = base * (growth ^ owned)
    cost_growth: float = 1.15

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
        (1e15, "Qa"),
        (1e18, "Qi"),
    )


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)

    # Game loop ticks per second
    tick_rate_hz: float = 10.0

    # Seconds between tick-driven saves (purchases and clicks always save)
    autosave_interval_s: float = 30.0

    # Cap on wall-clock catch-up per request (web host)
    max_catch_up_s: float = 60.0

    @property
    def tick_interval_s(self) -> float:
        return 1.0 / self.tick_rate_hz


# Singleton — import this everywhere
BALANCE = GameBalance()
