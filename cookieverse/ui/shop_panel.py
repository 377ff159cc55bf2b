"""Shop panel — generators and the upgrades still on offer."""

from __future__ import annotations

import math

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from cookieverse.data.generators import ALL_GENERATORS
from cookieverse.engine.economy import (
    available_upgrades,
    can_afford_generator,
    can_afford_upgrade,
    format_number,
    generator_contribution,
)
from cookieverse.engine.economy_state import EconomyState

# Keys bound to "buy offered upgrade #n" in the app
UPGRADE_KEYS = ("U", "I")


def build_shop_text(state: EconomyState | None) -> Text:
    """Render the shop for a state; affordable rows are green, the rest red."""
    text = Text()
    text.append("  ═══ Shop ═══\n\n", style="bold magenta")

    if state is None:
        text.append("  Loading...\n", style="dim italic")
        return text

    for i, (gid, gdef) in enumerate(ALL_GENERATORS.items()):
        affordable = can_afford_generator(state, gid)
        name_style = "bold green" if affordable else "bold red"

        text.append(f"  [{i + 1}] {gdef.icon} ", style="bold")
        text.append(f"{gdef.name} ", style=name_style)
        text.append(f"x{state.count(gid)}\n", style="dim")
        text.append(f"      {gdef.description}\n", style="dim italic")

        contribution = generator_contribution(state, gid)
        if contribution > 0:
            text.append(f"      Now: {contribution:.1f} CPS\n", style="cyan")

        # Prices round up so the player never sees a cost they can't quite pay
        cost_style = "green" if affordable else "red"
        price = format_number(math.ceil(state.cost_of(gid)))
        text.append(f"      Cost: {price} cookies\n", style=cost_style)
        text.append("\n")

    text.append("  ═══ Upgrades ═══\n\n", style="bold magenta")
    offered = available_upgrades(state)
    if not offered:
        text.append("  All upgrades owned.\n", style="dim italic")
        return text

    for key, udef in zip(UPGRADE_KEYS, offered):
        affordable = can_afford_upgrade(state, udef.id)
        name_style = "bold green" if affordable else "bold red"
        text.append(f"  [{key}] ✨ ", style="bold")
        text.append(f"{udef.name}\n", style=name_style)
        text.append(f"      {udef.description}\n", style="dim italic")
        cost_style = "green" if affordable else "red"
        text.append(f"      Cost: {format_number(udef.cost)} cookies\n", style=cost_style)
        text.append("\n")

    return text


class ShopPanel(Widget):
    """Displays generators and unowned upgrades with cost and affordability."""

    DEFAULT_CSS = """
    ShopPanel {
        width: 100%;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    # Serialized shop data for reactivity
    shop_key: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._state: EconomyState | None = None

    def render(self) -> Text:
        return build_shop_text(self._state)

    def update_from_state(self, state: EconomyState) -> None:
        """Sync panel with economy state."""
        self._state = state
        # Trigger re-render via reactive when counts or affordability change
        self.shop_key = "|".join(
            f"{gid}:{state.count(gid)}:{int(can_afford_generator(state, gid))}"
            for gid in ALL_GENERATORS
        ) + "|" + ",".join(
            f"{u.id}:{int(can_afford_upgrade(state, u.id))}"
            for u in available_upgrades(state)
        )
