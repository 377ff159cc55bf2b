"""HUD widget — cookie counter and production rate."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from cookieverse.engine.economy import format_number
from cookieverse.engine.economy_state import EconomyState


class HUD(Widget):
    """Heads-up display showing core economy stats."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    cookies: reactive[str] = reactive("0")
    rate: reactive[str] = reactive("0.0 CPS")
    lifetime: reactive[str] = reactive("0")
    owned_total: reactive[int] = reactive(0)

    def render(self) -> Text:
        text = Text()
        text.append("  === Cookie Universe ===\n\n", style="bold yellow")

        text.append("  Cookies: ", style="dim")
        text.append(f"{self.cookies}\n", style="bold green")

        text.append("  Rate: ", style="dim")
        text.append(f"{self.rate}\n", style="green")

        text.append("\n")

        text.append("  Baked all-time: ", style="dim")
        text.append(f"{self.lifetime}\n", style="cyan")
        text.append("  Buildings: ", style="dim")
        text.append(f"{self.owned_total}\n", style="cyan")

        text.append("\n")
        text.append("  [Space] Click  [1-6] Buy\n", style="dim italic")
        text.append("  [U/I] Upgrade  [Q] Quit\n", style="dim italic")

        return text

    def update_from_state(self, state: EconomyState) -> None:
        """Sync HUD with economy state."""
        # Whole cookies only on screen
        self.cookies = format_number(int(state.balance))
        self.rate = f"{state.production_rate:.1f} CPS"
        self.lifetime = format_number(int(state.lifetime_earned))
        self.owned_total = sum(state.owned_counts.values())
