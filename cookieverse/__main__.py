"""Entry point for Cookie Universe."""

import logging
import os

from cookieverse.app import CookieverseApp

DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(name: str | None) -> str:
    """Map a level name to a known logging level, falling back to WARNING."""
    level = (name or DEFAULT_LOG_LEVEL).upper()
    # getLevelName returns an int only for registered names
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


def main() -> None:
    # A TUI owns the terminal, so only warnings and worse by default
    level = resolve_log_level(os.environ.get("COOKIEVERSE_LOG_LEVEL"))
    logging.basicConfig(level=level, filename=os.environ.get("COOKIEVERSE_LOG_FILE"))
    app = CookieverseApp()
    app.run()


if __name__ == "__main__":
    main()
