"""Entry point for the web version: python -m cookieverse.web"""

import argparse
import logging

from cookieverse.__main__ import resolve_log_level
from cookieverse.web.server import run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Cookie Universe — Web API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args()

    logging.basicConfig(
        level=resolve_log_level(args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(f"\n  🍪 Cookie Universe (Web API)")
    print(f"  ➜ http://{args.host}:{args.port}/api/state\n")

    run_server(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
