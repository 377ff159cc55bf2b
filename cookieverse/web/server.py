"""Cookie Universe Web — Flask JSON API wrapping the economy engine.

Passive income is driven lazily: each request catches up on elapsed
time before acting or returning the current state.
"""

from __future__ import annotations

import math
from pathlib import Path

from flask import Flask, current_app, jsonify

from cookieverse.data.generators import ALL_GENERATORS
from cookieverse.engine.economy import (
    PurchaseResult,
    available_upgrades,
    can_afford_generator,
    can_afford_upgrade,
    format_number,
    generator_contribution,
)
from cookieverse.engine.save import state_to_dict
from cookieverse.engine.session import GameSession

# HTTP status for each purchase outcome; a refusal for lack of cookies is
# a normal game answer, not a client error
_PURCHASE_STATUS: dict[PurchaseResult, int] = {
    PurchaseResult.OK: 200,
    PurchaseResult.INSUFFICIENT_RESOURCES: 200,
    PurchaseResult.UNKNOWN_GENERATOR: 404,
    PurchaseResult.UNKNOWN_UPGRADE: 404,
    PurchaseResult.ALREADY_OWNED: 409,
}


def _session() -> GameSession:
    return current_app.config["GAME_SESSION"]


def _state_json(session: GameSession) -> dict:
    """Build the JSON blob sent to the frontend."""
    with session.lock:
        return _render_state(session)


def _render_state(session: GameSession) -> dict:
    s = session.state
    data = state_to_dict(s)
    data["productionRate"] = s.production_rate

    generators = []
    for gid, gdef in ALL_GENERATORS.items():
        cost = s.cost_of(gid)
        generators.append({
            "id": gid,
            "name": gdef.name,
            "description": gdef.description,
            "icon": gdef.icon,
            "count": s.count(gid),
            # Rounded up, never shown below the real price
            "cost": format_number(math.ceil(cost)),
            "cost_raw": cost,
            "cps": generator_contribution(s, gid),
            "can_afford": can_afford_generator(s, gid),
        })

    # Only unowned upgrades are ever offered
    upgrades = [
        {
            "id": u.id,
            "name": u.name,
            "description": u.description,
            "target": u.target_generator_id,
            "multiplier": u.multiplier,
            "cost": format_number(u.cost),
            "cost_raw": u.cost,
            "can_afford": can_afford_upgrade(s, u.id),
        }
        for u in available_upgrades(s)
    ]

    notifications = list(session.notifications)
    session.notifications.clear()
    data.update({
        "cookies": format_number(int(s.balance)),
        "cps": f"{s.production_rate:.1f} CPS",
        "generators": generators,
        "upgrades": upgrades,
        "notifications": notifications,
    })
    return data


def _purchase_response(session: GameSession, result: PurchaseResult):
    data = _state_json(session)
    data["purchase_result"] = result.name
    data["ok"] = result.ok
    return jsonify(data), _PURCHASE_STATUS[result]


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

def _register_routes(app: Flask) -> None:

    @app.route("/api/state")
    def api_state():
        session = _session()
        session.catch_up()
        return jsonify(_state_json(session))

    @app.route("/api/action/click", methods=["POST"])
    def action_click():
        session = _session()
        session.catch_up()
        earned = session.click()
        data = _state_json(session)
        data["earned"] = earned
        return jsonify(data)

    @app.route("/api/action/buy/generator/<generator_id>", methods=["POST"])
    def action_buy_generator(generator_id: str):
        session = _session()
        session.catch_up()
        return _purchase_response(session, session.buy_generator(generator_id))

    @app.route("/api/action/buy/upgrade/<upgrade_id>", methods=["POST"])
    def action_buy_upgrade(upgrade_id: str):
        session = _session()
        session.catch_up()
        return _purchase_response(session, session.buy_upgrade(upgrade_id))

    @app.route("/api/action/save", methods=["POST"])
    def action_save():
        session = _session()
        saved = session.save()
        return jsonify({"saved": saved, "notifications": session.drain_notifications()})


def create_app(session: GameSession | None = None, save_path: Path | None = None) -> Flask:
    """Build a Flask app bound to one game session."""
    app = Flask(__name__)
    app.config["GAME_SESSION"] = session if session is not None else GameSession.resume(save_path)
    _register_routes(app)
    return app


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    app = create_app()
    app.run(host=host, port=port, debug=debug, use_reloader=False)
