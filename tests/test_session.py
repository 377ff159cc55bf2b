"""Tests for the game session (serialised operations and autosave)."""

import threading
from unittest.mock import patch

import pytest

from cookieverse.data.balance import BALANCE
from cookieverse.data.generators import ALL_GENERATORS
from cookieverse.engine.economy import (
    PurchaseResult,
    compute_production_rate,
    recompute_production_rate,
)
from cookieverse.engine.economy_state import new_state
from cookieverse.engine.save import load_game
from cookieverse.engine.session import SAVE_FAILED_MESSAGE, GameSession


def test_click_saves_immediately(tmp_path):
    path = tmp_path / "save.json"
    session = GameSession(save_path=path)
    session.click()
    assert load_game(path).balance == 1


def test_failed_purchase_does_not_save(tmp_path):
    path = tmp_path / "save.json"
    session = GameSession(save_path=path)
    assert session.buy_generator("grandma") is PurchaseResult.INSUFFICIENT_RESOURCES
    assert not path.exists()


def test_purchase_saves(tmp_path):
    path = tmp_path / "save.json"
    state = new_state()
    state.balance = state.lifetime_earned = 15
    session = GameSession(state, save_path=path)
    assert session.buy_generator("cursor").ok
    assert load_game(path).owned_counts["cursor"] == 1


def test_buy_upgrade_already_owned(tmp_path):
    state = new_state()
    state.balance = state.lifetime_earned = 1_000
    session = GameSession(state, save_path=tmp_path / "save.json")
    assert session.buy_upgrade("up_cursor").ok
    assert session.buy_upgrade("up_cursor") is PurchaseResult.ALREADY_OWNED


def test_resume_restores_saved_game(tmp_path):
    path = tmp_path / "save.json"
    first = GameSession(save_path=path)
    for _ in range(3):
        first.click()
    second = GameSession.resume(path)
    assert second.state.balance == 3
    assert second.state.lifetime_earned == 3


def test_resume_without_save_starts_fresh(tmp_path):
    session = GameSession.resume(tmp_path / "save.json")
    assert session.state == new_state()


def test_tick_uses_fixed_interval(tmp_path):
    state = new_state()
    state.balance = state.lifetime_earned = 100
    session = GameSession(state, save_path=tmp_path / "save.json", autosave=False)
    session.buy_generator("grandma")
    session.tick()
    assert session.state.balance == pytest.approx(BALANCE.tick_interval_s * 1.0)


def test_tick_autosaves_only_after_interval(tmp_path):
    path = tmp_path / "save.json"
    session = GameSession(save_path=path)
    session.tick(now=session._last_autosave + 1.0)
    assert not path.exists()
    session.tick(now=session._last_autosave + BALANCE.autosave_interval_s)
    assert path.exists()


def test_catch_up_is_capped():
    state = new_state()
    state.owned_counts["grandma"] = 1
    recompute_production_rate(state)
    session = GameSession(state, autosave=False)

    start = session._last_catch_up
    earned = session.catch_up(now=start + 10_000)
    assert earned == pytest.approx(BALANCE.max_catch_up_s)
    # Clock going backwards earns nothing
    assert session.catch_up(now=start) == 0.0


def test_save_failure_becomes_notification(tmp_path):
    session = GameSession(save_path=tmp_path / "save.json")
    with patch("cookieverse.engine.session.save_game", return_value=False):
        earned = session.click()
    # The click still counts
    assert earned == 1
    assert session.state.balance == 1
    assert session.drain_notifications() == [SAVE_FAILED_MESSAGE]
    assert session.drain_notifications() == []


def test_snapshot_includes_rate():
    state = new_state()
    state.balance = state.lifetime_earned = 15
    session = GameSession(state, autosave=False)
    session.buy_generator("cursor")
    snap = session.snapshot()
    assert snap["productionRate"] == pytest.approx(0.1)
    assert snap["ownedCounts"]["cursor"] == 1


def test_threads_see_each_operation_whole():
    state = new_state()
    state.balance = state.lifetime_earned = 5_000
    session = GameSession(state, autosave=False)
    bought: list[str] = []

    def worker(seed: int) -> None:
        for i in range(200):
            step = (seed + i) % 4
            if step == 0:
                session.click()
            elif step == 1:
                session.tick(0.1)
            else:
                gid = ("cursor", "grandma")[step - 2]
                if session.buy_generator(gid).ok:
                    bought.append(gid)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    s = session.state
    total_spent = sum(
        ALL_GENERATORS[gid].base_cost * 1.15 ** n
        for gid in ("cursor", "grandma")
        for n in range(s.owned_counts[gid])
    )
    assert s.balance + total_spent == pytest.approx(s.lifetime_earned)
    assert s.production_rate == pytest.approx(compute_production_rate(s))
    for gid, gdef in ALL_GENERATORS.items():
        assert s.current_cost[gid] == pytest.approx(gdef.base_cost * 1.15 ** s.owned_counts[gid])
    assert bought.count("cursor") == s.owned_counts["cursor"]
    assert bought.count("grandma") == s.owned_counts["grandma"]
