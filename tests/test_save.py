"""Tests for save/load."""

import json
import logging

import pytest

from cookieverse.engine.economy_state import new_state
from cookieverse.engine.economy import purchase_generator, purchase_upgrade
from cookieverse.engine.save import (
    default_save_path,
    delete_save,
    dict_to_state,
    dumps_state,
    load_game,
    loads_state,
    save_game,
    state_to_dict,
)


def _played_state():
    state = new_state()
    state.balance = state.lifetime_earned = 2_000
    for gid in ("cursor", "cursor", "grandma", "farm"):
        purchase_generator(state, gid)
    purchase_upgrade(state, "up_cursor")
    return state


def test_saved_key_set():
    data = state_to_dict(_played_state())
    assert set(data) == {"balance", "lifetimeEarned", "ownedCounts", "currentCost", "ownedUpgrades"}
    assert data["ownedUpgrades"] == ["up_cursor"]
    assert data["ownedCounts"]["cursor"] == 2


def test_round_trip_is_exact():
    state = _played_state()
    restored = loads_state(dumps_state(state))
    assert restored == state
    assert restored.production_rate == state.production_rate


def test_fresh_state_round_trips():
    assert loads_state(dumps_state(new_state())) == new_state()


def test_missing_generator_is_backfilled_from_catalog():
    state = _played_state()
    data = state_to_dict(state)
    # Save written before the bank existed
    del data["ownedCounts"]["bank"]
    del data["currentCost"]["bank"]

    restored = dict_to_state(data)

    assert restored.owned_counts["bank"] == 0
    assert restored.current_cost["bank"] == 1_400_000
    assert restored == state


def test_missing_cost_for_owned_generator_follows_growth():
    data = state_to_dict(_played_state())
    del data["currentCost"]["cursor"]
    restored = dict_to_state(data)
    assert restored.current_cost["cursor"] == pytest.approx(15 * 1.15 ** 2)


def test_persisted_rate_is_ignored():
    state = _played_state()
    data = state_to_dict(state)
    data["productionRate"] = 9_999.0
    assert dict_to_state(data).production_rate == pytest.approx(state.production_rate)


def test_unknown_ids_are_dropped(caplog):
    data = state_to_dict(new_state())
    data["ownedCounts"]["portal"] = 3
    data["ownedUpgrades"] = ["up_portal"]
    with caplog.at_level(logging.WARNING, logger="cookieverse.engine.save"):
        restored = dict_to_state(data)
    assert "portal" not in restored.owned_counts
    assert restored.owned_upgrades == set()
    assert "up_portal" in caplog.text


def test_load_repairs_balance_above_lifetime():
    restored = dict_to_state({"balance": 50, "lifetimeEarned": 10})
    assert restored.balance == 50
    assert restored.lifetime_earned == 50


def test_empty_dict_is_a_fresh_state():
    assert dict_to_state({}) == new_state()


def test_save_and_load_file(tmp_path):
    path = tmp_path / "nested" / "save.json"
    state = _played_state()
    assert save_game(state, path)
    assert json.loads(path.read_text())["balance"] == state.balance
    assert load_game(path) == state


def test_load_missing_file_returns_none(tmp_path):
    assert load_game(tmp_path / "nope.json") is None


def test_load_corrupt_file_returns_none(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json")
    assert load_game(path) is None
    path.write_text("[1, 2, 3]")
    assert load_game(path) is None
    path.write_text('{"ownedCounts": [1]}')
    assert load_game(path) is None


def test_save_failure_returns_false(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    # Parent "directory" is a regular file
    assert not save_game(new_state(), blocker / "save.json")


def test_delete_save(tmp_path):
    path = tmp_path / "save.json"
    save_game(new_state(), path)
    delete_save(path)
    assert not path.exists()
    delete_save(path)  # already gone is fine


def test_home_override(tmp_path, monkeypatch):
    monkeypatch.setenv("COOKIEVERSE_HOME", str(tmp_path))
    assert default_save_path() == tmp_path / "save.json"
    save_game(new_state())
    assert load_game() == new_state()


def test_infinite_count_resets_to_zero(tmp_path):
    path = tmp_path / "save.json"
    path.write_text('{"ownedCounts": {"cursor": Infinity}}')
    restored = load_game(path)
    # Non-finite counts fall back to zero rather than crashing
    assert restored is not None
    assert restored.owned_counts["cursor"] == 0
    assert restored.current_cost["cursor"] == 15


def test_count_too_large_for_cost_is_no_save(tmp_path):
    path = tmp_path / "save.json"
    path.write_text('{"ownedCounts": {"cursor": 100000}}')
    assert load_game(path) is None
    with pytest.raises(ValueError, match="out of range"):
        dict_to_state({"ownedCounts": {"cursor": 100000}})


def test_nan_balance_is_reset(tmp_path):
    path = tmp_path / "save.json"
    path.write_text('{"balance": NaN, "lifetimeEarned": 5}')
    restored = load_game(path)
    assert restored.balance == 0
    assert restored.lifetime_earned == 5
    assert restored.balance <= restored.lifetime_earned


def test_non_finite_cost_is_backfilled():
    restored = dict_to_state({
        "ownedCounts": {"grandma": 2},
        "currentCost": {"grandma": float("inf"), "cursor": float("nan")},
    })
    assert restored.current_cost["grandma"] == pytest.approx(100 * 1.15 ** 2)
    assert restored.current_cost["cursor"] == 15


def test_mismatched_cost_is_kept_but_logged(caplog):
    data = state_to_dict(_played_state())
    data["currentCost"]["farm"] = 1.0
    with caplog.at_level(logging.WARNING, logger="cookieverse.engine.save"):
        restored = dict_to_state(data)
    assert restored.current_cost["farm"] == 1.0
    assert "'farm'" in caplog.text


def test_consistent_costs_load_quietly(caplog):
    with caplog.at_level(logging.WARNING, logger="cookieverse.engine.save"):
        dict_to_state(state_to_dict(_played_state()))
    assert caplog.text == ""
