"""Rule config and JSON settings persistence."""

import json

import pytest

from quadmatch.rules import RuleConfig
from quadmatch.settings import DEFAULT_SETTINGS, load_settings, rule_config_from_settings, save_settings


def test_rule_defaults():
    config = RuleConfig()
    assert (config.width, config.height, config.color_count) == (5, 5, 4)
    assert config.lock_on_match and config.clear_locked_squares
    assert config.enable_gravity and config.refill_from_top
    assert config.move_ceiling == 5
    assert config.state_budget == 20000


@pytest.mark.parametrize("kwargs", [{"width": 0}, {"height": -1}, {"color_count": 0}])
def test_rule_config_rejects_bad_sizes(kwargs):
    with pytest.raises(ValueError):
        RuleConfig(**kwargs)


def test_with_overrides_leaves_original():
    config = RuleConfig()
    smaller = config.with_overrides(width=3)
    assert smaller.width == 3
    assert config.width == 5


def test_from_dict_ignores_unknown_keys():
    config = RuleConfig.from_dict({"width": 4, "difficulty": "hard"})
    assert config.width == 4
    assert RuleConfig.from_dict(config.to_dict()) == config


def test_missing_settings_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.json")
    assert settings == DEFAULT_SETTINGS


def test_settings_round_trip(tmp_path):
    path = tmp_path / "config.json"
    save_settings({"log_level": "DEBUG", "rules": {"color_count": 3}}, path)
    settings = load_settings(path)
    assert settings["log_level"] == "DEBUG"
    assert settings["strategy_name"] == "bfs"
    assert rule_config_from_settings(settings).color_count == 3


def test_corrupt_settings_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_non_object_rules_section(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"rules": [1, 2]}), encoding="utf-8")
    assert rule_config_from_settings(load_settings(path)) == RuleConfig()
