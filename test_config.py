import json
import logging

import pytest
from pydantic import ValidationError

import config
from config import CheckersConfig, EngineSettings, GameRulesSettings, LoggingSettings


def test_defaults():
    cfg = CheckersConfig()
    assert cfg.engine.easy_depth == 2
    assert cfg.engine.medium_depth == 4
    assert cfg.engine.hard_depth == 6
    assert cfg.engine.seed is None
    assert not cfg.rules.normal_backward_capture
    assert not cfg.rules.super_king_promotion
    assert cfg.rules.allow_undo
    assert cfg.logging.log_level == "INFO"


def test_log_level_is_validated():
    assert LoggingSettings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        LoggingSettings(log_level="LOUD")


def test_depth_bounds_are_validated():
    with pytest.raises(ValidationError):
        EngineSettings(hard_depth=0)
    with pytest.raises(ValidationError):
        EngineSettings(hard_second_best_probability=1.5)


def test_depth_for_caps_and_accepts_any_case():
    settings = EngineSettings(easy_depth=1, medium_depth=5, hard_depth=10, max_depth=6)
    assert settings.depth_for("EASY") == 1
    assert settings.depth_for("medium") == 5
    assert settings.depth_for("hard") == 6
    with pytest.raises(KeyError):
        settings.depth_for("impossible")


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "checkers.json"
    cfg = CheckersConfig()
    cfg.engine.hard_depth = 5
    cfg.rules.super_king_promotion = True
    cfg.save_to_file(str(path))

    data = json.loads(path.read_text())
    assert data["config_file"] == str(path)

    loaded = config.load_config_from_file(str(path))
    assert loaded.engine.hard_depth == 5
    assert loaded.rules.super_king_promotion
    assert config.get_game_rules() is loaded.rules


def test_from_env(monkeypatch):
    monkeypatch.setenv("CHECKERS_HARD_DEPTH", "3")
    monkeypatch.setenv("CHECKERS_SEED", "42")
    monkeypatch.setenv("CHECKERS_BACKWARD_CAPTURE", "true")
    monkeypatch.setenv("CHECKERS_LOG_LEVEL", "warning")
    cfg = config.get_config()
    assert cfg.engine.hard_depth == 3
    assert cfg.engine.seed == 42
    assert cfg.rules.normal_backward_capture
    assert config.get_logging_settings().log_level == "WARNING"


def test_update_from_dict_ignores_unknown_keys():
    cfg = CheckersConfig()
    cfg.update_from_dict({"engine": {"easy_depth": 3, "bogus": 1}, "nothing": {"x": 1}})
    assert cfg.engine.easy_depth == 3
    assert not hasattr(cfg.engine, "bogus")


def test_setup_logging_is_idempotent(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.delattr(config.setup_logging, "_configured", raising=False)
    config.setup_logging()
    config.setup_logging()
    assert len(calls) == 1
    assert calls[0]["level"] == logging.INFO


def test_string_booleans_from_json_file(tmp_path):
    path = tmp_path / "checkers.json"
    path.write_text(json.dumps({
        "ui": {"use_unicode": "false", "show_indices": "0"},
        "rules": {"allow_undo": "false", "super_king_promotion": "yes"},
    }))
    cfg = CheckersConfig.load_from_file(str(path))
    assert cfg.ui.use_unicode is False
    assert cfg.ui.show_indices is False
    assert cfg.rules.allow_undo is False
    assert cfg.rules.super_king_promotion is True


def test_unrecognised_boolean_string_is_rejected():
    with pytest.raises(ValidationError):
        GameRulesSettings(allow_undo="maybe")


def test_section_accessors_follow_global_config(monkeypatch):
    monkeypatch.setenv("CHECKERS_UNICODE", "false")
    assert config.get_ui_settings() is config.get_config().ui
    assert not config.get_ui_settings().use_unicode
    assert config.get_engine_settings() is config.get_config().engine
