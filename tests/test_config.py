import logging

from formstate.config import FormConfig, get_config, setup_logging, update_config


def test_defaults():
    cfg = FormConfig()
    assert cfg.log_level == "WARNING"
    assert cfg.strict_keys is True
    assert cfg.invalid_union_message == "Invalid input"


def test_from_env(monkeypatch):
    monkeypatch.setenv("FORMSTATE_LOG_LEVEL", "debug")
    monkeypatch.setenv("FORMSTATE_STRICT_KEYS", "false")
    monkeypatch.setenv("FORMSTATE_INVALID_UNION_MESSAGE", "No option matched")

    cfg = FormConfig.from_env()

    assert cfg.log_level == "DEBUG"
    assert cfg.strict_keys is False
    assert cfg.invalid_union_message == "No option matched"


def test_from_env_falls_back_to_defaults(monkeypatch):
    for name in ("FORMSTATE_LOG_LEVEL", "FORMSTATE_STRICT_KEYS", "FORMSTATE_INVALID_UNION_MESSAGE"):
        monkeypatch.delenv(name, raising=False)
    assert FormConfig.from_env() == FormConfig()


def test_update_config_ignores_unknown_keys():
    cfg = update_config(strict_keys=False, not_a_setting=1)
    assert cfg is get_config()
    assert cfg.strict_keys is False
    assert not hasattr(cfg, "not_a_setting")


def test_setup_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    setup_logging(FormConfig(log_level="INFO"))

    assert calls["level"] == logging.INFO
