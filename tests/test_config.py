# tests/test_config.py

from __future__ import annotations

import importlib
import logging

from gedcom2xml.config import CONFIG_PATH, GPConfig, get_config, load_config
from gedcom2xml.logging import get_logger, list_active_loggers

logger_module = importlib.import_module("gedcom2xml.logging.logger")


def test_repository_config_exists_and_loads() -> None:
    assert CONFIG_PATH.is_file()
    cfg = load_config(CONFIG_PATH)
    assert cfg.root_tag == "gedcom"
    assert cfg.indent == "  "
    assert cfg.input_encoding == "utf-8"


def test_missing_config_uses_defaults(tmp_path) -> None:
    cfg = load_config(tmp_path / "nope.yml")
    assert cfg.root_tag == "gedcom"
    assert cfg.debug is False


def test_partial_config_merges_with_defaults(tmp_path) -> None:
    path = tmp_path / "custom.yml"
    path.write_text("transcoder:\n  root_tag: family\ndebug: true\n", encoding="utf-8")

    cfg = load_config(path)
    assert cfg.root_tag == "family"
    assert cfg.indent == "  "
    assert cfg.debug is True


def test_get_config_is_cached() -> None:
    assert get_config() is get_config()


def test_get_logger_namespaces_module_loggers() -> None:
    log = get_logger("tests.config")
    assert log.name == "gedcom2xml.tests.config"
    assert "gedcom2xml.tests.config" in list_active_loggers()


def test_unwritable_log_dir_falls_back_to_console_only(tmp_path, monkeypatch) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    cfg = GPConfig({"logging": {"dir": str(blocker / "logs")}})
    monkeypatch.setattr(logger_module, "get_config", lambda: cfg)

    assert logger_module._ensure_log_dir() is None

    log = logging.getLogger("gedcom2xml.tests.readonly")
    logger_module._attach_module_handler(log, log.name)
    assert not any(getattr(h, "is_module_handler", False) for h in log.handlers)


def test_log_root_outside_checkout_is_working_directory(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(logger_module, "PROJECT_ROOT", tmp_path / "site-packages")
    monkeypatch.chdir(tmp_path)

    assert logger_module._log_root() == tmp_path


def test_log_root_in_checkout_is_project_root() -> None:
    assert logger_module._log_root() == logger_module.PROJECT_ROOT
