"""Unit tests for logging configuration."""

import logging
import os

from src.core.logging_config import (
    LEVEL_ENV_VAR,
    LOG_FILENAME,
    get_logger,
    setup_logging,
)


def test_setup_creates_log_file(tmp_path, preserve_root_logger, monkeypatch):
    monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
    log_path = setup_logging(log_to_console=False, log_dir=str(tmp_path))

    assert log_path == os.path.join(str(tmp_path), LOG_FILENAME)
    get_logger("test").info("hello grid")
    for handler in logging.getLogger().handlers:
        handler.flush()

    with open(log_path, encoding="utf-8") as f:
        content = f.read()
    assert "WorldGrid Session Started" in content
    assert "hello grid" in content


def test_debug_mode_level(tmp_path, preserve_root_logger, monkeypatch):
    monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
    setup_logging(debug_mode=True, log_to_console=False, log_dir=str(tmp_path))
    assert logging.getLogger().level == logging.DEBUG


def test_env_override(tmp_path, preserve_root_logger, monkeypatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, "warning")
    setup_logging(debug_mode=True, log_to_console=False, log_dir=str(tmp_path))
    assert logging.getLogger().level == logging.WARNING


def test_invalid_env_override_falls_back(tmp_path, preserve_root_logger, monkeypatch):
    monkeypatch.setenv(LEVEL_ENV_VAR, "LOUD")
    setup_logging(log_to_console=False, log_dir=str(tmp_path))
    assert logging.getLogger().level == logging.INFO


def test_console_handler(tmp_path, preserve_root_logger, monkeypatch):
    monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
    setup_logging(log_to_console=True, log_dir=str(tmp_path))
    kinds = {type(h) for h in logging.getLogger().handlers}
    assert logging.StreamHandler in kinds
