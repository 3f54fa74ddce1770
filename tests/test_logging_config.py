"""Tests for logging setup."""

import logging

import pytest

from polyconst import logging_config


@pytest.fixture
def basic_config_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_configured", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    return calls


def test_configures_root_logger(basic_config_calls):
    logging_config.setup_logging("debug")
    [kwargs] = basic_config_calls
    assert kwargs["level"] == logging.DEBUG
    assert kwargs["format"] == logging_config.LOG_FORMAT
    assert kwargs["datefmt"] == logging_config.LOG_DATEFMT


def test_idempotent(basic_config_calls):
    logging_config.setup_logging("INFO")
    logging_config.setup_logging("DEBUG")
    assert len(basic_config_calls) == 1
    assert basic_config_calls[0]["level"] == logging.INFO
