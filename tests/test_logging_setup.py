from __future__ import annotations

import logging

from nslscript import logging_setup


def _capture_basic_config(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kw: calls.append(kw))
    return calls


def test_cli_level_wins(monkeypatch):
    calls = _capture_basic_config(monkeypatch)
    monkeypatch.setenv("NSL_LOG_LEVEL", "ERROR")
    logging_setup.configure_logging(cli_level="debug")
    assert calls[0]["level"] == logging.DEBUG
    assert calls[0]["force"] is True


def test_env_var_then_default(monkeypatch):
    calls = _capture_basic_config(monkeypatch)
    monkeypatch.setenv("NSL_LOG_LEVEL", "warning")
    logging_setup.configure_logging()
    monkeypatch.delenv("NSL_LOG_LEVEL")
    logging_setup.configure_logging()
    logging_setup.configure_logging(cli_level="nonsense")
    assert [c["level"] for c in calls] == [logging.WARNING, logging.INFO, logging.INFO]


def test_records_carry_time_level_and_logger_name(monkeypatch):
    calls = _capture_basic_config(monkeypatch)
    logging_setup.configure_logging(cli_level="INFO")
    fmt = calls[0]["format"]
    for field in ("%(asctime)s", "%(levelname)s", "%(name)s", "%(message)s"):
        assert field in fmt
