import logging

from src.config import logging as logging_config


def test_explicit_log_level_wins(monkeypatch):
    monkeypatch.setattr(logging_config.settings, "LOG_LEVEL", "warning")

    assert logging_config.resolve_log_level() == logging.WARNING


def test_debug_flag_picks_level(monkeypatch):
    monkeypatch.setattr(logging_config.settings, "LOG_LEVEL", "")
    monkeypatch.setattr(logging_config.settings, "debug", False)

    assert logging_config.resolve_log_level() == logging.INFO

    monkeypatch.setattr(logging_config.settings, "debug", True)

    assert logging_config.resolve_log_level() == logging.DEBUG


def test_setup_logging_quiets_sql_echo(monkeypatch):
    monkeypatch.setattr(logging_config.settings, "LOG_DB", False)

    logging_config.setup_logging()

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
