"""Unit tests for the Rich logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from postkit.logging_setup import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _managed(root):
    return [h for h in root.handlers if isinstance(h, RichHandler) and getattr(h, "_postkit_managed", False)]


def test_configure_logging_installs_one_handler(restore_root_logger):
    configure_logging()
    configure_logging()

    assert len(_managed(restore_root_logger)) == 1


def test_level_from_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv("POSTKIT_LOG_LEVEL", "warning")

    configure_logging()

    assert restore_root_logger.level == logging.WARNING


def test_verbose_wins_over_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv("POSTKIT_LOG_LEVEL", "ERROR")

    configure_logging(verbose=True)

    assert restore_root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(restore_root_logger, monkeypatch):
    monkeypatch.setenv("POSTKIT_LOG_LEVEL", "chatty")

    configure_logging()

    assert restore_root_logger.level == logging.INFO


def test_reconfigure_resets_managed_handler_options(restore_root_logger):
    configure_logging()
    (handler,) = _managed(restore_root_logger)
    handler.markup = True

    configure_logging(verbose=True)

    assert _managed(restore_root_logger) == [handler]
    assert handler.markup is False
    assert restore_root_logger.level == logging.DEBUG
