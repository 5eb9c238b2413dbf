# tests/test_log_config.py
import logging

import pytest

from gearopt_core import setup_logging
from gearopt_core.log_config import LOG_LEVEL_ENV_VAR


@pytest.fixture
def package_logger():
    logger = logging.getLogger("gearopt_core")
    yield logger
    setup_logging(logging.INFO)


def test_repeated_setup_keeps_one_handler(package_logger):
    setup_logging()
    setup_logging()
    assert len(package_logger.handlers) == 1


def test_level_from_environment(package_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")
    setup_logging()
    assert package_logger.level == logging.DEBUG


def test_explicit_level_wins_and_unknown_names_fall_back(package_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "DEBUG")
    setup_logging("WARNING")
    assert package_logger.level == logging.WARNING
    setup_logging("chatty")
    assert package_logger.level == logging.INFO
