import logging

import pytest

import eventdisplay
from eventdisplay.logging_config import LOGGER_NAMESPACE, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAMESPACE)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_namespace_is_the_package():
    assert LOGGER_NAMESPACE == eventdisplay.__name__


def test_setup_logging_returns_package_logger(package_logger):
    logger = setup_logging(level=logging.WARNING)
    assert logger is package_logger
    assert logger.name == "eventdisplay"
    assert logger.level == logging.WARNING


def test_setup_logging_writes_file(tmp_path, package_logger):
    log_file = tmp_path / "display.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    assert len(package_logger.handlers) == 2
    logging.getLogger("eventdisplay.model.state").debug("regenerated")
    for handler in package_logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized at DEBUG." in text
    assert "eventdisplay.model.state - DEBUG - regenerated" in text


def test_setup_logging_is_idempotent(package_logger):
    setup_logging()
    setup_logging()
    assert len(package_logger.handlers) == 1
