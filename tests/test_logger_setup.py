import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from core.logger_setup import LOG_FORMAT, setup_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_only(restore_root_logger):
    logger = setup_logger(logging.WARNING, log_dir="")
    assert logger is restore_root_logger
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_file_handler_when_log_dir(restore_root_logger, tmp_path):
    logger = setup_logger(logging.DEBUG, log_dir=str(tmp_path / "logs"))
    file_handlers = [h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)]
    assert len(file_handlers) == 1
    assert (tmp_path / "logs").is_dir()


def test_env_dev_means_debug(restore_root_logger, monkeypatch):
    monkeypatch.setattr("core.config.ENV", "dev")
    assert setup_logger(log_dir="").level == logging.DEBUG
    monkeypatch.setattr("core.config.ENV", "prod")
    assert setup_logger(log_dir="").level == logging.INFO
