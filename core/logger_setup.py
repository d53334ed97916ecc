import logging
import os
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from core import config

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"


def setup_logger(level: Optional[int] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configura el logger raíz de la exportación.

    - ENV=dev  → DEBUG
    - ENV=prod → INFO (por defecto)
    - LOG_DIR definido → además, fichero con rotación diaria
    """
    if level is None:
        level = logging.DEBUG if config.ENV == "dev" else logging.INFO
    if log_dir is None:
        log_dir = config.LOG_DIR

    logger = logging.getLogger()
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            os.path.join(log_dir, "taskexport.log"),
            when="midnight", interval=1, backupCount=7, encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logger initialised at %s", logging.getLevelName(level))
    return logger
