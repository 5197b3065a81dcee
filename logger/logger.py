"""
Log setup for ingestion runs: size-rotated file plus coloured console.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

NOISY_LOGGERS = ("urllib3", "requests", "sqlalchemy.engine")

FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-28s | %(funcName)-18s:%(lineno)-4d | %(message)s"
)
CONSOLE_FORMAT = "%(asctime)s | %(colored_levelname)s | %(name)-24s | %(message)s"
PLAIN_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Simple colored formatter"""
    COLORS = {
        'DEBUG': '\033[36m', 'INFO': '\033[32m', 'WARNING': '\033[33m',
        'ERROR': '\033[31m', 'CRITICAL': '\033[35m', 'RESET': '\033[0m'
    }

    def format(self, record):
        record.colored_levelname = (
            f"{self.COLORS.get(record.levelname, '')}"
            f"{record.levelname:<8}"
            f"{self.COLORS['RESET']}"
        )
        return super().format(record)


def setup_logger(
    name: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    level: Union[int, str] = logging.INFO,
    max_file_size: int = 5 * 1024 * 1024,
    backup_count: int = 10,
    enable_colors: bool = True,
) -> logging.Logger:
    """
    Configure a logger (the root logger when ``name`` is None) for a run.

    Calling it again replaces the handlers instead of stacking them, so
    every sub-command can set it up without duplicate lines.

    Args:
        name: Logger name, None for the root logger
        log_file: Rotating log file path, None for console only
        level: Logging level name or number
        max_file_size: Bytes before the file rotates
        backup_count: Rotated files kept
        enable_colors: Colour the console level names

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        ColoredFormatter(CONSOLE_FORMAT, datefmt='%H:%M:%S')
        if enable_colors
        else logging.Formatter(PLAIN_CONSOLE_FORMAT, datefmt='%H:%M:%S')
    )
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_path,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        )
        logger.addHandler(file_handler)

    if name is not None:
        logger.propagate = False

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
