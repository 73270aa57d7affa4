"""
Logger setup for the component container.

Every module logs through a child of the "container" root logger. The root
writes to stdout; when a log directory is configured it also keeps a rotating
daily log and a separate rotating error log.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "container"

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5

CONSOLE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)

FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def _clear_handlers(logger: logging.Logger):
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def _rotating_handler(path: Path, level: int, max_file_size: int,
                      backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_file_size,
        backupCount=backup_count
    )
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


class ContainerLogger:
    """Owns the handlers of one named logger."""

    def __init__(self,
                 name: str = ROOT_LOGGER_NAME,
                 log_level: str = "INFO",
                 log_dir: Optional[str] = None,
                 max_file_size: int = DEFAULT_MAX_FILE_SIZE,
                 backup_count: int = DEFAULT_BACKUP_COUNT):
        """
        Args:
            name: Logger name
            log_level: Level name, case insensitive
            log_dir: Directory for log files; stdout only when None
            max_file_size: Bytes before a log file is rotated
            backup_count: Rotated files to keep
        """
        self.name = name
        self.log_level = _parse_level(log_level)
        self.log_dir = Path(log_dir) if log_dir else None
        self.max_file_size = max_file_size
        self.backup_count = backup_count

        self.logger = logging.getLogger(name)
        self._error_handler: Optional[logging.Handler] = None
        self.logger.setLevel(self.log_level)

        # Already configured by an earlier instance
        if not self.logger.handlers:
            self._add_handlers()

    def _log_file(self, suffix: str = "") -> Path:
        stamp = datetime.now().strftime('%Y%m%d')
        return self.log_dir / f"{self.name}{suffix}_{stamp}.log"

    def _add_handlers(self):
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(self.log_level)
        console.setFormatter(CONSOLE_FORMAT)
        self.logger.addHandler(console)

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.logger.addHandler(_rotating_handler(
            self._log_file(), self.log_level, self.max_file_size, self.backup_count))
        self._error_handler = _rotating_handler(
            self._log_file("_errors"), logging.ERROR, self.max_file_size, self.backup_count)
        self.logger.addHandler(self._error_handler)

    def get_logger(self) -> logging.Logger:
        return self.logger

    def set_level(self, level: str):
        """Change the level of the logger and every handler but the error log."""
        self.log_level = _parse_level(level)
        self.logger.setLevel(self.log_level)
        for handler in self.logger.handlers:
            if handler is not self._error_handler:
                handler.setLevel(self.log_level)

    def close(self):
        """Detach and close every handler."""
        _clear_handlers(self.logger)


_root: Optional[ContainerLogger] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the container root, e.g. "build" -> "container.build".

    The root is configured with stdout output on first use.
    """
    global _root
    if _root is None:
        _root = ContainerLogger()
    root = _root.get_logger()
    return root.getChild(name) if name else root


def setup_logger(config: Optional[dict] = None) -> logging.Logger:
    """
    Reconfigure the container root logger, replacing its handlers.

    Args:
        config: Options as produced by LoggingConfig.as_logger_options():
               log_level, log_dir, max_file_size, backup_count

    Returns:
        The root logger
    """
    global _root
    config = config or {}

    _clear_handlers(logging.getLogger(ROOT_LOGGER_NAME))

    _root = ContainerLogger(
        name=ROOT_LOGGER_NAME,
        log_level=config.get("log_level", "INFO"),
        log_dir=config.get("log_dir"),
        max_file_size=config.get("max_file_size", DEFAULT_MAX_FILE_SIZE),
        backup_count=config.get("backup_count", DEFAULT_BACKUP_COUNT)
    )
    return _root.get_logger()
