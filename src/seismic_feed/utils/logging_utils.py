"""
Logging setup for the seismic_feed command line tools.

Parsed records are written to stdout, so console logging always goes to stderr.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from seismic_feed.config.settings import LOG_CONFIG

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Transport libraries log every request at DEBUG
QUIET_LOGGERS = ('urllib3', 'requests')


def resolve_level(level: Union[int, str]) -> int:
    """Turn ``'info'``, ``'DEBUG'`` or a numeric level into a logging level."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


class ApplicationLogger:
    """Owns the handlers of the package logger for one run of a tool."""

    def __init__(
        self,
        log_dir: Path,
        logger_name: str = 'seismic_feed',
        level: Optional[Union[int, str]] = None,
        debug: bool = False,
        verbose: bool = False,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        self.log_dir = Path(log_dir).expanduser()
        self.logger_name = logger_name
        self.level = logging.DEBUG if debug else resolve_level(level or LOG_CONFIG['log_level'])
        self.verbose = verbose
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.logger = self._configure_logger()

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"{self.logger_name}.log"

    def _configure_logger(self) -> logging.Logger:
        logger = logging.getLogger(self.logger_name)
        self._remove_handlers(logger)
        logger.setLevel(self.level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        for handler in (self._file_handler(), self._console_handler()):
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        logging.captureWarnings(True)

        return logger

    def _file_handler(self) -> logging.Handler:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            filename=self.log_file,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        return handler

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG if self.verbose else logging.WARNING)
        return handler

    @staticmethod
    def _remove_handlers(logger: logging.Logger) -> None:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        if name:
            return self.logger.getChild(name)
        return self.logger

    def close(self) -> None:
        self._remove_handlers(self.logger)
