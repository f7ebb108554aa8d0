"""
Logger implementation for srclink internal diagnostics.

Matching decisions, translations and manifest file actions are logged at
debug/info level; conditions that leave a source root without a content URL
are warnings. Output goes to stderr and/or a rotating log file.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig


class SrclinkLogger(ILogger):
    """
    ILogger backed by the stdlib ``srclink`` logger.

    Handlers are rebuilt on construction, so creating a second instance
    replaces the output of the first.
    """

    DEFAULT_LOG_FILE = Path.home() / ".srclink" / "srclink.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024
    BACKUP_COUNT = 3
    FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = True,
        log_file: Path | None = None,
        name: str = "srclink",
    ) -> None:
        """
        Args:
            level: Initial log level (debug, info, warning, error)
            console_enabled: Write to stderr
            file_enabled: Write to ``log_file``
            log_file: Log file (default: ~/.srclink/srclink.log)
            name: stdlib logger name
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._handlers: list[logging.Handler] = []
        self.log_file: Path | None = None

        formatter = logging.Formatter(self.FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr), formatter)

        file_error: OSError | None = None
        if file_enabled:
            path = log_file or self.DEFAULT_LOG_FILE
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                handler = RotatingFileHandler(
                    path, maxBytes=self.MAX_FILE_SIZE, backupCount=self.BACKUP_COUNT
                )
            except OSError as e:
                # read-only home directories are common on build agents
                file_error = e
            else:
                self._add_handler(handler, formatter)
                self.log_file = path

        self.set_level(level)
        if file_error is not None:
            self.warning(f"Log file is not writable, file logging disabled: {file_error}")

    @classmethod
    def from_config(cls, config: LoggingConfig) -> SrclinkLogger:
        """Create a logger from the ``[logging]`` settings section."""
        return cls(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            log_file=Path(config.path).expanduser() if config.path else None,
        )

    def _add_handler(self, handler: logging.Handler, formatter: logging.Formatter) -> None:
        handler.setFormatter(formatter)
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set the level of every handler; unknown names mean warning."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        for handler in self._handlers:
            handler.setLevel(lvl)


class NullLogger(ILogger):
    """Discards everything. Used before bootstrap and in library use."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass


def get_logger() -> ILogger:
    """Resolve the configured logger, or a NullLogger before bootstrap."""
    from ..core.di import resolve_or_default

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
