"""
Palette Finder Structured Logging
Centralized logging configuration using loguru.

Per-image fields such as ``run_id`` are bound once with ``contextualize``
and show up in the ``{extra}`` column of every line logged inside the block.
"""
import sys
from contextlib import contextmanager
from typing import Dict, Any, Iterator, Optional

from loguru import logger

from palette_finder.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


class StructuredLogger:
    """Structured logger for the palette finder pipeline."""

    def __init__(self, level: str = None):
        self.level = level or config.LOG_LEVEL
        logger.remove()
        self._sink_id = logger.add(sys.stdout, format=LOG_FORMAT, level=self.level)

    @contextmanager
    def contextualize(self, **fields: Any) -> Iterator[None]:
        """Attach ``fields`` to every line logged inside the block."""
        with logger.contextualize(**fields):
            yield

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = logger.bind(**extra) if extra else logger
        # depth=2 reports the caller of info()/debug()/..., not this helper
        target.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
