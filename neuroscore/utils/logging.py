"""
Structured Logging Configuration

Console lines carry a UTC timestamp, the level, the logger name and any
scoring context passed through ``extra``:

    logger.warning("percentile lookup failed", extra={"protocol": "FDT", "subtest": "inibicao"})
    # [2025-03-12T14:02:11.512+00:00] WARNING  [neuroscore.core.scoring] percentile lookup failed protocol=FDT subtest=inibicao

The package never touches the root logger on import unless
NEUROSCORE_LOG_AUTOSETUP is set; applications call ``setup_logging``.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from neuroscore import config

LEVEL_COLORS = {
    logging.DEBUG:    "\033[36m",  # cyan
    logging.INFO:     "\033[32m",  # green
    logging.WARNING:  "\033[33m",  # yellow
    logging.ERROR:    "\033[31m",  # red
    logging.CRITICAL: "\033[35m",  # magenta
}
RESET = "\033[0m"

# ``extra`` keys rendered after the message, in this order
CONTEXT_FIELDS = ("protocol", "subtest", "metric")

FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s%(context)s"

# marks handlers installed by setup_logging so a second call replaces only those
_OWNED = "_neuroscore_owned"


def _context_suffix(record: logging.LogRecord) -> str:
    pairs = [
        f"{name}={getattr(record, name)}"
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    ]
    return " " + " ".join(pairs) if pairs else ""


class StructuredFormatter(logging.Formatter):
    """One line per record: timestamp, level, logger, message, context."""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds")
        line = f"[{stamp}] {record.levelname:8} [{record.name}] {record.getMessage()}{_context_suffix(record)}"
        if self.use_color and record.levelno in LEVEL_COLORS:
            line = f"{LEVEL_COLORS[record.levelno]}{line}{RESET}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


class _ContextFileFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.context = _context_suffix(record)
        return super().format(record)


def _owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _OWNED, False)]


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _OWNED, True)
    logger.addHandler(handler)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure console (and optionally file) logging on the root logger.

    Handlers added by other code are left in place; calling this again
    swaps out the ones a previous call installed.

    Args:
        level: Level name. Defaults to NEUROSCORE_LOG_LEVEL; unknown names
               fall back to INFO.
        log_file: Path for a plain-text copy of the log. Defaults to
                  NEUROSCORE_LOG_FILE.
    """
    level = level or config.LOG_LEVEL
    log_file = log_file if log_file is not None else (config.LOG_FILE or None)

    root = logging.getLogger()
    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    for handler in _owned_handlers(root):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    _install(root, console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_ContextFileFormatter(FILE_FORMAT))
        _install(root, file_handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(name)


if config.LOG_AUTOSETUP:
    setup_logging()
