"""
Logging configuration — set up once by the CLI root group.

Modules log through ``logging.getLogger(__name__)``.  Level precedence:

    --debug  >  --verbose  >  --quiet  >  COOLCTL_LOG_LEVEL  >  WARNING

``COOLCTL_LOG_FILE`` adds a file handler (level ``COOLCTL_LOG_FILE_LEVEL``,
default: same as console).  Bearer tokens are masked in every record.
"""

from __future__ import annotations

import logging
import re
import sys

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# urllib's connection chatter is only useful with --debug
_NOISY_LOGGERS = ("urllib3", "urllib.request", "charset_normalizer")

_BEARER = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


class TokenRedactingFilter(logging.Filter):
    """Replace bearer tokens in log messages with ``***``."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if _BEARER.search(message):
            record.msg = _BEARER.sub(r"\1***", message)
            record.args = None
        return True


# ── Handlers ────────────────────────────────────────────────────


def _console_formatter(numeric_level: int) -> logging.Formatter:
    """Terser output the quieter the console is."""
    if numeric_level <= logging.DEBUG:
        return logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_SHORT)
    if numeric_level <= logging.INFO:
        return logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_SHORT)
    return logging.Formatter(_FMT_MINIMAL)


def build_handlers(
    numeric_level: int,
    log_file: str | None = None,
    file_level: int | None = None,
) -> list[logging.Handler]:
    """Console handler on stderr, plus a file handler when *log_file* is set.

    Every handler carries the same :class:`TokenRedactingFilter`, so a
    token that slips into a message is masked on every sink.
    """
    redact = TokenRedactingFilter()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(_console_formatter(numeric_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(numeric_level if file_level is None else file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        handlers.append(fh)

    for handler in handlers:
        handler.addFilter(redact)
    return handlers


# ── Process setup ───────────────────────────────────────────────


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install coolctl's handlers on the root logger.

    Args:
        level: Console level name, usually from :func:`resolve_level`.
        log_file: ``COOLCTL_LOG_FILE``; adds a timestamped file log.
        log_file_level: ``COOLCTL_LOG_FILE_LEVEL``; defaults to *level*.
        quiet_third_party: Hold urllib chatter at WARNING unless the
            console itself is at DEBUG.
    """
    numeric_level = parse_level(level)
    file_level = parse_level(log_file_level) if log_file and log_file_level else None
    handlers = build_handlers(numeric_level, log_file, file_level)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # Root must pass the most verbose handler's records
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name → numeric level (WARNING for anything unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def resolve_level(debug: bool, verbose: bool, quiet: bool, env_level: str | None) -> str:
    """Pick the console level from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"
