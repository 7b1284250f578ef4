"""Logging from config and env.

Levels (inclusive):
- ERROR: the run could not load results or publish
- WARNING: a previous comment could not be hidden, and ERROR
- INFO: progress messages, WARNING, and ERROR
- DEBUG: debugging and all levels above

Inside GitHub Actions, warnings and errors are written as workflow
commands (``::warning::``/``::error::``) so they appear as annotations on
the job. Configure via config.yaml (logging.level, logging.format,
logging.annotations) or env (LOGGING_LEVEL, LOGGING_FORMAT,
LOGGING_ANNOTATIONS).
"""

import logging
import os

from grade_comment.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOGGER_NAME = "grade_comment"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


def _escape_command_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsAnnotationFormatter(logging.Formatter):
    """Prefix WARNING and ERROR records with a workflow command."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno >= logging.ERROR:
            command = "error"
        elif record.levelno >= logging.WARNING:
            command = "warning"
        else:
            return text
        # A workflow command must fit on one line
        return f"::{command}::{_escape_command_data(text)}"


def setup_logging(config: LoggingConfig, env: dict[str, str] | None = None) -> logging.Logger:
    """Configure the root logger and return the ``grade_comment`` logger.

    Annotations default to on when GITHUB_ACTIONS is "true".
    """
    env = dict(os.environ) if env is None else env
    fmt = config.format or DEFAULT_FORMAT
    annotations = config.annotations
    if annotations is None:
        annotations = env.get("GITHUB_ACTIONS") == "true"

    handler = logging.StreamHandler()
    handler.setFormatter(ActionsAnnotationFormatter(fmt) if annotations else logging.Formatter(fmt))
    logging.basicConfig(level=_resolve_level(config.level), handlers=[handler], force=True)
    return logging.getLogger(LOGGER_NAME)
