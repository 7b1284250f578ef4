"""Tests for grade_comment.logging (level/format/annotations from config)."""

import logging

import pytest

from grade_comment.config import LoggingConfig
from grade_comment.logging import (
    DEFAULT_FORMAT,
    DEFAULT_LEVEL,
    LEVELS,
    LOGGER_NAME,
    ActionsAnnotationFormatter,
    _resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("grade_comment.publisher", level, __file__, 1, msg, None, None)


def test_defaults_match_config_defaults() -> None:
    """LoggingConfig defaults and module defaults agree."""
    cfg = LoggingConfig()
    assert cfg.level == DEFAULT_LEVEL
    assert cfg.format == DEFAULT_FORMAT
    assert cfg.annotations is None


@pytest.mark.parametrize("name", ["debug", " INFO ", "\tWarning", "ERROR"])
def test_resolve_level_normalizes(name: str) -> None:
    assert _resolve_level(name) == LEVELS[name.strip().upper()]


@pytest.mark.parametrize("name", ["TRACE", "", "CRITICAL"])
def test_resolve_level_unknown_is_info(name: str) -> None:
    assert _resolve_level(name) == logging.INFO


def test_setup_returns_package_logger_and_applies_config() -> None:
    custom = "%(levelname)s || %(message)s"
    log = setup_logging(LoggingConfig(level="WARNING", format=custom), env={})

    assert log.name == LOGGER_NAME
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert type(root.handlers[0].formatter) is logging.Formatter
    assert root.handlers[0].formatter._fmt == custom


def test_empty_format_uses_default() -> None:
    setup_logging(LoggingConfig(level="INFO", format=""), env={})
    assert logging.getLogger().handlers[0].formatter._fmt == DEFAULT_FORMAT


def test_env_overrides_level(monkeypatch) -> None:
    monkeypatch.setenv("LOGGING_LEVEL", "DEBUG")
    setup_logging(LoggingConfig(), env={})
    assert logging.getLogger().level == logging.DEBUG


def test_annotations_on_inside_actions() -> None:
    setup_logging(LoggingConfig(), env={"GITHUB_ACTIONS": "true"})
    assert isinstance(logging.getLogger().handlers[0].formatter, ActionsAnnotationFormatter)


def test_annotations_config_overrides_env() -> None:
    setup_logging(LoggingConfig(annotations=False), env={"GITHUB_ACTIONS": "true"})
    assert not isinstance(logging.getLogger().handlers[0].formatter, ActionsAnnotationFormatter)


def test_annotation_formatter_prefixes_warning_and_error() -> None:
    fmt = ActionsAnnotationFormatter("%(message)s")

    assert fmt.format(_record(logging.WARNING, "Could not minimize comment 1")) == (
        "::warning::Could not minimize comment 1"
    )
    assert fmt.format(_record(logging.ERROR, "Failed")) == "::error::Failed"
    assert fmt.format(_record(logging.INFO, "Posted")) == "Posted"


def test_annotation_formatter_escapes_newlines() -> None:
    fmt = ActionsAnnotationFormatter("%(message)s")
    assert fmt.format(_record(logging.ERROR, "100% bad\nsecond line")) == "::error::100%25 bad%0Asecond line"
