"""Tests for gh_self_reviewer.logging (ReviewerLogging, level/format from config)."""

import logging
import sys

from gh_self_reviewer.config import LoggingConfig
from gh_self_reviewer.logging import (
    DEFAULT_FORMAT,
    LEVELS,
    THIRD_PARTY_LOGGERS,
    ReviewerLogging,
    _resolve_level,
)


class TestResolveLevel:
    """_resolve_level maps level names to logging constants."""

    def test_known_levels(self) -> None:
        for name, value in LEVELS.items():
            assert _resolve_level(name) == value

    def test_lowercase_and_whitespace(self) -> None:
        assert _resolve_level(" debug ") == logging.DEBUG
        assert _resolve_level("\twarning\t") == logging.WARNING

    def test_unknown_level_returns_info(self) -> None:
        assert _resolve_level("TRACE") == logging.INFO
        assert _resolve_level("") == logging.INFO


class TestReviewerLogging:
    """ReviewerLogging applies LoggingConfig to the root logger on stderr."""

    def test_setup_sets_root_level_from_config(self) -> None:
        for level_name, expected in LEVELS.items():
            ReviewerLogging(LoggingConfig(level=level_name, format="%(message)s")).setup()
            assert logging.root.level == expected

    def test_setup_writes_to_stderr(self) -> None:
        """stdout is reserved for the MCP protocol."""
        ReviewerLogging(LoggingConfig(level="INFO", format="%(message)s")).setup()
        handler = logging.root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_setup_applies_format(self) -> None:
        custom = "%(levelname)s || %(message)s"
        ReviewerLogging(LoggingConfig(level="INFO", format=custom)).setup()
        formatter = logging.root.handlers[0].formatter
        assert formatter is not None
        assert formatter._fmt == custom

    def test_empty_format_uses_default(self) -> None:
        ReviewerLogging(LoggingConfig(level="INFO", format="")).setup()
        formatter = logging.root.handlers[0].formatter
        assert formatter is not None
        assert formatter._fmt == DEFAULT_FORMAT

    def test_third_party_loggers_default_to_warning(self) -> None:
        ReviewerLogging(LoggingConfig(level="DEBUG", format="%(message)s")).setup()
        assert logging.root.level == logging.DEBUG
        for name in THIRD_PARTY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert not logging.getLogger("mcp.server.lowlevel").isEnabledFor(logging.DEBUG)
        assert logging.getLogger("gh_self_reviewer.resolver").isEnabledFor(logging.DEBUG)

    def test_third_party_level_from_config(self) -> None:
        ReviewerLogging(LoggingConfig(level="INFO", third_party_level="error")).setup()
        assert logging.getLogger("mcp").level == logging.ERROR
        assert logging.getLogger("urllib3").level == logging.ERROR
