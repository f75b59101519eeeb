"""Logging setup for the stdio server.

stdout carries the MCP protocol, so every log line goes to stderr. Levels are
DEBUG, INFO, WARNING and ERROR; unknown names fall back to INFO.

Libraries below the tools (``mcp`` request tracing, ``urllib3`` connection
chatter) log at their own level, ``logging.third_party_level`` (env
LOGGING_THIRD_PARTY_LEVEL, default WARNING), so DEBUG on our loggers does not
flood the diagnostic stream.
"""

import logging
import sys

from gh_self_reviewer.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

THIRD_PARTY_LOGGERS = ("mcp", "urllib3")


def _resolve_level(level: str) -> int:
    return LEVELS.get(level.upper().strip(), logging.INFO)


class ReviewerLogging:
    """Configures the root logger (stderr) and third-party logger levels."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._third_party_level = _resolve_level(config.third_party_level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(self._third_party_level)
