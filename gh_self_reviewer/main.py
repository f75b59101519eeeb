"""gh-self-reviewer entry point.

Starts an MCP server on stdio exposing tools to list my open pull requests,
read a pull request, comment on it and submit comment-only reviews.
Usage: gh-self-reviewer [--config PATH] [--check].
"""

import argparse
import logging
import sys
from pathlib import Path

from gh_self_reviewer.adapters import GitHubAdapter
from gh_self_reviewer.config import AppConfig, ConfigurationError, load_config
from gh_self_reviewer.dispatcher import ToolDispatcher
from gh_self_reviewer.logging import ReviewerLogging
from gh_self_reviewer.resolver import PullRequestResolver


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="gh-self-reviewer",
        description="MCP server for reviewing and commenting on your GitHub pull requests",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to optional YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config and token, then exit",
    )
    return parser.parse_args(argv)


def build_dispatcher(config: AppConfig) -> ToolDispatcher:
    """Create the GitHub client, resolver and dispatcher.

    Raises ConfigurationError when no token is configured.
    """
    token = config.require_token()
    adapter = GitHubAdapter(token=token, api_url=config.github.api_url, timeout=config.github.timeout)
    return ToolDispatcher(PullRequestResolver(adapter))


def main(argv: list[str] | None = None) -> int:
    """Entry point for gh-self-reviewer."""
    args = parse_args(argv)
    log = logging.getLogger("gh_self_reviewer.main")

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)
        log.error("Invalid configuration: %s", e)
        return 1

    ReviewerLogging(config.logging).setup()

    try:
        dispatcher = build_dispatcher(config)
    except ConfigurationError as e:
        log.error("Failed to initialize GitHub client: %s", e)
        return 1

    if args.check:
        log.info("Config OK: %s, %d tools", config.github.api_url, len(dispatcher.tools()))
        return 0

    from gh_self_reviewer.server import run_server

    try:
        run_server(dispatcher, config.server)
    except KeyboardInterrupt:
        # Ctrl-C before the signal receiver is installed
        return 0
    except Exception as e:
        log.exception("Fatal error: %s", e)
        return 1
    log.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
