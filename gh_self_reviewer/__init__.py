"""gh-self-reviewer: MCP tools for listing, reading, commenting on and reviewing your pull requests."""

__version__ = "0.1.0"
