"""Configuration loading from YAML and environment.

The GitHub token is taken from the GITHUB_TOKEN_MCP_APP_REVIEW environment
variable or from the file named by GITHUB_TOKEN_MCP_APP_REVIEW_FILE (Docker
secrets). A YAML config file is optional; never put real tokens in config
files committed to a repo.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_ENV = "GITHUB_TOKEN_MCP_APP_REVIEW"
TOKEN_FILE_ENV = "GITHUB_TOKEN_MCP_APP_REVIEW_FILE"


class ConfigurationError(Exception):
    """Raised when the server cannot start with the given configuration."""


# Injected by load_config so secrets and ${VAR} substitution read the same env
_current_env: dict[str, str] = {}


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value and value.strip():
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        try:
            return Path(file_path).read_text().strip() or None
        except OSError as e:
            raise ConfigurationError(f"Cannot read {file_env_key}={file_path}: {e}") from e
    return None


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; prefer env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: float = Field(default=30, gt=0, description="HTTP timeout per request in seconds")


class ServerConfig(BaseSettings):
    """MCP server identity."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", extra="ignore")

    name: str = Field(default="gh-self-reviewer", description="Server name announced to clients")
    version: str = Field(default="0.1.0", description="Server version announced to clients")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    third_party_level: str = Field(default="WARNING", description="Level for mcp and urllib3 loggers")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from env, Docker secret file, then YAML."""
        secret = _read_secret(TOKEN_ENV, TOKEN_FILE_ENV)
        if secret:
            return secret
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return None

    def require_token(self) -> str:
        """Return the GitHub token or raise ConfigurationError."""
        token = self.github_token_resolved
        if not token:
            raise ConfigurationError(f"{TOKEN_ENV} environment variable is required")
        return token


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from an optional YAML file and environment.

    Missing file means defaults plus environment. Raises
    ConfigurationError on unreadable or malformed YAML.
    """
    global _current_env
    _current_env = dict(os.environ)

    if config_path is None or not config_path.is_file():
        return AppConfig()

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot load config {config_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config {config_path} must be a mapping")
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        server=ServerConfig(**(raw.get("server") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
