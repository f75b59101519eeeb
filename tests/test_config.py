"""Tests for configuration loading and token resolution."""

from pathlib import Path

import pytest

from gh_self_reviewer import config as config_module
from gh_self_reviewer.config import (
    TOKEN_ENV,
    TOKEN_FILE_ENV,
    AppConfig,
    ConfigurationError,
    GitHubConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        TOKEN_ENV,
        TOKEN_FILE_ENV,
        "GITHUB_TOKEN",
        "GITHUB_API_URL",
        "GITHUB_TIMEOUT",
        "LOGGING_LEVEL",
        "LOGGING_THIRD_PARTY_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.github.api_url == "https://api.github.com"
    assert cfg.github.timeout == 30
    assert cfg.server.name == "gh-self-reviewer"
    assert cfg.logging.level == "INFO"
    assert cfg.logging.third_party_level == "WARNING"


def test_none_path_gives_defaults() -> None:
    assert isinstance(load_config(None), AppConfig)


def test_yaml_values_and_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GHE_URL", "https://ghe.example.com/api/v3")
    path = tmp_path / "config.yaml"
    path.write_text(
        "github:\n"
        "  api_url: ${GHE_URL}\n"
        "  timeout: 10\n"
        "server:\n"
        "  name: my-reviewer\n"
        "logging:\n"
        "  level: DEBUG\n"
    )

    cfg = load_config(path)

    assert cfg.github.api_url == "https://ghe.example.com/api/v3"
    assert cfg.github.timeout == 10
    assert cfg.server.name == "my-reviewer"
    assert cfg.logging.level == "DEBUG"


def test_env_overrides_without_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.local/api/v3")
    monkeypatch.setenv("LOGGING_LEVEL", "WARNING")
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.github.api_url == "https://ghe.local/api/v3"
    assert cfg.logging.level == "WARNING"


def test_malformed_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("github: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_non_mapping_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_token_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TOKEN_ENV, "  ghp_env  ")
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.require_token() == "ghp_env"


def test_token_from_secret_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token"
    secret.write_text("ghp_file\n")
    monkeypatch.setenv(TOKEN_FILE_ENV, str(secret))
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg.github_token_resolved == "ghp_file"


def test_unreadable_secret_file_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TOKEN_FILE_ENV, str(tmp_path / "missing"))
    cfg = load_config(tmp_path / "absent.yaml")
    with pytest.raises(ConfigurationError):
        cfg.require_token()


def test_token_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ghp_yaml\n")
    assert load_config(path).require_token() == "ghp_yaml"


def test_env_token_wins_over_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TOKEN_ENV, "ghp_env")
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ghp_yaml\n")
    assert load_config(path).require_token() == "ghp_env"


def test_unsubstituted_placeholder_is_not_a_token(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${NOT_SET_ANYWHERE}\n")
    with pytest.raises(ConfigurationError):
        load_config(path).require_token()


def test_missing_token_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "_current_env", {})
    cfg = AppConfig(github=GitHubConfig(token=None))
    with pytest.raises(ConfigurationError) as exc_info:
        cfg.require_token()
    assert TOKEN_ENV in str(exc_info.value)
