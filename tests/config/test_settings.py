from __future__ import annotations

from collections.abc import Callable  # noqa: TC003
from pathlib import Path

import pytest

from scopewatch.config import (
    ConfigFileError,
    ConfigurationError,
    MissingConfigurationError,
    load_settings,
)
from scopewatch.config.settings import DEFAULT_CONFIG_PATH, resolve_config_path
from scopewatch.domain.ports import FetchOptions

FULL_CONFIG = """
app:
  concurrency: 5
  data_dir: /srv/scopewatch
scraper:
  bbp_only: true
  private_only: false
  public_only: true
  categories: url,wildcard
  active: true
  include_oos: true
  print_real_time: true
notifications:
  enabled: true
  display_timezone: Asia/Kolkata
credentials:
  h1_username: file-user
  h1_token: file-token
  slack_webhook: https://hooks.slack.com/services/file
"""

WriteConfig = Callable[[str], Path]


def test_load_settings_reads_all_sections(write_config: WriteConfig) -> None:
    settings = load_settings(write_config(FULL_CONFIG))

    assert settings.fetch == FetchOptions(
        bbp_only=True,
        public_only=True,
        categories="url,wildcard",
        active_only=True,
        include_out_of_scope=True,
        concurrency=5,
        print_real_time=True,
    )
    assert settings.storage.data_dir == Path("/srv/scopewatch")
    assert settings.hackerone.username == "file-user"
    assert settings.hackerone.token == "file-token"
    assert settings.notifications_enabled is True
    assert settings.slack is not None
    assert settings.slack.webhook_url == "https://hooks.slack.com/services/file"
    assert settings.slack.display_timezone == "Asia/Kolkata"


def test_environment_overrides_file_values(
    write_config: WriteConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("H1_USERNAME", "env-user")
    monkeypatch.setenv("H1_TOKEN", "env-token")
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/env")
    monkeypatch.setenv("SEND_NOTIFICATIONS", "false")
    monkeypatch.setenv("SCOPEWATCH_DATA_DIR", "/tmp/override")

    settings = load_settings(write_config(FULL_CONFIG))

    assert settings.hackerone.username == "env-user"
    assert settings.hackerone.token == "env-token"
    assert settings.slack is not None
    assert settings.slack.webhook_url == "https://hooks.slack.com/services/env"
    assert settings.notifications_enabled is False
    assert settings.storage.data_dir == Path("/tmp/override")


def test_missing_file_uses_defaults_and_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("H1_USERNAME", "env-user")
    monkeypatch.setenv("H1_TOKEN", "env-token")
    monkeypatch.setenv("SEND_NOTIFICATIONS", "true")

    settings = load_settings(tmp_path / "absent.yaml")

    assert settings.fetch == FetchOptions()
    assert settings.storage.data_dir == Path("data")
    assert settings.notifications_enabled is True
    assert settings.slack is None


def test_missing_credentials_are_fatal(write_config: WriteConfig) -> None:
    path = write_config("credentials:\n  h1_username: someone\n")

    with pytest.raises(MissingConfigurationError, match="H1_TOKEN"):
        load_settings(path)


def test_empty_sections_fall_back_to_defaults(
    write_config: WriteConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("H1_USERNAME", "u")
    monkeypatch.setenv("H1_TOKEN", "t")

    settings = load_settings(write_config("app:\nscraper:\nnotifications:\n"))

    assert settings.fetch == FetchOptions()
    assert settings.notifications_enabled is False


@pytest.mark.parametrize(
    "text",
    [
        "app: [unclosed",
        "- just\n- a list\n",
        "app:\n  concurrency: 0\n",
        "notifications:\n  display_timezone: Mars/Olympus\n",
    ],
)
def test_invalid_files_raise_config_file_error(write_config: WriteConfig, text: str) -> None:
    with pytest.raises(ConfigFileError):
        load_settings(write_config(text))


def test_conflicting_scraper_flags_are_rejected(
    write_config: WriteConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("H1_USERNAME", "u")
    monkeypatch.setenv("H1_TOKEN", "t")

    with pytest.raises(ConfigurationError, match="mutually exclusive"):
        load_settings(write_config("scraper:\n  private_only: true\n  public_only: true\n"))


def test_token_is_hidden_from_repr(write_config: WriteConfig) -> None:
    settings = load_settings(write_config(FULL_CONFIG))

    assert "file-token" not in repr(settings)


def test_resolve_config_path_prefers_argument_then_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    assert resolve_config_path() == DEFAULT_CONFIG_PATH

    monkeypatch.setenv("SCOPEWATCH_CONFIG", "/etc/scopewatch.yaml")
    assert resolve_config_path() == Path("/etc/scopewatch.yaml")
    assert resolve_config_path("explicit.yaml") == Path("explicit.yaml")


def test_unknown_categories_are_rejected_at_startup(
    write_config: WriteConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("H1_USERNAME", "u")
    monkeypatch.setenv("H1_TOKEN", "t")

    with pytest.raises(ConfigurationError, match="bogus"):
        load_settings(write_config("scraper:\n  categories: url,bogus\n"))


@pytest.mark.parametrize(
    "webhook",
    [
        "https://hooks.slack.com:notaport/services/x",
        "hooks.slack.com/services/x",
        "ftp://hooks.slack.com/services/x",
    ],
)
def test_malformed_webhook_is_a_configuration_error(
    write_config: WriteConfig, monkeypatch: pytest.MonkeyPatch, webhook: str
) -> None:
    monkeypatch.setenv("H1_USERNAME", "u")
    monkeypatch.setenv("H1_TOKEN", "t")
    monkeypatch.setenv("SLACK_WEBHOOK_URL", webhook)

    with pytest.raises(ConfigurationError, match="Slack webhook URL"):
        load_settings(write_config("notifications:\n  enabled: true\n"))
