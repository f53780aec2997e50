"""Settings file loading with environment overrides.

The settings file is YAML with four sections::

    app:
      concurrency: 3
      data_dir: data
    scraper:
      bbp_only: false
      private_only: false
      public_only: false
      categories: all
      active: true
      include_oos: false
      print_real_time: false
    notifications:
      enabled: true
      display_timezone: Asia/Kolkata
    credentials:
      h1_username: ...
      h1_token: ...
      slack_webhook: ...

Credentials and the notification switch can be supplied or overridden by the
``H1_USERNAME``, ``H1_TOKEN``, ``SLACK_WEBHOOK_URL`` and ``SEND_NOTIFICATIONS``
environment variables.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Final, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from scopewatch.domain.ports.fetching import DEFAULT_FETCH_CONCURRENCY, FetchOptions

from .env import get_env, get_env_flag, require_values
from .errors import ConfigFileError, ConfigurationError
from .hackerone import HackerOneConfig
from .slack import DEFAULT_DISPLAY_TIMEZONE, SlackConfig
from .storage import StorageConfig, get_storage_config

log = getLogger(__name__)

DEFAULT_CONFIG_PATH: Final[Path] = Path("config") / "config.yaml"
CONFIG_PATH_ENV_VAR: Final[str] = "SCOPEWATCH_CONFIG"


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class AppSection(_Section):
    concurrency: int = Field(default=DEFAULT_FETCH_CONCURRENCY, ge=1)
    data_dir: str | None = None


class ScraperSection(_Section):
    bbp_only: bool = False
    private_only: bool = False
    public_only: bool = False
    categories: str = "all"
    active: bool = False
    include_oos: bool = False
    print_real_time: bool = False
    delimiter: str = " "


class NotificationsSection(_Section):
    enabled: bool = False
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE

    @field_validator("display_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class CredentialsSection(_Section):
    h1_username: str | None = None
    h1_token: str | None = None
    slack_webhook: str | None = None


class SettingsDocument(_Section):
    app: AppSection = Field(default_factory=AppSection)
    scraper: ScraperSection = Field(default_factory=ScraperSection)
    notifications: NotificationsSection = Field(default_factory=NotificationsSection)
    credentials: CredentialsSection = Field(default_factory=CredentialsSection)

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_sections(cls, value: object) -> object:
        # A section header with no keys parses as ``None``.
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            return {key: item for key, item in mapping_value.items() if item is not None}
        return value


@dataclass(frozen=True)
class Settings:
    """Fully resolved runtime settings."""

    fetch: FetchOptions
    storage: StorageConfig
    hackerone: HackerOneConfig
    notifications_enabled: bool = False
    slack: SlackConfig | None = None


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path)
    env_path = get_env(CONFIG_PATH_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def read_settings_document(path: Path) -> SettingsDocument:
    """Parse the YAML settings file; a missing file yields the defaults."""

    if not path.exists():
        log.info("No settings file at %s, relying on defaults and environment", path)
        return SettingsDocument()

    try:
        with path.open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigFileError(f"cannot read settings: {exc}", path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigFileError(f"invalid YAML: {exc}", path=path) from exc

    if raw is None:
        return SettingsDocument()
    if not isinstance(raw, Mapping):
        raise ConfigFileError("settings must be a mapping", path=path)

    try:
        return SettingsDocument.model_validate(raw)
    except ValidationError as exc:
        raise ConfigFileError(str(exc), path=path) from exc


def load_settings(path: str | Path | None = None) -> Settings:
    """Load the settings file, apply environment overrides and validate."""

    document = read_settings_document(resolve_config_path(path))
    credentials = document.credentials

    required = require_values(
        {
            "H1_USERNAME": get_env("H1_USERNAME") or credentials.h1_username,
            "H1_TOKEN": get_env("H1_TOKEN") or credentials.h1_token,
        }
    )
    webhook = get_env("SLACK_WEBHOOK_URL") or credentials.slack_webhook
    if webhook:
        _check_webhook_url(webhook)
    enabled_override = get_env_flag("SEND_NOTIFICATIONS")
    notifications_enabled = (
        document.notifications.enabled if enabled_override is None else enabled_override
    )

    scraper = document.scraper
    try:
        fetch = FetchOptions(
            bbp_only=scraper.bbp_only,
            private_only=scraper.private_only,
            public_only=scraper.public_only,
            categories=scraper.categories,
            active_only=scraper.active,
            include_out_of_scope=scraper.include_oos,
            concurrency=document.app.concurrency,
            print_real_time=scraper.print_real_time,
            delimiter=scraper.delimiter,
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid scraper settings: {exc}") from exc

    return Settings(
        fetch=fetch,
        storage=get_storage_config(data_dir=document.app.data_dir),
        hackerone=HackerOneConfig(
            username=required["H1_USERNAME"],
            token=required["H1_TOKEN"],
        ),
        notifications_enabled=notifications_enabled,
        slack=(
            SlackConfig(
                webhook_url=webhook,
                display_timezone=document.notifications.display_timezone,
            )
            if webhook
            else None
        ),
    )


def _check_webhook_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid Slack webhook URL: {exc}") from exc
    if parsed.scheme not in {"http", "https"} or not parsed.host:
        raise ConfigurationError("Slack webhook URL must be an absolute http(s) URL")
