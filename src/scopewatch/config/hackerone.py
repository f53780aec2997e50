"""HackerOne configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

HACKERONE_BASE_URL = "https://api.hackerone.com/v1/"
HACKERONE_TIMEOUT_SECONDS = 30.0
HACKERONE_PAGE_SIZE = 100


def default_hackerone_resilience() -> ResilienceConfig:
    # The hacker API allows 600 reads per minute per token.
    return ResilienceConfig(
        name="hackerone",
        base_url=HACKERONE_BASE_URL,
        timeout_seconds=HACKERONE_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=5),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(enabled=True),
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True)
class HackerOneConfig:
    """Credentials and transport settings for the HackerOne hacker API."""

    username: str
    token: str = field(repr=False)
    page_size: int = HACKERONE_PAGE_SIZE
    resilience: ResilienceConfig = field(default_factory=default_hackerone_resilience)
