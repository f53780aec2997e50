from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from scopewatch.adapters.hackerone import HackerOneAPIError, HackerOneFetcher
from scopewatch.adapters.http_resilience import ResilientClient
from scopewatch.config.hackerone import HackerOneConfig
from scopewatch.config.http_resilience import ResilienceConfig, RetryPolicy
from scopewatch.domain.model import NO_IN_SCOPE_TABLE, ScopeRecord
from scopewatch.domain.ports import FetchOptions

BASE_URL = "https://api.hackerone.com/v1/"


def _config() -> HackerOneConfig:
    return HackerOneConfig(
        username="hacker",
        token="secret",
        page_size=2,
        resilience=ResilienceConfig(
            name="hackerone-test", base_url=BASE_URL, retry=RetryPolicy(total=0)
        ),
    )


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[HackerOneConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(config: HackerOneConfig) -> ResilientClient:
        client = ResilientClient(config.resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=BASE_URL,
            auth=httpx.BasicAuth(config.username, config.token),
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


def _program(handle: str, **attributes: object) -> dict[str, object]:
    return {"id": handle, "type": "program", "attributes": {"handle": handle, **attributes}}


def _scope(identifier: str, asset_type: str = "URL", *, eligible: bool = True) -> dict[str, object]:
    return {
        "id": identifier,
        "type": "structured-scope",
        "attributes": {
            "asset_identifier": identifier,
            "asset_type": asset_type,
            "eligible_for_submission": eligible,
        },
    }


class FakeHackerOne:
    """Routes hacker API requests to canned, paginated payloads."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.programs_next = f"{BASE_URL}hackers/programs?page%5Bnumber%5D=2&page%5Bsize%5D=2"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/v1/hackers/programs":
            if request.url.params.get("page[number]") == "2":
                return httpx.Response(
                    200,
                    json={"data": [_program("paused", submission_state="paused")], "links": {}},
                )
            return httpx.Response(
                200,
                json={
                    "data": [
                        _program("acme", submission_state="open", offers_bounties=True),
                        _program("empty", submission_state="open"),
                    ],
                    "links": {"next": self.programs_next},
                },
            )
        if path == "/v1/hackers/programs/acme/structured_scopes":
            return httpx.Response(
                200,
                json={
                    "data": [
                        _scope("*.acme.com", "WILDCARD"),
                        _scope("legacy.acme.com", eligible=False),
                    ],
                    "links": {},
                },
            )
        if path == "/v1/hackers/programs/empty/structured_scopes":
            return httpx.Response(200, json={"data": [], "links": {}})
        if path == "/v1/hackers/programs/paused/structured_scopes":
            return httpx.Response(200, json={"data": [_scope("paused.example")], "links": {}})
        return httpx.Response(404, json={"errors": [{"status": 404, "title": "Not Found"}]})


def test_fetcher_lists_programs_and_scopes() -> None:
    api = FakeHackerOne()
    fetcher = HackerOneFetcher(config=_config(), client_factory=_make_client_factory(api))

    records = fetcher(FetchOptions(concurrency=2))

    assert sorted(records, key=lambda record: record.key) == [
        ScopeRecord("https://hackerone.com/acme", "*.acme.com", "WILDCARD"),
        ScopeRecord("https://hackerone.com/empty", NO_IN_SCOPE_TABLE, ""),
        ScopeRecord("https://hackerone.com/paused", "paused.example", "URL"),
    ]
    first = api.requests[0]
    assert first.url.params["page[size]"] == "2"
    assert first.headers["Authorization"].startswith("Basic ")


def test_fetcher_applies_program_filters() -> None:
    api = FakeHackerOne()
    fetcher = HackerOneFetcher(config=_config(), client_factory=_make_client_factory(api))

    records = fetcher(FetchOptions(active_only=True, bbp_only=True))

    assert records == [ScopeRecord("https://hackerone.com/acme", "*.acme.com", "WILDCARD")]
    requested = {request.url.path for request in api.requests}
    assert "/v1/hackers/programs/empty/structured_scopes" not in requested


def test_fetcher_prints_records_in_real_time() -> None:
    lines: list[str] = []
    fetcher = HackerOneFetcher(
        config=_config(),
        client_factory=_make_client_factory(FakeHackerOne()),
        echo=lines.append,
    )

    fetcher(FetchOptions(bbp_only=True, print_real_time=True, delimiter=","))

    assert lines == ["https://hackerone.com/acme,*.acme.com,WILDCARD"]


def test_fetcher_raises_on_authentication_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401, json={"errors": [{"status": 401, "detail": "Invalid credentials"}]}
        )

    fetcher = HackerOneFetcher(config=_config(), client_factory=_make_client_factory(handler))

    with pytest.raises(httpx.HTTPStatusError):
        fetcher(FetchOptions())


def test_fetcher_raises_on_unexpected_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": [{"attributes": {}}]})

    fetcher = HackerOneFetcher(config=_config(), client_factory=_make_client_factory(handler))

    with pytest.raises(HackerOneAPIError):
        fetcher(FetchOptions())
