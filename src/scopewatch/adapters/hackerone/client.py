"""Async client for the HackerOne hacker API."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

import httpx
from pydantic import ValidationError

from scopewatch.adapters.http_resilience import ResilientClient

from .schema import ErrorResponse, ProgramPayload, ProgramsPage, StructuredScopesPage
from .translator import include_program, parse_categories, scope_records

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from scopewatch.config.hackerone import HackerOneConfig
    from scopewatch.domain.model import ScopeRecord
    from scopewatch.domain.ports.fetching import FetchOptions

    from .schema import StructuredScopePayload

log = getLogger(__name__)

TPage = TypeVar("TPage", bound=ProgramsPage | StructuredScopesPage)

PROGRAMS_PATH = "hackers/programs"


def _scopes_path(handle: str) -> str:
    return f"hackers/programs/{handle}/structured_scopes"


def _default_client_factory(config: HackerOneConfig) -> ResilientClient:
    return ResilientClient(config.resilience, auth=httpx.BasicAuth(config.username, config.token))


def _print_record(line: str) -> None:
    print(line, flush=True)  # noqa: T201


class HackerOneAPIError(RuntimeError):
    """Raised when the HackerOne API returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class HackerOneFetcher:
    """Scope fetcher listing every program visible to a hacker account."""

    config: HackerOneConfig
    client_factory: Callable[[HackerOneConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    echo: Callable[[str], None] = field(default=_print_record)

    def __call__(self, options: FetchOptions) -> list[ScopeRecord]:
        return asyncio.run(self.fetch_async(options))

    async def fetch_async(self, options: FetchOptions) -> list[ScopeRecord]:
        asset_types = parse_categories(options.categories)
        semaphore = asyncio.Semaphore(options.concurrency)

        async with self.client_factory(self.config) as client:
            programs = [
                program
                for program in await self._list_programs(client)
                if include_program(program.attributes, options)
            ]
            log.info("Fetching structured scopes for %d programs", len(programs))

            async def records_for(program: ProgramPayload) -> list[ScopeRecord]:
                async with semaphore:
                    scopes = await self._list_scopes(client, program.handle)
                records = scope_records(
                    program, scopes, options=options, asset_types=asset_types
                )
                if options.print_real_time:
                    for record in records:
                        self.echo(
                            options.delimiter.join(
                                (record.program, record.target, record.category)
                            )
                        )
                return records

            batches = await asyncio.gather(*(records_for(program) for program in programs))

        return [record for batch in batches for record in batch]

    async def _list_programs(self, client: ResilientClient) -> list[ProgramPayload]:
        programs: list[ProgramPayload] = []
        async for page in self._paginate(client, PROGRAMS_PATH, ProgramsPage):
            programs.extend(page.data)
        log.debug("Listed %d programs", len(programs))
        return programs

    async def _list_scopes(
        self, client: ResilientClient, handle: str
    ) -> list[StructuredScopePayload]:
        scopes: list[StructuredScopePayload] = []
        async for page in self._paginate(client, _scopes_path(handle), StructuredScopesPage):
            scopes.extend(page.data)
        return scopes

    async def _paginate(
        self,
        client: ResilientClient,
        path: str,
        model: type[TPage],
    ) -> AsyncIterator[TPage]:
        url: str | None = path
        params: dict[str, int] | None = {"page[size]": self.config.page_size}
        while url is not None:
            payload = await self._get_json(client, url, params=params)
            try:
                page = model.model_validate(payload)
            except ValidationError as exc:
                raise HackerOneAPIError(f"Unexpected payload from {url}: {exc}") from exc
            yield page
            # ``links.next`` already carries the paging query string.
            url = page.links.next
            params = None

    async def _get_json(
        self,
        client: ResilientClient,
        url: str,
        *,
        params: dict[str, int] | None,
    ) -> object:
        response = await client.get(url, params=params)
        if response.is_error:
            detail = _error_detail(response)
            log.error("HackerOne API error %s for %s: %s", response.status_code, url, detail)
            response.raise_for_status()
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            raise HackerOneAPIError(
                f"Invalid JSON from {url}", status_code=response.status_code
            ) from exc


def _error_detail(response: httpx.Response) -> str:
    try:
        errors = ErrorResponse.model_validate_json(response.content).errors
    except ValidationError:
        return response.text[:200]
    return "; ".join(error.detail or error.title or "" for error in errors)

