"""Translate HackerOne programs and structured scopes into scope records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from scopewatch.domain.model import NO_IN_SCOPE_TABLE, ScopeRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scopewatch.domain.ports.fetching import FetchOptions

    from .schema import ProgramAttributes, ProgramPayload, StructuredScopePayload

HACKERONE_PROGRAM_URL: Final[str] = "https://hackerone.com/"

# Friendly category names accepted in the settings file.
CATEGORY_ASSET_TYPES: Final[dict[str, frozenset[str]]] = {
    "url": frozenset({"URL"}),
    "wildcard": frozenset({"WILDCARD"}),
    "cidr": frozenset({"CIDR", "IP_ADDRESS"}),
    "mobile": frozenset(
        {"GOOGLE_PLAY_APP_ID", "OTHER_APK", "APPLE_STORE_APP_ID", "TESTFLIGHT", "OTHER_IPA"}
    ),
    "android": frozenset({"GOOGLE_PLAY_APP_ID", "OTHER_APK"}),
    "apple": frozenset({"APPLE_STORE_APP_ID", "TESTFLIGHT", "OTHER_IPA"}),
    "ai": frozenset({"AI_MODEL"}),
    "other": frozenset({"OTHER"}),
    "hardware": frozenset({"HARDWARE"}),
    "code": frozenset({"SOURCE_CODE"}),
    "executable": frozenset({"DOWNLOADABLE_EXECUTABLES", "WINDOWS_APP_STORE_APP_ID"}),
}


def parse_categories(value: str) -> frozenset[str] | None:
    """Resolve a comma-separated category list to asset types; ``None`` means all."""

    names = [name.strip().lower() for name in value.split(",") if name.strip()]
    if not names or "all" in names:
        return None

    unknown = sorted(name for name in names if name not in CATEGORY_ASSET_TYPES)
    if unknown:
        raise ValueError(f"Unknown scope categories: {', '.join(unknown)}")

    asset_types: set[str] = set()
    for name in names:
        asset_types |= CATEGORY_ASSET_TYPES[name]
    return frozenset(asset_types)


def program_url(handle: str) -> str:
    return HACKERONE_PROGRAM_URL + handle


def include_program(attributes: ProgramAttributes, options: FetchOptions) -> bool:
    if options.bbp_only and not attributes.offers_bounties:
        return False
    if options.private_only and attributes.state != "soft_launched":
        return False
    if options.public_only and attributes.state != "public_mode":
        return False
    return not (options.active_only and attributes.submission_state != "open")


def scope_records(
    program: ProgramPayload,
    scopes: Iterable[StructuredScopePayload],
    *,
    options: FetchOptions,
    asset_types: frozenset[str] | None,
) -> list[ScopeRecord]:
    """Return the program's matching assets, or a single placeholder if none match."""

    url = program_url(program.handle)
    records: list[ScopeRecord] = []
    for scope in scopes:
        attributes = scope.attributes
        if not attributes.eligible_for_submission and not options.include_out_of_scope:
            continue
        if asset_types is not None and attributes.asset_type not in asset_types:
            continue
        target = attributes.asset_identifier.strip()
        if not target:
            continue
        records.append(ScopeRecord(program=url, target=target, category=attributes.asset_type))

    if not records:
        return [ScopeRecord(program=url, target=NO_IN_SCOPE_TABLE, category="")]
    return records
