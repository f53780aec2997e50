"""Ports for fetching program scope listings from an external provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scopewatch.domain.model import ScopeRecord

DEFAULT_FETCH_CONCURRENCY = 3

# Provider-neutral names accepted in ``FetchOptions.categories``.
SCOPE_CATEGORIES = frozenset(
    {
        "all",
        "url",
        "wildcard",
        "cidr",
        "mobile",
        "android",
        "apple",
        "ai",
        "other",
        "hardware",
        "code",
        "executable",
    }
)


@dataclass(frozen=True, slots=True)
class FetchOptions:
    """Filters and tuning passed through to a scope provider."""

    bbp_only: bool = False
    private_only: bool = False
    public_only: bool = False
    categories: str = "all"
    active_only: bool = False
    include_out_of_scope: bool = False
    concurrency: int = DEFAULT_FETCH_CONCURRENCY
    print_real_time: bool = False
    delimiter: str = " "

    def __post_init__(self) -> None:
        if self.private_only and self.public_only:
            raise ValueError("private_only and public_only are mutually exclusive")
        if self.concurrency < 1:
            raise ValueError("Fetch concurrency must be at least 1")
        unknown = sorted(set(self.category_names()) - SCOPE_CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown scope categories: {', '.join(unknown)}")

    def category_names(self) -> list[str]:
        """Return the normalised names in ``categories``, in order."""

        return [name.strip().lower() for name in self.categories.split(",") if name.strip()]


@runtime_checkable
class ScopeFetcher(Protocol):
    """Callable port returning every scope record visible to the account.

    Implementations raise on transport or authentication failure; a partial
    listing is never returned.
    """

    def __call__(self, options: FetchOptions) -> Sequence[ScopeRecord]: ...


__all__ = ["DEFAULT_FETCH_CONCURRENCY", "SCOPE_CATEGORIES", "FetchOptions", "ScopeFetcher"]
