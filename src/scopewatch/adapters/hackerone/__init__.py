"""Public interface for the HackerOne adapter."""

from __future__ import annotations

from .client import HackerOneAPIError, HackerOneFetcher
from .translator import CATEGORY_ASSET_TYPES, include_program, parse_categories, scope_records

__all__ = [
    "CATEGORY_ASSET_TYPES",
    "HackerOneAPIError",
    "HackerOneFetcher",
    "include_program",
    "parse_categories",
    "scope_records",
]
