"""Locale display names for currencies, locales and time zones, from CLDR."""

from .bundles import Bundle, KeyNotFound, bundle_name, parse_bundle_name
from .models import Category, Locale, TimeZoneNameSet
from .registry import (
    BundleNotFound,
    available_locales,
    clear_cache,
    get_bundle,
    get_bundle_by_name,
    get_contents,
    lookup,
)

__all__ = [
    "Bundle",
    "BundleNotFound",
    "Category",
    "KeyNotFound",
    "Locale",
    "TimeZoneNameSet",
    "available_locales",
    "bundle_name",
    "clear_cache",
    "get_bundle",
    "get_bundle_by_name",
    "get_contents",
    "lookup",
    "parse_bundle_name",
]
