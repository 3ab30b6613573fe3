"""CLDR data and bundle file loaders with Pydantic validation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .io import load_json
from .models import (
    AvailableLocalesData,
    BundleFile,
    CurrenciesJsonMain,
    CurrencyInfo,
    LocaleDisplayNames,
    LocaleNamesJsonMain,
    MetaZonePeriod,
    MetaZonesData,
    ParentLocalesData,
    TimeZoneNamesBlock,
    TimeZoneNamesJsonMain,
    ZoneNames,
)

logger = logging.getLogger(__name__)

CORE_DIR = "cldr-core"
LOCALENAMES_DIR = "cldr-localenames-full"
NUMBERS_DIR = "cldr-numbers-full"
DATES_DIR = "cldr-dates-full"

LOCALE_NAME_FILES = (
    "languages.json",
    "territories.json",
    "scripts.json",
    "variants.json",
    "localeDisplayNames.json",
)
ZONE_NAME_FIELDS = frozenset({"long", "short", "exemplarCity"})


def require_file(path: Path) -> None:
    if not path.is_file():
        raise ValueError(f"Required CLDR file not found: {path}")


def load_available_locales(cldr_root: Path) -> list[str]:
    """Load and parse availableLocales.json."""
    path = cldr_root / CORE_DIR / "availableLocales.json"
    require_file(path)
    data = AvailableLocalesData.model_validate(load_json(path))
    return data.full


def load_parent_locales(cldr_root: Path) -> dict[str, str]:
    """Load explicit parent locales; empty when the file is absent."""
    path = cldr_root / CORE_DIR / "supplemental" / "parentLocales.json"
    if not path.is_file():
        return {}
    data = ParentLocalesData.model_validate(load_json(path))
    return data.parent_locales


def flatten_zones(
    tree: dict[str, object],
    is_leaf: Callable[[object], bool],
    prefix: str = "",
) -> dict[str, object]:
    """Flatten CLDR's nested ``{"America": {"Argentina": {...}}}`` zone trees."""
    flat: dict[str, object] = {}
    for name, node in tree.items():
        zone_id = f"{prefix}/{name}" if prefix else name
        if is_leaf(node):
            flat[zone_id] = node
        elif isinstance(node, dict):
            flat.update(flatten_zones(node, is_leaf, zone_id))
    return flat


def load_meta_zones(cldr_root: Path) -> dict[str, str]:
    """Map each zone id to the metazone it currently uses."""
    path = cldr_root / CORE_DIR / "supplemental" / "metaZones.json"
    require_file(path)
    data = MetaZonesData.model_validate(load_json(path))
    timezones = data.supplemental.meta_zones.metazone_info.timezone
    current: dict[str, str] = {}
    for zone_id, periods in flatten_zones(
        timezones, lambda node: isinstance(node, list)
    ).items():
        for raw in periods:
            period = MetaZonePeriod.model_validate(raw)
            if period.uses_metazone.valid_to is None:
                current[zone_id] = period.uses_metazone.mzone
    return current


def load_locale_display_names(
    localenames_root: Path, locale: str
) -> LocaleDisplayNames | None:
    """Load and merge a locale's localenames files, or None if it has none."""
    locale_dir = localenames_root / locale
    if not locale_dir.is_dir():
        return None
    merged: dict[str, dict] = {}
    for file_name in LOCALE_NAME_FILES:
        path = locale_dir / file_name
        if not path.is_file():
            continue
        data = LocaleNamesJsonMain.model_validate(load_json(path))
        names = data.main[locale].locale_display_names
        for field in LocaleDisplayNames.model_fields:
            merged.setdefault(field, {}).update(getattr(names, field))
    return LocaleDisplayNames.model_validate(merged)


def load_currencies(numbers_root: Path, locale: str) -> dict[str, CurrencyInfo] | None:
    """Load and parse a locale's currencies.json."""
    path = numbers_root / locale / "currencies.json"
    if not path.is_file():
        return None
    data = CurrenciesJsonMain.model_validate(load_json(path))
    return data.main[locale].numbers.currencies


def load_time_zone_names(
    dates_root: Path, locale: str
) -> tuple[dict[str, ZoneNames], dict[str, ZoneNames]] | None:
    """Load a locale's timeZoneNames.json as (zone names, metazone names)."""
    path = dates_root / locale / "timeZoneNames.json"
    if not path.is_file():
        return None
    data = TimeZoneNamesJsonMain.model_validate(load_json(path))
    block: TimeZoneNamesBlock = data.main[locale].dates.time_zone_names
    zones = {
        zone_id: ZoneNames.model_validate(node)
        for zone_id, node in flatten_zones(
            block.zone,
            lambda node: isinstance(node, dict) and bool(ZONE_NAME_FIELDS & node.keys()),
        ).items()
    }
    return zones, block.metazone


def load_bundle_file(path: Path) -> BundleFile:
    """Load and validate a packaged bundle file."""
    data = BundleFile.model_validate(load_json(path))
    logger.debug(f"Loaded {len(data.entries)} entries from {path}")
    return data
