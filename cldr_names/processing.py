"""Build display-name bundles from CLDR data."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from .bundles import Bundle, Entry
from .loaders import (
    DATES_DIR,
    LOCALENAMES_DIR,
    NUMBERS_DIR,
    load_currencies,
    load_locale_display_names,
    load_meta_zones,
    load_parent_locales,
    load_time_zone_names,
)
from .models import (
    EXEMPLAR_CITY_PREFIX,
    Category,
    CurrencyInfo,
    EntryValue,
    Locale,
    LocaleDisplayNames,
    ZoneNames,
)

logger = logging.getLogger(__name__)

ALT_MARKER = "-alt-"
UTC_ZONES = {"Etc/UTC": "UTC"}

# CLDR JSON spells out some extension keys; bundles use the BCP-47 key.
CLDR_KEY_TO_BCP47 = {
    "calendar": "ca",
    "colAlternate": "ka",
    "colBackwards": "kb",
    "colCaseFirst": "kf",
    "colCaseLevel": "kc",
    "colHiraganaQuaternary": "kh",
    "colNormalization": "kk",
    "colNumeric": "kn",
    "colReorder": "kr",
    "colStrength": "ks",
    "collation": "co",
    "currency": "cu",
    "numbers": "nu",
    "timezone": "tz",
    "variableTop": "vt",
}


def fallback_chain(locale: str) -> list[str]:
    """Generate the truncation fallback chain for a locale."""
    canonical_tag = str(Locale.parse(locale))
    parts = canonical_tag.split("-")
    chain = ["-".join(parts[:i]) for i in range(len(parts), 0, -1)]
    chain.append("root")
    return chain


def parent_locale(
    locale: str,
    available: Iterable[str],
    parent_locales: Mapping[str, str] | None = None,
) -> str:
    """Locale a generated bundle inherits from.

    An explicit CLDR parent wins; otherwise the first available locale on
    the truncation chain, ending at ``root``.
    """
    canonical_tag = str(Locale.parse(locale))
    if parent_locales and canonical_tag in parent_locales:
        return parent_locales[canonical_tag]
    known = {str(Locale.parse(tag)) for tag in available}
    for candidate in fallback_chain(canonical_tag)[1:]:
        if candidate in known:
            return candidate
    return "root"


def bcp47_key(cldr_key: str) -> str:
    return CLDR_KEY_TO_BCP47.get(cldr_key, cldr_key)


def currency_entries(currencies: Mapping[str, CurrencyInfo]) -> list[Entry]:
    """Upper-case codes map to symbols, lower-case codes to display names."""
    symbols: list[Entry] = []
    names: list[Entry] = []
    for code, info in sorted(currencies.items()):
        if info.symbol:
            symbols.append((code.upper(), info.symbol))
        if info.display_name:
            names.append((code.lower(), info.display_name))
    return symbols + names


def locale_name_entries(names: LocaleDisplayNames) -> list[Entry]:
    """Flatten localenames data into bundle keys.

    Regions and scripts keep their codes, language tags use ``_``, variants
    become ``%%VARIANT`` and key/type names become ``key.<k>`` and
    ``type.<k>.<type>``.
    """
    entries: list[Entry] = []
    for code, name in sorted(names.territories.items()):
        if ALT_MARKER not in code:
            entries.append((code, name))
    for tag, name in sorted(names.languages.items()):
        if ALT_MARKER not in tag:
            entries.append((tag.replace("-", "_"), name))
    for code, name in sorted(names.scripts.items()):
        if ALT_MARKER not in code:
            entries.append((code, name))
    for code, name in sorted(names.variants.items()):
        if ALT_MARKER not in code:
            entries.append((f"%%{code.upper()}", name))
    for key, name in sorted(names.keys.items()):
        entries.append((f"key.{bcp47_key(key)}", name))
    for key, types in sorted(names.types.items()):
        for type_name, name in sorted(types.items()):
            if ALT_MARKER not in type_name:
                entries.append((f"type.{bcp47_key(key)}.{type_name}", name))
    return entries


def time_zone_entries(
    zones: Mapping[str, ZoneNames],
    metazones: Mapping[str, ZoneNames],
    meta_zone_map: Mapping[str, str],
) -> list[Entry]:
    """Zone ids map to six names; exemplar cities go under ``timezone.excity.``.

    A zone takes its metazone's names, overridden field by field by names
    given for the zone itself. Zones without any name are left out.
    """
    entries: list[Entry] = []
    cities: list[Entry] = []
    for zone_id in sorted(set(meta_zone_map) | set(zones)):
        own = zones.get(zone_id)
        meta = metazones.get(meta_zone_map.get(zone_id, ""))
        if own is not None and own.exemplar_city:
            cities.append((f"{EXEMPLAR_CITY_PREFIX}{zone_id}", own.exemplar_city))
        if own is not None and own.has_names:
            value: EntryValue = own.name_set(meta)
        elif meta is not None and meta.has_names:
            value = meta.name_set()
        else:
            continue
        entries.append((zone_id, value))
        if zone_id in UTC_ZONES:
            entries.append((UTC_ZONES[zone_id], value))
    return entries + cities


def drop_inherited(
    entries: Iterable[Entry], parent_entries: Mapping[str, EntryValue]
) -> list[Entry]:
    """Keep only entries whose value differs from the parent's."""
    return [
        (key, value) for key, value in entries if parent_entries.get(key) != value
    ]


class BundleBuilder:
    """Builds bundles for one category from an extracted CLDR tree.

    Raw entries per locale are cached so parents shared by many locales are
    read once.
    """

    def __init__(
        self,
        cldr_root: Path,
        category: Category | str,
        available: Iterable[str],
    ) -> None:
        self.cldr_root = cldr_root
        self.category = Category(category)
        self.available = sorted(available)
        self._cldr_tags = {str(Locale.parse(tag)): tag for tag in self.available}
        self.parent_locales = load_parent_locales(cldr_root)
        self._meta_zones: dict[str, str] | None = None
        self._cache: dict[str, list[Entry] | None] = {}

    @property
    def meta_zones(self) -> dict[str, str]:
        if self._meta_zones is None:
            self._meta_zones = load_meta_zones(self.cldr_root)
        return self._meta_zones

    def raw_entries(self, locale: str) -> list[Entry] | None:
        """All entries CLDR resolves for ``locale``, or None if it has no data."""
        canonical_tag = str(Locale.parse(locale))
        if canonical_tag not in self._cache:
            self._cache[canonical_tag] = self._load(
                self._cldr_tags.get(canonical_tag, canonical_tag)
            )
        return self._cache[canonical_tag]

    def _load(self, locale: str) -> list[Entry] | None:
        if self.category is Category.CURRENCY_NAMES:
            currencies = load_currencies(self.cldr_root / NUMBERS_DIR / "main", locale)
            return None if currencies is None else currency_entries(currencies)
        if self.category is Category.LOCALE_NAMES:
            names = load_locale_display_names(
                self.cldr_root / LOCALENAMES_DIR / "main", locale
            )
            return None if names is None else locale_name_entries(names)
        zone_data = load_time_zone_names(self.cldr_root / DATES_DIR / "main", locale)
        if zone_data is None:
            return None
        zones, metazones = zone_data
        return time_zone_entries(zones, metazones, self.meta_zones)

    def build(self, locale: str, *, minimize: bool = True) -> Bundle | None:
        """Build the bundle for ``locale``; None if CLDR has no data for it."""
        entries = self.raw_entries(locale)
        if entries is None:
            logger.warning(f"No {self.category.value} data in CLDR for {locale}")
            return None
        if minimize and str(Locale.parse(locale)) != "root":
            parent = parent_locale(locale, self.available, self.parent_locales)
            parent_entries = dict(self.raw_entries(parent) or [])
            kept = drop_inherited(entries, parent_entries)
            logger.debug(
                f"{locale}: dropped {len(entries) - len(kept)} entries "
                f"inherited from {parent}"
            )
            entries = kept
        return Bundle(locale, self.category, entries)


def collect_bundles(
    cldr_root: Path,
    category: Category | str,
    locales: Iterable[str],
    available: Iterable[str] | None = None,
    *,
    minimize: bool = True,
) -> list[Bundle]:
    """Build the non-empty bundles of ``category`` for each locale."""
    locales = list(locales)
    builder = BundleBuilder(
        cldr_root, category, locales if available is None else available
    )
    bundles: list[Bundle] = []
    seen: set[str] = set()
    for locale in locales:
        tag = Locale.parse(locale).bundle_tag
        if tag in seen:
            continue
        seen.add(tag)
        bundle = builder.build(locale, minimize=minimize)
        if bundle is None:
            continue
        if not bundle:
            logger.debug(f"Skipping empty bundle {bundle.name}")
            continue
        bundles.append(bundle)
    return bundles
