"""Read-only display-name bundles."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .models import (
    EXEMPLAR_CITY_PREFIX,
    BundleFile,
    Category,
    EntryValue,
    Locale,
    TimeZoneNameSet,
    coerce_value,
)

Entry = tuple[str, EntryValue]


class KeyNotFound(KeyError):
    """Raised when a key has no entry in a bundle."""

    def __init__(self, key: str, bundle: str) -> None:
        super().__init__(key)
        self.key = key
        self.bundle = bundle

    def __str__(self) -> str:
        return f"Key {self.key!r} not found in {self.bundle}."


def bundle_name(locale: str, category: Category | str) -> str:
    """Name of the bundle for a locale and category, e.g. ``CurrencyNames_lag``."""
    prefix = Category(category).prefix
    tag = Locale.parse(locale).bundle_tag
    if tag == "root":
        return prefix
    return f"{prefix}_{tag}"


def parse_bundle_name(name: str) -> tuple[str, Category]:
    """Split a bundle name into its locale tag and category."""
    prefix, _, locale = name.strip().partition("_")
    category = Category(prefix)
    if not locale:
        return "root", category
    return Locale.parse(locale).bundle_tag, category


class Bundle(Mapping[str, EntryValue]):
    """Display names of one category in one locale.

    Entries are fixed at construction; the table is kept in its original
    order and never changes afterwards.
    """

    __slots__ = ("_locale", "_category", "_entries", "_table")

    def __init__(
        self,
        locale: str,
        category: Category | str,
        entries: Iterable[tuple[str, EntryValue | Iterable[str]]],
    ) -> None:
        self._locale = Locale.parse(locale).bundle_tag
        self._category = Category(category)
        checked: list[Entry] = []
        table: dict[str, EntryValue] = {}
        for key, value in entries:
            if key in table:
                raise ValueError(f"Duplicate key {key!r} in {self.name}.")
            if not isinstance(value, str):
                value = tuple(value)
            value = coerce_value(self._category, key, value)
            table[key] = value
            checked.append((key, value))
        self._entries: tuple[Entry, ...] = tuple(checked)
        self._table = MappingProxyType(table)

    @classmethod
    def from_file(cls, bundle_file: BundleFile) -> Bundle:
        return cls(bundle_file.locale, bundle_file.category, bundle_file.entries)

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def category(self) -> Category:
        return self._category

    @property
    def name(self) -> str:
        return bundle_name(self._locale, self._category)

    def get_contents(self) -> tuple[Entry, ...]:
        """Return the ordered table of entries."""
        return self._entries

    def lookup(self, key: str) -> EntryValue:
        """Return the value for ``key``.

        Raises:
            KeyNotFound: If the bundle has no entry for ``key``.
        """
        try:
            return self._table[key]
        except KeyError:
            raise KeyNotFound(key, self.name) from None

    def __getitem__(self, key: str) -> EntryValue:
        return self.lookup(key)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def zone_names(self) -> dict[str, TimeZoneNameSet]:
        """Zone id to its six names. Only time zone bundles have these."""
        self._require_time_zones()
        return {
            key: value
            for key, value in self._entries
            if isinstance(value, TimeZoneNameSet)
        }

    def exemplar_cities(self) -> dict[str, str]:
        """Zone id to its exemplar city name."""
        self._require_time_zones()
        return {
            key.removeprefix(EXEMPLAR_CITY_PREFIX): value
            for key, value in self._entries
            if isinstance(value, str)
        }

    def _require_time_zones(self) -> None:
        if self._category is not Category.TIME_ZONE_NAMES:
            raise TypeError(f"{self.name} is not a time zone names bundle.")

    def __repr__(self) -> str:
        return f"<Bundle {self.name} ({len(self)} entries)>"
