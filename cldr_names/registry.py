"""Lookup of packaged display-name bundles by locale and category.

Bundles are loaded on first use and cached for the life of the process.
A lookup answers from one bundle only; falling back to a parent locale is
left to the caller.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from .bundles import Bundle, Entry, parse_bundle_name
from .loaders import load_bundle_file
from .models import Category, EntryValue, Locale

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
DATA_DIR_ENV = "CLDR_NAMES_DATA_DIR"


class BundleNotFound(LookupError):
    """Raised when no bundle exists for a locale and category."""

    def __init__(self, locale: str, category: Category) -> None:
        super().__init__(locale, category)
        self.locale = locale
        self.category = category

    def __str__(self) -> str:
        return f"No {self.category.value} bundle for locale {self.locale!r}."


def data_dir(override: Path | None = None) -> Path:
    """Directory holding ``<category>/<locale>.json`` bundle files."""
    if override is not None:
        return override
    env_value = os.environ.get(DATA_DIR_ENV)
    return Path(env_value) if env_value else DATA_DIR


def bundle_path(
    locale: str, category: Category | str, root: Path | None = None
) -> Path:
    tag = Locale.parse(locale).bundle_tag
    if not tag.replace("_", "").isalnum():
        raise ValueError(f"Invalid locale tag: {locale!r}")
    return data_dir(root) / Category(category).value / f"{tag}.json"


def available_locales(category: Category | str, root: Path | None = None) -> list[str]:
    """Sorted locale tags that have a bundle for ``category``."""
    category_dir = data_dir(root) / Category(category).value
    if not category_dir.is_dir():
        return []
    return sorted(path.stem for path in category_dir.glob("*.json"))


@lru_cache(maxsize=None)
def _load_bundle(path: Path) -> Bundle:
    bundle = Bundle.from_file(load_bundle_file(path))
    logger.debug(f"Cached bundle {bundle.name} from {path}")
    return bundle


def get_bundle(
    locale: str, category: Category | str, root: Path | None = None
) -> Bundle:
    """Return the bundle for ``locale`` and ``category``.

    Raises:
        BundleNotFound: If no bundle file exists.
        ValueError: If ``category`` is not a known category or ``locale``
            is not a valid tag.
    """
    category = Category(category)
    path = bundle_path(locale, category, root)
    if not path.is_file():
        raise BundleNotFound(Locale.parse(locale).bundle_tag, category)
    return _load_bundle(path.resolve())


def get_bundle_by_name(name: str, root: Path | None = None) -> Bundle:
    """Return a bundle by name, e.g. ``CurrencyNames_lag``."""
    locale, category = parse_bundle_name(name)
    return get_bundle(locale, category, root)


def get_contents(
    locale: str, category: Category | str, root: Path | None = None
) -> tuple[Entry, ...]:
    return get_bundle(locale, category, root).get_contents()


def lookup(
    locale: str, category: Category | str, key: str, root: Path | None = None
) -> EntryValue:
    """Return one display name; raises ``KeyNotFound`` when it is absent."""
    return get_bundle(locale, category, root).lookup(key)


def clear_cache() -> None:
    _load_bundle.cache_clear()
