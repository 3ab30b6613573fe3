from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest

from cldr_names import clear_cache

NEW_ZEALAND = {
    "long": {
        "generic": "New Zealand Time",
        "standard": "New Zealand Standard Time",
        "daylight": "New Zealand Daylight Time",
    },
    "short": {"generic": "NZT", "standard": "NZST", "daylight": "NZDT"},
}


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


def currencies(locale: str, table: dict[str, dict[str, str]]) -> dict:
    return {"main": {locale: {"numbers": {"currencies": table}}}}


def display_names(locale: str, block: dict) -> dict:
    return {"main": {locale: {"localeDisplayNames": block}}}


def zone_names(locale: str, zone: dict, metazone: dict) -> dict:
    return {
        "main": {
            locale: {
                "dates": {"timeZoneNames": {"zone": zone, "metazone": metazone}}
            }
        }
    }


@pytest.fixture(autouse=True)
def _fresh_bundle_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def cldr_tree(tmp_path: Path) -> Path:
    """A tiny extracted CLDR JSON release."""
    root = tmp_path / "cldr"
    core = root / "cldr-core"
    write_json(
        core / "availableLocales.json",
        {"availableLocales": {"modern": [], "full": ["de", "de-CH", "en-001", "en-NZ"]}},
    )
    write_json(
        core / "supplemental" / "parentLocales.json",
        {"supplemental": {"parentLocales": {"parentLocale": {"en-NZ": "en-001"}}}},
    )
    write_json(
        core / "supplemental" / "metaZones.json",
        {
            "supplemental": {
                "metaZones": {
                    "metazoneInfo": {
                        "timezone": {
                            "Europe": {
                                "Paris": [{"usesMetazone": {"_mzone": "Europe_Central"}}],
                                "Berlin": [
                                    {"usesMetazone": {"_to": "1970-01-01 00:00", "_mzone": "Old_Berlin"}},
                                    {"usesMetazone": {"_from": "1970-01-01 00:00", "_mzone": "Europe_Central"}},
                                ],
                            },
                            "America": {
                                "Argentina": {
                                    "San_Juan": [{"usesMetazone": {"_mzone": "Argentina"}}]
                                }
                            },
                            "Pacific": {
                                "Auckland": [{"usesMetazone": {"_mzone": "New_Zealand"}}]
                            },
                        }
                    }
                }
            }
        },
    )

    numbers = root / "cldr-numbers-full" / "main"
    write_json(
        numbers / "de" / "currencies.json",
        currencies(
            "de",
            {
                "EUR": {"displayName": "Euro", "symbol": "€"},
                "CHF": {"displayName": "Schweizer Franken", "symbol": "CHF"},
            },
        ),
    )
    write_json(
        numbers / "de-CH" / "currencies.json",
        currencies(
            "de-CH",
            {
                "EUR": {"displayName": "Euro", "symbol": "€"},
                "CHF": {"displayName": "Schweizer Franken", "symbol": "Fr."},
            },
        ),
    )

    names = root / "cldr-localenames-full" / "main" / "de"
    write_json(
        names / "languages.json",
        display_names(
            "de",
            {
                "languages": {
                    "de": "Deutsch",
                    "en": "Englisch",
                    "en-GB": "Englisch (Vereinigtes Königreich)",
                    "en-GB-alt-short": "Englisch (GB)",
                }
            },
        ),
    )
    write_json(
        names / "territories.json",
        display_names(
            "de",
            {"territories": {"FR": "Frankreich", "419": "Lateinamerika", "GB-alt-short": "GB"}},
        ),
    )
    write_json(
        names / "scripts.json",
        display_names("de", {"scripts": {"Latn": "Lateinisch"}}),
    )
    write_json(
        names / "variants.json",
        display_names("de", {"variants": {"POSIX": "Posix"}}),
    )
    write_json(
        names / "localeDisplayNames.json",
        display_names(
            "de",
            {
                "localeDisplayPattern": {"localePattern": "{0} ({1})"},
                "keys": {"calendar": "Kalender", "ms": "Maßsystem"},
                "types": {
                    "numbers": {"arab": "Arabisch-indische Ziffern"},
                    "calendar": {"gregorian": "Gregorianischer Kalender"},
                },
            },
        ),
    )

    dates = root / "cldr-dates-full" / "main"
    write_json(
        dates / "en-001" / "timeZoneNames.json",
        zone_names("en-001", {}, {"New_Zealand": NEW_ZEALAND}),
    )
    write_json(
        dates / "en-NZ" / "timeZoneNames.json",
        zone_names(
            "en-NZ",
            {
                "Pacific": {"Auckland": {"exemplarCity": "Auckland"}},
                "Etc": {
                    "UTC": {
                        "long": {"standard": "Coordinated Universal Time"},
                        "short": {"standard": "UTC"},
                    }
                },
            },
            {"New_Zealand": NEW_ZEALAND},
        ),
    )
    return root


def pack_tree(tree: Path, archive_path: Path) -> Path:
    with zipfile.ZipFile(archive_path, "w") as archive:
        for path in sorted(tree.rglob("*.json")):
            archive.write(path, path.relative_to(tree).as_posix())
    return archive_path


@pytest.fixture
def cldr_zip(cldr_tree: Path, tmp_path: Path) -> Path:
    """The tiny CLDR tree packed like the release archive."""
    return pack_tree(cldr_tree, tmp_path / "cldr-test-json-full.zip")


@pytest.fixture
def pack_cldr(tmp_path: Path):
    """Pack a (possibly modified) CLDR tree into a fresh archive."""

    def pack(tree: Path) -> Path:
        return pack_tree(tree, tmp_path / "cldr-custom-json-full.zip")

    return pack
