from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from cldr_names import (
    BundleNotFound,
    Category,
    KeyNotFound,
    TimeZoneNameSet,
    available_locales,
    get_bundle,
    get_bundle_by_name,
    get_contents,
    lookup,
)
from cldr_names.registry import DATA_DIR, DATA_DIR_ENV, bundle_path


def all_bundle_files() -> list[Path]:
    return sorted(DATA_DIR.glob("*/*.json"))


def test_currency_display_name():
    assert lookup("lag", Category.CURRENCY_NAMES, "eur") == "Yáuro"
    assert get_bundle_by_name("CurrencyNames_lag").lookup("eur") == "Yáuro"


def test_region_display_name():
    assert get_bundle_by_name("LocaleNames_xog").lookup("FR") == "Bufalansa"


def test_time_zone_names():
    paris = get_bundle_by_name("TimeZoneNames_wae").lookup("Europe/Paris")
    assert paris == (
        "Mitteleuropäiši Standardzit",
        "MEZ",
        "Mitteleuropäiši Summerzit",
        "MESZ",
        "Mitteleuropäiši Zit",
        "MEZ",
    )
    assert paris.daylight_short == "MESZ"


def test_untranslated_time_zone_is_six_empty_names():
    utc = get_bundle_by_name("TimeZoneNames_en_NZ").lookup("UTC")
    assert utc == ("", "", "", "", "", "")
    assert isinstance(utc, TimeZoneNameSet)


def test_missing_key_raises():
    with pytest.raises(KeyNotFound) as excinfo:
        get_bundle_by_name("CurrencyNames_lag").lookup("xyz")
    assert excinfo.value.key == "xyz"
    assert excinfo.value.bundle == "CurrencyNames_lag"


def test_exemplar_city_is_plain_string():
    assert lookup("wae", "time_zone_names", "timezone.excity.Europe/Vienna") == "Wien"


def test_historical_ranges_stay_in_display_string():
    assert lookup("gsw", "CurrencyNames", "afa") == "Afghani (1927–2002)"
    assert lookup("lag", "currency_names", "zmk") == "Kwáacha ya Zámbia (1968–2012)"


def test_currency_symbols_use_upper_case_codes():
    bundle = get_bundle("gsw", Category.CURRENCY_NAMES)
    assert bundle["ATS"] == "öS"
    assert bundle["ats"] == "Öschtriichische Schilling"


def test_locale_separator_does_not_matter():
    assert get_bundle("en-NZ", "time_zone_names") is get_bundle(
        "en_NZ", Category.TIME_ZONE_NAMES
    )
    assert get_bundle("zh-Hant-HK", "locale_names").locale == "zh_Hant_HK"


def test_bundles_are_loaded_once():
    first = get_bundle("lag", Category.LOCALE_NAMES)
    assert get_bundle("lag", Category.LOCALE_NAMES) is first
    assert get_contents("lag", Category.LOCALE_NAMES) is first.get_contents()


def test_unknown_locale_raises_bundle_not_found():
    with pytest.raises(BundleNotFound) as excinfo:
        get_bundle("xx", Category.CURRENCY_NAMES)
    assert excinfo.value.locale == "xx"
    assert excinfo.value.category is Category.CURRENCY_NAMES


def test_unknown_category_raises_value_error():
    with pytest.raises(ValueError):
        get_bundle("lag", "calendar_names")


@pytest.mark.parametrize("locale", ["../../etc/passwd", "..\\lag", "..", "lag/../gsw"])
def test_locale_with_path_separators_is_rejected(locale: str):
    with pytest.raises(ValueError, match="Invalid locale tag"):
        get_bundle(locale, Category.CURRENCY_NAMES)


def test_available_locales():
    assert available_locales(Category.CURRENCY_NAMES) == ["gsw", "lag", "mzn", "ps"]
    assert "en_NZ" in available_locales("TimeZoneNames")
    assert "xog" in available_locales(Category.LOCALE_NAMES)


@pytest.mark.parametrize("path", all_bundle_files(), ids=lambda p: f"{p.parent.name}/{p.stem}")
def test_packaged_bundle_invariants(path: Path):
    raw = json.loads(path.read_text(encoding="utf-8"))
    keys = [key for key, _ in raw["entries"]]
    assert len(keys) == len(set(keys))
    assert raw["category"] == path.parent.name

    bundle = get_bundle(path.stem, path.parent.name)
    assert len(bundle) == len(keys)
    for key, value in bundle.get_contents():
        assert bundle.lookup(key) == value
    if bundle.category is Category.TIME_ZONE_NAMES:
        assert all(len(names) == 6 for names in bundle.zone_names().values())


def test_data_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    target = tmp_path / "currency_names" / "tt.json"
    target.parent.mkdir()
    target.write_text(
        json.dumps(
            {
                "locale": "tt",
                "category": "currency_names",
                "cldr_release": "48.0.0",
                "entries": [["rub", "Россия сумы"]],
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))

    assert bundle_path("tt", Category.CURRENCY_NAMES) == target
    assert available_locales(Category.CURRENCY_NAMES) == ["tt"]
    assert lookup("tt", Category.CURRENCY_NAMES, "rub") == "Россия сумы"


def test_bundle_file_with_duplicate_key_is_rejected(tmp_path: Path):
    target = tmp_path / "locale_names" / "dup.json"
    target.parent.mkdir()
    target.write_text(
        json.dumps(
            {
                "locale": "dup",
                "category": "locale_names",
                "entries": [["FR", "France"], ["FR", "Frankreich"]],
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(ValidationError, match="Duplicate key"):
        get_bundle("dup", Category.LOCALE_NAMES, root=tmp_path)


def test_time_zone_file_with_short_name_set_is_rejected(tmp_path: Path):
    target = tmp_path / "time_zone_names" / "bad.json"
    target.parent.mkdir()
    target.write_text(
        json.dumps(
            {
                "locale": "bad",
                "category": "time_zone_names",
                "entries": [["Europe/Paris", ["CET", "CET"]]],
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(ValidationError, match="exactly 6"):
        get_bundle("bad", Category.TIME_ZONE_NAMES, root=tmp_path)
