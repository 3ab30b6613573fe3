"""Pydantic models for CLDR JSON structures, locales and bundle files."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field, model_validator

EXEMPLAR_CITY_PREFIX = "timezone.excity."


class Locale(BaseModel, frozen=True):
    """BCP-47 locale representation."""

    language: str
    script: str | None = None
    region: str | None = None
    variants: tuple[str, ...] = ()

    @classmethod
    def parse(cls, tag: str) -> Locale:
        """Parse a BCP-47 language tag (``-`` or ``_`` separated) into a Locale."""
        subtags = tag.strip().replace("_", "-").split("-")
        language = subtags[0].lower()
        script: str | None = None
        region: str | None = None
        variants_list: list[str] = []
        for subtag in subtags[1:]:
            if len(subtag) == 4 and subtag.isalpha():
                script = subtag.title()
            elif (len(subtag) == 2 and subtag.isalpha()) or (
                len(subtag) == 3 and subtag.isdigit()
            ):
                region = subtag.upper()
            elif subtag:
                variants_list.append(subtag.upper())
        return cls(
            language=language,
            script=script,
            region=region,
            variants=tuple(variants_list),
        )

    def _parts(self) -> list[str]:
        parts: list[str] = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        return parts

    @property
    def bundle_tag(self) -> str:
        """Underscore form used in bundle names and data file names."""
        return "_".join(self._parts())

    def __str__(self) -> str:
        return "-".join(self._parts())

    def __hash__(self) -> int:
        return hash((self.language, self.script, self.region, self.variants))


class Category(str, Enum):
    """Kind of display names a bundle holds."""

    CURRENCY_NAMES = "currency_names"
    LOCALE_NAMES = "locale_names"
    TIME_ZONE_NAMES = "time_zone_names"

    @property
    def prefix(self) -> str:
        """Bundle name prefix, e.g. ``CurrencyNames``."""
        return "".join(part.title() for part in self.value.split("_"))

    @classmethod
    def _missing_(cls, value: object) -> Category | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower().replace("-", "_")
        for member in cls:
            if normalized in (member.value, member.prefix.lower()):
                return member
        return None


class TimeZoneNameSet(NamedTuple):
    """The six display names of one time zone."""

    standard_long: str
    standard_short: str
    daylight_long: str
    daylight_short: str
    generic_long: str
    generic_short: str


EntryValue = str | TimeZoneNameSet


def coerce_value(
    category: Category, key: str, value: str | Sequence[str]
) -> EntryValue:
    """Check an entry value against its category and return its final shape.

    Time zone bundles hold a :class:`TimeZoneNameSet` for every zone and a
    plain string for ``timezone.excity.*`` keys; other bundles hold strings.
    """
    if category is Category.TIME_ZONE_NAMES and not key.startswith(
        EXEMPLAR_CITY_PREFIX
    ):
        if isinstance(value, str) or len(value) != len(TimeZoneNameSet._fields):
            raise ValueError(
                f"Time zone entry {key!r} must hold exactly "
                f"{len(TimeZoneNameSet._fields)} names."
            )
        if not all(isinstance(name, str) for name in value):
            raise ValueError(f"Time zone entry {key!r} must hold only strings.")
        return TimeZoneNameSet(*value)
    if not isinstance(value, str):
        raise ValueError(f"Entry {key!r} of {category.value} must be a string.")
    return value


class BundleFile(BaseModel):
    """On-disk form of a bundle: ``data/<category>/<locale>.json``."""

    locale: str
    category: Category
    cldr_release: str | None = None
    entries: list[tuple[str, str | tuple[str, ...]]]

    @model_validator(mode="after")
    def check_entries(self) -> BundleFile:
        seen: set[str] = set()
        for key, value in self.entries:
            if key in seen:
                raise ValueError(f"Duplicate key {key!r} in {self.locale} bundle.")
            seen.add(key)
            coerce_value(self.category, key, value)
        return self


class AvailableLocalesData(BaseModel):
    """Model for availableLocales.json."""

    available_locales: dict[str, list[str]] = Field(alias="availableLocales")

    @property
    def full(self) -> list[str]:
        return self.available_locales["full"]


class ParentLocalesBlock(BaseModel):
    parent_locale: dict[str, str] = Field(default_factory=dict, alias="parentLocale")


class ParentLocalesSupplemental(BaseModel):
    parent_locales: ParentLocalesBlock = Field(alias="parentLocales")


class ParentLocalesData(BaseModel):
    """Model for parentLocales.json."""

    supplemental: ParentLocalesSupplemental

    @property
    def parent_locales(self) -> dict[str, str]:
        return self.supplemental.parent_locales.parent_locale


class MetaZoneUsage(BaseModel):
    mzone: str = Field(alias="_mzone")
    valid_from: str | None = Field(default=None, alias="_from")
    valid_to: str | None = Field(default=None, alias="_to")


class MetaZonePeriod(BaseModel):
    uses_metazone: MetaZoneUsage = Field(alias="usesMetazone")


class MetaZoneInfo(BaseModel):
    timezone: dict[str, object]


class MetaZonesBlock(BaseModel):
    metazone_info: MetaZoneInfo = Field(alias="metazoneInfo")


class MetaZonesSupplemental(BaseModel):
    meta_zones: MetaZonesBlock = Field(alias="metaZones")


class MetaZonesData(BaseModel):
    """Model for metaZones.json."""

    supplemental: MetaZonesSupplemental


class LocaleDisplayNames(BaseModel):
    """Locale display names block, shared by all localenames files."""

    languages: dict[str, str] = Field(default_factory=dict)
    territories: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)
    variants: dict[str, str] = Field(default_factory=dict)
    keys: dict[str, str] = Field(default_factory=dict)
    types: dict[str, dict[str, str]] = Field(default_factory=dict)


class LocaleNamesEntry(BaseModel):
    """Entry for a single locale in a localenames file."""

    locale_display_names: LocaleDisplayNames = Field(alias="localeDisplayNames")


class LocaleNamesJsonMain(BaseModel):
    """Main block in languages.json, territories.json and friends."""

    main: dict[str, LocaleNamesEntry]


class CurrencyInfo(BaseModel):
    display_name: str | None = Field(default=None, alias="displayName")
    symbol: str | None = None


class CurrencyNumbers(BaseModel):
    currencies: dict[str, CurrencyInfo]


class CurrencyEntry(BaseModel):
    numbers: CurrencyNumbers


class CurrenciesJsonMain(BaseModel):
    """Main block in currencies.json."""

    main: dict[str, CurrencyEntry]


class ZoneNameForms(BaseModel):
    generic: str | None = None
    standard: str | None = None
    daylight: str | None = None


class ZoneNames(BaseModel):
    """Names of one zone or metazone in timeZoneNames.json."""

    long: ZoneNameForms | None = None
    short: ZoneNameForms | None = None
    exemplar_city: str | None = Field(default=None, alias="exemplarCity")

    def name_set(self, fallback: ZoneNames | None = None) -> TimeZoneNameSet:
        """Six names of this zone, taking missing ones from ``fallback``."""
        names: list[str] = []
        for form in ("standard", "daylight", "generic"):
            for width in ("long", "short"):
                value = _zone_form(self, width, form)
                if value is None and fallback is not None:
                    value = _zone_form(fallback, width, form)
                names.append(value or "")
        return TimeZoneNameSet(*names)

    @property
    def has_names(self) -> bool:
        return self.long is not None or self.short is not None


def _zone_form(names: ZoneNames, width: str, form: str) -> str | None:
    forms: ZoneNameForms | None = getattr(names, width)
    if forms is None:
        return None
    return getattr(forms, form)


class TimeZoneNamesBlock(BaseModel):
    zone: dict[str, object] = Field(default_factory=dict)
    metazone: dict[str, ZoneNames] = Field(default_factory=dict)


class TimeZoneDates(BaseModel):
    time_zone_names: TimeZoneNamesBlock = Field(alias="timeZoneNames")


class TimeZoneEntry(BaseModel):
    dates: TimeZoneDates


class TimeZoneNamesJsonMain(BaseModel):
    """Main block in timeZoneNames.json."""

    main: dict[str, TimeZoneEntry]
