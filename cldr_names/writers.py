"""Serialize bundles to the packaged JSON layout and to CSV."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from .bundles import Bundle
from .models import Category, TimeZoneNameSet


def _dump(value: object) -> str:
    return json.dumps(value, ensure_ascii=False)


def render_bundle(bundle: Bundle, cldr_release: str | None = None) -> str:
    """Render a bundle file, one entry per line."""
    lines = [
        "{",
        f'  "locale": {_dump(bundle.locale)},',
        f'  "category": {_dump(bundle.category.value)},',
    ]
    if cldr_release:
        lines.append(f'  "cldr_release": {_dump(cldr_release)},')
    entries = [
        f"    [{_dump(key)}, {_dump(list(value) if isinstance(value, tuple) else value)}]"
        for key, value in bundle.get_contents()
    ]
    if entries:
        lines.append('  "entries": [')
        lines.append(",\n".join(entries))
        lines.append("  ]")
    else:
        lines.append('  "entries": []')
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_bundle(
    output_path: Path, bundle: Bundle, cldr_release: str | None = None
) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _ = output_path.write_text(render_bundle(bundle, cldr_release), encoding="utf-8")


def write_csv(output_path: Path, bundle: Bundle) -> None:
    """Write ``key,value`` rows; time zone names take six value columns."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        if bundle.category is Category.TIME_ZONE_NAMES:
            writer.writerow(["key", *TimeZoneNameSet._fields])
        else:
            writer.writerow(["key", "value"])
        for key, value in bundle.get_contents():
            if isinstance(value, TimeZoneNameSet):
                writer.writerow([key, *value])
            else:
                writer.writerow([key, value])
