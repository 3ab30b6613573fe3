"""CLI entrypoint for looking up and generating CLDR display-name bundles."""

from __future__ import annotations

import logging
import tempfile
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from .bundles import Bundle, KeyNotFound
from .io import (
    DownloadError,
    ExtractionError,
    download_file,
    extract_archive,
    fetch_latest_release,
)
from .loaders import (
    CORE_DIR,
    DATES_DIR,
    LOCALENAMES_DIR,
    NUMBERS_DIR,
    load_available_locales,
)
from .models import Category, TimeZoneNameSet
from .processing import collect_bundles
from .registry import (
    DATA_DIR,
    BundleNotFound,
    available_locales,
    clear_cache,
    get_bundle,
    get_bundle_by_name,
)
from .writers import write_bundle, write_csv

CLDR_RELEASE = "48.0.0"
CLDR_ARCHIVE_NAME = f"cldr-{CLDR_RELEASE}-json-full.zip"
CLDR_URL = (
    "https://github.com/unicode-org/cldr-json/releases/download/"
    f"{CLDR_RELEASE}/{CLDR_ARCHIVE_NAME}"
)
CLDR_PACKAGES = tuple(
    f"{package}/" for package in (CORE_DIR, NUMBERS_DIR, LOCALENAMES_DIR, DATES_DIR)
)

CACHE_DIR = Path.home() / ".cache" / "cldr-names"
CLDR_CACHE_PATH = CACHE_DIR / CLDR_ARCHIVE_NAME

app = typer.Typer(
    help="Look up and generate locale display names from CLDR data.",
    add_completion=False,
)


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


CategoryOption = Annotated[
    Category | None,
    typer.Option(
        "--category",
        "-c",
        help="Bundle category. When omitted, TARGET must be a bundle name such as CurrencyNames_lag.",
    ),
]


def fail(message: str) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def resolve_bundle(target: str, category: Category | None) -> Bundle:
    try:
        if category is None:
            return get_bundle_by_name(target)
        return get_bundle(target, category)
    except (BundleNotFound, ValueError) as e:
        raise fail(f"Error: {e}") from e


def format_value(value: str | TimeZoneNameSet) -> str:
    if isinstance(value, TimeZoneNameSet):
        return " | ".join(value)
    return value


@app.callback()
def cli(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def lookup(
    target: Annotated[str, typer.Argument(help="Bundle name or locale.")],
    key: Annotated[str, typer.Argument(help="Code or zone id to look up.")],
    category: CategoryOption = None,
) -> None:
    """Print the display name stored under KEY."""
    bundle = resolve_bundle(target, category)
    try:
        value = bundle.lookup(key)
    except KeyNotFound as e:
        raise fail(f"Error: {e}") from e
    if isinstance(value, TimeZoneNameSet):
        for field, name in zip(value._fields, value):
            typer.echo(f"{field}: {name}")
    else:
        typer.echo(value)


@app.command()
def show(
    target: Annotated[str, typer.Argument(help="Bundle name or locale.")],
    category: CategoryOption = None,
) -> None:
    """Print every entry of a bundle in table order."""
    bundle = resolve_bundle(target, category)
    for key, value in bundle.get_contents():
        typer.echo(f"{key}\t{format_value(value)}")


@app.command()
def locales(
    category: Annotated[
        Category | None,
        typer.Argument(help="Only list locales of this category."),
    ] = None,
) -> None:
    """List the locales that ship a bundle."""
    categories = [category] if category else list(Category)
    for item in categories:
        tags = available_locales(item)
        typer.secho(f"{item.value} ({len(tags)})", bold=True)
        for tag in tags:
            typer.echo(f"  {tag}")


@app.command()
def export(
    target: Annotated[str, typer.Argument(help="Bundle name or locale.")],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Destination file.",
            writable=True,
            resolve_path=True,
        ),
    ],
    category: CategoryOption = None,
    export_format: Annotated[
        ExportFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = ExportFormat.JSON,
) -> None:
    """Export one bundle as JSON or CSV."""
    bundle = resolve_bundle(target, category)
    if export_format is ExportFormat.CSV:
        write_csv(output, bundle)
    else:
        write_bundle(output, bundle)
    typer.echo(f"Wrote {len(bundle)} entries of {bundle.name} to {output}")


@app.command()
def generate(
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Destination directory for <category>/<locale>.json bundle files.",
            writable=True,
            resolve_path=True,
            file_okay=False,
            dir_okay=True,
        ),
    ] = DATA_DIR,
    cldr_zip: Annotated[
        Path | None,
        typer.Option(
            "--cldr-zip",
            help="Path to an existing CLDR archive. If missing, the archive is downloaded to the cache directory.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    locale: Annotated[
        list[str] | None,
        typer.Option(
            "--locale",
            "-l",
            help="Locale to generate (repeatable). Defaults to every CLDR locale.",
        ),
    ] = None,
    category: Annotated[
        list[Category] | None,
        typer.Option("--category", "-c", help="Category to generate (repeatable)."),
    ] = None,
    minimize: Annotated[
        bool,
        typer.Option(
            "--minimize/--no-minimize",
            help="Drop entries a locale inherits unchanged from its parent.",
        ),
    ] = True,
) -> None:
    """Regenerate bundle files from the CLDR JSON release."""
    categories = list(category) if category else list(Category)
    written = 0
    with tempfile.TemporaryDirectory() as tmp_dir:
        tmp_path = Path(tmp_dir)

        if cldr_zip:
            archive_path = cldr_zip
            typer.echo(f"Using existing CLDR archive: {archive_path}")
        elif CLDR_CACHE_PATH.is_file():
            archive_path = CLDR_CACHE_PATH
            typer.echo(f"Using cached CLDR archive: {archive_path}")
        else:
            archive_path = CLDR_CACHE_PATH
            typer.echo(f"Downloading {CLDR_URL}...")
            try:
                download_file(CLDR_URL, archive_path)
            except DownloadError as e:
                raise fail(str(e)) from e

        typer.echo(f"Extracting {archive_path.name}...")
        extract_dir = tmp_path / "cldr"
        try:
            extract_archive(archive_path, extract_dir, prefixes=CLDR_PACKAGES)
        except ExtractionError as e:
            raise fail(str(e)) from e

        try:
            cldr_locales = load_available_locales(extract_dir)
        except ValueError as e:
            raise fail(f"Error: {e}") from e
        wanted = list(locale) if locale else cldr_locales

        for item in categories:
            typer.echo(f"Collecting {item.value} for {len(wanted)} locales...")
            try:
                bundles = collect_bundles(
                    extract_dir, item, wanted, cldr_locales, minimize=minimize
                )
            except ValueError as e:
                raise fail(f"Error: {e}") from e
            typer.echo(f"Writing {len(bundles)} {item.value} bundles to {output_dir}...")
            for bundle in bundles:
                write_bundle(
                    output_dir / item.value / f"{bundle.locale}.json",
                    bundle,
                    CLDR_RELEASE,
                )
            written += len(bundles)

    clear_cache()
    typer.secho(
        f"\nSuccessfully wrote {written} bundles to {output_dir}",
        fg=typer.colors.GREEN,
        bold=True,
    )


@app.command("check-release")
def check_release() -> None:
    """Compare the CLDR release used for generation with the latest one."""
    try:
        latest_release = fetch_latest_release()
    except DownloadError as e:
        raise fail(f"Error: {e}") from e

    typer.echo(f"Current CLDR release: {CLDR_RELEASE}")
    typer.echo(f"Latest CLDR release:  {latest_release}")
    if latest_release != CLDR_RELEASE:
        typer.echo("A new CLDR release is available. Bump CLDR_RELEASE and run generate.")
    else:
        typer.echo("CLDR is already up to date.")
