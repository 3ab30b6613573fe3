"""File I/O helpers for downloading and extracting CLDR archives."""

from __future__ import annotations

import json
import zipfile
from collections.abc import Iterable
from pathlib import Path

import requests
from tqdm import tqdm

DEFAULT_USER_AGENT = "cldr-names-generator/1.0"
DEFAULT_TIMEOUT_SECONDS = 60
CLDR_RELEASES_API_URL = (
    "https://api.github.com/repos/unicode-org/cldr-json/releases/latest"
)


class DownloadError(Exception):
    """Raised when a file download fails."""


class ExtractionError(Exception):
    """Raised when archive extraction fails."""


def download_file(url: str, destination: Path) -> None:
    """Download a file from URL with progress bar.

    Args:
        url: URL to download from.
        destination: Local path to save the file.

    Raises:
        DownloadError: If the download fails.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + ".part")
    try:
        with requests.get(
            url,
            stream=True,
            timeout=DEFAULT_TIMEOUT_SECONDS,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        ) as response:
            response.raise_for_status()
            total_size = int(response.headers.get("content-length", 0))

            with (
                partial.open("wb") as output,
                tqdm(
                    desc=f"Downloading {destination.name}",
                    total=total_size,
                    unit="iB",
                    unit_scale=True,
                    unit_divisor=1024,
                ) as bar,
            ):
                for chunk in response.iter_content(chunk_size=8192):
                    size = output.write(chunk)
                    bar.update(size)

    except requests.RequestException as e:
        partial.unlink(missing_ok=True)
        raise DownloadError(f"Error downloading file: {e}") from e
    partial.replace(destination)


def extract_archive(
    archive_path: Path,
    destination: Path,
    prefixes: Iterable[str] | None = None,
) -> int:
    """Extract a ZIP archive with progress bar.

    Args:
        archive_path: Path to the ZIP archive.
        destination: Directory to extract to.
        prefixes: Only extract members whose path starts with one of these.

    Returns:
        The number of extracted members.

    Raises:
        ExtractionError: If extraction fails.
    """
    wanted = tuple(prefixes) if prefixes is not None else None
    try:
        with zipfile.ZipFile(archive_path) as archive:
            member_list = [
                member
                for member in archive.infolist()
                if wanted is None or member.filename.startswith(wanted)
            ]
            with tqdm(
                total=len(member_list),
                desc=f"Extracting {archive_path.name}",
                unit="file",
            ) as bar:
                for member in member_list:
                    archive.extract(member, destination)
                    bar.update(1)
    except zipfile.BadZipFile as e:
        raise ExtractionError(
            f"Failed to open zip file '{archive_path}'. It may be corrupted."
        ) from e
    except OSError as e:
        raise ExtractionError(f"Error extracting archive: {e}") from e
    return len(member_list)


def fetch_latest_release(timeout_seconds: int = 30) -> str:
    """Return the tag of the latest unicode-org/cldr-json release.

    Raises:
        DownloadError: If GitHub cannot be reached or answers without a tag.
    """
    try:
        response = requests.get(
            CLDR_RELEASES_API_URL,
            timeout=timeout_seconds,
            headers={
                "Accept": "application/vnd.github+json",
                "User-Agent": DEFAULT_USER_AGENT,
            },
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise DownloadError(
            f"Failed to fetch CLDR releases from {CLDR_RELEASES_API_URL}: {e}"
        ) from e

    tag_name = payload.get("tag_name") if isinstance(payload, dict) else None
    if not isinstance(tag_name, str) or not tag_name.strip():
        raise DownloadError(
            "GitHub releases API response did not include a valid 'tag_name'."
        )
    return tag_name.strip()


def load_json(path: Path) -> dict:
    """Load JSON file from disk."""
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)
