"""Streaming download of JDK archives with progress reporting."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import requests

from .config import config_dir
from .errors import DownloadError, NetworkError

DEFAULT_TIMEOUT = 600
CHUNK_SIZE = 64 * 1024
_MB = 1024 * 1024

ProgressCallback = Callable[[int, int], None]


def simple_progress(current: int, total: int) -> None:
    """Print a one-line progress indicator, ending the line when complete."""
    percentage = int(current / total * 100) if total else 0
    sys.stdout.write(
        f"\r  Progress: {percentage:3}% ({current // _MB:4}/{total // _MB:4} MB)"
    )
    sys.stdout.flush()
    if current >= total:
        sys.stdout.write("\n")
        sys.stdout.flush()


class Downloader:
    """Fetches files into a download directory."""

    def __init__(self, download_dir: Path | str | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.download_dir = Path(download_dir) if download_dir is not None else config_dir() / "downloads"
        self.download_dir.mkdir(parents=True, exist_ok=True)
        self.timeout = timeout
        self.session = requests.Session()

    def download_file(
        self, url: str, filename: str, on_progress: ProgressCallback | None = None
    ) -> Path:
        """Download a URL to a file, reusing it if it is already present."""
        target = self.download_dir / filename
        if target.exists():
            print(f"File already exists: {target}")
            print("Using existing file...")
            return target

        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(exc) from exc

        with response:
            length = response.headers.get("Content-Length")
            if length is None:
                raise DownloadError("Unknown file size")
            try:
                total = int(length)
            except ValueError as exc:
                raise DownloadError(f"Invalid file size: {length}") from exc

            downloaded = 0
            try:
                with target.open("wb") as out:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        out.write(chunk)
                        downloaded += len(chunk)
                        if on_progress is not None:
                            on_progress(downloaded, total)
            except requests.RequestException as exc:
                target.unlink(missing_ok=True)
                raise NetworkError(exc) from exc
            except BaseException:
                target.unlink(missing_ok=True)
                raise
        return target