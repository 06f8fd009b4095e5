"""Unpacking of downloaded JDK archives."""

from __future__ import annotations

import os
import shutil
import tarfile
import zipfile
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from .detector import java_executable
from .errors import ExtractionError

ROOT_SEARCH_DEPTH = 3
_TAR_SUFFIXES = (".tar.gz", ".tgz", ".tar", ".gz")


def extract(archive_path: Path | str, target_dir: Path | str) -> Path:
    """Unpack an archive into a directory and return the JDK root inside it."""
    archive = Path(archive_path)
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)
    name = archive.name.lower()
    if not archive.suffix:
        raise ExtractionError("Unknown file type")
    if name.endswith(".zip"):
        return extract_zip(archive, target)
    if name.endswith(_TAR_SUFFIXES):
        return extract_tar_gz(archive, target)
    raise ExtractionError(f"Unsupported format: {archive.suffix.lstrip('.')}")


def _enclosed_name(name: str) -> Path | None:
    if "\0" in name:
        return None
    pure = PurePosixPath(name.replace("\\", "/"))
    if pure.is_absolute() or (pure.parts and ":" in pure.parts[0]):
        return None
    parts = [part for part in pure.parts if part not in ("", ".")]
    if ".." in parts or not parts:
        return None
    return Path(*parts)


def extract_zip(archive_path: Path | str, target_dir: Path | str) -> Path:
    """Unpack a zip archive, keeping Unix permissions where recorded."""
    target = Path(target_dir)
    try:
        archive = zipfile.ZipFile(archive_path)
    except (zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        raise ExtractionError(exc) from exc
    with archive:
        for info in archive.infolist():
            relative = _enclosed_name(info.filename)
            if relative is None:
                continue
            out_path = target / relative
            if info.is_dir():
                out_path.mkdir(parents=True, exist_ok=True)
                continue
            out_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                with archive.open(info) as source, out_path.open("wb") as sink:
                    shutil.copyfileobj(source, sink)
            except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as exc:
                raise ExtractionError(exc) from exc
            mode = (info.external_attr >> 16) & 0o7777
            if mode and os.name == "posix":
                try:
                    os.chmod(out_path, mode)
                except OSError:
                    pass
    return find_jdk_root(target)


def _check_members(archive: tarfile.TarFile) -> None:
    for member in archive.getmembers():
        if _enclosed_name(member.name) is None and member.name.strip("/.") != "":
            raise ExtractionError(f"Unsafe path in archive: {member.name}")


def extract_tar_gz(archive_path: Path | str, target_dir: Path | str) -> Path:
    """Unpack a gzip-compressed tar archive."""
    target = Path(target_dir)
    try:
        with tarfile.open(archive_path, "r:*") as archive:
            if hasattr(tarfile, "tar_filter"):
                archive.extractall(target, filter="tar")
            else:
                _check_members(archive)
                archive.extractall(target)
    except (tarfile.TarError, EOFError, OSError) as exc:
        raise ExtractionError(exc) from exc
    return find_jdk_root(target)


def _walk_dirs(path: Path, depth: int) -> Iterator[Path]:
    yield path
    if depth >= ROOT_SEARCH_DEPTH:
        return
    with os.scandir(path) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_dirs(Path(entry.path), depth + 1)
        elif entry.is_symlink() and Path(entry.path).is_dir():
            yield Path(entry.path)


def find_jdk_root(base_dir: Path | str) -> Path:
    """Return the first directory, at most three levels down, with bin/java."""
    for candidate in _walk_dirs(Path(base_dir), 0):
        if java_executable(candidate).is_file():
            return candidate
    raise ExtractionError("JDK root directory not found in archive")