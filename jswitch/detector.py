"""Discovery of JDK installations on the local machine."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterator
from pathlib import Path

from .config import JdkInfo

MAX_SCAN_DEPTH = 5

_VENDORS = (
    (("OpenJDK",), "OpenJDK"),
    (("Oracle",), "Oracle"),
    (("Temurin", "Eclipse"), "Eclipse Temurin"),
    (("Zulu",), "Azul Zulu"),
    (("Microsoft",), "Microsoft"),
)


def detect_all() -> list[JdkInfo]:
    """Find every JDK in the usual places and in JAVA_HOME, one per path."""
    found: list[JdkInfo] = []
    for directory in search_paths():
        found.extend(scan_directory(directory))

    java_home = os.environ.get("JAVA_HOME")
    if java_home is not None:
        home = Path(java_home)
        if is_valid_jdk(home):
            info = get_jdk_info(home)
            if info is not None:
                found.append(info)

    found.sort(key=lambda info: info.path)
    unique: list[JdkInfo] = []
    for info in found:
        if not unique or unique[-1].path != info.path:
            unique.append(info)
    return unique


def search_paths() -> list[Path]:
    """Return the directories where JDKs are commonly installed."""
    if sys.platform.startswith("win"):
        return [Path(f"{drive}:\\") for drive in "CDEFG"]
    if sys.platform == "darwin":
        return [
            Path("/Library/Java/JavaVirtualMachines"),
            Path("/System/Library/Java/JavaVirtualMachines"),
        ]
    if sys.platform.startswith("linux"):
        return [Path("/usr/lib/jvm"), Path("/usr/java"), Path("/opt/java")]
    return []


def _walk(path: Path, depth: int, max_depth: int) -> Iterator[Path]:
    if depth >= max_depth:
        return
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        child = Path(entry.path)
        yield child
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if is_dir:
            yield from _walk(child, depth + 1, max_depth)


def scan_directory(path: Path | str) -> list[JdkInfo]:
    """Return the JDKs found under a directory, up to five levels deep."""
    root = Path(path)
    if not root.exists():
        return []
    candidates = [root, *_walk(root, 0, MAX_SCAN_DEPTH)]
    jdks = []
    for candidate in candidates:
        if is_valid_jdk(candidate):
            info = get_jdk_info(candidate)
            if info is not None:
                jdks.append(info)
    return jdks


def is_valid_jdk(path: Path | str) -> bool:
    """Tell whether a directory holds a java executable and a lib directory."""
    home = Path(path)
    if not home.is_dir():
        return False
    if not java_executable(home).exists():
        return False
    return (home / "lib").exists()


def java_executable(jdk_path: Path | str) -> Path:
    """Return the path of the java launcher inside a JDK."""
    name = "java.exe" if sys.platform.startswith("win") else "java"
    return Path(jdk_path) / "bin" / name


def get_jdk_info(path: Path | str) -> JdkInfo | None:
    """Run ``java -version`` in a JDK and describe it, or return None."""
    home = Path(path)
    java = java_executable(home)
    if not java.exists():
        return None
    try:
        result = subprocess.run([str(java), "-version"], capture_output=True, check=False)
    except OSError:
        return None
    stderr = result.stderr
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    version, vendor, java_version = parse_version_output(stderr or "")
    return JdkInfo(path=home, version=version, vendor=vendor, java_version=java_version)


def parse_version_output(output: str) -> tuple[str, str | None, str | None]:
    """Return the major version, vendor and full version from ``java -version`` output."""
    version = "unknown"
    vendor: str | None = None
    java_version: str | None = None

    for line in output.splitlines():
        if "version" in line:
            start = line.find('"')
            if start != -1:
                end = line.find('"', start + 1)
                if end != -1:
                    full = line[start + 1 : end]
                    java_version = full
                    parts = full.split(".")
                    if full.startswith("1."):
                        version = parts[1]
                    else:
                        version = parts[0]

        for markers, name in _VENDORS:
            if any(marker in line for marker in markers):
                vendor = name
                break

    return version, vendor, java_version