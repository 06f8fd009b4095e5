"""The user-facing commands: list, current, use, search and download."""

from __future__ import annotations

import os
import re
import sys
import time
from pathlib import Path

from termcolor import colored

from .config import Config, JdkInfo, config_dir, config_path
from .downloader import Downloader, simple_progress
from .errors import ConfigError, InvalidVersionError, NoActiveJdkError
from .envupdate import get_env_updater
from .extractor import extract
from .manager import JdkManager
from .sources import AdoptiumSource, JdkPackage, JdkSource

RECENT_SECONDS = 10
_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_LIMIT = 2**32
_MB = 1024 * 1024


def _paint(text: str, color: str | None = None, bold: bool = False) -> str:
    return colored(text, color, attrs=["bold"] if bold else None)


def _grey(text: str) -> str:
    return _paint(text, "dark_grey")


def _java_home() -> Path | None:
    value = os.environ.get("JAVA_HOME")
    return Path(value) if value is not None else None


def _recently_modified(path: Path) -> bool:
    try:
        elapsed = time.time() - path.stat().st_mtime
    except OSError:
        return False
    return 0 <= elapsed < RECENT_SECONDS


def _sync_with_environment(manager: JdkManager, java_home: Path) -> None:
    system_version = next(
        (key for key, info in manager.config.jdks.items() if info.path == java_home), None
    )
    if system_version is None:
        return
    if manager.current_version() != system_version:
        manager.config.set_current(system_version)
        manager.save()


def _status_text(in_env: bool, in_config: bool, env_set: bool) -> str:
    if in_env and in_config:
        return _paint("(active)", "green")
    if in_env:
        return _paint("(active - environment only)", "yellow")
    if in_config and env_set:
        return _paint("(config mismatch)", "red")
    if in_config:
        return _paint("(config - env not set)", "yellow")
    return ""


def list_command(directory: Path | str | None = None) -> list[tuple[str, JdkInfo]]:
    """Scan for JDKs, print the registry and return its entries in order."""
    manager = JdkManager.load(directory)
    print(_paint("Scanning for JDK installations...", "cyan"))
    manager.scan_jdks()

    java_home = _java_home()
    if not _recently_modified(config_path(directory)) and java_home is not None:
        _sync_with_environment(manager, java_home)

    jdks = manager.list_jdks()
    current_version = manager.current_version()

    if not jdks:
        print(_paint("No JDK installations found.", "yellow"))
        print("\nPlease install JDK manually to common locations:")
        print("  - Windows: C:\\Program Files\\Java\\")
        print("  - macOS: /Library/Java/JavaVirtualMachines/")
        print("  - Linux: /usr/lib/jvm/")
        print("\nThe tool will automatically detect JDKs in these locations.")
        return jdks

    print("\n" + _paint("Installed JDKs:", bold=True))
    print(_grey("=" * 80))

    for key, info in jdks:
        in_config = current_version == key
        in_env = java_home is not None and java_home == info.path
        is_current = in_env or (in_config and java_home is None)
        marker = _paint("*", "green") if is_current else _grey("-")
        status = _status_text(in_env, in_config, java_home is not None)
        print(f"{marker} {_paint(f'JDK {key}', bold=True)} {status}")
        print(f"  {_grey('Version:')} {info.java_version or 'unknown'}")
        if info.vendor is not None:
            print(f"  {_grey('Vendor:')} {info.vendor}")
        print(f"  {_grey('Path:')} {info.path}")
        print()

    print(_grey("-" * 80))
    print(f"Total: {len(jdks)} JDK(s)")

    has_active_in_env = java_home is not None and any(info.path == java_home for _, info in jdks)
    has_config_mismatch = False
    if java_home is not None and current_version is not None:
        configured = next((info for key, info in jdks if key == current_version), None)
        has_config_mismatch = configured is not None and configured.path != java_home

    use_hint = _paint("jsh use <version>", "green")
    if not has_active_in_env and java_home is None and current_version is None:
        print("\n" + _paint("No JDK is currently active.", "yellow"))
        print(f"Use {use_hint} to activate a JDK.")
    elif has_config_mismatch:
        print("\n" + _paint("Warning:", "yellow", bold=True))
        print("  JAVA_HOME environment variable does not match jsh config.")
        print("  Current JDK is determined by JAVA_HOME (shown with * above).")
        print(f"  Run {use_hint} to sync config with environment.")
    elif java_home is not None and current_version is None:
        print("\n" + _paint("Tip:", "cyan", bold=True))
        print("  Your JAVA_HOME is set, but not managed by jsh.")
        print(f"  Run {use_hint} to let jsh manage it.")
    elif java_home is None and current_version is not None:
        print("\n" + _paint("Warning:", "yellow", bold=True))
        print("  JAVA_HOME is not set in your environment.")
        print(f"  Run {use_hint} again to set environment variables.")

    return jdks


def current_command(directory: Path | str | None = None) -> JdkInfo:
    """Print and return the active JDK, preferring JAVA_HOME over the config."""
    manager = JdkManager.load(directory)
    java_home = os.environ.get("JAVA_HOME")

    if java_home is not None:
        home_path = Path(java_home)
        found = next(
            ((key, info) for key, info in manager.list_jdks() if info.path == home_path), None
        )
        if found is None:
            raise ConfigError(
                f"JAVA_HOME is set to '{java_home}' but this JDK is not managed by jsh.\n"
                "Run 'jsh list' to see available JDKs."
            )
        version_key, current = found
        source = "environment variable"
    else:
        current = manager.current()
        if current is None:
            raise NoActiveJdkError()
        version_key = manager.current_version()
        source = "config file (JAVA_HOME not set)"

    print(_paint("Current JDK:", bold=True))
    print(_grey("=" * 60))
    print(f"{_grey('Version:')} {_paint(f'JDK {version_key}', 'green', bold=True)}")
    print(f"{_grey('Full Version:')} {current.java_version or 'unknown'}")
    if current.vendor is not None:
        print(f"{_grey('Vendor:')} {current.vendor}")
    print(f"{_grey('Path:')} {current.path}")
    print(f"{_grey('Source:')} {_grey(source)}")
    print(_grey("=" * 60))

    if java_home is not None:
        print(f"\n{_paint('[OK]', 'green')} JAVA_HOME is correctly set")
    else:
        print(f"\n{_paint('[!]', 'yellow')} JAVA_HOME is not set in environment")
    return current


def use_command(version: str, directory: Path | str | None = None) -> JdkInfo:
    """Activate a registered JDK and persist it in the user's environment."""
    manager = JdkManager.load(directory)
    print(_paint(f"Switching to JDK {version}...", "cyan"))
    jdk = manager.switch_jdk(version)

    print("\n" + _paint("Updated configuration:", bold=True))
    print(f"  {_grey('Version:')} JDK {_paint(version, 'green')}")
    print(f"  {_grey('Path:')} {jdk.path}")

    print("\n" + _paint("Updating environment variables...", "cyan"))
    get_env_updater().update_java_home(jdk.path)

    print(f"\n{_paint('[OK]', 'green', bold=True)} {_paint('Successfully switched to JDK', 'green')}")
    print("\n" + _paint("Note:", "yellow", bold=True))
    if sys.platform.startswith("win"):
        print("  System environment variables have been updated (need administrator permission).")
        print("  You need to restart your terminal or IDE for changes to take effect.")
        print("  If you see permission errors, please run this tool as Administrator.")
    else:
        rc_path = "~/.zshrc" if "zsh" in os.environ.get("SHELL", "") else "~/.bashrc"
        print(f"  Please run: {_paint(f'source {rc_path}', 'green')}")
    return jdk


def _parse_major(version: str) -> int:
    if not _UNSIGNED.fullmatch(version):
        raise InvalidVersionError(version)
    value = int(version)
    if value >= _U32_LIMIT:
        raise InvalidVersionError(version)
    return value


def download_command(
    version: str, vendor: str = "temurin", directory: Path | str | None = None
) -> Path:
    """Download, unpack and register a JDK; return where it was unpacked."""
    print(f"  Version: {version}")
    print(f"  Vendor: {vendor}")
    print(_paint(f"Searching for JDK {version}...", "cyan"))

    if vendor.lower() not in ("temurin", "adoptium"):
        print(_paint(f"Unknown vendor '{vendor}', using Adoptium/Temurin", "yellow"))
    source = AdoptiumSource()

    major = _parse_major(version)
    package = source.find_package(major)
    print("\n" + _paint("Found package:", "green", bold=True))
    print(f"  Version:     {package.version}")
    print(f"  Vendor:      {package.vendor}")
    print(f"  Size:        {package.size // _MB} MB")
    print(f"  Platform:    {package.os} ({package.arch})")
    print(f"  File type:   {package.file_type}")
    if package.is_lts:
        print(f"  Support:     {_paint('LTS (Long Term Support)', 'green')}")

    base = Path(directory) if directory is not None else config_dir()
    print("\n" + _paint("Downloading...", "cyan"))
    downloader = Downloader(base / "downloads")
    filename = f"jdk-{package.major_version}-{package.vendor}.{package.file_type}"
    archive = downloader.download_file(package.download_url, filename, simple_progress)
    print(_paint("[OK] Download complete", "green"))

    print("\n" + _paint("Extracting...", "cyan"))
    jdk_path = extract(archive, base / "jdks")
    print(_paint(f"[OK] Extracted to: {jdk_path}", "green"))

    print("\n" + _paint("Registering JDK...", "cyan"))
    JdkManager.load(directory).scan_jdks()

    try:
        archive.unlink()
    except OSError as exc:
        print(_paint(f"Warning: Failed to remove archive: {exc}", "yellow"))

    print(f"\n{_paint('[SUCCESS]', 'green', bold=True)} {_paint('JDK installed successfully!', 'green')}")
    print("\n" + _paint("Next steps:", bold=True))
    print(f"  1. List all JDKs:    {_paint('jsh list', 'cyan')}")
    print(f"  2. Activate this JDK: {_paint(f'jsh use {version}', 'cyan')}")
    return jdk_path


def _matches(package: JdkPackage, keyword: str) -> bool:
    lowered = keyword.lower()
    return (
        lowered in package.version.lower()
        or lowered in package.vendor.lower()
        or str(package.major_version) == keyword
    )


def search_command(
    keyword: str | None = None, source: JdkSource | None = None
) -> dict[int, list[JdkPackage]]:
    """Print downloadable JDKs grouped by major version, newest first, and return them."""
    print(_paint("Searching for available JDK versions...", "cyan"))
    if source is None:
        source = AdoptiumSource()
    packages = source.fetch_versions()
    print(_grey(f"Found {len(packages)} packages from {source.name}"))

    if keyword is not None:
        packages = [package for package in packages if _matches(package, keyword)]
        print(_grey(f"Filtered to {len(packages)} packages matching '{keyword}'"))
        if not packages:
            print("\n" + _paint("No matching JDK versions found.", "yellow"))
            print("Try searching without a keyword or with a different term.")
            return {}

    grouped: dict[int, list[JdkPackage]] = {}
    for package in packages:
        grouped.setdefault(package.major_version, []).append(package)
    ordered = {major: grouped[major] for major in sorted(grouped, reverse=True)}

    print("\n" + _paint("Available JDK versions:", bold=True))
    print(_grey("=" * 80))
    for major, group in ordered.items():
        lts_tag = _paint("(LTS)", "green", bold=True) if group[0].is_lts else ""
        print(f"\n  {_paint(f'JDK {major}', 'cyan', bold=True)}{lts_tag}")
        for package in group:
            size = f"[{package.size // _MB} MB]"
            print(
                f"    └─ {_grey(f'{package.vendor:8}')} "
                f"{_paint(package.version, 'white')} {_grey(f'{size:>4}')}"
            )

    print("\n" + _grey("-" * 80))
    print(f"Total: {len(ordered)} version(s)")
    print(f"\nUse: {_paint('jsh download <version>', 'green')} to download and install")
    return ordered