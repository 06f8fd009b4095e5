"""Remote catalogues of downloadable JDK packages."""

from __future__ import annotations

import abc
import platform
import sys
from dataclasses import dataclass
from typing import Any, Iterable

import requests

from .errors import JdkError, JdkNotFoundError, NetworkError, PackageNotFoundError

ADOPTIUM_API = "https://api.adoptium.net/v3"
DEFAULT_TIMEOUT = 30


def detect_os() -> str:
    """Return the operating system name used by download catalogues."""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "mac"
    raise JdkError(f"Unsupported operating system: {sys.platform}")


def detect_arch() -> str:
    """Return the CPU architecture name used by download catalogues."""
    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    if machine in ("aarch64", "arm64"):
        return "aarch64"
    raise JdkError(f"Unsupported architecture: {machine}")


def get_file_type(os_name: str) -> str:
    """Return the archive type distributed for an operating system."""
    if os_name in ("linux", "mac"):
        return "tar.gz"
    return "zip"


@dataclass
class JdkPackage:
    """A downloadable JDK build."""

    version: str
    major_version: int
    vendor: str
    os: str
    arch: str
    download_url: str
    size: int
    file_type: str
    is_lts: bool
    checksum: str | None = None


class JdkSource(abc.ABC):
    """A catalogue of JDK packages."""

    name: str = ""

    @abc.abstractmethod
    def fetch_versions(self) -> list[JdkPackage]:
        """Return every package the catalogue offers for this machine."""

    def find_package(self, major_version: int) -> JdkPackage:
        """Return the first package with the given major version."""
        for package in self.fetch_versions():
            if package.major_version == major_version:
                return package
        raise JdkNotFoundError(str(major_version))


class AdoptiumSource(JdkSource):
    """Eclipse Adoptium release catalogue."""

    name = "Eclipse Adoptium (Temurin)"

    def __init__(
        self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise NetworkError(exc) from exc

    def fetch_version_package(
        self, version: int, os_name: str, arch: str, lts_versions: Iterable[int]
    ) -> JdkPackage:
        """Return the latest package for a major version on a platform."""
        assets = self._get_json(
            f"{ADOPTIUM_API}/assets/latest/{version}/hotspot",
            params={"os": os_name, "architecture": arch, "image_type": "jdk"},
        )
        if not isinstance(assets, list):
            raise NetworkError(f"unexpected response for version {version}")
        if not assets:
            raise PackageNotFoundError(str(version))
        asset = assets[-1]
        try:
            binary = asset["binary"]
            package = binary["package"]
            return JdkPackage(
                version=str(asset["version"]["semver"]),
                major_version=int(asset["version"]["major"]),
                vendor="temurin",
                os=str(binary["os"]),
                arch=str(binary["architecture"]),
                download_url=str(package["link"]),
                size=int(package["size"]),
                file_type=get_file_type(os_name),
                is_lts=version in set(lts_versions),
                checksum=str(package["checksum"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"malformed asset description: {exc}") from exc

    def fetch_versions(self) -> list[JdkPackage]:
        releases = self._get_json(f"{ADOPTIUM_API}/info/available_releases")
        try:
            available = [int(v) for v in releases["available_releases"]]
            lts = [int(v) for v in releases["available_lts_releases"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"malformed release list: {exc}") from exc

        os_name = detect_os()
        arch = detect_arch()
        packages = []
        for version in available:
            try:
                packages.append(self.fetch_version_package(version, os_name, arch, lts))
            except JdkError:
                continue
        return packages