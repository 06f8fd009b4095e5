"""High-level operations on the JDK registry."""

from __future__ import annotations

import re
from functools import cmp_to_key
from pathlib import Path

from . import detector
from .config import Config, JdkInfo
from .errors import InvalidPathError, JdkNotFoundError

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_LIMIT = 2**32


def _as_u32(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value < _U32_LIMIT else None


def _compare_keys(a: tuple[str, JdkInfo], b: tuple[str, JdkInfo]) -> int:
    left, right = a[0], b[0]
    left_num, right_num = _as_u32(left), _as_u32(right)
    if left_num is not None and right_num is not None:
        return (left_num > right_num) - (left_num < right_num)
    return (left > right) - (left < right)


class JdkManager:
    """Registry of JDKs backed by a configuration file."""

    def __init__(self, config: Config, directory: Path | str | None = None) -> None:
        self.config = config
        self.directory = Path(directory) if directory is not None else None

    @classmethod
    def load(cls, directory: Path | str | None = None) -> JdkManager:
        return cls(Config.load(directory), directory)

    def scan_jdks(self) -> list[JdkInfo]:
        """Detect JDKs, register those with new version keys, and save."""
        detected = detector.detect_all()
        for info in detected:
            if info.version not in self.config.jdks:
                self.config.add_jdk(info.version, info)
        self.save()
        return detected

    def list_jdks(self) -> list[tuple[str, JdkInfo]]:
        """Return registered JDKs, numeric keys in numeric order."""
        return sorted(self.config.jdks.items(), key=cmp_to_key(_compare_keys))

    def current(self) -> JdkInfo | None:
        return self.config.current()

    def current_version(self) -> str | None:
        return self.config.current_jdk

    def switch_jdk(self, version: str) -> JdkInfo:
        """Make a registered JDK the active one and save the choice."""
        info = self.config.get_jdk(version)
        if info is None:
            raise JdkNotFoundError(version)
        if not detector.is_valid_jdk(info.path):
            raise InvalidPathError(f"JDK path no longer valid: {info.path}")
        self.config.set_current(version)
        self.save()
        return info

    def save(self) -> None:
        self.config.save(self.directory)