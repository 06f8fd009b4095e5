"""Persistent registry of known JDKs and the active selection."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILE = "config.json"
HOME_VARIABLE = "JSWITCH_HOME"


def config_dir() -> Path:
    """Return the directory holding configuration and installed JDKs.

    This is the directory of the running program, unless JSWITCH_HOME
    names another one.
    """
    override = os.environ.get(HOME_VARIABLE)
    if override:
        return Path(override)
    program = sys.argv[0] if sys.argv else ""
    if not program:
        raise ConfigError("Cannot get executable path: no program path available")
    try:
        return Path(program).resolve().parent
    except OSError as exc:
        raise ConfigError(f"Cannot get executable directory: {exc}") from exc


def config_path(directory: Path | str | None = None) -> Path:
    """Return the path of the configuration file."""
    base = Path(directory) if directory is not None else config_dir()
    return base / CONFIG_FILE


@dataclass
class JdkInfo:
    """A single JDK installation."""

    path: Path
    version: str
    vendor: str | None = None
    java_version: str | None = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "version": self.version,
            "vendor": self.vendor,
            "java_version": self.java_version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JdkInfo:
        return cls(
            path=Path(data["path"]),
            version=str(data["version"]),
            vendor=data.get("vendor"),
            java_version=data.get("java_version"),
        )


@dataclass
class Config:
    """Registered JDKs keyed by major version, and the current choice."""

    download_dir: Path
    current_jdk: str | None = None
    jdks: dict[str, JdkInfo] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.download_dir = Path(self.download_dir)

    @classmethod
    def default(cls, directory: Path | str | None = None) -> Config:
        if directory is not None:
            base = Path(directory)
        else:
            try:
                base = config_dir()
            except ConfigError:
                base = Path(".")
        return cls(download_dir=base / "downloads")

    @classmethod
    def load(cls, directory: Path | str | None = None) -> Config:
        """Read the configuration file, or return defaults if it is absent."""
        path = config_path(directory)
        if not path.exists():
            return cls.default(directory)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read config: {exc}") from exc
        try:
            return cls.from_dict(json.loads(content))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise ConfigError(f"Failed to parse config: {exc}") from exc

    def save(self, directory: Path | str | None = None) -> None:
        """Write the configuration file, creating its directory if needed."""
        base = Path(directory) if directory is not None else config_dir()
        try:
            base.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"Failed to create config dir: {exc}") from exc
        content = json.dumps(self.to_dict(), indent=2)
        try:
            config_path(base).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to write config: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_jdk": self.current_jdk,
            "jdks": {key: info.to_dict() for key, info in self.jdks.items()},
            "download_dir": str(self.download_dir),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        return cls(
            current_jdk=data.get("current_jdk"),
            jdks={key: JdkInfo.from_dict(value) for key, value in data["jdks"].items()},
            download_dir=Path(data["download_dir"]),
        )

    def add_jdk(self, key: str, info: JdkInfo) -> None:
        self.jdks[key] = info

    def get_jdk(self, key: str) -> JdkInfo | None:
        return self.jdks.get(key)

    def set_current(self, key: str) -> None:
        self.current_jdk = key

    def current(self) -> JdkInfo | None:
        """Return the active JDK, if one is selected and registered."""
        if self.current_jdk is None:
            return None
        return self.jdks.get(self.current_jdk)