"""Persisting JAVA_HOME and PATH for future shells and sessions."""

from __future__ import annotations

import abc
import os
import sys
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Any

from .errors import EnvError

try:
    import winreg as _winreg
except ImportError:  # not on Windows
    _winreg = None

MANAGED_MARKER = "# jsh managed"
MANAGED_HEADER = "# jsh managed - do not edit manually"
ENVIRONMENT_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"


def shell_rc_path(home: Path | str | None = None, shell: str | None = None) -> Path:
    """Return the start-up file of the user's shell: ~/.zshrc or ~/.bashrc."""
    if home is None:
        try:
            home = Path.home()
        except RuntimeError as exc:
            raise EnvError("Cannot find home directory") from exc
    base = Path(home)
    if shell is None:
        shell = os.environ.get("SHELL", "")
    if "zsh" in shell:
        return base / ".zshrc"
    return base / ".bashrc"


def rewrite_rc_lines(lines: list[str], java_home: Path | str) -> list[str]:
    """Return the lines of a shell start-up file with the managed exports set."""
    java_home_line = f'export JAVA_HOME="{java_home}"  {MANAGED_MARKER}'
    path_line = f'export PATH="$JAVA_HOME/bin:$PATH"  {MANAGED_MARKER}'

    result: list[str] = []
    found_java_home = False
    found_path = False
    for line in lines:
        if "export JAVA_HOME=" in line and MANAGED_MARKER in line:
            result.append(java_home_line)
            found_java_home = True
        elif (
            "export PATH=" in line
            and "$JAVA_HOME/bin" in line
            and MANAGED_MARKER in line
        ):
            result.append(path_line)
            found_path = True
        else:
            result.append(line)

    if not found_java_home:
        result.extend(["", MANAGED_HEADER, java_home_line])
    if not found_path:
        result.append(path_line)
    return result


def merge_windows_path(path_value: str, java_home: PureWindowsPath | Path | str) -> str:
    """Return a Windows PATH with old JDK entries removed and the new bin first."""
    home = PureWindowsPath(java_home)
    java_bin = str(home / "bin")
    home_lower = str(home).lower()

    def is_java_entry(entry: str) -> bool:
        lower = entry.lower()
        return home_lower in lower or (
            "\\bin" in lower and ("\\jdk" in lower or "\\jre" in lower)
        )

    kept = [entry for entry in path_value.split(";") if entry and not is_java_entry(entry)]
    return ";".join([java_bin, *kept])


class EnvUpdater(abc.ABC):
    """Makes a JDK the default for new shells."""

    @abc.abstractmethod
    def update_java_home(self, path: Path | str) -> None:
        """Point JAVA_HOME at a JDK and put its bin directory on PATH."""


@dataclass
class UnixEnvUpdater(EnvUpdater):
    """Writes managed export lines into the user's shell start-up file."""

    home: Path | str | None = None
    shell: str | None = None

    def update_java_home(self, path: Path | str) -> None:
        rc_path = shell_rc_path(self.home, self.shell)
        lines = rc_path.read_text(encoding="utf-8").splitlines() if rc_path.exists() else []
        updated = rewrite_rc_lines(lines, path)
        rc_path.write_text("".join(f"{line}\n" for line in updated), encoding="utf-8")
        print(f"[OK] Updated {rc_path}")
        print(f"  Please run: source {rc_path}")


@dataclass
class WindowsEnvUpdater(EnvUpdater):
    """Sets system-wide JAVA_HOME and Path in the Windows registry."""

    registry: Any = None

    def _registry(self) -> Any:
        registry = self.registry if self.registry is not None else _winreg
        if registry is None:
            raise EnvError(
                "Failed to open registry key (need administrator permission): "
                "the registry is not available on this platform"
            )
        return registry

    def update_java_home(self, path: Path | str) -> None:
        registry = self._registry()
        try:
            key = registry.OpenKey(
                registry.HKEY_LOCAL_MACHINE,
                ENVIRONMENT_KEY,
                0,
                registry.KEY_READ | registry.KEY_WRITE,
            )
        except OSError as exc:
            raise EnvError(
                f"Failed to open registry key (need administrator permission): {exc}"
            ) from exc

        home = PureWindowsPath(path)
        with key:
            try:
                registry.SetValueEx(key, "JAVA_HOME", 0, registry.REG_SZ, str(home))
            except OSError as exc:
                raise EnvError(f"Failed to set JAVA_HOME: {exc}") from exc
            print(f"[OK] Set JAVA_HOME to: {home}")
            self._update_path(registry, key, home)
        self._broadcast_environment_change()

    @staticmethod
    def _update_path(registry: Any, key: Any, java_home: PureWindowsPath) -> None:
        try:
            current, kind = registry.QueryValueEx(key, "Path")
        except OSError:
            current, kind = "", registry.REG_SZ
        if not isinstance(current, str):
            current, kind = "", registry.REG_SZ

        new_path = merge_windows_path(current, java_home)
        try:
            registry.SetValueEx(key, "Path", 0, kind, new_path)
        except OSError as exc:
            raise EnvError(f"Failed to update PATH: {exc}") from exc
        print(f"[OK] Updated PATH to include: {java_home / 'bin'}")

    @staticmethod
    def _broadcast_environment_change() -> None:
        print(
            "Warning: Running programs were not notified of the environment change. "
            "You may need to restart your terminal.",
            file=sys.stderr,
        )


def get_env_updater() -> EnvUpdater:
    """Return the updater suited to the running platform."""
    if sys.platform.startswith("win"):
        return WindowsEnvUpdater()
    return UnixEnvUpdater()