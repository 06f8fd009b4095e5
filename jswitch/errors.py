"""Exception hierarchy for JDK management."""

from __future__ import annotations


class JdkError(Exception):
    """Base class for every error raised by the package."""

    template = "{}"

    def __init__(self, detail: object = "") -> None:
        self.detail = str(detail)
        super().__init__(self.template.format(self.detail))


class JdkNotFoundError(JdkError):
    """A requested JDK version is not registered or available."""

    template = "JDK version {} not found"


class InvalidPathError(JdkError):
    """A JDK path does not point at a usable installation."""

    template = "Invalid JDK path: {}"


class ConfigError(JdkError):
    """The configuration could not be located, read or written."""

    template = "Configuration error: {}"


class EnvError(JdkError):
    """Environment variables could not be updated."""

    template = "Environment variable error: {}"


class DownloadError(JdkError):
    """A download could not be completed."""

    template = "Download error: {}"


class NetworkError(JdkError):
    """A remote service could not be reached or answered badly."""

    template = "Network error: {}"


class NoActiveJdkError(JdkError):
    """No JDK has been selected yet."""

    template = "No JDK is currently active"


class ExtractionError(JdkError):
    """An archive could not be unpacked into a JDK."""

    template = "Extraction failed: {}"


class PackageNotFoundError(JdkError):
    """No downloadable package exists for a version."""

    template = "Package not found for version: {}"


class InvalidVersionError(JdkError):
    """A version string could not be understood."""

    template = "Invalid version format: {}"