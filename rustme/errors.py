"""Error types raised while loading configurations and generating files."""

from __future__ import annotations

from typing import Optional


class RustmeError(RuntimeError):
    """Base class for every failure that aborts a generation run."""


class NoConfigurationError(RustmeError):
    """Raised when a directory walk finds no configuration file."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"no configuration found in {directory}")
        self.directory = directory


class ConfigError(RustmeError):
    """Raised when the configuration file cannot be read or has the wrong shape."""


class MalformedSnippetReferenceError(RustmeError):
    """Raised when a `$reference` is missing its closing `$`."""

    def __init__(self) -> None:
        super().__init__("a snippet reference is missing its closing $")


class MalformedSnippetError(RustmeError):
    """Raised when snippet begin/end markers do not pair up."""

    def __init__(self, detail: str = "a mismatch of snippet begins and ends") -> None:
        super().__init__(detail)


class MalformedCodeBlockError(RustmeError):
    """Raised when a rust code block has no closing fence."""

    def __init__(self) -> None:
        super().__init__("a rust code block was not able to be parsed")


class SnippetAlreadyDefinedError(RustmeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"snippet already defined: {name}")
        self.name = name


class SnippetNotFoundError(RustmeError):
    def __init__(self, reference: str) -> None:
        super().__init__(f"snippet not found: {reference}")
        self.reference = reference


class ResourceIOError(RustmeError):
    """Raised for filesystem failures other than a missing file."""

    def __init__(self, location: str, error: str) -> None:
        super().__init__(f"io error reading {location}: {error}")
        self.location = location


class HttpError(RustmeError):
    """Raised when a remote resource cannot be fetched."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        detail = f"status {status}: {reason}" if status is not None else reason
        super().__init__(f"http error requesting {url}: {detail}")
        self.url = url
        self.reason = reason
        self.status = status


class InvalidUnicodeError(RustmeError):
    """Raised when text is not valid UTF-8."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"unicode error: {detail}")


class GlossaryError(RustmeError):
    """Wraps any failure to load a glossary with the glossary's location."""

    def __init__(self, location: str, error: str) -> None:
        super().__init__(f"glossary {location} error: {error}")
        self.location = location
        self.error = error


__all__ = [
    "ConfigError",
    "GlossaryError",
    "HttpError",
    "InvalidUnicodeError",
    "MalformedCodeBlockError",
    "MalformedSnippetError",
    "MalformedSnippetReferenceError",
    "NoConfigurationError",
    "ResourceIOError",
    "RustmeError",
    "SnippetAlreadyDefinedError",
    "SnippetNotFoundError",
]
