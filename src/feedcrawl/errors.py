"""Configuration error hierarchy: load failures and validation failures."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

PARSE_CONTEXT = "failed to parse configuration"


class IntervalErrorReason(StrEnum):
    """Why a duration string was rejected."""
    EMPTY = "empty"
    UNKNOWN_UNIT = "unknown_unit"
    MALFORMED_NUMBER = "malformed_number"


class ConfigError(Exception):
    """Base class for every load or validation failure."""


class LoadError(ConfigError):
    """The configuration document could not be turned into a Config."""


class LoadIoError(LoadError):
    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = str(path)
        self.reason = reason
        message = f"failed to read config file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class LoadParseError(LoadError):
    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = str(path)
        self.detail = detail
        super().__init__(f"{PARSE_CONTEXT}: {self.path}: {detail}")


class ValidationFailure(ConfigError):
    """A loaded Config holds a value the crawler cannot use."""


class InvalidUrl(ValidationFailure):
    def __init__(self, kind: str, source_name: str, url: str) -> None:
        self.kind = kind
        self.source_name = source_name
        self.url = url
        super().__init__(f"invalid {kind} source URL for {source_name!r}: {url!r}")


class EmptySelector(ValidationFailure):
    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        super().__init__(f"CSS selector cannot be empty for site: {source_name!r}")


class InvalidIntervalFormat(ValidationFailure):
    """A duration string does not match ``<digits><s|m|h>``.

    Raised bare by the parser; the validator re-raises it with ``field`` and
    ``source_name`` filled in so the message points at the document entry.
    """

    def __init__(
        self,
        value: str,
        reason: IntervalErrorReason,
        *,
        field: str | None = None,
        source_name: str | None = None,
    ) -> None:
        self.value = value
        self.reason = reason
        self.field = field
        self.source_name = source_name

        message = f"invalid update_interval {value!r} ({reason.value.replace('_', ' ')})"
        if field:
            message = f"{field}: {message}"
        if source_name:
            message = f"{message} for source {source_name!r}"
        super().__init__(message)

    def for_field(self, field: str, source_name: str | None = None) -> InvalidIntervalFormat:
        """Return a copy of this error annotated with where the value came from."""
        return InvalidIntervalFormat(self.value, self.reason, field=field, source_name=source_name)
