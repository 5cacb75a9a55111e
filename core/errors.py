"""Identifier errors with tracking IDs."""

import secrets

from utils.timestamp import format_timestamp


class IdError(Exception):
    """Base error with tracking ID and timestamp."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = secrets.token_hex(8)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class RandomnessError(IdError):
    """Secure random source could not supply filler bytes."""


class VersionMismatchError(IdError):
    """Value was not produced by the country UUIDv8 scheme."""

    def __init__(self, version, **kwargs):
        context = kwargs.pop("context", {})
        context["version"] = version
        super().__init__(f"expected UUID version 8, got {version}", context=context, **kwargs)
        self.version = version


class CountryNotFoundError(IdError):
    """Country reference did not match the registry."""

    def __init__(self, value, **kwargs):
        context = kwargs.pop("context", {})
        context["value"] = value
        super().__init__(f"unknown country: {value!r}", context=context, **kwargs)
        self.value = value
