"""Errors raised by the unique-id filter.

The filter only raises; mapping to HTTP status codes happens in the app
factory.
"""

from __future__ import annotations


class GenUniqueIdError(Exception):
    """Base class for everything the filter raises."""


class ConfigurationError(GenUniqueIdError):
    """Filter configuration cannot be resolved. Raised at construction."""


class DecodeError(GenUniqueIdError):
    """A source value could not be decoded into a canonical GUID."""

    def __init__(self, attribute: str, reason: str = ""):
        self.attribute = attribute
        self.reason = reason
        message = f"unable to unpack {attribute}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StateConsistencyError(GenUniqueIdError):
    """The request state lacks something the filter needs at this stage."""


class StateError(StateConsistencyError):
    """The request state has no usable Attributes mapping."""
