"""Exceptions raised by the cleanup engine."""

from __future__ import annotations


class AwsResourceGcError(Exception):
    """Base class for cleanup engine errors."""


class ResourceListingError(AwsResourceGcError):
    """Resources of one kind could not be enumerated.

    Fatal for the cleaner that raised it, never for the whole run.
    """

    def __init__(self, kind: str, cause: Exception):
        super().__init__(f"failed getting list of {kind}: {cause}")
        self.kind = kind
        self.cause = cause


class CleanupCancelled(AwsResourceGcError):
    """The run was cancelled before it finished."""


class WaitTimeoutError(AwsResourceGcError):
    """A polling wait exceeded its deadline."""
