"""
Module: core.errors

Purpose:
    Exception taxonomy for gang sheet generation. Every failure the core
    can produce is a subclass of GangSheetError and carries the status
    class a web front-end should answer with.

Key Classes:
    - GangSheetError: Base class
    - ValidationError: Request-scoped, caller-fixable failures (4xx)
    - PackingStalledError: Internal invariant violation (5xx)

Used By:
    - gangsheet.assets: Asset loading and resolution
    - gangsheet.layout: Packing and pagination
    - gangsheet.cli: Exit code mapping
"""

from __future__ import annotations


class GangSheetError(Exception):
    """Base class for all gang sheet errors."""

    status_code = 500

    @property
    def is_client_error(self) -> bool:
        """True when the caller can fix the request and try again."""
        return 400 <= self.status_code < 500


class ValidationError(GangSheetError):
    """Input or geometry problem with the request itself."""

    status_code = 422


class DegenerateAssetError(ValidationError):
    """Asset has a zero or negative intrinsic dimension."""


class UnsupportedAssetKind(ValidationError):
    """Asset is neither a single-page vector document nor a raster image."""

    status_code = 415


class AssetTooWideError(ValidationError):
    """Oriented asset width leaves no room for a single column."""


class AssetTooTallError(ValidationError):
    """Oriented asset height leaves no room for a single row."""


class InvalidQuantityError(ValidationError):
    """Requested copy count is out of the allowed range."""

    status_code = 400


class InvalidConstraintError(ValidationError):
    """Sheet or pricing parameter is out of the allowed range."""

    status_code = 400


class PackingStalledError(GangSheetError):
    """
    Packer made no progress on a non-empty queue.

    This is a bug, never a user error. It is raised instead of looping
    forever and must not be retried: packing is deterministic.
    """

    status_code = 500
