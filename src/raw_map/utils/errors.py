"""Exception hierarchy shared across the raw map package."""
from __future__ import annotations


class RawMapError(Exception):
    """Base class for all raw map failures."""


class SnapshotNotFound(RawMapError):
    pass


class SnapshotDecodeError(RawMapError):
    pass


class SnapshotValidationError(RawMapError):
    pass


class UnsupportedVersionError(RawMapError):
    pass


class IoError(RawMapError):
    pass
