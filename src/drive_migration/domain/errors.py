from __future__ import annotations


class AuthError(RuntimeError):
    """Sign-in could not produce an authenticated account."""


class DriveServiceError(RuntimeError):
    """A Drive REST call failed."""


class DocumentError(RuntimeError):
    """A picker-selected document could not be read."""
