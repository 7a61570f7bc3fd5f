"""
Domain-specific exceptions for the watermarking batch.

Catching these at the CLI entry point allows a clean exit code and a single
diagnostic line.  All exceptions inherit from ``WatermarkerError`` so callers
can also use a single broad catch when needed.
"""

from __future__ import annotations

from pathlib import Path


class WatermarkerError(Exception):
    """Base exception for all watermarker errors."""


class ConfigurationError(WatermarkerError):
    """Raised when settings are missing, malformed or the config file is unusable."""


class ResolutionFormatError(ConfigurationError):
    """Raised when a resolution token is neither a preset nor a ``WxH`` literal.

    Attributes
    ----------
    token:
        The complete token as given by the user.
    reason:
        Which part of the literal parse failed last (``separator``, ``width``
        or ``height``).
    """

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"invalid resolution {token!r}: {reason}")
        self.token = token
        self.reason = reason


class SettingsValidationError(WatermarkerError):
    """Raised when a merged setting points at an unusable path.

    Attributes
    ----------
    field:
        Name of the offending setting (``output_dir``, ``logo_path``, ``inputs``).
    path:
        The path that failed the check.
    """

    def __init__(self, field: str, path: Path, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.path = path


class ProcessingError(WatermarkerError):
    """Raised when decoding, resizing or writing a single target fails."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
