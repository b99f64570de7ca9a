"""Shared exception types for iam-lens."""

from __future__ import annotations

from typing import Optional


class IamLensError(RuntimeError):
    """Base exception for iam-lens errors."""

    def __init__(self, message: str, *, error_code: str = "iam_lens_error") -> None:
        super().__init__(message)
        self.error_code = error_code


class SessionError(IamLensError):
    """An AWS session could not be established. Fatal at startup."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="SESSION_ERROR")


class DataSourceError(IamLensError):
    """A call against IAM or STS failed.

    Attributes:
        operation: Name of the data-source operation that failed (e.g. ``list_roles``).
    """

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message, error_code="DATA_SOURCE_ERROR")
        self.operation = operation


class ConfigurationError(IamLensError):
    """Invalid configuration values."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="CONFIGURATION_ERROR")
