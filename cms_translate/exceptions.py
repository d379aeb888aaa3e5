"""Exceptions raised by the translation orchestration layer."""

from typing import Optional


class CMSTranslateError(Exception):
    """Base class for all package errors."""


class CMSApiError(CMSTranslateError):
    """CMS API error with optional code, details and HTTP status."""

    def __init__(
        self,
        message: str,
        code: str = None,
        details: dict = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.status_code = status_code


class DispatchInProgressError(CMSTranslateError):
    """A bulk dispatch is already running on this dispatcher."""


class UnknownLocaleError(CMSTranslateError, KeyError):
    """Locale code is not part of the supported set."""

    def __str__(self) -> str:
        return f"Unsupported locale: {self.args[0]}"
