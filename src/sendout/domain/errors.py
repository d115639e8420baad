"""Errors raised while building or sending an email.

Every failure surfaces as a subclass of ``SendoutError``. None of them
carry credentials: messages are built from field names, status codes and
the provider's own error text only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from sendout.domain.validation import Violation


class SendoutError(Exception):
    """Base class for all sendout errors."""


class ConfigurationError(SendoutError):
    """Service configuration is missing or invalid."""


class ValidationError(SendoutError):
    """The message failed validation; no request was sent."""

    def __init__(self, violations: Iterable[Violation]):
        self.violations: tuple[Violation, ...] = tuple(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"invalid email message: {details}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class TransportError(SendoutError):
    """The HTTP request could not be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SerializationError(TransportError):
    """The provider response could not be parsed into the expected shape."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        suffix = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{message}{suffix}", status_code=status_code)


class ProviderError(SendoutError):
    """The provider rejected the email."""

    def __init__(self, status_code: int, error_code: Optional[int], message: str):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        code = f" {error_code}" if error_code is not None else ""
        super().__init__(f"provider error{code}: {message} (HTTP {status_code})")


class RateLimitExceededError(ProviderError):
    """Too many requests were made in a short period."""

    def __init__(self, status_code: int = 429, error_code: Optional[int] = None, message: str = "rate limit exceeded"):
        super().__init__(status_code, error_code, message)
