"""Domain layer: message model, validation rules and error taxonomy."""

from sendout.domain.entities import (
    Address,
    Attachment,
    Body,
    BodyKind,
    EmailDelivery,
    EmailMessage,
    Header,
)
from sendout.domain.errors import (
    ConfigurationError,
    ProviderError,
    RateLimitExceededError,
    SendoutError,
    SerializationError,
    TransportError,
    ValidationError,
)
from sendout.domain.validation import Violation, ensure_valid, validate_message

__all__ = [
    "Address",
    "Attachment",
    "Body",
    "BodyKind",
    "EmailDelivery",
    "EmailMessage",
    "Header",
    "SendoutError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "SerializationError",
    "ProviderError",
    "RateLimitExceededError",
    "Violation",
    "validate_message",
    "ensure_valid",
]
