"""sendout - send transactional email through HTTP email providers.

Provides the building blocks: message types, validation, the provider
contract and provider integrations (Postmark).

Logging goes through loguru and is disabled for this package until the
application calls ``logger.enable("sendout")``.
"""

from loguru import logger

from sendout.application.ports import ApiRequest, EmailService
from sendout.domain import (
    Address,
    Attachment,
    Body,
    ConfigurationError,
    EmailDelivery,
    EmailMessage,
    ProviderError,
    RateLimitExceededError,
    SendoutError,
    SerializationError,
    TransportError,
    ValidationError,
    Violation,
    ensure_valid,
    validate_message,
)
from sendout.infrastructure.email.providers.postmark import PostmarkClient
from sendout.infrastructure.settings import ServiceConfig, get_settings, load_service_config

logger.disable("sendout")

__version__ = "0.1.0"

__all__ = [
    "Address",
    "Attachment",
    "Body",
    "EmailMessage",
    "EmailDelivery",
    "EmailService",
    "ApiRequest",
    "PostmarkClient",
    "ServiceConfig",
    "get_settings",
    "load_service_config",
    "validate_message",
    "ensure_valid",
    "Violation",
    "SendoutError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "SerializationError",
    "ProviderError",
    "RateLimitExceededError",
]
