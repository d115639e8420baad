"""Email entities: messages, recipients, attachments and delivery receipts."""

from sendout.domain.entities.delivery import EmailDelivery
from sendout.domain.entities.email_message import (
    Address,
    Attachment,
    Body,
    BodyKind,
    EmailMessage,
    Header,
)

__all__ = [
    "Address",
    "Attachment",
    "Body",
    "BodyKind",
    "EmailDelivery",
    "EmailMessage",
    "Header",
]
