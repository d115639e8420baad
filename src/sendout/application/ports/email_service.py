from __future__ import annotations

from typing import Protocol, runtime_checkable

from sendout.domain.entities import EmailDelivery, EmailMessage


@runtime_checkable
class EmailService(Protocol):
    """Anything that can send an email: a provider client or a test double.

    Implementations validate the message, perform at most one outbound
    request and return the provider receipt. Failures are raised as
    ``sendout.domain.errors.SendoutError`` subclasses; nothing is retried.
    """

    async def send_email(self, message: EmailMessage) -> EmailDelivery: ...
