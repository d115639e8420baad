"""Email sending with Postmark."""

from sendout.infrastructure.email.providers.postmark.client import PostmarkClient
from sendout.infrastructure.email.providers.postmark.request import (
    PostmarkAttachment,
    PostmarkEmailRequest,
    PostmarkHeader,
)
from sendout.infrastructure.email.providers.postmark.response import (
    PostmarkEmailResponse,
    PostmarkErrorResponse,
)

__all__ = [
    "PostmarkClient",
    "PostmarkEmailRequest",
    "PostmarkHeader",
    "PostmarkAttachment",
    "PostmarkEmailResponse",
    "PostmarkErrorResponse",
]
