"""Postmark request payload for ``POST /email``."""

from __future__ import annotations

import base64
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from sendout.domain.entities import Address, Attachment, BodyKind, EmailMessage, Header
from sendout.domain.validation import EachRule, Rule

MAX_RECIPIENTS_PER_FIELD = 50
MAX_TAG_LENGTH = 1000

POSTMARK_RULES = (
    *(
        Rule(
            field,
            lambda m, f=field: len(getattr(m, f)) <= MAX_RECIPIENTS_PER_FIELD,
            f"at most {MAX_RECIPIENTS_PER_FIELD} addresses are allowed",
        )
        for field in ("to", "cc", "bcc")
    ),
    Rule("tag", lambda m: m.tag is None or len(m.tag) <= MAX_TAG_LENGTH, f"tag must be at most {MAX_TAG_LENGTH} characters"),
)


class _PostmarkModel(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True, frozen=True)


class PostmarkHeader(_PostmarkModel):
    name: str = Field(alias="Name")
    value: str = Field(alias="Value")

    @classmethod
    def from_header(cls, header: Header) -> PostmarkHeader:
        return cls(name=header.name, value=header.value)


class PostmarkAttachment(_PostmarkModel):
    name: str = Field(alias="Name")
    # base64-encoded
    content: str = Field(alias="Content")
    content_type: str = Field(alias="ContentType")

    @classmethod
    def from_attachment(cls, attachment: Attachment) -> PostmarkAttachment:
        return cls(
            name=attachment.name,
            content=base64.b64encode(attachment.content).decode("ascii"),
            content_type=attachment.content_type,
        )


def _join(addresses: tuple[Address, ...]) -> Optional[str]:
    if not addresses:
        return None
    return ",".join(a.formatted() for a in addresses)


class PostmarkEmailRequest(_PostmarkModel):
    """Single email request body.

    Exactly one of ``text_body`` / ``html_body`` is set. Tracking fields
    (``TrackOpens``, ``TrackLinks``) are never sent.
    """

    method: ClassVar[str] = "POST"
    endpoint: ClassVar[str] = "/email"

    from_: str = Field(alias="From")
    to: str = Field(alias="To")
    subject: str = Field(alias="Subject")
    text_body: Optional[str] = Field(default=None, alias="TextBody")
    html_body: Optional[str] = Field(default=None, alias="HtmlBody")
    cc: Optional[str] = Field(default=None, alias="Cc")
    bcc: Optional[str] = Field(default=None, alias="Bcc")
    reply_to: Optional[str] = Field(default=None, alias="ReplyTo")
    tag: Optional[str] = Field(default=None, alias="Tag")
    headers: Optional[list[PostmarkHeader]] = Field(default=None, alias="Headers")
    metadata: Optional[dict[str, str]] = Field(default=None, alias="Metadata")
    attachments: Optional[list[PostmarkAttachment]] = Field(default=None, alias="Attachments")
    message_stream: Optional[str] = Field(default=None, alias="MessageStream")

    @classmethod
    def from_message(cls, message: EmailMessage) -> PostmarkEmailRequest:
        """Map a validated message to the Postmark wire shape."""
        body = message.body
        return cls(
            from_=message.from_.formatted() if message.from_ else "",
            to=_join(message.to) or "",
            subject=message.subject,
            text_body=body.content if body.kind is BodyKind.TEXT else None,
            html_body=body.content if body.kind is BodyKind.HTML else None,
            cc=_join(message.cc),
            bcc=_join(message.bcc),
            reply_to=_join(message.reply_to),
            tag=message.tag,
            headers=[PostmarkHeader.from_header(h) for h in message.header_list] or None,
            metadata=dict(message.metadata) or None,
            attachments=[PostmarkAttachment.from_attachment(a) for a in message.attachments] or None,
            message_stream=message.message_stream,
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
