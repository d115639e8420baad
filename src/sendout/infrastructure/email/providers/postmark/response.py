"""Postmark response payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sendout.domain.entities import EmailDelivery


class PostmarkEmailResponse(BaseModel):
    """Body of a successful ``POST /email``."""

    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    to: str = Field(alias="To")
    submitted_at: str = Field(alias="SubmittedAt")
    message_id: str = Field(alias="MessageID")
    error_code: int = Field(alias="ErrorCode")
    message: str = Field(alias="Message")

    def to_delivery(self) -> EmailDelivery:
        return EmailDelivery(
            to=self.to,
            submitted_at=self.submitted_at,
            message_id=self.message_id,
            error_code=self.error_code,
            message=self.message,
        )


class PostmarkErrorResponse(BaseModel):
    """Body Postmark returns with a non-success status (e.g. 422)."""

    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    error_code: int = Field(alias="ErrorCode")
    message: str = Field(alias="Message")
