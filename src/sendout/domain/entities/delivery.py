"""Receipt returned by a provider after accepting an email."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class EmailDelivery(BaseModel):
    """What the provider hands back after receiving an email."""

    model_config = ConfigDict(frozen=True)

    to: str
    submitted_at: str
    message_id: str
    error_code: int = 0
    message: str = ""
