"""Postmark email provider."""

from __future__ import annotations

import httpx
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from sendout.application.ports import ApiRequest
from sendout.domain.entities import EmailDelivery, EmailMessage
from sendout.domain.errors import (
    ProviderError,
    RateLimitExceededError,
    SerializationError,
    TransportError,
    ValidationError,
)
from sendout.domain.validation import ensure_valid
from sendout.infrastructure.email.providers.postmark.request import POSTMARK_RULES, PostmarkEmailRequest
from sendout.infrastructure.email.providers.postmark.response import (
    PostmarkEmailResponse,
    PostmarkErrorResponse,
)
from sendout.infrastructure.settings import ServiceConfig


class PostmarkClient:
    """Sends email through the Postmark API.

    The HTTP client is supplied by the caller and is never closed here;
    one ``httpx.AsyncClient`` can be shared by many concurrent sends.
    """

    SERVER_TOKEN_HEADER = "X-Postmark-Server-Token"
    ACCOUNT_TOKEN_HEADER = "X-Postmark-Account-Token"

    def __init__(self, config: ServiceConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    def __repr__(self) -> str:
        return f"PostmarkClient(base_url={self.config.base_url!r})"

    def new_http_request(self, request: ApiRequest) -> httpx.Request:
        """Build the HTTP request for ``request`` with auth headers attached."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            self.SERVER_TOKEN_HEADER: self.config.server_token.get_secret_value(),
        }
        if self.config.account_token is not None:
            headers[self.ACCOUNT_TOKEN_HEADER] = self.config.account_token.get_secret_value()

        url = f"{self.config.base_url}{request.endpoint}"
        logger.debug(f"Building Postmark request {request.method} {url}")
        return self.client.build_request(
            request.method,
            url,
            content=request.to_json_bytes(),
            headers=headers,
        )

    async def execute(self, request: httpx.Request) -> httpx.Response:
        """Send ``request`` once, translating transport failures."""
        try:
            return await self.client.send(request)
        except httpx.TimeoutException as e:
            logger.error(f"Postmark API timeout: {request.method} {request.url}")
            raise TransportError("connection timeout") from e
        except httpx.ConnectError as e:
            logger.error(f"Postmark API connection failed: {request.method} {request.url}")
            raise TransportError("connection failed") from e
        except httpx.TransportError as e:
            logger.error(f"Postmark API transport error: {e.__class__.__name__}")
            raise TransportError(f"request failed: {e.__class__.__name__}") from e

    async def send_email(self, message: EmailMessage) -> EmailDelivery:
        """Validate, send and return the Postmark receipt."""
        if message.from_ is None:
            message = message.with_sender(self.config.from_email)

        try:
            ensure_valid(message, POSTMARK_RULES)
        except ValidationError as e:
            logger.warning(f"Email not sent, invalid fields: {', '.join(e.fields)}")
            raise

        request = self.new_http_request(PostmarkEmailRequest.from_message(message))
        logger.debug(f"Sending email to {len(message.recipients)} recipient(s)")
        response = await self.execute(request)
        delivery = self.parse_response(response)

        logger.info(
            f"Email accepted by Postmark, message_id={delivery.message_id}, recipients={len(message.recipients)}"
        )
        return delivery

    def parse_response(self, response: httpx.Response) -> EmailDelivery:
        """Map a Postmark HTTP response to a receipt or raise the matching error."""
        status = response.status_code

        if status == 429:
            error = self._parse_error(response)
            logger.warning("Postmark rate limit exceeded")
            if error is None:
                raise RateLimitExceededError(status)
            raise RateLimitExceededError(status, error.error_code, error.message)

        if response.is_success:
            try:
                parsed = PostmarkEmailResponse.model_validate_json(response.content)
            except PydanticValidationError:
                logger.error(f"Unparseable Postmark success response (HTTP {status})")
                raise SerializationError("failed to parse provider response", status_code=status) from None
            if parsed.error_code != 0:
                logger.error(f"Postmark error {parsed.error_code}: {parsed.message}")
                raise ProviderError(status, parsed.error_code, parsed.message)
            return parsed.to_delivery()

        error = self._parse_error(response)
        if error is None:
            logger.error(f"Postmark API error {status} with unparseable body")
            raise SerializationError("unexpected provider response", status_code=status)

        logger.error(f"Postmark API error {status}: ErrorCode={error.error_code} {error.message}")
        raise ProviderError(status, error.error_code, error.message)

    @staticmethod
    def _parse_error(response: httpx.Response) -> PostmarkErrorResponse | None:
        try:
            return PostmarkErrorResponse.model_validate_json(response.content)
        except PydanticValidationError:
            return None
