from sendout.application.ports.api_request import ApiRequest
from sendout.application.ports.email_service import EmailService

__all__ = ["ApiRequest", "EmailService"]
