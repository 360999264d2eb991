import logging

from src.config.settings import settings
from src.email_service.base import EmailDeliveryError, EmailServiceBase
from src.email_service.console_service import ConsoleEmailService
from src.email_service.resend_service import ResendEmailService
from src.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)


def get_email_service() -> EmailServiceBase:
    if settings.resend_api_key:
        return ResendEmailService(config=settings)
    logger.warning("RESEND_API_KEY not configured - logging emails instead of sending")
    return ConsoleEmailService(config=settings)


__all__ = [
    "EmailDeliveryError",
    "EmailServiceBase",
    "EmailTemplates",
    "get_email_service",
]
