import logging

from src.email_service.base import EmailServiceBase

logger = logging.getLogger(__name__)


class ConsoleEmailService(EmailServiceBase):
    """Writes emails to the log. Used when no Resend API key is configured."""

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        rule = "=" * 72
        logger.info(
            "\n%s\nEMAIL (console mode - Resend not configured)\n%s\n"
            "From: %s\nTo: %s\nSubject: %s\n%s\n%s\n%s",
            rule,
            rule,
            self.from_address,
            to_address,
            subject,
            "-" * 72,
            text_body.strip(),
            rule,
        )
        return None
