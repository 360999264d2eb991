import logging
from datetime import datetime, timezone
from typing import Protocol

from src.config.settings import settings
from src.email_service import EmailServiceBase, get_email_service
from src.guests.dtos import RSVPSubmissionDTO
from src.guests.urls import verify_rsvp_url

logger = logging.getLogger(__name__)


class AdminConfig(Protocol):
    admin_email: str
    admin_api_key: str
    public_base_url: str


class AdminNotifier:
    """Emails the couple about submissions that need a human look.

    Meant to run on the background queue: failures are raised to the queue,
    which logs them.
    """

    def __init__(self, email_service: EmailServiceBase, config: AdminConfig = settings):
        self._email_service = email_service
        self._config = config

    async def unverified_rsvp(
        self, submission: RSVPSubmissionDTO, unmatched_names: list[str]
    ) -> None:
        if not self._config.admin_email:
            logger.warning("ADMIN_EMAIL not configured - skipping verification request")
            return

        await self._email_service.send_verification_request(
            to_address=self._config.admin_email,
            submission=submission,
            unmatched_names=unmatched_names,
            verify_url=verify_rsvp_url(
                submission.email, self._config.admin_api_key, self._config.public_base_url
            ),
        )
        logger.info("Sent verification request to admin for %s", submission.email)

    async def unlisted_guest(self, name: str, ip_address: str, user_agent: str) -> None:
        if not self._config.admin_email:
            logger.warning("ADMIN_EMAIL not configured - skipping unlisted guest notification")
            return

        await self._email_service.send_unlisted_guest_alert(
            to_address=self._config.admin_email,
            name=name,
            ip_address=ip_address,
            user_agent=user_agent,
            attempted_at=datetime.now(timezone.utc),
        )
        logger.info("Sent unlisted guest notification to admin for: %s", name)


def get_admin_notifier() -> AdminNotifier:
    """Dependency to get the admin notifier instance."""
    return AdminNotifier(email_service=get_email_service())

