import html
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Protocol

from src.email_service.templates import EmailTemplates
from src.guests.dtos import RSVPSubmissionDTO


class EmailDeliveryError(Exception):
    """Raised when the email provider rejects or never receives a message."""


class EmailConfig(Protocol):
    from_name: str
    from_email: str
    couple_names: str


def _escaped(values: dict[str, str]) -> dict[str, str]:
    return {key: html.escape(value) for key, value in values.items()}


class EmailServiceBase(ABC):
    def __init__(self, config: EmailConfig):
        self._config = config

    @property
    def from_address(self) -> str:
        return f"{self._config.from_name} <{self._config.from_email}>"

    @abstractmethod
    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Deliver one message. Returns the provider's message id, if any."""
        pass

    async def _render_and_send(
        self,
        to_address: str,
        subject: str,
        text_template: str,
        html_template: str,
        values: dict[str, str],
    ) -> str | None:
        return await self._send(
            to_address=to_address,
            subject=subject,
            html_body=html_template.format(**_escaped(values)),
            text_body=text_template.format(**values),
        )

    async def send_confirmation(self, submission: RSVPSubmissionDTO) -> str | None:
        values = {"guest_name": submission.name, "couple_names": self._config.couple_names}
        if not submission.is_attending:
            return await self._render_and_send(
                to_address=submission.email,
                subject=EmailTemplates.CONFIRMATION_DECLINED_SUBJECT,
                text_template=EmailTemplates.CONFIRMATION_DECLINED_TEXT,
                html_template=EmailTemplates.CONFIRMATION_DECLINED_HTML,
                values=values,
            )

        values["attending_guests"] = ", ".join(submission.attending_guests)
        values["diet"] = submission.diet or "None"
        return await self._render_and_send(
            to_address=submission.email,
            subject=EmailTemplates.CONFIRMATION_ATTENDING_SUBJECT,
            text_template=EmailTemplates.CONFIRMATION_ATTENDING_TEXT,
            html_template=EmailTemplates.CONFIRMATION_ATTENDING_HTML,
            values=values,
        )

    async def send_unlisted_guest_alert(
        self,
        to_address: str,
        name: str,
        ip_address: str,
        user_agent: str,
        attempted_at: datetime,
    ) -> str | None:
        return await self._render_and_send(
            to_address=to_address,
            subject=EmailTemplates.UNLISTED_GUEST_SUBJECT.format(name=name),
            text_template=EmailTemplates.UNLISTED_GUEST_TEXT,
            html_template=EmailTemplates.UNLISTED_GUEST_HTML,
            values={
                "name": name,
                "attempted_at": attempted_at.strftime("%a, %d %b %Y %H:%M:%S %Z").strip(),
                "ip_address": ip_address or "unknown",
                "user_agent": user_agent or "unknown",
            },
        )

    async def send_verification_request(
        self,
        to_address: str,
        submission: RSVPSubmissionDTO,
        unmatched_names: list[str],
        verify_url: str,
    ) -> str | None:
        return await self._render_and_send(
            to_address=to_address,
            subject=EmailTemplates.VERIFICATION_REQUEST_SUBJECT.format(guest_name=submission.name),
            text_template=EmailTemplates.VERIFICATION_REQUEST_TEXT,
            html_template=EmailTemplates.VERIFICATION_REQUEST_HTML,
            values={
                "guest_name": submission.name,
                "email": submission.email,
                "attending_guests": ", ".join(submission.attending_guests),
                "unmatched_names": ", ".join(unmatched_names),
                "diet": submission.diet or "None",
                "verify_url": verify_url,
            },
        )
