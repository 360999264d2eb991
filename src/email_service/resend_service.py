import logging
from typing import Protocol

import httpx

from src.email_service.base import EmailConfig, EmailDeliveryError, EmailServiceBase

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailConfig(EmailConfig, Protocol):
    resend_api_key: str
    request_timeout: float


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        super().__init__(config)
        self._config: ResendEmailConfig = config
        self._http_client_class = http_client_class

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Send email via Resend and return the Resend email id."""
        try:
            async with self._http_client_class(timeout=self._config.request_timeout) as client:
                response = await client.post(
                    RESEND_API_URL,
                    headers={
                        "Authorization": f"Bearer {self._config.resend_api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": self.from_address,
                        "to": [to_address],
                        "subject": subject,
                        "html": html_body,
                        "text": text_body,
                    },
                )
                response.raise_for_status()
                resend_email_id = response.json().get("id")
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"Resend API returned status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise EmailDeliveryError(f"Failed to send email via Resend: {e}") from e

        logger.info("Email sent to %s (Resend ID: %s)", to_address, resend_email_id)
        return resend_email_id
