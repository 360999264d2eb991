"""Write model for the admin verification of an RSVP."""

import hmac
import logging
from abc import ABC, abstractmethod
from typing import Protocol

from src.config.database import StoreNotConfiguredError
from src.email_service.base import EmailDeliveryError, EmailServiceBase
from src.guests.dtos import (
    AdminNotConfiguredError,
    InvalidSubmissionError,
    RSVPNotFoundError,
    RSVPRecordDTO,
    UnauthorizedError,
)
from src.guests.repository.read_models import RSVPReadModel
from src.guests.repository.write_models import RSVPWriteModel

logger = logging.getLogger(__name__)


class AdminKeyConfig(Protocol):
    admin_api_key: str


class VerifyRSVPWriteModel(ABC):
    @abstractmethod
    async def verify_rsvp(self, email: str, api_key: str) -> RSVPRecordDTO:
        """Mark the latest RSVP for ``email`` as verified and confirm it to the guest.

        Nothing is changed unless ``api_key`` matches the configured admin key.

        Raises:
            AdminNotConfiguredError: no admin key is configured
            UnauthorizedError: the key does not match
            InvalidSubmissionError: no email given
            RSVPNotFoundError: the email never submitted an RSVP
            StoreError: the store could not be read or updated
        """
        raise NotImplementedError


class StoreVerifyRSVPWriteModel(VerifyRSVPWriteModel):
    def __init__(
        self,
        config: AdminKeyConfig,
        rsvp_read_model: RSVPReadModel,
        rsvp_write_model: RSVPWriteModel,
        email_service: EmailServiceBase,
    ) -> None:
        self._config = config
        self._rsvp_read_model = rsvp_read_model
        self._rsvp_write_model = rsvp_write_model
        self._email_service = email_service

    def _check_api_key(self, api_key: str) -> None:
        if not self._config.admin_api_key:
            logger.error("ADMIN_API_KEY not configured")
            raise AdminNotConfiguredError()
        if not hmac.compare_digest(api_key.encode(), self._config.admin_api_key.encode()):
            logger.warning("Invalid API key provided for verification attempt")
            raise UnauthorizedError()

    async def verify_rsvp(self, email: str, api_key: str) -> RSVPRecordDTO:
        self._check_api_key(api_key)

        email = email.strip()
        if not email:
            raise InvalidSubmissionError("Email is required")

        if not self._rsvp_read_model.is_configured:
            raise StoreNotConfiguredError()

        rsvp = await self._rsvp_read_model.get_latest_rsvp(email)
        if rsvp is None:
            raise RSVPNotFoundError(email)

        if rsvp.verified:
            logger.info("RSVP for %s is already verified", email)
            return rsvp

        await self._rsvp_write_model.mark_verified(rsvp.id)
        logger.info("RSVP verified for email: %s", email)

        # Re-read so the confirmation reflects what is stored now
        rsvp = await self._rsvp_read_model.get_latest_rsvp(email) or rsvp
        try:
            await self._email_service.send_confirmation(rsvp.as_submission())
        except EmailDeliveryError as e:
            logger.error("Failed to send confirmation email after verification: %s", e)
        else:
            logger.info("Sent confirmation email to verified guest: %s", email)
        return rsvp
