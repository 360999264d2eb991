"""Write model for RSVP submission.

Decides whether a submission is verified, persists it, and sends the
confirmation or queues an admin verification request.
"""

import logging
from abc import ABC, abstractmethod

from src.email_service.base import EmailDeliveryError, EmailServiceBase
from src.guests.directory import GuestDirectory
from src.guests.dtos import InvalidSubmissionError, RSVPResultDTO, RSVPState, RSVPSubmissionDTO
from src.guests.matching import unmatched_names
from src.guests.notifications import AdminNotifier
from src.guests.repository.write_models import RSVPWriteModel
from src.tasks import BackgroundTaskQueue

logger = logging.getLogger(__name__)

SUBMITTED_MESSAGE = "RSVP submitted successfully"
PENDING_VERIFICATION_MESSAGE = (
    "RSVP submitted successfully - we'll confirm your attendance once we've checked the guest list"
)


class SubmitRSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(self, submission: RSVPSubmissionDTO) -> RSVPResultDTO:
        """Record an RSVP.

        Raises:
            InvalidSubmissionError: attending without any named guest
            DirectoryUnavailableError: the guest list could not be loaded
            StoreError: the RSVP could not be saved
        """
        raise NotImplementedError


class StoreSubmitRSVPWriteModel(SubmitRSVPWriteModel):
    def __init__(
        self,
        directory: GuestDirectory,
        rsvp_write_model: RSVPWriteModel,
        email_service: EmailServiceBase,
        notifier: AdminNotifier,
        queue: BackgroundTaskQueue,
    ) -> None:
        self._directory = directory
        self._rsvp_write_model = rsvp_write_model
        self._email_service = email_service
        self._notifier = notifier
        self._queue = queue

    async def submit_rsvp(self, submission: RSVPSubmissionDTO) -> RSVPResultDTO:
        if submission.is_attending and not submission.attending_guests:
            raise InvalidSubmissionError("At least one guest must be specified when attending")

        missing: list[str] = []
        if not submission.is_attending:
            state = RSVPState.UNATTENDING
        else:
            missing = unmatched_names(submission.attending_guests, await self._directory.get())
            state = RSVPState.ATTENDING_UNVERIFIED if missing else RSVPState.ATTENDING_VERIFIED

        verified = state == RSVPState.ATTENDING_VERIFIED
        await self._save(submission, verified)

        if state == RSVPState.ATTENDING_UNVERIFIED:
            logger.info(
                "RSVP from %s needs verification, not on guest list: %s",
                submission.email,
                missing,
            )
            self._queue.submit(
                self._notifier.unverified_rsvp(submission, missing),
                name="unverified-rsvp-notification",
            )
            return RSVPResultDTO(state=state, message=PENDING_VERIFICATION_MESSAGE)

        await self._send_confirmation(submission)
        if submission.is_attending:
            logger.info(
                "RSVP completed (ATTENDING): %s (%s) - Guests: %s - Diet: %s",
                submission.name,
                submission.email,
                list(submission.attending_guests),
                submission.diet,
            )
        else:
            logger.info("RSVP completed (NOT ATTENDING): %s (%s)", submission.name, submission.email)
        return RSVPResultDTO(state=state, message=SUBMITTED_MESSAGE)

    async def _save(self, submission: RSVPSubmissionDTO, verified: bool) -> None:
        if not self._rsvp_write_model.is_configured:
            logger.warning("Supabase not configured - RSVP from %s not saved", submission.email)
            return
        await self._rsvp_write_model.save_rsvp(submission, verified=verified)

    async def _send_confirmation(self, submission: RSVPSubmissionDTO) -> None:
        try:
            await self._email_service.send_confirmation(submission)
        except EmailDeliveryError as e:
            logger.error("Failed to send confirmation email to %s: %s", submission.email, e)
