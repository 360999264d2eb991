import logging
from abc import ABC, abstractmethod

from src.config.database import StoreNotConfiguredError
from src.guests.dtos import AvatarSelectionDTO, InvalidSubmissionError, RSVPNotFoundError
from src.guests.repository.read_models import RSVPReadModel
from src.guests.repository.write_models import RSVPWriteModel

logger = logging.getLogger(__name__)


def validate_selections(email: str, selections: list[AvatarSelectionDTO]) -> None:
    if not email.strip():
        raise InvalidSubmissionError("Email is required")
    if not selections:
        raise InvalidSubmissionError("At least one avatar selection is required")
    for selection in selections:
        if not selection.guest_name.strip():
            raise InvalidSubmissionError("Guest name is required for all avatars")
        if not selection.avatar.strip():
            raise InvalidSubmissionError("Avatar is required for all guests")


class SaveAvatarsWriteModel(ABC):
    @abstractmethod
    async def save_avatars(self, email: str, selections: list[AvatarSelectionDTO]) -> None:
        """Replace the avatar selections on the most recent RSVP for ``email``."""
        raise NotImplementedError


class StoreSaveAvatarsWriteModel(SaveAvatarsWriteModel):
    def __init__(self, rsvp_read_model: RSVPReadModel, rsvp_write_model: RSVPWriteModel):
        self._rsvp_read_model = rsvp_read_model
        self._rsvp_write_model = rsvp_write_model

    async def save_avatars(self, email: str, selections: list[AvatarSelectionDTO]) -> None:
        validate_selections(email, selections)
        email = email.strip()

        if not self._rsvp_read_model.is_configured:
            raise StoreNotConfiguredError()

        rsvp = await self._rsvp_read_model.get_latest_rsvp(email)
        if rsvp is None:
            raise RSVPNotFoundError(email)

        await self._rsvp_write_model.save_avatars(rsvp.id, selections)
        logger.info("Saved %d avatar selections for %s", len(selections), email)
