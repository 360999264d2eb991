import logging
from abc import ABC, abstractmethod

from src.guests.dtos import AvatarDataState, AvatarRowDTO, GuestAvatarDTO
from src.guests.matching import first_name
from src.guests.repository.read_models import RSVPReadModel

logger = logging.getLogger(__name__)


def aggregate_avatars(rows: list[AvatarRowDTO]) -> list[GuestAvatarDTO]:
    """
    One avatar per guest first name, first seen wins.

    Rows are taken in the given order, then selections in their stored order.
    """
    seen: set[str] = set()
    avatars: list[GuestAvatarDTO] = []
    for row in rows:
        # Absent and empty avatar data contribute nothing
        if row.avatar_data.state != AvatarDataState.POPULATED:
            continue

        for selection in row.avatar_data.selections:
            name = first_name(selection.guest_name)
            if not name or name in seen:
                continue
            seen.add(name)
            avatars.append(
                GuestAvatarDTO(name=name, avatar=selection.avatar, message=selection.message)
            )
    return avatars


class GetAvatarsReadModel(ABC):
    @abstractmethod
    async def get_avatars(self) -> list[GuestAvatarDTO]:
        raise NotImplementedError


class StoreGetAvatarsReadModel(GetAvatarsReadModel):
    def __init__(self, rsvp_read_model: RSVPReadModel):
        self._rsvp_read_model = rsvp_read_model

    async def get_avatars(self) -> list[GuestAvatarDTO]:
        if not self._rsvp_read_model.is_configured:
            logger.warning("Supabase not configured - no avatars to show")
            return []
        return aggregate_avatars(await self._rsvp_read_model.list_avatar_rows())
