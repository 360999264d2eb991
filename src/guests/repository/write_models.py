"""Write models - persist DTOs through the store client, never expose raw rows."""

import logging
from abc import ABC, abstractmethod

from src.config.database import SupabaseClient, eq, get_store_client
from src.config.table_names import TableNames
from src.guests.dtos import AvatarSelectionDTO, GuestRecordDTO, RSVPSubmissionDTO
from src.guests.repository.orm_models import Guest, create_table_sql

logger = logging.getLogger(__name__)


class GuestWriteModel(ABC):
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def ensure_table(self) -> None:
        """Create the guests table and its indexes if they do not exist."""
        raise NotImplementedError

    @abstractmethod
    async def insert_guests(self, guests: list[GuestRecordDTO]) -> None:
        """Insert one batch of guests. Raises StoreError if the batch is rejected."""
        raise NotImplementedError


class SupabaseGuestWriteModel(GuestWriteModel):
    def __init__(self, client: SupabaseClient | None = None):
        self._client = client or get_store_client()

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    async def ensure_table(self) -> None:
        await self._client.rpc("exec_sql", {"query": create_table_sql(Guest)})

    async def insert_guests(self, guests: list[GuestRecordDTO]) -> None:
        rows = [{"name": guest.name, "address": guest.address} for guest in guests]
        await self._client.insert(TableNames.GUESTS.value, rows)


class RSVPWriteModel(ABC):
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def save_rsvp(self, submission: RSVPSubmissionDTO, verified: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    async def mark_verified(self, rsvp_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def save_avatars(self, rsvp_id: str, selections: list[AvatarSelectionDTO]) -> None:
        """Replace the avatar selections stored on an RSVP."""
        raise NotImplementedError


class SupabaseRSVPWriteModel(RSVPWriteModel):
    def __init__(self, client: SupabaseClient | None = None):
        self._client = client or get_store_client()

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    async def save_rsvp(self, submission: RSVPSubmissionDTO, verified: bool) -> None:
        row = {
            "name": submission.name,
            "email": submission.email,
            "is_attending": submission.is_attending,
            "attending_guests": list(submission.attending_guests),
            "diet": submission.diet,
            "verified": verified,
        }
        await self._client.insert(TableNames.RSVPS.value, [row])
        logger.info("Saved RSVP for %s (verified=%s)", submission.email, verified)

    async def mark_verified(self, rsvp_id: str) -> None:
        await self._client.update(
            TableNames.RSVPS.value, {"verified": True}, filters={"id": eq(rsvp_id)}
        )

    async def save_avatars(self, rsvp_id: str, selections: list[AvatarSelectionDTO]) -> None:
        await self._client.update(
            TableNames.RSVPS.value,
            {"avatar_data": [selection.to_dict() for selection in selections]},
            filters={"id": eq(rsvp_id)},
        )
