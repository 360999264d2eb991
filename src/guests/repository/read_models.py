import abc
import logging

from src.config.database import SupabaseClient, eq, get_store_client
from src.config.table_names import TableNames
from src.guests.dtos import AvatarData, AvatarRowDTO, GuestDTO, RSVPRecordDTO

logger = logging.getLogger(__name__)


class GuestReadModel(abc.ABC):
    @property
    @abc.abstractmethod
    def is_configured(self) -> bool:
        """Whether a backing store is available at all."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_guests(self) -> list[GuestDTO]:
        raise NotImplementedError


class SupabaseGuestReadModel(GuestReadModel):
    def __init__(self, client: SupabaseClient | None = None):
        self._client = client or get_store_client()

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    async def list_guests(self) -> list[GuestDTO]:
        rows = await self._client.select(TableNames.GUESTS.value, columns="id,name,address")
        return [GuestDTO.from_row(row) for row in rows]


class RSVPReadModel(abc.ABC):
    @property
    @abc.abstractmethod
    def is_configured(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_latest_rsvp(self, email: str) -> RSVPRecordDTO | None:
        """
        Get the most recently submitted RSVP for an email.
        Returns None when the email never submitted one.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def list_avatar_rows(self) -> list[AvatarRowDTO]:
        """
        Avatar data of attending, verified RSVPs, oldest submission first.
        Rows whose avatar data cannot be parsed are left out.
        """
        raise NotImplementedError


class SupabaseRSVPReadModel(RSVPReadModel):
    def __init__(self, client: SupabaseClient | None = None):
        self._client = client or get_store_client()

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    async def get_latest_rsvp(self, email: str) -> RSVPRecordDTO | None:
        rows = await self._client.select(
            TableNames.RSVPS.value,
            filters={"email": eq(email)},
            order="submitted_at.desc",
            limit=1,
        )
        if not rows:
            return None
        return RSVPRecordDTO.from_row(rows[0])

    async def list_avatar_rows(self) -> list[AvatarRowDTO]:
        rows = await self._client.select(
            TableNames.RSVPS.value,
            columns="id,name,avatar_data,submitted_at",
            filters={"is_attending": eq(True), "verified": eq(True)},
            order="submitted_at.asc",
        )

        result = []
        for row in rows:
            try:
                avatar_data = AvatarData.from_raw(row.get("avatar_data"))
            except ValueError as e:
                logger.warning("Skipping malformed avatar data on RSVP %s: %s", row.get("id"), e)
                continue
            result.append(AvatarRowDTO(name=row.get("name") or "", avatar_data=avatar_data))
        return result
