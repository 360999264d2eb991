import logging
import threading

from src.config.database import StoreError
from src.guests.dtos import DirectoryUnavailableError, GuestDTO
from src.guests.repository.read_models import GuestReadModel, SupabaseGuestReadModel

logger = logging.getLogger(__name__)

# Used when the store is not configured (local development)
DEFAULT_GUESTS: tuple[GuestDTO, ...] = (
    GuestDTO(id="1", name="John Smith"),
    GuestDTO(id="2", name="Jane Smith"),
    GuestDTO(id="3", name="Bob Johnson"),
    GuestDTO(id="4", name="Alice Williams"),
    GuestDTO(id="5", name="Tom Williams"),
)


class GuestDirectory:
    """Process-wide cache of the invite list.

    Readers take the current snapshot (an immutable tuple) without locking;
    populating and invalidating swap the snapshot under an exclusive lock.
    Two concurrent misses may both fetch, which only costs a redundant read.
    """

    def __init__(
        self,
        read_model: GuestReadModel,
        fallback: tuple[GuestDTO, ...] = DEFAULT_GUESTS,
    ):
        self._read_model = read_model
        self._fallback = fallback
        self._lock = threading.Lock()
        self._snapshot: tuple[GuestDTO, ...] = ()
        self._generation = 0

    async def get(self) -> tuple[GuestDTO, ...]:
        snapshot = self._snapshot
        if snapshot:
            return snapshot

        generation = self._generation
        if not self._read_model.is_configured:
            logger.warning("Supabase not configured - using in-memory guest list")
            guests = self._fallback
        else:
            try:
                guests = tuple(await self._read_model.list_guests())
            except StoreError as e:
                raise DirectoryUnavailableError("Could not load the guest list") from e
            logger.info("Loaded %d guests from Supabase", len(guests))

        with self._lock:
            # An invalidation happened while we were fetching
            if generation == self._generation:
                self._snapshot = guests
        return guests

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = ()
            self._generation += 1

    @property
    def is_cached(self) -> bool:
        return bool(self._snapshot)


guest_directory = GuestDirectory(read_model=SupabaseGuestReadModel())


def get_guest_directory() -> GuestDirectory:
    """Dependency to get the shared guest directory."""
    return guest_directory
