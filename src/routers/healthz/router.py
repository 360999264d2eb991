import logging
import time

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.guests.directory import GuestDirectory, get_guest_directory
from src.guests.dtos import DirectoryUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()

HEALTH_URL = "/api/health"


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: int
    guests: int


@router.get(HEALTH_URL, response_model=HealthCheckResponse)
async def health_check(
    directory: GuestDirectory = Depends(get_guest_directory),
) -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running.
    The guest count is best effort and reads 0 when the store is unreachable.
    """
    try:
        guest_count = len(await directory.get())
    except DirectoryUnavailableError as e:
        logger.warning("Health check could not load guests: %s", e)
        guest_count = 0

    return HealthCheckResponse(status="healthy", timestamp=int(time.time()), guests=guest_count)
