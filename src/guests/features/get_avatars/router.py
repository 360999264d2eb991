from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.guests.features.get_avatars.read_model import (
    GetAvatarsReadModel,
    StoreGetAvatarsReadModel,
)
from src.guests.repository.read_models import SupabaseRSVPReadModel

router = APIRouter()

GET_AVATARS_URL = "/api/get-avatars"


class GuestAvatar(BaseModel):
    name: str
    avatar: str
    message: str


class GetAvatarsResponse(BaseModel):
    success: bool
    avatars: list[GuestAvatar]


def get_avatars_read_model() -> GetAvatarsReadModel:
    """Dependency to get the avatar read model instance."""
    return StoreGetAvatarsReadModel(rsvp_read_model=SupabaseRSVPReadModel())


@router.get(GET_AVATARS_URL, response_model=GetAvatarsResponse)
async def get_avatars(
    read_model: GetAvatarsReadModel = Depends(get_avatars_read_model),
) -> GetAvatarsResponse:
    """
    Avatars for the virtual plaza.
    Only attending, verified guests are shown, one per first name.
    """
    avatars = await read_model.get_avatars()
    return GetAvatarsResponse(
        success=True,
        avatars=[GuestAvatar(name=a.name, avatar=a.avatar, message=a.message) for a in avatars],
    )
