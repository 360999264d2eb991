from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from src.config.settings import settings
from src.email_service import get_email_service
from src.guests.errors import HANDLED_EXCEPTIONS, describe_error
from src.guests.features.verify_rsvp.pages import error_page, success_page
from src.guests.features.verify_rsvp.write_model import (
    StoreVerifyRSVPWriteModel,
    VerifyRSVPWriteModel,
)
from src.guests.repository.read_models import SupabaseRSVPReadModel
from src.guests.repository.write_models import SupabaseRSVPWriteModel
from src.guests.schemas import MessageResponse
from src.guests.urls import VERIFY_RSVP_PATH

router = APIRouter()

VERIFY_RSVP_URL = VERIFY_RSVP_PATH
VERIFIED_MESSAGE = "RSVP verified successfully"


class VerifyRSVPRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = ""
    api_key: str = Field(default="", alias="apiKey")


def get_verify_rsvp_write_model() -> VerifyRSVPWriteModel:
    """Dependency to get the RSVP verification write model instance."""
    return StoreVerifyRSVPWriteModel(
        config=settings,
        rsvp_read_model=SupabaseRSVPReadModel(),
        rsvp_write_model=SupabaseRSVPWriteModel(),
        email_service=get_email_service(),
    )


@router.get(VERIFY_RSVP_URL, response_class=HTMLResponse)
async def verify_rsvp_page(
    email: str = "",
    apiKey: str = "",
    write_model: VerifyRSVPWriteModel = Depends(get_verify_rsvp_write_model),
) -> HTMLResponse:
    """
    Verify an RSVP from the link in the admin notification email.
    Always answers with an HTML page.
    """
    try:
        await write_model.verify_rsvp(email=email, api_key=apiKey)
    except HANDLED_EXCEPTIONS as e:
        status_code, message = describe_error(e)
        return HTMLResponse(error_page(message), status_code=status_code)
    return HTMLResponse(success_page(email.strip()))


@router.post(VERIFY_RSVP_URL, response_model=MessageResponse)
async def verify_rsvp(
    request: VerifyRSVPRequest,
    write_model: VerifyRSVPWriteModel = Depends(get_verify_rsvp_write_model),
) -> MessageResponse:
    """Verify an RSVP through the API."""
    await write_model.verify_rsvp(email=request.email, api_key=request.api_key)
    return MessageResponse(success=True, message=VERIFIED_MESSAGE)
