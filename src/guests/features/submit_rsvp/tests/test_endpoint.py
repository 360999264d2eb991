"""Tests for the submit-rsvp endpoint."""

import pytest

from src.guests.dtos import RSVPResultDTO, RSVPState, RSVPSubmissionDTO
from src.guests.features.submit_rsvp.router import SUBMIT_RSVP_URL, get_submit_rsvp_write_model
from src.guests.features.submit_rsvp.write_model import (
    StoreSubmitRSVPWriteModel,
    SubmitRSVPWriteModel,
)
from src.guests.tests.inmemory_models import (
    InMemoryEmailService,
    InMemoryRSVPRepository,
    create_test_directory,
    create_test_notifier,
)
from src.tasks import BackgroundTaskQueue


class InMemorySubmitRSVPWriteModel(SubmitRSVPWriteModel):
    """Records submissions and reports them verified."""

    def __init__(self):
        self.submissions: list[RSVPSubmissionDTO] = []

    async def submit_rsvp(self, submission: RSVPSubmissionDTO) -> RSVPResultDTO:
        self.submissions.append(submission)
        return RSVPResultDTO(state=RSVPState.ATTENDING_VERIFIED, message="RSVP submitted successfully")


VALID_BODY = {
    "name": "John Smith",
    "email": "john@example.com",
    "isAttending": True,
    "attendingGuests": ["John Smith", "  Jane Smith "],
    "diet": " vegetarian ",
}


@pytest.mark.asyncio
async def test_submit_rsvp_maps_body_to_submission(client_factory):
    write_model = InMemorySubmitRSVPWriteModel()

    async with client_factory({get_submit_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=VALID_BODY)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "RSVP submitted successfully"}
    assert write_model.submissions == [
        RSVPSubmissionDTO(
            name="John Smith",
            email="john@example.com",
            is_attending=True,
            attending_guests=("John Smith", "Jane Smith"),
            diet="vegetarian",
        )
    ]


@pytest.mark.asyncio
async def test_invalid_email_is_rejected(client_factory):
    write_model = InMemorySubmitRSVPWriteModel()

    async with client_factory({get_submit_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={**VALID_BODY, "email": "not-an-email"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid email address"}
    assert write_model.submissions == []


@pytest.mark.asyncio
async def test_missing_fields_are_rejected(client_factory):
    write_model = InMemorySubmitRSVPWriteModel()

    async with client_factory({get_submit_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={"email": "john@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid request format"}


@pytest.fixture
def store_write_model():
    rsvps = InMemoryRSVPRepository()
    email_service = InMemoryEmailService()
    write_model = StoreSubmitRSVPWriteModel(
        directory=create_test_directory("John Smith", "Jane Smith"),
        rsvp_write_model=rsvps,
        email_service=email_service,
        notifier=create_test_notifier(email_service),
        queue=BackgroundTaskQueue(max_pending=10),
    )
    return write_model, rsvps


@pytest.mark.asyncio
async def test_attending_without_guests_returns_400(client_factory, store_write_model):
    write_model, rsvps = store_write_model

    async with client_factory({get_submit_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={**VALID_BODY, "attendingGuests": []})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "At least one guest must be specified when attending",
    }
    assert rsvps.rows == []


@pytest.mark.asyncio
async def test_store_failure_returns_generic_error(client_factory, store_write_model):
    write_model, rsvps = store_write_model
    rsvps.fail = True

    async with client_factory({get_submit_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=VALID_BODY)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Server error - please try again"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"isAttending": False, "attendingGuests": None, "diet": None},
        {"isAttending": True, "attendingGuests": ["John Smith"], "diet": None},
    ],
)
async def test_null_optional_fields_are_accepted(client_factory, body):
    rsvps = InMemoryRSVPRepository()
    email_service = InMemoryEmailService()
    write_model = StoreSubmitRSVPWriteModel(
        directory=create_test_directory("John Smith"),
        rsvp_write_model=rsvps,
        email_service=email_service,
        notifier=create_test_notifier(email_service),
        queue=BackgroundTaskQueue(max_pending=10),
    )

    async with client_factory({get_submit_rsvp_write_model: lambda: write_model}) as client:
        response = await client.post(
            SUBMIT_RSVP_URL, json={"name": "John Smith", "email": "john@example.com", **body}
        )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(rsvps.rows) == 1
    assert rsvps.rows[0]["diet"] == ""
    assert [email["to"] for email in email_service.sent_emails] == ["john@example.com"]
