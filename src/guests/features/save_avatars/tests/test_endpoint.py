"""Tests for the save-avatars endpoint."""

import pytest

from src.guests.features.save_avatars.router import SAVE_AVATARS_URL, get_save_avatars_write_model
from src.guests.features.save_avatars.write_model import StoreSaveAvatarsWriteModel
from src.guests.tests.inmemory_models import InMemoryRSVPRepository

AVATARS = [
    {"guestName": "Alice Smith", "avatar": "cat", "message": "Yay"},
    {"guestName": "Tom Smith", "avatar": "dog"},
]


@pytest.fixture
def rsvps():
    repository = InMemoryRSVPRepository()
    repository.add_row(name="Alice Smith", email="alice@example.com", verified=True)
    repository.add_row(name="Alice Smith", email="alice@example.com", verified=True)
    return repository


@pytest.fixture
def overrides(rsvps):
    write_model = StoreSaveAvatarsWriteModel(rsvp_read_model=rsvps, rsvp_write_model=rsvps)
    return {get_save_avatars_write_model: lambda: write_model}


@pytest.mark.asyncio
async def test_save_avatars_replaces_data_on_latest_rsvp(client_factory, overrides, rsvps):
    rsvps.rows[1]["avatar_data"] = [{"guestName": "Old", "avatar": "bat"}]

    async with client_factory(overrides) as client:
        response = await client.post(
            SAVE_AVATARS_URL, json={"email": "alice@example.com", "avatars": AVATARS}
        )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Avatar selections saved successfully"}
    assert rsvps.rows[0]["avatar_data"] is None
    assert rsvps.rows[1]["avatar_data"] == [
        {"guestName": "Alice Smith", "avatar": "cat", "message": "Yay"},
        {"guestName": "Tom Smith", "avatar": "dog", "message": ""},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, message",
    [
        ({"email": "", "avatars": AVATARS}, "Email is required"),
        ({"avatars": AVATARS}, "Email is required"),
        ({"email": "alice@example.com", "avatars": []}, "At least one avatar selection is required"),
        (
            {"email": "alice@example.com", "avatars": [{"guestName": " ", "avatar": "cat"}]},
            "Guest name is required for all avatars",
        ),
        (
            {"email": "alice@example.com", "avatars": [{"guestName": "Alice", "avatar": ""}]},
            "Avatar is required for all guests",
        ),
    ],
)
async def test_invalid_selections_are_rejected(client_factory, overrides, rsvps, body, message):
    async with client_factory(overrides) as client:
        response = await client.post(SAVE_AVATARS_URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": message}
    assert all(row["avatar_data"] is None for row in rsvps.rows)


@pytest.mark.asyncio
async def test_email_without_rsvp_returns_404(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(
            SAVE_AVATARS_URL, json={"email": "nobody@example.com", "avatars": AVATARS}
        )

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_store_failure(client_factory, overrides, rsvps):
    rsvps.fail = True

    async with client_factory(overrides) as client:
        response = await client.post(
            SAVE_AVATARS_URL, json={"email": "alice@example.com", "avatars": AVATARS}
        )

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to save avatar selections"}


@pytest.mark.asyncio
async def test_null_message_is_stored_empty(client_factory, overrides, rsvps):
    async with client_factory(overrides) as client:
        response = await client.post(
            SAVE_AVATARS_URL,
            json={
                "email": "alice@example.com",
                "avatars": [{"guestName": "Alice Smith", "avatar": "cat", "message": None}],
            },
        )

    assert response.status_code == 200
    assert rsvps.rows[1]["avatar_data"] == [
        {"guestName": "Alice Smith", "avatar": "cat", "message": ""}
    ]
