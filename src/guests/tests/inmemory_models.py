"""In-memory models for testing - no store or email provider required."""

import itertools
from types import SimpleNamespace

from src.config.database import StoreError
from src.email_service.base import EmailDeliveryError, EmailServiceBase
from src.guests.directory import GuestDirectory
from src.guests.dtos import (
    AvatarData,
    AvatarRowDTO,
    AvatarSelectionDTO,
    GuestDTO,
    GuestRecordDTO,
    RSVPRecordDTO,
    RSVPSubmissionDTO,
)
from src.guests.notifications import AdminNotifier
from src.guests.repository.read_models import GuestReadModel, RSVPReadModel
from src.guests.repository.write_models import GuestWriteModel, RSVPWriteModel

ADMIN_EMAIL = "admin@example.com"
ADMIN_API_KEY = "admin-secret"


def email_config() -> SimpleNamespace:
    return SimpleNamespace(
        from_name="Test Wedding",
        from_email="wedding@example.com",
        couple_names="Jemima & Marko",
    )


def admin_config(admin_email: str = ADMIN_EMAIL, admin_api_key: str = ADMIN_API_KEY):
    return SimpleNamespace(
        admin_email=admin_email,
        admin_api_key=admin_api_key,
        public_base_url="https://rsvp.example.com",
    )


# =============================================================================
# Email
# =============================================================================


class InMemoryEmailService(EmailServiceBase):
    """Records emails instead of sending them."""

    def __init__(self, fail: bool = False):
        super().__init__(email_config())
        self.fail = fail
        self.sent_emails: list[dict] = []

    async def _send(self, to_address, subject, html_body, text_body):
        if self.fail:
            raise EmailDeliveryError("provider down")
        self.sent_emails.append(
            {"to": to_address, "subject": subject, "html": html_body, "text": text_body}
        )
        return f"email-{len(self.sent_emails)}"

    def subjects(self) -> list[str]:
        return [email["subject"] for email in self.sent_emails]


def create_test_notifier(email_service: InMemoryEmailService, **config) -> AdminNotifier:
    return AdminNotifier(email_service=email_service, config=admin_config(**config))


# =============================================================================
# Guests
# =============================================================================


def guests_from_names(*names: str) -> list[GuestDTO]:
    return [GuestDTO(id=str(i), name=name) for i, name in enumerate(names, start=1)]


class InMemoryGuestReadModel(GuestReadModel):
    def __init__(self, guests: list[GuestDTO] | None = None, configured: bool = True):
        self.guests: list[GuestDTO] = list(guests or [])
        self.configured = configured
        self.fail = False
        self.calls = 0

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def list_guests(self) -> list[GuestDTO]:
        self.calls += 1
        if self.fail:
            raise StoreError("store down")
        return list(self.guests)


class InMemoryGuestWriteModel(GuestWriteModel):
    """Inserted guests become visible through the paired read model."""

    def __init__(self, read_model: InMemoryGuestReadModel):
        self._read_model = read_model
        self._ids = itertools.count(len(read_model.guests) + 1)
        self.batches: list[list[GuestRecordDTO]] = []
        self.failing_batches: set[int] = set()
        self.ensure_table_calls = 0
        self.ensure_table_fails = False

    @property
    def is_configured(self) -> bool:
        return self._read_model.configured

    async def ensure_table(self) -> None:
        self.ensure_table_calls += 1
        if self.ensure_table_fails:
            raise StoreError("exec_sql not available")

    async def insert_guests(self, guests: list[GuestRecordDTO]) -> None:
        batch_number = len(self.batches) + 1
        self.batches.append(list(guests))
        if batch_number in self.failing_batches:
            raise StoreError(f"batch {batch_number} rejected")
        for guest in guests:
            self._read_model.guests.append(
                GuestDTO(id=str(next(self._ids)), name=guest.name, address=guest.address)
            )


def create_test_directory(*names: str, configured: bool = True) -> GuestDirectory:
    return GuestDirectory(
        read_model=InMemoryGuestReadModel(guests_from_names(*names), configured=configured)
    )


# =============================================================================
# RSVPs
# =============================================================================


class InMemoryRSVPRepository(RSVPReadModel, RSVPWriteModel):
    """Stores RSVP rows the way the rsvps table does, raw avatar_data included."""

    def __init__(self, configured: bool = True):
        self.rows: list[dict] = []
        self.configured = configured
        self.fail = False
        self._ids = itertools.count(1)

    @property
    def is_configured(self) -> bool:
        return self.configured

    def _check(self) -> None:
        if self.fail:
            raise StoreError("store down")

    def add_row(self, **row) -> dict:
        """Insert a row directly, as if written by an earlier request."""
        defaults = {
            "name": "",
            "email": "",
            "is_attending": True,
            "attending_guests": [],
            "diet": "",
            "verified": False,
            "avatar_data": None,
        }
        number = next(self._ids)
        stored = {
            **defaults,
            **row,
            "id": f"rsvp-{number}",
            "submitted_at": f"2026-06-01T12:00:{number:02d}+00:00",
        }
        self.rows.append(stored)
        return stored

    def row(self, rsvp_id: str) -> dict:
        return next(row for row in self.rows if row["id"] == rsvp_id)

    async def save_rsvp(self, submission: RSVPSubmissionDTO, verified: bool) -> None:
        self._check()
        self.add_row(
            name=submission.name,
            email=submission.email,
            is_attending=submission.is_attending,
            attending_guests=list(submission.attending_guests),
            diet=submission.diet,
            verified=verified,
        )

    async def get_latest_rsvp(self, email: str) -> RSVPRecordDTO | None:
        self._check()
        matching = [row for row in self.rows if row["email"] == email]
        if not matching:
            return None
        return RSVPRecordDTO.from_row(max(matching, key=lambda row: row["submitted_at"]))

    async def mark_verified(self, rsvp_id: str) -> None:
        self._check()
        self.row(rsvp_id)["verified"] = True

    async def save_avatars(self, rsvp_id: str, selections: list[AvatarSelectionDTO]) -> None:
        self._check()
        self.row(rsvp_id)["avatar_data"] = [selection.to_dict() for selection in selections]

    async def list_avatar_rows(self) -> list[AvatarRowDTO]:
        self._check()
        result = []
        for row in sorted(self.rows, key=lambda row: row["submitted_at"]):
            if not (row["is_attending"] and row["verified"]):
                continue
            try:
                avatar_data = AvatarData.from_raw(row["avatar_data"])
            except ValueError:
                continue
            result.append(AvatarRowDTO(name=row["name"], avatar_data=avatar_data))
        return result
