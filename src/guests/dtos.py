import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DirectoryUnavailableError(Exception):
    """Raised when the guest list cannot be fetched from the store."""


class InvalidSubmissionError(Exception):
    """Raised for a well-formed request that breaks a business rule."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(Exception):
    """Raised when the admin credential does not match."""


class AdminNotConfiguredError(Exception):
    """Raised when an admin action is attempted but no admin API key is set."""


class RSVPNotFoundError(Exception):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"No RSVP found for '{email}'")


class ImportFailedError(Exception):
    """Raised when one or more import batches failed.

    Batches that succeeded before or after the failure stay committed.
    """

    def __init__(self, failed: int, imported: int) -> None:
        self.failed = failed
        self.imported = imported
        super().__init__(f"import completed with {failed} errors ({imported} guests imported)")


class RSVPState(str, Enum):
    UNATTENDING = "unattending"
    ATTENDING_UNVERIFIED = "attending_unverified"
    ATTENDING_VERIFIED = "attending_verified"


class AvatarDataState(str, Enum):
    ABSENT = "absent"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True)
class GuestDTO:
    """A guest on the invite list."""

    id: str
    name: str
    address: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GuestDTO":
        return cls(
            id=str(row.get("id", "")),
            name=row.get("name") or "",
            address=row.get("address") or None,
        )


@dataclass(frozen=True)
class GuestRecordDTO:
    """A guest row parsed from the invite list file, not yet stored."""

    name: str
    address: str = ""


@dataclass(frozen=True)
class ImportResultDTO:
    imported: int
    skipped: int
    duplicates: int = 0


@dataclass(frozen=True)
class AvatarSelectionDTO:
    guest_name: str
    avatar: str
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AvatarSelectionDTO":
        if not isinstance(data, dict):
            raise ValueError(f"avatar selection must be an object, got {type(data).__name__}")
        return cls(
            guest_name=str(data.get("guestName") or ""),
            avatar=str(data.get("avatar") or ""),
            message=str(data.get("message") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {"guestName": self.guest_name, "avatar": self.avatar, "message": self.message}


@dataclass(frozen=True)
class AvatarData:
    """The ``avatar_data`` column: absent (null), empty list, or populated list."""

    state: AvatarDataState
    selections: tuple[AvatarSelectionDTO, ...] = ()

    @classmethod
    def from_raw(cls, raw: Any) -> "AvatarData":
        """Parse the stored value. Raises ValueError when it is malformed."""
        if isinstance(raw, str):
            raw = json.loads(raw) if raw.strip() else None
        if raw is None:
            return cls(state=AvatarDataState.ABSENT)
        if not isinstance(raw, list):
            raise ValueError(f"avatar_data must be a list, got {type(raw).__name__}")
        if not raw:
            return cls(state=AvatarDataState.EMPTY)
        return cls(
            state=AvatarDataState.POPULATED,
            selections=tuple(AvatarSelectionDTO.from_dict(item) for item in raw),
        )


@dataclass(frozen=True)
class AvatarRowDTO:
    """Avatar data of one verified, attending RSVP."""

    name: str
    avatar_data: AvatarData


@dataclass(frozen=True)
class GuestAvatarDTO:
    """One entry of the aggregated plaza view."""

    name: str
    avatar: str
    message: str


@dataclass(frozen=True)
class RSVPSubmissionDTO:
    name: str
    email: str
    is_attending: bool
    attending_guests: tuple[str, ...] = ()
    diet: str = ""


@dataclass(frozen=True)
class RSVPRecordDTO:
    """A stored RSVP row."""

    id: str
    name: str
    email: str
    is_attending: bool
    verified: bool
    attending_guests: tuple[str, ...] = ()
    diet: str = ""
    submitted_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "RSVPRecordDTO":
        return cls(
            id=str(row.get("id", "")),
            name=row.get("name") or "",
            email=row.get("email") or "",
            is_attending=bool(row.get("is_attending")),
            verified=bool(row.get("verified")),
            attending_guests=tuple(row.get("attending_guests") or ()),
            diet=row.get("diet") or "",
            submitted_at=row.get("submitted_at"),
        )

    def as_submission(self) -> RSVPSubmissionDTO:
        return RSVPSubmissionDTO(
            name=self.name,
            email=self.email,
            is_attending=self.is_attending,
            attending_guests=self.attending_guests,
            diet=self.diet,
        )


@dataclass(frozen=True)
class RSVPResultDTO:
    state: RSVPState
    message: str

    @property
    def verified(self) -> bool:
        return self.state == RSVPState.ATTENDING_VERIFIED
