from urllib.parse import urlencode

from src.config.settings import settings

VERIFY_RSVP_PATH = "/api/verify-rsvp"


def verify_rsvp_url(email: str, api_key: str, base_url: str | None = None) -> str:
    """One-click link an admin opens to promote an RSVP to verified."""
    base = (base_url or settings.public_base_url).rstrip("/")
    return f"{base}{VERIFY_RSVP_PATH}?{urlencode({'email': email, 'apiKey': api_key})}"
