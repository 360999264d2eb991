"""Name comparison rules shared by verification, import and avatars.

Matching is exact after normalization; there is no fuzzy or phonetic
matching, so a typo in a submitted name is a miss.
"""

from collections.abc import Iterable

from src.guests.dtos import GuestDTO


def normalize(value: str) -> str:
    return value.strip().lower()


def matches(a: str, b: str) -> bool:
    return normalize(a) == normalize(b)


def find_guest(name: str, directory: Iterable[GuestDTO]) -> GuestDTO | None:
    """Return the first guest whose name normalizes equal to ``name``."""
    wanted = normalize(name)
    for guest in directory:
        if normalize(guest.name) == wanted:
            return guest
    return None


def unmatched_names(names: Iterable[str], directory: Iterable[GuestDTO]) -> list[str]:
    """Names (in input order) with no counterpart in the directory."""
    known = {normalize(guest.name) for guest in directory}
    return [name for name in names if normalize(name) not in known]


def first_name(full_name: str) -> str:
    """Text before the first space, or the whole (trimmed) name."""
    return full_name.strip().split(" ", 1)[0]
