import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from src.guests.dtos import GuestRecordDTO

logger = logging.getLogger(__name__)

HEADER_NAME = "Name"


def parse_guest_rows(rows: Iterable[list[str]]) -> list[GuestRecordDTO]:
    """
    Turn invite list rows into guest records.

    The first row is the header. Rows without at least a name and an address
    column, and rows whose name is empty or the literal header "Name", are skipped.
    """
    records = []
    for index, row in enumerate(rows):
        if index == 0:
            continue
        if len(row) < 2:
            continue
        name = row[0].strip()
        if not name or name == HEADER_NAME:
            continue
        records.append(GuestRecordDTO(name=name, address=row[1].strip()))
    return records


def load_guests_from_csv(path: Path) -> list[GuestRecordDTO]:
    with path.open(newline="", encoding="utf-8-sig") as f:
        records = parse_guest_rows(csv.reader(f))
    logger.info("Loaded %d guests from CSV file: %s", len(records), path)
    return records
