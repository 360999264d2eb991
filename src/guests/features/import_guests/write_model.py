"""Write model for importing the invite list into the store.

Rows already on the guest list are skipped, the rest are inserted in batches.
A failing batch does not stop the import; the failures are reported at the end.
"""

import logging
from abc import ABC, abstractmethod

from src.config.database import StoreError, StoreNotConfiguredError
from src.guests.directory import GuestDirectory
from src.guests.dtos import GuestRecordDTO, ImportFailedError, ImportResultDTO
from src.guests.matching import normalize
from src.guests.repository.write_models import GuestWriteModel

logger = logging.getLogger(__name__)

BATCH_SIZE = 50


def dedupe_records(records: list[GuestRecordDTO]) -> tuple[list[GuestRecordDTO], int]:
    """Collapse repeated names (normalized) to their first occurrence."""
    seen: set[str] = set()
    unique = []
    for record in records:
        key = normalize(record.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique, len(records) - len(unique)


class ImportGuestsWriteModel(ABC):
    @abstractmethod
    async def import_guests(self, records: list[GuestRecordDTO]) -> ImportResultDTO:
        """Import guests that are not on the guest list yet.

        Raises:
            StoreNotConfiguredError: no store to import into
            DirectoryUnavailableError: the current guest list could not be loaded
            ImportFailedError: one or more batches were rejected
        """
        raise NotImplementedError


class StoreImportGuestsWriteModel(ImportGuestsWriteModel):
    def __init__(
        self,
        guest_write_model: GuestWriteModel,
        directory: GuestDirectory,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        self._guest_write_model = guest_write_model
        self._directory = directory
        self._batch_size = batch_size

    async def _ensure_table(self) -> None:
        try:
            await self._guest_write_model.ensure_table()
        except StoreError as e:
            logger.warning("Could not create guests table, assuming it exists: %s", e)
        else:
            logger.info("Guests table ready")

    async def import_guests(self, records: list[GuestRecordDTO]) -> ImportResultDTO:
        if not self._guest_write_model.is_configured:
            raise StoreNotConfiguredError()

        await self._ensure_table()

        logger.info("Starting import process for %d guests...", len(records))
        existing = await self._directory.get()
        existing_names = {normalize(guest.name) for guest in existing}

        unique, duplicates = dedupe_records(records)
        if duplicates:
            logger.info("Ignoring %d repeated names in the file", duplicates)

        new_guests = [r for r in unique if normalize(r.name) not in existing_names]
        skipped = len(unique) - len(new_guests)
        logger.info(
            "Found %d existing guests, %d new guests to import", len(existing), len(new_guests)
        )

        if not new_guests:
            logger.info("No new guests to import")
            self._directory.invalidate()
            return ImportResultDTO(imported=0, skipped=skipped, duplicates=duplicates)

        imported = 0
        failed = 0
        for start in range(0, len(new_guests), self._batch_size):
            batch = new_guests[start : start + self._batch_size]
            batch_number = start // self._batch_size + 1
            try:
                await self._guest_write_model.insert_guests(batch)
            except StoreError as e:
                failed += len(batch)
                logger.error(
                    "Error importing batch %d (first guest: %s): %s", batch_number, batch[0].name, e
                )
                continue
            imported += len(batch)
            logger.info("Imported batch %d (%d guests)", batch_number, len(batch))

        # Committed rows must become visible even when other batches failed
        if imported:
            self._directory.invalidate()

        if failed:
            raise ImportFailedError(failed=failed, imported=imported)

        logger.info("Import complete: %d imported, %d skipped", imported, skipped)
        return ImportResultDTO(imported=imported, skipped=skipped, duplicates=duplicates)
