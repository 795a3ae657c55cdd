"""Append-only archive of finished projects."""

from typing import List

from bidsmart.core.constants import STORAGE_KEY_CASES
from bidsmart.core.logging import get_logger
from bidsmart.schemas import CaseRecord
from bidsmart.storage.store import StoreAdapter

logger = get_logger("repositories.cases")


class CaseRepository:
    """Archived case records. Records are never updated or deduplicated."""

    def __init__(self, store: StoreAdapter, key: str = STORAGE_KEY_CASES):
        self._store = store
        self._key = key

    def get_all(self) -> List[CaseRecord]:
        return self._store.load(self._key, [], CaseRecord)

    def get_by_project(self, project_id: str) -> List[CaseRecord]:
        return [c for c in self.get_all() if c.project_id == project_id]

    def save(self, record: CaseRecord) -> CaseRecord:
        cases = self.get_all()
        cases.append(record)
        self._store.save(self._key, cases)
        logger.info("Archived case %s for project %s (%s)", record.id, record.project_id, record.result)
        return record
