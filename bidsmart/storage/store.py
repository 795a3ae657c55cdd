"""Key-value document store holding JSON-serialized record lists.

Each slot holds one list. Reads never raise on malformed data: an absent
slot and a corrupt slot both yield the caller's fallback, but the two cases
are reported separately through ``LoadResult.state``.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Generic, List, Literal, Optional, Protocol, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from bidsmart.core.exceptions import StorageError
from bidsmart.core.logging import get_logger
from bidsmart.db.models import StorageSlot
from bidsmart.db.session import session_scope

logger = get_logger("storage.store")

T = TypeVar("T", bound=BaseModel)

LoadState = Literal["ok", "absent", "corrupt"]


class SlotBackend(Protocol):
    """Raw string storage addressed by key."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemorySlotBackend:
    """Dict-backed slots (tests, ephemeral runs)."""

    def __init__(self, slots: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(slots or {})

    def read(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        self._slots[key] = value


class SqlSlotBackend:
    """Slots stored as rows of the ``storage_slots`` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(StorageSlot, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            raise StorageError(f"Reading slot failed: {e}", operation="read", key=key) from e

    def write(self, key: str, value: str) -> None:
        # One transaction per write: readers see the old or the new list
        try:
            with session_scope(self._session_factory) as session:
                session.merge(StorageSlot(key=key, value=value, updated_at=datetime.utcnow()))
        except SQLAlchemyError as e:
            raise StorageError(f"Writing slot failed: {e}", operation="write", key=key) from e


@dataclass
class LoadResult(Generic[T]):
    """Items read from a slot plus how they were obtained."""

    items: List[T]
    state: LoadState
    error: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.state != "ok"


class StoreAdapter:
    """Typed load/save of record lists on top of a slot backend."""

    def __init__(self, backend: SlotBackend):
        self._backend = backend
        self._adapters: Dict[type, TypeAdapter] = {}

    def load_result(self, key: str, fallback: Sequence[T], model: Type[T]) -> LoadResult[T]:
        """Load a slot, reporting whether it was present, absent or corrupt.

        Args:
            key: Slot name
            fallback: Items returned when the slot is absent or corrupt
            model: Record type every element must validate against

        Returns:
            LoadResult with items and state
        """
        raw = self._backend.read(key)
        if not raw:
            return LoadResult(items=[m.model_copy() for m in fallback], state="absent")

        try:
            data = json.loads(raw)
            items = self._adapter(model).validate_python(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Slot '%s' is corrupt, using fallback: %s", key, str(e)[:200])
            return LoadResult(
                items=[m.model_copy() for m in fallback],
                state="corrupt",
                error=str(e),
            )

        return LoadResult(items=items, state="ok")

    def load(self, key: str, fallback: Sequence[T], model: Type[T]) -> List[T]:
        """Load a slot; absent or malformed data yields ``fallback``."""
        return self.load_result(key, fallback, model).items

    def save(self, key: str, items: Sequence[BaseModel]) -> None:
        """Serialize and overwrite a slot."""
        payload = json.dumps(
            [item.model_dump(mode="json", by_alias=True) for item in items],
            ensure_ascii=False,
        )
        self._backend.write(key, payload)
        logger.debug("Saved %d records to slot '%s'", len(items), key)

    def _adapter(self, model: Type[T]) -> TypeAdapter:
        adapter = self._adapters.get(model)
        if adapter is None:
            adapter = TypeAdapter(List[model])
            self._adapters[model] = adapter
        return adapter
