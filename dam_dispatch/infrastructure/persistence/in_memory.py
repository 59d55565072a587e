"""In-memory repositories backing the domain repository ports."""
import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, Generic, List, Optional, TypeVar

from dam_dispatch.domain.base.entity import Entity
from dam_dispatch.domain.invoice import Invoice, InvoiceRepository
from dam_dispatch.domain.presence import DevicePresence, DevicePresenceRepository
from dam_dispatch.infrastructure.logging.logger import get_logger

T = TypeVar("T", bound=Entity)


class InMemoryStore(Generic[T]):
    """
    Thread-safe entity table with sequential integer identifiers.

    Entities are copied on the way in and on the way out so callers never
    share mutable state with the store.
    """

    def __init__(self) -> None:
        self._items: Dict[int, T] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()
        self._logger = get_logger(self.__class__.__name__)

    def add(self, entity: T) -> T:
        with self._lock:
            entity_id = entity.id if entity.id is not None else next(self._ids)
            if entity_id in self._items:
                raise ValueError(f"{type(entity).__name__} {entity_id} already exists")
            stored = entity.model_copy(
                update={
                    "id": entity_id,
                    "created_at": entity.created_at or datetime.now(timezone.utc),
                }
            )
            self._items[entity_id] = stored
        self._logger.debug("Stored entity", entity_type=type(entity).__name__, entity_id=entity_id)
        return stored.model_copy()

    def get_by_id(self, entity_id: int) -> Optional[T]:
        with self._lock:
            entity = self._items.get(entity_id)
        return entity.model_copy() if entity is not None else None

    def find_all(self) -> List[T]:
        with self._lock:
            return [entity.model_copy() for entity in self._items.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class InMemoryInvoiceRepository(InvoiceRepository):
    """Invoice repository kept in process memory."""

    def __init__(self) -> None:
        self._store: InMemoryStore[Invoice] = InMemoryStore()

    def add(self, invoice: Invoice) -> Invoice:
        return self._store.add(invoice)

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        return self._store.get_by_id(invoice_id)

    def find_all(self) -> List[Invoice]:
        return self._store.find_all()


class InMemoryDevicePresenceRepository(DevicePresenceRepository):
    """Device presence repository kept in process memory."""

    def __init__(self) -> None:
        self._store: InMemoryStore[DevicePresence] = InMemoryStore()

    def add(self, presence: DevicePresence) -> DevicePresence:
        return self._store.add(presence)

    def get_by_id(self, presence_id: int) -> Optional[DevicePresence]:
        return self._store.get_by_id(presence_id)

    def find_all(self) -> List[DevicePresence]:
        return self._store.find_all()
