"""Persistence adapters."""

from .in_memory import (
    InMemoryDevicePresenceRepository,
    InMemoryInvoiceRepository,
    InMemoryStore,
)

__all__: list[str] = [
    "InMemoryStore",
    "InMemoryInvoiceRepository",
    "InMemoryDevicePresenceRepository",
]
