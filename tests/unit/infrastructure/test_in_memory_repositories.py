"""Tests for the in-memory repositories."""
from datetime import datetime, timezone

import pytest

from dam_dispatch.domain.presence import DevicePresence
from dam_dispatch.infrastructure.persistence import (
    InMemoryDevicePresenceRepository,
    InMemoryInvoiceRepository,
)

from conftest import make_invoice


class TestInMemoryRepositories:
    """Identifier assignment and isolation."""

    def test_ids_are_sequential(self):
        repository = InMemoryInvoiceRepository()
        first = repository.add(make_invoice(1, "10"))
        second = repository.add(make_invoice(2, "20"))
        assert (first.id, second.id) == (1, 2)
        assert first.created_at is not None

    def test_get_by_id(self):
        repository = InMemoryInvoiceRepository()
        stored = repository.add(make_invoice(1, "10"))
        assert repository.get_by_id(stored.id).total_amount == stored.total_amount
        assert repository.get_by_id(99) is None

    def test_returned_entities_are_copies(self):
        repository = InMemoryDevicePresenceRepository()
        stored = repository.add(
            DevicePresence(
                serial_number="SN-1",
                timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
                device_activity_id=3,
            )
        )
        stored.serial_number = "changed"
        assert repository.get_by_id(stored.id).serial_number == "SN-1"

    def test_explicit_duplicate_id_is_rejected(self):
        repository = InMemoryInvoiceRepository()
        invoice = make_invoice(1, "10")
        invoice.id = 7
        repository.add(invoice)
        with pytest.raises(ValueError):
            repository.add(invoice)

    def test_find_all(self):
        repository = InMemoryInvoiceRepository()
        for day in (1, 2, 3):
            repository.add(make_invoice(day, "5"))
        assert len(repository.find_all()) == 3
