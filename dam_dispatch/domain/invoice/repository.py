"""Invoice repository port."""
from abc import ABC, abstractmethod
from typing import List, Optional

from .aggregate import Invoice


class InvoiceRepository(ABC):
    """Storage port for invoices."""

    @abstractmethod
    def add(self, invoice: Invoice) -> Invoice:
        """Persist a new invoice and return it with its identifier assigned."""

    @abstractmethod
    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """Return the invoice with the given identifier, or None."""

    @abstractmethod
    def find_all(self) -> List[Invoice]:
        """Return every stored invoice."""
