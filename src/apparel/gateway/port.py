"""Invoice gateway port (abstract interface).

Defines the contract every payment-system adapter implements, so the
checkout flow never depends on a particular payment system or on the
network being available.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


class InvoiceCreationFailed(Exception):
    """The payment system could not issue an invoice.

    Covers transport errors, rejections by the payment system and store
    misconfiguration alike.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class CreatedInvoice:
    """An invoice issued by the payment system."""

    invoice_id: str
    checkout_link: str | None = None
    status: str | None = None


class InvoiceGateway(ABC):
    """Abstract invoice gateway interface."""

    @abstractmethod
    def create_invoice(
        self,
        store_id: str,
        amount: Decimal,
        currency: str,
        metadata: dict,
        redirect_url: str | None,
    ) -> CreatedInvoice:
        """Ask the payment system for an invoice. Raises InvoiceCreationFailed."""
        ...

    @abstractmethod
    def verify_webhook_signature(
        self,
        payload: bytes,
        signature: str | None,
    ) -> bool:
        """Verify that a webhook payload is authentically from the payment system."""
        ...

    @abstractmethod
    def checkout_link_for(self, invoice_id: str) -> str:
        """URL where the shopper pays ``invoice_id``."""
        ...
