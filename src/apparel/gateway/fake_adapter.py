"""Configurable fake invoice gateway for development and testing.

Issues invoices without any external calls. It can be told to fail, which
is how the "order kept, payment setup failed" path is exercised.
"""

from uuid import uuid4

from apparel.gateway.port import CreatedInvoice, InvoiceCreationFailed, InvoiceGateway

FAKE_WEBHOOK_SIGNATURE = "test-signature"


class FakeInvoiceGateway(InvoiceGateway):
    """Configurable fake invoice gateway."""

    def __init__(self, base_url: str = "http://payments.invalid") -> None:
        self.base_url = base_url.rstrip("/")
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment system unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment system unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_invoice(self, store_id, amount, currency, metadata, redirect_url) -> CreatedInvoice:
        self.calls.append(
            {
                "method": "create_invoice",
                "store_id": store_id,
                "amount": amount,
                "currency": currency,
                "metadata": metadata,
                "redirect_url": redirect_url,
            }
        )

        if not self.should_succeed:
            raise InvoiceCreationFailed(self.failure_reason)

        invoice_id = f"fake_inv_{uuid4().hex[:12]}"
        return CreatedInvoice(
            invoice_id=invoice_id,
            checkout_link=self.checkout_link_for(invoice_id),
            status="New",
        )

    def checkout_link_for(self, invoice_id) -> str:
        return f"{self.base_url}/i/{invoice_id}"

    def verify_webhook_signature(self, payload, signature) -> bool:  # noqa: ARG002
        return signature == FAKE_WEBHOOK_SIGNATURE
