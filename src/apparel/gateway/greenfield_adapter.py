"""Invoice gateway backed by a BTCPay Server Greenfield API.

Creates invoices with ``POST /api/v1/stores/{store_id}/invoices`` and
verifies webhook deliveries signed with the ``BTCPay-Sig`` header
(``sha256=<hex HMAC of the raw body>``).
"""

import hashlib
import hmac

import requests

from apparel.gateway.port import CreatedInvoice, InvoiceCreationFailed, InvoiceGateway

DEFAULT_TIMEOUT = 10


class GreenfieldInvoiceGateway(InvoiceGateway):
    def __init__(self, base_url: str, api_key: str, webhook_secret: str = "", timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.timeout = timeout
        self.session = requests.Session()

    def create_invoice(self, store_id, amount, currency, metadata, redirect_url) -> CreatedInvoice:
        if not self.api_key:
            raise InvoiceCreationFailed("Payment system API key is not configured")

        body = {
            "amount": str(amount),
            "currency": currency,
            "metadata": metadata,
            "checkout": {
                "redirectURL": redirect_url,
                "redirectAutomatically": False,
            },
        }

        try:
            response = self.session.post(
                f"{self.base_url}/api/v1/stores/{store_id}/invoices",
                json=body,
                headers={"Authorization": f"token {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise InvoiceCreationFailed(f"Payment system unreachable: {exc}") from exc

        if response.status_code == 404:
            raise InvoiceCreationFailed(f"Store {store_id} is not known to the payment system")
        if not response.ok:
            raise InvoiceCreationFailed(f"Payment system rejected the invoice ({response.status_code}): {response.text}")

        try:
            data = response.json()
        except ValueError as exc:
            raise InvoiceCreationFailed("Payment system returned a malformed response") from exc

        if not isinstance(data, dict):
            raise InvoiceCreationFailed("Payment system returned a malformed response")
        if not data.get("id"):
            raise InvoiceCreationFailed("Payment system response carried no invoice id")

        return CreatedInvoice(
            invoice_id=data["id"],
            checkout_link=data.get("checkoutLink"),
            status=data.get("status"),
        )

    def checkout_link_for(self, invoice_id) -> str:
        return f"{self.base_url}/i/{invoice_id}"

    def verify_webhook_signature(self, payload, signature) -> bool:
        if not self.webhook_secret or not signature:
            return False

        scheme, _, received = signature.partition("=")
        if scheme != "sha256" or not received:
            return False

        expected = hmac.new(self.webhook_secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
        return hmac.compare_digest(expected, received)
