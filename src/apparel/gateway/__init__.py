"""Invoice gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeInvoiceGateway for development and testing (``INVOICE_GATEWAY = "fake"``)
- GreenfieldInvoiceGateway for a real BTCPay Server (``INVOICE_GATEWAY = "greenfield"``)
"""

from protean.utils.globals import current_domain

from apparel.gateway.fake_adapter import FakeInvoiceGateway
from apparel.gateway.greenfield_adapter import GreenfieldInvoiceGateway
from apparel.gateway.port import CreatedInvoice, InvoiceCreationFailed, InvoiceGateway

__all__ = [
    "CreatedInvoice",
    "InvoiceCreationFailed",
    "InvoiceGateway",
    "get_gateway",
    "reset_gateway",
    "set_gateway",
]

_current_gateway: InvoiceGateway | None = None


def _setting(name, default=None):
    return getattr(current_domain, name, default)


def _build_gateway() -> InvoiceGateway:
    kind = (_setting("INVOICE_GATEWAY", "fake") or "fake").lower()
    if kind == "greenfield":
        return GreenfieldInvoiceGateway(
            base_url=_setting("GREENFIELD_URL", ""),
            api_key=_setting("GREENFIELD_API_KEY", ""),
            webhook_secret=_setting("GREENFIELD_WEBHOOK_SECRET", ""),
        )
    return FakeInvoiceGateway()


def get_gateway() -> InvoiceGateway:
    """Return the current invoice gateway, building it from configuration on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: InvoiceGateway) -> None:
    """Override the active invoice gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to the configured gateway."""
    global _current_gateway
    _current_gateway = None
