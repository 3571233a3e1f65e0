"""Payment system webhook receiver.

Greenfield deliveries are JSON with a ``type`` and an ``invoiceId``, signed
in the ``BTCPay-Sig`` header. Settled invoices mark their order paid;
expired or invalid invoices cancel an order that is still waiting for
payment. Everything else is acknowledged and ignored.
"""

import json

from fastapi import APIRouter, HTTPException, Request
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from apparel.api.schemas import StatusResponse
from apparel.domain import logger
from apparel.gateway import get_gateway
from apparel.order.order import Order
from apparel.order.status import CancelUnpaidOrder, RecordPaymentReceived

SIGNATURE_HEADER = "BTCPay-Sig"

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def _command_for(event_type, invoice_id):
    if event_type == "InvoiceSettled":
        return RecordPaymentReceived(invoice_id=invoice_id)
    if event_type in ("InvoiceExpired", "InvoiceInvalid"):
        return CancelUnpaidOrder(invoice_id=invoice_id, reason=f"Payment {event_type.removeprefix('Invoice').lower()}")
    return None


@router.post("/invoices", response_model=StatusResponse)
async def receive_invoice_webhook(request: Request) -> StatusResponse:
    payload = await request.body()
    if not get_gateway().verify_webhook_signature(payload, request.headers.get(SIGNATURE_HEADER)):
        logger.warning("webhook_rejected", reason="invalid signature")
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    try:
        event = json.loads(payload)
    except ValueError:
        event = None
    if not isinstance(event, dict):
        raise ValidationError({"payload": ["Webhook body must be a JSON object"]})

    event_type = event.get("type")
    invoice_id = event.get("invoiceId")
    command = _command_for(event_type, invoice_id) if invoice_id else None
    if command is None:
        logger.info("webhook_ignored", event_type=event_type, invoice_id=invoice_id)
        return StatusResponse(status="ignored")

    if current_domain.repository_for(Order).find_by_invoice(invoice_id) is None:
        logger.info("webhook_ignored", event_type=event_type, invoice_id=invoice_id, reason="unknown invoice")
        return StatusResponse(status="ignored")

    current_domain.process(command, asynchronous=False)
    return StatusResponse()
