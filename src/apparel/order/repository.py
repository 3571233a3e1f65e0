"""Store-scoped queries over the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from apparel.domain import apparel
from apparel.order.order import Order, OrderStatus


@apparel.repository(part_of=Order)
class OrderRepository:
    def get_for_store(self, store_id, order_id) -> Order:
        order = self._dao.query.filter(id=order_id, store_id=store_id).all().first
        if order is None:
            raise ObjectNotFoundError(f"Order {order_id} not found in store {store_id}")
        return order

    def list_for_store(self, store_id) -> list[Order]:
        """Orders of a store, newest first."""
        return self._dao.query.filter(store_id=store_id).order_by("-created_at").limit(None).all().items

    def find_by_invoice(self, invoice_id) -> Order | None:
        return self._dao.query.filter(invoice_id=invoice_id).all().first

    def awaiting_invoice(self, store_id) -> list[Order]:
        """Pending orders whose invoice creation has not succeeded yet, oldest first."""
        pending = (
            self._dao.query.filter(store_id=store_id, status=OrderStatus.PENDING.value)
            .order_by("created_at")
            .limit(None)
            .all()
            .items
        )
        return [order for order in pending if not order.invoice_id]
