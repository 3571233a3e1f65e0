"""Store registration — command, handler and lookup."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from apparel.domain import apparel, logger
from apparel.shared.money import validate_currency
from apparel.store.store import Store


@apparel.command(part_of="Store")
class RegisterStore:
    store_id: Identifier(required=True)
    name: String(required=True, max_length=200)
    default_currency: String(max_length=10, default="USD")


@apparel.command_handler(part_of=Store)
class RegisterStoreHandler:
    @handle(RegisterStore)
    def register_store(self, command):
        store = Store(
            id=command.store_id,
            name=command.name,
            default_currency=validate_currency(command.default_currency, "default_currency"),
        )
        current_domain.repository_for(Store).add(store)
        logger.info("store_registered", store_id=command.store_id)
        return str(store.id)


def find_store(store_id):
    """Return the registered store, or None when the id is unknown."""
    results = current_domain.repository_for(Store)._dao.query.filter(id=store_id).all()
    return results.first
