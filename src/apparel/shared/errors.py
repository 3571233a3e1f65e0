"""Checkout error taxonomy.

All three are ``ValidationError`` subclasses so that callers catching
validation failures also catch them, and the HTTP layer answers 400 with
field-keyed messages.
"""

from protean.exceptions import ValidationError


class ItemsUnavailableError(ValidationError):
    """One or more requested variants is missing, belongs to another store, or is unavailable."""

    def __init__(self, missing_variant_ids):
        self.variant_ids = sorted(missing_variant_ids)
        super().__init__(
            {"items": [f"Some items are no longer available: {', '.join(self.variant_ids)}"]},
        )


class EmptyOrderError(ValidationError):
    """The checkout request carried no line items."""

    def __init__(self):
        super().__init__({"items": ["Order must contain at least one item"]})


class MixedCurrencyError(ValidationError):
    """The cart mixes products priced in different currencies."""

    def __init__(self, currencies):
        self.currencies = sorted(currencies)
        super().__init__(
            {"currency": [f"Cart mixes currencies ({', '.join(self.currencies)}); check out one currency at a time"]},
        )
