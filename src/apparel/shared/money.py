"""Money helpers: supported currencies and exact two-place decimal amounts."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

VALID_CURRENCIES = frozenset(
    {
        "USD",
        "EUR",
        "GBP",
        "JPY",
        "CAD",
        "AUD",
        "CHF",
        "CNY",
        "INR",
        "MXN",
        "BRL",
        "KRW",
        "SGD",
        "HKD",
        "NOK",
        "SEK",
        "DKK",
        "NZD",
        "ZAR",
        "BTC",
        "SATS",
    }
)


def to_amount(value, field: str = "amount") -> Decimal:
    """Coerce ``value`` to a Decimal with exactly two places.

    Strings and ints convert exactly. Floats go through ``str`` so ``19.99``
    stays ``19.99``. Values carrying sub-cent precision are rejected rather
    than silently rounded.
    """
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError({field: [f"'{value}' is not a valid amount"]}) from None

    if not amount.is_finite():
        raise ValidationError({field: [f"'{value}' is not a valid amount"]})
    if amount != amount.quantize(CENT, rounding=ROUND_HALF_UP):
        raise ValidationError({field: ["Amounts cannot have more than 2 decimal places"]})
    return amount.quantize(CENT)


def line_total(unit_price: Decimal, quantity: int) -> Decimal:
    return (unit_price * quantity).quantize(CENT)


def validate_currency(code: str | None, field: str = "currency") -> str:
    currency = (code or "").upper()
    if currency not in VALID_CURRENCIES:
        raise ValidationError({field: [f"Unsupported currency: {code}"]})
    return currency
