"""Built-in shop defaults."""

from decimal import Decimal

from .models import QuantityOption, ShopConfig

PRICE_PER_CUPCAKE = Decimal("2.00")
PRICE_FOR_PICKUP = Decimal("3.00")
PICKUP_DAYS = 4

QUANTITY_OPTIONS = [
    QuantityOption("One Cupcake", 1),
    QuantityOption("Six Cupcakes", 6),
    QuantityOption("Twelve Cupcakes", 12),
]

FLAVORS = [
    "Vanilla",
    "Chocolate",
    "Red Velvet",
    "Salted Caramel",
    "Coffee",
]


def default_config() -> ShopConfig:
    """Return a fresh copy of the built-in shop config."""
    return ShopConfig(
        unit_price=PRICE_PER_CUPCAKE,
        pickup_surcharge=PRICE_FOR_PICKUP,
        quantity_options=list(QUANTITY_OPTIONS),
        flavors=list(FLAVORS),
        pickup_days=PICKUP_DAYS,
    )
