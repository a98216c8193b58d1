"""Order state: the current selections and the derived subtotal."""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable

from .errors import InvalidSelectionError
from .models import OrderSnapshot, ShopConfig
from .observable import Listeners
from .utils import pickup_window

logger = logging.getLogger(__name__)

BASE_PRICE = Decimal("0.00")


def calculate_price(quantity: int, config: ShopConfig) -> Decimal:
    """
    Compute the subtotal for a quantity.

    price = quantity * unit_price, plus the pickup surcharge once when
    any cupcakes are ordered.
    """
    price = config.unit_price * quantity
    if quantity > 0:
        price += config.pickup_surcharge
    return price


class OrderState:
    """
    Single source of truth for an in-progress order.

    Every mutation publishes a fresh OrderSnapshot to subscribers. Invalid
    selections raise InvalidSelectionError and leave the state untouched.
    """

    def __init__(
        self,
        config: ShopConfig,
        today: Callable[[], date] | None = None,
    ):
        """
        Initialize OrderState.

        Args:
            config: Prices and allowed choices.
            today: Clock used for the pickup window (for testing).
        """
        self.config = config
        self._today = today or date.today
        self._listeners: Listeners[OrderSnapshot] = Listeners()
        self._quantity = 0
        self._flavor = ""
        self._pickup_date = ""
        self._price = BASE_PRICE
        self._pickup_options: tuple[str, ...] = ()
        self._clear()

    def _clear(self) -> None:
        self._quantity = 0
        self._flavor = ""
        self._pickup_date = ""
        self._pickup_options = pickup_window(self._today(), self.config.pickup_days)
        self._price = calculate_price(0, self.config)

    def _publish(self) -> None:
        self._listeners.publish(self.current_state())

    def subscribe(self, listener: Callable[[OrderSnapshot], None]) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe callable."""
        return self._listeners.subscribe(listener)

    def set_quantity(self, quantity: int) -> None:
        """Set the number of cupcakes and recompute the price."""
        allowed = self.config.quantities()
        if (
            not isinstance(quantity, int)
            or isinstance(quantity, bool)
            or quantity not in allowed
        ):
            logger.info("Rejected quantity %r", quantity)
            raise InvalidSelectionError("quantity", quantity, allowed)
        self._quantity = quantity
        self._price = calculate_price(quantity, self.config)
        logger.debug("Quantity set to %d, price %s", quantity, self._price)
        self._publish()

    def set_flavor(self, flavor: str) -> None:
        """Set the flavor. The price is unaffected."""
        if not flavor or flavor not in self.config.flavors:
            logger.info("Rejected flavor %r", flavor)
            raise InvalidSelectionError("flavor", flavor, self.config.flavors)
        self._flavor = flavor
        logger.debug("Flavor set to %s", flavor)
        self._publish()

    def set_date(self, pickup_date: str) -> None:
        """Set the pickup date. Must be one of the current pickup options."""
        if pickup_date not in self._pickup_options:
            logger.info("Rejected pickup date %r", pickup_date)
            raise InvalidSelectionError("pickup_date", pickup_date, self._pickup_options)
        self._pickup_date = pickup_date
        logger.debug("Pickup date set to %s", pickup_date)
        self._publish()

    def reset_order(self) -> None:
        """Clear all selections and recompute the pickup window from today."""
        self._clear()
        logger.debug("Order reset, pickup window %s", ", ".join(self._pickup_options))
        self._publish()

    def current_state(self) -> OrderSnapshot:
        return OrderSnapshot(
            quantity=self._quantity,
            flavor=self._flavor,
            pickup_date=self._pickup_date,
            price=self._price,
            pickup_options=self._pickup_options,
            currency_symbol=self.config.currency_symbol,
        )
