"""Screen flow: which screen is active and how the user moves between them."""

import logging
from enum import Enum
from typing import Callable

from .errors import InvalidTransitionError
from .models import OrderSummary
from .observable import Listeners
from .order import OrderState
from .summary import ShareTarget, build_order_summary

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    """Screens of the ordering flow, in order."""

    START = "Start"
    FLAVOR = "Flavor"
    PICKUP = "Pickup"
    SUMMARY = "Summary"


# Forward edges taken by next(); Start -> Flavor goes through select_quantity()
NEXT_SCREEN: dict[Screen, Screen] = {
    Screen.FLAVOR: Screen.PICKUP,
    Screen.PICKUP: Screen.SUMMARY,
}


class ScreenFlowController:
    """
    Linear Start -> Flavor -> Pickup -> Summary flow with an explicit back stack.

    The stack always holds at least Start. Cancel and send discard history
    and return to Start with a fresh order; back pops a single entry and
    keeps the order as it is.
    """

    def __init__(self, order: OrderState, share: ShareTarget | None = None):
        self.order = order
        self.share = share
        self._stack: list[Screen] = [Screen.START]
        self._listeners: Listeners[Screen] = Listeners()

    @property
    def current_screen(self) -> Screen:
        return self._stack[-1]

    @property
    def can_navigate_back(self) -> bool:
        return len(self._stack) > 1

    @property
    def back_stack(self) -> tuple[Screen, ...]:
        return tuple(self._stack)

    def subscribe(self, listener: Callable[[Screen], None]) -> Callable[[], None]:
        """Register a listener for screen changes. Returns an unsubscribe callable."""
        return self._listeners.subscribe(listener)

    def _require(self, screen: Screen, action: str) -> None:
        if self.current_screen is not screen:
            logger.info("Rejected %s on %s", action, self.current_screen.value)
            raise InvalidTransitionError(self.current_screen.value, action)

    def _push(self, screen: Screen) -> None:
        logger.debug("Navigate %s -> %s", self.current_screen.value, screen.value)
        self._stack.append(screen)
        self._listeners.publish(screen)

    def _pop_to_start(self) -> None:
        self._stack = [Screen.START]
        self._listeners.publish(Screen.START)

    def select_quantity(self, quantity: int) -> None:
        """Choose a quantity on Start and advance to Flavor."""
        self._require(Screen.START, "select quantity")
        self.order.set_quantity(quantity)
        self._push(Screen.FLAVOR)

    def select_flavor(self, flavor: str) -> None:
        """Choose a flavor on Flavor. The screen does not change."""
        self._require(Screen.FLAVOR, "select flavor")
        self.order.set_flavor(flavor)

    def select_pickup_date(self, pickup_date: str) -> None:
        """Choose a pickup date on Pickup. The screen does not change."""
        self._require(Screen.PICKUP, "select pickup date")
        self.order.set_date(pickup_date)

    def next(self) -> Screen:
        """Advance from Flavor or Pickup once that screen's choice is made."""
        screen = self.current_screen
        target = NEXT_SCREEN.get(screen)
        if target is None:
            logger.info("Rejected next on %s", screen.value)
            raise InvalidTransitionError(screen.value, "go next")

        state = self.order.current_state()
        if screen is Screen.FLAVOR and not state.flavor:
            raise InvalidTransitionError(screen.value, "go next", "no flavor selected")
        if screen is Screen.PICKUP and not state.pickup_date:
            raise InvalidTransitionError(screen.value, "go next", "no pickup date selected")

        self._push(target)
        return target

    def navigate_up(self) -> Screen:
        """Pop one screen off the back stack. The order is kept."""
        if not self.can_navigate_back:
            logger.info("Rejected back on %s", self.current_screen.value)
            raise InvalidTransitionError(self.current_screen.value, "go back", "no history")
        left = self._stack.pop()
        logger.debug("Back %s -> %s", left.value, self.current_screen.value)
        self._listeners.publish(self.current_screen)
        return self.current_screen

    def cancel(self) -> None:
        """Discard the order and all history, returning to Start."""
        logger.debug("Cancel from %s", self.current_screen.value)
        self.order.reset_order()
        self._pop_to_start()

    def send(self) -> OrderSummary:
        """
        Send the order from Summary.

        Builds the summary from the current order, resets the order,
        returns to Start and hands the summary to the share collaborator.
        The order is already reset when sharing runs, so a failing share
        target is logged and the summary is still returned to the caller.
        """
        self._require(Screen.SUMMARY, "send order")
        summary = build_order_summary(self.order.current_state(), self.order.config)
        self.order.reset_order()
        self._pop_to_start()
        logger.debug("Order sent: %s", summary.subject)
        if self.share is not None:
            try:
                self.share.share(summary.subject, summary.body)
            except Exception:
                logger.exception("Share target failed for %s", summary.subject)
        return summary
