"""An order session: one order plus the screen flow that drives it."""

from datetime import date
from typing import Any, Callable

from .flow import ScreenFlowController
from .models import SessionInfo, ShopConfig, _utc_now
from .order import OrderState
from .summary import ShareTarget


class OrderSession:
    """Owns the OrderState and ScreenFlowController for a single user."""

    def __init__(self, info: SessionInfo, order: OrderState, flow: ScreenFlowController):
        self.info = info
        self.order = order
        self.flow = flow
        order.subscribe(self._touch)
        flow.subscribe(self._touch)

    @property
    def id(self) -> str:
        return self.info.id

    def _touch(self, _value: Any) -> None:
        self.info.updated_at = _utc_now()

    @classmethod
    def create(
        cls,
        config: ShopConfig,
        share: ShareTarget | None = None,
        today: Callable[[], date] | None = None,
    ) -> "OrderSession":
        """Create a fresh session with a new ID and an empty order."""
        order = OrderState(config, today=today)
        flow = ScreenFlowController(order, share=share)
        return cls(SessionInfo.create(), order, flow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.info.id,
            "screen": self.flow.current_screen.value,
            "can_navigate_back": self.flow.can_navigate_back,
            "back_stack": [s.value for s in self.flow.back_stack],
            "order": self.order.current_state().to_dict(),
            "created_at": self.info.created_at,
            "updated_at": self.info.updated_at,
        }
