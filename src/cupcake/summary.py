"""Order summary text and share collaborators."""

import sys
from typing import Protocol, TextIO

from .models import OrderSnapshot, OrderSummary, ShopConfig
from .utils import format_quantity


class ShareTarget(Protocol):
    """Anything that can send a plain-text subject and body somewhere."""

    def share(self, subject: str, body: str) -> None: ...


def build_order_summary(snapshot: OrderSnapshot, config: ShopConfig) -> OrderSummary:
    """Build the subject and body shared when an order is sent."""
    body = (
        f"Quantity: {format_quantity(snapshot.quantity)}\n"
        f"Flavor: {snapshot.flavor}\n"
        f"Pickup date: {snapshot.pickup_date}\n"
        f"Total: {snapshot.formatted_price}\n"
        "\n"
        "Thank you!"
    )
    return OrderSummary(subject=config.share_subject, body=body)


class ConsoleShareTarget:
    """Writes shared summaries to a text stream."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def share(self, subject: str, body: str) -> None:
        print(subject, file=self.stream)
        print("=" * len(subject), file=self.stream)
        print(body, file=self.stream)


class RecordingShareTarget:
    """Keeps every shared summary in memory."""

    def __init__(self) -> None:
        self.shared: list[OrderSummary] = []

    def share(self, subject: str, body: str) -> None:
        self.shared.append(OrderSummary(subject=subject, body=body))

    @property
    def last(self) -> OrderSummary | None:
        return self.shared[-1] if self.shared else None
