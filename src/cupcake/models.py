"""Data models for cupcake."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any
import uuid

from .errors import InvalidConfigError
from .utils import format_amount, format_price


def _utc_now() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _generate_id() -> str:
    """Generate a new session ID."""
    return str(uuid.uuid4())


def _to_decimal(value: Any, name: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidConfigError(f"{name} is not a number: {value!r}")


@dataclass(frozen=True)
class QuantityOption:
    """A labelled quantity choice offered on the start screen."""

    label: str
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuantityOption":
        return cls(label=data["label"], quantity=int(data["quantity"]))


MAX_PICKUP_DAYS = 366


@dataclass
class ShopConfig:
    """Prices and the enumerated choices a shop offers."""

    unit_price: Decimal
    pickup_surcharge: Decimal
    quantity_options: list[QuantityOption]
    flavors: list[str]
    pickup_days: int = 4
    currency_symbol: str = "$"
    share_subject: str = "New Cupcake Order"
    schema_version: int = 1

    def quantities(self) -> list[int]:
        return [opt.quantity for opt in self.quantity_options]

    def validate(self) -> None:
        """
        Check structural invariants.

        Raises:
            InvalidConfigError: If any price, option or window is unusable.
        """
        if self.unit_price < 0:
            raise InvalidConfigError("unit_price must be >= 0")
        if self.pickup_surcharge < 0:
            raise InvalidConfigError("pickup_surcharge must be >= 0")
        if not self.quantity_options:
            raise InvalidConfigError("quantity_options must not be empty")
        for opt in self.quantity_options:
            if opt.quantity < 1:
                raise InvalidConfigError(f"quantity option '{opt.label}' must be >= 1")
        if len(set(self.quantities())) != len(self.quantity_options):
            raise InvalidConfigError("quantity options must be unique")
        if not self.flavors:
            raise InvalidConfigError("flavors must not be empty")
        if any(not isinstance(f, str) for f in self.flavors):
            raise InvalidConfigError("flavor names must be strings")
        if any(not f for f in self.flavors):
            raise InvalidConfigError("flavor names must be non-empty")
        if not 1 <= self.pickup_days <= MAX_PICKUP_DAYS:
            raise InvalidConfigError(f"pickup_days must be between 1 and {MAX_PICKUP_DAYS}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "unit_price": str(self.unit_price),
            "pickup_surcharge": str(self.pickup_surcharge),
            "quantity_options": [o.to_dict() for o in self.quantity_options],
            "flavors": list(self.flavors),
            "pickup_days": self.pickup_days,
            "currency_symbol": self.currency_symbol,
            "share_subject": self.share_subject,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShopConfig":
        for name in ("quantity_options", "flavors"):
            if name in data and not isinstance(data[name], list):
                raise InvalidConfigError(f"{name} must be a list")
        try:
            return cls(
                unit_price=_to_decimal(data["unit_price"], "unit_price"),
                pickup_surcharge=_to_decimal(
                    data.get("pickup_surcharge", "0"), "pickup_surcharge"
                ),
                quantity_options=[
                    QuantityOption.from_dict(o) for o in data["quantity_options"]
                ],
                flavors=list(data["flavors"]),
                pickup_days=int(data.get("pickup_days", 4)),
                currency_symbol=data.get("currency_symbol", "$"),
                share_subject=data.get("share_subject", "New Cupcake Order"),
                schema_version=data.get("schema_version", 1),
            )
        except KeyError as e:
            raise InvalidConfigError(f"missing field {e.args[0]}")
        except (TypeError, ValueError) as e:
            raise InvalidConfigError(str(e))


@dataclass(frozen=True)
class OrderSnapshot:
    """Read-only view of an order at one point in time."""

    quantity: int
    flavor: str
    pickup_date: str
    price: Decimal
    pickup_options: tuple[str, ...]
    currency_symbol: str = "$"

    @property
    def formatted_price(self) -> str:
        return format_price(self.price, self.currency_symbol)

    def to_dict(self) -> dict[str, Any]:
        return {
            "quantity": self.quantity,
            "flavor": self.flavor,
            "pickup_date": self.pickup_date,
            "price": format_amount(self.price),
            "formatted_price": self.formatted_price,
            "pickup_options": list(self.pickup_options),
        }


@dataclass(frozen=True)
class OrderSummary:
    """Subject and body handed to a share collaborator."""

    subject: str
    body: str

    def to_dict(self) -> dict[str, Any]:
        return {"subject": self.subject, "body": self.body}


@dataclass
class SessionInfo:
    """Identity and timestamps of an order session."""

    id: str
    created_at: str = field(default_factory=_utc_now)
    updated_at: str = field(default_factory=_utc_now)

    @classmethod
    def create(cls) -> "SessionInfo":
        now = _utc_now()
        return cls(id=_generate_id(), created_at=now, updated_at=now)
