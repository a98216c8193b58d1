"""Tests for order summaries, share targets and formatting helpers."""

import io
import locale
from datetime import date
from decimal import Decimal

from cupcake.models import OrderSnapshot
from cupcake.summary import ConsoleShareTarget, RecordingShareTarget, build_order_summary
from cupcake import utils
from cupcake.utils import (
    format_amount,
    format_pickup_date,
    format_price,
    format_quantity,
    pickup_window,
    use_system_locale,
)


def make_snapshot(quantity=6, flavor="Chocolate", pickup_date="Tue Oct 20", price="15.00"):
    return OrderSnapshot(
        quantity=quantity,
        flavor=flavor,
        pickup_date=pickup_date,
        price=Decimal(price),
        pickup_options=("Mon Oct 19", "Tue Oct 20"),
    )


class TestBuildOrderSummary:
    def test_body_layout(self, config):
        summary = build_order_summary(make_snapshot(), config)

        assert summary.subject == "New Cupcake Order"
        assert summary.body == (
            "Quantity: 6 cupcakes\n"
            "Flavor: Chocolate\n"
            "Pickup date: Tue Oct 20\n"
            "Total: $15.00\n"
            "\n"
            "Thank you!"
        )

    def test_single_cupcake(self, config):
        summary = build_order_summary(make_snapshot(quantity=1, price="5.00"), config)

        assert summary.body.startswith("Quantity: 1 cupcake\n")

    def test_subject_and_currency_follow_config(self, config):
        config.share_subject = "Bakery order"
        snapshot = OrderSnapshot(
            quantity=12,
            flavor="Coffee",
            pickup_date="Mon Oct 19",
            price=Decimal("27"),
            pickup_options=("Mon Oct 19",),
            currency_symbol="€",
        )

        summary = build_order_summary(snapshot, config)

        assert summary.subject == "Bakery order"
        assert "Total: €27.00" in summary.body


class TestShareTargets:
    def test_console_writes_subject_and_body(self):
        stream = io.StringIO()
        ConsoleShareTarget(stream).share("New Cupcake Order", "Quantity: 1 cupcake")

        output = stream.getvalue()
        assert output.startswith("New Cupcake Order\n")
        assert "Quantity: 1 cupcake" in output

    def test_recording_keeps_history(self):
        target = RecordingShareTarget()
        assert target.last is None

        target.share("a", "first")
        target.share("b", "second")

        assert [s.body for s in target.shared] == ["first", "second"]
        assert target.last.subject == "b"


class TestFormatting:
    def test_format_price(self):
        assert format_price(Decimal("15")) == "$15.00"
        assert format_price(Decimal("0")) == "$0.00"
        assert format_price(Decimal("1234.5"), "€") == "€1,234.50"
        assert format_price(Decimal("2.005")) == "$2.01"

    def test_format_amount_rounds_half_up(self):
        assert format_amount(Decimal("15")) == "15.00"
        assert format_amount(Decimal("2.005")) == "2.01"
        assert format_amount(Decimal("0.125")) == "0.13"
        assert format_amount(Decimal("1234.5")) == "1234.50"

    def test_format_pickup_date(self):
        assert format_pickup_date(date(2026, 10, 19)) == "Mon Oct 19"
        assert format_pickup_date(date(2027, 1, 3)) == "Sun Jan 3"

    def test_pickup_window_crosses_month(self):
        window = pickup_window(date(2026, 10, 30), 4)

        assert window == ("Fri Oct 30", "Sat Oct 31", "Sun Nov 1", "Mon Nov 2")

    def test_format_quantity(self):
        assert format_quantity(1) == "1 cupcake"
        assert format_quantity(12) == "12 cupcakes"

    def test_snapshot_to_dict(self):
        data = make_snapshot(price="15").to_dict()

        assert data["price"] == "15.00"
        assert data["formatted_price"] == "$15.00"
        assert data["pickup_options"] == ["Mon Oct 19", "Tue Oct 20"]


class TestSystemLocale:
    def test_sets_lc_time_from_environment(self, monkeypatch):
        calls = []

        def fake_setlocale(category, name=None):
            calls.append((category, name))
            return "de_DE.UTF-8"

        monkeypatch.setattr(utils.locale, "setlocale", fake_setlocale)

        assert use_system_locale() == "de_DE.UTF-8"
        assert calls == [(locale.LC_TIME, "")]

    def test_unknown_locale_is_ignored(self, monkeypatch):
        def fake_setlocale(category, name=None):
            raise locale.Error("unsupported locale setting")

        monkeypatch.setattr(utils.locale, "setlocale", fake_setlocale)

        assert use_system_locale() is None
