"""Tests for ScreenFlowController."""

import logging
from decimal import Decimal

import pytest

from cupcake.errors import InvalidSelectionError, InvalidTransitionError
from cupcake.flow import Screen, ScreenFlowController

from conftest import FIXED_PICKUP_OPTIONS


def advance_to(flow, screen: Screen) -> None:
    """Drive a fresh flow forward to `screen` with a valid order."""
    if screen is Screen.START:
        return
    flow.select_quantity(6)
    if screen is Screen.FLAVOR:
        return
    flow.select_flavor("Chocolate")
    flow.next()
    if screen is Screen.PICKUP:
        return
    flow.select_pickup_date(FIXED_PICKUP_OPTIONS[1])
    flow.next()


class TestInitialState:
    def test_starts_on_start(self, flow):
        assert flow.current_screen is Screen.START
        assert flow.back_stack == (Screen.START,)
        assert flow.can_navigate_back is False


class TestForward:
    def test_select_quantity_moves_to_flavor(self, flow):
        flow.select_quantity(12)

        assert flow.current_screen is Screen.FLAVOR
        assert flow.order.current_state().quantity == 12
        assert flow.can_navigate_back is True

    def test_full_path_to_summary(self, flow):
        flow.select_quantity(6)
        assert flow.order.current_state().price == Decimal("15.00")

        flow.order.set_flavor("Chocolate")
        assert flow.next() is Screen.PICKUP
        assert flow.order.current_state().price == Decimal("15.00")

        flow.order.set_date(flow.order.current_state().pickup_options[1])
        assert flow.next() is Screen.SUMMARY

        state = flow.order.current_state()
        assert state.flavor == "Chocolate"
        assert state.pickup_date == "Tue Oct 20"
        assert state.price == Decimal("15.00")
        assert flow.back_stack == (
            Screen.START, Screen.FLAVOR, Screen.PICKUP, Screen.SUMMARY,
        )

    def test_invalid_quantity_stays_on_start(self, flow):
        with pytest.raises(InvalidSelectionError):
            flow.select_quantity(5)

        assert flow.current_screen is Screen.START
        assert flow.order.current_state().quantity == 0

    def test_next_requires_flavor(self, flow):
        flow.select_quantity(1)

        with pytest.raises(InvalidTransitionError) as exc_info:
            flow.next()

        assert "no flavor selected" in str(exc_info.value)
        assert flow.current_screen is Screen.FLAVOR

    def test_next_requires_pickup_date(self, flow):
        advance_to(flow, Screen.PICKUP)

        with pytest.raises(InvalidTransitionError):
            flow.next()

        assert flow.current_screen is Screen.PICKUP

    @pytest.mark.parametrize("screen", [Screen.START, Screen.SUMMARY])
    def test_next_not_allowed(self, flow, screen):
        advance_to(flow, screen)

        with pytest.raises(InvalidTransitionError):
            flow.next()

        assert flow.current_screen is screen

    def test_select_quantity_only_on_start(self, flow):
        advance_to(flow, Screen.FLAVOR)

        with pytest.raises(InvalidTransitionError):
            flow.select_quantity(12)

        assert flow.order.current_state().quantity == 6

    @pytest.mark.parametrize("screen", [Screen.START, Screen.PICKUP, Screen.SUMMARY])
    def test_select_flavor_only_on_flavor(self, flow, screen):
        advance_to(flow, screen)
        before = flow.order.current_state().flavor

        with pytest.raises(InvalidTransitionError) as exc_info:
            flow.select_flavor("Vanilla")

        assert "select flavor" in str(exc_info.value)
        assert flow.order.current_state().flavor == before
        assert flow.current_screen is screen

    @pytest.mark.parametrize("screen", [Screen.START, Screen.FLAVOR, Screen.SUMMARY])
    def test_select_pickup_date_only_on_pickup(self, flow, screen):
        advance_to(flow, screen)
        before = flow.order.current_state().pickup_date

        with pytest.raises(InvalidTransitionError):
            flow.select_pickup_date(FIXED_PICKUP_OPTIONS[3])

        assert flow.order.current_state().pickup_date == before
        assert flow.current_screen is screen

    def test_invalid_flavor_stays_unset(self, flow):
        advance_to(flow, Screen.FLAVOR)

        with pytest.raises(InvalidSelectionError):
            flow.select_flavor("Pistachio")

        assert flow.order.current_state().flavor == ""


class TestBack:
    def test_back_from_flavor_keeps_quantity(self, flow):
        flow.select_quantity(6)

        assert flow.navigate_up() is Screen.START
        assert flow.can_navigate_back is False
        assert flow.order.current_state().quantity == 6
        assert flow.order.current_state().price == Decimal("15.00")

    def test_back_from_pickup_returns_to_flavor(self, flow):
        advance_to(flow, Screen.PICKUP)

        assert flow.navigate_up() is Screen.FLAVOR
        assert flow.order.current_state().flavor == "Chocolate"

    def test_back_from_summary_returns_to_pickup(self, flow):
        advance_to(flow, Screen.SUMMARY)

        assert flow.navigate_up() is Screen.PICKUP
        assert flow.order.current_state().pickup_date == FIXED_PICKUP_OPTIONS[1]

    def test_back_on_start_not_allowed(self, flow):
        with pytest.raises(InvalidTransitionError):
            flow.navigate_up()

        assert flow.back_stack == (Screen.START,)

    def test_back_and_cancel_differ(self, flow):
        flow.select_quantity(6)
        flow.navigate_up()
        after_back = flow.order.current_state()

        flow.select_quantity(6)
        flow.cancel()
        after_cancel = flow.order.current_state()

        assert after_back.quantity == 6
        assert after_cancel.quantity == 0


class TestCancel:
    @pytest.mark.parametrize("screen", [Screen.FLAVOR, Screen.PICKUP, Screen.SUMMARY])
    def test_cancel_resets_order_and_history(self, flow, screen):
        advance_to(flow, screen)

        flow.cancel()
        state = flow.order.current_state()

        assert flow.current_screen is Screen.START
        assert flow.back_stack == (Screen.START,)
        assert flow.can_navigate_back is False
        assert state.quantity == 0
        assert state.flavor == ""
        assert state.pickup_date == ""
        assert state.price == Decimal("0.00")

    def test_cancel_does_not_share(self, flow, recorder):
        advance_to(flow, Screen.SUMMARY)
        flow.cancel()

        assert recorder.shared == []


class TestSend:
    def test_send_shares_summary_and_resets(self, flow, recorder):
        advance_to(flow, Screen.SUMMARY)

        summary = flow.send()

        assert summary.subject == "New Cupcake Order"
        assert "Quantity: 6 cupcakes" in summary.body
        assert "Flavor: Chocolate" in summary.body
        assert "Pickup date: Tue Oct 20" in summary.body
        assert "Total: $15.00" in summary.body
        assert recorder.shared == [summary]

        assert flow.current_screen is Screen.START
        assert flow.back_stack == (Screen.START,)
        assert flow.order.current_state().quantity == 0

    @pytest.mark.parametrize("screen", [Screen.START, Screen.FLAVOR, Screen.PICKUP])
    def test_send_only_from_summary(self, flow, recorder, screen):
        advance_to(flow, screen)

        with pytest.raises(InvalidTransitionError):
            flow.send()

        assert flow.current_screen is screen
        assert recorder.shared == []

    def test_failing_share_target_still_returns_summary(self, order, caplog):
        class BrokenShareTarget:
            def share(self, subject, body):
                raise OSError("no mail client")

        flow = ScreenFlowController(order, share=BrokenShareTarget())
        advance_to(flow, Screen.SUMMARY)

        with caplog.at_level(logging.ERROR, logger="cupcake.flow"):
            summary = flow.send()

        assert "Total: $15.00" in summary.body
        assert flow.current_screen is Screen.START
        assert flow.order.current_state().quantity == 0
        assert "Share target failed" in caplog.text
        assert "no mail client" in caplog.text

    def test_send_without_share_target(self, order):
        flow = ScreenFlowController(order)
        advance_to(flow, Screen.SUMMARY)

        summary = flow.send()

        assert "Thank you!" in summary.body
        assert flow.current_screen is Screen.START


class TestSubscribe:
    def test_listener_sees_each_screen(self, flow):
        seen = []
        flow.subscribe(seen.append)

        advance_to(flow, Screen.SUMMARY)
        flow.navigate_up()
        flow.cancel()

        assert seen == [
            Screen.FLAVOR, Screen.PICKUP, Screen.SUMMARY, Screen.PICKUP, Screen.START,
        ]

    def test_order_is_reset_before_listener_sees_start(self, flow):
        quantities = []
        flow.subscribe(lambda screen: quantities.append(flow.order.current_state().quantity))

        advance_to(flow, Screen.FLAVOR)
        flow.cancel()

        assert quantities == [6, 0]
