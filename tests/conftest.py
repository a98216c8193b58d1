"""Pytest fixtures for cupcake tests."""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from cupcake.data_source import default_config
from cupcake.flow import ScreenFlowController
from cupcake.order import OrderState
from cupcake.summary import RecordingShareTarget

# A Monday
FIXED_DAY = date(2026, 10, 19)
FIXED_PICKUP_OPTIONS = ("Mon Oct 19", "Tue Oct 20", "Wed Oct 21", "Thu Oct 22")


def fixed_today() -> date:
    return FIXED_DAY


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    """Built-in shop config: $2.00 per cupcake, $3.00 surcharge."""
    return default_config()


@pytest.fixture
def order(config):
    """An empty order whose pickup window starts on FIXED_DAY."""
    return OrderState(config, today=fixed_today)


@pytest.fixture
def recorder():
    return RecordingShareTarget()


@pytest.fixture
def flow(order, recorder):
    """A flow controller on Start, sharing into `recorder`."""
    return ScreenFlowController(order, share=recorder)
