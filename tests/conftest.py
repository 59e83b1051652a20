"""
Shared fixtures for the ATM console test suite
"""

import logging
import pytest
from datetime import datetime, timedelta

from atm_console.clock import FixedClock
from atm_console.config import AtmConfig


START_TIME = datetime(2024, 1, 15, 9, 30, 0)


@pytest.fixture
def clock():
    """Clock that ticks one second per timestamp"""
    return FixedClock(START_TIME, step=timedelta(seconds=1))


@pytest.fixture
def config():
    """Default configuration, independent of the environment"""
    return AtmConfig(_env_file=None, currency="USD", max_pin_attempts=3,
                     statement_max_entries=None, max_opening_balance=None,
                     log_level="CRITICAL")


@pytest.fixture(autouse=True)
def reset_atm_logger():
    """Undo setup_logging() so caplog sees records in every test"""
    yield
    logger = logging.getLogger("atm_console")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
