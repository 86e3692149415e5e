from unittest.mock import MagicMock

import pytest

from cremasim.domain import CoffeeMachine, EspressoMachine
from cremasim.logging import create_logger, ring_buffer


@pytest.fixture
def logger():
    logger = create_logger("cremasim.tests")
    ring_buffer(logger).clear()
    return logger


@pytest.fixture
def calm_random():
    """Gaussian stub that never trips the failure model."""
    rng = MagicMock()
    rng.gauss.return_value = 0.0
    return rng


@pytest.fixture
def machine(calm_random, logger):
    return CoffeeMachine(0, 10, 0, 10, 700, random_generator=calm_random, logger=logger)


@pytest.fixture
def espresso_machine(calm_random, logger):
    return EspressoMachine(0, 10, 0, 10, 700, random_generator=calm_random, logger=logger)
