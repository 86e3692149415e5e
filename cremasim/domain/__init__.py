"""
This package defines the core domain models for the cremasim library: the
coffee machine itself, the coffee types it brews, the vessels it fills and
the failure model that decides when it breaks down.
"""
from cremasim.domain.coffee import CoffeeType
from cremasim.domain.containers import CoffeeContainer, Container, Cup, Mug
from cremasim.domain.failure import FailureModel, GaussianSource
from cremasim.domain.machine import CoffeeMachine, EspressoMachine
from cremasim.domain.factory import create_machine

__all__ = [
    "CoffeeType",
    "CoffeeContainer",
    "Container",
    "Cup",
    "Mug",
    "FailureModel",
    "GaussianSource",
    "CoffeeMachine",
    "EspressoMachine",
    "create_machine",
]
