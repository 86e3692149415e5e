from cremasim.config import MachineSettings, get_settings
from cremasim.core import BeanTank, Tank
from cremasim.domain import (
    CoffeeContainer,
    CoffeeMachine,
    CoffeeType,
    Container,
    Cup,
    EspressoMachine,
    FailureModel,
    Mug,
    create_machine,
)
from cremasim.models import MachineStatus
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "BeanTank",
    "CoffeeContainer",
    "CoffeeMachine",
    "CoffeeType",
    "Container",
    "Cup",
    "EspressoMachine",
    "FailureModel",
    "MachineSettings",
    "MachineStatus",
    "Mug",
    "Tank",
    "create_machine",
    "get_settings",
]

try:
    __version__ = version("cremasim")
except PackageNotFoundError:
    __version__ = "0.0.0"
