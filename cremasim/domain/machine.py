"""
The coffee machine state machine.

A ``CoffeeMachine`` owns a water tank and a bean tank, tracks whether it is
plugged in, faulted, and how many coffees it has made, and runs every brew
request through an ordered validation pipeline before consuming resources.
After each successful brew a Gaussian sample decides whether the machine
breaks down.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from cremasim.core.tank import BeanTank, Tank
from cremasim.domain.coffee import CoffeeType
from cremasim.domain.containers import CoffeeContainer, Container
from cremasim.domain.failure import (
    DEFAULT_FAILURE_THRESHOLD,
    FailureModel,
    GaussianSource,
    default_random_generator,
)
from cremasim.exceptions import (
    CoffeeTypeMismatchError,
    CremasimError,
    CupNotEmptyError,
    LackOfBeansError,
    LackOfWaterError,
    MachineNotPluggedError,
    UnsupportedFeatureError,
)
from cremasim.logging import get_events, machine_logger
from cremasim.models import MachineStatus

DEFAULT_WATER_PER_SERVING = 0.15
DEFAULT_BEANS_PER_SERVING = 0.01


class CoffeeMachine:
    """
    A simple drip coffee machine.

    Both tanks start at their minimum volume. The machine starts unplugged,
    in working order, with no coffee made.

    Args:
        min_water: Lower bound of the water tank.
        max_water: Upper bound of the water tank.
        min_beans: Lower bound of the bean tank.
        max_beans: Upper bound of the bean tank.
        pump_capacity: Rating of the water pump. Reported in ``status()``
            only; it does not influence brewing.
        random_generator: Gaussian source used by ``evaluate_failure()``.
            Defaults to a fresh ``random.Random``.
        water_per_serving: Water consumed by one brew.
        beans_per_serving: Ground coffee consumed by one brew.
        failure_threshold: Sample magnitude above which the machine faults.
        log_ring_size: Number of events kept by the default logger.
        logger: Logger receiving machine events. Defaults to a logger of
            this machine's own with a ring buffer of ``log_ring_size``.
    """

    supports_crema = False

    def __init__(
        self,
        min_water: float,
        max_water: float,
        min_beans: float,
        max_beans: float,
        pump_capacity: float,
        *,
        random_generator: Optional[GaussianSource] = None,
        water_per_serving: float = DEFAULT_WATER_PER_SERVING,
        beans_per_serving: float = DEFAULT_BEANS_PER_SERVING,
        failure_threshold: float = DEFAULT_FAILURE_THRESHOLD,
        log_ring_size: int = 200,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if water_per_serving <= 0 or beans_per_serving <= 0:
            raise ValueError("Per-serving quantities must be positive")
        self._water_tank = Tank(min_water, max_water)
        self._bean_tank = BeanTank(min_beans, max_beans)
        self.pump_capacity = pump_capacity
        self.water_per_serving = water_per_serving
        self.beans_per_serving = beans_per_serving
        self.failure_model = FailureModel(failure_threshold)
        self._random_generator: GaussianSource = random_generator or default_random_generator()
        self.logger = logger or machine_logger(log_ring_size)

        self._plugged = False
        self._out_of_order = False
        self._nb_coffee_made = 0

    # --- observers ---
    def is_plugged(self) -> bool:
        return self._plugged

    def is_out_of_order(self) -> bool:
        return self._out_of_order

    @property
    def nb_coffee_made(self) -> int:
        return self._nb_coffee_made

    @property
    def water_tank(self) -> Tank:
        """The live water tank. Mutating it directly skips the machine's event log."""
        return self._water_tank

    @property
    def bean_tank(self) -> BeanTank:
        """The live bean tank. Mutating it directly skips the machine's event log."""
        return self._bean_tank

    @property
    def random_generator(self) -> GaussianSource:
        return self._random_generator

    @random_generator.setter
    def random_generator(self, generator: GaussianSource) -> None:
        self._random_generator = generator

    def status(self) -> MachineStatus:
        bean_type = self._bean_tank.coffee_type
        return MachineStatus(
            plugged=self._plugged,
            out_of_order=self._out_of_order,
            nb_coffee_made=self._nb_coffee_made,
            water_volume=self._water_tank.actual_volume,
            bean_volume=self._bean_tank.actual_volume,
            bean_type=bean_type.name if bean_type else None,
            pump_capacity=self.pump_capacity,
            supports_crema=self.supports_crema,
        )

    def events(self) -> list[dict[str, Any]]:
        return get_events(self.logger)

    # --- power and maintenance ---
    def plug_in(self) -> None:
        if not self._plugged:
            self._plugged = True
            self._log("plugged_in")

    def reset(self) -> None:
        """Clear the fault and the production counter. Tanks are left as they are."""
        self._out_of_order = False
        self._nb_coffee_made = 0
        self._log("machine_reset")

    def add_water(self, amount: float) -> None:
        self._water_tank.increase(amount)
        self._log("water_added", {"amount": amount, "volume": self._water_tank.actual_volume})

    def add_beans(self, amount: float, coffee_type: CoffeeType) -> None:
        self._bean_tank.load(amount, coffee_type)
        self._log(
            "beans_added",
            {"amount": amount, "coffee_type": _type_name(coffee_type), "volume": self._bean_tank.actual_volume},
        )

    def evaluate_failure(self) -> bool:
        """
        Draw one Gaussian sample and put the machine out of order if its
        magnitude exceeds the failure threshold.

        Returns:
            ``True`` if this evaluation caused a fault.
        """
        failed, value = self.failure_model.roll(self._random_generator)
        if failed:
            self._out_of_order = True
            self._log(
                "machine_failure",
                {"sample": value, "threshold": self.failure_model.threshold},
                level=logging.WARNING,
            )
        return failed

    # --- brewing ---
    def make_coffee(self, container: Container, coffee_type: CoffeeType, crema: bool = False) -> CoffeeContainer:
        """
        Brew one serving of ``coffee_type`` into ``container``.

        Validation runs in a fixed order and stops at the first failure. No
        tank or counter is touched unless every check passes. The failure roll
        happens after the coffee is made, so a brew can succeed and still
        leave the machine out of order.

        Args:
            container: An empty vessel.
            coffee_type: The coffee type requested.
            crema: Ask for crema on top. Only machines with
                ``supports_crema`` accept it.

        Returns:
            A filled ``CoffeeContainer`` with the container's capacity.

        Raises:
            MachineNotPluggedError: The machine is not plugged in.
            CupNotEmptyError: ``container`` is not empty.
            UnsupportedFeatureError: Crema was requested from a simple machine.
            LackOfWaterError: Not enough water for one serving.
            CoffeeTypeMismatchError: ``coffee_type`` differs from the loaded beans.
            LackOfBeansError: Not enough beans for one serving.
        """
        self._validate_brew(container, coffee_type, crema)

        if self._out_of_order:
            self._log("brew_while_out_of_order", level=logging.WARNING)

        self._water_tank.decrease(self.water_per_serving)
        self._bean_tank.decrease(self.beans_per_serving)

        result = CoffeeContainer.filled_from(container, coffee_type, crema=crema)
        self._nb_coffee_made += 1
        self._log(
            "coffee_made",
            {"coffee_type": _type_name(coffee_type), "capacity": result.capacity, "crema": crema,
             "nb_coffee_made": self._nb_coffee_made},
        )

        self.evaluate_failure()
        return result

    def _validate_brew(self, container: Container, coffee_type: CoffeeType, crema: bool) -> None:
        if not self._plugged:
            raise self._reject(MachineNotPluggedError("You must plug your coffee machine."))
        if not container.is_empty():
            raise self._reject(CupNotEmptyError("The container given is not empty."))
        if crema and not self.supports_crema:
            raise self._reject(UnsupportedFeatureError("Cannot make crema with a simple coffee machine."))
        if not self._water_tank.can_supply(self.water_per_serving):
            raise self._reject(LackOfWaterError("You must add more water in the water tank."))
        loaded = self._bean_tank.coffee_type
        if coffee_type is not loaded:
            raise self._reject(CoffeeTypeMismatchError(
                "The type of coffee to be made in the cup is different from that in the tank. "
                f"Requested: {_type_name(coffee_type)}, in tank: {_type_name(loaded)}."
            ))
        if not self._bean_tank.can_supply(self.beans_per_serving):
            raise self._reject(LackOfBeansError("You must add more coffee beans in the bean tank."))

    def _reject(self, exc: CremasimError) -> CremasimError:
        self._log("brew_rejected", {"error": type(exc).__name__, "message": str(exc)})
        return exc

    def _log(self, event: str, details: Optional[dict[str, Any]] = None, level: int = logging.INFO) -> None:
        self.logger.log(level, event, extra={"details": details or {}})

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(plugged={self._plugged}, out_of_order={self._out_of_order}, "
            f"nb_coffee_made={self._nb_coffee_made}, water={self._water_tank.actual_volume}, "
            f"beans={self._bean_tank.actual_volume})"
        )


class EspressoMachine(CoffeeMachine):
    """A coffee machine able to top its coffee with crema."""

    supports_crema = True


def _type_name(coffee_type: Any) -> str:
    if coffee_type is None:
        return "nothing"
    return getattr(coffee_type, "name", None) or str(coffee_type)
