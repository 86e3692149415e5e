from __future__ import annotations

from typing import Optional

from cremasim.config import MachineSettings, get_settings
from cremasim.domain.failure import GaussianSource, default_random_generator
from cremasim.domain.machine import CoffeeMachine, EspressoMachine


def create_machine(
    settings: Optional[MachineSettings] = None,
    *,
    espresso: bool = False,
    random_generator: Optional[GaussianSource] = None,
) -> CoffeeMachine:
    settings = settings or get_settings()
    machine_cls = EspressoMachine if espresso else CoffeeMachine
    return machine_cls(
        settings.min_water_volume,
        settings.max_water_volume,
        settings.min_bean_volume,
        settings.max_bean_volume,
        settings.pump_capacity,
        random_generator=random_generator or default_random_generator(settings.random_seed),
        water_per_serving=settings.water_per_serving,
        beans_per_serving=settings.beans_per_serving,
        failure_threshold=settings.failure_threshold,
        log_ring_size=settings.log_ring_size,
    )
