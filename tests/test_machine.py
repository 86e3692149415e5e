"""Tests for the CoffeeMachine state and brewing pipeline."""
from unittest.mock import MagicMock

import pytest

from cremasim.domain import CoffeeMachine, CoffeeType, Cup, Mug
from cremasim.exceptions import (
    CoffeeTypeMismatchError,
    CupNotEmptyError,
    InvalidVolumeError,
    LackOfBeansError,
    LackOfResourceError,
    LackOfWaterError,
    MachineNotPluggedError,
    UnsupportedFeatureError,
)
from cremasim.models import MachineStatus


def _ready(machine, coffee_type=CoffeeType.ARABICA, water=2, beans=1):
    machine.plug_in()
    machine.add_water(water)
    machine.add_beans(beans, coffee_type)
    return machine


def _snapshot(machine):
    return (
        machine.water_tank.actual_volume,
        machine.bean_tank.actual_volume,
        machine.nb_coffee_made,
    )


def test_initialization(machine):
    assert machine.is_plugged() is False
    assert machine.is_out_of_order() is False
    assert machine.nb_coffee_made == 0
    assert machine.random_generator is not None
    assert machine.water_tank.actual_volume == 0
    assert machine.bean_tank.actual_volume == 0
    assert machine.pump_capacity == 700


def test_default_random_generator_is_created():
    machine = CoffeeMachine(0, 10, 0, 10, 700)
    assert hasattr(machine.random_generator, "gauss")


def test_plug_machine(machine):
    assert machine.is_plugged() is False
    machine.plug_in()
    assert machine.is_plugged() is True
    machine.plug_in()
    assert machine.is_plugged() is True


def test_add_water_in_tank(machine):
    initial = machine.water_tank.actual_volume
    machine.add_water(2)
    assert machine.water_tank.actual_volume == initial + 2


def test_add_water_beyond_max(machine):
    with pytest.raises(InvalidVolumeError):
        machine.add_water(11)
    assert machine.water_tank.actual_volume == 0


def test_add_coffee_in_bean_tank(machine):
    initial = machine.bean_tank.actual_volume
    machine.add_beans(1, CoffeeType.ARABICA)
    assert machine.bean_tank.actual_volume == initial + 1
    assert machine.bean_tank.coffee_type is CoffeeType.ARABICA


def test_make_coffee_requires_plug(machine):
    machine.add_water(2)
    machine.add_beans(1, CoffeeType.MOKA)
    before = _snapshot(machine)
    with pytest.raises(MachineNotPluggedError):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.MOKA)
    assert _snapshot(machine) == before


def test_make_coffee_cup_not_empty(machine):
    mock_cup = MagicMock()
    mock_cup.is_empty.return_value = False
    _ready(machine, CoffeeType.MOKA)
    before = _snapshot(machine)

    with pytest.raises(CupNotEmptyError):
        machine.make_coffee(mock_cup, CoffeeType.MOKA)
    assert _snapshot(machine) == before


def test_crema_unsupported_on_simple_machine(machine):
    _ready(machine)
    before = _snapshot(machine)
    with pytest.raises(UnsupportedFeatureError, match="crema"):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA, crema=True)
    assert _snapshot(machine) == before


def test_espresso_machine_makes_crema(espresso_machine):
    _ready(espresso_machine)
    result = espresso_machine.make_coffee(Cup(capacity=0.05), CoffeeType.ARABICA, crema=True)
    assert result.crema is True
    assert espresso_machine.status().supports_crema is True


def test_lack_of_water_in_tank(machine):
    machine.plug_in()
    machine.add_beans(1, CoffeeType.ARABICA)
    machine.water_tank.decrease(machine.water_tank.actual_volume)

    with pytest.raises(LackOfWaterError) as exc_info:
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    assert "You must add more water in the water tank." in str(exc_info.value)


def test_water_is_checked_before_coffee_type(machine):
    machine.plug_in()
    machine.add_beans(1, CoffeeType.ARABICA)
    with pytest.raises(LackOfWaterError):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.BAHIA)


def test_coffee_type_mismatch(machine):
    machine.reset()
    machine.plug_in()
    machine.add_water(2)
    machine.add_beans(1.5, CoffeeType.ARABICA)
    before = _snapshot(machine)

    with pytest.raises(CoffeeTypeMismatchError) as exc_info:
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.BAHIA)

    message = str(exc_info.value)
    assert "The type of coffee to be made in the cup is different from that in the tank." in message
    assert "BAHIA" in message
    assert "ARABICA" in message
    assert _snapshot(machine) == before


def test_coffee_type_mismatch_with_empty_bean_tank(machine):
    machine.plug_in()
    machine.add_water(2)
    with pytest.raises(CoffeeTypeMismatchError, match="nothing"):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)


def test_lack_of_beans_leaves_water_untouched(machine):
    machine.plug_in()
    machine.add_water(2)
    machine.add_beans(0.005, CoffeeType.ARABICA)
    before = _snapshot(machine)

    with pytest.raises(LackOfBeansError, match="add more coffee beans"):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    assert _snapshot(machine) == before


def test_lack_errors_share_parent():
    assert issubclass(LackOfWaterError, LackOfResourceError)
    assert issubclass(LackOfBeansError, LackOfResourceError)


def test_container_capacity_after_making_coffee(machine):
    mock_container = MagicMock()
    mock_container.capacity = 1.0
    mock_container.is_empty.return_value = True
    _ready(machine)

    result = machine.make_coffee(mock_container, CoffeeType.ARABICA)

    assert result.is_empty() is False
    assert result.capacity == mock_container.capacity


def test_container_coffee_type_after_making_coffee(machine):
    _ready(machine, CoffeeType.LIBERICA)
    result = machine.make_coffee(Mug(capacity=0.3), CoffeeType.LIBERICA)
    assert result.coffee_type is CoffeeType.LIBERICA
    assert result.crema is False


def test_coffee_count_incremented_after_making_coffee(machine):
    _ready(machine)
    former = machine.nb_coffee_made
    machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    assert machine.nb_coffee_made == former + 1


def test_brew_consumes_one_serving(machine):
    _ready(machine, water=2, beans=1)
    machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    assert machine.water_tank.actual_volume == pytest.approx(2 - machine.water_per_serving)
    assert machine.bean_tank.actual_volume == pytest.approx(1 - machine.beans_per_serving)


def test_brew_until_water_runs_out(calm_random, logger):
    machine = CoffeeMachine(
        0, 10, 0, 10, 700,
        random_generator=calm_random, water_per_serving=0.5, beans_per_serving=0.1, logger=logger,
    )
    _ready(machine, water=1, beans=1)
    machine.make_coffee(Cup(capacity=0.5), CoffeeType.ARABICA)
    machine.make_coffee(Cup(capacity=0.5), CoffeeType.ARABICA)
    with pytest.raises(LackOfWaterError):
        machine.make_coffee(Cup(capacity=0.5), CoffeeType.ARABICA)
    assert machine.nb_coffee_made == 2
    assert machine.water_tank.actual_volume == 0


def test_failure_roll_after_brew_still_returns_coffee(machine):
    _ready(machine)
    machine.random_generator.gauss.return_value = 1.0

    result = machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)

    assert result.coffee_type is CoffeeType.ARABICA
    assert machine.nb_coffee_made == 1
    assert machine.is_out_of_order() is True
    machine.random_generator.gauss.assert_called_once_with(0.0, 1.0)


def test_failed_validation_does_not_roll_failure(machine):
    machine.random_generator.gauss.return_value = 5.0
    with pytest.raises(MachineNotPluggedError):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    machine.random_generator.gauss.assert_not_called()
    assert machine.is_out_of_order() is False


def test_brewing_out_of_order_is_allowed_but_logged(machine):
    _ready(machine)
    machine.random_generator.gauss.return_value = 1.0
    machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    machine.random_generator.gauss.return_value = 0.0

    machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)

    assert machine.nb_coffee_made == 2
    names = [e["event"] for e in machine.events()]
    assert "brew_while_out_of_order" in names


def test_reset_clears_fault_and_count_only(machine):
    _ready(machine)
    machine.random_generator.gauss.return_value = 1.0
    machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    water = machine.water_tank.actual_volume
    beans = machine.bean_tank.actual_volume

    machine.reset()

    assert machine.is_out_of_order() is False
    assert machine.nb_coffee_made == 0
    assert machine.is_plugged() is True
    assert machine.water_tank.actual_volume == water
    assert machine.bean_tank.actual_volume == beans
    assert machine.bean_tank.coffee_type is CoffeeType.ARABICA


def test_status_snapshot(machine):
    _ready(machine, CoffeeType.MOKA, water=2, beans=1)
    status = machine.status()
    assert isinstance(status, MachineStatus)
    assert status.plugged is True
    assert status.out_of_order is False
    assert status.nb_coffee_made == 0
    assert status.water_volume == 2
    assert status.bean_volume == 1
    assert status.bean_type == "MOKA"
    assert status.pump_capacity == 700
    assert status.supports_crema is False
    assert '"bean_type":"MOKA"' in status.model_dump_json()


def test_rejections_are_logged(machine):
    with pytest.raises(MachineNotPluggedError):
        machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    event = machine.events()[-1]
    assert event["event"] == "brew_rejected"
    assert event["details"]["error"] == "MachineNotPluggedError"


def test_successful_brew_is_logged(machine):
    _ready(machine)
    machine.make_coffee(Cup(capacity=0.2), CoffeeType.ARABICA)
    made = [e for e in machine.events() if e["event"] == "coffee_made"]
    assert len(made) == 1
    assert made[0]["details"]["coffee_type"] == "ARABICA"
    assert made[0]["details"]["nb_coffee_made"] == 1


def test_per_serving_quantities_must_be_positive():
    with pytest.raises(ValueError):
        CoffeeMachine(0, 10, 0, 10, 700, water_per_serving=0)
