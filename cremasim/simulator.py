"""
Command-line harness for the coffee machine simulator.

Builds a machine from ``MachineSettings``, fills its tanks, brews a number of
cups, and prints the final machine status.

Usage:
    cremasim-simulate --cups 5 --coffee-type arabica --water 2 --beans 1
    cremasim-simulate --cups 3 --espresso --crema --seed 42 --json
"""
import argparse
import sys
from typing import Optional, Sequence

from cremasim.config import MachineSettings
from cremasim.domain import CoffeeType, Cup, create_machine
from cremasim.exceptions import CremasimError
from cremasim.models import MachineStatus


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cremasim-simulate", description="Brew coffees on a simulated machine.")
    parser.add_argument("--cups", type=int, default=1, help="Number of coffees to brew.")
    parser.add_argument(
        "--coffee-type",
        default=CoffeeType.ARABICA.name,
        choices=[t.name.lower() for t in CoffeeType] + [t.name for t in CoffeeType],
        help="Coffee type loaded in the bean tank and requested for every cup.",
    )
    parser.add_argument("--water", type=float, default=2.0, help="Water poured in before brewing.")
    parser.add_argument("--beans", type=float, default=1.0, help="Beans poured in before brewing.")
    parser.add_argument("--capacity", type=_positive_float, default=0.15, help="Capacity of each cup.")
    parser.add_argument("--espresso", action="store_true", help="Simulate an espresso machine.")
    parser.add_argument("--crema", action="store_true", help="Ask for crema on every cup.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the failure model.")
    parser.add_argument("--json", action="store_true", help="Print the final status as JSON.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = MachineSettings()
    if args.seed is not None:
        settings = settings.model_copy(update={"random_seed": args.seed})
    machine = create_machine(settings, espresso=args.espresso)
    coffee_type = CoffeeType.from_name(args.coffee_type)

    try:
        machine.plug_in()
        machine.add_water(args.water)
        machine.add_beans(args.beans, coffee_type)
        for _ in range(args.cups):
            machine.make_coffee(Cup(capacity=args.capacity), coffee_type, crema=args.crema)
    except CremasimError as e:
        print(f"Error: {e}", file=sys.stderr)
        _print_status(machine.status(), args.json)
        return 1

    _print_status(machine.status(), args.json)
    return 0


def _print_status(status: MachineStatus, as_json: bool) -> None:
    if as_json:
        print(status.model_dump_json(indent=2))
        return

    fields = [
        ("Plugged", status.plugged),
        ("Out of order", status.out_of_order),
        ("Coffees made", status.nb_coffee_made),
        ("Water", f"{status.water_volume:g}"),
        ("Beans", f"{status.bean_volume:g}"),
        ("Bean type", status.bean_type or "-"),
    ]
    for label, value in fields:
        print(f"  {label + ':':<14} {value}")


if __name__ == "__main__":
    sys.exit(main())
