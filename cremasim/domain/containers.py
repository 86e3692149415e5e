"""
Vessels handed to and returned by the coffee machine.

``Container`` is a structural protocol: anything exposing ``capacity``,
``coffee_type`` and ``is_empty()`` can be brewed into. ``Cup`` and ``Mug`` are
the empty vessels a caller supplies; ``CoffeeContainer`` is what the machine
hands back.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from cremasim.domain.coffee import CoffeeType


@runtime_checkable
class Container(Protocol):
    """Capability shared by every vessel.

    ``coffee_type`` is only meaningful when ``is_empty()`` returns ``False``.
    """

    capacity: float
    coffee_type: Optional[CoffeeType]

    def is_empty(self) -> bool: ...


@dataclass
class _Vessel:
    capacity: float
    empty: bool = True
    coffee_type: Optional[CoffeeType] = None

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError(f"capacity must be positive, got {self.capacity}")

    def is_empty(self) -> bool:
        return self.empty


class Cup(_Vessel):
    """A small vessel, empty unless stated otherwise."""


class Mug(_Vessel):
    """A larger vessel, empty unless stated otherwise."""


@dataclass(frozen=True)
class CoffeeContainer:
    """
    A vessel filled by the machine.

    Attributes:
        capacity: Copied from the container that was brewed into.
        coffee_type: The coffee type that was requested.
        crema: Whether the coffee was topped with crema.
    """
    capacity: float
    coffee_type: CoffeeType
    crema: bool = False

    def is_empty(self) -> bool:
        return False

    @classmethod
    def filled_from(cls, container: Container, coffee_type: CoffeeType, crema: bool = False) -> "CoffeeContainer":
        return cls(capacity=container.capacity, coffee_type=coffee_type, crema=crema)
