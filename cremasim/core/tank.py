"""
Bounded resource tanks.

A ``Tank`` stores a single numeric volume that must always stay within the
``[min_volume, max_volume]`` interval fixed at construction. Any operation that
would break the interval raises ``InvalidVolumeError`` and leaves the tank
untouched. ``BeanTank`` additionally remembers which coffee type is loaded.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from cremasim.exceptions import InvalidVolumeError

if TYPE_CHECKING:
    from cremasim.domain.coffee import CoffeeType

# A drain that lands this close below min_volume is snapped onto it.
VOLUME_TOLERANCE = 1e-9


def _check_amount(amount: float) -> float:
    amount = float(amount)
    if math.isnan(amount) or amount < 0:
        raise InvalidVolumeError(f"Amount must be a non-negative number, got {amount}")
    return amount


class Tank:
    """
    A bounded store of water or ground coffee.

    Attributes:
        min_volume: The lowest volume the tank may hold.
        max_volume: The highest volume the tank may hold.
        actual_volume: The current volume, always within the bounds.
    """

    def __init__(self, min_volume: float, max_volume: float, initial_volume: Optional[float] = None) -> None:
        min_volume = float(min_volume)
        max_volume = float(max_volume)
        if min_volume > max_volume:
            raise InvalidVolumeError(
                f"min_volume ({min_volume}) must not be greater than max_volume ({max_volume})"
            )
        volume = min_volume if initial_volume is None else float(initial_volume)
        if volume < min_volume or volume > max_volume:
            raise InvalidVolumeError(
                f"Initial volume {volume} is outside [{min_volume}, {max_volume}]"
            )
        self._min_volume = min_volume
        self._max_volume = max_volume
        self._actual_volume = volume

    @property
    def min_volume(self) -> float:
        return self._min_volume

    @property
    def max_volume(self) -> float:
        return self._max_volume

    @property
    def actual_volume(self) -> float:
        return self._actual_volume

    def _bounded(self, volume: float) -> Optional[float]:
        if volume < self._min_volume:
            return self._min_volume if self._min_volume - volume <= VOLUME_TOLERANCE else None
        if volume > self._max_volume:
            return None
        return volume

    def increase(self, amount: float) -> None:
        """
        Add ``amount`` to the tank.

        Raises:
            InvalidVolumeError: If the amount is negative or the new volume
                would exceed ``max_volume``.
        """
        amount = _check_amount(amount)
        volume = self._bounded(self._actual_volume + amount)
        if volume is None:
            raise InvalidVolumeError(
                f"Cannot add {amount}: volume would exceed the maximum of {self._max_volume}"
            )
        self._actual_volume = volume

    def decrease(self, amount: float) -> None:
        """
        Remove ``amount`` from the tank.

        Raises:
            InvalidVolumeError: If the amount is negative or the new volume
                would drop below ``min_volume``.
        """
        amount = _check_amount(amount)
        volume = self._bounded(self._actual_volume - amount)
        if volume is None:
            raise InvalidVolumeError(
                f"Cannot remove {amount}: volume would drop below the minimum of {self._min_volume}"
            )
        self._actual_volume = volume

    def can_supply(self, amount: float) -> bool:
        """Return ``True`` if ``decrease(amount)`` would succeed."""
        try:
            amount = _check_amount(amount)
        except InvalidVolumeError:
            return False
        return self._bounded(self._actual_volume - amount) is not None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(min_volume={self._min_volume}, "
            f"max_volume={self._max_volume}, actual_volume={self._actual_volume})"
        )


class BeanTank(Tank):
    """A tank of ground coffee that holds at most one coffee type at a time."""

    def __init__(self, min_volume: float, max_volume: float, initial_volume: Optional[float] = None) -> None:
        super().__init__(min_volume, max_volume, initial_volume)
        self._coffee_type: Optional[CoffeeType] = None

    @property
    def coffee_type(self) -> Optional[CoffeeType]:
        return self._coffee_type

    def load(self, amount: float, coffee_type: CoffeeType) -> None:
        """
        Pour ``amount`` of beans into the tank and record their type.

        The previous type is overwritten. If the volume check fails, neither
        the volume nor the type change.
        """
        self.increase(amount)
        self._coffee_type = coffee_type
