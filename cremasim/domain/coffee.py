"""Coffee varieties the machine can be loaded with."""
from __future__ import annotations

from enum import Enum


class CoffeeType(Enum):
    """
    Closed set of coffee varieties.

    Members compare by identity only; ``CoffeeType.ARABICA`` is never equal to
    the string ``"arabica"``.
    """
    ARABICA = "arabica"
    ROBUSTA = "robusta"
    MOKA = "moka"
    BAHIA = "bahia"
    LIBERICA = "liberica"

    @classmethod
    def from_name(cls, name: str) -> "CoffeeType":
        """
        Look up a coffee type by member name or value, ignoring case.

        Raises:
            ValueError: If no member matches.
        """
        key = name.strip()
        for member in cls:
            if key.upper() == member.name or key.lower() == member.value:
                return member
        raise ValueError(f"Unknown coffee type '{name}'. Available: {[m.name for m in cls]}")
