"""Exceptions raised by the coffee machine simulator."""


class CremasimError(Exception):
    """Base exception for cremasim."""

    pass


class InvalidVolumeError(CremasimError, ValueError):
    """Raised when a tank operation would leave the volume outside its bounds."""

    pass


class MachineNotPluggedError(CremasimError):
    """Raised when brewing is attempted on an unplugged machine."""

    pass


class CupNotEmptyError(CremasimError):
    """Raised when the container handed to the machine already holds something."""

    pass


class UnsupportedFeatureError(CremasimError):
    """Raised when a brew asks for a feature the machine variant lacks."""

    pass


class LackOfResourceError(CremasimError):
    """Raised when a tank cannot supply one serving."""

    pass


class LackOfWaterError(LackOfResourceError):
    """Raised when the water tank cannot supply one serving."""

    pass


class LackOfBeansError(LackOfResourceError):
    """Raised when the bean tank cannot supply one serving."""

    pass


class CoffeeTypeMismatchError(CremasimError):
    """Raised when the requested coffee type differs from the loaded beans."""

    pass
