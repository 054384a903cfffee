"""
Exceptions raised by the calculation engine.

Calculator entry points catch CalculationError and report it on the
result instead of propagating it.
"""


class CalculationError(ValueError):
    """Base class for engine errors."""


class InvalidInputError(CalculationError):
    """Input is negative, non-finite, missing or otherwise unusable."""


class NoSolutionError(CalculationError):
    """The requested quantity has no real solution for the given inputs."""
