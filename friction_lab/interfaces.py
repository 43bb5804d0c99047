"""Exceptions and abstract interfaces shared across the engine."""

from abc import ABC, abstractmethod


class FrictionLabError(Exception):
    """Base exception for friction lab errors."""


class InvalidParameter(FrictionLabError):
    """Raised when an experiment parameter or engine input is out of range."""


class RandomSource(ABC):
    """Source of uniform random draws used by the noise models."""

    @abstractmethod
    def next_uniform(self) -> float:
        """
        Draw the next random value.

        Returns:
            A float in the half-open interval [0, 1)
        """
