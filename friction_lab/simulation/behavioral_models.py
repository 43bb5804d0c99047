"""
Behavioral models for the simulated dynamometers.

This module provides the noise injected into a measurement, the decaying
visual jitter shown while a gauge converges, and the easing curve that
drives the convergence.
"""

from abc import ABC, abstractmethod
from typing import Dict

from ..interfaces import InvalidParameter, RandomSource


def apply_measurement_noise(theoretical_value: float, noise_half_range: float,
                            random_source: RandomSource) -> float:
    """
    Perturb a theoretical value like a real instrument reading.

    The perturbation is drawn uniformly from
    [-noise_half_range / 2, +noise_half_range / 2) and the result is clamped
    at zero, since a force gauge never shows a negative value.

    Args:
        theoretical_value: Noise-free value in Newtons
        noise_half_range: Total spread of the perturbation in Newtons
        random_source: Source of the uniform draw

    Returns:
        Measured value, never negative
    """
    noise = (random_source.next_uniform() - 0.5) * noise_half_range
    return max(0.0, theoretical_value + noise)


def ease_out_quad(t: float) -> float:
    """Ease-out quadratic curve on [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    return 1 - (1 - t) * (1 - t)


class BehavioralModel(ABC):
    """Abstract base class for dynamometer behavioral models."""

    @abstractmethod
    def apply(self, base_value: float, context: Dict) -> float:
        """Apply behavioral modification to base value."""

    def reset(self) -> None:
        """Reset model state."""


class MeasurementNoiseModel(BehavioralModel):
    """Uniform instrument noise, clamped at zero."""

    def __init__(self, noise_half_range: float, random_source: RandomSource):
        """
        Initialize noise model.

        Args:
            noise_half_range: Total spread of the perturbation in Newtons
            random_source: Source of uniform draws
        """
        if noise_half_range < 0:
            raise InvalidParameter("Noise range must not be negative")
        self.noise_half_range = noise_half_range
        self.random_source = random_source

    def apply(self, base_value: float, context: Dict) -> float:
        return apply_measurement_noise(base_value, self.noise_half_range, self.random_source)


class ConvergenceModel(BehavioralModel):
    """Gauge needle easing towards its target."""

    def apply(self, base_value: float, context: Dict) -> float:
        return base_value * ease_out_quad(context.get("progress", 1.0))


class TransientJitterModel(BehavioralModel):
    """
    Visual shake of a converging gauge.

    The amplitude decays linearly with progress and vanishes once the gauge
    has settled, so it never leaks into a stored reading.
    """

    def __init__(self, amplitude: float, random_source: RandomSource):
        if amplitude < 0:
            raise InvalidParameter("Jitter amplitude must not be negative")
        self.amplitude = amplitude
        self.random_source = random_source

    def apply(self, base_value: float, context: Dict) -> float:
        progress = min(max(context.get("progress", 1.0), 0.0), 1.0)
        if progress >= 1.0:
            return base_value
        shake = (self.random_source.next_uniform() - 0.5) * self.amplitude
        return base_value + shake * (1.0 - progress)
