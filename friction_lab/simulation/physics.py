"""
Theoretical physics of the friction experiment.

Friction does not depend on the contact area, so the block orientation is
deliberately absent from every function in this module.
"""

from typing import NamedTuple

from ..constants import GRAVITY, WET_FRICTION_MULTIPLIER
from ..models import ForceChannel


class TheoreticalValues(NamedTuple):
    """Noise-free forces for a block on a surface."""

    weight: float
    friction_threshold: float
    effective_coefficient: float

    def value_for(self, channel: ForceChannel) -> float:
        """Theoretical value measured on the given channel."""
        if channel is ForceChannel.WEIGHT:
            return self.weight
        return self.friction_threshold


def theoretical_weight(mass: float, gravity: float = GRAVITY) -> float:
    """Weight of the block in Newtons."""
    return mass * gravity


def effective_coefficient(material_coefficient: float, is_wet: bool,
                          wet_multiplier: float = WET_FRICTION_MULTIPLIER) -> float:
    """Friction coefficient after applying the surface condition."""
    return material_coefficient * (wet_multiplier if is_wet else 1.0)


def compute_theoretical(mass: float, material_coefficient: float, is_wet: bool, *,
                        gravity: float = GRAVITY,
                        wet_multiplier: float = WET_FRICTION_MULTIPLIER) -> TheoreticalValues:
    """
    Compute the theoretical weight and static friction threshold.

    Args:
        mass: Block mass in kg
        material_coefficient: Dry friction coefficient of the surface
        is_wet: Whether the surface is wet
        gravity: Gravitational acceleration
        wet_multiplier: Coefficient factor for a wet surface

    Returns:
        TheoreticalValues with weight, friction threshold and effective coefficient
    """
    weight = theoretical_weight(mass, gravity)
    mu = effective_coefficient(material_coefficient, is_wet, wet_multiplier)
    return TheoreticalValues(
        weight=weight,
        friction_threshold=weight * mu,
        effective_coefficient=mu
    )
