"""
Measurement simulation for the friction lab.

This package provides:
- Theoretical weight and friction computation
- Instrument noise and transient jitter models
- Pluggable random sources for reproducible runs
- The measurement state machine driven by host ticks
"""

from .behavioral_models import (
    BehavioralModel,
    ConvergenceModel,
    MeasurementNoiseModel,
    TransientJitterModel,
    apply_measurement_noise,
    ease_out_quad,
)
from .measurement_process import IDLE_STATE, MeasurementProcess, ProcessState, begin, settle, step
from .physics import TheoreticalValues, compute_theoretical, theoretical_weight
from .random_source import FixedRandomSource, SequenceRandomSource, SystemRandomSource

__all__ = [
    "BehavioralModel",
    "ConvergenceModel",
    "MeasurementNoiseModel",
    "TransientJitterModel",
    "apply_measurement_noise",
    "ease_out_quad",
    "IDLE_STATE",
    "MeasurementProcess",
    "ProcessState",
    "begin",
    "settle",
    "step",
    "TheoreticalValues",
    "compute_theoretical",
    "theoretical_weight",
    "FixedRandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
]
