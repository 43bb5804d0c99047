"""
Measurement state machine.

A measurement moves IDLE -> RUNNING -> SETTLED and returns to IDLE when the
reading is recorded or discarded. The transition functions are pure: they
take the current ProcessState and return the next one, so a host can drive
them with any clock, including synthetic time steps in tests.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config_models import PhysicsConfig
from ..interfaces import InvalidParameter, RandomSource
from ..logging_config import get_logger, log_reading
from ..materials import MaterialProfile
from ..models import (
    ChannelDisplay,
    ExperimentParameters,
    ForceChannel,
    MeasurementPhase,
    MeasurementReading,
    StationPlacement,
)
from .behavioral_models import ConvergenceModel, TransientJitterModel, apply_measurement_noise
from .physics import compute_theoretical
from .random_source import SystemRandomSource


class ProcessState(BaseModel):
    """Snapshot of the measurement state machine between two ticks."""

    model_config = ConfigDict(frozen=True)

    phase: MeasurementPhase = MeasurementPhase.IDLE
    channel: Optional[ForceChannel] = None
    elapsed: float = Field(default=0.0, description="Time spent converging in seconds")
    raw_theoretical: float = 0.0
    noisy_target: float = 0.0
    is_overloaded: bool = False
    displayed_value: float = 0.0
    reading: Optional[MeasurementReading] = None

    def progress(self, config: PhysicsConfig) -> float:
        """Elapsed fraction of the convergence, in [0, 1]."""
        return min(self.elapsed / config.convergence_duration, 1.0)


IDLE_STATE = ProcessState()


def noise_half_range_for(channel: ForceChannel, config: PhysicsConfig) -> float:
    if channel is ForceChannel.WEIGHT:
        return config.weight_noise_half_range
    return config.friction_noise_half_range


def jitter_amplitude_for(channel: ForceChannel, config: PhysicsConfig) -> float:
    if channel is ForceChannel.WEIGHT:
        return config.weight_jitter_amplitude
    return config.friction_jitter_amplitude


def begin(channel: ForceChannel, theoretical_value: float,
          random_source: RandomSource, config: PhysicsConfig) -> ProcessState:
    """
    Enter RUNNING with a freshly drawn noisy target.

    Overload is decided here, before any convergence, and stays fixed for
    the rest of the measurement.
    """
    noisy_target = apply_measurement_noise(
        theoretical_value, noise_half_range_for(channel, config), random_source
    )
    return ProcessState(
        phase=MeasurementPhase.RUNNING,
        channel=channel,
        raw_theoretical=theoretical_value,
        noisy_target=noisy_target,
        is_overloaded=noisy_target > config.scale_max_load,
    )


def step(state: ProcessState, dt: float, random_source: RandomSource,
         config: PhysicsConfig) -> ProcessState:
    """
    Advance a RUNNING measurement by dt seconds.

    States other than RUNNING are returned unchanged.

    Raises:
        InvalidParameter: If dt is negative
    """
    if dt < 0:
        raise InvalidParameter(f"Time step must not be negative, got {dt}")
    if state.phase is not MeasurementPhase.RUNNING:
        return state

    elapsed = min(state.elapsed + dt, config.convergence_duration)
    advanced = state.model_copy(update={"elapsed": elapsed})
    progress = advanced.progress(config)
    if progress >= 1.0:
        return settle(advanced, config)

    displayed = _transient_value(advanced, progress, random_source, config)
    return advanced.model_copy(update={"displayed_value": displayed})


def settle(state: ProcessState, config: PhysicsConfig) -> ProcessState:
    """Snap the gauge to its final value and finalize the reading."""
    if state.channel is None:
        raise InvalidParameter("Cannot settle a measurement without an active channel")

    final_value = config.scale_max_load if state.is_overloaded else state.noisy_target
    reading = MeasurementReading(
        channel=state.channel,
        raw_theoretical=state.raw_theoretical,
        measured_value=final_value,
        is_overloaded=state.is_overloaded,
    )
    return state.model_copy(update={
        "phase": MeasurementPhase.SETTLED,
        "elapsed": config.convergence_duration,
        "displayed_value": final_value,
        "reading": reading,
    })


def _transient_value(state: ProcessState, progress: float,
                     random_source: RandomSource, config: PhysicsConfig) -> float:
    context: Dict = {"progress": progress}
    value = ConvergenceModel().apply(state.noisy_target, context)
    jitter = TransientJitterModel(jitter_amplitude_for(state.channel, config), random_source)
    value = jitter.apply(value, context)

    # Never leave [0, target-or-cap] between ticks
    ceiling = config.scale_max_load if state.is_overloaded else state.noisy_target
    return min(max(0.0, value), ceiling)


class MeasurementProcess:
    """Stateful wrapper around the measurement transition functions."""

    def __init__(self, config: Optional[PhysicsConfig] = None,
                 random_source: Optional[RandomSource] = None):
        self.config = config or PhysicsConfig()
        self.random_source = random_source or SystemRandomSource()
        self.logger = get_logger(__name__)
        self._state = IDLE_STATE

    @property
    def state(self) -> ProcessState:
        return self._state

    @property
    def phase(self) -> MeasurementPhase:
        return self._state.phase

    @property
    def is_overloaded(self) -> bool:
        return self._state.is_overloaded

    @property
    def reading(self) -> Optional[MeasurementReading]:
        return self._state.reading

    def start(self, parameters: ExperimentParameters, material: MaterialProfile,
              placement: StationPlacement) -> bool:
        """
        Start a measurement on the station holding the block.

        Returns:
            True if the measurement started, False if rejected
        """
        if self._state.phase is not MeasurementPhase.IDLE:
            self.logger.debug(f"Ignoring start while {self._state.phase.value}")
            return False

        channel = placement.channel
        if channel is None:
            self.logger.debug("Ignoring start: block is not on a station")
            return False

        theoretical = compute_theoretical(
            parameters.mass,
            material.coefficient,
            parameters.is_wet,
            gravity=self.config.gravity,
            wet_multiplier=self.config.wet_multiplier,
        )
        self._state = begin(channel, theoretical.value_for(channel), self.random_source, self.config)

        self.logger.info(
            f"Measurement started on {channel.value} channel: "
            f"theory={self._state.raw_theoretical:.3f} N, target={self._state.noisy_target:.3f} N"
        )
        if self._state.is_overloaded:
            self.logger.warning(
                f"Scale overload on {channel.value} channel: "
                f"{self._state.noisy_target:.2f} N exceeds {self.config.scale_max_load:.0f} N"
            )
        return True

    def advance(self, dt: float) -> ProcessState:
        """Advance the convergence by dt seconds."""
        previous_phase = self._state.phase
        self._state = step(self._state, dt, self.random_source, self.config)

        if previous_phase is MeasurementPhase.RUNNING and self._state.phase is MeasurementPhase.SETTLED:
            log_reading(self.logger, self._state.reading)
        return self._state

    def acknowledge(self) -> Optional[MeasurementReading]:
        """Leave SETTLED after the reading was recorded."""
        if self._state.phase is not MeasurementPhase.SETTLED:
            return None
        reading = self._state.reading
        self._state = IDLE_STATE
        return reading

    def discard(self) -> bool:
        """Drop the current reading. Not allowed while converging."""
        if self._state.phase is MeasurementPhase.RUNNING:
            self.logger.debug("Ignoring discard while running")
            return False
        self._state = IDLE_STATE
        return True

    def display(self, channel: ForceChannel, placement: StationPlacement) -> ChannelDisplay:
        """
        What the dynamometer of the given channel currently shows.

        A gauge is active whenever the block hangs from it, measured or not.
        """
        is_active = placement.channel is channel
        if self._state.channel is not channel:
            return ChannelDisplay(channel=channel, is_active=is_active)
        return ChannelDisplay(
            channel=channel,
            value=self._state.displayed_value,
            is_active=is_active,
            is_overloaded=self._state.is_overloaded,
        )
