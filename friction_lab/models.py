"""
Data models for the friction experiment.

This module defines the enums describing where the block sits and which
force channel is active, the experiment parameters chosen by the user,
and the readings and records produced by a measurement.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import GAUGE_ERROR_TEXT, SCALE_MAX_LOAD


class ContactOrientation(str, Enum):
    """Which face of the block rests on the surface."""

    WIDE = "wide"
    NARROW = "narrow"


class ForceChannel(str, Enum):
    """Force measured by a dynamometer."""

    WEIGHT = "weight"
    FRICTION = "friction"


class StationPlacement(str, Enum):
    """Where the block currently sits."""

    UNPLACED = "unplaced"
    WEIGHING_STATION = "weighing_station"
    SLIDING_STATION = "sliding_station"

    @property
    def channel(self) -> Optional[ForceChannel]:
        """Force channel driven by this station, or None when unplaced."""
        if self is StationPlacement.WEIGHING_STATION:
            return ForceChannel.WEIGHT
        if self is StationPlacement.SLIDING_STATION:
            return ForceChannel.FRICTION
        return None


class MeasurementPhase(str, Enum):
    """Phase of the measurement state machine."""

    IDLE = "idle"
    RUNNING = "running"
    SETTLED = "settled"


class ExperimentParameters(BaseModel):
    """Parameters of a single experiment run."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    mass: float = Field(default=2.0, description="Block mass in kg")
    material_id: str = Field(default="wood", description="Surface material identifier")
    is_wet: bool = Field(default=False, description="Whether the surface is wet")
    orientation: ContactOrientation = Field(
        default=ContactOrientation.WIDE,
        description="Contact face of the block (does not affect friction)"
    )

    @field_validator("mass")
    @classmethod
    def mass_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Mass must be positive")
        return v

    @field_validator("material_id")
    @classmethod
    def material_id_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Material id must not be empty")
        return v


class MeasurementReading(BaseModel):
    """Finalized output of one measurement."""

    model_config = ConfigDict(frozen=True)

    channel: ForceChannel
    raw_theoretical: float = Field(..., description="Noise-free value for the channel")
    measured_value: float = Field(..., description="Value shown once the gauge settled")
    is_overloaded: bool = Field(default=False, description="Reading exceeded the scale capacity")


class ExperimentRecord(BaseModel):
    """Immutable entry of the results log."""

    model_config = ConfigDict(frozen=True)

    id: int
    mass: float
    material_name: str
    weight_display: str
    friction_display: str
    is_wet: bool
    orientation: ContactOrientation


class ChannelDisplay(BaseModel):
    """What a single dynamometer shows."""

    model_config = ConfigDict(frozen=True)

    channel: ForceChannel
    value: float = 0.0
    is_active: bool = False
    is_overloaded: bool = False

    @property
    def text(self) -> str:
        """Digital readout of the gauge."""
        if self.is_overloaded:
            return GAUGE_ERROR_TEXT
        return f"{self.value:.2f}"

    def fill_fraction(self, max_load: float = SCALE_MAX_LOAD) -> float:
        """Fraction of the spring extension, saturating at the scale capacity."""
        return min(self.value, max_load) / max_load


class SessionSnapshot(BaseModel):
    """Signals published to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    phase: MeasurementPhase
    placement: StationPlacement
    parameters: ExperimentParameters
    weight: ChannelDisplay
    friction: ChannelDisplay
    is_overloaded: bool
    pending_record: Optional[ExperimentRecord] = None
    log: tuple[ExperimentRecord, ...] = ()
