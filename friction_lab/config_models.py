"""Configuration models for the friction lab."""

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from . import constants
from .models import ContactOrientation


class MaterialConfig(BaseModel):
    """Configuration for a single surface material."""

    display_name: str = Field(..., description="Name shown in the results log")
    coefficient: float = Field(..., description="Theoretical friction coefficient (dry)")
    color: str = Field(default="#94a3b8", description="Display color of the surface")
    texture_pattern: str = Field(default="", description="CSS-style texture of the surface")

    @field_validator("coefficient")
    @classmethod
    def coefficient_must_be_in_range(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("Coefficient must be in (0, 1]")
        return v


def default_materials() -> Dict[str, MaterialConfig]:
    return {
        "wood": MaterialConfig(
            display_name="Wood",
            coefficient=0.35,
            color="#eab308",
            texture_pattern="repeating-linear-gradient(45deg, #ca8a04 0, #ca8a04 1px, #eab308 0, #eab308 50%)"
        ),
        "concrete": MaterialConfig(
            display_name="Concrete",
            coefficient=0.6,
            color="#94a3b8",
            texture_pattern="radial-gradient(#64748b 15%, transparent 16%) 0 0, radial-gradient(#64748b 15%, transparent 16%) 8px 8px"
        ),
        "marble": MaterialConfig(
            display_name="Marble",
            coefficient=0.15,
            color="#cffafe",
            texture_pattern="linear-gradient(135deg, #a5f3fc 25%, transparent 25%) -50px 0, linear-gradient(225deg, #a5f3fc 25%, transparent 25%) -50px 0"
        ),
        "rubber": MaterialConfig(
            display_name="Rubber",
            coefficient=0.85,
            color="#1e293b",
            texture_pattern="repeating-radial-gradient(circle, #334155, #334155 10px, #1e293b 10px, #1e293b 20px)"
        ),
    }


class PhysicsConfig(BaseModel):
    """Physical constants and instrument characteristics."""

    model_config = ConfigDict(allow_inf_nan=False)

    gravity: float = Field(default=constants.GRAVITY, description="Gravitational acceleration in m/s^2")
    scale_max_load: float = Field(default=constants.SCALE_MAX_LOAD, description="Dynamometer capacity in N")
    wet_multiplier: float = Field(
        default=constants.WET_FRICTION_MULTIPLIER,
        description="Factor applied to the friction coefficient on a wet surface"
    )
    weight_noise_half_range: float = Field(
        default=constants.WEIGHT_NOISE_HALF_RANGE,
        description="Spread of the weighing scale noise in N"
    )
    friction_noise_half_range: float = Field(
        default=constants.FRICTION_NOISE_HALF_RANGE,
        description="Spread of the surface irregularity noise in N"
    )
    convergence_duration: float = Field(
        default=constants.CONVERGENCE_DURATION,
        description="Time for the gauge to settle in seconds"
    )
    weight_jitter_amplitude: float = Field(
        default=constants.WEIGHT_JITTER_AMPLITUDE,
        description="Visual shake of the weighing gauge while converging"
    )
    friction_jitter_amplitude: float = Field(
        default=constants.FRICTION_JITTER_AMPLITUDE,
        description="Visual shake of the pulling gauge while converging"
    )

    @field_validator("gravity", "scale_max_load", "convergence_duration")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator(
        "weight_noise_half_range",
        "friction_noise_half_range",
        "weight_jitter_amplitude",
        "friction_jitter_amplitude",
    )
    @classmethod
    def must_not_be_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Noise and jitter levels must not be negative")
        return v

    @field_validator("wet_multiplier")
    @classmethod
    def wet_multiplier_in_range(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("Wet multiplier must be in (0, 1]")
        return v


class DefaultsConfig(BaseModel):
    """Initial experiment parameters of a new session."""

    model_config = ConfigDict(allow_inf_nan=False)

    mass: float = Field(default=2.0, description="Initial block mass in kg")
    material_id: str = Field(default="wood", description="Initial surface material")
    is_wet: bool = Field(default=False, description="Initial surface condition")
    orientation: ContactOrientation = Field(default=ContactOrientation.WIDE, description="Initial contact face")

    @field_validator("mass")
    @classmethod
    def mass_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Mass must be positive")
        return v


class PathsConfig(BaseModel):
    """Configuration for file system paths."""

    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory for log files, created when file logging is set up"
    )


class LoggingConfig(BaseModel):
    """Configuration for the logging framework."""

    level: str = Field(default="INFO", description="Log level")
    format_console: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(session_id)s - %(message)s",
        description="Console log format"
    )
    log_to_file: bool = Field(default=True, description="Write JSON logs under paths.log_dir")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Level must be one of {valid_levels}")
        return v.upper()


class LabConfig(BaseModel):
    """Main friction lab configuration."""

    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    materials: Dict[str, MaterialConfig] = Field(default_factory=default_materials)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible noise; unseeded when omitted"
    )

    @field_validator("materials")
    @classmethod
    def materials_must_not_be_empty(cls, v: Dict[str, MaterialConfig]) -> Dict[str, MaterialConfig]:
        if not v:
            raise ValueError("At least one material must be configured")
        return v

    @model_validator(mode="after")
    def default_material_must_exist(self) -> "LabConfig":
        if self.defaults.material_id not in self.materials:
            raise ValueError(f"Default material '{self.defaults.material_id}' is not in the catalog")
        return self
