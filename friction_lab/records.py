"""Construction of results-log entries from settled readings."""

import itertools
from typing import Optional

from .constants import GRAVITY, NOT_MEASURED_MARK, OVERLOAD_MARK
from .interfaces import InvalidParameter
from .materials import MaterialCatalog
from .models import (
    ExperimentParameters,
    ExperimentRecord,
    MeasurementReading,
    StationPlacement,
)
from .simulation.physics import theoretical_weight


def format_force(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}"


def format_reading(reading: MeasurementReading) -> str:
    """Results-log text of a measured force."""
    if reading.is_overloaded:
        return OVERLOAD_MARK
    return format_force(reading.measured_value, 2)


class RecordIdSequence:
    """Monotonically increasing record identifiers."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self.last_id: Optional[int] = None

    def next_id(self) -> int:
        self.last_id = next(self._counter)
        return self.last_id


class RecordBuilder:
    """Turns a settled reading plus the experiment setup into a log entry."""

    def __init__(self, catalog: MaterialCatalog, gravity: float = GRAVITY,
                 id_sequence: Optional[RecordIdSequence] = None):
        self.catalog = catalog
        self.gravity = gravity
        self.id_sequence = id_sequence or RecordIdSequence()

    def build(self, parameters: ExperimentParameters, placement: StationPlacement,
              reading: MeasurementReading) -> ExperimentRecord:
        """
        Build an immutable record.

        On the weighing station only the weight is measured; on the sliding
        station the friction is measured and the theoretical weight is shown
        in parentheses for reference.

        Raises:
            InvalidParameter: If the block is not on a station or the
                material is unknown
        """
        material = self.catalog.get(parameters.material_id)

        if placement is StationPlacement.WEIGHING_STATION:
            weight_display = format_reading(reading)
            friction_display = NOT_MEASURED_MARK
        elif placement is StationPlacement.SLIDING_STATION:
            reference_weight = theoretical_weight(parameters.mass, self.gravity)
            weight_display = f"(~{format_force(reference_weight, 1)})"
            friction_display = format_reading(reading)
        else:
            raise InvalidParameter("Cannot build a record for a block that is not on a station")

        return ExperimentRecord(
            id=self.id_sequence.next_id(),
            mass=parameters.mass,
            material_name=material.display_name,
            weight_display=weight_display,
            friction_display=friction_display,
            is_wet=parameters.is_wet,
            orientation=parameters.orientation,
        )
