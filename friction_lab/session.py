"""
Experiment session.

The session is the single mutable object of the lab. It holds the current
parameters, the block placement, the measurement process and the results
log, and it mediates every user intent. Intents that the current phase does
not allow are ignored and reported as rejected, like a disabled control.
"""

from typing import Any, List, Optional

from pydantic import ValidationError

from .config_models import LabConfig
from .interfaces import InvalidParameter, RandomSource
from .logging_config import get_logger
from .materials import MaterialCatalog
from .models import (
    ExperimentParameters,
    ExperimentRecord,
    ForceChannel,
    MeasurementPhase,
    SessionSnapshot,
    StationPlacement,
)
from .records import RecordBuilder
from .simulation.measurement_process import MeasurementProcess
from .simulation.random_source import SystemRandomSource


class ExperimentSession:
    """State of one friction lab session."""

    def __init__(self, catalog: MaterialCatalog, process: MeasurementProcess,
                 record_builder: RecordBuilder,
                 parameters: Optional[ExperimentParameters] = None):
        self.catalog = catalog
        self.process = process
        self.record_builder = record_builder
        self.logger = get_logger(__name__)

        parameters = parameters or ExperimentParameters()
        self.catalog.get(parameters.material_id)
        self._parameters = parameters
        self._placement = StationPlacement.UNPLACED
        self._pending_record: Optional[ExperimentRecord] = None
        self._log: List[ExperimentRecord] = []

    # ----------------------------------------------------------------------
    # Signals
    # ----------------------------------------------------------------------

    @property
    def parameters(self) -> ExperimentParameters:
        return self._parameters

    @property
    def placement(self) -> StationPlacement:
        return self._placement

    @property
    def phase(self) -> MeasurementPhase:
        return self.process.phase

    @property
    def is_idle(self) -> bool:
        return self.process.phase is MeasurementPhase.IDLE

    @property
    def pending_record(self) -> Optional[ExperimentRecord]:
        return self._pending_record

    @property
    def log(self) -> tuple:
        """Committed records, newest first."""
        return tuple(self._log)

    def snapshot(self) -> SessionSnapshot:
        """Everything the presentation layer needs to draw the bench."""
        return SessionSnapshot(
            phase=self.process.phase,
            placement=self._placement,
            parameters=self._parameters,
            weight=self.process.display(ForceChannel.WEIGHT, self._placement),
            friction=self.process.display(ForceChannel.FRICTION, self._placement),
            is_overloaded=self.process.is_overloaded,
            pending_record=self._pending_record,
            log=self.log,
        )

    # ----------------------------------------------------------------------
    # Intents
    # ----------------------------------------------------------------------

    def set_parameters(self, **changes: Any) -> bool:
        """
        Change experiment parameters.

        Args:
            **changes: Any of mass, material_id, is_wet, orientation

        Returns:
            True if applied, False if a measurement is in progress

        Raises:
            InvalidParameter: If the new parameters are out of range
        """
        if not self.is_idle:
            self.logger.debug(f"Ignoring parameter change while {self.phase.value}")
            return False

        unknown = set(changes) - set(ExperimentParameters.model_fields)
        if unknown:
            raise InvalidParameter(f"Unknown experiment parameters: {', '.join(sorted(unknown))}")

        try:
            parameters = ExperimentParameters(**{**self._parameters.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidParameter(f"Invalid experiment parameters: {e}") from e
        self.catalog.get(parameters.material_id)

        self._parameters = parameters
        self.logger.debug(f"Parameters updated: {parameters.model_dump(mode='json')}")
        return True

    def set_placement(self, placement: StationPlacement) -> bool:
        """Move the block. Both gauges return to zero."""
        if not self.is_idle:
            self.logger.debug(f"Ignoring placement change while {self.phase.value}")
            return False

        try:
            placement = StationPlacement(placement)
        except ValueError as e:
            raise InvalidParameter(f"Unknown placement: {placement!r}") from e
        self._placement = placement
        self.process.discard()
        self.logger.debug(f"Block placed: {placement.value}")
        return True

    def start_measurement(self) -> bool:
        """Start measuring on the station holding the block."""
        material = self.catalog.get(self._parameters.material_id)
        started = self.process.start(self._parameters, material, self._placement)
        if started:
            self._pending_record = None
        return started

    def advance(self, dt: float) -> SessionSnapshot:
        """
        Host tick: advance the running measurement by dt seconds.

        When the gauge settles, the pending record is built.
        """
        was_running = self.process.phase is MeasurementPhase.RUNNING
        self.process.advance(dt)

        if was_running and self.process.phase is MeasurementPhase.SETTLED:
            self._pending_record = self.record_builder.build(
                self._parameters, self._placement, self.process.reading
            )
            self.logger.debug(f"Pending record #{self._pending_record.id} ready")
        return self.snapshot()

    def commit_record(self) -> bool:
        """Add the pending record to the head of the log."""
        if self.process.phase is not MeasurementPhase.SETTLED or self._pending_record is None:
            self.logger.debug("Ignoring commit: no settled reading")
            return False

        record = self._pending_record
        self._log.insert(0, record)
        self._pending_record = None
        self.process.acknowledge()
        self.logger.info(
            f"Recorded #{record.id}: {record.material_name}, {record.mass} kg, "
            f"P={record.weight_display}, F={record.friction_display}"
        )
        return True

    def reset_measurement(self) -> bool:
        """Discard the reading and take the block off the stations."""
        if not self.process.discard():
            return False

        self._placement = StationPlacement.UNPLACED
        self._pending_record = None
        self.logger.debug("Measurement reset")
        return True

    def clear_log(self) -> bool:
        """Remove every committed record. Always allowed."""
        count = len(self._log)
        self._log.clear()
        if count:
            self.logger.info(f"Cleared {count} records from the log")
        return True


def create_session(config: Optional[LabConfig] = None,
                   random_source: Optional[RandomSource] = None) -> ExperimentSession:
    """
    Build a session from configuration.

    Args:
        config: Lab configuration. Defaults to the built-in configuration.
        random_source: Source of noise draws. Defaults to a system source
            seeded with config.random_seed.

    Returns:
        A session with the block off the stations and an empty log
    """
    config = config or LabConfig()
    catalog = MaterialCatalog.from_config(config)
    if random_source is None:
        random_source = SystemRandomSource(config.random_seed)

    process = MeasurementProcess(config.physics, random_source)
    builder = RecordBuilder(catalog, gravity=config.physics.gravity)
    parameters = ExperimentParameters(**config.defaults.model_dump())
    return ExperimentSession(catalog, process, builder, parameters)
