"""Unit tests for the measurement state machine."""

import pytest

from friction_lab.config_models import PhysicsConfig
from friction_lab.interfaces import InvalidParameter
from friction_lab.logging_config import LogCapture
from friction_lab.models import (
    ExperimentParameters,
    ForceChannel,
    MeasurementPhase,
    StationPlacement,
)
from friction_lab.simulation.measurement_process import (
    IDLE_STATE,
    MeasurementProcess,
    begin,
    settle,
    step,
)
from friction_lab.simulation.random_source import FixedRandomSource, SequenceRandomSource

PHYSICS = PhysicsConfig()


def run_to_settle(process: MeasurementProcess, dt: float = 0.1) -> list:
    states = [process.state]
    while process.phase is MeasurementPhase.RUNNING:
        states.append(process.advance(dt))
    return states


class TestTransitionFunctions:
    """Test the pure begin/step/settle functions."""

    def test_begin_enters_running(self):
        state = begin(ForceChannel.WEIGHT, 19.62, FixedRandomSource(0.5), PHYSICS)

        assert state.phase is MeasurementPhase.RUNNING
        assert state.channel is ForceChannel.WEIGHT
        assert state.noisy_target == 19.62
        assert state.raw_theoretical == 19.62
        assert state.displayed_value == 0.0
        assert state.is_overloaded is False
        assert state.reading is None

    def test_overload_decided_at_entry(self):
        state = begin(ForceChannel.FRICTION, 150.0, FixedRandomSource(0.5), PHYSICS)

        assert state.is_overloaded is True
        assert state.elapsed == 0.0

    def test_overload_uses_noisy_target(self):
        """A theoretical value just under the cap can overload after noise."""
        over = begin(ForceChannel.FRICTION, 99.8, FixedRandomSource(1.0), PHYSICS)
        under = begin(ForceChannel.FRICTION, 99.8, FixedRandomSource(0.0), PHYSICS)

        assert over.noisy_target == pytest.approx(100.3)
        assert over.is_overloaded is True
        assert under.is_overloaded is False

    def test_channel_noise_ranges(self):
        weight = begin(ForceChannel.WEIGHT, 10.0, FixedRandomSource(1.0), PHYSICS)
        friction = begin(ForceChannel.FRICTION, 10.0, FixedRandomSource(1.0), PHYSICS)

        assert weight.noisy_target == pytest.approx(10.15)
        assert friction.noisy_target == pytest.approx(10.5)

    def test_ease_out_progress(self):
        state = begin(ForceChannel.WEIGHT, 40.0, FixedRandomSource(0.5), PHYSICS)

        halfway = step(state, 0.75, FixedRandomSource(0.5), PHYSICS)

        assert halfway.phase is MeasurementPhase.RUNNING
        assert halfway.displayed_value == pytest.approx(30.0)

    def test_step_does_not_mutate_input(self):
        state = begin(ForceChannel.WEIGHT, 40.0, FixedRandomSource(0.5), PHYSICS)

        step(state, 0.5, FixedRandomSource(0.5), PHYSICS)

        assert state.elapsed == 0.0
        assert state.displayed_value == 0.0

    def test_large_step_settles(self):
        state = begin(ForceChannel.WEIGHT, 40.0, FixedRandomSource(0.5), PHYSICS)

        settled = step(state, 10.0, FixedRandomSource(0.5), PHYSICS)

        assert settled.phase is MeasurementPhase.SETTLED
        assert settled.elapsed == PHYSICS.convergence_duration
        assert settled.displayed_value == 40.0

    def test_step_ignores_non_running_states(self):
        assert step(IDLE_STATE, 0.5, FixedRandomSource(), PHYSICS) is IDLE_STATE

    def test_negative_step_rejected(self):
        state = begin(ForceChannel.WEIGHT, 40.0, FixedRandomSource(0.5), PHYSICS)

        with pytest.raises(InvalidParameter, match="must not be negative"):
            step(state, -0.1, FixedRandomSource(), PHYSICS)

    def test_settle_without_channel_rejected(self):
        with pytest.raises(InvalidParameter):
            settle(IDLE_STATE, PHYSICS)


class TestMeasurementProcess:
    """Test the stateful measurement process."""

    def test_weighing_scenario(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource(0.5))
        parameters = ExperimentParameters(mass=2.0, material_id="wood")

        assert process.start(parameters, catalog.get("wood"), StationPlacement.WEIGHING_STATION)
        run_to_settle(process)

        reading = process.reading
        assert process.phase is MeasurementPhase.SETTLED
        assert reading.channel is ForceChannel.WEIGHT
        assert reading.raw_theoretical == pytest.approx(19.62)
        assert reading.measured_value == pytest.approx(19.62)
        assert reading.is_overloaded is False

    def test_sliding_scenario(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource(0.5))
        parameters = ExperimentParameters(mass=5.0, material_id="rubber", is_wet=True)

        process.start(parameters, catalog.get("rubber"), StationPlacement.SLIDING_STATION)
        run_to_settle(process)

        assert process.reading.channel is ForceChannel.FRICTION
        assert process.reading.measured_value == pytest.approx(29.18475)
        assert process.reading.is_overloaded is False

    def test_start_requires_placement(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource())

        assert not process.start(ExperimentParameters(), catalog.get("wood"), StationPlacement.UNPLACED)
        assert process.phase is MeasurementPhase.IDLE

    def test_start_rejected_while_not_idle(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource())
        parameters = ExperimentParameters()
        wood = catalog.get("wood")

        assert process.start(parameters, wood, StationPlacement.WEIGHING_STATION)
        assert not process.start(parameters, wood, StationPlacement.SLIDING_STATION)
        run_to_settle(process)
        assert not process.start(parameters, wood, StationPlacement.SLIDING_STATION)
        assert process.state.channel is ForceChannel.WEIGHT

    def test_single_draw_for_active_channel(self, catalog):
        source = SequenceRandomSource([0.5])
        process = MeasurementProcess(PHYSICS, source)

        process.start(ExperimentParameters(), catalog.get("wood"), StationPlacement.SLIDING_STATION)

        assert source.draw_count == 1

    def test_overload_is_immediate_and_stable(self, catalog):
        process = MeasurementProcess(PHYSICS, SequenceRandomSource([0.1, 0.9, 0.4, 0.7]))
        parameters = ExperimentParameters(mass=20.0, material_id="rubber")

        process.start(parameters, catalog.get("rubber"), StationPlacement.WEIGHING_STATION)
        assert process.is_overloaded is True

        states = run_to_settle(process, dt=0.05)

        assert all(state.is_overloaded for state in states)
        assert all(0.0 <= state.displayed_value <= 100.0 for state in states)
        assert process.state.displayed_value == 100.0
        assert process.reading.measured_value == 100.0
        assert process.reading.raw_theoretical == pytest.approx(196.2)
        assert process.reading.is_overloaded is True

    def test_overloaded_display_reaches_cap_before_settling(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource(0.5))
        parameters = ExperimentParameters(mass=20.0, material_id="rubber")
        process.start(parameters, catalog.get("rubber"), StationPlacement.SLIDING_STATION)

        state = process.advance(1.2)

        assert state.phase is MeasurementPhase.RUNNING
        assert state.displayed_value == 100.0

    def test_transient_stays_within_target(self, catalog):
        """Between ticks the gauge never leaves [0, target]."""
        source = SequenceRandomSource([0.0, 1.0, 0.95, 0.02, 0.6])
        process = MeasurementProcess(PHYSICS, source)
        parameters = ExperimentParameters(mass=1.0, material_id="marble")

        process.start(parameters, catalog.get("marble"), StationPlacement.SLIDING_STATION)
        target = process.state.noisy_target
        states = run_to_settle(process, dt=0.01)

        assert all(0.0 <= state.displayed_value <= target for state in states)
        assert process.state.displayed_value == target
        assert process.reading.measured_value == target

    def test_acknowledge_and_discard(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource())
        process.start(ExperimentParameters(), catalog.get("wood"), StationPlacement.WEIGHING_STATION)

        assert process.acknowledge() is None
        assert process.discard() is False
        assert process.phase is MeasurementPhase.RUNNING

        run_to_settle(process)
        reading = process.acknowledge()

        assert reading is not None
        assert process.state == IDLE_STATE
        assert process.discard() is True

    def test_advance_when_idle_is_noop(self):
        process = MeasurementProcess(PHYSICS, FixedRandomSource())

        assert process.advance(0.5) == IDLE_STATE

    def test_display_of_inactive_channel_is_zero(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource())
        process.start(ExperimentParameters(), catalog.get("wood"), StationPlacement.WEIGHING_STATION)
        run_to_settle(process)

        weight = process.display(ForceChannel.WEIGHT, StationPlacement.WEIGHING_STATION)
        friction = process.display(ForceChannel.FRICTION, StationPlacement.WEIGHING_STATION)

        assert weight.is_active and weight.value == pytest.approx(19.62)
        assert weight.text == "19.62"
        assert not friction.is_active and friction.value == 0.0

    def test_overload_logged_as_warning(self, catalog):
        process = MeasurementProcess(PHYSICS, FixedRandomSource())
        parameters = ExperimentParameters(mass=20.0, material_id="wood")

        with LogCapture("friction_lab") as capture:
            process.start(parameters, catalog.get("wood"), StationPlacement.WEIGHING_STATION)

        warnings = capture.get_logs("WARNING")
        assert len(warnings) == 1
        assert "overload" in warnings[0]["message"].lower()
