"""
Central pytest configuration and fixtures.

This module provides the fixtures shared across all test modules: an
isolated configuration, logging for the test session, deterministic random
sources and ready-to-use lab sessions.
"""

import tempfile
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Callable

import pytest

from friction_lab.config_models import LabConfig, PathsConfig
from friction_lab.logging_config import get_logger, setup_logging
from friction_lab.materials import MaterialCatalog
from friction_lab.models import MeasurementPhase, SessionSnapshot
from friction_lab.session import ExperimentSession, create_session
from friction_lab.simulation.random_source import FixedRandomSource


# ================================================================================
# Session-scoped fixtures (created once per test session)
# ================================================================================

@pytest.fixture(scope="session")
def config() -> LabConfig:
    """
    Provide the lab configuration for the entire test session.

    Logs go to a temporary directory so test runs never write into the
    working tree.
    """
    temp_dir = Path(tempfile.mkdtemp(prefix="friction_lab_test_"))
    return LabConfig(paths=PathsConfig(log_dir=temp_dir / "logs"))


@pytest.fixture(scope="session", autouse=True)
def test_session(config: LabConfig) -> Generator[str, None, None]:
    """Set up logging once for the whole test run."""
    session_id = str(uuid.uuid4())
    setup_logging(config, session_id)
    logger = get_logger(__name__)
    logger.info(f"Starting test session {session_id}")

    yield session_id

    logger.info(f"Completing test session {session_id}")


# ================================================================================
# Function-scoped fixtures (created for each test function)
# ================================================================================

@pytest.fixture
def catalog(config: LabConfig) -> MaterialCatalog:
    return MaterialCatalog.from_config(config)


@pytest.fixture
def zero_noise() -> FixedRandomSource:
    """Random source whose draws produce no noise and no jitter."""
    return FixedRandomSource(0.5)


@pytest.fixture
def lab_session(config: LabConfig, zero_noise: FixedRandomSource) -> ExperimentSession:
    """A fresh session with deterministic, noise-free measurements."""
    return create_session(config, random_source=zero_noise)


@pytest.fixture
def settle() -> Callable[[ExperimentSession], SessionSnapshot]:
    """
    Provide a helper that ticks a session until its measurement settles.

    Ticks are synthetic 0.1 s steps, so no wall-clock time passes.
    """
    def _settle(session: ExperimentSession, dt: float = 0.1, max_ticks: int = 1000) -> SessionSnapshot:
        snapshot = session.snapshot()
        for _ in range(max_ticks):
            if snapshot.phase is not MeasurementPhase.RUNNING:
                return snapshot
            snapshot = session.advance(dt)
        raise AssertionError("Measurement did not settle")

    return _settle


# ================================================================================
# Pytest hooks
# ================================================================================

def pytest_collection_modifyitems(config: pytest.Config, items) -> None:
    """Add markers based on the test path."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
