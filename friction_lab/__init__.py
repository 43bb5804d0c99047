"""Measurement simulation engine for a classroom friction experiment."""

from . import config_loader as config_loader
from . import simulation as simulation

__version__ = "0.1.0"
__author__ = "Friction Lab Team"

from .config_loader import load_config as load_config
from .config_models import LabConfig as LabConfig
from .driver import FrameDriver as FrameDriver
from .interfaces import FrictionLabError as FrictionLabError
from .interfaces import InvalidParameter as InvalidParameter
from .interfaces import RandomSource as RandomSource
from .materials import MaterialCatalog as MaterialCatalog
from .materials import MaterialProfile as MaterialProfile
from .models import ContactOrientation as ContactOrientation
from .models import ExperimentParameters as ExperimentParameters
from .models import ExperimentRecord as ExperimentRecord
from .models import MeasurementPhase as MeasurementPhase
from .models import StationPlacement as StationPlacement
from .session import ExperimentSession as ExperimentSession
from .session import create_session as create_session

__all__ = [
    "config_loader",
    "simulation",
    "load_config",
    "LabConfig",
    "FrameDriver",
    "FrictionLabError",
    "InvalidParameter",
    "RandomSource",
    "MaterialCatalog",
    "MaterialProfile",
    "ContactOrientation",
    "ExperimentParameters",
    "ExperimentRecord",
    "MeasurementPhase",
    "StationPlacement",
    "ExperimentSession",
    "create_session",
]
