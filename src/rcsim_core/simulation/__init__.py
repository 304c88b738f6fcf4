# src/rcsim_core/simulation/__init__.py
from .exceptions import SimulationStateError
from .config import SimulationConfig, ConfigParsingError, parse_simulation_config, parse_duration
from .results import StepResult, SimulationTrace
from .stepper import TransientStepper
from .engine import SimulationEngine, SimulationState
from .execution import run_transient

__all__ = [
    # Exceptions
    "SimulationStateError",
    "ConfigParsingError",
    # Configuration
    "SimulationConfig",
    "parse_simulation_config",
    "parse_duration",
    # Results
    "StepResult",
    "SimulationTrace",
    # Core Classes
    "TransientStepper",
    "SimulationEngine",
    "SimulationState",
    "run_transient",
]
