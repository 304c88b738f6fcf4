# src/rcsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("RCSim Core package initialized.")

from .units import ureg, pint, Quantity
from .components import (
    ComponentBase, COMPONENT_REGISTRY, register_component, create_component,
    Battery, Resistor, Capacitor, ComponentError, ValueKind,
)
from .circuit import Circuit, ComponentState
from .simulation import (
    SimulationEngine, SimulationState, TransientStepper,
    SimulationConfig, parse_simulation_config, parse_duration,
    StepResult, SimulationTrace, run_transient,
    SimulationStateError, ConfigParsingError,
)
from .errors import RCSimError, SimulationRunError, CircuitMutationError, DiagnosableError

__all__ = [
    # Logging
    "setup_logging",
    # Units
    "ureg", "pint", "Quantity",
    # Components
    "ComponentBase", "COMPONENT_REGISTRY", "register_component", "create_component",
    "Battery", "Resistor", "Capacitor", "ValueKind",
    # Circuit Aggregate
    "Circuit", "ComponentState",
    # Simulation
    "SimulationEngine", "SimulationState", "TransientStepper",
    "SimulationConfig", "parse_simulation_config", "parse_duration",
    "StepResult", "SimulationTrace", "run_transient",
    # Errors
    "RCSimError", "SimulationRunError", "DiagnosableError",
    "ComponentError", "CircuitMutationError", "SimulationStateError", "ConfigParsingError",
]
