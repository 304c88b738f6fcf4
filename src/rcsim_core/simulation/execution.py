# src/rcsim_core/simulation/execution.py
"""
Provides the public convenience API for running a transient in one call.

`run_transient` is a thin Facade over `SimulationEngine`: it builds the
engine, runs it for a duration, and converts any diagnosable failure into a
single, user-facing `SimulationRunError` carrying the formatted report.
"""
import logging
from typing import Any, Dict, Optional, Union

from ..circuit import Circuit
from ..errors import SimulationRunError, DiagnosableError, format_diagnostic_report
from .config import SimulationConfig, parse_duration, parse_simulation_config
from .engine import SimulationEngine
from .results import SimulationTrace

logger = logging.getLogger(__name__)


def run_transient(
    circuit: Circuit,
    duration: Any,
    config: Optional[Union[SimulationConfig, Dict[str, Any]]] = None
) -> SimulationTrace:
    """
    Runs the circuit from a cold start for `duration` and records every tick.

    Args:
        circuit: The series circuit to simulate. Its capacitor voltages are used
                 as initial conditions and are left at their final values.
        duration: Simulated run time: seconds, a pint Quantity, or a string like '2 s'.
                  It is rounded to a whole number of ticks.
        config: A SimulationConfig, or a raw dict for `parse_simulation_config`.

    Returns:
        A SimulationTrace with one sample per tick.

    Raises:
        SimulationRunError: a user-friendly, diagnosable error if the run fails.
                            The original exception is chained for debugging.
    """
    try:
        if not isinstance(config, SimulationConfig):
            config = parse_simulation_config(config)
        duration_s = parse_duration(duration)
        n_ticks = int(round(duration_s / config.tick_period_s))

        logger.info(f"--- Starting transient run for '{circuit.name}': {n_ticks} ticks of {config.tick_period_s} s ---")
        engine = SimulationEngine(circuit, config)
        engine.start()
        trace = engine.advance(n_ticks)
        logger.info(f"Transient run finished at t={engine.elapsed_time_s:.6g} s.")
        return trace

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the transient run: {e}")
        raise SimulationRunError(e.get_diagnostic_report()) from e

    except ValueError as e:
        # Configuration problems (ConfigParsingError) are plain ValueErrors.
        logger.error(f"Invalid transient run configuration: {e}")
        report = format_diagnostic_report(
            error_type="Invalid Run Configuration",
            details=str(e),
            suggestion="Give the duration and tick period as times, e.g. '2 s' or '100 ms'. The tick period must be positive.",
            context={'fqn': circuit.name, 'user_input': str(duration)}
        )
        raise SimulationRunError(report) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the transient run: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Simulation Error Occurred ({type(e).__name__})",
            details=f"The simulator encountered an unexpected internal error: {e}",
            suggestion="Check the types passed to run_transient. If they are valid, this may be a bug.",
            context={'fqn': getattr(circuit, 'name', None)}
        )
        raise SimulationRunError(report) from e
