# src/rcsim_core/simulation/exceptions.py
"""
Defines custom, diagnosable exceptions specific to driving a transient run.

Undefined circuit values are never errors; these exceptions only cover
misuse of the simulation engine itself, such as asking a paused engine to
advance or stepping backwards in time.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class SimulationStateError(DiagnosableError):
    """
    Raised when a control or stepping request is incompatible with the current
    state of the engine or stepper.
    """
    state: str
    details: str
    time_s: Optional[float] = None

    def __str__(self):
        return f"Simulation in state {self.state}: {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for an invalid simulation request."""
        return format_diagnostic_report(
            error_type="Simulation State Error",
            details=self.details,
            suggestion="Call start() before advancing the simulation, and only step forward in time. Use reset() to begin a new run from t = 0.",
            context={'fqn': self.state, 'time': f"{self.time_s:.4g} s" if self.time_s is not None else None}
        )
