# src/rcsim_core/errors.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class RCSimError(Exception):
    """Base class for all custom, user-facing errors in RCSim Core."""
    pass

class SimulationRunError(RCSimError):
    """
    Raised by the run facade when a transient run fails for any reason, such as
    an invalid duration or a control sequence the engine rejects.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    Code that only needs the report can depend on this instead of a concrete type.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses, and
    declares `get_diagnostic_report` as abstract so every subclass provides
    its own report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


@dataclass()
class CircuitMutationError(DiagnosableError):
    """
    Raised when a mutation of the series circuit cannot be applied, e.g. removing
    a component that was never added or adding two components with the same id.
    """
    circuit_name: str
    details: str

    def __str__(self):
        return f"Circuit '{self.circuit_name}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a rejected circuit mutation."""
        return format_diagnostic_report(
            error_type="Circuit Mutation Error",
            details=self.details,
            suggestion="Only remove components that belong to this circuit, and give every component a unique instance id.",
            context={'fqn': self.circuit_name}
        )


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Component Value Error").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component id, user input,
                 simulation time, etc.).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ RCSim Core: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if fqn := context.get('fqn'):
        lines.append(f"FQN:            {fqn}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if sim_time := context.get('time'):
        lines.append(f"Sim Time:       {sim_time}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("========================================================================")
    return "\n".join(lines)
