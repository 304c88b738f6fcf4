# src/rcsim_core/components/exceptions.py
"""
Defines the custom, diagnosable exceptions for the components subsystem.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report

@dataclass()
class ComponentError(DiagnosableError):
    """
    The canonical, diagnosable exception for all component-related errors.

    Raised when a component is given a value it cannot hold (wrong unit, not a
    real finite number, negative resistance or capacitance) or when an unknown
    component type is requested from the factory.
    """
    component_fqn: str
    details: str
    user_input: Optional[Any] = None

    def __str__(self):
        return f"{self.component_fqn}: {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the definitive diagnostic report for a component value error."""
        return format_diagnostic_report(
            error_type="Component Value Error",
            details=self.details,
            suggestion="Enter a real, finite number or a quantity with a matching unit (e.g. '9 V', '4.7 kohm', '1 uF'). Resistance and capacitance must be non-negative.",
            context={
                'fqn': self.component_fqn,
                'user_input': None if self.user_input is None else str(self.user_input),
            }
        )
