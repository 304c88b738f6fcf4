# src/rcsim_core/components/elements.py
"""
This module provides the concrete implementations of the three series-circuit
elements: Battery, Resistor, and Capacitor.
"""

import logging
import numpy as np
import pint
from typing import Any, Dict, Optional

from ..units import ureg, Quantity
from ..constants import (
    DEFAULT_BATTERY_EMF_V,
    DEFAULT_RESISTANCE_OHM,
    DEFAULT_CAPACITANCE_F,
    DEFAULT_CAPACITOR_VOLTAGE_V,
)

from .base import ComponentBase, register_component
from .base_enums import ValueKind
from .exceptions import ComponentError


logger = logging.getLogger(__name__)


def _coerce_to_si_magnitude(
    value: Any,
    unit: str,
    component_fqn: str,
    param_name: str,
    allow_negative: bool
) -> Optional[float]:
    """
    Converts a user-supplied value into a plain float in the SI unit `unit`.

    Accepts None (undefined), a real number (already in `unit`), a pint Quantity,
    or a string such as "4.7 kohm". Dimensionless input is read in `unit`.
    Every physical constraint violation is raised as a `ComponentError`.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ComponentError(
            component_fqn=component_fqn,
            details=f"Parameter '{param_name}' must be a number, not a boolean.",
            user_input=value
        )

    try:
        if isinstance(value, str):
            qty = ureg.Quantity(value.strip())
        elif isinstance(value, pint.Quantity):
            qty = value
        else:
            qty = Quantity(value, unit)

        if qty.dimensionless:
            qty = Quantity(qty.magnitude, unit)
        if not qty.is_compatible_with(unit):
            raise pint.DimensionalityError(qty.units, ureg.Unit(unit))

        raw_mag = qty.to(unit).magnitude
        if np.iscomplexobj(raw_mag):
            raise ComponentError(
                component_fqn=component_fqn,
                details=f"Parameter '{param_name}' must be real, but received a complex value.",
                user_input=value
            )
        magnitude = float(raw_mag)

    except (pint.PintError, SyntaxError, TypeError, ValueError) as e:
        raise ComponentError(
            component_fqn=component_fqn,
            details=f"Validation failed for parameter '{param_name}': {e}",
            user_input=value
        ) from e

    if not np.isfinite(magnitude):
        raise ComponentError(
            component_fqn=component_fqn,
            details=f"Parameter '{param_name}' must be finite.",
            user_input=value
        )
    if not allow_negative and magnitude < 0:
        raise ComponentError(
            component_fqn=component_fqn,
            details=f"Parameter '{param_name}' must be non-negative.",
            user_input=value
        )
    return magnitude


@register_component("Battery")
class Battery(ComponentBase):
    """Represents an ideal DC voltage source, described only by its EMF."""

    def __init__(self, emf: Any = None, instance_id: Optional[str] = None):
        super().__init__(instance_id)
        self.emf = emf

    @property
    def emf(self) -> Optional[float]:
        """Electromotive force in volts, or None if undefined."""
        return self._emf

    @emf.setter
    def emf(self, value: Any):
        # A reversed battery is expressed with a negative EMF.
        self._emf = _coerce_to_si_magnitude(value, "volt", self.fqn, "emf", allow_negative=True)

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]: return {"emf": "volt"}

    @classmethod
    def default_parameters(cls) -> Dict[str, float]: return {"emf": DEFAULT_BATTERY_EMF_V}

    @classmethod
    def value_kind(cls) -> ValueKind: return ValueKind.EMF

    @classmethod
    def applies_voltage(cls) -> bool: return True


@register_component("Resistor")
class Resistor(ComponentBase):
    """
    Represents an ideal resistor. Its voltage drop is derived from the branch
    current and is never set directly by callers.
    """

    def __init__(self, resistance: Any = None, instance_id: Optional[str] = None):
        super().__init__(instance_id)
        self.resistance = resistance
        self._voltage: Optional[float] = None

    @property
    def resistance(self) -> Optional[float]:
        """Resistance in ohms, or None if undefined."""
        return self._resistance

    @resistance.setter
    def resistance(self, value: Any):
        self._resistance = _coerce_to_si_magnitude(value, "ohm", self.fqn, "resistance", allow_negative=False)

    @property
    def voltage(self) -> Optional[float]:
        """Voltage drop in volts from the last current propagation, or None."""
        return self._voltage

    def calculate_voltage(self, current: Optional[float]) -> Optional[float]:
        """Applies Ohm's law, V = I * R. Undefined if either factor is undefined."""
        if current is None or self._resistance is None:
            self._voltage = None
        else:
            self._voltage = current * self._resistance
        return self._voltage

    def clear_voltage(self):
        self._voltage = None

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]: return {"resistance": "ohm"}

    @classmethod
    def default_parameters(cls) -> Dict[str, float]: return {"resistance": DEFAULT_RESISTANCE_OHM}

    @classmethod
    def value_kind(cls) -> ValueKind: return ValueKind.RESISTANCE


@register_component("Capacitor")
class Capacitor(ComponentBase):
    """
    Represents an ideal capacitor in a series RC loop.

    The voltage is the stateful integration variable of the transient: it can be
    set before a run as an initial condition and is then evolved by
    `update_voltage`. Charge and current are derived from it.
    """

    def __init__(self, capacitance: Any = None, voltage: Any = None, instance_id: Optional[str] = None):
        super().__init__(instance_id)
        self._voltage: Optional[float] = None
        self._charge: Optional[float] = None
        self._current: Optional[float] = None
        self.capacitance = capacitance
        self.voltage = voltage

    @property
    def capacitance(self) -> Optional[float]:
        """Capacitance in farads, or None if undefined."""
        return self._capacitance

    @capacitance.setter
    def capacitance(self, value: Any):
        self._capacitance = _coerce_to_si_magnitude(value, "farad", self.fqn, "capacitance", allow_negative=False)
        self.calculate_charge()

    @property
    def voltage(self) -> Optional[float]:
        """Voltage across the plates in volts, or None if never set."""
        return self._voltage

    @voltage.setter
    def voltage(self, value: Any):
        self._voltage = _coerce_to_si_magnitude(value, "volt", self.fqn, "voltage", allow_negative=True)
        self.calculate_charge()

    @property
    def charge(self) -> Optional[float]:
        """Charge in coulombs (Q = C * V), or None if either factor is undefined."""
        return self._charge

    @property
    def current(self) -> Optional[float]:
        """Instantaneous current in amperes from the last transient update, or None."""
        return self._current

    def calculate_charge(self) -> Optional[float]:
        if self._voltage is None or self._capacitance is None:
            self._charge = None
        else:
            self._charge = self._capacitance * self._voltage
        return self._charge

    def update_voltage(
        self,
        elapsed_s: float,
        equivalent_resistance: Optional[float],
        supply_voltage: Optional[float],
        initial_voltage: Optional[float] = None
    ) -> bool:
        """
        Evolves the capacitor voltage with the RC charge/discharge law

            Vc(t) = Vf + (Vi - Vf) * exp(-t / (R * C))

        and refreshes charge and current.

        Args:
            elapsed_s: Time since the start of the current transient, in seconds.
            equivalent_resistance: Series resistance of the loop, in ohms.
            supply_voltage: Total series EMF in volts. None means there is no
                            source and the capacitor discharges toward 0 V.
            initial_voltage: Voltage at the start of the transient. Defaults to
                             the stored voltage (0 V if never set).

        Returns:
            True if the capacitor was updated, False if capacitance or resistance
            is undefined or zero and the stored state was left untouched.
        """
        if not self._capacitance or not equivalent_resistance:
            return False

        tau = equivalent_resistance * self._capacitance
        v_final = 0.0 if supply_voltage is None else supply_voltage
        if initial_voltage is None:
            initial_voltage = 0.0 if self._voltage is None else self._voltage

        self._voltage = v_final + (initial_voltage - v_final) * float(np.exp(-elapsed_s / tau))
        self.calculate_charge()
        # Positive while charging toward the supply, negative while discharging.
        self._current = (v_final - self._voltage) / equivalent_resistance
        return True

    def clear_state(self):
        """Returns the capacitor to a cold, uncharged state."""
        self._voltage = 0.0
        self._charge = 0.0
        self._current = None

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]: return {"capacitance": "farad", "voltage": "volt"}

    @classmethod
    def default_parameters(cls) -> Dict[str, float]:
        return {"capacitance": DEFAULT_CAPACITANCE_F, "voltage": DEFAULT_CAPACITOR_VOLTAGE_V}

    @classmethod
    def value_kind(cls) -> ValueKind: return ValueKind.CAPACITANCE
