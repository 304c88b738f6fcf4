# src/rcsim_core/simulation/results.py
"""
Defines the immutable data contracts returned by the stepper and the engine.

A `StepResult` is the complete observable state after one tick. A
`SimulationTrace` stacks many ticks into NumPy arrays so a caller can plot
or check a whole transient at once; undefined values are stored as NaN.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..circuit import ComponentState


@dataclass(frozen=True)
class StepResult:
    """
    The observable state of the circuit after one simulation step.

    Attributes:
        time_s: Absolute simulated time of the step, in seconds.
        current: The branch current in amperes, or None if undefined.
        equivalent_emf: Series EMF in volts, or None.
        equivalent_resistance: Series resistance in ohms, or None.
        equivalent_capacitance: Series capacitance in farads, or None.
        components: Per-component snapshots keyed by instance id.
    """
    time_s: float
    current: Optional[float]
    equivalent_emf: Optional[float]
    equivalent_resistance: Optional[float]
    equivalent_capacitance: Optional[float]
    components: Dict[str, ComponentState]

    def voltage_of(self, instance_id: str) -> Optional[float]:
        return self.components[instance_id].voltage


def _nan_if_none(value: Optional[float]) -> float:
    return np.nan if value is None else value


@dataclass(frozen=True)
class SimulationTrace:
    """
    A recorded sequence of steps.

    Attributes:
        times_s: 1D array of step times, in seconds.
        current: 1D array of branch currents (NaN where undefined).
        capacitor_voltages: Voltage series per capacitor id.
        capacitor_charges: Charge series per capacitor id.
        resistor_voltages: Voltage-drop series per resistor id.
        steps: The underlying StepResult objects, in order.
    """
    times_s: np.ndarray
    current: np.ndarray
    capacitor_voltages: Dict[str, np.ndarray]
    capacitor_charges: Dict[str, np.ndarray]
    resistor_voltages: Dict[str, np.ndarray]
    steps: List[StepResult]

    def __len__(self) -> int:
        return len(self.steps)

    @classmethod
    def from_steps(cls, steps: Sequence[StepResult]) -> "SimulationTrace":
        """Stacks step snapshots into arrays, one series per component id seen."""
        steps = list(steps)
        cap_v: Dict[str, List[float]] = {}
        cap_q: Dict[str, List[float]] = {}
        res_v: Dict[str, List[float]] = {}

        # Components may come and go mid-run; pad missing samples with NaN.
        for index, step in enumerate(steps):
            for comp_id, state in step.components.items():
                if state.component_type == "Capacitor":
                    cap_v.setdefault(comp_id, [np.nan] * index)
                    cap_q.setdefault(comp_id, [np.nan] * index)
                elif state.component_type == "Resistor":
                    res_v.setdefault(comp_id, [np.nan] * index)
            for series, attr in ((cap_v, "voltage"), (cap_q, "charge"), (res_v, "voltage")):
                for comp_id, values in series.items():
                    state = step.components.get(comp_id)
                    values.append(np.nan if state is None else _nan_if_none(getattr(state, attr)))

        return cls(
            times_s=np.array([step.time_s for step in steps], dtype=float),
            current=np.array([_nan_if_none(step.current) for step in steps], dtype=float),
            capacitor_voltages={k: np.array(v, dtype=float) for k, v in cap_v.items()},
            capacitor_charges={k: np.array(v, dtype=float) for k, v in cap_q.items()},
            resistor_voltages={k: np.array(v, dtype=float) for k, v in res_v.items()},
            steps=steps,
        )
