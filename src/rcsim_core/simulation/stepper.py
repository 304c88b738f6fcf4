# src/rcsim_core/simulation/stepper.py
"""
Defines the `TransientStepper`, which evolves capacitor voltages over simulated
time and re-derives the instantaneous branch current of a series RC loop.

The steady-state aggregator formula (I = Veq / Req) ignores that a capacitor
blocks DC current once charged. The stepper replaces it with
I = (Veq - Vc) / Req while capacitors are present.
"""
import logging
from typing import Dict, Optional, Tuple

from ..circuit import Circuit
from .exceptions import SimulationStateError
from .results import StepResult

logger = logging.getLogger(__name__)


class TransientStepper:
    """
    Advances one circuit through its RC transient, one absolute time at a time.

    Capacitor voltages are evaluated from the start of the current transient
    rather than integrated tick by tick, so the curve is the same whether it is
    sampled finely, coarsely, or across a pause. A new transient begins on the
    first step, whenever the circuit's members or equivalents change, and
    whenever a caller writes a capacitor voltage between steps. It takes the
    voltages stored at that moment as initial conditions and the last stepped
    time as its origin.
    """

    def __init__(self, circuit: Circuit):
        self.circuit: Circuit = circuit
        self._last_time_s: float = 0.0
        self._origin_time_s: float = 0.0
        self._initial_voltages: Dict[int, float] = {}
        self._signature: Optional[Tuple] = None
        self._stepped_voltages: Dict[int, Optional[float]] = {}

    @property
    def last_time_s(self) -> float:
        return self._last_time_s

    @property
    def transient_origin_s(self) -> float:
        return self._origin_time_s

    def reset(self):
        """Forgets the current transient; the next step starts a cold one at t = 0."""
        self._last_time_s = 0.0
        self._origin_time_s = 0.0
        self._initial_voltages = {}
        self._signature = None
        self._stepped_voltages = {}

    def step(self, time_s: float) -> StepResult:
        """
        Brings the circuit to absolute simulated time `time_s`.

        Raises:
            SimulationStateError: if `time_s` is earlier than the previous step.
        """
        if time_s < self._last_time_s:
            raise SimulationStateError(
                state="STEPPING",
                details=f"Cannot step back in time from {self._last_time_s} s to {time_s} s.",
                time_s=time_s,
            )

        circuit = self.circuit
        circuit.compute_equivalents()
        v_eq = circuit.equivalent_emf
        r_eq = circuit.equivalent_resistance

        if not r_eq:
            # No resistance: current is undefined, resistor voltages keep their last values.
            circuit.current = None
            self._last_time_s = time_s
            logger.debug(f"t={time_s:.6g} s: no series resistance, branch current undefined.")
            return self._result(time_s)

        capacitors = circuit.capacitors
        if capacitors:
            self._start_transient_if_changed(v_eq, r_eq)
            elapsed = time_s - self._origin_time_s
            for capacitor in capacitors:
                capacitor.update_voltage(
                    elapsed, r_eq, v_eq, initial_voltage=self._initial_voltages.get(id(capacitor))
                )
            self._stepped_voltages = {id(capacitor): capacitor.voltage for capacitor in capacitors}
            # Only the first capacitor drives the branch current.
            v_c = capacitors[0].voltage
            if v_c is None:
                v_c = 0.0
            v_supply = 0.0 if v_eq is None else v_eq
            current = (v_supply - v_c) / r_eq
        else:
            current = None if v_eq is None else v_eq / r_eq

        circuit.current = current
        circuit.propagate_current(current)
        self._last_time_s = time_s
        logger.debug(f"t={time_s:.6g} s: I={current}, Veq={v_eq}, Req={r_eq}")
        return self._result(time_s)

    def _start_transient_if_changed(self, v_eq: Optional[float], r_eq: float):
        circuit = self.circuit
        signature = (
            circuit.revision,
            v_eq,
            r_eq,
            tuple(capacitor.capacitance for capacitor in circuit.capacitors),
        )
        edited = any(
            id(capacitor) in self._stepped_voltages
            and self._stepped_voltages[id(capacitor)] != capacitor.voltage
            for capacitor in circuit.capacitors
        )
        if signature == self._signature and not edited:
            return

        self._signature = signature
        self._origin_time_s = self._last_time_s
        self._initial_voltages = {
            id(capacitor): 0.0 if capacitor.voltage is None else capacitor.voltage
            for capacitor in circuit.capacitors
        }
        logger.debug(
            f"New transient at t={self._origin_time_s:.6g} s with initial voltages "
            f"{[capacitor.voltage for capacitor in circuit.capacitors]}"
        )

    def _result(self, time_s: float) -> StepResult:
        circuit = self.circuit
        return StepResult(
            time_s=time_s,
            current=circuit.current,
            equivalent_emf=circuit.equivalent_emf,
            equivalent_resistance=circuit.equivalent_resistance,
            equivalent_capacitance=circuit.equivalent_capacitance,
            components=circuit.snapshot(),
        )
