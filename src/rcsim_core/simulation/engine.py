# src/rcsim_core/simulation/engine.py

"""
Defines the `SimulationEngine`, the discrete-step driver of a transient run.

The engine owns the run's control state (Idle, Running, Paused), the tick
count, and the fixed tick period. Every control call runs to completion
before returning, so start, pause and reset can only take effect between ticks.
"""
import logging
from enum import Enum
from typing import List, Optional

from ..circuit import Circuit
from .config import SimulationConfig
from .exceptions import SimulationStateError
from .results import SimulationTrace, StepResult
from .stepper import TransientStepper


logger = logging.getLogger(__name__)


class SimulationState(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


class SimulationEngine:
    """
    Drives a `TransientStepper` at a fixed simulated cadence.

    Elapsed time is always `tick_count * tick_period_s`, never an accumulated
    sum, so it cannot drift. Ticks delivered while the engine is not running
    are ignored, which lets an external timer keep firing across a pause.
    """
    def __init__(self, circuit: Circuit, config: Optional[SimulationConfig] = None):
        """
        Initializes an idle engine for one circuit.

        Args:
            circuit: The circuit this engine exclusively drives.
            config: Tick settings; defaults to a 0.1 s tick period.
        """
        self.circuit: Circuit = circuit
        self.config: SimulationConfig = config if config is not None else SimulationConfig()
        self.stepper: TransientStepper = TransientStepper(circuit)
        self._state: SimulationState = SimulationState.IDLE
        self._tick_count: int = 0
        self._last_result: Optional[StepResult] = None
        logger.debug(f"SimulationEngine initialized for '{circuit.name}' (tick={self.config.tick_period_s} s).")

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def elapsed_time_s(self) -> float:
        return self._tick_count * self.config.tick_period_s

    @property
    def last_result(self) -> Optional[StepResult]:
        return self._last_result

    # --- Controls ---

    def start(self):
        """
        Begins a run from Idle or resumes a paused one. Starting from Idle
        recomputes the circuit so design-time values are visible before the first tick.
        """
        if self._state is SimulationState.RUNNING:
            logger.debug("start() ignored: simulation already running.")
            return
        if self._state is SimulationState.IDLE:
            self.circuit.recalculate_all()
            logger.info(f"Simulation of '{self.circuit.name}' started.")
        else:
            logger.info(f"Simulation of '{self.circuit.name}' resumed at t={self.elapsed_time_s:.6g} s.")
        self._state = SimulationState.RUNNING

    def pause(self):
        """Freezes elapsed time; all stored state is preserved exactly."""
        if self._state is not SimulationState.RUNNING:
            logger.debug(f"pause() ignored in state {self._state.value}.")
            return
        self._state = SimulationState.PAUSED
        logger.info(f"Simulation of '{self.circuit.name}' paused at t={self.elapsed_time_s:.6g} s.")

    def reset(self):
        """
        Returns to Idle with elapsed time zero, capacitors discharged, resistor
        voltages and equivalents cleared. Calling it twice is the same as once.
        """
        self._tick_count = 0
        self._last_result = None
        self.stepper.reset()
        self.circuit.reset_transient_state()
        self._state = SimulationState.IDLE
        logger.info(f"Simulation of '{self.circuit.name}' reset.")

    # --- Stepping ---

    def tick(self) -> Optional[StepResult]:
        """
        Advances one tick if running and returns the resulting state, else None.
        """
        if self._state is not SimulationState.RUNNING:
            logger.debug(f"tick() ignored in state {self._state.value}.")
            return None
        self._tick_count += 1
        self._last_result = self.stepper.step(self.elapsed_time_s)
        return self._last_result

    def advance(self, n_ticks: int) -> SimulationTrace:
        """
        Runs `n_ticks` ticks back to back and returns them as a trace.

        Raises:
            SimulationStateError: if the engine is not running or n_ticks is negative.
        """
        if self._state is not SimulationState.RUNNING:
            raise SimulationStateError(
                state=self._state.value,
                details="advance() requires a running simulation.",
                time_s=self.elapsed_time_s,
            )
        if n_ticks < 0:
            raise SimulationStateError(
                state=self._state.value,
                details=f"Cannot advance by a negative number of ticks ({n_ticks}).",
                time_s=self.elapsed_time_s,
            )

        steps: List[StepResult] = []
        for _ in range(n_ticks):
            steps.append(self.tick())
        return SimulationTrace.from_steps(steps)
