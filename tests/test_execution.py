# tests/test_execution.py
import pytest
import numpy as np

from rcsim_core import run_transient, SimulationRunError, SimulationConfig
from conftest import TAU_S, RC_EMF_V


class TestRunTransient:

    def test_charges_capacitor_over_duration(self, rc_circuit):
        trace = run_transient(rc_circuit, "1 ms", {"tick_period": "0.1 ms"})
        assert len(trace) == 10
        np.testing.assert_allclose(trace.times_s[-1], 1e-3, rtol=1e-9)
        np.testing.assert_allclose(
            trace.capacitor_voltages["C1"][-1], RC_EMF_V * (1 - np.exp(-10.0)), rtol=1e-9
        )
        # The circuit keeps its final state for the caller to read.
        assert rc_circuit.capacitors[0].voltage == trace.capacitor_voltages["C1"][-1]

    def test_accepts_config_object_and_float_duration(self, discharge_circuit):
        trace = run_transient(discharge_circuit, TAU_S, SimulationConfig(tick_period_s=TAU_S))
        assert len(trace) == 1
        assert trace.capacitor_voltages["C1"][0] == pytest.approx(10.0 * np.exp(-1.0))
        assert trace.current[0] < 0.0

    def test_zero_duration_gives_empty_trace(self, rc_circuit):
        trace = run_transient(rc_circuit, 0.0)
        assert len(trace) == 0
        assert trace.times_s.shape == (0,)

    @pytest.mark.parametrize("duration, config", [
        ("-1 s", None),
        ("1 V", None),
        ("1 s", {"tick_period": "0 s"}),
    ])
    def test_invalid_run_raises_run_error(self, rc_circuit, duration, config):
        with pytest.raises(SimulationRunError) as excinfo:
            run_transient(rc_circuit, duration, config)
        assert "Invalid Run Configuration" in str(excinfo.value)

    def test_unexpected_error_gets_fallback_report(self, rc_circuit):
        with pytest.raises(SimulationRunError) as excinfo:
            run_transient(rc_circuit, 1.0, config=5)
        assert "Unexpected Simulation Error" in str(excinfo.value)
        assert "TypeError" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, TypeError)
