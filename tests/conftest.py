# tests/conftest.py
import pytest

from rcsim_core import Circuit, SimulationConfig

# Reference RC loop: 10 V, 100 ohm, 1 uF.
RC_EMF_V = 10.0
RC_RESISTANCE_OHM = 100.0
RC_CAPACITANCE_F = 1e-6
TAU_S = RC_RESISTANCE_OHM * RC_CAPACITANCE_F


@pytest.fixture
def circuit():
    return Circuit(name="TestCircuit")


@pytest.fixture
def rc_circuit():
    """A battery charging a single capacitor through one resistor, from 0 V."""
    circuit = Circuit(name="RC_Charge")
    circuit.add_battery(RC_EMF_V)
    circuit.add_resistor(RC_RESISTANCE_OHM)
    circuit.add_capacitor(RC_CAPACITANCE_F)
    return circuit


@pytest.fixture
def discharge_circuit():
    """A capacitor pre-charged to 10 V discharging through one resistor, no battery."""
    circuit = Circuit(name="RC_Discharge")
    circuit.add_resistor(RC_RESISTANCE_OHM)
    circuit.add_capacitor(RC_CAPACITANCE_F, voltage=RC_EMF_V)
    return circuit


@pytest.fixture
def fine_config():
    """Ten ticks per time constant of the reference RC loop."""
    return SimulationConfig(tick_period_s=TAU_S / 10)
