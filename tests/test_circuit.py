# tests/test_circuit.py
import pytest

from rcsim_core import (
    Circuit, Battery, Resistor, Capacitor, ComponentState, CircuitMutationError
)


class TestEquivalentBattery:

    def test_empty_battery_set_is_undefined(self, circuit):
        assert circuit.compute_equivalent_battery() is None
        assert circuit.equivalent_emf is None

    def test_sum_skips_undefined_emf(self, circuit):
        circuit.add_battery(5.0)
        circuit.add_battery(None)
        circuit.add_battery(3.0)
        circuit.compute_equivalent_battery()
        assert circuit.equivalent_emf == pytest.approx(8.0)

    def test_all_undefined_emf_is_undefined(self, circuit):
        circuit.add_battery(None)
        assert circuit.compute_equivalent_battery() is None

    def test_all_zero_emf_is_defined_zero(self, circuit):
        circuit.add_battery(0.0)
        circuit.add_battery(0.0)
        circuit.compute_equivalent_battery()
        assert circuit.equivalent_emf == 0.0


class TestEquivalentResistor:

    @pytest.mark.parametrize("values, expected", [
        ([], 0.0),
        ([None], 0.0),
        ([100.0], 100.0),
        ([100.0, None, 50.0], 150.0),
        ([1.0, 2.0, 3.0, 4.0], 10.0),
    ])
    def test_series_sum_is_never_undefined(self, circuit, values, expected):
        for value in values:
            circuit.add_resistor(value)
        equivalent = circuit.compute_equivalent_resistor()
        assert equivalent is not None
        assert circuit.equivalent_resistance == pytest.approx(expected)


class TestEquivalentCapacitor:

    @pytest.mark.parametrize("values", [[], [0.0], [None], [0.0, None]])
    def test_no_usable_capacitor_is_undefined(self, circuit, values):
        for value in values:
            circuit.add_capacitor(value)
        assert circuit.compute_equivalent_capacitor() is None
        assert circuit.equivalent_capacitance is None

    def test_reciprocal_sum_skips_zero_and_undefined(self, circuit):
        circuit.add_capacitor(1e-6)
        circuit.add_capacitor(0.0)
        circuit.add_capacitor(None)
        circuit.add_capacitor(2e-6)
        circuit.compute_equivalent_capacitor()
        assert circuit.equivalent_capacitance == pytest.approx(1.0 / (1.0 / 1e-6 + 1.0 / 2e-6))


class TestBranchCurrent:

    def test_ohms_law(self, circuit):
        circuit.add_battery(10.0)
        circuit.add_resistor(100.0)
        circuit.compute_equivalents()
        assert circuit.compute_branch_current() == 10.0 / 100.0

    @pytest.mark.parametrize("emfs, resistances", [
        ([], [100.0]),      # no source
        ([10.0], []),       # empty resistor set gives Req == 0
        ([10.0], [0.0]),    # ideal short
        ([10.0], [None]),   # all resistances undefined
    ])
    def test_current_undefined_on_guard(self, circuit, emfs, resistances):
        for emf in emfs:
            circuit.add_battery(emf)
        for resistance in resistances:
            circuit.add_resistor(resistance)
        circuit.compute_equivalents()
        assert circuit.compute_branch_current() is None
        assert circuit.current is None

    def test_current_is_per_circuit_instance(self):
        first, second = Circuit("first"), Circuit("second")
        first.add_battery(10.0)
        first.add_resistor(10.0)
        first.recalculate_all()
        second.recalculate_all()
        assert first.current == pytest.approx(1.0)
        assert second.current is None


class TestRecalculateAll:

    def test_propagates_voltage_to_defined_resistors(self, circuit):
        circuit.add_battery(9.0)
        r1 = circuit.add_resistor(100.0)
        r2 = circuit.add_resistor(50.0)
        r_undefined = circuit.add_resistor(None)
        current = circuit.recalculate_all()
        assert current == pytest.approx(0.06)
        assert r1.voltage == pytest.approx(6.0)
        assert r2.voltage == pytest.approx(3.0)
        assert r_undefined.voltage is None

    def test_resistor_made_undefined_loses_stale_voltage(self, circuit):
        circuit.add_battery(9.0)
        r1 = circuit.add_resistor(100.0)
        r2 = circuit.add_resistor(50.0)
        circuit.recalculate_all()
        assert r2.voltage == pytest.approx(3.0)

        r2.resistance = None
        circuit.recalculate_all()
        assert circuit.current == pytest.approx(0.09)
        assert r1.voltage == pytest.approx(9.0)
        assert r2.voltage is None

    def test_capacitor_equivalent_computed_with_steady_state_current(self, rc_circuit):
        rc_circuit.recalculate_all()
        assert rc_circuit.equivalent_capacitance == pytest.approx(1e-6)
        # Steady-state Ohm's law ignores the capacitor.
        assert rc_circuit.current == pytest.approx(0.1)
        assert rc_circuit.time_constant == pytest.approx(1e-4)

    def test_removing_only_resistor_guards_division(self, circuit):
        circuit.add_battery(10.0)
        resistor = circuit.add_resistor(100.0)
        assert circuit.recalculate_all() == pytest.approx(0.1)

        circuit.remove(resistor)
        assert circuit.recalculate_all() is None
        assert circuit.equivalent_resistance == 0.0
        assert circuit.current is None

    def test_no_propagation_when_current_undefined(self, circuit):
        resistor = circuit.add_resistor(100.0)
        circuit.recalculate_all()
        assert resistor.voltage is None


class TestMutationsAndQueries:

    def test_instance_ids_assigned_per_kind(self, rc_circuit):
        assert [c.instance_id for c in rc_circuit.components] == ["B1", "R1", "C1"]
        assert rc_circuit.add_resistor(1.0).instance_id == "R2"

    def test_add_dispatches_on_value_kind(self, circuit):
        circuit.add(Capacitor(1e-6))
        circuit.add(Battery(1.0))
        circuit.add(Resistor(1.0))
        assert len(circuit.batteries) == len(circuit.resistors) == len(circuit.capacitors) == 1
        assert len(circuit) == 3

    def test_remove_is_by_identity(self, circuit):
        first = circuit.add_battery(5.0)
        second = circuit.add_battery(5.0)
        circuit.remove(first)
        assert circuit.batteries == [second]
        assert first not in circuit

    def test_remove_by_instance_id(self, rc_circuit):
        removed = rc_circuit.remove("C1")
        assert isinstance(removed, Capacitor)
        assert rc_circuit.capacitors == []

    def test_revision_counts_mutations(self, circuit):
        start = circuit.revision
        battery = circuit.add_battery(1.0)
        circuit.remove(battery)
        assert circuit.revision == start + 2

    def test_invalid_mutations_raise(self, circuit):
        stranger = Resistor(10.0)
        with pytest.raises(CircuitMutationError, match="not part of this circuit"):
            circuit.remove(stranger)
        with pytest.raises(CircuitMutationError):
            circuit.remove("R42")
        with pytest.raises(CircuitMutationError, match="Only circuit components"):
            circuit.add("a resistor")

        circuit.add(Resistor(10.0, instance_id="R1"))
        with pytest.raises(CircuitMutationError, match="already used"):
            circuit.add(Resistor(20.0, instance_id="R1"))

    def test_adding_same_component_twice_raises(self, circuit):
        resistor = circuit.add_resistor(10.0)
        with pytest.raises(CircuitMutationError, match="already part"):
            circuit.add(resistor)

    def test_mutation_error_has_diagnostic_report(self, circuit):
        with pytest.raises(CircuitMutationError) as excinfo:
            circuit.remove("X1")
        assert "Circuit Mutation Error" in excinfo.value.get_diagnostic_report()

    def test_component_state_snapshot(self, rc_circuit):
        rc_circuit.recalculate_all()
        battery_state = rc_circuit.component_state("B1")
        resistor_state = rc_circuit.component_state(rc_circuit.resistors[0])
        capacitor_state = rc_circuit.component_state("C1")

        assert battery_state == ComponentState("B1", "Battery", 10.0, 10.0)
        assert resistor_state.voltage == pytest.approx(10.0)
        assert capacitor_state.component_type == "Capacitor"
        assert capacitor_state.value == 1e-6
        assert capacitor_state.voltage is None
        assert list(rc_circuit.snapshot()) == ["B1", "R1", "C1"]

    def test_time_constant_undefined_without_capacitance(self, circuit):
        circuit.add_resistor(100.0)
        circuit.recalculate_all()
        assert circuit.time_constant is None

    def test_clear_and_reset_transient_state(self, rc_circuit):
        rc_circuit.recalculate_all()
        rc_circuit.capacitors[0].voltage = 4.0
        rc_circuit.reset_transient_state()
        assert rc_circuit.capacitors[0].voltage == 0.0
        assert rc_circuit.resistors[0].voltage is None
        assert rc_circuit.equivalent_battery is None
        assert rc_circuit.equivalent_resistor is None
        assert rc_circuit.equivalent_capacitor is None

        rc_circuit.clear()
        assert len(rc_circuit) == 0
        assert rc_circuit.add_battery(1.0).instance_id == "B1"
