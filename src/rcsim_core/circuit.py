# src/rcsim_core/circuit.py
"""
Defines the `Circuit`, the aggregate that owns every component of a single
series loop and derives its equivalent source, resistance, and capacitance.

All arithmetic edge cases (empty collections, undefined values, a zero
resistance) are expressed as `None` results, never as exceptions. Only
structural misuse, such as removing a component that is not in the circuit,
raises a `CircuitMutationError`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union

from .components import Battery, Resistor, Capacitor, ComponentBase, ValueKind
from .errors import CircuitMutationError

logger = logging.getLogger(__name__)

_ID_PREFIXES: Dict[ValueKind, str] = {
    ValueKind.EMF: "B",
    ValueKind.RESISTANCE: "R",
    ValueKind.CAPACITANCE: "C",
}


@dataclass(frozen=True)
class ComponentState:
    """
    An immutable, read-only snapshot of one component's observable values.

    `value` is the component's primary value (emf, resistance or capacitance).
    Fields that do not apply to a component type (e.g. a battery's charge) are None.
    """
    instance_id: str
    component_type: str
    value: Optional[float]
    voltage: Optional[float]
    charge: Optional[float] = None
    current: Optional[float] = None


class Circuit:
    """
    A single series loop of batteries, resistors, and capacitors.

    The member collections keep insertion order; the first capacitor is the
    representative one used for the branch current during a transient. The
    equivalents and the branch `current` are derived fields owned by this
    instance and are only meaningful after a recompute.
    """

    def __init__(self, name: str = "circuit"):
        self.name: str = name
        self._collections: Dict[ValueKind, List[ComponentBase]] = {kind: [] for kind in ValueKind}
        self._id_counters: Dict[ValueKind, int] = {kind: 0 for kind in ValueKind}

        self.equivalent_battery: Optional[Battery] = None
        self.equivalent_resistor: Optional[Resistor] = None
        self.equivalent_capacitor: Optional[Capacitor] = None
        self.current: Optional[float] = None

        # Bumped on every add/remove so a running transient can detect topology changes.
        self.revision: int = 0
        logger.debug(f"Circuit '{self.name}' created.")

    # --- Member collections ---

    @property
    def batteries(self) -> List[Battery]:
        return self._collections[ValueKind.EMF]

    @property
    def resistors(self) -> List[Resistor]:
        return self._collections[ValueKind.RESISTANCE]

    @property
    def capacitors(self) -> List[Capacitor]:
        return self._collections[ValueKind.CAPACITANCE]

    @property
    def components(self) -> List[ComponentBase]:
        """All members, batteries first, then resistors, then capacitors."""
        return [*self.batteries, *self.resistors, *self.capacitors]

    def __iter__(self) -> Iterator[ComponentBase]:
        return iter(self.components)

    def __len__(self) -> int:
        return sum(len(members) for members in self._collections.values())

    def __contains__(self, component: object) -> bool:
        if not isinstance(component, ComponentBase):
            return False
        return any(member is component for member in self._collections[component.value_kind()])

    # --- Mutations ---

    def add(self, component: ComponentBase) -> ComponentBase:
        """
        Adds a component to the collection matching its `value_kind()`.

        A component without an instance id is given the next free one for its kind
        (B1, R1, C1, ...). Returns the component for chaining.

        Raises:
            CircuitMutationError: if the object is not a component, is already in
                                  this circuit, or its id is already taken.
        """
        if not isinstance(component, ComponentBase):
            raise CircuitMutationError(
                circuit_name=self.name,
                details=f"Only circuit components can be added, got {type(component).__name__}."
            )
        if component in self:
            raise CircuitMutationError(
                circuit_name=self.name,
                details=f"Component '{component.fqn}' is already part of this circuit."
            )

        kind = component.value_kind()
        if component.instance_id is None:
            component.instance_id = self._next_instance_id(kind)
        elif self.get(component.instance_id) is not None:
            raise CircuitMutationError(
                circuit_name=self.name,
                details=f"Instance id '{component.instance_id}' is already used by another component."
            )

        self._collections[kind].append(component)
        self.revision += 1
        logger.debug(f"Added {component!r} to circuit '{self.name}'.")
        return component

    def add_battery(self, emf=None, instance_id: Optional[str] = None) -> Battery:
        return self.add(Battery(emf=emf, instance_id=instance_id))

    def add_resistor(self, resistance=None, instance_id: Optional[str] = None) -> Resistor:
        return self.add(Resistor(resistance=resistance, instance_id=instance_id))

    def add_capacitor(self, capacitance=None, voltage=None, instance_id: Optional[str] = None) -> Capacitor:
        return self.add(Capacitor(capacitance=capacitance, voltage=voltage, instance_id=instance_id))

    def remove(self, component: Union[ComponentBase, str]) -> ComponentBase:
        """
        Removes a component, given either the object or its instance id. Removal is
        by identity: two batteries with the same EMF are still distinct members.
        The equivalents are only updated on the next recompute.

        Raises:
            CircuitMutationError: if the component is not part of this circuit.
        """
        target = self.get(component) if isinstance(component, str) else component
        if target is None or target not in self:
            label = component if isinstance(component, str) else getattr(component, "fqn", repr(component))
            raise CircuitMutationError(
                circuit_name=self.name,
                details=f"Component '{label}' is not part of this circuit."
            )

        members = self._collections[target.value_kind()]
        members[:] = [member for member in members if member is not target]
        self.revision += 1
        logger.debug(f"Removed {target!r} from circuit '{self.name}'.")
        return target

    def clear(self):
        """Removes every component and forgets all derived values."""
        for members in self._collections.values():
            members.clear()
        self._id_counters = {kind: 0 for kind in ValueKind}
        self.revision += 1
        self.discard_equivalents()

    def get(self, instance_id: str) -> Optional[ComponentBase]:
        for component in self.components:
            if component.instance_id == instance_id:
                return component
        return None

    def _next_instance_id(self, kind: ValueKind) -> str:
        prefix = _ID_PREFIXES[kind]
        while True:
            self._id_counters[kind] += 1
            candidate = f"{prefix}{self._id_counters[kind]}"
            if self.get(candidate) is None:
                return candidate

    # --- Equivalent-circuit aggregation ---

    def compute_equivalent_battery(self) -> Optional[Battery]:
        """
        Veq = sum(Ei) over batteries with a defined EMF. Undefined when there is
        no battery with a defined EMF; a set of zero-EMF batteries yields 0.0.
        """
        emfs = [battery.emf for battery in self.batteries if battery.emf is not None]
        if not emfs:
            self.equivalent_battery = None
        else:
            self.equivalent_battery = Battery(emf=sum(emfs), instance_id=f"{self.name}.Beq")
        return self.equivalent_battery

    def compute_equivalent_resistor(self) -> Resistor:
        """
        Req = sum(Ri) over resistors with a defined resistance. Unlike the battery
        and capacitor equivalents this is never undefined: an empty or
        all-undefined resistor set yields exactly 0.0.
        """
        resistance = 0.0
        for resistor in self.resistors:
            if resistor.resistance is not None:
                resistance += resistor.resistance
        self.equivalent_resistor = Resistor(resistance=resistance, instance_id=f"{self.name}.Req")
        return self.equivalent_resistor

    def compute_equivalent_capacitor(self) -> Optional[Capacitor]:
        """
        1/Ceq = sum(1/Ci) over capacitors with a defined, non-zero capacitance.
        Undefined when no capacitor contributes.
        """
        inv_c_sum = 0.0
        for capacitor in self.capacitors:
            if capacitor.capacitance:
                inv_c_sum += 1.0 / capacitor.capacitance

        if inv_c_sum == 0.0:
            self.equivalent_capacitor = None
        else:
            self.equivalent_capacitor = Capacitor(capacitance=1.0 / inv_c_sum, instance_id=f"{self.name}.Ceq")
        return self.equivalent_capacitor

    def compute_equivalents(self):
        """Recomputes the three equivalents in the fixed order battery, resistor, capacitor."""
        self.compute_equivalent_battery()
        self.compute_equivalent_resistor()
        self.compute_equivalent_capacitor()

    def compute_branch_current(self) -> Optional[float]:
        """
        Steady-state Ohm's law, I = Veq / Req, from the current equivalents.
        Undefined if either equivalent is undefined or Req == 0.
        """
        v_eq = self.equivalent_emf
        r_eq = self.equivalent_resistance
        if v_eq is None or r_eq is None or r_eq == 0.0:
            self.current = None
        else:
            self.current = v_eq / r_eq
        return self.current

    def propagate_current(self, current: Optional[float]):
        """
        Writes V = I * R to every resistor. A resistor whose resistance is now
        undefined gets an undefined voltage. Nothing changes if `current` is None.
        """
        if current is None:
            return
        for resistor in self.resistors:
            resistor.calculate_voltage(current)

    def recalculate_all(self) -> Optional[float]:
        """
        Recomputes battery, resistor and capacitor equivalents, then the steady-state
        current, and propagates that current to the resistors when it is defined.
        """
        self.compute_equivalents()
        self.compute_branch_current()
        self.propagate_current(self.current)
        logger.debug(
            f"Circuit '{self.name}' recalculated: Veq={self.equivalent_emf}, "
            f"Req={self.equivalent_resistance}, Ceq={self.equivalent_capacitance}, I={self.current}"
        )
        return self.current

    # --- Derived-value queries ---

    @property
    def equivalent_emf(self) -> Optional[float]:
        return None if self.equivalent_battery is None else self.equivalent_battery.emf

    @property
    def equivalent_resistance(self) -> Optional[float]:
        return None if self.equivalent_resistor is None else self.equivalent_resistor.resistance

    @property
    def equivalent_capacitance(self) -> Optional[float]:
        return None if self.equivalent_capacitor is None else self.equivalent_capacitor.capacitance

    @property
    def time_constant(self) -> Optional[float]:
        """tau = Req * Ceq in seconds, or None if either equivalent is undefined or zero."""
        r_eq = self.equivalent_resistance
        c_eq = self.equivalent_capacitance
        if not r_eq or not c_eq:
            return None
        return r_eq * c_eq

    def component_state(self, component: Union[ComponentBase, str]) -> ComponentState:
        """
        Returns a snapshot of a member's observable values, looked up by object or id.

        Raises:
            CircuitMutationError: if the component is not part of this circuit.
        """
        target = self.get(component) if isinstance(component, str) else component
        if target is None or target not in self:
            raise CircuitMutationError(
                circuit_name=self.name,
                details=f"Component '{component}' is not part of this circuit."
            )
        return ComponentState(
            instance_id=target.instance_id,
            component_type=type(target).component_type_str,
            value=target.value,
            voltage=target.emf if target.applies_voltage() else target.voltage,
            charge=getattr(target, "charge", None),
            current=getattr(target, "current", None),
        )

    def snapshot(self) -> Dict[str, ComponentState]:
        """Snapshots of every member, keyed by instance id, in collection order."""
        return {component.instance_id: self.component_state(component) for component in self.components}

    # --- Transient housekeeping ---

    def discard_equivalents(self):
        """Forgets the equivalents and the branch current without recomputing."""
        self.equivalent_battery = None
        self.equivalent_resistor = None
        self.equivalent_capacitor = None
        self.current = None

    def reset_transient_state(self):
        """
        Returns every derived and stateful value to a cold start: capacitors are
        discharged to 0 V, resistor voltages become undefined, equivalents are discarded.
        """
        for capacitor in self.capacitors:
            capacitor.clear_state()
        for resistor in self.resistors:
            resistor.clear_voltage()
        self.discard_equivalents()
        logger.debug(f"Circuit '{self.name}' transient state reset.")

    def __repr__(self) -> str:
        return (
            f"Circuit(name='{self.name}', batteries={len(self.batteries)}, "
            f"resistors={len(self.resistors)}, capacitors={len(self.capacitors)})"
        )
