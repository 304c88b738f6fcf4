# src/rcsim_core/components/base.py

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional

from .base_enums import ValueKind
from .exceptions import ComponentError


logger = logging.getLogger(__name__)


class ComponentBase(ABC):
    """
    The abstract base class for all series-circuit components in RCSim Core.

    A component has a stable identity (the object itself, plus an optional
    `instance_id` that the Circuit fills in when it is added) and mutable
    values. Each concrete class exposes a small capability interface. The
    Circuit uses `value_kind()` to pick a collection when the component is
    added, and `applies_voltage()` to report a source's EMF as its voltage in
    snapshots, instead of inspecting runtime types.
    """
    component_type_str: ClassVar[str] = "BaseComponent"

    def __init__(self, instance_id: Optional[str] = None):
        """
        Initializes the base attributes of a component instance.

        Args:
            instance_id: The unique ID of this component instance (e.g., 'R1').
                         May be None; the Circuit assigns one on insertion.
        """
        self.instance_id: Optional[str] = instance_id
        logger.debug(f"Initialized {type(self).__name__} '{self.fqn}'")

    @property
    def fqn(self) -> str:
        """A readable name for diagnostics, valid before and after placement."""
        if self.instance_id is None:
            return f"<unplaced {type(self).component_type_str}>"
        return self.instance_id

    @property
    def value(self) -> Optional[float]:
        """The component's primary value (emf, resistance or capacitance) in SI units."""
        primary = next(iter(type(self).declare_parameters()))
        return getattr(self, primary)

    @classmethod
    @abstractmethod
    def declare_parameters(cls) -> Dict[str, str]:
        """
        Declare settable parameter names and their units as strings. The first
        entry is the component's primary value.
        """
        pass

    @classmethod
    @abstractmethod
    def default_parameters(cls) -> Dict[str, float]:
        """Values used when a component is created from the palette without input."""
        pass

    @classmethod
    @abstractmethod
    def value_kind(cls) -> ValueKind:
        """Which series quantity this component contributes to."""
        pass

    @classmethod
    def applies_voltage(cls) -> bool:
        """True if the component drives the circuit (a source), False for passives."""
        return False

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.fqn}')"

    def __repr__(self) -> str:
        params = ", ".join(f"{name}={getattr(self, name)!r}" for name in type(self).declare_parameters())
        return f"{type(self).__name__}(fqn='{self.fqn}', {params})"


# --- Global Component Registry and Decorator ---

COMPONENT_REGISTRY: Dict[str, type[ComponentBase]] = {}


def register_component(type_str: str):
    """
    A class decorator to register a component class in the global component registry,
    making it available to `create_component`.
    """
    def decorator(cls: type[ComponentBase]):
        if not issubclass(cls, ComponentBase):
            raise TypeError(f"Class {cls.__name__} must inherit from ComponentBase.")

        params = cls.declare_parameters()
        if not isinstance(params, dict) or not params or not all(isinstance(k, str) and isinstance(v, str) for k, v in params.items()):
            raise TypeError(
                f"Component class '{cls.__name__}' violates API contract. "
                f"declare_parameters() must return a non-empty Dict[str, str], but returned: {params!r}."
            )
        if not isinstance(cls.value_kind(), ValueKind):
            raise TypeError(
                f"Component class '{cls.__name__}' violates API contract. "
                f"value_kind() must return a ValueKind member."
            )

        if type_str in COMPONENT_REGISTRY:
            logger.warning(f"Component type '{type_str}' is being redefined/overwritten.")
        cls.component_type_str = type_str
        COMPONENT_REGISTRY[type_str] = cls
        logger.info(f"Registered component type '{type_str}' -> {cls.__name__}")
        return cls
    return decorator


def create_component(type_str: str, instance_id: Optional[str] = None, **values: Any) -> ComponentBase:
    """
    Builds a component by its registered type name.

    The lookup is case-insensitive, so palette identifiers such as "BATTERY"
    resolve to the "Battery" class. When no values are given the class's
    palette defaults are used.

    Raises:
        ComponentError: if the type is unknown or a value name is not declared
                        by the component class.
    """
    lookup = {name.lower(): cls for name, cls in COMPONENT_REGISTRY.items()}
    cls = lookup.get(str(type_str).lower())
    if cls is None:
        raise ComponentError(
            component_fqn=instance_id or "<factory>",
            details=f"Unknown component type '{type_str}'. Known types: {sorted(COMPONENT_REGISTRY)}.",
            user_input=type_str,
        )

    declared = cls.declare_parameters()
    unknown = set(values) - set(declared)
    if unknown:
        raise ComponentError(
            component_fqn=instance_id or f"<unplaced {cls.component_type_str}>",
            details=f"Unknown parameter(s) {sorted(unknown)} for '{cls.component_type_str}'. Declared: {list(declared)}.",
        )

    if not values:
        values = cls.default_parameters()
    return cls(instance_id=instance_id, **values)
