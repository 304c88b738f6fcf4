# src/rcsim_core/components/base_enums.py
from enum import Enum, auto


class ValueKind(Enum):
    """
    Defines which quantity a component contributes to the series circuit. The
    Circuit files each component into a collection by this kind when it is added.
    """
    EMF = auto()          # Ideal source voltage (batteries).
    RESISTANCE = auto()   # Series resistance (resistors).
    CAPACITANCE = auto()  # Series capacitance (capacitors).
