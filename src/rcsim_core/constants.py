# --- src/rcsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Simulation Timing ---

#: Simulated time advanced by one engine tick, in seconds. This is a fixed
#: configuration value and is never derived from measured wall-clock time.
DEFAULT_TICK_PERIOD_S: float = 0.1

# --- Palette Defaults ---
# Values a freshly placed component starts with when none are given.

#: Default electromotive force of a new battery, in volts.
DEFAULT_BATTERY_EMF_V: float = 5.0

#: Default resistance of a new resistor, in ohms.
DEFAULT_RESISTANCE_OHM: float = 100.0

#: Default capacitance of a new capacitor, in farads.
DEFAULT_CAPACITANCE_F: float = 1.0e-6

#: Default initial voltage across a new capacitor, in volts.
DEFAULT_CAPACITOR_VOLTAGE_V: float = 0.0

logger.debug("Defined core constants: DEFAULT_TICK_PERIOD_S and palette defaults")
