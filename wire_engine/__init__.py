"""
W.I.R.E. Compute Engine

Electrical quantity resolution for the circuit-building workspace:
DC Watts/Current/Resistance/Voltage propagation, series RLC AC analysis,
display formatting and worksheet grading.

All math is deterministic and stateless; every call builds its own result.
"""

from wire_engine.tolerance import EPSILON, nearly_equal, is_finite_number, clamp, round_to
from wire_engine.metrics import (
    WireMetricKey, Derivation, SolvedWireMetrics, METRIC_UNITS, METRIC_PRECISION,
    sanitise_metrics, merge_metrics, empty_wire_metrics,
)
from wire_engine.dc_solver import DC_RULES, DerivationRule, UnderdeterminedSystem, solve_wire_metrics
from wire_engine.ac_solver import (
    ACCircuitInput, ACMetrics, ACValidation, solve_ac_circuit, validate_ac_input,
    phase_characteristic, resonant_frequency, generate_frequencies, sweep_ac_circuit,
)
from wire_engine.formatting import format_number, format_metric_value, format_frequency, format_ac_metrics
from wire_engine.grading import grade_answers, within_tolerance

__version__ = "0.1.0"
