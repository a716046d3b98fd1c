"""
Display formatting for solved W.I.R.E. and AC metrics.

Precision adapts to magnitude so large values don't show spurious digits:

    |v| < 10      → requested decimals
    |v| >= 10     → at most 2
    |v| >= 100    → at most 1
    |v| >= 1000   → exactly 1

Non-finite values render as a dash placeholder.
"""

from typing import Dict, Union

from wire_engine.ac_solver import ACMetrics, phase_characteristic
from wire_engine.metrics import METRIC_PRECISION, METRIC_UNITS, metric_key
from wire_engine.tolerance import is_finite_number

PLACEHOLDER = '—'


def _applied_digits(magnitude: float, digits: int) -> int:
    if magnitude >= 1000:
        return 1
    if magnitude >= 100:
        return min(digits, 1)
    if magnitude >= 10:
        return min(digits, 2)
    return digits


def format_number(value, digits: int = 2) -> str:
    """
    Format a number with magnitude-adaptive precision.

    Examples:
        format_number(6)        → '6.00'
        format_number(36.4)     → '36.40'
        format_number(123.456)  → '123.5'
        format_number(1500, 0)  → '1500.0'
    """
    if not is_finite_number(value):
        return PLACEHOLDER
    applied = _applied_digits(abs(value), digits)
    return f"{value:.{applied}f}"


def format_metric_value(value, key) -> str:
    """Format a W.I.R.E. metric with its display precision and unit, e.g. '6.00 Ω'."""
    name = metric_key(key)
    if not is_finite_number(value):
        return PLACEHOLDER
    return f"{format_number(value, METRIC_PRECISION.get(name, 2))} {METRIC_UNITS[name]}"


def format_frequency(frequency_hz) -> str:
    """'60.0 Hz', '1.50 kHz', '2.00 MHz'."""
    if not is_finite_number(frequency_hz):
        return PLACEHOLDER
    magnitude = abs(frequency_hz)
    if magnitude >= 1e6:
        return f"{frequency_hz / 1e6:.2f} MHz"
    if magnitude >= 1e3:
        return f"{frequency_hz / 1e3:.2f} kHz"
    return f"{frequency_hz:.1f} Hz"


def _with_unit(value, unit: str, digits: int = 2) -> str:
    if not is_finite_number(value):
        return PLACEHOLDER
    return f"{format_number(value, digits)} {unit}"


def format_ac_metrics(metrics: Union[ACMetrics, Dict]) -> Dict[str, str]:
    """Render every AC field as a display string, plus the phase characteristic."""
    m = metrics.as_dict() if isinstance(metrics, ACMetrics) else dict(metrics)
    phase = m['phase_angle']

    if is_finite_number(phase):
        phase_display = f"{format_number(phase, 2)}°"
        characteristic = phase_characteristic(phase)
    else:
        phase_display = PLACEHOLDER
        characteristic = 'unity'

    if is_finite_number(m['power_factor']):
        power_factor_display = f"{m['power_factor']:.3f}"
    else:
        power_factor_display = PLACEHOLDER

    return {
        'frequency': format_frequency(m['frequency_hz']),
        'inductive_reactance': _with_unit(m['inductive_reactance'], 'Ω'),
        'capacitive_reactance': _with_unit(m['capacitive_reactance'], 'Ω'),
        'net_reactance': _with_unit(m['net_reactance'], 'Ω'),
        'impedance': _with_unit(m['impedance'], 'Ω'),
        'phase_angle': phase_display,
        'phase_characteristic': characteristic,
        'power_factor': power_factor_display,
        'current': _with_unit(m['current'], 'A', 3),
        'apparent_power': _with_unit(m['apparent_power'], 'VA'),
        'real_power': _with_unit(m['real_power'], 'W'),
        'reactive_power': _with_unit(m['reactive_power'], 'VAR'),
    }
