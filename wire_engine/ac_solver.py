"""
Series RLC evaluation for AC analysis.

For a source of RMS voltage V at frequency f driving a lumped series
R, L, C network:

    XL = 2πfL
    XC = 1 / (2πfC)        (0 when f or C is 0, i.e. no capacitor)
    X  = XL - XC
    Z  = √(R² + X²)
    φ  = atan(X / R)       (±90° when R = 0)
    I  = V / Z
    S  = V·I,  P = S·cos φ,  Q = S·sin φ

The evaluator never fails numerically. Input bounds are checked by
validate_ac_input(), which callers run before trusting results.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Mapping, Optional, Union

import numpy as np

from wire_engine.tolerance import EPSILON, is_finite_number, round_to

# Output rounding, part of the evaluator's contract
OHM_DIGITS = 4
POWER_DIGITS = 4
PHASE_DIGITS = 2
CURRENT_DIGITS = 6
POWER_FACTOR_DIGITS = 4

# Phase angles within this many degrees of zero read as unity power factor
UNITY_PHASE_DEGREES = 0.01


@dataclass(frozen=True)
class ACCircuitInput:
    voltage: float
    frequency_hz: float
    resistance: float
    inductance: float = 0.0    # Henries
    capacitance: float = 0.0   # Farads


@dataclass(frozen=True)
class ACMetrics:
    frequency_hz: float
    inductive_reactance: float
    capacitive_reactance: float
    net_reactance: float
    impedance: float
    phase_angle: float         # degrees
    current: float
    apparent_power: float      # VA
    reactive_power: float      # VAR
    real_power: float          # W
    power_factor: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class ACValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)


ACInputLike = Union[ACCircuitInput, Mapping]


def _coerce_input(circuit: ACInputLike, require_frequency: bool = True) -> ACCircuitInput:
    if isinstance(circuit, ACCircuitInput):
        return circuit
    if require_frequency:
        frequency_hz = circuit['frequency_hz']
    else:
        frequency_hz = circuit.get('frequency_hz') or 0.0
    return ACCircuitInput(
        voltage=circuit['voltage'],
        frequency_hz=frequency_hz,
        resistance=circuit['resistance'],
        inductance=circuit.get('inductance') or 0.0,
        capacitance=circuit.get('capacitance') or 0.0,
    )


def validate_ac_input(circuit: ACInputLike) -> ACValidation:
    """Check input bounds. No cross-field checks: L = C = 0 is a plain resistor.

    Missing or non-finite fields fail the same check as out-of-range ones.
    """
    c = _coerce_input(circuit, require_frequency=False)
    errors = []

    if not is_finite_number(c.voltage) or c.voltage < 0:
        errors.append("Voltage must be non-negative")
    if not is_finite_number(c.frequency_hz) or c.frequency_hz <= 0:
        errors.append("Frequency must be positive")
    if not is_finite_number(c.resistance) or c.resistance < 0:
        errors.append("Resistance must be non-negative")
    if not is_finite_number(c.inductance) or c.inductance < 0:
        errors.append("Inductance must be non-negative")
    if not is_finite_number(c.capacitance) or c.capacitance < 0:
        errors.append("Capacitance must be non-negative")

    return ACValidation(valid=not errors, errors=errors)


def solve_ac_circuit(circuit: ACInputLike) -> ACMetrics:
    """
    Evaluate reactance, impedance, phase and power for a series RLC circuit.

    Args:
        circuit: ACCircuitInput, or a mapping with voltage, frequency_hz,
                 resistance and optional inductance (H) / capacitance (F).

    Returns:
        ACMetrics rounded to 4 decimals for Ω/VA/W/VAR and power factor,
        2 for phase degrees and 6 for current.
    """
    c = _coerce_input(circuit)
    f = c.frequency_hz
    R = c.resistance
    omega = 2 * math.pi * f

    xl = omega * c.inductance
    xc = 0.0 if f == 0 or c.capacitance == 0 else 1.0 / (omega * c.capacitance)
    x = xl - xc
    z = math.hypot(R, x)

    if R == 0:
        phase_deg = math.copysign(90.0, x) if x != 0 else 0.0
    else:
        phase_deg = math.degrees(math.atan(x / R))
    phase_rad = math.radians(phase_deg)
    power_factor = math.cos(phase_rad)

    current = c.voltage / z if z > EPSILON else 0.0
    apparent = c.voltage * current
    real = apparent * power_factor
    reactive = apparent * math.sin(phase_rad)

    return ACMetrics(
        frequency_hz=f,
        inductive_reactance=round_to(xl, OHM_DIGITS),
        capacitive_reactance=round_to(xc, OHM_DIGITS),
        net_reactance=round_to(x, OHM_DIGITS),
        impedance=round_to(z, OHM_DIGITS),
        phase_angle=round_to(phase_deg, PHASE_DIGITS),
        current=round_to(current, CURRENT_DIGITS),
        apparent_power=round_to(apparent, POWER_DIGITS),
        reactive_power=round_to(reactive, POWER_DIGITS),
        real_power=round_to(real, POWER_DIGITS),
        power_factor=round_to(power_factor, POWER_FACTOR_DIGITS),
    )


def phase_characteristic(phase_angle: float) -> str:
    """'lagging' for inductive, 'leading' for capacitive, else 'unity'."""
    if phase_angle > UNITY_PHASE_DEGREES:
        return 'lagging'
    if phase_angle < -UNITY_PHASE_DEGREES:
        return 'leading'
    return 'unity'


def resonant_frequency(inductance: float, capacitance: float) -> Optional[float]:
    """Series resonance f0 = 1 / (2π√(LC)), or None without both L and C."""
    if inductance <= 0 or capacitance <= 0:
        return None
    return 1.0 / (2 * math.pi * math.sqrt(inductance * capacitance))


def generate_frequencies(
    start: float = 20.0,
    end: float = 20000.0,
    num_points: int = 200,
) -> np.ndarray:
    """Generate logarithmically-spaced frequency array (Hz)."""
    if start <= 0 or end <= 0:
        raise ValueError("Frequency bounds must be positive")
    if num_points < 2:
        raise ValueError("num_points must be at least 2")
    return np.logspace(np.log10(start), np.log10(end), num_points)


def sweep_ac_circuit(circuit: ACInputLike, frequencies: np.ndarray) -> Dict[str, np.ndarray]:
    """
    Evaluate the series RLC pipeline across an array of frequencies.

    The frequency in `circuit` is ignored. Values are not rounded, so the
    result is suited to plotting rather than display.

    Returns:
        Dict of arrays keyed like ACMetrics fields.
    """
    c = _coerce_input(circuit, require_frequency=False)
    f = np.asarray(frequencies, dtype=float)
    if np.any(f <= 0):
        raise ValueError("Sweep frequencies must be positive")

    R = c.resistance
    omega = 2 * np.pi * f

    xl = omega * c.inductance
    if c.capacitance != 0:
        xc = 1.0 / (omega * c.capacitance)
    else:
        xc = np.zeros_like(f)
    x = xl - xc
    z = np.hypot(R, x)

    if R == 0:
        phase_deg = 90.0 * np.sign(x)
    else:
        phase_deg = np.degrees(np.arctan(x / R))
    phase_rad = np.radians(phase_deg)
    power_factor = np.cos(phase_rad)

    current = np.divide(c.voltage, z, out=np.zeros_like(z), where=z > EPSILON)
    apparent = c.voltage * current

    return {
        'frequency_hz': f,
        'inductive_reactance': xl,
        'capacitive_reactance': xc,
        'net_reactance': x,
        'impedance': z,
        'phase_angle': phase_deg,
        'current': current,
        'apparent_power': apparent,
        'reactive_power': apparent * np.sin(phase_rad),
        'real_power': apparent * power_factor,
        'power_factor': power_factor,
    }
