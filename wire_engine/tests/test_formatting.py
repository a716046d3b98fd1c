"""
Tests for metric display formatting.

Validates:
1. Magnitude-adaptive decimal clamping
2. Unit suffixes and per-metric precision
3. Placeholder for non-finite values
4. Frequency and AC result rendering
"""

import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from wire_engine.ac_solver import solve_ac_circuit
from wire_engine.dc_solver import solve_wire_metrics
from wire_engine.formatting import (
    PLACEHOLDER,
    format_ac_metrics,
    format_frequency,
    format_metric_value,
    format_number,
)


class TestFormatNumber:
    """Magnitude decides how many decimals survive."""

    def test_small_uses_requested_digits(self):
        assert format_number(6) == '6.00'
        assert format_number(5.12345, 3) == '5.123'

    def test_tens_clamped_to_two(self):
        assert format_number(12.3456, 3) == '12.35'
        assert format_number(12.3, 1) == '12.3'

    def test_hundreds_clamped_to_one(self):
        assert format_number(123.456, 3) == '123.5'
        assert format_number(150, 0) == '150'

    def test_thousands_exactly_one(self):
        assert format_number(1234.5678, 3) == '1234.6'
        assert format_number(1500, 0) == '1500.0'

    def test_negative_uses_magnitude(self):
        assert format_number(-12.5) == '-12.50'
        assert format_number(-2500.4) == '-2500.4'

    def test_non_finite(self):
        assert format_number(float('nan')) == PLACEHOLDER
        assert format_number(float('inf')) == PLACEHOLDER
        assert format_number(None) == PLACEHOLDER


class TestFormatMetricValue:
    """Per-metric precision and unit."""

    def test_resistance_from_solve(self):
        solved = solve_wire_metrics({'voltage': 12, 'current': 2})
        assert format_metric_value(solved.resistance, 'resistance') == '6.00 Ω'

    def test_current_three_decimals(self):
        solved = solve_wire_metrics({'voltage': 12, 'resistance': 6})
        assert format_metric_value(solved.current, 'current') == '2.000 A'

    def test_watts_and_voltage(self):
        assert format_metric_value(36, 'watts') == '36.00 W'
        assert format_metric_value(1234.5, 'watts') == '1234.5 W'
        assert format_metric_value(230, 'voltage') == '230.0 V'

    def test_placeholder(self):
        assert format_metric_value(None, 'voltage') == PLACEHOLDER
        assert format_metric_value(math.nan, 'current') == PLACEHOLDER

    def test_unknown_metric(self):
        with pytest.raises(ValueError):
            format_metric_value(1.0, 'frequency')


class TestFormatFrequency:

    def test_hertz(self):
        assert format_frequency(60) == '60.0 Hz'

    def test_kilohertz(self):
        assert format_frequency(1500) == '1.50 kHz'

    def test_megahertz(self):
        assert format_frequency(2e6) == '2.00 MHz'

    def test_placeholder(self):
        assert format_frequency(float('nan')) == PLACEHOLDER


class TestFormatACMetrics:
    """Whole-result rendering for the AC analysis panel."""

    def test_resistive_circuit(self):
        ac = solve_ac_circuit({'voltage': 120.0, 'frequency_hz': 60.0, 'resistance': 20.0})
        formatted = format_ac_metrics(ac)
        assert formatted['frequency'] == '60.0 Hz'
        assert formatted['impedance'] == '20.00 Ω'
        assert formatted['current'] == '6.000 A'
        assert formatted['phase_angle'] == '0.00°'
        assert formatted['phase_characteristic'] == 'unity'
        assert formatted['power_factor'] == '1.000'
        assert formatted['real_power'] == '720.0 W'
        assert formatted['apparent_power'] == '720.0 VA'
        assert formatted['reactive_power'] == '0.00 VAR'

    def test_inductive_circuit(self):
        ac = solve_ac_circuit({
            'voltage': 10.0, 'frequency_hz': 1000.0, 'resistance': 50.0, 'inductance': 0.01,
        })
        formatted = format_ac_metrics(ac)
        assert formatted['inductive_reactance'] == '62.83 Ω'
        assert formatted['capacitive_reactance'] == '0.00 Ω'
        assert formatted['phase_characteristic'] == 'lagging'
        assert formatted['frequency'] == '1.00 kHz'

    def test_accepts_dict(self):
        ac = solve_ac_circuit({'voltage': 120.0, 'frequency_hz': 60.0, 'resistance': 20.0})
        assert format_ac_metrics(ac.as_dict()) == format_ac_metrics(ac)

    def test_every_field_rendered(self):
        ac = solve_ac_circuit({'voltage': 1.0, 'frequency_hz': 50.0, 'resistance': 1.0})
        formatted = format_ac_metrics(ac)
        for key in ac.as_dict():
            if key == 'frequency_hz':
                continue
            assert key in formatted
        assert 'frequency' in formatted


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
