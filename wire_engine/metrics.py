"""
W.I.R.E. metric keys, units and result records.

W.I.R.E. = Watts, current (I), Resistance, voltage (E): the four lumped
quantities tied together by Ohm's law and the power law.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from wire_engine.tolerance import is_finite_number


class WireMetricKey(str, Enum):
    WATTS = "watts"
    CURRENT = "current"
    RESISTANCE = "resistance"
    VOLTAGE = "voltage"


METRIC_KEYS: Tuple[str, ...] = tuple(k.value for k in WireMetricKey)

METRIC_UNITS = {
    'watts': 'W',
    'current': 'A',
    'resistance': 'Ω',
    'voltage': 'V',
}

# Display decimals per metric (current is shown to the milliamp)
METRIC_PRECISION = {
    'watts': 2,
    'current': 3,
    'resistance': 2,
    'voltage': 2,
}


@dataclass(frozen=True)
class Derivation:
    """How a metric was computed: a formula label and its ordered inputs."""
    formula: str
    inputs: Tuple[str, ...]


@dataclass(frozen=True)
class SolvedWireMetrics:
    """A complete, finite W.I.R.E. set plus provenance for derived fields."""
    watts: float
    current: float
    resistance: float
    voltage: float
    derived: Dict[str, Derivation] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, float]:
        return {key: getattr(self, key) for key in METRIC_KEYS}

    def is_derived(self, key: str) -> bool:
        return metric_key(key) in self.derived


def metric_key(key) -> str:
    """Normalise a metric name (str or WireMetricKey) to its string value."""
    try:
        return WireMetricKey(key).value
    except ValueError:
        raise ValueError(
            f"Unknown metric '{key}'. Must be one of: {list(METRIC_KEYS)}"
        ) from None


def sanitise_metrics(metrics: Optional[Mapping]) -> Dict[str, float]:
    """Keep only known metric keys with finite numeric values."""
    result = {}
    for key, value in (metrics or {}).items():
        try:
            name = metric_key(key)
        except ValueError:
            continue
        if is_finite_number(value):
            result[name] = float(value)
    return result


def merge_metrics(base: Optional[Mapping], overrides: Optional[Mapping]) -> Dict[str, float]:
    """Sanitise both sets and let finite overrides replace base values."""
    merged = sanitise_metrics(base)
    merged.update(sanitise_metrics(overrides))
    return merged


def empty_wire_metrics() -> Dict[str, float]:
    return {key: 0.0 for key in METRIC_KEYS}
