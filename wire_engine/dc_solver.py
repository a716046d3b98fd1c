"""
DC W.I.R.E. resolver: fixpoint constraint propagation over four slots.

Given any subset of watts (P), current (I), resistance (R) and voltage (E),
repeatedly evaluates twelve derivation rules in a fixed priority order
until a pass changes nothing:

    E = I·R      I = E/R      R = E/I
    P = E·I      P = I²·R     P = E²/R
    E = P/I      E = √(P·R)
    I = P/E      I = √(P/R)
    R = P/I²     R = E²/P

A rule fires when its inputs are known, its guard holds and its result is
finite, and either the target is unknown or the result differs from the
current target value beyond tolerance. The most recently evaluated rule
wins, so a later derivation can overwrite an originally given value when
the givens contradict each other.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from wire_engine.metrics import METRIC_KEYS, Derivation, SolvedWireMetrics, sanitise_metrics
from wire_engine.tolerance import EPSILON, is_finite_number, nearly_equal

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 16

UNDERDETERMINED_MESSAGE = "Unable to resolve all W.I.R.E. metrics from provided values"

Slots = Dict[str, Optional[float]]


class UnderdeterminedSystem(ValueError):
    """Raised when the known quantities cannot complete the W.I.R.E. set."""

    def __init__(self, message: str = UNDERDETERMINED_MESSAGE, unresolved: Tuple[str, ...] = ()):
        super().__init__(message)
        self.unresolved = unresolved


@dataclass(frozen=True)
class DerivationRule:
    """One candidate derivation: target slot, inputs, guard and formula."""
    target: str
    inputs: Tuple[str, ...]
    formula: str
    guard: Callable[[Slots, float], bool]
    compute: Callable[[Slots], float]

    def applies(self, slots: Slots, tolerance: float = EPSILON) -> bool:
        """True when every input is known and the guard holds."""
        if not all(is_finite_number(slots.get(k)) for k in self.inputs):
            return False
        return self.guard(slots, tolerance)

    def evaluate(self, slots: Slots) -> float:
        return self.compute(slots)


def _always(slots: Slots, tolerance: float) -> bool:
    return True


def _nonzero(key: str) -> Callable[[Slots, float], bool]:
    return lambda slots, tolerance: abs(slots[key]) > tolerance


def _sqrt(value: float) -> float:
    # Negative radicands are not derivable; NaN keeps the rule from firing
    return math.sqrt(value) if value >= 0 else math.nan


DC_RULES: List[DerivationRule] = [
    DerivationRule(
        'voltage', ('current', 'resistance'), 'E = I × R',
        _always,
        lambda s: s['current'] * s['resistance'],
    ),
    DerivationRule(
        'current', ('voltage', 'resistance'), 'I = E / R',
        _nonzero('resistance'),
        lambda s: s['voltage'] / s['resistance'],
    ),
    DerivationRule(
        'resistance', ('voltage', 'current'), 'R = E / I',
        _nonzero('current'),
        lambda s: s['voltage'] / s['current'],
    ),
    DerivationRule(
        'watts', ('voltage', 'current'), 'P = E × I',
        _always,
        lambda s: s['voltage'] * s['current'],
    ),
    DerivationRule(
        'watts', ('current', 'resistance'), 'P = I² × R',
        _always,
        lambda s: s['current'] * s['current'] * s['resistance'],
    ),
    DerivationRule(
        'watts', ('voltage', 'resistance'), 'P = E² / R',
        _nonzero('resistance'),
        lambda s: (s['voltage'] * s['voltage']) / s['resistance'],
    ),
    DerivationRule(
        'voltage', ('watts', 'current'), 'E = P / I',
        _nonzero('current'),
        lambda s: s['watts'] / s['current'],
    ),
    DerivationRule(
        'voltage', ('watts', 'resistance'), 'E = √(P × R)',
        lambda s, tol: s['watts'] >= 0 and s['resistance'] >= 0,
        lambda s: _sqrt(s['watts'] * s['resistance']),
    ),
    DerivationRule(
        'current', ('watts', 'voltage'), 'I = P / E',
        _nonzero('voltage'),
        lambda s: s['watts'] / s['voltage'],
    ),
    DerivationRule(
        'current', ('watts', 'resistance'), 'I = √(P / R)',
        lambda s, tol: s['resistance'] >= tol,
        lambda s: _sqrt(s['watts'] / s['resistance']),
    ),
    DerivationRule(
        'resistance', ('watts', 'current'), 'R = P / I²',
        _nonzero('current'),
        lambda s: s['watts'] / (s['current'] * s['current']),
    ),
    DerivationRule(
        'resistance', ('voltage', 'watts'), 'R = E² / P',
        _nonzero('watts'),
        lambda s: (s['voltage'] * s['voltage']) / s['watts'],
    ),
]


def _apply_rule(rule: DerivationRule, slots: Slots, derived: Dict[str, Derivation], tolerance: float) -> bool:
    """Evaluate one rule against the slots. Returns True if it wrote a value."""
    if not rule.applies(slots, tolerance):
        return False

    value = rule.evaluate(slots)
    if not is_finite_number(value):
        return False

    existing = slots[rule.target]
    if is_finite_number(existing) and nearly_equal(existing, value, tolerance):
        return False

    if is_finite_number(existing):
        logger.debug("%s overwrites %s: %r -> %r", rule.formula, rule.target, existing, value)
    else:
        logger.debug("%s derives %s = %r", rule.formula, rule.target, value)

    slots[rule.target] = value
    derived[rule.target] = Derivation(rule.formula, rule.inputs)
    return True


def solve_wire_metrics(
    metrics: Optional[Mapping] = None,
    tolerance: float = EPSILON,
    max_iterations: int = MAX_ITERATIONS,
    rules: Optional[List[DerivationRule]] = None,
) -> SolvedWireMetrics:
    """
    Resolve the full W.I.R.E. set from a partial one.

    Args:
        metrics: Any subset of watts, current, resistance, voltage.
                 Missing or non-finite entries are treated as unknown.
        tolerance: Guard threshold for denominators and the change test.
        max_iterations: Upper bound on propagation passes.
        rules: Rule table to iterate, defaults to DC_RULES.

    Returns:
        SolvedWireMetrics with every field finite and a `derived` record
        for each field a rule wrote.

    Raises:
        UnderdeterminedSystem: if any field is still unknown when the
        propagation reaches its fixpoint or the iteration bound.
    """
    given = sanitise_metrics(metrics)
    slots: Slots = {key: given.get(key) for key in METRIC_KEYS}
    derived: Dict[str, Derivation] = {}
    table = DC_RULES if rules is None else rules

    for _ in range(max_iterations):
        changed = False
        for rule in table:
            changed = _apply_rule(rule, slots, derived, tolerance) or changed
        if not changed:
            break

    unresolved = tuple(key for key in METRIC_KEYS if not is_finite_number(slots[key]))
    if unresolved:
        logger.debug("W.I.R.E. solve failed for %s; unresolved: %s", given, unresolved)
        raise UnderdeterminedSystem(unresolved=unresolved)

    return SolvedWireMetrics(
        watts=slots['watts'],
        current=slots['current'],
        resistance=slots['resistance'],
        voltage=slots['voltage'],
        derived=derived,
    )
