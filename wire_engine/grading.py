"""
Worksheet answer checking against the W.I.R.E. resolver.

A worksheet supplies a few "givens"; learners fill in the rest. Each
answer is correct when it is within a relative tolerance (1% by default)
of the value the resolver derives from the givens.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from wire_engine.dc_solver import solve_wire_metrics
from wire_engine.metrics import METRIC_KEYS, SolvedWireMetrics, sanitise_metrics
from wire_engine.tolerance import is_finite_number

DEFAULT_REL_TOLERANCE = 0.01


@dataclass
class AnswerResult:
    metric: str
    expected: float
    answer: Optional[float]
    correct: bool
    error_pct: Optional[float] = None


@dataclass
class WorksheetGrade:
    solution: SolvedWireMetrics
    results: Dict[str, AnswerResult] = field(default_factory=dict)

    @property
    def answered(self) -> List[str]:
        return [k for k, r in self.results.items() if r.answer is not None]

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.results.values() if r.correct)

    @property
    def score(self) -> float:
        """Fraction of graded metrics answered correctly (0.0 when none graded)."""
        if not self.results:
            return 0.0
        return self.correct_count / len(self.results)


def within_tolerance(expected: float, answer: float, rel_tolerance: float = DEFAULT_REL_TOLERANCE) -> bool:
    """Relative comparison; falls back to an absolute bound when expected is 0."""
    if not is_finite_number(answer):
        return False
    if expected == 0:
        return abs(answer) <= rel_tolerance
    return abs(answer - expected) <= rel_tolerance * abs(expected)


def grade_answers(
    givens: Mapping,
    answers: Mapping,
    rel_tolerance: float = DEFAULT_REL_TOLERANCE,
) -> WorksheetGrade:
    """
    Grade learner answers for every metric that was not given.

    Args:
        givens: The worksheet's known values (any subset of W.I.R.E.).
        answers: Learner-entered values keyed by metric name. Missing or
                 non-numeric entries count as unanswered. Unknown keys
                 are ignored.
        rel_tolerance: Allowed relative error (0.01 = 1%).

    Raises:
        UnderdeterminedSystem: if the givens do not determine the set.
    """
    solution = solve_wire_metrics(givens)
    given_keys = set(sanitise_metrics(givens))
    normalised = sanitise_metrics(answers)
    grade = WorksheetGrade(solution=solution)

    for key in METRIC_KEYS:
        if key in given_keys:
            continue
        expected = getattr(solution, key)
        answer = normalised.get(key)
        if not is_finite_number(answer):
            grade.results[key] = AnswerResult(key, expected, None, False)
            continue
        error_pct = None
        if expected != 0:
            error_pct = round((answer - expected) / abs(expected) * 100, 4)
        grade.results[key] = AnswerResult(
            metric=key,
            expected=expected,
            answer=float(answer),
            correct=within_tolerance(expected, answer, rel_tolerance),
            error_pct=error_pct,
        )

    return grade
