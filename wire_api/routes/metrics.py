"""DC metrics routes: W.I.R.E. resolution, Ohm's law and worksheet grading."""

import logging

from fastapi import APIRouter, HTTPException

from wire_api.models import (
    AnswerResultInfo,
    DerivationInfo,
    GradeRequest,
    GradeResponse,
    OhmsLawRequest,
    OhmsLawResponse,
    WireMetricsRequest,
    WireMetricsResponse,
)
from wire_engine.dc_solver import UnderdeterminedSystem, solve_wire_metrics
from wire_engine.formatting import format_metric_value
from wire_engine.grading import grade_answers
from wire_engine.metrics import METRIC_KEYS, SolvedWireMetrics

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(solved: SolvedWireMetrics) -> WireMetricsResponse:
    return WireMetricsResponse(
        **solved.as_dict(),
        derived={
            key: DerivationInfo(formula=d.formula, inputs=list(d.inputs))
            for key, d in solved.derived.items()
        },
        formatted={key: format_metric_value(getattr(solved, key), key) for key in METRIC_KEYS},
    )


@router.post("/wire-metrics", response_model=WireMetricsResponse)
async def solve_wire_metrics_endpoint(request: WireMetricsRequest):
    """Resolve the full W.I.R.E. set from any two independent quantities."""
    givens = request.model_dump(include=set(METRIC_KEYS), exclude_none=True)
    try:
        solved = solve_wire_metrics(
            givens,
            tolerance=request.tolerance,
            max_iterations=request.max_iterations,
        )
    except UnderdeterminedSystem as e:
        logger.warning("W.I.R.E. solve rejected for %s: unresolved %s", givens, e.unresolved)
        raise HTTPException(status_code=422, detail=str(e))

    return _to_response(solved)


@router.post("/ohms-law", response_model=OhmsLawResponse)
async def ohms_law(request: OhmsLawRequest):
    """Classic two-of-three Ohm's law calculator."""
    givens = request.model_dump(exclude_none=True)
    if len(givens) != 2:
        raise HTTPException(status_code=400, detail="Provide exactly two of voltage, current, resistance")

    try:
        solved = solve_wire_metrics(givens)
    except UnderdeterminedSystem as e:
        logger.warning("Ohm's law rejected for %s", givens)
        raise HTTPException(status_code=400, detail=str(e))

    return OhmsLawResponse(
        voltage=solved.voltage,
        current=solved.current,
        resistance=solved.resistance,
    )


@router.post("/worksheet/grade", response_model=GradeResponse)
async def grade_worksheet(request: GradeRequest):
    """Check learner answers against the values solved from the worksheet givens."""
    givens = request.givens.model_dump(exclude_none=True)
    answers = request.answers.model_dump(exclude_none=True)
    try:
        grade = grade_answers(givens, answers, rel_tolerance=request.rel_tolerance)
    except UnderdeterminedSystem as e:
        logger.warning("Worksheet givens underdetermined: %s", givens)
        raise HTTPException(status_code=422, detail=str(e))

    return GradeResponse(
        solution=_to_response(grade.solution),
        results={
            key: AnswerResultInfo(
                metric=r.metric,
                expected=r.expected,
                answer=r.answer,
                correct=r.correct,
                error_pct=r.error_pct,
            )
            for key, r in grade.results.items()
        },
        correct_count=grade.correct_count,
        score=grade.score,
    )
