"""AC analysis routes: single-point evaluation and frequency sweeps."""

import logging

from fastapi import APIRouter, HTTPException

from wire_api.models import (
    ACAnalysisRequest,
    ACAnalysisResponse,
    ACMetricsInfo,
    ACSweepRequest,
    ACSweepResponse,
)
from wire_engine.ac_solver import (
    generate_frequencies,
    resonant_frequency,
    solve_ac_circuit,
    sweep_ac_circuit,
    validate_ac_input,
)
from wire_engine.formatting import format_ac_metrics

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ac-analysis", response_model=ACAnalysisResponse)
async def ac_analysis(request: ACAnalysisRequest):
    """Reactance, impedance, phase and power for a series RLC circuit."""
    circuit = request.model_dump()
    validation = validate_ac_input(circuit)
    if not validation.valid:
        logger.warning("AC input rejected: %s", validation.errors)
        raise HTTPException(status_code=422, detail=validation.errors)

    metrics = solve_ac_circuit(circuit)

    return ACAnalysisResponse(
        metrics=ACMetricsInfo(**metrics.as_dict()),
        formatted=format_ac_metrics(metrics),
        resonant_frequency=resonant_frequency(request.inductance, request.capacitance),
    )


@router.post("/ac-sweep", response_model=ACSweepResponse)
async def ac_sweep(request: ACSweepRequest):
    """Evaluate the circuit over a log-spaced frequency range for plotting."""
    if request.freq_end <= request.freq_start:
        raise HTTPException(status_code=400, detail="freq_end must be greater than freq_start")

    freqs = generate_frequencies(request.freq_start, request.freq_end, request.num_points)
    sweep = sweep_ac_circuit(
        request.model_dump(include={"voltage", "resistance", "inductance", "capacitance"}),
        freqs,
    )

    return ACSweepResponse(
        **{key: values.tolist() for key, values in sweep.items()},
        num_points=request.num_points,
        resonant_frequency=resonant_frequency(request.inductance, request.capacitance),
    )
