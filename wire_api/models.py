"""Pydantic models for W.I.R.E. API requests and responses."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# --- DC metrics ---

class WireValues(BaseModel):
    """Any subset of the four W.I.R.E. quantities."""
    watts: Optional[float] = Field(None, description="Power (W)")
    current: Optional[float] = Field(None, description="Current (A)")
    resistance: Optional[float] = Field(None, description="Resistance (Ohms)")
    voltage: Optional[float] = Field(None, description="Voltage (V)")


class WireMetricsRequest(WireValues):
    tolerance: float = Field(1e-9, gt=0, le=1e-2, description="Guard and change-detection epsilon")
    max_iterations: int = Field(16, ge=1, le=100)


class DerivationInfo(BaseModel):
    formula: str
    inputs: list[str]


class WireMetricsResponse(BaseModel):
    watts: float
    current: float
    resistance: float
    voltage: float
    derived: dict[str, DerivationInfo] = {}
    formatted: dict[str, str] = {}


class OhmsLawRequest(BaseModel):
    voltage: Optional[float] = None
    current: Optional[float] = None
    resistance: Optional[float] = None


class OhmsLawResponse(BaseModel):
    voltage: float
    current: float
    resistance: float


# --- Worksheet grading ---

class GradeRequest(BaseModel):
    givens: WireValues
    answers: WireValues = WireValues()
    rel_tolerance: float = Field(0.01, gt=0, le=1, description="Allowed relative error (0.01 = 1%)")


class AnswerResultInfo(BaseModel):
    metric: str
    expected: float
    answer: Optional[float] = None
    correct: bool
    error_pct: Optional[float] = None


class GradeResponse(BaseModel):
    solution: WireMetricsResponse
    results: dict[str, AnswerResultInfo]
    correct_count: int
    score: float = Field(..., ge=0, le=1)


# --- AC analysis ---

class ACAnalysisRequest(BaseModel):
    voltage: float = Field(..., allow_inf_nan=False, description="RMS source voltage (V)")
    frequency_hz: float = Field(..., allow_inf_nan=False, description="Source frequency (Hz)")
    resistance: float = Field(..., allow_inf_nan=False, description="Series resistance (Ohms)")
    inductance: float = Field(0.0, allow_inf_nan=False, description="Series inductance (H)")
    capacitance: float = Field(0.0, allow_inf_nan=False, description="Series capacitance (F)")


class ACMetricsInfo(BaseModel):
    frequency_hz: float
    inductive_reactance: float
    capacitive_reactance: float
    net_reactance: float
    impedance: float
    phase_angle: float
    current: float
    apparent_power: float
    reactive_power: float
    real_power: float
    power_factor: float


class ACAnalysisResponse(BaseModel):
    metrics: ACMetricsInfo
    formatted: dict[str, str]
    resonant_frequency: Optional[float] = None


class ACSweepRequest(BaseModel):
    voltage: float = Field(..., ge=0, allow_inf_nan=False)
    resistance: float = Field(..., ge=0, allow_inf_nan=False)
    inductance: float = Field(0.0, ge=0, allow_inf_nan=False)
    capacitance: float = Field(0.0, ge=0, allow_inf_nan=False)
    freq_start: float = Field(20.0, gt=0, allow_inf_nan=False)
    freq_end: float = Field(20000.0, gt=0, allow_inf_nan=False)
    num_points: int = Field(200, ge=2, le=5000)


class ACSweepResponse(BaseModel):
    frequency_hz: list[float]
    impedance: list[float]
    phase_angle: list[float]
    current: list[float]
    inductive_reactance: list[float]
    capacitive_reactance: list[float]
    net_reactance: list[float]
    real_power: list[float]
    reactive_power: list[float]
    apparent_power: list[float]
    power_factor: list[float]
    num_points: int
    resonant_frequency: Optional[float] = None
