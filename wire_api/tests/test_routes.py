"""
Tests for the W.I.R.E. HTTP API.

Validates request handling end to end through FastAPI's TestClient:
1. DC resolution, provenance and formatted strings
2. Ohm's law arity rule
3. AC analysis validation and results
4. Frequency sweep shape
5. Worksheet grading
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from fastapi.testclient import TestClient

from wire_api.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "wire-api"}


class TestWireMetrics:
    """POST /api/wire-metrics."""

    def test_solves_from_two_values(self, client):
        response = client.post("/api/wire-metrics", json={"voltage": 12, "resistance": 4})
        assert response.status_code == 200
        data = response.json()
        assert data["current"] == pytest.approx(3.0)
        assert data["watts"] == pytest.approx(36.0)
        assert data["derived"]["current"] == {"formula": "I = E / R", "inputs": ["voltage", "resistance"]}
        assert "voltage" not in data["derived"]

    def test_formatted_strings(self, client):
        response = client.post("/api/wire-metrics", json={"voltage": 12, "current": 2})
        formatted = response.json()["formatted"]
        assert formatted["resistance"] == "6.00 Ω"
        assert formatted["current"] == "2.000 A"
        assert formatted["watts"] == "24.00 W"

    def test_underdetermined(self, client):
        response = client.post("/api/wire-metrics", json={"resistance": 10})
        assert response.status_code == 422
        assert response.json()["detail"] == "Unable to resolve all W.I.R.E. metrics from provided values"

    def test_degenerate_zero_current(self, client):
        response = client.post("/api/wire-metrics", json={"watts": 10, "current": 0})
        assert response.status_code == 422

    def test_zero_current_with_resistance(self, client):
        response = client.post("/api/wire-metrics", json={"current": 0, "resistance": 5})
        assert response.status_code == 200
        assert response.json()["voltage"] == 0.0
        assert response.json()["watts"] == 0.0

    def test_rejects_bad_tolerance(self, client):
        response = client.post("/api/wire-metrics", json={"voltage": 12, "resistance": 4, "tolerance": 0})
        assert response.status_code == 422


class TestOhmsLaw:
    """POST /api/ohms-law."""

    def test_current_from_voltage_and_resistance(self, client):
        response = client.post("/api/ohms-law", json={"voltage": 12, "resistance": 4})
        assert response.status_code == 200
        assert response.json() == {"voltage": 12.0, "current": 3.0, "resistance": 4.0}

    def test_requires_exactly_two(self, client):
        response = client.post("/api/ohms-law", json={"voltage": 12})
        assert response.status_code == 400
        assert response.json()["detail"] == "Provide exactly two of voltage, current, resistance"

        response = client.post("/api/ohms-law", json={"voltage": 12, "current": 3, "resistance": 4})
        assert response.status_code == 400

    def test_zero_current_cannot_give_resistance(self, client):
        response = client.post("/api/ohms-law", json={"voltage": 5, "current": 0})
        assert response.status_code == 400


class TestACAnalysis:
    """POST /api/ac-analysis."""

    def test_rl_circuit(self, client):
        response = client.post("/api/ac-analysis", json={
            "voltage": 10, "frequency_hz": 1000, "resistance": 50, "inductance": 0.01,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["metrics"]["inductive_reactance"] == pytest.approx(62.83, abs=0.01)
        assert data["metrics"]["capacitive_reactance"] == 0.0
        assert data["metrics"]["current"] == pytest.approx(0.1246, abs=2e-4)
        assert data["formatted"]["phase_characteristic"] == "lagging"
        assert data["resonant_frequency"] is None

    def test_resonant_frequency_reported(self, client):
        response = client.post("/api/ac-analysis", json={
            "voltage": 10, "frequency_hz": 60, "resistance": 50,
            "inductance": 0.01, "capacitance": 1e-6,
        })
        assert response.json()["resonant_frequency"] == pytest.approx(1591.549, abs=1e-3)

    def test_invalid_input(self, client):
        response = client.post("/api/ac-analysis", json={
            "voltage": -1, "frequency_hz": 0, "resistance": 10,
        })
        assert response.status_code == 422
        assert response.json()["detail"] == [
            "Voltage must be non-negative",
            "Frequency must be positive",
        ]

    def test_nan_rejected(self, client):
        response = client.post(
            "/api/ac-analysis",
            content='{"voltage": 10, "frequency_hz": NaN, "resistance": 5}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422


class TestACSweep:
    """POST /api/ac-sweep."""

    def test_sweep_shape(self, client):
        response = client.post("/api/ac-sweep", json={
            "voltage": 10, "resistance": 50, "inductance": 0.01,
            "freq_start": 100, "freq_end": 10000, "num_points": 25,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["num_points"] == 25
        assert len(data["frequency_hz"]) == 25
        assert len(data["impedance"]) == 25
        assert data["impedance"][-1] > data["impedance"][0]

    def test_reversed_range(self, client):
        response = client.post("/api/ac-sweep", json={
            "voltage": 10, "resistance": 50, "freq_start": 1000, "freq_end": 100,
        })
        assert response.status_code == 400

    def test_negative_component_rejected(self, client):
        response = client.post("/api/ac-sweep", json={"voltage": 10, "resistance": -1})
        assert response.status_code == 422

    def test_infinite_resistance_rejected(self, client):
        response = client.post(
            "/api/ac-sweep",
            content='{"voltage": 10, "resistance": Infinity}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422


class TestWorksheetGrade:
    """POST /api/worksheet/grade."""

    def test_grades_answers(self, client):
        response = client.post("/api/worksheet/grade", json={
            "givens": {"voltage": 12, "resistance": 4},
            "answers": {"current": 3.02, "watts": 40},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["results"]["current"]["correct"] is True
        assert data["results"]["watts"]["correct"] is False
        assert data["correct_count"] == 1
        assert data["score"] == pytest.approx(0.5)
        assert data["solution"]["watts"] == pytest.approx(36.0)

    def test_underdetermined_givens(self, client):
        response = client.post("/api/worksheet/grade", json={
            "givens": {"voltage": 12},
            "answers": {"current": 1},
        })
        assert response.status_code == 422


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
