import importlib.util
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from immosim.api.app import app

CLIENT_PATH = Path(__file__).resolve().parents[2] / "client" / "simulate_report.py"


@pytest.fixture(scope="module")
def report():
    spec = importlib.util.spec_from_file_location("simulate_report", CLIENT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def params_file(tmp_path) -> Path:
    path = tmp_path / "params.json"
    path.write_text(json.dumps({
        "price": "200000",
        "notary_fees": "16000",
        "down_payment": "40000",
        "loan_amount": "176000",
        "monthly_rent": "800",
        "vacancy_rate": "8",
        "start_year": 2025,
    }))
    return path


class TestBuildPayload:
    def test_file_only(self, report, params_file):
        payload = report.build_payload(report.parse_args([str(params_file)]))
        assert payload["price"] == "200000"
        assert "rental_type" not in payload

    def test_overrides(self, report, params_file):
        args = report.parse_args([
            str(params_file), "--rent", "950", "--furnished", "--tax-method", "micro", "--horizon", "25",
        ])
        payload = report.build_payload(args)
        assert payload["monthly_rent"] == "950"
        assert payload["rental_type"] == "furnished"
        assert payload["tax_method"] == "micro"
        assert payload["horizon_years"] == 25


class TestPrintReport:
    def test_sections(self, report, params_file, capsys):
        payload = report.build_payload(report.parse_args([str(params_file), "--start-year", "2030"]))
        payload["energy_class"] = "F"
        data = TestClient(app).post("/api/v1/simulate", json=payload).json()

        report.print_report(data)
        out = capsys.readouterr().out
        assert "reel_foncier" in out
        assert "4.44%" in out
        assert "Rent incl. Charges:   800 €/mo" in out
        assert "Cash Flow Projections" in out
        assert "Resale After 20 Years" in out
        assert "Energy class F" in out
        assert "never" in out
