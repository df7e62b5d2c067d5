import json

import pytest
import yaml

from comp_model.cli import EXIT_CONFIG_ERROR, EXIT_OK, main

pytestmark = pytest.mark.integration

SCENARIO = {
    "name": "pediatrics",
    "program": {
        "modelYear": 2024,
        "specialty": "Pediatrics",
        "coverageType": "In-house",
        "providersOnCall": 4,
        "rotationRatio": 4,
    },
    "providers": [
        {"id": "p1", "fte": 1.0, "tierId": "C1"},
        {"id": "p2", "fte": 1.0, "tierId": "C1"},
        {"id": "p3", "fte": 0.5, "tierId": "C1"},
        {"id": "p4", "fte": 0.5, "tierId": "C1"},
    ],
    "tiers": [{"id": "C1", "rates": {"weekday": 1000, "weekend": 1500, "holiday": 2000}}],
    "assumptions": {"weekdayCallsPerMonth": 20, "weekendCallsPerMonth": 8, "holidaysPerYear": 10},
    "fmv": {"burdenScore": 80},
    "cf_models": {"flat": {"model": {"modelType": "single", "cf": 52}, "wrvus": 4800}},
    "forecast": {"rateIncreasePercent": 3, "yearsToForecast": 2},
}


def test_cli_prints_report(tmp_path, capsys, clean_logging):
    f = tmp_path / "scenario.yaml"
    f.write_text(yaml.safe_dump(SCENARIO))
    log_dir = tmp_path / "logs"

    assert main(["--scenario", str(f), "--log-dir", str(log_dir)]) == EXIT_OK

    report = json.loads(capsys.readouterr().out)
    assert report["scenario"] == "pediatrics"
    assert report["budget"]["total_annual_call_budget"] > 0
    assert report["fairness"]["eligible_provider_count"] == 4
    assert report["fmv"]["benchmark_id"] == "ped-inhouse-2024"
    assert report["fmv"]["risk_level"] in ("LOW", "MODERATE", "HIGH")
    assert report["cf_models"]["flat"]["clinical_dollars"] == pytest.approx(52 * 4800)
    assert len(report["forecast"]["forecasts"]) == 2
    assert (log_dir / "combined.log").exists()
    assert (log_dir / "evaluation_events.log").exists()


def test_cli_config_error_exit_code(tmp_path, capsys, clean_logging):
    bad = dict(SCENARIO, program=dict(SCENARIO["program"], rotationRatio=9))
    f = tmp_path / "scenario.yaml"
    f.write_text(yaml.safe_dump(bad))

    assert main(["--scenario", str(f)]) == EXIT_CONFIG_ERROR
    assert "Error" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, clean_logging):
    assert main(["--scenario", str(tmp_path / "absent.yaml")]) == EXIT_CONFIG_ERROR
