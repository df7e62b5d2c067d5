# comp_model/cli.py
# Command-line interface entry point (argparse)
"""
Run a call-pay and compensation scenario file and print a JSON report.

Usage:
    comp-model --scenario scenarios/pediatrics.yaml [--catalog benchmarks.yaml]
               [--log-dir logs] [--debug]
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from comp_model.benchmarks.models import Benchmark
from comp_model.call_pay.budget import calculate_call_budget
from comp_model.call_pay.burden import calculate_expected_burden, calculate_fairness_metrics
from comp_model.call_pay.forecast import generate_budget_forecast
from comp_model.call_pay.validation import validate_configuration
from comp_model.cf_models.engine import evaluate_cf
from comp_model.cf_models.summary import summarize_cf_model
from comp_model.config.loaders import ConfigLoadError, load_benchmark_catalog, load_scenario
from comp_model.config.models import ScenarioConfig
from comp_model.exceptions import EngineError
from comp_model.fmv.evaluator import evaluate_budget_fmv
from comp_model.logging_config import setup_logging

# Get logger for this module
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Evaluate a call-pay budget, fairness, FMV risk and CF models for a scenario."
    )
    parser.add_argument(
        "--scenario",
        type=str,
        required=True,
        help="Path to the YAML scenario file.",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help="Path to a YAML benchmark catalog (default: built-in sample catalog).",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory to store log files (default: console only).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _fmv_report(scenario: ScenarioConfig, budget, catalog: Optional[List[Benchmark]]) -> Dict[str, Any]:
    settings = scenario.fmv
    if settings is None:
        specialty, coverage_type, burden_score, policy = (
            scenario.program.specialty,
            scenario.program.coverage_type,
            None,
            None,
        )
    else:
        specialty = settings.specialty or scenario.program.specialty
        coverage_type = settings.coverage_type or scenario.program.coverage_type
        burden_score = settings.burden_score
        policy = settings.policy
    if coverage_type is None:
        raise ConfigLoadError("FMV evaluation needs a coverage type (program.coverage_type or fmv.coverage_type)")

    result = evaluate_budget_fmv(budget, specialty, coverage_type, burden_score, catalog, policy)
    return {
        "risk_level": result.risk_level.value,
        "percentile_estimate": result.percentile_estimate,
        "benchmark_id": result.benchmark.id if result.benchmark is not None else None,
        "notes": result.notes,
        "narrative": result.narrative,
    }


def run_scenario(scenario: ScenarioConfig, catalog: Optional[List[Benchmark]] = None) -> Dict[str, Any]:
    """Run every engine over a scenario and collect a JSON-serializable report."""
    report = validate_configuration(
        scenario.program, scenario.providers, scenario.tiers, scenario.assumptions
    )
    budget = calculate_call_budget(
        scenario.program, scenario.providers, scenario.tiers, scenario.assumptions
    )
    burdens = calculate_expected_burden(scenario.providers, scenario.assumptions, scenario.tiers)
    fairness = calculate_fairness_metrics(burdens)

    output: Dict[str, Any] = {
        "scenario": scenario.name,
        "validation": asdict(report),
        "budget": asdict(budget),
        "burden": [asdict(b) for b in burdens],
        "fairness": asdict(fairness),
        "fmv": _fmv_report(scenario, budget, catalog),
    }

    cf_results = {}
    for name, cf_scenario in scenario.cf_models.items():
        result = evaluate_cf(
            cf_scenario.model, cf_scenario.wrvus, cf_scenario.fte, scenario.cf_context(cf_scenario)
        )
        cf_results[name] = {"summary": summarize_cf_model(cf_scenario.model), **asdict(result)}
    output["cf_models"] = cf_results

    if scenario.forecast is not None:
        output["forecast"] = asdict(generate_budget_forecast(scenario.program, budget, scenario.forecast))
    return output


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(Path(args.log_dir) if args.log_dir else None, debug=args.debug)
    logger.info(f"Command line arguments: {sys.argv}")

    try:
        catalog = load_benchmark_catalog(args.catalog) if args.catalog else None
        scenario = load_scenario(args.scenario)
        output = run_scenario(scenario, catalog)
    except (ConfigLoadError, EngineError) as e:
        logger.error(f"Scenario {args.scenario} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print(json.dumps(output, indent=2, default=str))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
