import pytest
import yaml

from comp_model.cf_models.models import TieredCFModel
from comp_model.config.loaders import (
    ConfigLoadError,
    deep_merge,
    load_benchmark_catalog,
    load_scenario,
    load_yaml_config,
)

pytestmark = pytest.mark.config

BASE_SCENARIO = {
    "name": "pediatrics-base",
    "program": {
        "modelYear": 2024,
        "specialty": "Pediatrics",
        "coverageType": "In-house",
        "providersOnCall": 4,
        "rotationRatio": 4,
    },
    "providers": [{"id": f"p{i}", "fte": 1.0, "tierId": "C1"} for i in range(1, 5)],
    "tiers": [{"id": "C1", "rates": {"weekday": 500, "weekend": 750, "holiday": 1000}}],
    "assumptions": {"weekdayCallsPerMonth": 20, "weekendCallsPerMonth": 8, "holidaysPerYear": 10},
}


def _write(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


def test_load_scenario(tmp_path):
    scenario = load_scenario(_write(tmp_path / "base.yaml", BASE_SCENARIO))
    assert scenario.name == "pediatrics-base"
    assert scenario.program.rotation_ratio == 4
    assert len(scenario.providers) == 4
    assert scenario.tiers[0].rates.weekend == 750


def test_extends_deep_merge(tmp_path):
    _write(tmp_path / "base.yaml", BASE_SCENARIO)
    child = {
        "extends": "base.yaml",
        "name": "pediatrics-heavy",
        "assumptions": {"weekdayCallsPerMonth": 22},
        "cf_models": {
            "tiered": {
                "model": {"modelType": "tiered", "tiers": [{"threshold": 4000, "cf": 50}, {"cf": 60}]},
                "wrvus": 5000,
            }
        },
    }
    scenario = load_scenario(_write(tmp_path / "child.yaml", child))
    assert scenario.name == "pediatrics-heavy"
    assert scenario.assumptions.weekday_calls_per_month == 22
    assert scenario.assumptions.weekend_calls_per_month == 8
    assert isinstance(scenario.cf_models["tiered"].model, TieredCFModel)


def test_missing_parent_error(tmp_path):
    f = _write(tmp_path / "child.yaml", {"extends": "nope.yaml", **BASE_SCENARIO})
    with pytest.raises(ConfigLoadError):
        load_scenario(f)


def test_circular_extends(tmp_path):
    _write(tmp_path / "a.yaml", {"extends": "b.yaml", **BASE_SCENARIO})
    _write(tmp_path / "b.yaml", {"extends": "a.yaml"})
    with pytest.raises(ConfigLoadError):
        load_scenario(tmp_path / "a.yaml")


def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError):
        load_yaml_config(tmp_path / "absent.yaml")


def test_non_mapping_yaml(tmp_path):
    f = tmp_path / "list.yaml"
    f.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(f)


def test_bad_yaml(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("program: [unclosed\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(f)


def test_schema_error(tmp_path):
    data = dict(BASE_SCENARIO, providers=[{"name": "no id", "fte": 1.0}])
    with pytest.raises(ConfigLoadError):
        load_scenario(_write(tmp_path / "s.yaml", data))


def test_unknown_top_level_key(tmp_path):
    data = dict(BASE_SCENARIO, tierz=[])
    with pytest.raises(ConfigLoadError):
        load_scenario(_write(tmp_path / "s.yaml", data))


def test_engine_validation_error_wrapped(tmp_path):
    program = dict(BASE_SCENARIO["program"], rotationRatio=6)
    with pytest.raises(ConfigLoadError):
        load_scenario(_write(tmp_path / "s.yaml", dict(BASE_SCENARIO, program=program)))


def test_percentile_tiered_needs_market(tmp_path):
    data = dict(
        BASE_SCENARIO,
        cf_models={"p": {"model": {"modelType": "percentileTiered", "tiers": [{"cf": 50}]}, "wrvus": 1}},
    )
    with pytest.raises(ConfigLoadError):
        load_scenario(_write(tmp_path / "s.yaml", data))


def test_deep_merge_replaces_lists():
    merged = deep_merge({"a": {"x": 1, "y": [1, 2]}}, {"a": {"y": [3]}, "b": 2})
    assert merged == {"a": {"x": 1, "y": [3]}, "b": 2}


def test_load_benchmark_catalog(tmp_path):
    f = _write(
        tmp_path / "catalog.yaml",
        [
            {"id": "a", "specialty": "Urology", "coverageType": "In-house", "median": 900, "p75": 1100},
            {"id": "b", "specialty": "Urology", "coverageType": "Home", "p50": 500, "p90": 700},
        ],
    )
    catalog = load_benchmark_catalog(f)
    assert [b.id for b in catalog] == ["a", "b"]
    assert catalog[0].p50 == 900


def test_catalog_invalid_benchmark(tmp_path):
    f = _write(tmp_path / "catalog.yaml", {"benchmarks": [{"specialty": "Urology", "coverageType": "x", "p25": 5, "median": 1}]})
    with pytest.raises(ConfigLoadError):
        load_benchmark_catalog(f)
