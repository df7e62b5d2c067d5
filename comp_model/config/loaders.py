# comp_model/config/loaders.py
"""
Loading of scenario and benchmark catalog files.

Scenario files are YAML mappings checked against a Cerberus schema and then
validated into ``ScenarioConfig``. A scenario may name a parent file with
``extends: parent.yaml`` (resolved relative to the child); the child is
deep-merged over the parent, lists are replaced rather than merged.
"""

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import pydantic
import yaml
from cerberus import Validator

from comp_model.benchmarks.models import Benchmark
from comp_model.config.models import ScenarioConfig
from comp_model.exceptions import EngineError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


_PROVIDER_SCHEMA = {
    "type": "dict",
    "allow_unknown": True,
    "schema": {
        "id": {"type": "string", "required": True},
        "name": {"type": "string", "nullable": True},
        "fte": {"type": "number", "required": True},
    },
}

_TIER_SCHEMA = {
    "type": "dict",
    "allow_unknown": True,
    "schema": {
        "id": {"type": "string", "required": True},
        "enabled": {"type": "boolean"},
        "rates": {"type": "dict"},
        "burden": {"type": "dict", "nullable": True},
    },
}

SCENARIO_SCHEMA: Dict[str, Any] = {
    "name": {"type": "string", "nullable": True},
    "description": {"type": "string", "nullable": True},
    "program": {"type": "dict", "required": True},
    "providers": {"type": "list", "schema": _PROVIDER_SCHEMA},
    "tiers": {"type": "list", "schema": _TIER_SCHEMA},
    "assumptions": {"type": "dict"},
    "fmv": {"type": "dict", "nullable": True},
    "market": {"type": "dict", "nullable": True},
    "cf_models": {"type": "dict", "valuesrules": {"type": "dict"}, "excludes": "cfModels"},
    "cfModels": {"type": "dict", "valuesrules": {"type": "dict"}, "excludes": "cf_models"},
    "forecast": {"type": "dict", "nullable": True},
}

CATALOG_ITEM_SCHEMA: Dict[str, Any] = {
    "item": {
        "type": "dict",
        "allow_unknown": True,
        "schema": {
            "specialty": {"type": "string", "required": True},
            "p50": {"type": "number", "excludes": "median"},
            "median": {"type": "number", "excludes": "p50"},
        },
    }
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    """
    for key, val in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            base[key] = deep_merge(base[key], val)
        else:
            base[key] = deepcopy(val)
    return base


def _read_yaml(path: Path) -> Any:
    logger.info(f"Attempting to load configuration from: {path}")
    if not path.is_file():
        logger.error(f"Configuration file not found at path: {path}")
        raise ConfigLoadError(f"Configuration file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {path}") from e
    except OSError as e:
        logger.exception(f"Could not read configuration file {path}: {e}")
        raise ConfigLoadError(f"Could not read configuration file {path}") from e


def load_yaml_config(config_path: PathLike) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed, or is not a mapping.
    """
    config_path = Path(config_path)
    config_data = _read_yaml(config_path)
    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )
    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def resolve_extends(config_path: PathLike, _seen: Optional[Set[Path]] = None) -> Dict[str, Any]:
    """Load a scenario file, merging it over its ``extends`` parent chain."""
    config_path = Path(config_path).resolve()
    seen = set() if _seen is None else _seen
    if config_path in seen:
        raise ConfigLoadError(f"Circular extends detected at {config_path}")
    seen.add(config_path)

    cfg = load_yaml_config(config_path)
    parent = cfg.get("extends")
    overrides = {k: v for k, v in cfg.items() if k != "extends"}
    if not parent:
        return overrides

    parent_path = config_path.parent / parent
    if not parent_path.is_file():
        raise ConfigLoadError(f"Parent config '{parent}' not found for {config_path}")
    logger.debug(f"{config_path.name} extends {parent_path.name}")
    return deep_merge(resolve_extends(parent_path, seen), overrides)


def validate_scenario_data(data: Dict[str, Any], source: str = "<scenario>") -> ScenarioConfig:
    """Schema-check raw scenario data and build a ScenarioConfig."""
    v = Validator(SCENARIO_SCHEMA)
    if not v.validate(data):
        raise ConfigLoadError(f"Config validation failed for {source}: {v.errors}")
    try:
        return ScenarioConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigLoadError(f"Invalid scenario {source}: {e}") from e
    except EngineError as e:
        raise ConfigLoadError(f"Invalid scenario {source}: {e}") from e


def load_scenario(config_path: PathLike) -> ScenarioConfig:
    """
    Load, merge and validate a scenario file.

    Raises:
        ConfigLoadError: On any file, YAML, schema or model validation problem.
    """
    data = resolve_extends(config_path)
    scenario = validate_scenario_data(data, str(config_path))
    logger.info(
        f"Loaded scenario {scenario.name or Path(config_path).stem}: "
        f"{len(scenario.providers)} providers, {len(scenario.tiers)} tiers, "
        f"{len(scenario.cf_models)} CF models"
    )
    return scenario


def load_benchmark_catalog(catalog_path: PathLike) -> List[Benchmark]:
    """
    Load a benchmark catalog: a YAML list of benchmark records, or a mapping
    with a ``benchmarks`` list.
    """
    catalog_path = Path(catalog_path)
    raw = _read_yaml(catalog_path)
    if isinstance(raw, dict):
        raw = raw.get("benchmarks")
    if not isinstance(raw, list):
        raise ConfigLoadError(f"Benchmark catalog {catalog_path} must be a list of benchmarks")

    v = Validator(CATALOG_ITEM_SCHEMA)
    benchmarks = []
    for position, item in enumerate(raw, start=1):
        if not v.validate({"item": item}):
            raise ConfigLoadError(f"Benchmark {position} in {catalog_path} is invalid: {v.errors}")
        try:
            benchmarks.append(Benchmark.model_validate(item))
        except (pydantic.ValidationError, EngineError) as e:
            raise ConfigLoadError(f"Benchmark {position} in {catalog_path} is invalid: {e}") from e
    logger.info(f"Loaded {len(benchmarks)} benchmarks from {catalog_path}")
    return benchmarks


__all__ = [
    "ConfigLoadError",
    "SCENARIO_SCHEMA",
    "deep_merge",
    "load_yaml_config",
    "resolve_extends",
    "validate_scenario_data",
    "load_scenario",
    "load_benchmark_catalog",
]
