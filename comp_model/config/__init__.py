"""
Configuration package: scenario file schema and YAML loaders.
"""

__all__ = [
    "ScenarioConfig",
    "CFScenario",
    "FMVSettings",
    "ConfigLoadError",
    "load_yaml_config",
    "load_scenario",
    "load_benchmark_catalog",
]

from .loaders import ConfigLoadError, load_benchmark_catalog, load_scenario, load_yaml_config
from .models import CFScenario, FMVSettings, ScenarioConfig
