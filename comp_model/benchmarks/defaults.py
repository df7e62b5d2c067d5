# comp_model/benchmarks/defaults.py
"""
Built-in sample benchmark catalog used when no catalog file is supplied.

Rates are per-24h call values by specialty and coverage type. ``GENERIC_SPECIALTY``
rows are the fallback for specialties the catalog does not list.
"""

from typing import List

from .models import Benchmark

GENERIC_SPECIALTY = "All Specialties"

# Sample per-24h call rate benchmarks. Demonstration values only; production
# catalogs are loaded from survey exports (see comp_model.config.loaders).
SAMPLE_FMV_BENCHMARKS: List[Benchmark] = [
    Benchmark(
        id="ped-inhouse-2024",
        specialty="Pediatrics",
        coverage_type="In-house",
        source="MGMA",
        survey_year=2024,
        p25=950,
        p50=1200,
        p75=1500,
        p90=1800,
    ),
    Benchmark(
        id="cardio-inhouse-2024",
        specialty="Cardiology",
        coverage_type="In-house",
        source="SC",
        survey_year=2024,
        p25=1400,
        p50=1800,
        p75=2200,
        p90=2800,
    ),
    Benchmark(
        id="hospitalist-inhouse-2024",
        specialty="Hospitalist",
        coverage_type="In-house",
        source="MGMA",
        survey_year=2024,
        p25=800,
        p50=1000,
        p75=1250,
        p90=1600,
    ),
    Benchmark(
        id="surgery-inhouse-2024",
        specialty="General Surgery",
        coverage_type="In-house",
        source="ECG",
        survey_year=2024,
        p25=1600,
        p50=2000,
        p75=2500,
        p90=3200,
    ),
    Benchmark(
        id="ped-homecall-2024",
        specialty="Pediatrics",
        coverage_type="Unrestricted home",
        source="MGMA",
        survey_year=2024,
        p25=600,
        p50=800,
        p75=1000,
        p90=1300,
    ),
    Benchmark(
        id="generic-inhouse-2024",
        specialty=GENERIC_SPECIALTY,
        coverage_type="In-house",
        source="MGMA",
        survey_year=2024,
        p25=1100,
        p50=1400,
        p75=1800,
        p90=2300,
    ),
]
