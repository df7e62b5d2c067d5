import pytest

from comp_model.benchmarks.models import Benchmark, MarketBenchmarks, QuartileBenchmark
from comp_model.call_pay.models import CallAssumptions, CallProgram, CallProvider, CallTier
from comp_model.logging_config import reset_logging


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "config: mark a test as a config test")


@pytest.fixture
def quartiles():
    return QuartileBenchmark(p25=100.0, p50=200.0, p75=300.0, p90=400.0)


@pytest.fixture
def market():
    return MarketBenchmarks(
        specialty="Family Medicine",
        tcc=QuartileBenchmark(p25=300000, p50=400000, p75=500000, p90=600000),
        wrvu=QuartileBenchmark(p25=4000, p50=5000, p75=6000, p90=7000),
        cf=QuartileBenchmark(p25=45, p50=50, p75=55, p90=60),
    )


@pytest.fixture
def catalog():
    return [
        Benchmark(
            id="ortho-inhouse",
            specialty="Orthopedics",
            coverageType="In-house",
            source="SC",
            surveyYear=2023,
            p25=1000,
            median=1500,
            p75=2000,
            p90=2500,
        ),
        Benchmark(
            id="generic-home",
            specialty="All Specialties",
            coverageType="Unrestricted home",
            p25=400,
            median=600,
            p75=800,
            p90=1000,
        ),
    ]


@pytest.fixture
def program():
    return CallProgram(
        modelYear=2024,
        specialty="Pediatrics",
        coverageType="In-house",
        providersOnCall=4,
        rotationRatio=4,
    )


@pytest.fixture
def providers():
    return [CallProvider(id=f"p{i}", name=f"Provider {i}", fte=1.0, tierId="C1") for i in range(1, 5)]


@pytest.fixture
def assumptions():
    return CallAssumptions(weekdayCallsPerMonth=20, weekendCallsPerMonth=8, holidaysPerYear=10)


@pytest.fixture
def daily_tier():
    return CallTier(
        id="C1",
        name="In-house call",
        coverageType="In-house",
        paymentMethod="Daily / shift rate",
        rates={"weekday": 500, "weekend": 750, "holiday": 1000},
    )


@pytest.fixture
def clean_logging():
    reset_logging()
    yield
    reset_logging()
