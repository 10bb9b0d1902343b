"""Shared fixtures and in-process fakes for the FarmRisk test suite."""

import os
import tempfile

os.environ.setdefault("FARMRISK_LOG_FILE", os.path.join(tempfile.gettempdir(), "farmrisk-tests.log"))

import pytest

from farmrisk.api.services.assessment_service import AssessmentService
from farmrisk.config import Settings
from farmrisk.errors import PersistenceFailure
from farmrisk.models.environment import SatelliteReading, WeatherRisk
from farmrisk.models.farm import AssessmentRequest
from farmrisk.models.prediction import PredictionRequest, PredictorHealth, RiskPrediction
from farmrisk.services.environment import EnvironmentalDataService
from farmrisk.services.fraud_detector import FraudDetector
from farmrisk.services.registry import FarmRegistry


class FixedRandom:
    """Stands in for random.Random with a constant draw."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class FakeSatellite:
    def __init__(self, reading: SatelliteReading | None = None, error: Exception | None = None):
        self.reading = reading or SatelliteReading(ndvi=0.6, soil_moisture=0.4)
        self.error = error
        self.calls = []

    def fetch(self, lat: float, lng: float) -> SatelliteReading:
        self.calls.append((lat, lng))
        if self.error:
            raise self.error
        return self.reading


class FakeWeather:
    def __init__(self, risk: WeatherRisk | None = None, error: Exception | None = None):
        self.risk = risk or WeatherRisk(drought_probability=0.2, heatwave_days=2)
        self.error = error
        self.calls = []

    def fetch(self, lat: float, lng: float) -> WeatherRisk:
        self.calls.append((lat, lng))
        if self.error:
            raise self.error
        return self.risk


class FakePredictor:
    def __init__(self, prediction: RiskPrediction | None = None, error: Exception | None = None):
        self.prediction = prediction or RiskPrediction(
            risk_score=30,
            risk_category="low",
            confidence=0.85,
            breakdown={"weather_risk": 35.0, "infrastructure": 40.0, "diversification": 20.0, "financial_health": 15.0},
            top_risk_drivers=[{"factor": "Rainfed irrigation", "impact": 0.4}],
        )
        self.error = error
        self.requests: list[PredictionRequest] = []

    def predict(self, request: PredictionRequest) -> RiskPrediction:
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.prediction

    def health(self) -> PredictorHealth:
        return PredictorHealth(status="healthy", message="ok", latency_ms=3.0)


class MemoryCaseStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.saved = []
        self.attempts = 0

    def save(self, case) -> None:
        self.attempts += 1
        if self.fail:
            raise PersistenceFailure("disk full")
        self.saved.append(case)


class CountingRegistry(FarmRegistry):
    def __init__(self):
        super().__init__()
        self.lookups = []

    def lookup(self, farm_id):
        self.lookups.append(farm_id)
        return super().lookup(farm_id)


@pytest.fixture
def settings(tmp_path):
    return Settings(fraud_db_path=tmp_path / "fraud_cases.db", registry_path=None)


@pytest.fixture
def registry():
    return CountingRegistry()


@pytest.fixture
def satellite():
    return FakeSatellite()


@pytest.fixture
def weather():
    return FakeWeather()


@pytest.fixture
def predictor():
    return FakePredictor()


@pytest.fixture
def case_store():
    return MemoryCaseStore()


@pytest.fixture
def make_service(settings, registry, satellite, weather, predictor, case_store):
    """Build an AssessmentService wired to fakes; keyword overrides replace them."""

    def _make(**overrides):
        kwargs = {
            "registry": registry,
            "environment": EnvironmentalDataService(
                overrides.pop("satellite", satellite), overrides.pop("weather", weather)
            ),
            "predictor": predictor,
            "fraud_detector": FraudDetector(FixedRandom(0.5)),
            "case_store": case_store,
        }
        kwargs.update(overrides)
        return AssessmentService(settings, **kwargs)

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def assessment_payload():
    return {
        "farm_id": "KCC001",
        "crop_type": "soybean",
        "season": "kharif",
        "gps_latitude": 18.52,
        "gps_longitude": 73.86,
        "irrigation_type": "rainfed",
    }


@pytest.fixture
def assessment_request(assessment_payload):
    return AssessmentRequest(**assessment_payload)

