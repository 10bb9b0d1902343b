"""Tests for prediction request normalization."""

import pytest

from farmrisk.config import Settings
from farmrisk.models.environment import EnvironmentalSnapshot
from farmrisk.models.farm import AssessmentRequest, FarmRecord
from farmrisk.models.prediction import FRACTION_FIELDS
from farmrisk.services.request_builder import build_prediction_request, to_fraction


@pytest.fixture
def record():
    return FarmRecord(
        farm_id="KCC010",
        farmer_name="Test Farmer",
        state="Karnataka",
        land_acres=4,
        crops=["ragi", "Ragi", "maize"],
        repayment_rate_percent=80,
        outstanding_amount=40000,
    )


@pytest.fixture
def request_():
    return AssessmentRequest(
        farm_id="KCC010",
        crop_type="ragi",
        season="kharif",
        gps_latitude=12.97,
        gps_longitude=77.59,
        irrigation_type="borewell",
        borewell_count=2,
        has_canal_access=True,
        livestock_count=3,
        declared_land_acres=40,
    )


def snapshot(**overrides) -> EnvironmentalSnapshot:
    values = {
        "ndvi": 0.6,
        "soil_moisture": 0.45,
        "drought_probability": 0.25,
        "heatwave_days": 4,
        "satellite_source": "live",
        "weather_source": "live",
    }
    values.update(overrides)
    return EnvironmentalSnapshot(**values)


class TestBuildPredictionRequest:

    def test_land_and_crops_come_from_registry(self, record, request_):
        built = build_prediction_request(record, request_, snapshot(), Settings())

        assert built.land_acres == 4
        assert built.crop_count == 2  # duplicate spelling collapses

    def test_operational_fields(self, record, request_):
        built = build_prediction_request(record, request_, snapshot(), Settings())

        assert built.water_source_count == 3
        assert built.has_livestock is True
        assert built.livestock_count == 3
        assert built.state == "Karnataka"

    def test_debt_ratio_uses_land_value_baseline(self, record, request_):
        built = build_prediction_request(record, request_, snapshot(), Settings(land_value_per_acre=50000))
        assert built.outstanding_debt_ratio == pytest.approx(40000 / (4 * 50000))

    def test_drought_conversions(self, record, request_):
        built = build_prediction_request(record, request_, snapshot(drought_probability=0.25), Settings())

        assert built.rainfall_deficit_pct == pytest.approx(0.25)
        assert built.actual_rainfall_mm == pytest.approx(750)
        assert built.monsoon_reliability == pytest.approx(0.75)

    def test_repayment_rate_and_kcc_score(self, record, request_):
        built = build_prediction_request(record, request_, snapshot(), Settings())

        assert built.kcc_repayment_rate == pytest.approx(0.8)
        assert built.kcc_score == 780

    def test_soil_fertility_given_as_percentage_is_normalized(self, record, request_):
        built = build_prediction_request(record, request_, snapshot(), Settings(soil_fertility_index=70))
        assert built.soil_fertility_index == pytest.approx(0.7)

    def test_missing_state_uses_default(self, record, request_):
        record.state = None
        built = build_prediction_request(record, request_, snapshot(), Settings(default_state="Maharashtra"))
        assert built.state == "Maharashtra"

    @pytest.mark.parametrize("drought", [0.0, 0.004, 0.5, 1.0])
    @pytest.mark.parametrize("ndvi, soil", [(0.0, 0.0), (1.0, 1.0), (0.33, 0.9)])
    @pytest.mark.parametrize("repayment", [0, 0.5, 100])
    def test_fraction_fields_within_unit_interval(self, record, request_, drought, ndvi, soil, repayment):
        record.repayment_rate_percent = repayment
        env = snapshot(drought_probability=drought, ndvi=ndvi, soil_moisture=soil)

        built = build_prediction_request(record, request_, env, Settings())

        for name in FRACTION_FIELDS:
            assert 0 <= getattr(built, name) <= 1, name


class TestToFraction:

    @pytest.mark.parametrize(
        "value, expected",
        [(0, 0), (0.35, 0.35), (1, 1), (35, 0.35), (100, 1), (150, 1), (-5, 0)],
    )
    def test_normalizes_percentages(self, value, expected):
        assert to_fraction(value) == pytest.approx(expected)
