"""Tests for fraud heuristics, trust score and premium pricing."""

import random

import pytest

from conftest import FixedRandom
from farmrisk.models.fraud import FraudAssessment, FraudFlag
from farmrisk.services.fraud_detector import FraudDetector
from farmrisk.services.premium import PremiumCalculator


@pytest.fixture
def registry_data():
    return {"land_acres": 10, "crops": ["soybean", "wheat"], "village": "Shirur", "district": "Pune"}


@pytest.fixture
def clean_environment():
    return {"ndvi": 0.6, "soil_moisture": 0.4}


def farmer(**overrides):
    values = {"land_acres": None, "irrigation_type": "rainfed", "crop_type": "soybean"}
    values.update(overrides)
    return values


class TestFraudDetector:

    @pytest.fixture
    def detector(self):
        return FraudDetector(FixedRandom(0.5))

    def test_consistent_farm_is_approved(self, detector, registry_data, clean_environment):
        result = detector.evaluate(farmer(), registry_data, clean_environment, [])

        assert result.flags == []
        assert result.fraud_score == 0
        assert result.recommendation == "approve"

    def test_land_within_tolerance_is_not_flagged(self, detector, registry_data, clean_environment):
        result = detector.evaluate(farmer(land_acres=11.5), registry_data, clean_environment, [])
        assert result.flags == []

    def test_declared_land_mismatch_needs_field_verification(self, detector, registry_data, clean_environment):
        result = detector.evaluate(farmer(land_acres=15), registry_data, clean_environment, [])

        assert [f.type for f in result.flags] == ["land_mismatch"]
        assert result.fraud_score == 35
        assert result.recommendation == "field_verify"

    def test_unregistered_crop_alone_is_approved_with_flag(self, detector, registry_data, clean_environment):
        result = detector.evaluate(farmer(crop_type="Cotton"), registry_data, clean_environment, [])

        assert [f.type for f in result.flags] == ["unregistered_crop"]
        assert result.recommendation == "approve"

    def test_multiple_flags_lead_to_reject(self, detector, registry_data):
        environment = {"ndvi": 0.6, "soil_moisture": 0.05}

        result = detector.evaluate(
            farmer(land_acres=20, crop_type="cotton", irrigation_type="drip"), registry_data, environment, []
        )

        assert [f.type for f in result.flags] == ["land_mismatch", "unregistered_crop", "irrigation_mismatch"]
        assert result.fraud_score == 85
        assert result.recommendation == "reject"

    def test_rainfed_claim_is_not_checked_against_soil_moisture(self, detector, registry_data):
        result = detector.evaluate(farmer(), registry_data, {"ndvi": 0.6, "soil_moisture": 0.02}, [])
        assert result.flags == []

    def test_low_vegetation(self, detector, registry_data):
        result = detector.evaluate(farmer(), registry_data, {"ndvi": 0.1, "soil_moisture": 0.4}, [])
        assert [f.type for f in result.flags] == ["low_vegetation"]

    def test_reported_uniformity_is_used(self, detector, registry_data):
        environment = {"ndvi": 0.6, "soil_moisture": 0.4, "ndvi_uniformity": 0.98}

        result = detector.evaluate(farmer(), registry_data, environment, [])

        assert [f.type for f in result.flags] == ["uniform_vegetation"]
        assert detector.rng.calls == 0

    def test_injected_randomness_drives_uniformity(self, registry_data, clean_environment):
        rng = FixedRandom(1.0)

        FraudDetector(rng).evaluate(farmer(), registry_data, clean_environment, [])

        assert rng.calls == 1

    def test_seeded_detectors_agree(self, registry_data, clean_environment):
        first = FraudDetector(random.Random(7)).evaluate(farmer(), registry_data, clean_environment, [])
        second = FraudDetector(random.Random(7)).evaluate(farmer(), registry_data, clean_environment, [])
        assert first == second

    def test_neighbour_outlier(self, detector, registry_data, clean_environment):
        nearby = [{"farm_id": "KCC101", "ndvi": 0.2}, {"farm_id": "KCC102", "ndvi": 0.25}]

        result = detector.evaluate(farmer(), registry_data, clean_environment, nearby)

        assert [f.type for f in result.flags] == ["neighbour_outlier"]

    def test_score_is_capped_at_100(self, detector, registry_data):
        environment = {"ndvi": 0.9, "soil_moisture": 0.05, "ndvi_uniformity": 0.99}
        nearby = [{"ndvi": 0.2}]

        result = detector.evaluate(
            farmer(land_acres=30, crop_type="cotton", irrigation_type="canal"), registry_data, environment, nearby
        )

        assert result.fraud_score == 100


class TestSeverityAndTrust:

    @pytest.mark.parametrize(
        "recommendation, flags, expected",
        [
            ("reject", 2, "critical"),
            ("field_verify", 1, "high"),
            ("approve", 1, "medium"),
            ("approve", 0, None),
        ],
    )
    def test_severity_mapping(self, recommendation, flags, expected):
        assessment = FraudAssessment(
            flags=[FraudFlag(type="t", details="d")] * flags, fraud_score=50, recommendation=recommendation
        )
        assert assessment.severity == expected

    def test_trust_score_formula(self):
        assert FraudAssessment(fraud_score=0, recommendation="approve").trust_score == 50
        assert FraudAssessment(fraud_score=100, recommendation="reject").trust_score == 0

    @pytest.mark.parametrize("lower, higher", [(0, 1), (10, 35), (59.5, 60), (85, 100)])
    def test_trust_strictly_decreases_with_fraud(self, lower, higher):
        a = FraudAssessment(fraud_score=lower, recommendation="approve")
        b = FraudAssessment(fraud_score=higher, recommendation="approve")
        assert a.trust_score > b.trust_score


class TestPremiumCalculator:

    @pytest.fixture
    def calculator(self):
        return PremiumCalculator(base_rate=0.025)

    def test_mid_risk_prices_at_base(self, calculator):
        pricing = calculator.calculate(50, 200000, 5000)

        assert pricing.recommended_premium == 5000
        assert pricing.savings == 0
        assert pricing.savings_percent == 0

    def test_low_risk_saves_against_district(self, calculator):
        pricing = calculator.calculate(30, 200000, 5000)

        assert pricing.recommended_premium == 4000
        assert pricing.district_avg_premium == 5000
        assert pricing.savings == 1000
        assert pricing.savings_percent == 20.0

    def test_high_risk_costs_more_than_district(self, calculator):
        pricing = calculator.calculate(90, 200000, 5000)

        assert pricing.recommended_premium == 7000
        assert pricing.savings == -2000
        assert pricing.savings_percent == -40.0

    def test_premium_increases_with_risk(self, calculator):
        premiums = [calculator.calculate(score, 100000, 2500).recommended_premium for score in (0, 25, 50, 75, 100)]
        assert premiums == sorted(premiums)
        assert len(set(premiums)) == len(premiums)
