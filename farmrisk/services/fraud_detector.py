"""Heuristic fraud detection for farm assessments."""

import random
from typing import Any, Protocol

from farmrisk.logger import get_logger
from farmrisk.models.fraud import FraudAssessment, FraudFlag

logger = get_logger(__name__)

# Flag weights (sum is capped at 100)
LAND_MISMATCH_WEIGHT = 35
UNREGISTERED_CROP_WEIGHT = 25
IRRIGATION_MISMATCH_WEIGHT = 25
LOW_VEGETATION_WEIGHT = 20
UNIFORM_VEGETATION_WEIGHT = 15
NEIGHBOUR_OUTLIER_WEIGHT = 20

# Thresholds
LAND_MISMATCH_TOLERANCE = 0.20  # relative difference from registry
IRRIGATED_MIN_SOIL_MOISTURE = 0.15
ACTIVE_CROP_MIN_NDVI = 0.20
MAX_NATURAL_UNIFORMITY = 0.95
NEIGHBOUR_NDVI_TOLERANCE = 0.30

REJECT_SCORE = 60
FIELD_VERIFY_SCORE = 30

IRRIGATED_TYPES = {"drip", "sprinkler", "canal", "borewell"}


class FraudHeuristic(Protocol):
    def evaluate(
        self,
        farmer_input: dict[str, Any],
        registry_data: dict[str, Any],
        environmental_data: dict[str, Any],
        nearby_farms: list[dict[str, Any]],
    ) -> FraudAssessment: ...


class FraudDetector:
    """Cross-check farmer claims against registry and satellite observations.

    Args:
        rng: Randomness source for the vegetation-uniformity signal when the
            satellite provider does not report one. Pass a seeded
            ``random.Random`` for reproducible results.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        logger.info("FraudDetector initialized")

    def evaluate(
        self,
        farmer_input: dict[str, Any],
        registry_data: dict[str, Any],
        environmental_data: dict[str, Any],
        nearby_farms: list[dict[str, Any]],
    ) -> FraudAssessment:
        """Evaluate fraud signals and return flags, score and recommendation."""
        flags: list[FraudFlag] = []

        flag = self._check_land(farmer_input, registry_data)
        if flag:
            flags.append(flag)

        flag = self._check_crop(farmer_input, registry_data)
        if flag:
            flags.append(flag)

        flag = self._check_irrigation(farmer_input, environmental_data)
        if flag:
            flags.append(flag)

        flag = self._check_vegetation(farmer_input, environmental_data)
        if flag:
            flags.append(flag)

        flag = self._check_neighbours(environmental_data, nearby_farms)
        if flag:
            flags.append(flag)

        fraud_score = min(sum(f.weight for f in flags), 100)
        if fraud_score >= REJECT_SCORE:
            recommendation = "reject"
        elif fraud_score >= FIELD_VERIFY_SCORE:
            recommendation = "field_verify"
        else:
            recommendation = "approve"

        logger.info(
            f"Fraud evaluation: {len(flags)} flags, score={fraud_score}, recommendation={recommendation}"
        )
        return FraudAssessment(flags=flags, fraud_score=fraud_score, recommendation=recommendation)

    def _check_land(self, farmer_input: dict, registry_data: dict) -> FraudFlag | None:
        declared = farmer_input.get("land_acres")
        registered = registry_data.get("land_acres")
        if not declared or not registered:
            return None

        difference = abs(declared - registered) / registered
        if difference <= LAND_MISMATCH_TOLERANCE:
            return None
        return FraudFlag(
            type="land_mismatch",
            details=f"Declared land {declared:g} acres differs from KCC record {registered:g} acres",
            weight=LAND_MISMATCH_WEIGHT,
        )

    def _check_crop(self, farmer_input: dict, registry_data: dict) -> FraudFlag | None:
        crop = (farmer_input.get("crop_type") or "").strip().lower()
        registered = {c.strip().lower() for c in registry_data.get("crops", [])}
        if not crop or not registered or crop in registered:
            return None
        return FraudFlag(
            type="unregistered_crop",
            details=f"Crop '{crop}' is not registered for this farm in the KCC registry",
            weight=UNREGISTERED_CROP_WEIGHT,
        )

    def _check_irrigation(self, farmer_input: dict, environmental_data: dict) -> FraudFlag | None:
        irrigation = farmer_input.get("irrigation_type")
        soil_moisture = environmental_data.get("soil_moisture")
        if irrigation not in IRRIGATED_TYPES or soil_moisture is None:
            return None
        if soil_moisture >= IRRIGATED_MIN_SOIL_MOISTURE:
            return None
        return FraudFlag(
            type="irrigation_mismatch",
            details=f"Claimed {irrigation} irrigation but soil moisture is only {soil_moisture:.0%}",
            weight=IRRIGATION_MISMATCH_WEIGHT,
        )

    def _check_vegetation(self, farmer_input: dict, environmental_data: dict) -> FraudFlag | None:
        ndvi = environmental_data.get("ndvi")
        if ndvi is None:
            return None

        if ndvi < ACTIVE_CROP_MIN_NDVI:
            return FraudFlag(
                type="low_vegetation",
                details=f"NDVI {ndvi:.2f} is too low for an active {farmer_input.get('crop_type', 'crop')} crop",
                weight=LOW_VEGETATION_WEIGHT,
            )

        uniformity = environmental_data.get("ndvi_uniformity")
        # Without a provider value the draw stays in the natural range
        if uniformity is None:
            uniformity = 0.7 + self.rng.random() * 0.2
        if uniformity > MAX_NATURAL_UNIFORMITY:
            return FraudFlag(
                type="uniform_vegetation",
                details=f"Vegetation uniformity {uniformity:.2f} suggests a reused or synthetic image",
                weight=UNIFORM_VEGETATION_WEIGHT,
            )
        return None

    def _check_neighbours(self, environmental_data: dict, nearby_farms: list[dict]) -> FraudFlag | None:
        ndvi = environmental_data.get("ndvi")
        neighbour_ndvi = [f["ndvi"] for f in nearby_farms if f.get("ndvi") is not None]
        if ndvi is None or not neighbour_ndvi:
            return None

        mean_ndvi = sum(neighbour_ndvi) / len(neighbour_ndvi)
        if abs(ndvi - mean_ndvi) <= NEIGHBOUR_NDVI_TOLERANCE:
            return None
        return FraudFlag(
            type="neighbour_outlier",
            details=f"NDVI {ndvi:.2f} deviates from nearby farms' average {mean_ndvi:.2f}",
            weight=NEIGHBOUR_OUTLIER_WEIGHT,
        )
