"""Build normalized risk predictor requests."""

from farmrisk.config import Settings
from farmrisk.models.environment import EnvironmentalSnapshot
from farmrisk.models.farm import AssessmentRequest, FarmRecord
from farmrisk.models.prediction import PredictionRequest

# Scale used to express repayment history as a KCC credit score
KCC_SCORE_MIN = 300
KCC_SCORE_MAX = 900

# Rainfall expected in a normal season; drought probability scales it down
NORMAL_SEASON_RAINFALL_MM = 1000


def clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def to_fraction(value: float) -> float:
    """Normalize a 0-100 or 0-1 quantity to the 0-1 range."""
    if value > 1:
        value = value / 100
    return clamp01(value)


def build_prediction_request(
    record: FarmRecord,
    request: AssessmentRequest,
    snapshot: EnvironmentalSnapshot,
    settings: Settings,
) -> PredictionRequest:
    """Merge registry, user and environmental data into a predictor request.

    Land size and crop diversity always come from the registry, so a farmer
    cannot lower per-acre risk by overstating their holding.
    """
    drought = clamp01(snapshot.drought_probability)
    repayment = clamp01(record.repayment_rate_percent / 100)

    return PredictionRequest(
        state=record.state or settings.default_state,
        crop_type=request.crop_type,
        season=request.season,
        irrigation_type=request.irrigation_type,
        land_acres=record.land_acres,
        water_source_count=request.borewell_count + (1 if request.has_canal_access else 0),
        borewell_count=request.borewell_count,
        borewell_depth_ft=request.borewell_depth_ft,
        has_canal_access=request.has_canal_access,
        crop_count=record.crop_count,
        has_livestock=request.livestock_count > 0,
        livestock_count=request.livestock_count,
        owns_tractor=request.owns_tractor,
        has_storage=request.has_storage,
        kcc_score=round(KCC_SCORE_MIN + repayment * (KCC_SCORE_MAX - KCC_SCORE_MIN)),
        kcc_repayment_rate=repayment,
        outstanding_debt_ratio=record.outstanding_amount / (record.land_acres * settings.land_value_per_acre),
        has_insurance_history=record.has_insurance_history,
        # Deficit percentage is drought probability x 100, sent in fraction form
        rainfall_deficit_pct=drought,
        actual_rainfall_mm=NORMAL_SEASON_RAINFALL_MM * (1 - drought),
        heatwave_days=snapshot.heatwave_days,
        monsoon_reliability=1 - drought,
        ndvi_score=clamp01(snapshot.ndvi),
        soil_moisture_percent=clamp01(snapshot.soil_moisture),
        soil_fertility_index=to_fraction(settings.soil_fertility_index),
    )
