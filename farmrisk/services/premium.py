"""Risk-based premium pricing."""

from farmrisk.logger import get_logger
from farmrisk.models.assessment import PricingResult

logger = get_logger(__name__)

# Premium multiplier at risk score 0 and its growth per risk point
MIN_RISK_MULTIPLIER = 0.5
RISK_MULTIPLIER_SLOPE = 1 / 100


class PremiumCalculator:
    """Price cover from the predicted risk score.

    The base premium is a flat rate on the insured sum; a risk score of 50
    prices at exactly the base, 0 at half of it and 100 at one and a half.
    """

    def __init__(self, base_rate: float = 0.025):
        self.base_rate = base_rate

    def calculate(self, risk_score: float, sum_insured: float, district_avg_premium: float) -> PricingResult:
        base_premium = sum_insured * self.base_rate
        multiplier = MIN_RISK_MULTIPLIER + risk_score * RISK_MULTIPLIER_SLOPE
        recommended = round(base_premium * multiplier)

        savings = round(district_avg_premium - recommended)
        savings_percent = round(savings / district_avg_premium * 100, 1) if district_avg_premium else 0.0

        logger.info(
            f"Premium for risk {risk_score:.1f} on {sum_insured:,.0f}: {recommended:,} "
            f"(district avg {district_avg_premium:,.0f}, savings {savings_percent}%)"
        )
        return PricingResult(
            recommended_premium=recommended,
            district_avg_premium=district_avg_premium,
            savings=savings,
            savings_percent=savings_percent,
        )
