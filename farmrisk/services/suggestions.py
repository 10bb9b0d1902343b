"""Farm-improvement suggestions ranked by evaluation order."""

from dataclasses import dataclass
from typing import Callable

from farmrisk.logger import get_logger
from farmrisk.models.assessment import Suggestion
from farmrisk.models.farm import FarmProfile

logger = get_logger(__name__)

MAX_SUGGESTIONS = 4

# Every 50 points of score increase moves the premium by 100%
SCORE_POINTS_PER_FULL_PREMIUM = 50

# Implementation costs (INR)
DRIP_COST_PER_ACRE = 25000
DIVERSIFICATION_COST_PER_ACRE = 4000
LIVESTOCK_COST = 40000
STORAGE_COST = 75000
SOIL_HEALTH_CARD_COST = 0
FARM_POND_COST = 60000


def premium_savings(current_premium: float, score_increase: int) -> int:
    """Premium saved by raising the risk score by ``score_increase`` points."""
    return round(current_premium * score_increase / SCORE_POINTS_PER_FULL_PREMIUM)


@dataclass(frozen=True)
class SuggestionRule:
    """An eligibility predicate paired with the suggestion it produces."""

    name: str
    applies: Callable[[FarmProfile], bool]
    action: str
    description: str
    impact: str
    score_increase: int
    subsidy_percent: int
    cost: Callable[[FarmProfile], float]

    def build(self, farm: FarmProfile, current_premium: float, priority_rank: int) -> Suggestion:
        return Suggestion(
            action=self.action,
            description=self.description,
            impact=self.impact,
            score_increase=self.score_increase,
            premium_savings=premium_savings(current_premium, self.score_increase),
            estimated_cost=self.cost(farm),
            govt_subsidy_available=self.subsidy_percent > 0,
            subsidy_percent=self.subsidy_percent,
            priority_rank=priority_rank,
        )


# Evaluation order is the priority order. The two diversification rules are
# mutually exclusive and share the second slot.
DEFAULT_RULES = (
    SuggestionRule(
        name="irrigation_upgrade",
        applies=lambda f: f.irrigation_type in ("rainfed", "flood"),
        action="Install Drip Irrigation",
        description="Reduces water dependency and improves resilience against drought.",
        impact="high",
        score_increase=15,
        subsidy_percent=45,
        cost=lambda f: f.land_acres * DRIP_COST_PER_ACRE,
    ),
    SuggestionRule(
        name="crop_diversification",
        applies=lambda f: f.crop_count == 1,
        action="Crop Diversification",
        description="Growing a second crop spreads weather and price risk across the season.",
        impact="medium",
        score_increase=12,
        subsidy_percent=25,
        cost=lambda f: f.land_acres * DIVERSIFICATION_COST_PER_ACRE,
    ),
    SuggestionRule(
        name="add_crop_variety",
        applies=lambda f: f.crop_count == 2,
        action="Add One More Crop Variety",
        description="A third crop further reduces the chance of a total season loss.",
        impact="low",
        score_increase=6,
        subsidy_percent=0,
        cost=lambda f: f.land_acres * DIVERSIFICATION_COST_PER_ACRE,
    ),
    SuggestionRule(
        name="livestock_integration",
        applies=lambda f: not f.has_livestock and f.land_acres >= 3,
        action="Integrate Livestock",
        description="Dairy or goat rearing adds income that does not depend on the harvest.",
        impact="medium",
        score_increase=8,
        subsidy_percent=33,
        cost=lambda f: LIVESTOCK_COST,
    ),
    SuggestionRule(
        name="storage_facility",
        applies=lambda f: not f.has_storage and f.land_acres >= 5,
        action="Build Storage Facility",
        description="On-farm storage avoids distress sales and post-harvest losses.",
        impact="medium",
        score_increase=7,
        subsidy_percent=50,
        cost=lambda f: STORAGE_COST,
    ),
    SuggestionRule(
        name="soil_health_card",
        applies=lambda f: True,
        action="Get Soil Health Card",
        description="Free government soil testing to optimize fertilizer usage.",
        impact="low",
        score_increase=5,
        subsidy_percent=100,
        cost=lambda f: SOIL_HEALTH_CARD_COST,
    ),
    SuggestionRule(
        name="farm_pond",
        applies=lambda f: not f.has_canal_access and f.land_acres >= 4,
        action="Dig Farm Pond",
        description="Harvests monsoon runoff for protective irrigation during dry spells.",
        impact="medium",
        score_increase=10,
        subsidy_percent=60,
        cost=lambda f: FARM_POND_COST,
    ),
)


class SuggestionEngine:
    """Deterministic rule engine proposing prioritized mitigation actions."""

    def __init__(self, rules: tuple[SuggestionRule, ...] = DEFAULT_RULES, limit: int = MAX_SUGGESTIONS):
        self.rules = rules
        self.limit = limit

    def generate(self, farm: FarmProfile, current_premium: float) -> list[Suggestion]:
        """Evaluate every rule in order and return the top-ranked suggestions."""
        suggestions = []
        priority = 1
        for rule in self.rules:
            if not rule.applies(farm):
                continue
            suggestions.append(rule.build(farm, current_premium, priority))
            priority += 1

        suggestions.sort(key=lambda s: s.priority_rank)
        selected = suggestions[: self.limit]
        logger.info(
            f"{len(suggestions)} suggestions eligible, returning {len(selected)}: "
            f"{[s.action for s in selected]}"
        )
        return selected
