"""Subscription price lists by education level."""

from typing import Dict, Optional, Union

from .models import (
    BillingPeriod,
    EducationLevel,
    LessonFormat,
    PriceTier,
    PricingError,
    PricingPlan,
    parse_choice,
)

_PRIMARY = PricingPlan(individual=PriceTier(50, 500), group=PriceTier(15, 150))
_OLEVEL = PricingPlan(individual=PriceTier(40, 400), group=PriceTier(7, 70))
_ALEVEL = PricingPlan(individual=PriceTier(50, 500), group=PriceTier(13, 130))


def _plan_for(level: EducationLevel) -> PricingPlan:
    if level.value.startswith("primary_"):
        return _PRIMARY
    if level.value.startswith("olevel_"):
        return _OLEVEL
    return _ALEVEL


PRICING_PLANS: Dict[EducationLevel, PricingPlan] = {level: _plan_for(level) for level in EducationLevel}

# Vocational courses carry a premium over academic levels
VOCATIONAL_PRICING = PricingPlan(individual=PriceTier(60, 600), group=PriceTier(18, 180))


def get_price(
    level: Optional[Union[EducationLevel, str]],
    lesson_format: Union[LessonFormat, str],
    billing: Union[BillingPeriod, str] = "monthly",
    vocational: bool = False,
) -> float:
    """Look up the per-student price.

    Vocational pricing ignores the level, so level may be None when
    vocational is True.

    Args:
        level: Education level (enum or its value)
        lesson_format: "one_on_one" or "group"
        billing: "monthly" or "yearly"
        vocational: Use the vocational price list

    Returns:
        Price in USD per student

    Raises:
        PricingError: If the level, format or billing period is unknown

    Example:
        >>> get_price("olevel_form_3", "group")
        7
    """
    lesson_format = parse_choice(LessonFormat, lesson_format, "lesson format")
    billing = parse_choice(BillingPeriod, billing, "billing period")

    if vocational:
        plan = VOCATIONAL_PRICING
    else:
        if level is None:
            raise PricingError("Education level is required for academic pricing")
        plan = PRICING_PLANS[parse_choice(EducationLevel, level, "education level")]

    return plan.tier(lesson_format).for_period(billing)

