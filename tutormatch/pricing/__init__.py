"""Tutoring prices and tutor earnings projections."""

from .earnings import project_earnings
from .models import (
    BillingPeriod,
    EarningsProjection,
    EducationLevel,
    LessonFormat,
    PriceTier,
    PricingError,
    PricingPlan,
)
from .plans import PRICING_PLANS, VOCATIONAL_PRICING, get_price

__all__ = [
    "PRICING_PLANS",
    "VOCATIONAL_PRICING",
    "get_price",
    "project_earnings",
    "EducationLevel",
    "LessonFormat",
    "BillingPeriod",
    "PriceTier",
    "PricingPlan",
    "EarningsProjection",
    "PricingError",
]
