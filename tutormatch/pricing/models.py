"""Data models and exceptions for tutoring prices and earnings."""

from dataclasses import dataclass
from enum import Enum


class PricingError(Exception):
    """Raised for unknown levels or invalid pricing inputs."""

    pass


class EducationLevel(str, Enum):
    """Zimbabwean school levels a tutor can teach."""

    PRIMARY_GRADE_1 = "primary_grade_1"
    PRIMARY_GRADE_2 = "primary_grade_2"
    PRIMARY_GRADE_3 = "primary_grade_3"
    PRIMARY_GRADE_4 = "primary_grade_4"
    PRIMARY_GRADE_5 = "primary_grade_5"
    PRIMARY_GRADE_6 = "primary_grade_6"
    PRIMARY_GRADE_7 = "primary_grade_7"
    OLEVEL_FORM_1 = "olevel_form_1"
    OLEVEL_FORM_2 = "olevel_form_2"
    OLEVEL_FORM_3 = "olevel_form_3"
    OLEVEL_FORM_4 = "olevel_form_4"
    ALEVEL_FORM_5_ARTS = "alevel_form_5_arts"
    ALEVEL_FORM_5_SCIENCES = "alevel_form_5_sciences"
    ALEVEL_FORM_5_COMMERCIALS = "alevel_form_5_commercials"
    ALEVEL_FORM_6_ARTS = "alevel_form_6_arts"
    ALEVEL_FORM_6_SCIENCES = "alevel_form_6_sciences"
    ALEVEL_FORM_6_COMMERCIALS = "alevel_form_6_commercials"


class LessonFormat(str, Enum):
    """How a tutor delivers lessons."""

    ONE_ON_ONE = "one_on_one"
    GROUP = "group"


class BillingPeriod(str, Enum):
    """Billing cycle of a subscription."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class PriceTier:
    """Price in USD per student for each billing period."""

    monthly: float
    yearly: float

    def for_period(self, billing: BillingPeriod) -> float:
        return self.monthly if billing == BillingPeriod.MONTHLY else self.yearly


@dataclass(frozen=True)
class PricingPlan:
    """Prices for individual and group lessons at one level.

    Attributes:
        individual: One-on-one lesson prices
        group: Group lesson prices (per student)
    """

    individual: PriceTier
    group: PriceTier

    def tier(self, lesson_format: LessonFormat) -> PriceTier:
        return self.individual if lesson_format == LessonFormat.ONE_ON_ONE else self.group


@dataclass(frozen=True)
class EarningsProjection:
    """Monthly earnings projection for a tutor.

    All money amounts are USD per month.

    Attributes:
        teacher_share: Income after the platform cut, plus other income
        monthly_revenue: Gross revenue the teacher share was taken from
        weekly_hours: Teaching hours per week, one hour per session
        gap_to_target: Shortfall against the income target, never negative
        students_needed_for_target: Students needed at this price to reach
            the target from lessons alone, 0 when the price pays nothing
    """

    teacher_share: float
    monthly_revenue: float
    weekly_hours: int
    gap_to_target: float
    students_needed_for_target: int

    @property
    def meets_target(self) -> bool:
        return self.gap_to_target == 0


def parse_choice(enum_cls, value, label: str):
    """Coerce value to enum_cls, raising PricingError with the allowed values."""
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise PricingError(f"Unknown {label}: {value!r} (expected one of: {allowed})") from e
