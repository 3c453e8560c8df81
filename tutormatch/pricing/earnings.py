"""Monthly earnings projection for tutors."""

import math
from typing import Union

from .models import EarningsProjection, LessonFormat, PricingError, parse_choice

DEFAULT_PLATFORM_CUT_PERCENT = 10.0
DEFAULT_INCOME_TARGET = 300.0


def project_earnings(
    price_per_student: float,
    students: int,
    sessions_per_week: int,
    lesson_format: Union[LessonFormat, str],
    platform_cut_percent: float = DEFAULT_PLATFORM_CUT_PERCENT,
    other_income: float = 0.0,
    income_target: float = DEFAULT_INCOME_TARGET,
) -> EarningsProjection:
    """Project a tutor's monthly income.

    One-on-one lessons cost one hour per student per session; a group
    meets once per session regardless of size.

    Args:
        price_per_student: Monthly price each student pays (USD)
        students: Individual students, or the group size for group lessons
        sessions_per_week: Sessions per week (one hour each)
        lesson_format: "one_on_one" or "group"
        platform_cut_percent: Platform commission, 0 <= cut < 100
        other_income: Monthly income from elsewhere (USD)
        income_target: Monthly income goal (USD)

    Returns:
        EarningsProjection

    Raises:
        PricingError: On negative inputs, a cut outside [0, 100), or an
            unknown lesson format
    """
    lesson_format = parse_choice(LessonFormat, lesson_format, "lesson format")

    for name, value in (
        ("price_per_student", price_per_student),
        ("students", students),
        ("sessions_per_week", sessions_per_week),
        ("other_income", other_income),
        ("income_target", income_target),
    ):
        if value < 0:
            raise PricingError(f"{name} must be non-negative, got: {value}")

    if not 0 <= platform_cut_percent < 100:
        raise PricingError(
            f"platform_cut_percent must be in [0, 100), got: {platform_cut_percent}"
        )

    keep = 100 - platform_cut_percent
    share_per_student = price_per_student * keep / 100
    teacher_share = share_per_student * students + other_income

    if lesson_format == LessonFormat.ONE_ON_ONE:
        weekly_hours = sessions_per_week * students
    else:
        weekly_hours = sessions_per_week

    if share_per_student > 0:
        students_needed = math.ceil(income_target / share_per_student)
    else:
        students_needed = 0

    return EarningsProjection(
        teacher_share=teacher_share,
        monthly_revenue=teacher_share * 100 / keep,
        weekly_hours=weekly_hours,
        gap_to_target=max(0.0, income_target - teacher_share),
        students_needed_for_target=students_needed,
    )
