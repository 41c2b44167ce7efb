"""Core weight-loss calculations.

This module turns a ``PlanInput`` into a ``PlanResult``: basal metabolic
rate (BMR) with the Harris–Benedict equation, total daily energy
expenditure (TDEE), the daily deficit required by the goal and a safety
check against a minimum daily intake.  When the requested plan would go
below that intake, a longer timeline at the minimum intake is suggested.
Values returned from these functions are purely indicative and should not
replace professional advice.

Every stage is a pure function.  Intermediate values keep full precision;
rounding happens once, when the ``PlanResult`` is assembled.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, Optional, Union

from .schema import (
    Feasibility,
    NonPositiveInput,
    PlanInput,
    PlanResult,
    UnsafeTargetLoss,
)

logger = logging.getLogger(__name__)

# Lowest daily intake considered safe without medical supervision.
MIN_DAILY_KCAL = 1200
# Energy content of one kilogram of body mass.
KCAL_PER_KG = 7200
# Largest goal accepted, as a share of current body weight.
MAX_LOSS_SHARE = 0.15

POSITIVE_FIELDS = (
    "weight_kg",
    "height_cm",
    "age_years",
    "target_days",
    "target_loss_kg",
)


@dataclass(frozen=True)
class Energy:
    bmr: float
    tdee: float


@dataclass(frozen=True)
class Deficit:
    total: float
    daily: float
    daily_calorie_target: float


@dataclass(frozen=True)
class Safety:
    is_safe: bool
    feasibility: Feasibility
    feasible_days: Optional[int]


def round_kcal(value: float) -> int:
    """Round half up, so ``-874.5`` becomes ``-874`` and ``0.5`` becomes ``1``."""
    return int(math.floor(value + 0.5))


def safe_loss_limit(weight_kg: float) -> float:
    """Return the largest acceptable loss for ``weight_kg``, to one decimal."""
    return round(weight_kg * MAX_LOSS_SHARE, 1)


def validate(
    plan_input: PlanInput,
) -> Union[PlanInput, NonPositiveInput, UnsafeTargetLoss]:
    """Check a request before anything is computed.

    Returns the unchanged ``plan_input`` when it passes.  Otherwise one of
    the failure models is returned; non-positive values are reported
    before an excessive goal.
    """
    bad = [name for name in POSITIVE_FIELDS if getattr(plan_input, name) <= 0]
    if bad:
        logger.info("Rejected plan input: non-positive %s", ", ".join(bad))
        return NonPositiveInput(field_names=bad)
    if plan_input.target_loss_kg > plan_input.weight_kg * MAX_LOSS_SHARE:
        limit = safe_loss_limit(plan_input.weight_kg)
        logger.info(
            "Rejected plan input: target loss %s kg exceeds limit %s kg",
            plan_input.target_loss_kg,
            limit,
        )
        return UnsafeTargetLoss(limit_kg=limit)
    return plan_input


def compute_bmr(
    sex: Literal["male", "female"], weight_kg: float, height_cm: float, age_years: int
) -> float:
    """Compute basal metabolic rate using the Harris–Benedict equation.

    Args:
        sex: "male" or "female".
        weight_kg: Weight in kilograms.
        height_cm: Height in centimetres.
        age_years: Age in years.

    Returns:
        Estimated BMR in kilocalories per day.
    """
    if sex == "male":
        return 66 + 13.7 * weight_kg + 5 * height_cm - 6.8 * age_years
    if sex == "female":
        return 655 + 9.6 * weight_kg + 1.8 * height_cm - 4.7 * age_years
    raise ValueError(f"Unsupported sex: {sex}")


def compute_energy(
    weight_kg: float,
    height_cm: float,
    age_years: int,
    sex: Literal["male", "female"],
    activity_factor: float,
) -> Energy:
    """Return BMR and TDEE (BMR scaled by ``activity_factor``)."""
    bmr = compute_bmr(sex, weight_kg, height_cm, age_years)
    return Energy(bmr=bmr, tdee=bmr * activity_factor)


def compute_deficit(tdee: float, target_loss_kg: float, target_days: int) -> Deficit:
    """Spread the energy of ``target_loss_kg`` evenly over ``target_days``."""
    total = target_loss_kg * KCAL_PER_KG
    daily = total / target_days
    return Deficit(total=total, daily=daily, daily_calorie_target=tdee - daily)


def assess_safety(
    tdee: float,
    daily_calorie_target: float,
    total_deficit: float,
    target_days: int,
) -> Safety:
    """Compare the daily target with ``MIN_DAILY_KCAL``.

    An unsafe plan gets a new duration: the days needed to burn
    ``total_deficit`` while eating exactly ``MIN_DAILY_KCAL``.  When the
    TDEE itself does not exceed the minimum there is no such duration and
    the plan is marked ``infeasible`` with ``feasible_days`` left empty.
    """
    if daily_calorie_target >= MIN_DAILY_KCAL:
        return Safety(is_safe=True, feasibility="on_track", feasible_days=target_days)
    headroom = tdee - MIN_DAILY_KCAL
    if headroom <= 0:
        return Safety(is_safe=False, feasibility="infeasible", feasible_days=None)
    return Safety(
        is_safe=False,
        feasibility="extended",
        feasible_days=math.ceil(total_deficit / headroom),
    )


def compute(
    plan_input: PlanInput,
) -> Union[PlanResult, NonPositiveInput, UnsafeTargetLoss]:
    """Run the whole pipeline for one request.

    This convenience function wraps validation, the energy and deficit
    models and the safety check.  Safety is judged on the unrounded daily
    target, so a reported target of 1200 can still be unsafe.

    Args:
        plan_input: Biometrics, activity factor and goal.

    Returns:
        A ``PlanResult``, or the ``NonPositiveInput``/``UnsafeTargetLoss``
        failure produced by :func:`validate`.
    """
    checked = validate(plan_input)
    if not isinstance(checked, PlanInput):
        return checked

    energy = compute_energy(
        checked.weight_kg,
        checked.height_cm,
        checked.age_years,
        checked.sex,
        checked.activity_factor,
    )
    deficit = compute_deficit(energy.tdee, checked.target_loss_kg, checked.target_days)
    daily_target = round_kcal(deficit.daily_calorie_target)
    safety = assess_safety(
        energy.tdee, deficit.daily_calorie_target, deficit.total, checked.target_days
    )
    logger.debug(
        "Plan computed: bmr=%.2f tdee=%.2f daily_deficit=%.2f target=%d safety=%s",
        energy.bmr,
        energy.tdee,
        deficit.daily,
        daily_target,
        safety,
    )
    return PlanResult(
        bmr=round_kcal(energy.bmr),
        tdee=round_kcal(energy.tdee),
        daily_deficit=round_kcal(deficit.daily),
        daily_calorie_target=daily_target,
        total_deficit=round_kcal(deficit.total),
        is_safe=safety.is_safe,
        feasibility=safety.feasibility,
        feasible_days=safety.feasible_days,
        weight_kg=checked.weight_kg,
        target_loss_kg=checked.target_loss_kg,
        target_days=checked.target_days,
    )
