import pytest

from weightloss_planner.core import logic
from weightloss_planner.core.logic import compute, validate
from weightloss_planner.core.schema import NonPositiveInput, PlanInput, UnsafeTargetLoss

BASE = dict(
    weight_kg=70,
    height_cm=170,
    age_years=30,
    sex="male",
    activity_factor=1.2,
    target_days=30,
    target_loss_kg=3,
)


@pytest.mark.parametrize("field", logic.POSITIVE_FIELDS)
@pytest.mark.parametrize("value", [0, -1])
def test_non_positive_field_rejected(field, value):
    outcome = compute(PlanInput(**{**BASE, field: value}))
    assert isinstance(outcome, NonPositiveInput)
    assert outcome.field_names == [field]


def test_zero_age_rejected_regardless_of_goal():
    outcome = compute(PlanInput(**{**BASE, "age_years": 0, "target_loss_kg": 40}))
    assert isinstance(outcome, NonPositiveInput)


def test_all_bad_fields_reported():
    outcome = validate(PlanInput(**{**BASE, "weight_kg": 0, "target_days": -5}))
    assert outcome.field_names == ["weight_kg", "target_days"]


def test_excessive_goal_rejected_with_limit():
    outcome = compute(PlanInput(**{**BASE, "target_loss_kg": 12}))
    assert isinstance(outcome, UnsafeTargetLoss)
    assert outcome.limit_kg == 10.5


def test_limit_is_rounded_to_one_decimal():
    outcome = compute(PlanInput(**{**BASE, "weight_kg": 81, "target_loss_kg": 13}))
    assert isinstance(outcome, UnsafeTargetLoss)
    assert outcome.limit_kg == round(81 * 0.15, 1)


def test_goal_within_limit_passes():
    plan_input = PlanInput(**{**BASE, "target_loss_kg": 10.4})
    assert validate(plan_input) is plan_input


def test_activity_factor_is_not_range_checked():
    plan_input = PlanInput(**{**BASE, "activity_factor": 1.3})
    assert validate(plan_input) is plan_input


def test_safe_loss_limit():
    assert logic.safe_loss_limit(70) == 10.5
    assert logic.safe_loss_limit(80) == 12.0
