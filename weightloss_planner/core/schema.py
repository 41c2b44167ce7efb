"""Pydantic models for plan requests and their outcomes.

``PlanInput`` is what a collaborator (the Telegram form, a test, another
service) hands to :func:`weightloss_planner.core.logic.compute`.  The
engine answers with either a ``PlanResult`` or one of the two
``ValidationFailure`` models.  All models serialise with camelCase aliases
so a display layer can use ``model_dump(by_alias=True)`` directly.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Sex = Literal["male", "female"]
Feasibility = Literal["on_track", "extended", "infeasible"]


class ActivityLevel(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    factor: float


# Ordered from least to most active.  Labels live in ``messages.yaml``.
ACTIVITY_LEVELS: tuple[ActivityLevel, ...] = (
    ActivityLevel(key="sedentary", factor=1.2),
    ActivityLevel(key="light", factor=1.375),
    ActivityLevel(key="moderate", factor=1.55),
    ActivityLevel(key="active", factor=1.725),
    ActivityLevel(key="very_active", factor=1.9),
)


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class PlanInput(_Record):
    """One calculation request.

    Only types and finiteness are enforced here.  Non-positive numbers are
    accepted so that the validator can report them as ``NonPositiveInput``.
    """

    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex
    activity_factor: float
    target_days: int
    target_loss_kg: float


class PlanResult(_Record):
    kind: Literal["result"] = "result"
    bmr: int
    tdee: int
    daily_deficit: int
    daily_calorie_target: int
    total_deficit: int
    is_safe: bool
    feasibility: Feasibility
    feasible_days: Optional[int] = None
    weight_kg: float
    target_loss_kg: float
    target_days: int

    @property
    def is_feasible(self) -> bool:
        return self.feasibility != "infeasible"


class NonPositiveInput(_Record):
    kind: Literal["non_positive_input"] = "non_positive_input"
    field_names: List[str] = Field(default_factory=list)


class UnsafeTargetLoss(_Record):
    kind: Literal["unsafe_target_loss"] = "unsafe_target_loss"
    limit_kg: float


ValidationFailure = Annotated[
    Union[NonPositiveInput, UnsafeTargetLoss],
    Field(discriminator="kind"),
]

PlanOutcome = Annotated[
    Union[PlanResult, NonPositiveInput, UnsafeTargetLoss],
    Field(discriminator="kind"),
]
