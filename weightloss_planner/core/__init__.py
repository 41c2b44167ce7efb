"""Core package initialization."""

from .logic import compute
from .schema import (
    ACTIVITY_LEVELS,
    NonPositiveInput,
    PlanInput,
    PlanResult,
    UnsafeTargetLoss,
)

__all__ = [
    "compute",
    "ACTIVITY_LEVELS",
    "NonPositiveInput",
    "PlanInput",
    "PlanResult",
    "UnsafeTargetLoss",
]
