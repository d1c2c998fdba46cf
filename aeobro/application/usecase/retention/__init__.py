"""Retention use cases."""

from .apply_plan_status import (
    ApplyPlanStatusRequest,
    ApplyPlanStatusResponse,
    ApplyPlanStatusUseCase,
)
from .sweep_retention import (
    SweepRetentionRequest,
    SweepRetentionResponse,
    SweepRetentionUseCase,
)

__all__ = [
    "ApplyPlanStatusRequest",
    "ApplyPlanStatusResponse",
    "ApplyPlanStatusUseCase",
    "SweepRetentionRequest",
    "SweepRetentionResponse",
    "SweepRetentionUseCase",
]
