"""Planner service."""

from .service import FALLBACK_STEP_ID, PlannerAI

__all__ = ["FALLBACK_STEP_ID", "PlannerAI"]
