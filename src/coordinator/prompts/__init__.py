"""Prompt builders for planner, reflection, router and agent LLM calls."""

from .planner import build_planner_prompt
from .reflection import build_reflection_prompt
from .router import build_router_system_prompt, build_router_user_prompt

__all__ = [
    "build_planner_prompt",
    "build_reflection_prompt",
    "build_router_system_prompt",
    "build_router_user_prompt",
]
