"""Reflection service."""

from .service import ReflectorAI

__all__ = ["ReflectorAI"]
