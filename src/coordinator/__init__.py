from .core.config import AgentConfig
from .core.events import ListEventSink, LoggingEventSink
from .core.manager import Manager
from .core.types import AgentState, ExecutionResult, Message, Plan, PlanStep, Reflection
from .memory.store import AgentMemory
from .planner.service import PlannerAI
from .reflection.service import ReflectorAI
from .specialists.factory import AgentFactory, build_orchestration_context
from .specialists.service import AgentService
from .tools.registry import ToolRegistry

__all__ = [
    "AgentConfig",
    "AgentFactory",
    "AgentMemory",
    "AgentService",
    "AgentState",
    "ExecutionResult",
    "ListEventSink",
    "LoggingEventSink",
    "Manager",
    "Message",
    "Plan",
    "PlanStep",
    "PlannerAI",
    "Reflection",
    "ReflectorAI",
    "ToolRegistry",
    "build_orchestration_context",
]
