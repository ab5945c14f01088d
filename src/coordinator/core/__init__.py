"""Core orchestration contracts and manager state machine."""

from .config import AgentConfig
from .errors import (
    ClassificationError,
    CoordinatorError,
    OrchestrationError,
    ParseError,
    ToolExecutionError,
    ToolNotFoundError,
    ValidationError,
)
from .events import EventSink, ListEventSink, LoggingEventSink
from .manager import Manager
from .types import (
    AgentMetadata,
    AgentState,
    ExecutionResult,
    Message,
    Plan,
    PlanStep,
    Reflection,
    ToolMetadata,
)

__all__ = [
    "AgentConfig",
    "AgentMetadata",
    "AgentState",
    "ClassificationError",
    "CoordinatorError",
    "EventSink",
    "ExecutionResult",
    "ListEventSink",
    "LoggingEventSink",
    "Manager",
    "Message",
    "OrchestrationError",
    "ParseError",
    "Plan",
    "PlanStep",
    "Reflection",
    "ToolExecutionError",
    "ToolMetadata",
    "ToolNotFoundError",
    "ValidationError",
]
