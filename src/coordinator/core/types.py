"""Shared dataclasses and enums for planner-manager-agent contracts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Optional, Union


MessageRole = Literal["user", "assistant", "system", "tool"]


class AgentState(str, Enum):
    IDLE = "idle"
    PLANNING = "planning"
    EXECUTING = "executing"
    REFLECTING = "reflecting"
    # Reserved for interactive clarification; no transition enters it yet.
    WAITING_FOR_INPUT = "waiting-for-input"


@dataclass
class Message:
    role: MessageRole
    content: Union[str, list[Any]]
    id: Optional[str] = None


@dataclass(frozen=True)
class PlanStep:
    id: str
    description: str
    tool_name: Optional[str] = None
    tool_parameters: dict[str, Any] = field(default_factory=dict)
    depends_on: list[str] = field(default_factory=list)
    expected_outcome: str = ""


@dataclass(frozen=True)
class Plan:
    id: str
    goal: str
    reasoning: str
    steps: list[PlanStep]


@dataclass
class ExecutionResult:
    success: bool
    step_results: dict[str, Any]
    error: Optional[str] = None


@dataclass
class Reflection:
    success: bool
    insights: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    feedback: str = ""


@dataclass(frozen=True)
class AgentMetadata:
    id: str
    name: str
    description: str
    capabilities: list[str]


@dataclass
class ToolMetadata:
    name: str
    description: str
    capabilities: list[str] = field(default_factory=list)
    parameters: dict[str, Any] = field(default_factory=dict)
    requires_auth: Optional[bool] = None
    is_expensive: Optional[bool] = None


def is_error_entry(entry: Any) -> bool:
    return isinstance(entry, dict) and "error" in entry
