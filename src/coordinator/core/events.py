"""Event sink implementations and record builders for the UI channel."""

import json
import logging
import uuid
from dataclasses import asdict
from enum import Enum
from typing import Any, Mapping, Optional, Protocol

from .event_types import AssistantMessageEvent, PlanEvent, StatusEvent
from .types import Plan

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def write_data(self, record: Mapping[str, Any]) -> None: ...


class ListEventSink:
    """Append-only in-memory sink; the API and tests read ``records`` back."""

    def __init__(self):
        self.records: list[dict[str, Any]] = []

    def write_data(self, record: Mapping[str, Any]) -> None:
        self.records.append(dict(record))

    def texts(self) -> list[str]:
        return [record["text"] for record in self.records if "text" in record]

    def of_type(self, record_type: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("type") == record_type]


class LoggingEventSink:
    def __init__(self, inner: Optional[EventSink] = None, level: int = logging.DEBUG):
        self.inner = inner
        self.level = level

    def write_data(self, record: Mapping[str, Any]) -> None:
        logger.log(self.level, "event %s", json.dumps(record, default=str))
        if self.inner is not None:
            self.inner.write_data(record)


def build_status_event(text: str, *, thinking: bool = False) -> StatusEvent:
    payload: StatusEvent = {"text": text}
    if thinking:
        payload["type"] = "thinking"
    return payload


def build_plan_event(plan: Plan) -> PlanEvent:
    return {
        "type": "agent-plan",
        "content": json.dumps(plan_to_wire(plan)),
    }


def build_assistant_message_event(text: str, message_id: Optional[str] = None) -> AssistantMessageEvent:
    return {
        "type": "assistant_message",
        "message": {
            "id": message_id or str(uuid.uuid4()),
            "role": "assistant",
            "parts": [text],
        },
    }


def plan_to_wire(plan: Plan) -> dict[str, Any]:
    """Render a plan with the camelCase keys the UI layer consumes."""
    return {
        "id": plan.id,
        "goal": plan.goal,
        "reasoning": plan.reasoning,
        "steps": [
            {
                "id": step.id,
                "description": step.description,
                "toolName": step.tool_name,
                "toolParameters": step.tool_parameters,
                "dependsOn": list(step.depends_on),
                "expectedOutcome": step.expected_outcome,
            }
            for step in plan.steps
        ],
    }


def to_jsonable(value: Any) -> Any:
    """``json.dumps`` default hook for dataclasses, enums and sets."""
    if hasattr(value, "__dataclass_fields__"):
        return asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)
