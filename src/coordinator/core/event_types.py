"""TypedDict payload shapes for records written to the event sink."""

from typing import Any, Literal, NotRequired, TypedDict


class StatusEvent(TypedDict):
    text: str
    type: NotRequired[Literal["thinking"]]


class PlanEvent(TypedDict):
    type: Literal["agent-plan"]
    content: str


class AssistantMessagePayload(TypedDict):
    id: str
    role: Literal["assistant"]
    parts: list[str]


class AssistantMessageEvent(TypedDict):
    type: Literal["assistant_message"]
    message: AssistantMessagePayload


class ToolEvent(TypedDict):
    type: str
    content: Any


class DocumentEvent(TypedDict):
    type: Literal["document"]
    id: str
    title: str
    content: str
