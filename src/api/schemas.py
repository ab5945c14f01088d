"""Request/response models for the FastAPI layer."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system", "tool"]
    content: str | list[Any]
    id: str | None = None


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1)
    selected_agent_id: str | None = None
    mode: Literal["route", "plan"] = "route"


class ChatResponse(BaseModel):
    events: list[dict[str, Any]]


class AgentInfo(BaseModel):
    id: str
    name: str
    description: str
    capabilities: list[str]


class AgentsResponse(BaseModel):
    agents: list[AgentInfo]


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    message: str
