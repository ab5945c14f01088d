"""Service adapter that maps API requests to the agent orchestration layer."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from src.coordinator.core.config import AgentConfig
from src.coordinator.core.events import ListEventSink, LoggingEventSink
from src.coordinator.core.types import Message
from src.coordinator.memory.store import AgentMemory
from src.coordinator.specialists.factory import build_orchestration_context
from src.coordinator.specialists.service import AgentService

from .schemas import AgentInfo, AgentsResponse, ChatRequest, ChatResponse, HealthResponse

logger = logging.getLogger(__name__)


class AgentAPIService:
    """Thin service to keep FastAPI handlers small and testable."""

    def __init__(self, config: AgentConfig | None = None):
        load_dotenv()
        self.config = config or AgentConfig.from_env()
        self.memory = AgentMemory(self.config.short_term_memory_size)

    def health(self) -> HealthResponse:
        return HealthResponse(status="ok", message="ready")

    def agents(self) -> AgentsResponse:
        context = build_orchestration_context(self.config)
        return AgentsResponse(
            agents=[
                AgentInfo(
                    id=agent.get_id(),
                    name=agent.get_name(),
                    description=agent.get_description(),
                    capabilities=agent.get_capabilities(),
                )
                for agent in context.factory.get_specialized_agents()
            ]
        )

    async def chat(self, payload: ChatRequest, session: str | None = None) -> ChatResponse:
        sink = ListEventSink()
        context = build_orchestration_context(
            self.config,
            event_sink=LoggingEventSink(sink),
            session=session,
        )
        service = AgentService(context, selected_agent_id=payload.selected_agent_id, memory=self.memory)
        messages = [Message(role=item.role, content=item.content, id=item.id) for item in payload.messages]
        if payload.mode == "plan":
            await service.process_with_plan(messages)
        else:
            await service.process_messages(messages)
        logger.info("Chat request in %s mode produced %d events", payload.mode, len(sink.records))
        return ChatResponse(events=sink.records)
