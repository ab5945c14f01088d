"""Agent service facade used by the CLI and the HTTP layer."""

import logging
from typing import Optional, Sequence

from langsmith.run_helpers import traceable

from ..core.events import EventSink, build_assistant_message_event, build_status_event
from ..core.generation import GenerationCapability
from ..core.manager import Manager
from ..core.providers import ModelProvider
from ..core.types import Message
from ..memory.store import AgentMemory, MemoryStore
from ..planner.service import PlannerAI
from ..reflection.service import ReflectorAI
from ..tools import create_tool_registry
from .base import Agent, AgentContext, message_text
from .factory import AgentFactory

logger = logging.getLogger(__name__)

SERVICE_APOLOGY = "I apologize, but I encountered an error while processing your request. Please try again later."


class AgentService:
    """Dispatches a conversation to a pre-selected agent or through the router."""

    def __init__(
        self,
        context: AgentContext,
        selected_agent_id: Optional[str] = None,
        memory: Optional[MemoryStore] = None,
    ):
        self.context = context
        self.factory = context.factory or self._build_factory(context)
        self.memory = memory if memory is not None else AgentMemory(context.config.short_term_memory_size)
        self.current_agent: Optional[Agent] = None
        if selected_agent_id:
            self.current_agent = self.factory.get_agent(selected_agent_id)
            if self.current_agent is None:
                logger.warning("Selected agent %s is not available; routing instead", selected_agent_id)

    @staticmethod
    def _build_factory(context: AgentContext) -> AgentFactory:
        provider = context.provider or ModelProvider(context.config)
        generation = GenerationCapability(provider)
        if context.tools is None:
            context.tools = create_tool_registry(
                context.config,
                generation=generation,
                session=context.session,
                event_sink=context.event_sink,
                documents=context.documents,
            )
        context.factory = AgentFactory(context, context.config, context.tools, generation=generation)
        return context.factory

    def _event_sink(self) -> EventSink:
        if self.context.event_sink is None:
            raise ValueError("Event sink is required for processing messages")
        return self.context.event_sink

    @traceable(name="service.process_messages", run_type="chain")
    async def process_messages(self, messages: Sequence[Message]) -> None:
        sink = self._event_sink()
        try:
            if self.current_agent is not None:
                logger.info("Using pre-selected agent: %s", self.current_agent.get_name())
                sink.write_data(
                    build_status_event(f"Using the {self.current_agent.get_name()} for your request...", thinking=True)
                )
                await self.current_agent.process_messages(messages)
                return
            await self.factory.process_with_router(messages)
        except Exception as exc:
            logger.error("Error in AgentService: %s", exc, exc_info=exc)
            sink.write_data(build_assistant_message_event(SERVICE_APOLOGY))

    async def process_with_plan(self, messages: Sequence[Message]) -> Manager:
        """Run the plan-execute-reflect pipeline on the last message's text."""
        sink = self._event_sink()
        generation = GenerationCapability(self.context.provider or ModelProvider(self.context.config))
        manager = Manager(
            self.context.config,
            tools=self.factory.tools,
            event_sink=sink,
            planner=PlannerAI(self.context.config, generation=generation, tools=self.factory.tools),
            reflector=ReflectorAI(self.context.config, generation=generation),
            memory=self.memory,
        )
        request = message_text(messages[-1].content) if messages else ""
        await manager.process_request(request)
        return manager

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self.factory.get_agent(agent_id)

    def set_current_agent(self, agent_id: str) -> bool:
        agent = self.factory.get_agent(agent_id)
        if agent is None:
            return False
        self.current_agent = agent
        return True

    def get_available_agents(self) -> list[Agent]:
        return self.factory.get_specialized_agents()
