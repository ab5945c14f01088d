"""Agent factory and construction of the per-request orchestration context."""

import logging
from typing import Any, Optional, Sequence

from ..core.config import AgentConfig
from ..core.errors import ClassificationError
from ..core.events import EventSink
from ..core.generation import GenerationCapability
from ..core.providers import ModelProvider
from ..core.types import Message
from ..tools import create_tool_registry
from ..tools.documents import DocumentStore
from ..tools.registry import ToolRegistry
from .base import Agent, AgentContext, SpecializedAgent
from .catalog import AGENT_CATALOG, ROUTER_AGENT_ID, build_agent_spec
from .router import RouterAgent

logger = logging.getLogger(__name__)


class AgentFactory:
    """Builds every catalogue agent once, then a router over them."""

    def __init__(
        self,
        context: AgentContext,
        config: AgentConfig,
        tools: ToolRegistry,
        generation: Optional[GenerationCapability] = None,
    ):
        self.context = context
        self.config = config
        self.tools = tools
        self._agents: dict[str, Agent] = {}
        for agent_id in AGENT_CATALOG:
            self._agents[agent_id] = SpecializedAgent(build_agent_spec(agent_id, context), context, tools)
            logger.debug("Built agent %s", agent_id)
        self._router = RouterAgent(context, list(self._agents.values()), generation=generation)
        self._agents[ROUTER_AGENT_ID] = self._router

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def require_agent(self, agent_id: str) -> Agent:
        agent = self._agents.get(agent_id)
        if agent is None:
            raise ClassificationError(f"Unknown agent: {agent_id}")
        return agent

    def get_router_agent(self) -> RouterAgent:
        return self._router

    def get_all_agents(self) -> list[Agent]:
        return list(self._agents.values())

    def get_specialized_agents(self) -> list[Agent]:
        return [agent for agent_id, agent in self._agents.items() if agent_id != ROUTER_AGENT_ID]

    async def process_with_router(self, messages: Sequence[Message]) -> None:
        await self._router.route(messages)

    def update_context(self, session: Optional[Any] = None, event_sink: Optional[EventSink] = None) -> None:
        if session is not None:
            self.context.session = session
        if event_sink is not None:
            self.context.event_sink = event_sink
        for agent in self.get_all_agents():
            agent.update_context(session=session, event_sink=event_sink)


def build_orchestration_context(
    config: AgentConfig,
    *,
    event_sink: Optional[EventSink] = None,
    session: Optional[Any] = None,
    provider: Optional[ModelProvider] = None,
    generation: Optional[GenerationCapability] = None,
    tools: Optional[ToolRegistry] = None,
) -> AgentContext:
    """Wire provider, tools and agents for one request; nothing is shared between calls."""
    provider = provider or ModelProvider(config)
    generation = generation or GenerationCapability(provider)
    documents = DocumentStore()
    context = AgentContext(
        config=config,
        event_sink=event_sink,
        session=session,
        provider=provider,
        documents=documents,
    )
    context.tools = tools or create_tool_registry(
        config,
        generation=generation,
        session=session,
        event_sink=event_sink,
        documents=documents,
    )
    context.factory = AgentFactory(context, config, context.tools, generation=generation)
    return context
