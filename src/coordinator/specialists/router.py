"""Router agent that classifies a conversation onto one specialized agent."""

import logging
from dataclasses import replace
from typing import Any, Literal, Optional, Sequence

from langsmith.run_helpers import traceable
from pydantic import BaseModel, Field, create_model

from ..core.errors import ClassificationError
from ..core.events import EventSink, build_assistant_message_event, build_status_event
from ..core.generation import GenerationCapability
from ..core.providers import CHAT_MODEL, ModelProvider
from ..core.types import AgentMetadata, Message
from ..prompts.router import build_router_system_prompt, build_router_user_prompt
from .base import Agent, AgentContext, message_text
from .catalog import CHAT_AGENT_ID, ROUTER_METADATA

logger = logging.getLogger(__name__)

NO_AGENT_APOLOGY = "I apologize, but I'm currently unable to process your request. Please try again later."


def build_routing_schema(agent_ids: Sequence[str]) -> type[BaseModel]:
    """Routing decision model whose ``selected_agent_id`` is limited to ``agent_ids``."""
    if not agent_ids:
        raise ClassificationError("No agents available for routing")
    return create_model(
        "RoutingDecision",
        selected_agent_id=(Literal[tuple(agent_ids)], ...),
        confidence=(float, Field(ge=0, le=1)),
        reasoning=(str, Field(description="The reasoning behind the agent selection")),
    )


class RouterAgent:
    def __init__(
        self,
        context: AgentContext,
        agents: Sequence[Agent],
        generation: Optional[GenerationCapability] = None,
    ):
        self.context = context
        self.agents: dict[str, Agent] = {agent.get_id(): agent for agent in agents}
        self.generation = generation or GenerationCapability(context.provider or ModelProvider(context.config))
        self.selected_agent: Optional[Agent] = None

    def get_id(self) -> str:
        return ROUTER_METADATA.id

    def get_name(self) -> str:
        return ROUTER_METADATA.name

    def get_description(self) -> str:
        return ROUTER_METADATA.description

    def get_capabilities(self) -> list[str]:
        return list(ROUTER_METADATA.capabilities)

    def metadata(self) -> AgentMetadata:
        return ROUTER_METADATA

    def update_context(self, session: Optional[Any] = None, event_sink: Optional[EventSink] = None) -> None:
        updates: dict[str, Any] = {}
        if session is not None:
            updates["session"] = session
        if event_sink is not None:
            updates["event_sink"] = event_sink
        if updates:
            self.context = replace(self.context, **updates)

    def system_prompt(self) -> str:
        return build_router_system_prompt([agent.metadata() for agent in self.agents.values()])

    async def process_messages(self, messages: Sequence[Message]) -> None:
        await self.route(messages)

    @traceable(name="router.route", run_type="chain")
    async def route(self, messages: Sequence[Message]) -> None:
        sink = self._event_sink()
        self.selected_agent = None
        sink.write_data(
            build_status_event("Analyzing your request to determine the best specialized agent...", thinking=True)
        )
        try:
            agent, confidence = await self.classify(messages)
        except ClassificationError as exc:
            logger.warning("Routing failed, falling back: %s", exc)
            await self._fallback(messages)
            return

        self.selected_agent = agent
        sink.write_data(
            build_status_event(
                f"I've determined that the {agent.get_name()} is best suited to help you with this request "
                f"(confidence: {round(confidence * 100)}%).",
                thinking=True,
            )
        )
        await agent.process_messages(messages)

    async def classify(self, messages: Sequence[Message]) -> tuple[Agent, float]:
        """Pick an agent from the last message only; every failure is a ClassificationError."""
        sink = self._event_sink()
        user_text = message_text(messages[-1].content) if messages else ""
        schema = build_routing_schema(list(self.agents))
        try:
            result = await self.generation.generate_structured(
                model=CHAT_MODEL,
                schema=schema,
                system_prompt=self.system_prompt(),
                prompt=build_router_user_prompt(user_text),
                temperature=self.context.config.router_temperature,
            )
        except Exception as exc:
            raise ClassificationError(f"Routing generation failed: {exc}") from exc

        decision = result.object
        logger.info("Routing decision: %s (confidence %.2f)", decision.selected_agent_id, decision.confidence)
        sink.write_data(build_status_event(f"Chosen agent: {decision.selected_agent_id}", thinking=True))
        sink.write_data(build_status_event(str(decision.reasoning), thinking=True))

        agent = self.agents.get(decision.selected_agent_id)
        if agent is None:
            raise ClassificationError(f"Unknown agent selected: {decision.selected_agent_id}")
        return agent, float(decision.confidence)

    def fallback_agent(self) -> Optional[Agent]:
        if CHAT_AGENT_ID in self.agents:
            return self.agents[CHAT_AGENT_ID]
        return next(iter(self.agents.values()), None)

    async def _fallback(self, messages: Sequence[Message]) -> None:
        sink = self._event_sink()
        sink.write_data(
            build_status_event(
                "I couldn't determine the best agent for your request. Falling back to general chat...",
                thinking=True,
            )
        )
        agent = self.fallback_agent()
        if agent is None:
            sink.write_data(build_assistant_message_event(NO_AGENT_APOLOGY))
            return
        self.selected_agent = agent
        await agent.process_messages(messages)

    def _event_sink(self) -> EventSink:
        if self.context.event_sink is None:
            raise ValueError("Event sink is required for routing messages")
        return self.context.event_sink
