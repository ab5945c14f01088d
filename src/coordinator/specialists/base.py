"""Agent contract, dependency bundle and the tool-calling specialized agent."""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Protocol, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langsmith.run_helpers import traceable

from ..core.config import AgentConfig
from ..core.events import EventSink, build_assistant_message_event, build_status_event, to_jsonable
from ..core.generation import response_text
from ..core.providers import ModelProvider
from ..core.types import AgentMetadata, Message
from ..tools.documents import DocumentStore
from ..tools.registry import Tool, ToolRegistry

logger = logging.getLogger(__name__)

AGENT_APOLOGY = "I'm sorry, but I encountered an error while processing your request. Please try again later."


class Agent(Protocol):
    def get_id(self) -> str: ...

    def get_name(self) -> str: ...

    def get_description(self) -> str: ...

    def get_capabilities(self) -> list[str]: ...

    def metadata(self) -> AgentMetadata: ...

    async def process_messages(self, messages: Sequence[Message]) -> None: ...


@dataclass
class AgentContext:
    """Explicit per-request dependency bundle passed to every agent.

    ``session`` is opaque; only its presence is consulted.
    """

    config: AgentConfig
    event_sink: Optional[EventSink] = None
    session: Optional[Any] = None
    tools: Optional[ToolRegistry] = None
    provider: Optional[ModelProvider] = None
    documents: DocumentStore = field(default_factory=DocumentStore)
    factory: Optional[Any] = None


@dataclass(frozen=True)
class AgentSpec:
    id: str
    name: str
    description: str
    model: str
    system_prompt: str
    tool_names: tuple[str, ...] = ()
    capabilities: tuple[str, ...] = ()
    max_steps: Optional[int] = None


def message_text(content: Any) -> str:
    """Plain text of a message body; text parts of a parts list are space-joined."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = []
        for part in content:
            if isinstance(part, str):
                texts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                texts.append(str(part.get("text", "")))
        return " ".join(texts)
    return ""


def to_chat_messages(messages: Sequence[Message]) -> list[BaseMessage]:
    converted: list[BaseMessage] = []
    for message in messages:
        text = message_text(message.content)
        if message.role == "user":
            converted.append(HumanMessage(content=text))
        elif message.role == "assistant":
            converted.append(AIMessage(content=text))
        elif message.role == "system":
            converted.append(SystemMessage(content=text))
        # Tool-role history carries no tool_call_id and is not replayed.
    return converted


class SpecializedAgent:
    """One catalogue agent: a system prompt, a model and a tool subset."""

    def __init__(self, spec: AgentSpec, context: AgentContext, tools: ToolRegistry):
        self.spec = spec
        self.context = context
        self.tools = tools
        self.provider = context.provider or ModelProvider(context.config)

    def get_id(self) -> str:
        return self.spec.id

    def get_name(self) -> str:
        return self.spec.name

    def get_description(self) -> str:
        return self.spec.description

    def get_capabilities(self) -> list[str]:
        return list(self.spec.capabilities)

    def get_active_tool_names(self) -> list[str]:
        return [name for name in self.spec.tool_names if name in self.tools]

    def get_tools(self) -> dict[str, Tool]:
        return {name: self.tools.require_tool(name) for name in self.get_active_tool_names()}

    def metadata(self) -> AgentMetadata:
        return AgentMetadata(
            id=self.get_id(),
            name=self.get_name(),
            description=self.get_description(),
            capabilities=self.get_capabilities(),
        )

    def update_context(self, session: Optional[Any] = None, event_sink: Optional[EventSink] = None) -> None:
        updates: dict[str, Any] = {}
        if session is not None:
            updates["session"] = session
        if event_sink is not None:
            updates["event_sink"] = event_sink
        if updates:
            self.context = replace(self.context, **updates)

    def _event_sink(self) -> EventSink:
        if self.context.event_sink is None:
            raise ValueError("Event sink is required to process messages")
        return self.context.event_sink

    @traceable(name="agent.process_messages", run_type="chain")
    async def process_messages(self, messages: Sequence[Message]) -> None:
        sink = self._event_sink()
        sink.write_data(build_status_event(f"Now processing your request with the {self.get_name()}...", thinking=True))
        try:
            answer = await self._run_tool_loop(messages)
        except Exception as exc:
            logger.error("Error in %s: %s", self.get_id(), exc, exc_info=exc)
            sink.write_data(build_assistant_message_event(AGENT_APOLOGY))
            return
        sink.write_data(build_assistant_message_event(answer))

    async def _run_tool_loop(self, messages: Sequence[Message]) -> str:
        model = self.provider.language_model(self.spec.model, self.context.config.agent_temperature)
        schemas = self.tools.tool_schemas(self.get_active_tool_names())
        if schemas:
            model = model.bind_tools(schemas)

        conversation: list[BaseMessage] = [SystemMessage(content=self.spec.system_prompt)]
        conversation.extend(to_chat_messages(messages))
        max_steps = self.spec.max_steps or self.context.config.default_max_steps

        response = None
        for step in range(max_steps):
            response = await model.ainvoke(conversation)
            conversation.append(response)
            tool_calls = getattr(response, "tool_calls", None) or []
            if not tool_calls:
                break
            logger.debug("%s step %d requested %d tool call(s)", self.get_id(), step + 1, len(tool_calls))
            for call in tool_calls:
                conversation.append(await self._execute_tool_call(call))
        return response_text(response) if response is not None else ""

    async def _execute_tool_call(self, call: dict[str, Any]) -> ToolMessage:
        name = call.get("name", "")
        if name not in self.get_active_tool_names():
            payload: Any = {"error": f"Tool not found: {name}"}
        else:
            try:
                payload = await self.tools.require_tool(name)(dict(call.get("args") or {}))
            except Exception as exc:
                logger.warning("Tool %s failed for %s: %s", name, self.get_id(), exc)
                payload = {"error": str(exc)}
        return ToolMessage(
            content=json.dumps(payload, default=to_jsonable),
            tool_call_id=call.get("id") or name,
            name=name,
        )
