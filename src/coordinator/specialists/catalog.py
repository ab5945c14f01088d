"""Closed catalogue of specialized agents keyed by agent id."""

from typing import Callable

from ..core.providers import ARTIFACT_MODEL, CHAT_MODEL
from ..core.types import AgentMetadata
from ..prompts.agents import CHAT_SYSTEM_PROMPT, DOCUMENT_SYSTEM_PROMPT, build_research_system_prompt
from ..tools.documents import CREATE_DOCUMENT_TOOL_NAME, UPDATE_DOCUMENT_TOOL_NAME
from ..tools.search import SEARCH_TOOL_NAME
from ..tools.think import THINK_TOOL_NAME
from .base import AgentContext, AgentSpec

CHAT_AGENT_ID = "chat"
RESEARCH_AGENT_ID = "research"
DOCUMENT_AGENT_ID = "document"
ROUTER_AGENT_ID = "router"

ROUTER_METADATA = AgentMetadata(
    id=ROUTER_AGENT_ID,
    name="Router Agent",
    description="Determines which specialized agent to handle the request",
    capabilities=["agent-routing", "task-classification"],
)


def chat_agent_spec(context: AgentContext) -> AgentSpec:
    return AgentSpec(
        id=CHAT_AGENT_ID,
        name="Chat Agent",
        description="Handles general conversation and basic questions",
        model=CHAT_MODEL,
        system_prompt=CHAT_SYSTEM_PROMPT,
        tool_names=(THINK_TOOL_NAME,),
        capabilities=("general-conversation", "basic-qa", "creative-content", "friendly-chat"),
        max_steps=3,
    )


def research_agent_spec(context: AgentContext) -> AgentSpec:
    tool_names = (THINK_TOOL_NAME, SEARCH_TOOL_NAME) if context.session is not None else (THINK_TOOL_NAME,)
    return AgentSpec(
        id=RESEARCH_AGENT_ID,
        name="Research Agent",
        description="Finds current information and answers research questions",
        model=CHAT_MODEL,
        system_prompt=build_research_system_prompt(),
        tool_names=tool_names,
        capabilities=(
            "web-search",
            "information-gathering",
            "fact-checking",
            "current-events",
            "research-synthesis",
        ),
    )


def document_agent_spec(context: AgentContext) -> AgentSpec:
    if context.session is not None:
        tool_names = (THINK_TOOL_NAME, CREATE_DOCUMENT_TOOL_NAME, UPDATE_DOCUMENT_TOOL_NAME)
    else:
        tool_names = (THINK_TOOL_NAME,)
    return AgentSpec(
        id=DOCUMENT_AGENT_ID,
        name="Document Agent",
        description="Creates and edits documents, emails, and content",
        model=ARTIFACT_MODEL,
        system_prompt=DOCUMENT_SYSTEM_PROMPT,
        tool_names=tool_names,
        capabilities=(
            "content-creation",
            "document-editing",
            "email-drafting",
            "code-generation",
            "creative-writing",
        ),
        max_steps=5,
    )


AGENT_CATALOG: dict[str, Callable[[AgentContext], AgentSpec]] = {
    CHAT_AGENT_ID: chat_agent_spec,
    RESEARCH_AGENT_ID: research_agent_spec,
    DOCUMENT_AGENT_ID: document_agent_spec,
}


def build_agent_spec(agent_id: str, context: AgentContext) -> AgentSpec:
    """Raises ``KeyError`` for ids outside the catalogue."""
    return AGENT_CATALOG[agent_id](context)
