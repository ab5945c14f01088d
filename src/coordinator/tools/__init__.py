"""Tool registry and built-in tools.

Re-exports here provide a shorter import path; __all__ documents the public API.
"""

from typing import Any, Optional

from ..core.config import AgentConfig
from ..core.events import EventSink
from ..core.generation import GenerationCapability
from .documents import (
    CREATE_DOCUMENT_METADATA,
    CREATE_DOCUMENT_TOOL_NAME,
    UPDATE_DOCUMENT_METADATA,
    UPDATE_DOCUMENT_TOOL_NAME,
    DocumentStore,
    make_document_tools,
)
from .registry import Tool, ToolRegistry
from .search import SEARCH_METADATA, SEARCH_TOOL_NAME, make_search_tool
from .think import THINK_METADATA, THINK_TOOL_NAME, think


def create_tool_registry(
    config: AgentConfig,
    *,
    generation: GenerationCapability,
    session: Optional[Any] = None,
    event_sink: Optional[EventSink] = None,
    documents: Optional[DocumentStore] = None,
) -> ToolRegistry:
    """Register built-in tools; session-dependent tools only when a session is present."""
    registry = ToolRegistry()
    registry.register_tool(THINK_TOOL_NAME, think, THINK_METADATA)
    if session is None:
        return registry

    registry.register_tool(SEARCH_TOOL_NAME, make_search_tool(config, event_sink), SEARCH_METADATA)
    create_document, update_document = make_document_tools(
        store=documents if documents is not None else DocumentStore(),
        generation=generation,
        event_sink=event_sink,
        temperature=config.agent_temperature,
    )
    registry.register_tool(CREATE_DOCUMENT_TOOL_NAME, create_document, CREATE_DOCUMENT_METADATA)
    registry.register_tool(UPDATE_DOCUMENT_TOOL_NAME, update_document, UPDATE_DOCUMENT_METADATA)
    return registry


__all__ = [
    "CREATE_DOCUMENT_TOOL_NAME",
    "DocumentStore",
    "SEARCH_TOOL_NAME",
    "THINK_TOOL_NAME",
    "Tool",
    "ToolRegistry",
    "UPDATE_DOCUMENT_TOOL_NAME",
    "create_tool_registry",
]
