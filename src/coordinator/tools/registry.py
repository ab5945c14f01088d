"""Tool registry mapping tool names to async callables plus capability metadata."""

import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from ..core.errors import ToolNotFoundError
from ..core.types import ToolMetadata

logger = logging.getLogger(__name__)

Tool = Callable[[Mapping[str, Any]], Awaitable[Any]]


class ToolRegistry:
    """Name-keyed registry; last registration for a name wins."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}
        self._metadata: dict[str, ToolMetadata] = {}

    def register_tool(self, name: str, tool: Tool, metadata: ToolMetadata) -> None:
        if name in self._tools:
            logger.warning("Tool '%s' is already registered. Overwriting.", name)
        self._tools[name] = tool
        self._metadata[name] = replace(metadata, name=name)
        logger.debug("Registered tool: %s", name)

    def get_tool(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def require_tool(self, name: str) -> Tool:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def get_metadata(self, name: str) -> Optional[ToolMetadata]:
        return self._metadata.get(name)

    def get_all_tools(self) -> dict[str, Tool]:
        return dict(self._tools)

    def get_tools_with_capability(self, capability: str) -> list[ToolMetadata]:
        return [metadata for metadata in self._metadata.values() if capability in metadata.capabilities]

    def get_all_metadata(self) -> list[ToolMetadata]:
        return list(self._metadata.values())

    def tool_schemas(self, names: Iterable[str]) -> list[dict[str, Any]]:
        """OpenAI function-calling schemas for the registered subset of ``names``."""
        schemas = []
        for name in names:
            metadata = self._metadata.get(name)
            if metadata is None:
                continue
            parameters = metadata.parameters or {"type": "object", "properties": {}}
            schemas.append(
                {
                    "type": "function",
                    "function": {
                        "name": metadata.name,
                        "description": metadata.description,
                        "parameters": parameters,
                    },
                }
            )
        return schemas

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
