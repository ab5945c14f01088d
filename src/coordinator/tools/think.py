"""Scratchpad tool letting an agent organise its reasoning between calls."""

from typing import Any, Mapping

from ..core.types import ToolMetadata

THINK_TOOL_NAME = "think"

THINK_METADATA = ToolMetadata(
    name=THINK_TOOL_NAME,
    description=(
        "Use this tool to think through a problem step by step. It does not fetch new information "
        "or change anything; it only records the thought."
    ),
    capabilities=["reasoning", "planning"],
    parameters={
        "type": "object",
        "properties": {"thought": {"type": "string", "description": "The thought to record."}},
        "required": ["thought"],
    },
)


async def think(parameters: Mapping[str, Any]) -> dict[str, str]:
    return {"thought": str(parameters.get("thought", "")).strip()}
