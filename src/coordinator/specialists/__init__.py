"""Specialized agents, routing and the agent service facade.

Re-exports here provide a shorter import path; __all__ documents the public API.
"""

from .base import AgentContext, AgentSpec, SpecializedAgent
from .catalog import AGENT_CATALOG, ROUTER_AGENT_ID
from .factory import AgentFactory, build_orchestration_context
from .router import RouterAgent, build_routing_schema
from .service import AgentService

__all__ = [
    "AGENT_CATALOG",
    "AgentContext",
    "AgentFactory",
    "AgentService",
    "AgentSpec",
    "ROUTER_AGENT_ID",
    "RouterAgent",
    "SpecializedAgent",
    "build_orchestration_context",
    "build_routing_schema",
]
