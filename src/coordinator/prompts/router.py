"""Router prompt templates and builders."""

from typing import Sequence

from ..core.types import AgentMetadata

ROUTER_SYSTEM_PROMPT_TEMPLATE = """You are an intelligent Router Agent that determines which specialized agent is best suited to handle a user's request.

Your task is to carefully analyze the user's message and select the most appropriate agent based on their capabilities:

{agent_descriptions}

Analyze the user request and determine the single best agent for the task. Be decisive in your selection."""

ROUTER_USER_PROMPT_TEMPLATE = """User request: "{user_message}"

Determine which agent should handle this request."""


def build_router_system_prompt(agents: Sequence[AgentMetadata]) -> str:
    agent_descriptions = "\n".join(
        f'{agent.name} ("{agent.id}"): {agent.description} [capabilities: {", ".join(agent.capabilities)}]'
        for agent in agents
    )
    return ROUTER_SYSTEM_PROMPT_TEMPLATE.format(agent_descriptions=agent_descriptions)


def build_router_user_prompt(user_message: str) -> str:
    return ROUTER_USER_PROMPT_TEMPLATE.format(user_message=user_message)
