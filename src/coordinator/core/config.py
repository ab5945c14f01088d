"""Environment-backed configuration for agent orchestration."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentConfig(BaseSettings):
    """Environment-backed configuration for agent orchestration.

    Config usage map (selected):
    - chat/reasoning/artifact/fast model names: core/providers.py
    - planner_temperature: planner/service.py
    - reflection_temperature: reflection/service.py
    - router_temperature: specialists/router.py
    - agent_temperature/default_max_steps: specialists/base.py
    - short_term_memory_size: memory/store.py
    - tavily_*/search_*: tools/search.py
    - log_level: runtime.py
    - langsmith_*: tracing via traceable decorators
    """
    model_config = SettingsConfigDict(extra="ignore", case_sensitive=False, populate_by_name=True)

    # Model knobs
    chat_model: str = Field(default="gpt-4o", alias="AGENT_CHAT_MODEL")
    reasoning_model: str = Field(default="gpt-4o", alias="AGENT_REASONING_MODEL")
    artifact_model: str = Field(default="gpt-4o", alias="AGENT_ARTIFACT_MODEL")
    fast_model: str = Field(default="gpt-4o-mini", alias="AGENT_FAST_MODEL")
    planner_temperature: float = Field(default=0.0, alias="AGENT_PLANNER_TEMPERATURE")
    reflection_temperature: float = Field(default=0.0, alias="AGENT_REFLECTION_TEMPERATURE")
    router_temperature: float = Field(default=0.1, alias="AGENT_ROUTER_TEMPERATURE")
    agent_temperature: float = Field(default=0.3, alias="AGENT_TEMPERATURE")
    request_timeout_seconds: int = Field(default=60, alias="AGENT_REQUEST_TIMEOUT_SECONDS")

    # Behavior
    default_max_steps: int = Field(default=5, alias="AGENT_DEFAULT_MAX_STEPS")
    short_term_memory_size: int = Field(default=10, alias="AGENT_SHORT_TERM_MEMORY_SIZE")

    # Tools
    tavily_api_key: Optional[str] = Field(default=None, alias="TAVILY_API_KEY")
    search_max_results: int = Field(default=10, alias="AGENT_SEARCH_MAX_RESULTS")
    search_timeout_seconds: int = Field(default=20, alias="AGENT_SEARCH_TIMEOUT_SECONDS")

    # Observability
    log_level: str = Field(default="INFO", alias="AGENT_LOG_LEVEL")
    langsmith_tracing: bool = Field(default=False, alias="LANGCHAIN_TRACING_V2")
    langsmith_project: str = Field(default="agent-coordinator", alias="LANGCHAIN_PROJECT")

    @field_validator(
        "default_max_steps",
        "short_term_memory_size",
        "request_timeout_seconds",
        "search_max_results",
        "search_timeout_seconds",
    )
    @classmethod
    def _strictly_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be > 0")
        return value

    @field_validator(
        "planner_temperature",
        "reflection_temperature",
        "router_temperature",
        "agent_temperature",
    )
    @classmethod
    def _valid_temperature(cls, value: float) -> float:
        if value < 0 or value > 2:
            raise ValueError("must be in [0, 2]")
        return value

    @field_validator("log_level")
    @classmethod
    def _valid_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("must be a standard logging level name")
        return normalized

    @classmethod
    def from_env(cls) -> "AgentConfig":
        return cls()
