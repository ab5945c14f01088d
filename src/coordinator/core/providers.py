"""Logical model ids mapped onto configured LangChain chat models."""

from typing import Optional

from .config import AgentConfig

CHAT_MODEL = "chat-model"
REASONING_MODEL = "chat-model-reasoning"
ARTIFACT_MODEL = "artifact-model"
FAST_MODEL = "fast-model"


class ModelProvider:
    """Lazily builds and caches one chat model per (model id, temperature)."""

    def __init__(self, config: AgentConfig):
        self.config = config
        self._models: dict[tuple[str, Optional[float]], object] = {}

    def model_name(self, model_id: str) -> str:
        table = {
            CHAT_MODEL: self.config.chat_model,
            REASONING_MODEL: self.config.reasoning_model,
            ARTIFACT_MODEL: self.config.artifact_model,
            FAST_MODEL: self.config.fast_model,
        }
        api_model_name = table.get(model_id)
        if not api_model_name:
            raise ValueError(f"Unsupported model: {model_id}")
        return api_model_name

    def language_model(self, model_id: str, temperature: Optional[float] = None):
        key = (model_id, temperature)
        if key in self._models:
            return self._models[key]

        from langchain_openai import ChatOpenAI

        kwargs = {
            "model": self.model_name(model_id),
            "timeout": self.config.request_timeout_seconds,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        self._models[key] = ChatOpenAI(**kwargs)
        return self._models[key]
