"""Free-text and schema-constrained generation over LangChain chat models."""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel

from .providers import ModelProvider


@dataclass
class GenerationResult:
    text: str


@dataclass
class StructuredResult:
    object: Any


def response_text(response: Any) -> str:
    content = getattr(response, "content", "")
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict):
                if item.get("type") == "text":
                    parts.append(str(item.get("text", "")))
            else:
                parts.append(str(item))
        content = "\n".join(parts)
    return str(content).strip()


class GenerationCapability:
    """Fallible, latency-bearing model calls; no retry is layered on top."""

    def __init__(self, provider: ModelProvider):
        self.provider = provider

    async def generate(self, prompt: Any, *, model: str, temperature: Optional[float] = None) -> GenerationResult:
        chat_model = self.provider.language_model(model, temperature)
        response = await chat_model.ainvoke(prompt)
        return GenerationResult(text=response_text(response))

    async def generate_structured(
        self,
        *,
        model: str,
        schema: type[BaseModel],
        system_prompt: str,
        prompt: str,
        temperature: Optional[float] = None,
    ) -> StructuredResult:
        chat_model = self.provider.language_model(model, temperature)
        structured = chat_model.with_structured_output(schema)
        value = await structured.ainvoke([("system", system_prompt), ("human", prompt)])
        if not isinstance(value, schema):
            value = schema.model_validate(value)
        return StructuredResult(object=value)
