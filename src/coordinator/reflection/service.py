"""Reflection over a plan execution, yielding insights and improvements."""

import json
import logging
from typing import Any, Optional

from langsmith.run_helpers import traceable

from ..core.config import AgentConfig
from ..core.decoder import decode_json_object
from ..core.events import plan_to_wire, to_jsonable
from ..core.generation import GenerationCapability
from ..core.providers import REASONING_MODEL, ModelProvider
from ..core.types import ExecutionResult, Plan, Reflection
from ..prompts import reflection as reflection_prompts

logger = logging.getLogger(__name__)


class ReflectorAI:
    def __init__(self, config: AgentConfig, generation: Optional[GenerationCapability] = None):
        self.config = config
        self.generation = generation or GenerationCapability(ModelProvider(config))

    @traceable(name="reflection.reflect", run_type="chain")
    async def reflect(self, plan: Plan, execution_result: ExecutionResult) -> Reflection:
        try:
            raw = await self._generate_reflection_output(plan, execution_result)
            return self.parse_reflection(raw)
        except Exception as exc:
            logger.warning("Reflection failed, using fallback: %s", exc)
            return self.create_fallback_reflection()

    async def _generate_reflection_output(self, plan: Plan, execution_result: ExecutionResult) -> str:
        prompt = reflection_prompts.build_reflection_prompt(
            plan_json=json.dumps(plan_to_wire(plan), indent=2),
            result_json=json.dumps(
                {
                    "success": execution_result.success,
                    "stepResults": execution_result.step_results,
                    "error": execution_result.error,
                },
                indent=2,
                default=to_jsonable,
            ),
        )
        result = await self.generation.generate(
            prompt,
            model=REASONING_MODEL,
            temperature=self.config.reflection_temperature,
        )
        return result.text

    def parse_reflection(self, raw_text: str) -> Reflection:
        parsed = decode_json_object(raw_text)
        success = parsed.get("success")
        return Reflection(
            success=success if isinstance(success, bool) else False,
            insights=_string_list(parsed.get("insights")),
            improvements=_string_list(parsed.get("improvements")),
            feedback=str(parsed.get("feedback") or "No feedback provided"),
        )

    def create_fallback_reflection(self) -> Reflection:
        return Reflection(
            success=False,
            insights=["Reflection process failed"],
            improvements=["Improve error handling in reflection system"],
            feedback="Unable to generate proper reflection due to an error.",
        )


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]
