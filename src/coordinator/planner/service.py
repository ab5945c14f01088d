"""Planner implementation turning free-text requests into validated plans."""

import json
import logging
import uuid
from dataclasses import asdict, replace
from typing import Any, Optional

from langsmith.run_helpers import traceable

from ..core.config import AgentConfig
from ..core.decoder import decode_json_object
from ..core.errors import ValidationError
from ..core.events import to_jsonable
from ..core.generation import GenerationCapability
from ..core.providers import REASONING_MODEL, ModelProvider
from ..core.types import Plan, PlanStep
from ..prompts import planner as planner_prompts
from ..tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

FALLBACK_STEP_ID = "fallback-step"


class PlannerAI:
    """Decomposes a request into a dependency-tagged plan; never raises outward."""

    def __init__(
        self,
        config: AgentConfig,
        generation: Optional[GenerationCapability] = None,
        tools: Optional[ToolRegistry] = None,
    ):
        self.config = config
        self.generation = generation or GenerationCapability(ModelProvider(config))
        self.tools = tools

    @traceable(name="planner.create_plan", run_type="chain")
    async def create_plan(self, request: str, context: Any = None) -> Plan:
        try:
            raw = await self._generate_planner_output(request, context)
            return self.parse_plan(raw)
        except Exception as exc:
            logger.warning("Failed to build plan, using fallback: %s", exc)
            return self.create_fallback_plan(request)

    async def _generate_planner_output(self, request: str, context: Any) -> str:
        tools_json = json.dumps(
            [asdict(metadata) for metadata in self.tools.get_all_metadata()] if self.tools is not None else []
        )
        prompt = planner_prompts.build_planner_prompt(
            request=request,
            context_json=json.dumps(context, indent=2, default=to_jsonable),
            tools_json=tools_json,
        )
        result = await self.generation.generate(
            prompt,
            model=REASONING_MODEL,
            temperature=self.config.planner_temperature,
        )
        return result.text

    def parse_plan(self, raw_text: str) -> Plan:
        parsed = decode_json_object(raw_text)
        if not parsed.get("goal") or not isinstance(parsed.get("steps"), list):
            raise ValidationError("Invalid plan structure: 'goal' and a 'steps' list are required")
        steps: list[PlanStep] = []
        seen_ids = set()
        for raw_step in parsed["steps"]:
            step = self._normalize_step(raw_step)
            if step.id in seen_ids:
                step = replace(step, id=str(uuid.uuid4()))
            seen_ids.add(step.id)
            steps.append(step)
        return Plan(
            id=str(uuid.uuid4()),
            goal=str(parsed["goal"]),
            reasoning=str(parsed.get("reasoning") or "No reasoning provided"),
            steps=steps,
        )

    def _normalize_step(self, raw_step: Any) -> PlanStep:
        step: dict[str, Any] = raw_step if isinstance(raw_step, dict) else {}
        depends_on = step.get("dependsOn")
        tool_parameters = step.get("toolParameters")
        tool_name = step.get("toolName")
        return PlanStep(
            id=str(step.get("id") or uuid.uuid4()),
            description=str(step.get("description") or "No description provided"),
            tool_name=str(tool_name) if tool_name else None,
            tool_parameters=dict(tool_parameters) if isinstance(tool_parameters, dict) else {},
            depends_on=[str(item) for item in depends_on] if isinstance(depends_on, list) else [],
            expected_outcome=str(step.get("expectedOutcome") or "No expected outcome specified"),
        )

    def create_fallback_plan(self, request: str) -> Plan:
        steps: list[PlanStep] = [
            PlanStep(
                id=FALLBACK_STEP_ID,
                description="Process the request directly",
                depends_on=[],
                expected_outcome="Request handled successfully",
            )
        ]
        return Plan(
            id=str(uuid.uuid4()),
            goal=f"Process request: {request}",
            reasoning="Using fallback plan due to planning failure",
            steps=steps,
        )
