"""Manager state machine orchestrating planning, step execution and reflection."""

import logging
from typing import Any, Optional, Sequence

from langsmith.run_helpers import traceable

from .config import AgentConfig
from .errors import OrchestrationError, ToolExecutionError, ToolNotFoundError
from .events import EventSink, build_plan_event, build_status_event
from .types import AgentState, ExecutionResult, Plan, PlanStep, is_error_entry
from ..memory.store import AgentMemory, MemoryStore
from ..planner.service import PlannerAI
from ..reflection.service import ReflectorAI
from ..tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class Manager:
    """Drives idle -> planning -> executing -> reflecting -> idle for one request at a time.

    Errors anywhere in the pipeline are reported on the event sink and the
    state always returns to idle; there is no retry and no partial resume.
    """

    def __init__(
        self,
        config: AgentConfig,
        *,
        tools: ToolRegistry,
        event_sink: EventSink,
        planner: Optional[PlannerAI] = None,
        reflector: Optional[ReflectorAI] = None,
        memory: Optional[MemoryStore] = None,
    ):
        self.config = config
        self.tools = tools
        self.event_sink = event_sink
        self.planner = planner or PlannerAI(config, tools=tools)
        self.reflector = reflector or ReflectorAI(config)
        self.memory = memory if memory is not None else AgentMemory(config.short_term_memory_size)
        self.state = AgentState.IDLE
        self.state_history: list[AgentState] = [AgentState.IDLE]
        self.current_request = ""

    def get_state(self) -> AgentState:
        return self.state

    @traceable(name="manager.process_request", run_type="chain")
    async def process_request(self, request: str) -> None:
        self.current_request = request
        try:
            await self._run_pipeline(request)
        except Exception as exc:
            error = OrchestrationError(str(exc) or exc.__class__.__name__)
            logger.error("Agent error in state %s: %s", self.state.value, error, exc_info=exc)
            self._stream_to_user(f"I encountered an error while processing your request: {error}")
        finally:
            self._transition(AgentState.IDLE)

    async def _run_pipeline(self, request: str) -> None:
        self._stream_to_user("I'm analyzing your request...")
        relevant_memory = await self.memory.retrieve_relevant_context(request)

        self._transition(AgentState.PLANNING)
        self._stream_to_user("Creating a plan to address your request...")
        plan = await self.planner.create_plan(request, relevant_memory)
        self._stream_plan_to_user(plan)

        self._transition(AgentState.EXECUTING)
        self._stream_to_user("Executing the plan...")
        result = await self.execute_steps(plan.steps)

        self._transition(AgentState.REFLECTING)
        self._stream_to_user("Reflecting on the execution...")
        reflection = await self.reflector.reflect(plan, result)

        await self.memory.store_execution(request, plan, result, reflection)
        if reflection.insights:
            self._stream_to_user(f"Key insights: {', '.join(reflection.insights)}")

    @traceable(name="manager.execute_steps", run_type="chain")
    async def execute_steps(self, steps: Sequence[PlanStep]) -> ExecutionResult:
        # Array order only; depends_on is recorded on the plan but not scheduled on.
        results: dict[str, Any] = {}
        for step in steps:
            self._stream_to_user(f"Executing step: {step.description}")
            try:
                results[step.id] = await self._run_step(step)
            except (ToolNotFoundError, ToolExecutionError) as exc:
                logger.error("Error executing step %s: %s", step.id, exc)
                results[step.id] = {"error": str(exc)}
                self._stream_to_user(f'Error in step "{step.description}": {exc}')
                continue
            self._stream_to_user(f"Completed: {step.description}")

        success = not any(is_error_entry(entry) for entry in results.values())
        return ExecutionResult(success=success, step_results=results)

    async def _run_step(self, step: PlanStep) -> Any:
        if not step.tool_name:
            return {"completed": True}
        tool = self.tools.require_tool(step.tool_name)
        try:
            return await tool(dict(step.tool_parameters))
        except Exception as exc:
            raise ToolExecutionError(step.tool_name, exc) from exc

    def _transition(self, state: AgentState) -> None:
        logger.debug("Manager state %s -> %s", self.state.value, state.value)
        self.state = state
        self.state_history.append(state)

    def _stream_to_user(self, message: str) -> None:
        self.event_sink.write_data(build_status_event(message))

    def _stream_plan_to_user(self, plan: Plan) -> None:
        self._stream_to_user(f"Plan: {plan.goal}")
        self.event_sink.write_data(build_plan_event(plan))
        self._stream_to_user(f"I'll approach this in {len(plan.steps)} steps:")
        for index, step in enumerate(plan.steps, start=1):
            self._stream_to_user(f"{index}. {step.description}")
