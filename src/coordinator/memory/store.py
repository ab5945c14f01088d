"""In-process agent memory implementing the retrieve/store contract."""

import time
import uuid
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..core.types import ExecutionResult, Plan, Reflection


class MemoryStore(Protocol):
    async def retrieve_relevant_context(self, request: str) -> Any: ...

    async def store_execution(
        self,
        request: str,
        plan: Plan,
        execution_result: ExecutionResult,
        reflection: Reflection,
    ) -> Any: ...


@dataclass
class MemoryEntry:
    id: str
    request: str
    timestamp: float
    plan: Plan
    execution_result: ExecutionResult
    reflection: Reflection


class AgentMemory:
    """Bounded short-term window plus an unbounded id-keyed long-term map.

    Relevance is recency only: ``retrieve_relevant_context`` returns the
    short-term window regardless of the request text.
    """

    def __init__(self, max_short_term_size: int = 10):
        self.max_short_term_size = max_short_term_size
        self._short_term: deque[MemoryEntry] = deque(maxlen=max_short_term_size)
        self._long_term: dict[str, MemoryEntry] = {}

    async def store_execution(
        self,
        request: str,
        plan: Plan,
        execution_result: ExecutionResult,
        reflection: Reflection,
    ) -> str:
        entry = MemoryEntry(
            id=str(uuid.uuid4()),
            request=request,
            timestamp=time.time(),
            plan=plan,
            execution_result=execution_result,
            reflection=reflection,
        )
        self._short_term.append(entry)
        self._long_term[entry.id] = entry
        return entry.id

    async def retrieve_relevant_context(self, request: str) -> dict[str, Any]:
        return {"recent_memories": list(self._short_term)}

    def get_memory_by_id(self, entry_id: str) -> Optional[MemoryEntry]:
        return self._long_term.get(entry_id)

    def get_short_term_memory(self) -> list[MemoryEntry]:
        return list(self._short_term)

    def clear_short_term_memory(self) -> None:
        self._short_term.clear()

    def clear_all_memory(self) -> None:
        self._short_term.clear()
        self._long_term.clear()
