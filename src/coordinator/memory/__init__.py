"""Agent memory contract and in-process implementation."""

from .store import AgentMemory, MemoryEntry, MemoryStore

__all__ = ["AgentMemory", "MemoryEntry", "MemoryStore"]
