"""
Memory Module

Conversation context shared across tool calls.
Lives for the lifetime of the process; nothing is persisted.
"""

from rat.memory.context_store import DEFAULT_MAX_ENTRIES, ContextStore

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "ContextStore",
]
