"""
Conversation Context Store

Bounded, ordered log of completed turns shared by every call on the process.

Design decisions:
- Sliding window by creation order (FIFO), not by use (LRU)
- Pure data structure: no I/O, no logging
- Owned object injected into the orchestrator, not a module global
- Operations are serialized by a mutex so overlapping calls never
  observe a half-applied change
"""

import threading
from collections import deque

from rat.core.types import Turn

DEFAULT_MAX_ENTRIES = 10

_TURN_TEMPLATE = "Question: {prompt}\nReasoning: {reasoning}\nAnswer: {response}"


class ContextStore:
    """
    Sliding window of the most recent turns.

    Holds at most `max_entries` turns; appending past the bound evicts
    exactly one entry from the front.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._max_entries = max_entries
        self._entries: deque[Turn] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def entries(self) -> list[Turn]:
        """Snapshot of stored turns, oldest first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def append(self, turn: Turn) -> None:
        """Add a turn at the end, evicting the oldest one when full."""
        with self._lock:
            self._entries.append(turn)

    def clear(self) -> None:
        """Drop every stored turn."""
        with self._lock:
            self._entries.clear()

    def render_as_prompt_prefix(self) -> str:
        """
        Render stored turns as a conversation transcript.

        One Question/Reasoning/Answer block per turn in chronological
        order, separated by a blank line. Empty store renders as "".
        """
        with self._lock:
            return "\n\n".join(
                _TURN_TEMPLATE.format(
                    prompt=turn.prompt,
                    reasoning=turn.reasoning,
                    response=turn.response,
                )
                for turn in self._entries
            )

    def __repr__(self) -> str:
        return f"ContextStore(entries={len(self)}, max_entries={self._max_entries})"
