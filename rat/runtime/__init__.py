"""
Runtime Module

The TurnOrchestrator is the single orchestration point for a tool call.
All generation flows through here.
"""

from rat.runtime.factory import create_orchestrator, create_router
from rat.runtime.orchestrator import TurnOrchestrator, format_output

__all__ = [
    "TurnOrchestrator",
    "create_orchestrator",
    "create_router",
    "format_output",
]
