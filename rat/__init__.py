"""
RAT: Retrieval Augmented Thinking server

A two-stage answering service exposed as an MCP tool:
- A reasoning model produces a chain-of-thought
- A user-selectable model answers, conditioned on that reasoning
- A bounded sliding window of prior turns feeds both stages
"""

__version__ = "0.1.0"
__author__ = "RAT Contributors"
