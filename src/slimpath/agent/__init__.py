"""Machine-readable response envelope for CLI --json output."""

from __future__ import annotations

from slimpath.agent.response import AgentResponse, create_response, error_response

__all__ = [
    "AgentResponse",
    "create_response",
    "error_response",
]
