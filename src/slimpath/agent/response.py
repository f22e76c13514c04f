"""Response envelope for --json output of the tracking commands."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from slimpath.tracking.models import (
    BadRequestError,
    DependencyFailure,
    NotFoundError,
    TrackingError,
    ValidationError,
)


@dataclass
class AgentResponse:
    """Envelope shared by every command's JSON output.

    `error_kind` mirrors the failure class (validation, bad_request,
    not_found, dependency) so callers can branch without parsing messages.
    """

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    error_kind: Optional[str] = None
    error_field: Optional[str] = None
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""
    schema_version: str = "1.0"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
            "schema_version": self.schema_version,
        }
        if self.error_kind is not None:
            result["error_kind"] = self.error_kind
        if self.error_field is not None:
            result["error_field"] = self.error_field
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def create_response(
    command: str,
    data: Optional[dict[str, Any]] = None,
    suggestions: Optional[list[str]] = None,
    human_summary: str = "",
) -> AgentResponse:
    """Create a successful response.

    Args:
        command: The command that was executed
        data: Command-specific result data
        suggestions: Follow-up commands worth running
        human_summary: One-line description for humans

    Returns:
        AgentResponse with success=True
    """
    return AgentResponse(
        success=True,
        command=command,
        data=data or {},
        suggestions=suggestions or [],
        human_summary=human_summary,
    )


def _error_kind(error: TrackingError) -> str:
    # BadRequestError subclasses ValidationError; check it first
    if isinstance(error, BadRequestError):
        return "bad_request"
    if isinstance(error, ValidationError):
        return "validation"
    if isinstance(error, NotFoundError):
        return "not_found"
    if isinstance(error, DependencyFailure):
        return "dependency"
    return "error"


def error_response(
    command: str,
    error: TrackingError | str,
    suggestions: Optional[list[str]] = None,
) -> AgentResponse:
    """Create an error response from a tracking error or a plain message.

    Args:
        command: The command that failed
        error: The raised TrackingError, or a message
        suggestions: Suggestions for fixing the error

    Returns:
        AgentResponse with success=False
    """
    message = str(error)
    kind = _error_kind(error) if isinstance(error, TrackingError) else "error"
    field_name = error.field if isinstance(error, ValidationError) else None

    return AgentResponse(
        success=False,
        command=command,
        errors=[message],
        error_kind=kind,
        error_field=field_name,
        suggestions=suggestions or [],
        human_summary=f"Error: {message}",
    )
