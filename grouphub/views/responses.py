"""
API response classes with orjson serialization support.

Success bodies are the envelope dataclasses in ``grouphub.views.groups``;
every failure is rendered as an ``ErrorResponse``.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

import orjson
from starlette.responses import JSONResponse


class OrjsonResponse(JSONResponse):
    """JSON response using orjson with native dataclass, UUID and datetime support."""
    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return orjson.dumps(
            content,
            option=orjson.OPT_UTC_Z | orjson.OPT_SERIALIZE_DATACLASS
        )


def _now() -> str:
    """Generate current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(slots=True)
class ErrorDetail:
    """Individual field-level error detail."""
    code: str
    message: str
    field: Optional[str] = None


@dataclass(slots=True)
class ErrorBody:
    """Structured error information."""
    code: str
    message: str
    details: Optional[List[ErrorDetail]] = None
    path: Optional[str] = None
    method: Optional[str] = None


@dataclass(slots=True)
class ErrorResponse:
    """Standard error response wrapper.

    Usage:
        return ErrorResponse(
            error=ErrorBody(code="VALIDATION_ERROR", message="Missing name")
        )
    """
    error: ErrorBody
    success: bool = False
    timestamp: str = field(default_factory=_now)
