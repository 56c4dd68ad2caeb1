from typing import Any, Mapping, Optional

import orjson
from fastapi import Request

from grouphub.utils import config
from grouphub.utils.errors import AuthError, ValidationError
from grouphub.utils.jwts import VerifyToken, extract_bearer_token
from grouphub.utils.logs import ErrorLoggerDep

IDENTITY_FIELD = "user_id"
IDENTITY_MAX_LENGTH = 255


def _clean(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    value = str(value).strip()
    return value or None


def resolve_identity(
    headers: Mapping[str, str],
    body: Any = None,
    query: Optional[Mapping[str, str]] = None,
    header_name: str = config.IDENTITY_HEADER
) -> Optional[str]:
    """
    Return the caller-asserted identity, or None.

    Sources are tried in priority order: the identity header, then the
    ``user_id`` field of a JSON object body, then the ``user_id`` query
    parameter. Nothing here verifies the value; callers must have been
    authenticated upstream.
    """
    identity = _clean(headers.get(header_name))
    if identity is None and isinstance(body, dict):
        identity = _clean(body.get(IDENTITY_FIELD))
    if identity is None and query is not None:
        identity = _clean(query.get(IDENTITY_FIELD))
    return identity


async def _read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None


def check_identity(identity: str) -> str:
    """Reject identities the membership and message tables cannot store."""
    if len(identity) > IDENTITY_MAX_LENGTH:
        raise ValidationError(
            f"user_id must be at most {IDENTITY_MAX_LENGTH} characters", field=IDENTITY_FIELD
        )
    if "\x00" in identity:
        raise ValidationError("user_id must not contain NUL characters", field=IDENTITY_FIELD)
    return identity


async def get_current_identity(request: Request, logger: ErrorLoggerDep) -> str:
    """FastAPI dependency resolving the acting user id or raising AuthError."""
    if config.IDENTITY_MODE == "jwt":
        token = extract_bearer_token(request.headers.get("authorization"))
        return check_identity(VerifyToken(logger, config.JWT_SECRET)(token).user_id)

    body = await _read_json_body(request)
    identity = resolve_identity(
        request.headers, body, request.query_params, header_name=config.IDENTITY_HEADER
    )
    if identity is None:
        raise AuthError("Missing user_id (auth)")
    return check_identity(identity)
