import time
from typing import Callable, Optional
from uuid import uuid4

from starlette.requests import Request
from starlette.responses import Response

from grouphub.utils.logs.errors import ErrorLogger, _current_error_logger

REQUEST_ID_HEADER = b"x-request-id"


class LoggingMiddleware:
    """
    Binds a request-scoped ErrorLogger for every HTTP request, tags it with a
    request id and logs one access line when the response starts.

    Exceptions that escape the app are logged with the bound logger and, when
    ``error_response`` is given and nothing has been sent yet, answered with
    the response it builds, so error responses still carry the request id.
    """

    def __init__(self, app, error_response: Optional[Callable[[Request, Exception], Response]] = None):
        self.app = app
        self.error_response = error_response

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        request_id = headers.get(REQUEST_ID_HEADER, b"").decode("latin-1") or uuid4().hex
        error_logger = ErrorLogger("request", request_id=request_id)
        error_token = _current_error_logger.set(error_logger)
        started = time.perf_counter()
        response_started = False

        async def send_with_request_id(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                message.setdefault("headers", [])
                message["headers"].append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                error_logger.info(
                    "Request completed",
                    method=scope["method"],
                    path=scope["path"],
                    status=message["status"],
                    duration_ms=round((time.perf_counter() - started) * 1000, 2)
                )
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception as exc:
            error_logger.log_unhandled_error(scope["method"], scope["path"], exc)
            if response_started or self.error_response is None:
                raise
            response = self.error_response(Request(scope), exc)
            await response(scope, receive, send_with_request_id)
        finally:
            _current_error_logger.reset(error_token)
