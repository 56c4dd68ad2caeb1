import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from grouphub.controllers.groups import router as group_router
from grouphub.controllers.messaging import router as message_router
from grouphub.database import lifespan
from grouphub.utils import config
from grouphub.utils.errors import ServiceError
from grouphub.utils.logs import LoggingMiddleware
from grouphub.views.responses import OrjsonResponse, ErrorResponse, ErrorBody, ErrorDetail

INTERNAL_ERROR_MESSAGE = "Internal server error"

app: FastAPI = FastAPI(
    title="grouphub",
    lifespan=lifespan,
    default_response_class=OrjsonResponse,
)

app.include_router(group_router)
app.include_router(message_router)


def _error_response(request: Request, status_code: int, body: ErrorBody) -> OrjsonResponse:
    body.path = request.url.path
    body.method = request.method
    return OrjsonResponse(status_code=status_code, content=ErrorResponse(error=body))


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    # Server-side errors are logged where they are raised; only redact here.
    message = exc.message
    if exc.status_code >= 500 and not config.EXPOSE_ERROR_DETAILS:
        message = INTERNAL_ERROR_MESSAGE
    details = [ErrorDetail(code=exc.code, message=message, field=exc.field)] if exc.field else None
    return _error_response(
        request, exc.status_code, ErrorBody(code=exc.code, message=message, details=details)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        ErrorDetail(
            code=error.get("type", "invalid"),
            message=error.get("msg", "Invalid value"),
            field=".".join(str(part) for part in error.get("loc", ()))
        )
        for error in exc.errors()
    ]
    return _error_response(
        request, 400, ErrorBody(code="VALIDATION_ERROR", message="Invalid request", details=details)
    )


def unhandled_error_response(request: Request, exc: Exception) -> OrjsonResponse:
    # Logged by LoggingMiddleware, which sends this while the request id is bound.
    message = str(exc) if config.EXPOSE_ERROR_DETAILS else INTERNAL_ERROR_MESSAGE
    return _error_response(request, 500, ErrorBody(code="INTERNAL_ERROR", message=message))


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)
app.add_middleware(LoggingMiddleware, error_response=unhandled_error_response)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(
        app="grouphub.main:app",
        host=config.APP_HOST,
        port=config.APP_PORT,
        log_level=config.LOG_LEVEL.lower()
    )
