import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi_problem.cors import CorsConfiguration
from fastapi_problem.error import StatusProblem
from fastapi_problem.handler import add_exception_handler, new_exception_handler
from rolodex.core.exceptions import errors
from rolodex.core.logging import get_log_context
from rolodex.core.settings.base import Settings

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


def documentation_uri_template(settings: Settings) -> str:
    return f"{settings.SERVER_URL}/errors/{{type}}"


def log_problem(request: Request, exc: Exception) -> None:
    """Log domain problems at warning (4xx) or error (5xx) level with the request context."""
    if not isinstance(exc, StatusProblem):
        return

    logger.log(
        logging.WARNING if exc.status < 500 else logging.ERROR,
        "HTTP %d: %s",
        exc.status,
        exc.detail,
        extra={
            "event_type": "problem",
            "problem_type": exc.type_,
            "status_code": exc.status,
            **get_log_context(),
        },
    )


def request_validation_problem(exc: RequestValidationError) -> errors.ValidationError:
    violations: list[dict[str, Any]] = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        violations.append(
            {
                "field": ".".join(str(part) for part in loc[1:]) or None,
                "message": error.get("msg", "Invalid value"),
                "location": str(loc[0]) if loc else None,
            }
        )
    return errors.ValidationError(errors=violations)


def add_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Render every error as an RFC 9457 problem document.

    Request validation failures are answered with 400 and an ``errors`` list
    holding one ``{field, message, location}`` entry per violated rule.
    """
    eh = new_exception_handler(
        logger=logger,
        cors=CorsConfiguration(
            allow_origins=[str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        ),
        pre_hooks=[log_problem],
        documentation_uri_template=documentation_uri_template(settings),
        strict_rfc9457=True,
    )
    add_exception_handler(app, eh)

    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        problem = request_validation_problem(exc)
        log_problem(request, problem)
        return JSONResponse(
            content=problem.marshal(uri=documentation_uri_template(settings), strict=True),
            status_code=problem.status,
            media_type=PROBLEM_MEDIA_TYPE,
        )

    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
