"""
Application error taxonomy and the FastAPI handlers that render it.

Services raise these; routes let them propagate and the handlers below turn
them into a JSON body the browser client can show as a notification.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel


class AppError(Exception):
    status_code: int = 500
    kind: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def extra(self) -> Dict[str, Any]:
        return {}


class ValidationError(AppError):
    """A required field is empty or malformed."""

    status_code = 422
    kind = "validation_error"


class WebhookError(AppError):
    """The summarization webhook answered with a non-success status or was unreachable."""

    status_code = 502
    kind = "webhook_error"

    def __init__(self, message: str, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body

    def extra(self) -> Dict[str, Any]:
        return {"webhook_status": self.status, "webhook_body": self.body}


class PersistenceError(AppError):
    status_code = 500
    kind = "persistence_error"


class NotFoundError(PersistenceError):
    status_code = 404
    kind = "not_found"


class PartialSaveError(PersistenceError):
    """
    The summary row was committed but a dependent note/reminder write failed.

    Nothing is rolled back; the ids already committed are carried so the
    caller can clean up or retry the missing part.
    """

    kind = "partial_save"

    def __init__(self, message: str, summary_id: int, note_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.summary_id = summary_id
        self.note_id = note_id

    def extra(self) -> Dict[str, Any]:
        return {"summary_id": self.summary_id, "note_id": self.note_id}


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _handle_app_error(request: Request, exc: AppError):  # type: ignore[unused-variable]
        logger.warning("{} {} failed: {} ({})", request.method, request.url.path, exc.message, exc.kind)
        content = ErrorResponse(error=exc.kind, message=exc.message).model_dump()
        content.update(exc.extra())
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(Exception)
    async def _handle_unexpected(request: Request, exc: Exception):  # type: ignore[unused-variable]
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="internal_error", message="internal error").model_dump(),
        )
