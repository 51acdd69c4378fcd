"""Shared exceptions and the DRF exception handler.

``DataAccessError`` is the single failure type raised by the persistence
services.  Views translate it into a structured ``{mensaje, error}`` body;
``api_exception_handler`` does the same for any instance that escapes a
view, and renames DRF's ``detail`` key to ``mensaje`` so framework errors
(401, 403, 405, malformed JSON) share the API envelope.
"""

from __future__ import annotations

from typing import Any

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

QUERY_ERROR_MESSAGE = "Error querying the database"


class DataAccessError(Exception):
    """A persistence call failed (connectivity, constraint or query error).

    Always raised with ``from`` so the driver error is reachable through
    ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def most_specific_cause(self) -> BaseException:
        """Innermost exception of the ``__cause__`` chain (``self`` if none)."""
        cause: BaseException = self
        while cause.__cause__ is not None:
            cause = cause.__cause__
        return cause

    @property
    def detail(self) -> str:
        """Technical detail: ``"<message>: <most specific cause>"``."""
        return f"{self.message}: {self.most_specific_cause}"


def data_access_error_body(mensaje: str, exc: DataAccessError) -> dict[str, str]:
    return {"mensaje": mensaje, "error": exc.detail}


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    if isinstance(exc, DataAccessError):
        view = context.get("view")
        logger.error(
            "data_access_unhandled",
            view=type(view).__name__ if view is not None else None,
            error=exc.detail,
        )
        return Response(
            data_access_error_body(QUERY_ERROR_MESSAGE, exc),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = exception_handler(exc, context)
    if response is not None and isinstance(response.data, dict):
        if "detail" in response.data:
            data = dict(response.data)
            data["mensaje"] = data.pop("detail")
            response.data = data
    return response
