from __future__ import annotations

from typing import NoReturn

from fastapi.responses import JSONResponse

INTERNAL_ERROR_MESSAGE = "internal error"


class APIError(Exception):
    """Carries the final HTTP status and messages of a failed request.

    Raised from anywhere inside a handler and turned into a JSON error
    response by the dispatcher.
    """

    def __init__(self, status: int, *messages: str) -> None:
        self.status = status
        self.messages = list(messages) or [f"error {status}"]
        super().__init__(f"{status}: {', '.join(self.messages)}")


def abort(status: int, *messages: str) -> NoReturn:
    raise APIError(status, *messages)


def error_response(status: int, messages: list[str]) -> JSONResponse:
    return JSONResponse(status_code=status, content={"errors": messages})
