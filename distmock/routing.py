from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import Response

from .context import INVALID_ENDPOINT_MESSAGE, RequestContext
from .errors import INTERNAL_ERROR_MESSAGE, APIError, abort, error_response
from .store import Store

logger = logging.getLogger(__name__)

Handler = Callable[[RequestContext], None]

HTTP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]
PREFIX_PARAM = "prefix_rest"


@dataclass(frozen=True)
class Route:
    pattern: str
    handler: Handler
    prefix: bool = False

    @property
    def path(self) -> str:
        if not self.prefix:
            return self.pattern
        base = self.pattern.rstrip("/") or "/"
        if base == "/":
            return f"/{{{PREFIX_PARAM}:path}}"
        return f"{base}{{{PREFIX_PARAM}:path}}"


class Dispatcher:
    """Route table mapping path patterns to context handlers.

    Exact patterns (``/games/{id}``) always win over prefix mounts; among
    prefix mounts the longest prefix wins. Each handler runs behind the same
    recovery wrapper, which turns ``APIError`` into its JSON error response
    and any other exception into a generic 500.
    """

    def __init__(self, store: Store, chunk_size: int) -> None:
        self.store = store
        self.chunk_size = chunk_size
        self._routes: list[Route] = []

    def route(self, pattern: str, handler: Handler) -> None:
        self._routes.append(Route(pattern=pattern, handler=handler))

    def route_prefix(self, prefix: str, handler: Handler) -> None:
        self._routes.append(Route(pattern=prefix, handler=handler, prefix=True))

    def ordered_routes(self) -> list[Route]:
        exact = [route for route in self._routes if not route.prefix]
        prefixed = [route for route in self._routes if route.prefix]
        # sorted() is stable, so equal-length prefixes keep registration order
        prefixed = sorted(prefixed, key=lambda route: len(route.pattern.rstrip("/")), reverse=True)
        return exact + prefixed

    def run(self, handler: Handler, request: Request) -> Response:
        ctx = RequestContext(self.store, request, self.chunk_size)
        try:
            handler(ctx)
            if ctx.response is None:
                raise RuntimeError(f"handler for {request.url.path} wrote no response")
            return ctx.response
        except APIError as exc:
            return error_response(exc.status, exc.messages)
        except Exception:
            logger.exception("Unhandled error serving %s %s", request.method, request.url.path)
            return error_response(500, [INTERNAL_ERROR_MESSAGE])

    def _endpoint(self, handler: Handler) -> Callable[[Request], Response]:
        def endpoint(request: Request) -> Response:
            return self.run(handler, request)

        endpoint.__name__ = getattr(handler, "__name__", "endpoint")
        return endpoint

    def install(self, app: FastAPI) -> None:
        for route in self.ordered_routes():
            app.add_api_route(
                route.path,
                self._endpoint(route.handler),
                methods=HTTP_METHODS,
                include_in_schema=False,
            )


def not_found(ctx: RequestContext) -> None:
    abort(404, INVALID_ENDPOINT_MESSAGE)
