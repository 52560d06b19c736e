from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from .errors import abort
from .models import Build, CDNFile, Game, Upload, User
from .services.cdn import build_asset_response
from .store import Store

INVALID_ENDPOINT_MESSAGE = "invalid api endpoint"


class RequestContext:
    """Per-request facade over the store, the inbound request and the response.

    Helpers named ``find_*`` and ``require_*`` abort the request instead of
    returning a failure, so handlers read as straight-line code.
    """

    def __init__(self, store: Store, request: Request, chunk_size: int) -> None:
        self.store = store
        self.request = request
        self.chunk_size = chunk_size
        self.current_user: Optional[User] = None
        self.status: Optional[int] = None
        self._response: Optional[Response] = None

    @property
    def response(self) -> Optional[Response]:
        return self._response

    def _commit(self, response: Response) -> None:
        if self._response is not None:
            raise RuntimeError("response already written for this request")
        self._response = response

    # request

    def _api_key(self) -> str:
        header = self.request.headers.get("authorization", "").strip()
        if header.lower().startswith("bearer "):
            header = header[len("bearer ") :].strip()
        if header:
            return header
        return self.request.query_params.get("api_key", "").strip()

    def require_api_key(self) -> User:
        key = self._api_key()
        if not key:
            abort(401, "authentication required")
        user = self.store.find_user_by_api_key(key)
        if user is None:
            abort(401, "invalid key")
        self.current_user = user
        return user

    def path_string(self, name: str) -> str:
        value = self.request.path_params.get(name)
        if value is None:
            abort(400, f"missing path parameter {name}")
        return str(value)

    def path_int(self, name: str) -> int:
        raw = self.path_string(name)
        if not (raw.isascii() and raw.isdigit()):
            abort(400, f"invalid {name}: {raw}")
        return int(raw)

    # lookups

    def find_game(self, game_id: int) -> Game:
        game = self.store.find_game(game_id)
        if game is None:
            abort(404, "game not found")
        return game

    def find_upload(self, upload_id: int) -> Upload:
        upload = self.store.find_upload(upload_id)
        if upload is None:
            abort(404, "upload not found")
        return upload

    def find_build(self, build_id: int) -> Build:
        build = self.store.find_build(build_id)
        if build is None:
            abort(404, "build not found")
        return build

    def find_cdn_file(self, path: Optional[str]) -> CDNFile:
        cdn_file = self.store.find_cdn_file(path) if path else None
        if cdn_file is None:
            abort(404, "not found")
        return cdn_file

    def require_authorized(self, allowed: bool) -> None:
        if not allowed:
            abort(403, "forbidden")

    # responses

    def write_json(self, payload: Mapping[str, Any]) -> None:
        self._commit(JSONResponse(status_code=self.status or 200, content=dict(payload)))

    def serve_asset(self, cdn_file: CDNFile) -> None:
        range_header = self.request.headers.get("range")
        self._commit(build_asset_response(cdn_file, range_header, self.chunk_size))

    def dispatch(self, handlers: Mapping[str, Callable[[], None]]) -> None:
        handler = handlers.get(self.request.method.upper())
        if handler is None:
            abort(404, INVALID_ENDPOINT_MESSAGE)
        handler()
