"""Public JSON shapes of the entities, as served by the API."""

from __future__ import annotations

from typing import Any, Iterable

from .core.config import PUBLIC_URL
from .models import Game, Upload, User
from .schemas import GameOut, UploadOut, UserOut


def format_user(user: User) -> dict[str, Any]:
    out = UserOut.model_validate(user).model_copy(update={"url": PUBLIC_URL, "cover_url": PUBLIC_URL})
    payload = out.model_dump()
    if user.allow_telemetry:
        payload["allow_telemetry"] = True
    else:
        payload.pop("allow_telemetry", None)
    return payload


def format_game(game: Game) -> dict[str, Any]:
    return GameOut.model_validate(game).model_dump()


def upload_platforms(upload: Upload) -> dict[str, str]:
    platforms: dict[str, str] = {}
    if upload.platform_linux:
        platforms["linux"] = "all"
    if upload.platform_windows:
        platforms["windows"] = "all"
    if upload.platform_mac:
        platforms["osx"] = "all"
    return platforms


def format_upload(upload: Upload) -> dict[str, Any]:
    out = UploadOut.model_validate(upload).model_copy(update={"platforms": upload_platforms(upload)})
    return out.model_dump()


def format_uploads(uploads: Iterable[Upload]) -> list[dict[str, Any]]:
    return [format_upload(upload) for upload in uploads]
