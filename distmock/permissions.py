"""Capability checks answering "may this user do X with that entity"."""

from __future__ import annotations

from typing import Iterable

from .models import DownloadKey, Game, Upload, User


def owns_game(game: Game, user: User) -> bool:
    return game.user_id == user.id


def can_view_game(game: Game, user: User) -> bool:
    return game.published or owns_game(game, user)


def can_download_upload(
    upload: Upload,
    game: Game,
    user: User,
    download_keys: Iterable[DownloadKey] = (),
) -> bool:
    if upload.game_id != game.id:
        return False
    if owns_game(game, user):
        return True
    if not can_view_game(game, user):
        return False
    if game.min_price <= 0:
        return True
    return any(key.game_id == game.id and key.user_id == user.id for key in download_keys)
