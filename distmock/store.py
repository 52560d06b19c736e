from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import replace
from typing import Any, Optional

from .models import (
    STORAGE_BUILD,
    STORAGE_HOSTED,
    APIKey,
    Build,
    BuildFile,
    CDNFile,
    DownloadKey,
    Game,
    Upload,
    User,
)


class Store:
    """In-memory repository of every entity the API serves.

    Entities are populated through the ``make_*`` helpers before the server
    starts handling requests. After that the store is only read, so request
    handlers share it without locking. The lock below only guards id
    allocation and inserts while the store is being populated.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._max_ids: dict[str, int] = defaultdict(int)
        self.users: dict[int, User] = {}
        self.api_keys: dict[str, APIKey] = {}
        self.games: dict[int, Game] = {}
        self.uploads: dict[int, Upload] = {}
        self.builds: dict[int, Build] = {}
        self.download_keys: dict[int, DownloadKey] = {}
        self.cdn_files: dict[str, CDNFile] = {}

    # reads

    def find_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def find_user_by_api_key(self, key: str) -> Optional[User]:
        api_key = self.api_keys.get(key)
        if api_key is None:
            return None
        return self.users.get(api_key.user_id)

    def find_game(self, game_id: int) -> Optional[Game]:
        return self.games.get(game_id)

    def find_upload(self, upload_id: int) -> Optional[Upload]:
        return self.uploads.get(upload_id)

    def find_build(self, build_id: int) -> Optional[Build]:
        return self.builds.get(build_id)

    def find_cdn_file(self, path: str) -> Optional[CDNFile]:
        return self.cdn_files.get(path)

    def list_uploads_by_game(self, game_id: int) -> list[Upload]:
        uploads = [upload for upload in self.uploads.values() if upload.game_id == game_id]
        return sorted(uploads, key=lambda upload: upload.id)

    def list_download_keys(self, user_id: int) -> list[DownloadKey]:
        return [key for key in self.download_keys.values() if key.user_id == user_id]

    # population

    def _next_id(self, kind: str) -> int:
        self._max_ids[kind] += 1
        return self._max_ids[kind]

    def make_user(self, username: str, display_name: Optional[str] = None, **fields: Any) -> User:
        with self._lock:
            user = User(
                id=self._next_id("user"),
                username=username,
                display_name=display_name or username,
                **fields,
            )
            self.users[user.id] = user
        return user

    def make_api_key(self, user_id: int, key: Optional[str] = None) -> APIKey:
        if user_id not in self.users:
            raise KeyError(f"unknown user {user_id}")
        with self._lock:
            key_id = self._next_id("api_key")
            api_key = APIKey(id=key_id, user_id=user_id, key=key or f"api-key-{user_id}-{key_id}")
            if api_key.key in self.api_keys:
                raise ValueError(f"duplicate api key {api_key.key!r}")
            self.api_keys[api_key.key] = api_key
        return api_key

    def make_game(self, user_id: int, title: str, **fields: Any) -> Game:
        if user_id not in self.users:
            raise KeyError(f"unknown user {user_id}")
        with self._lock:
            game = Game(id=self._next_id("game"), user_id=user_id, title=title, **fields)
            self.games[game.id] = game
        return game

    def make_download_key(self, user_id: int, game_id: int) -> DownloadKey:
        with self._lock:
            download_key = DownloadKey(id=self._next_id("download_key"), user_id=user_id, game_id=game_id)
            self.download_keys[download_key.id] = download_key
        return download_key

    def put_cdn_file(self, path: str, filename: str, contents: bytes) -> CDNFile:
        cdn_file = CDNFile(filename=filename, size=len(contents), contents=contents)
        with self._lock:
            self.cdn_files[path] = cdn_file
        return cdn_file

    def make_upload(self, game_id: int, filename: str, size: int = 0, **fields: Any) -> Upload:
        """Insert an upload as-is, without creating any asset behind it."""
        if game_id not in self.games:
            raise KeyError(f"unknown game {game_id}")
        with self._lock:
            upload = Upload(
                id=self._next_id("upload"),
                game_id=game_id,
                filename=filename,
                size=size,
                **fields,
            )
            self.uploads[upload.id] = upload
        return upload

    def make_hosted_upload(self, game_id: int, filename: str, contents: bytes, **fields: Any) -> Upload:
        upload = self.make_upload(game_id, filename, size=len(contents), storage=STORAGE_HOSTED, **fields)
        cdn_path = f"/uploads/{upload.id}/{filename}"
        self.put_cdn_file(cdn_path, filename, contents)
        upload = replace(upload, cdn_path=cdn_path)
        with self._lock:
            self.uploads[upload.id] = upload
        return upload

    def make_build_upload(self, game_id: int, filename: str, **fields: Any) -> Upload:
        """Insert an upload of storage kind "build" together with its head build."""
        upload = self.make_upload(game_id, filename, storage=STORAGE_BUILD, **fields)
        with self._lock:
            build = Build(id=self._next_id("build"), upload_id=upload.id)
            self.builds[build.id] = build
            upload = replace(upload, build_id=build.id)
            self.uploads[upload.id] = upload
        return upload

    def make_build_file(
        self,
        build_id: int,
        file_type: str,
        subtype: str,
        filename: str,
        contents: bytes,
    ) -> BuildFile:
        build = self.builds.get(build_id)
        if build is None:
            raise KeyError(f"unknown build {build_id}")
        cdn_path = f"/builds/{build_id}/{file_type}/{subtype}/{filename}"
        self.put_cdn_file(cdn_path, filename, contents)
        build_file = BuildFile(type=file_type, subtype=subtype, cdn_path=cdn_path)
        with self._lock:
            files = dict(build.files)
            files[(file_type, subtype)] = build_file
            self.builds[build_id] = replace(build, files=files)
        return build_file

