from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

STORAGE_HOSTED = "hosted"
STORAGE_BUILD = "build"


@dataclass(frozen=True)
class User:
    id: int
    username: str
    display_name: str
    gamer: bool = True
    developer: bool = False
    press_user: bool = False
    allow_telemetry: bool = False


@dataclass(frozen=True)
class APIKey:
    id: int
    user_id: int
    key: str


@dataclass(frozen=True)
class Game:
    id: int
    user_id: int
    title: str
    min_price: int = 0
    type: str = "default"
    classification: str = "game"
    published: bool = True


@dataclass(frozen=True)
class Upload:
    id: int
    game_id: int
    filename: str
    size: int
    storage: str = STORAGE_HOSTED
    type: str = "default"
    url: str = ""
    platform_linux: bool = False
    platform_windows: bool = False
    platform_mac: bool = False
    # head build, set when storage is "build"
    build_id: Optional[int] = None
    # set when storage is "hosted"
    cdn_path: Optional[str] = None


@dataclass(frozen=True)
class BuildFile:
    type: str
    subtype: str
    cdn_path: str


@dataclass(frozen=True)
class Build:
    id: int
    upload_id: int
    files: dict[tuple[str, str], BuildFile] = field(default_factory=dict)


@dataclass(frozen=True)
class CDNFile:
    filename: str
    size: int
    contents: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.size != len(self.contents):
            raise ValueError(
                f"{self.filename}: size {self.size} does not match {len(self.contents)} content bytes"
            )


@dataclass(frozen=True)
class DownloadKey:
    id: int
    user_id: int
    game_id: int


def get_build_file(build: Build, file_type: str, subtype: str) -> Optional[BuildFile]:
    return build.files.get((file_type, subtype))
