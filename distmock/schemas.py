from typing import Optional

from pydantic import BaseModel


class UserOut(BaseModel):
    id: int
    gamer: bool
    developer: bool
    press_user: bool
    display_name: str
    username: str
    url: str = ""
    cover_url: str = ""
    allow_telemetry: Optional[bool] = None

    class Config:
        from_attributes = True


class GameOut(BaseModel):
    id: int
    user_id: int
    title: str
    min_price: int
    type: str
    classification: str

    class Config:
        from_attributes = True


class UploadOut(BaseModel):
    id: int
    game_id: int
    type: str
    storage: str
    size: int
    filename: str
    url: str = ""
    platforms: dict[str, str] = {}

    class Config:
        from_attributes = True
