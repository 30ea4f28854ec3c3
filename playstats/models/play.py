"""Play log and reference models."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class Play(BaseModel):
    """A single logged play of a game."""
    game_id: int
    date: date
    duration_min: int = Field(default=0, ge=0)
    players: list[int] = Field(default_factory=list)
    location_id: Optional[int] = None
    copy_id: Optional[str] = None  # None means not played with an owned copy

    class Config:
        frozen = True

    @property
    def year(self) -> int:
        return self.date.year


class Player(BaseModel):
    """A person who appears in the play log."""
    player_id: int
    name: str

    class Config:
        frozen = True


class Location(BaseModel):
    """A place where plays happen."""
    location_id: int
    name: str

    class Config:
        frozen = True
