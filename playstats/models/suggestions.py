"""Computed "what to play next" models."""
from pydantic import BaseModel, Field


class Suggestion(BaseModel):
    """One reason to play a game, with the stat behind it."""
    game_id: int
    name: str
    reason: str
    stat: str


class SuggestedGame(BaseModel):
    """A suggested game with every reason it was picked, in priority order."""
    game_id: int
    name: str
    reasons: list[str] = Field(default_factory=list)
    stats: list[str] = Field(default_factory=list)
