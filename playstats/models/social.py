"""Computed social and location models."""
from pydantic import BaseModel


class ShareStats(BaseModel):
    """A player's or location's totals and share of the period's totals."""
    key: int
    name: str
    minutes: int
    sessions: int
    plays: int
    minutes_percent: float
    sessions_percent: float
    plays_percent: float


class SoloGame(BaseModel):
    """Solo totals for one game."""
    game_id: int
    name: str
    minutes: int
    sessions: int
    plays: int


class SoloStats(BaseModel):
    """Solo play (self as the only participant) against all play."""
    total_solo_minutes: int = 0
    total_solo_sessions: int = 0
    total_solo_plays: int = 0
    solo_only_days: int = 0
    total_minutes: int = 0
    total_sessions: int = 0
    total_plays: int = 0
    games: list[SoloGame] = []
