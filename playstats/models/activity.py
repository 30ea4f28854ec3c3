"""Computed activity and time-series models."""
from datetime import date
from typing import Optional

from pydantic import BaseModel

from playstats.models.metric import Metric


class DayGame(BaseModel):
    """One game's share of a play day."""
    game_id: int
    minutes: int
    plays: int


class DaySummary(BaseModel):
    """Per-calendar-day reduction of the play log."""
    date: date
    minutes: int
    plays: int
    games: list[DayGame]

    @property
    def game_count(self) -> int:
        return len(self.games)


class DateSpan(BaseModel):
    """A run of calendar dates (a streak or a dry spell)."""
    length: int = 0
    start: Optional[date] = None
    end: Optional[date] = None


class ActivityStats(BaseModel):
    """Time and activity statistics for a period."""
    total_days: int = 0
    total_minutes: int = 0
    longest_day: Optional[DaySummary] = None
    shortest_day: Optional[DaySummary] = None
    most_games_day: Optional[DaySummary] = None
    longest_streak: DateSpan = DateSpan()
    longest_dry_spell: DateSpan = DateSpan()


class DailySessionStats(BaseModel):
    """Median and mean minutes per play day."""
    median_minutes: Optional[float] = None
    average_minutes: Optional[float] = None


class Achievement(BaseModel):
    """The date a cumulative counter first reached a round-number threshold."""
    metric: Metric
    threshold: int
    date: date


class PlayTotals(BaseModel):
    """Headline counts for a period."""
    total_plays: int
    total_days: int
    total_minutes: int
    total_hours: float
    games_played: int
    new_to_me: Optional[int] = None
