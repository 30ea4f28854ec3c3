"""Computed index, tier and ranking models."""
from datetime import date
from typing import Optional

from pydantic import BaseModel

from playstats.models.metric import Metric


class HIndexEntry(BaseModel):
    """One game's row in an h-index breakdown."""
    rank: int
    game_id: int
    name: str
    value: float
    contributes: bool


class NewIndexGame(BaseModel):
    """A game that started contributing to an h-index during a year."""
    game_id: int
    name: str
    value: float
    this_year_value: float


class IndexSummary(BaseModel):
    """Year-over-year view of one h-index variant."""
    metric: Optional[Metric]  # None for the people h-index
    year_value: int
    through_year: int
    previous_through_year: int
    increase: int


class TierEntry(BaseModel):
    """A game inside a milestone band or value club."""
    game_id: int
    name: str
    value: float
    metric_value: float
    price_paid: Optional[float] = None
    this_year_value: Optional[float] = None


class TierSummary(BaseModel):
    """Counts and year-over-year movement for one tier."""
    tier: float
    name: str
    count: int
    cumulative_count: int
    increase: Optional[int] = None
    entered: list[TierEntry] = []
    graduated: Optional[int] = None
    skipped: Optional[int] = None


class CostPerMetricStats(BaseModel):
    """Cost-per-metric distribution across owned base games."""
    metric: Metric
    median: Optional[float]
    game_average: Optional[float]
    overall_rate: Optional[float]
    game_count: int
    games: list[TierEntry]


class ClubCandidate(BaseModel):
    """A game not yet in a value club, and how far away it is."""
    game_id: int
    name: str
    cost_per_metric: float
    metric_value: float
    additional_needed: float
    price_paid: float


class RankingRow(BaseModel):
    """A ranked game, player or location."""
    rank: int
    key: int
    name: str
    value: float
    hours: float
    sessions: int
    plays: int


class SinglePlay(BaseModel):
    """A single logged play, for longest-play listings."""
    game_id: int
    name: str
    duration_min: int
    date: date
