"""Computed collection (ownership and cost) models."""
from datetime import date
from typing import Optional, Union

from pydantic import BaseModel


class ExpansionCounts(BaseModel):
    """Owned expansions, split into pure expansions and expandalones."""
    total: int
    expandalones: int
    expansion_only: int


class GameCost(BaseModel):
    """Price paid for a game's relevant copies (None when unknown)."""
    game_id: int
    name: str
    price_paid: Optional[float]


class CostTotals(BaseModel):
    """Total spend over a set of games."""
    total_cost: float
    count: int
    games_without_price: int = 0
    games: list[GameCost]


class AvailableYear(BaseModel):
    """A year that has plays or acquisitions."""
    year: int
    has_plays: bool
    is_pre_logging: bool


class PlayedGameRating(BaseModel):
    """A played game's rating next to its play totals for the period."""
    game_id: int
    name: str
    rating: Optional[float]
    minutes: int
    plays: int
    sessions: int
    owned: bool


class CollectionGameRating(BaseModel):
    """A collection game's rating and when it was acquired."""
    game_id: int
    name: str
    rating: Optional[float]
    acquisition_date: Optional[date]


class RatingBreakdown(BaseModel):
    """Average rating over a set of games; unrated games count only toward the total."""
    average: Optional[float]
    rated_count: int
    total_count: int
    games: list[Union[PlayedGameRating, CollectionGameRating]]
