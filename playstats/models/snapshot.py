"""In-memory snapshot of a collection and its play log."""
from typing import Optional

from pydantic import BaseModel, Field

from playstats.models.game import Game
from playstats.models.play import Location, Play, Player


class Snapshot(BaseModel):
    """Everything the engines read. Never mutated by the engines."""
    games: list[Game] = Field(default_factory=list)
    plays: list[Play] = Field(default_factory=list)
    players: list[Player] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
    self_player_id: Optional[int] = None
    anonymous_player_id: Optional[int] = None
    home_location_id: Optional[int] = None

    class Config:
        frozen = True

    def games_by_id(self) -> dict[int, Game]:
        return {game.id: game for game in self.games}

    def play_years(self) -> list[int]:
        """Distinct years with at least one play, most recent first."""
        return sorted({play.year for play in self.plays}, reverse=True)
