"""Base engine class and shared play-log reductions."""
import logging
from datetime import date
from typing import Callable, Hashable, Iterable, Optional

from playstats.config import Settings, get_settings
from playstats.models import Game, Metric, Play, Snapshot

logger = logging.getLogger(__name__)


class Totals:
    """Running totals for one key (a game, player, location or day)."""

    __slots__ = ("minutes", "dates", "plays", "named_players", "anonymous_players", "locations")

    def __init__(self):
        self.minutes = 0
        self.dates = set()
        self.plays = 0
        self.named_players = set()
        self.anonymous_players = 0
        self.locations = set()

    def add(self, play: Play, anonymous_player_id: Optional[int] = None):
        self.minutes += play.duration_min
        self.dates.add(play.date)
        self.plays += 1
        for player_id in play.players:
            if anonymous_player_id is not None and player_id == anonymous_player_id:
                self.anonymous_players += 1
            else:
                self.named_players.add(player_id)
        if play.location_id is not None:
            self.locations.add(play.location_id)

    @property
    def sessions(self) -> int:
        return len(self.dates)

    @property
    def unique_players(self) -> int:
        """Named players once each, anonymous players once per occurrence."""
        return len(self.named_players) + self.anonymous_players

    @property
    def unique_locations(self) -> int:
        return len(self.locations)

    def hours(self, minutes_per_hour: int) -> float:
        return self.minutes / minutes_per_hour

    def value(self, metric: Metric, minutes_per_hour: int) -> float:
        if metric == Metric.HOURS:
            return self.hours(minutes_per_hour)
        if metric == Metric.SESSIONS:
            return self.sessions
        if metric == Metric.PLAYS:
            return self.plays
        raise AssertionError(f"Unhandled metric {metric}")


def in_year(play: Play, year: Optional[int]) -> bool:
    """True if play is in the year (or year is None)."""
    return year is None or play.date.year == year


def in_or_before_year(play: Play, year: Optional[int]) -> bool:
    """True if play is in or before the year (or year is None)."""
    return year is None or play.date.year <= year


class BaseEngine:
    """Base class for statistics engines.

    An engine holds a read-only snapshot and recomputes every answer from it.
    Year, metric and tier are always explicit call parameters.
    """

    name: str = "base"

    def __init__(self, snapshot: Snapshot, settings: Settings | None = None):
        self.snapshot = snapshot
        self.settings = settings or get_settings()

    def plays_in(self, year: Optional[int] = None) -> list[Play]:
        return [play for play in self.snapshot.plays if in_year(play, year)]

    def plays_through(self, year: Optional[int] = None) -> list[Play]:
        return [play for play in self.snapshot.plays if in_or_before_year(play, year)]

    def scoped_plays(self, year: Optional[int] = None, through_year: Optional[int] = None) -> list[Play]:
        """Plays through `through_year` when given, else plays in `year`."""
        if through_year is not None:
            return self.plays_through(through_year)
        return self.plays_in(year)

    def tally(self, plays: Iterable[Play], key: Callable[[Play], Hashable]) -> dict:
        """Reduce plays to Totals per key."""
        anonymous_id = self.snapshot.anonymous_player_id
        totals: dict = {}
        for play in plays:
            k = key(play)
            if k not in totals:
                totals[k] = Totals()
            totals[k].add(play, anonymous_id)
        return totals

    def game_totals(self, plays: Iterable[Play]) -> list[tuple[Game, Totals]]:
        """Per-game totals for known games, in catalog order."""
        per_game = self.tally(plays, lambda play: play.game_id)
        result = [(game, per_game.pop(game.id)) for game in self.snapshot.games if game.id in per_game]
        if per_game:
            logger.debug(f"{self.name}: skipped plays for {len(per_game)} unknown game ids")
        return result

    def hours(self, minutes: float) -> float:
        return minutes / self.settings.minutes_per_hour

    def value(self, totals: Optional[Totals], metric: Metric) -> float:
        """Metric value from totals; 0 when there is no play data."""
        if totals is None:
            return 0
        return totals.value(metric, self.settings.minutes_per_hour)

    def first_play_dates(self) -> dict[int, date]:
        """Earliest play date per game id over the whole log."""
        first_played: dict[int, date] = {}
        for play in self.snapshot.plays:
            if play.game_id not in first_played or play.date < first_played[play.game_id]:
                first_played[play.game_id] = play.date
        return first_played
