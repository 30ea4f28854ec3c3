"""Top-N rankings of games, players and locations."""
import logging
from typing import Callable, Hashable, Optional, Union

from playstats.engines.base import BaseEngine, Totals
from playstats.models import Metric, Play, RankingRow, SinglePlay

logger = logging.getLogger(__name__)

Candidate = tuple[Hashable, str, Totals]


class RankingEngine(BaseEngine):
    """Ranks keyed totals by a metric, breaking ties by hours, sessions, plays.

    Remaining ties keep input order: catalog order for games, reference
    collection order for players and locations.
    """

    name = "ranking"

    def _limit(self, limit: Optional[int]) -> int:
        return self.settings.default_top_n if limit is None else limit

    def _rows(
        self,
        candidates: list[Candidate],
        value: Callable[[Totals], float],
        limit: Optional[int] = None,
    ) -> list[RankingRow]:
        ranked = sorted(candidates, key=lambda c: (-value(c[2]), -c[2].minutes, -c[2].sessions, -c[2].plays))
        return [
            RankingRow(
                rank=rank,
                key=key,
                name=name,
                value=value(totals),
                hours=totals.hours(self.settings.minutes_per_hour),
                sessions=totals.sessions,
                plays=totals.plays,
            )
            for rank, (key, name, totals) in enumerate(ranked[:self._limit(limit)], start=1)
        ]

    def _metric_rows(self, candidates: list[Candidate], metric: Union[Metric, str], limit: Optional[int]):
        metric = Metric.coerce(metric)
        return self._rows(candidates, lambda totals: self.value(totals, metric), limit)

    def _game_candidates(self, plays: list[Play]) -> list[Candidate]:
        return [(game.id, game.name, totals) for game, totals in self.game_totals(plays)]

    # Games

    def top_games(
        self,
        metric: Union[Metric, str],
        year: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[RankingRow]:
        return self._metric_rows(self._game_candidates(self.plays_in(year)), metric, limit)

    def top_games_by_unique_players(self, year: Optional[int] = None, limit: Optional[int] = None) -> list[RankingRow]:
        """Games by distinct participants (anonymous players count once per play)."""
        candidates = self._game_candidates(self.plays_in(year))
        return self._rows(candidates, lambda totals: totals.unique_players, limit)

    def top_games_by_unique_locations(self, year: Optional[int] = None, limit: Optional[int] = None) -> list[RankingRow]:
        candidates = self._game_candidates(self.plays_in(year))
        return self._rows(candidates, lambda totals: totals.unique_locations, limit)

    def _top_by_first_play(self, metric: Union[Metric, str], year: int, new: bool) -> Optional[RankingRow]:
        first_played = self.first_play_dates()
        candidates = [
            candidate for candidate in self._game_candidates(self.plays_in(year))
            if (first_played[candidate[0]].year == year) == new
        ]
        rows = self._metric_rows(candidates, metric, 1)
        return rows[0] if rows else None

    def top_new_to_me_game(self, metric: Union[Metric, str], year: int) -> Optional[RankingRow]:
        """Best game whose first ever play falls in `year`."""
        return self._top_by_first_play(metric, year, new=True)

    def top_returning_game(self, metric: Union[Metric, str], year: int) -> Optional[RankingRow]:
        """Best game played in `year` but first played before it."""
        return self._top_by_first_play(metric, year, new=False)

    def longest_single_plays(self, year: Optional[int] = None, limit: Optional[int] = None) -> list[SinglePlay]:
        """Individual plays by duration; earlier log entries win ties."""
        games = self.snapshot.games_by_id()
        plays = [play for play in self.plays_in(year) if play.game_id in games]
        plays.sort(key=lambda play: play.duration_min, reverse=True)
        return [
            SinglePlay(
                game_id=play.game_id,
                name=games[play.game_id].name,
                duration_min=play.duration_min,
                date=play.date,
            )
            for play in plays[:self._limit(limit)]
        ]

    # People and places

    def top_players(
        self,
        metric: Union[Metric, str],
        year: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[RankingRow]:
        """Named players other than self, ranked by the plays they took part in."""
        excluded = {self.snapshot.self_player_id, self.snapshot.anonymous_player_id}
        per_player: dict[int, Totals] = {}
        for play in self.plays_in(year):
            for player_id in set(play.players) - excluded:
                per_player.setdefault(player_id, Totals()).add(play, self.snapshot.anonymous_player_id)

        candidates = [
            (player.player_id, player.name, per_player[player.player_id])
            for player in self.snapshot.players
            if player.player_id in per_player and player.player_id not in excluded
        ]
        return self._metric_rows(candidates, metric, limit)

    def top_locations(
        self,
        metric: Union[Metric, str],
        year: Optional[int] = None,
        limit: Optional[int] = None,
        exclude_home: bool = False,
    ) -> list[RankingRow]:
        per_location = self.tally(
            (play for play in self.plays_in(year) if play.location_id is not None),
            lambda play: play.location_id,
        )
        home = self.snapshot.home_location_id if exclude_home else None
        candidates = [
            (location.location_id, location.name, per_location[location.location_id])
            for location in self.snapshot.locations
            if location.location_id in per_location and location.location_id != home
        ]
        return self._metric_rows(candidates, metric, limit)
