"""Player, location and solo play statistics."""
import logging
from typing import Optional

from playstats.engines.base import BaseEngine, Totals
from playstats.models import Play, ShareStats, SoloGame, SoloStats

logger = logging.getLogger(__name__)


def percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole else 0


class SocialStats(BaseEngine):
    """Who plays, where, and how much is played alone."""

    name = "social"

    def _share(self, key: int, name: str, totals: Totals, overall: Totals) -> ShareStats:
        return ShareStats(
            key=key,
            name=name,
            minutes=totals.minutes,
            sessions=totals.sessions,
            plays=totals.plays,
            minutes_percent=percent(totals.minutes, overall.minutes),
            sessions_percent=percent(totals.sessions, overall.sessions),
            plays_percent=percent(totals.plays, overall.plays),
        )

    def _overall(self, plays: list[Play]) -> Totals:
        overall = Totals()
        for play in plays:
            overall.add(play)
        return overall

    def player_stats(self, year: Optional[int] = None) -> list[ShareStats]:
        """Named players other than self, in player list order, with shares of all play."""
        plays = self.plays_in(year)
        excluded = {self.snapshot.self_player_id, self.snapshot.anonymous_player_id}
        per_player: dict[int, Totals] = {}
        for play in plays:
            for player_id in set(play.players) - excluded:
                per_player.setdefault(player_id, Totals()).add(play)

        overall = self._overall(plays)
        stats = [
            self._share(player.player_id, player.name, per_player[player.player_id], overall)
            for player in self.snapshot.players
            if player.player_id in per_player and player.player_id not in excluded
        ]
        unknown = set(per_player) - {s.key for s in stats}
        if unknown:
            logger.debug(f"Skipped {len(unknown)} unknown player ids")
        return stats

    def location_stats(self, year: Optional[int] = None) -> list[ShareStats]:
        """Locations in location list order, with shares of all play."""
        plays = self.plays_in(year)
        per_location = self.tally(
            (play for play in plays if play.location_id is not None),
            lambda play: play.location_id,
        )
        overall = self._overall(plays)
        return [
            self._share(location.location_id, location.name, per_location[location.location_id], overall)
            for location in self.snapshot.locations
            if location.location_id in per_location
        ]

    def is_solo(self, play: Play) -> bool:
        return self.snapshot.self_player_id is not None and play.players == [self.snapshot.self_player_id]

    def solo_stats(self, year: Optional[int] = None) -> SoloStats:
        """Plays where self is the only participant, against all plays in the period."""
        plays = self.plays_in(year)
        solo_plays = [play for play in plays if self.is_solo(play)]
        overall = self._overall(plays)
        solo = self._overall(solo_plays)

        shared_dates = {play.date for play in plays if not self.is_solo(play)}
        return SoloStats(
            total_solo_minutes=solo.minutes,
            total_solo_sessions=solo.sessions,
            total_solo_plays=solo.plays,
            solo_only_days=len(solo.dates - shared_dates),
            total_minutes=overall.minutes,
            total_sessions=overall.sessions,
            total_plays=overall.plays,
            games=[
                SoloGame(
                    game_id=game.id,
                    name=game.name,
                    minutes=totals.minutes,
                    sessions=totals.sessions,
                    plays=totals.plays,
                )
                for game, totals in self.game_totals(solo_plays)
            ],
        )
