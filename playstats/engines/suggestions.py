"""What to play next: picks over owned base games that move a stat forward."""
import logging
import math
from typing import Optional, Union

from playstats.engines.base import BaseEngine, Totals
from playstats.engines.h_index import IndexEngine
from playstats.engines.tiers import ValueClubClassifier
from playstats.models import MILESTONES, Game, Metric, SuggestedGame, Suggestion

logger = logging.getLogger(__name__)

MILESTONE_NAMES = {"fives": "five", "dimes": "dime", "quarters": "quarter", "centuries": "century"}
ALMOST_RATIO = 0.9
COST_CLUB_TIER = "five_dollar"


def count_label(metric: Metric, count: float) -> str:
    """Unit for a count of metric; hours always stay plural."""
    if metric == Metric.HOURS or count != 1:
        return metric.value
    return metric.value[:-1]


def metric_stat(metric: Metric, value: float, prefix: str = "") -> str:
    if metric == Metric.HOURS:
        return f"{value:.1f} {prefix}hours"
    count = int(value)
    return f"{count} {prefix}{count_label(metric, count)}"


class SuggestionEngine(BaseEngine):
    """Suggests games to play next.

    Every candidate list is in a fixed order: the first entry is the pick.
    Ties keep catalog order. Only owned base games are considered, over the
    whole play log.
    """

    name = "suggestions"

    def _owned_games(self) -> list[tuple[Game, Optional[Totals]]]:
        per_game = self.tally(self.snapshot.plays, lambda play: play.game_id)
        return [
            (game, per_game.get(game.id))
            for game in self.snapshot.games
            if game.is_base_game and game.is_owned
        ]

    @staticmethod
    def _suggestion(game: Game, reason: str, stat: str) -> Suggestion:
        return Suggestion(game_id=game.id, name=game.name, reason=reason, stat=stat)

    def next_h_index_candidates(self, metric: Union[Metric, str]) -> list[Suggestion]:
        """Games that would lift the h-index by one, highest value first.

        Enough games are returned to close the gap, plus any tied with the
        last one needed. Empty when owned games already cover the next value.
        """
        metric = Metric.coerce(metric)
        target = IndexEngine(self.snapshot, self.settings).h_index(metric) + 1
        values = [(game, self.value(totals, metric)) for game, totals in self._owned_games()]
        needed = target - sum(1 for _, value in values if value >= target)
        if needed <= 0:
            return []

        candidates = sorted(((g, v) for g, v in values if 0 < v < target), key=lambda c: -c[1])
        if not candidates:
            return []
        cutoff = candidates[min(needed, len(candidates)) - 1][1]
        reason = f"Squaring up: {target} {count_label(metric, target)}"
        return [
            self._suggestion(game, reason, metric_stat(metric, value))
            for game, value in candidates
            if value >= cutoff
        ]

    def milestone_candidates(self, metric: Union[Metric, str]) -> list[Suggestion]:
        """The closest game below each milestone, nearest to its target first."""
        metric = Metric.coerce(metric)
        chasing = []
        for game, totals in self._owned_games():
            value = self.value(totals, metric)
            if value <= 0:
                continue
            target = MILESTONES.next_target(value)
            if target is not None:
                chasing.append((game, value, target))

        best: dict[float, float] = {}
        for _, value, target in chasing:
            best[target] = max(best.get(target, value), value)
        closest = [c for c in chasing if c[1] == best[c[2]]]
        closest.sort(key=lambda c: c[2] - c[1])

        suggestions = []
        for game, value, target in closest:
            prefix = "Almost a" if value >= math.floor(target * ALMOST_RATIO) else "Closest to a"
            name = MILESTONE_NAMES[MILESTONES.tier_name(target)]
            suggestions.append(self._suggestion(game, f"{prefix} {name}", metric_stat(metric, value, "total ")))
        return suggestions

    def cost_club_candidates(self, metric: Union[Metric, str]) -> list[Suggestion]:
        """Games closest to the $5 club, by whole units still needed."""
        metric = Metric.coerce(metric)
        classifier = ValueClubClassifier(self.snapshot, self.settings)
        candidates = classifier.club_candidates(metric, COST_CLUB_TIER, limit=len(self.snapshot.games))
        if not candidates:
            return []

        fewest = min(math.floor(c.additional_needed) for c in candidates)
        threshold = classifier.ladder.coerce(COST_CLUB_TIER)
        unit = metric.value[:-1]
        return [
            Suggestion(
                game_id=c.game_id,
                name=c.name,
                reason=f"Join the ${threshold:g}/{unit} club",
                stat=f"${c.cost_per_metric:.2f}/{unit}",
            )
            for c in candidates
            if math.floor(c.additional_needed) == fewest
        ]

    def longest_unplayed_candidates(self) -> list[Suggestion]:
        """Played games whose last play is the oldest."""
        last_played = [(game, max(totals.dates)) for game, totals in self._owned_games() if totals is not None]
        if not last_played:
            return []
        oldest = min(day for _, day in last_played)
        return [
            self._suggestion(game, "Gathering dust", f"Last played {day.strftime('%b %Y')}")
            for game, day in last_played
            if day == oldest
        ]

    def never_played_candidates(self) -> list[Suggestion]:
        return [
            self._suggestion(game, "Shelf of shame", "Never played")
            for game, totals in self._owned_games()
            if totals is None
        ]

    def suggestions(self, include_cost_clubs: bool = False) -> list[SuggestedGame]:
        """One pick per algorithm in priority order, merged per game.

        A game picked by several algorithms appears once, at its first
        position, with every reason and stat in order.
        """
        pools = [self.next_h_index_candidates(metric) for metric in Metric.ordered()]
        pools += [self.milestone_candidates(metric) for metric in Metric.ordered()]
        if include_cost_clubs:
            pools += [self.cost_club_candidates(metric) for metric in Metric.ordered()]
        pools += [self.longest_unplayed_candidates(), self.never_played_candidates()]

        merged: dict[int, SuggestedGame] = {}
        for pool in pools:
            if not pool:
                continue
            pick = pool[0]
            if pick.game_id not in merged:
                merged[pick.game_id] = SuggestedGame(game_id=pick.game_id, name=pick.name)
            merged[pick.game_id].reasons.append(pick.reason)
            merged[pick.game_id].stats.append(pick.stat)

        logger.debug(f"Suggested {len(merged)} games from {sum(1 for pool in pools if pool)} picks")
        return list(merged.values())
