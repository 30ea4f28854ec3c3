"""H-index calculations (hours, sessions, plays, people)."""
import logging
from typing import Callable, Iterable, Optional, Union

from playstats.engines.base import BaseEngine, Totals
from playstats.models import Game, HIndexEntry, IndexSummary, Metric, NewIndexGame

logger = logging.getLogger(__name__)

Valuation = Callable[[Totals], float]


def h_index_from_values(values: Iterable[float]) -> int:
    """Largest n such that n values are each at least n."""
    h_index = 0
    for rank, value in enumerate(sorted(values, reverse=True), start=1):
        if value >= rank:
            h_index = rank
        else:
            break
    return h_index


class IndexEngine(BaseEngine):
    """H-index variants, per year, all time and through a year.

    A game's value is its accumulated metric (hours, distinct play days or
    play count) or, for the people h-index, its distinct participants. Plays
    of unknown games never contribute.
    """

    name = "h_index"

    def _valuation(self, metric: Union[Metric, str]) -> Valuation:
        metric = Metric.coerce(metric)
        return lambda totals: self.value(totals, metric)

    @staticmethod
    def _people_valuation(totals: Totals) -> float:
        return totals.unique_players

    def _ranked(
        self,
        valuation: Valuation,
        year: Optional[int] = None,
        through_year: Optional[int] = None,
    ) -> list[tuple[Game, float]]:
        """(game, value) pairs sorted by value descending, stable on catalog order."""
        plays = self.scoped_plays(year, through_year)
        ranked = [(game, valuation(totals)) for game, totals in self.game_totals(plays)]
        ranked.sort(key=lambda pair: pair[1], reverse=True)
        return ranked

    def _h_index(self, valuation: Valuation, year: Optional[int] = None, through_year: Optional[int] = None) -> int:
        return h_index_from_values(value for _, value in self._ranked(valuation, year, through_year))

    def _breakdown(
        self,
        valuation: Valuation,
        year: Optional[int] = None,
        through_year: Optional[int] = None,
    ) -> list[HIndexEntry]:
        ranked = self._ranked(valuation, year, through_year)
        h_index = h_index_from_values(value for _, value in ranked)
        return [
            HIndexEntry(
                rank=rank,
                game_id=game.id,
                name=game.name,
                value=value,
                contributes=rank <= h_index,
            )
            for rank, (game, value) in enumerate(ranked, start=1)
        ]

    def _new_games(self, valuation: Valuation, year: int) -> list[NewIndexGame]:
        current = self._breakdown(valuation, through_year=year)
        previous = {entry.game_id: entry for entry in self._breakdown(valuation, through_year=year - 1)}

        new_games = []
        for entry in current:
            if not entry.contributes:
                continue
            before = previous.get(entry.game_id)
            if before is not None and before.contributes:
                continue
            new_games.append(NewIndexGame(
                game_id=entry.game_id,
                name=entry.name,
                value=entry.value,
                this_year_value=entry.value - (before.value if before else 0),
            ))
        return new_games

    # Metric h-index

    def h_index(self, metric: Union[Metric, str], year: Optional[int] = None) -> int:
        """H-index over plays in `year` (all plays when None)."""
        result = self._h_index(self._valuation(metric), year=year)
        logger.debug(f"{metric} h-index for {year or 'all time'}: {result}")
        return result

    def h_index_through_year(self, metric: Union[Metric, str], year: int) -> int:
        """H-index over every play up to and including `year`."""
        return self._h_index(self._valuation(metric), through_year=year)

    def h_index_increase(self, metric: Union[Metric, str], year: int) -> int:
        """Through-year h-index change from the previous year (may be negative or zero)."""
        return self.h_index_through_year(metric, year) - self.h_index_through_year(metric, year - 1)

    def breakdown(
        self,
        metric: Union[Metric, str],
        year: Optional[int] = None,
        through_year: Optional[int] = None,
    ) -> list[HIndexEntry]:
        """Every played game ranked by value, flagging h-index contributors."""
        return self._breakdown(self._valuation(metric), year, through_year)

    def new_h_index_games(self, metric: Union[Metric, str], year: int) -> list[NewIndexGame]:
        """Games contributing through `year` that did not contribute through the year before."""
        return self._new_games(self._valuation(metric), year)

    # People h-index

    def people_h_index(self, year: Optional[int] = None) -> int:
        return self._h_index(self._people_valuation, year=year)

    def people_h_index_through_year(self, year: int) -> int:
        return self._h_index(self._people_valuation, through_year=year)

    def people_h_index_increase(self, year: int) -> int:
        return self.people_h_index_through_year(year) - self.people_h_index_through_year(year - 1)

    def people_breakdown(self, year: Optional[int] = None, through_year: Optional[int] = None) -> list[HIndexEntry]:
        return self._breakdown(self._people_valuation, year, through_year)

    def new_people_h_index_games(self, year: int) -> list[NewIndexGame]:
        return self._new_games(self._people_valuation, year)

    def summary(self, year: int) -> list[IndexSummary]:
        """Year, through-year and increase for every metric, then the people h-index."""
        summaries = []
        for metric in Metric.ordered():
            current = self.h_index_through_year(metric, year)
            previous = self.h_index_through_year(metric, year - 1)
            summaries.append(IndexSummary(
                metric=metric,
                year_value=self.h_index(metric, year),
                through_year=current,
                previous_through_year=previous,
                increase=current - previous,
            ))

        current = self.people_h_index_through_year(year)
        previous = self.people_h_index_through_year(year - 1)
        summaries.append(IndexSummary(
            metric=None,
            year_value=self.people_h_index(year),
            through_year=current,
            previous_through_year=previous,
            increase=current - previous,
        ))
        return summaries
