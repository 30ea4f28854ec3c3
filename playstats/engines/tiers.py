"""Milestone bands and value clubs with year-over-year diffing."""
import logging
import statistics
from abc import ABC, abstractmethod
from typing import Optional, Union

from playstats.engines.base import BaseEngine, Totals
from playstats.models import (
    MILESTONES,
    VALUE_CLUBS,
    ClubCandidate,
    CostPerMetricStats,
    Game,
    Metric,
    TierEntry,
    TierLadder,
    TierSummary,
)
from playstats.models.metric import ASCENDING

logger = logging.getLogger(__name__)

Tier = Union[str, float, int]


class Classified:
    """A game's classification value as of one year boundary."""

    __slots__ = ("game", "totals", "value", "band")

    def __init__(self, game: Game, totals: Optional[Totals], value: Optional[float], band: int):
        self.game = game
        self.totals = totals
        self.value = value
        self.band = band


class TierClassifier(BaseEngine, ABC):
    """Places games into the bands of a tier ladder.

    Classification always uses play data accumulated through the target
    year (all plays when the year is None), so bands describe lifetime
    standing at that year boundary. Subclasses decide which games take part
    and what value is classified.
    """

    ladder: TierLadder

    def eligible(self, game: Game) -> bool:
        return True

    @abstractmethod
    def valuation(self, game: Game, totals: Optional[Totals], metric: Metric) -> Optional[float]:
        """Value to classify, or None when the game is not classified."""
        pass

    def entry(self, item: Classified, metric: Metric) -> TierEntry:
        return TierEntry(
            game_id=item.game.id,
            name=item.game.name,
            value=item.value,
            metric_value=self.value(item.totals, metric),
        )

    def classify(self, metric: Union[Metric, str], year: Optional[int] = None) -> list[Classified]:
        """Every eligible game with its value and band index through `year`, in catalog order."""
        metric = Metric.coerce(metric)
        per_game = self.tally(self.plays_through(year), lambda play: play.game_id)
        classified = []
        for game in self.snapshot.games:
            if not self.eligible(game):
                continue
            totals = per_game.get(game.id)
            value = self.valuation(game, totals, metric)
            classified.append(Classified(game, totals, value, self.ladder.band_index(value)))
        return classified

    def _sorted(self, entries: list[TierEntry]) -> list[TierEntry]:
        # Ascending ladders list the biggest values first; descending ones the smallest.
        return sorted(entries, key=lambda e: e.value, reverse=self.ladder.direction == ASCENDING)

    def _in_band(self, classified: list[Classified], idx: int) -> list[Classified]:
        return [item for item in classified if item.value is not None and item.band == idx]

    # Single snapshot

    def games_in_tier(self, metric: Union[Metric, str], tier: Tier, year: Optional[int] = None) -> list[TierEntry]:
        """Games whose value falls inside the tier's range through `year`."""
        metric = Metric.coerce(metric)
        idx = self.ladder.index(tier)
        members = self._in_band(self.classify(metric, year), idx)
        return self._sorted([self.entry(item, metric) for item in members])

    def count_in_tier(self, metric: Union[Metric, str], tier: Tier, year: Optional[int] = None) -> int:
        idx = self.ladder.index(tier)
        return len(self._in_band(self.classify(metric, year), idx))

    def cumulative_count(self, metric: Union[Metric, str], tier: Tier, year: Optional[int] = None) -> int:
        """Games in this tier or any better one."""
        idx = self.ladder.index(tier)
        return sum(1 for item in self.classify(metric, year) if item.band >= idx)

    # Year over year

    def _diff(self, current: list[Classified], previous: list[Classified], idx: int):
        before = {item.game.id: item for item in previous}
        entered, graduated, skipped = [], 0, 0
        for item in current:
            prior = before.get(item.game.id)
            prior_band = prior.band if prior is not None else -1
            if item.band == idx and prior_band != idx:
                entered.append((item, prior))
            if prior_band == idx and item.band != idx:
                graduated += 1
            if prior_band < idx < item.band:
                skipped += 1
        return entered, graduated, skipped

    def _entered_entries(self, entered, metric: Metric) -> list[TierEntry]:
        entries = []
        for item, prior in entered:
            entry = self.entry(item, metric)
            entry.this_year_value = entry.metric_value - self.value(prior.totals if prior else None, metric)
            entries.append(entry)
        return self._sorted(entries)

    def tier_increase(self, metric: Union[Metric, str], tier: Tier, year: int) -> int:
        """Change in the tier's count from the previous year (may be negative)."""
        return self.count_in_tier(metric, tier, year) - self.count_in_tier(metric, tier, year - 1)

    def entered_games(self, metric: Union[Metric, str], tier: Tier, year: int) -> list[TierEntry]:
        """Games in the tier through `year` that were not in it through the year before."""
        metric = Metric.coerce(metric)
        idx = self.ladder.index(tier)
        entered, _, _ = self._diff(self.classify(metric, year), self.classify(metric, year - 1), idx)
        return self._entered_entries(entered, metric)

    def graduated_count(self, metric: Union[Metric, str], tier: Tier, year: int) -> int:
        """Games in the tier through the previous year that left it by `year`."""
        idx = self.ladder.index(tier)
        _, graduated, _ = self._diff(self.classify(metric, year), self.classify(metric, year - 1), idx)
        return graduated

    def skipped_count(self, metric: Union[Metric, str], tier: Tier, year: int) -> int:
        """Games that jumped from below the tier to a better tier within `year`."""
        idx = self.ladder.index(tier)
        _, _, skipped = self._diff(self.classify(metric, year), self.classify(metric, year - 1), idx)
        return skipped

    def summary(self, metric: Union[Metric, str], year: Optional[int] = None) -> list[TierSummary]:
        """One TierSummary per tier; year-over-year fields only when a year is given."""
        metric = Metric.coerce(metric)
        current = self.classify(metric, year)
        previous = self.classify(metric, year - 1) if year is not None else None

        summaries = []
        for idx, (name, tier) in enumerate(self.ladder.tiers):
            count = len(self._in_band(current, idx))
            summary = TierSummary(
                tier=tier,
                name=name,
                count=count,
                cumulative_count=sum(1 for item in current if item.band >= idx),
            )
            if previous is not None:
                entered, graduated, skipped = self._diff(current, previous, idx)
                summary.increase = count - len(self._in_band(previous, idx))
                summary.entered = self._entered_entries(entered, metric)
                summary.graduated = graduated
                summary.skipped = skipped
            summaries.append(summary)

        logger.debug(f"{self.name} summary for {metric.value} {year or 'all time'}: "
                     f"{[s.count for s in summaries]}")
        return summaries


class MilestoneClassifier(TierClassifier):
    """Lifetime milestone bands (fives, dimes, quarters, centuries)."""

    name = "milestones"
    ladder = MILESTONES

    def valuation(self, game: Game, totals: Optional[Totals], metric: Metric) -> Optional[float]:
        if totals is None:
            return None
        return self.value(totals, metric)


class ValueClubClassifier(TierClassifier):
    """Cost-per-metric clubs for owned base games with a known price."""

    name = "value_clubs"
    ladder = VALUE_CLUBS

    def eligible(self, game: Game) -> bool:
        return game.is_base_game and game.is_owned

    def valuation(self, game: Game, totals: Optional[Totals], metric: Metric) -> Optional[float]:
        price = game.price_paid
        if price is None or totals is None:
            return None
        metric_value = self.value(totals, metric)
        if metric_value == 0:
            return None
        # Capped at the price so a metric below 1 never costs more than was paid.
        return min(price / metric_value, price)

    def entry(self, item: Classified, metric: Metric) -> TierEntry:
        entry = super().entry(item, metric)
        entry.price_paid = item.game.price_paid
        return entry

    def cost_per_metric_stats(self, metric: Union[Metric, str], year: Optional[int] = None) -> CostPerMetricStats:
        """Cost per metric over owned priced base games, unplayed ones at full price."""
        metric = Metric.coerce(metric)
        ranked = []
        for item in self.classify(metric, year):
            price = item.game.price_paid
            if price is None:
                continue
            metric_value = self.value(item.totals, metric)
            if metric_value == 0 and year is not None and not item.game.owned_acquired_through(year):
                continue
            cost = item.value if item.value is not None else price
            ranked.append((item, cost, metric_value))

        def rank_key(row):
            item, cost, metric_value = row
            totals = item.totals
            if totals is None:
                return (cost, -metric_value, 0, 0, 0)
            return (cost, -metric_value, -totals.minutes, -totals.sessions, -totals.plays)

        ranked.sort(key=rank_key)

        costs = [cost for _, cost, _ in ranked]
        total_cost = sum(item.game.price_paid for item, _, _ in ranked)
        total_metric = sum(metric_value for _, _, metric_value in ranked)
        return CostPerMetricStats(
            metric=metric,
            median=statistics.median(costs) if costs else None,
            game_average=statistics.mean(costs) if costs else None,
            overall_rate=total_cost / total_metric if total_metric > 0 else None,
            game_count=len(ranked),
            games=[
                TierEntry(
                    game_id=item.game.id,
                    name=item.game.name,
                    value=cost,
                    metric_value=metric_value,
                    price_paid=item.game.price_paid,
                )
                for item, cost, metric_value in ranked
            ],
        )

    def club_candidates(
        self,
        metric: Union[Metric, str],
        tier: Tier,
        limit: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[ClubCandidate]:
        """Played games not yet in the club, closest to the threshold first."""
        metric = Metric.coerce(metric)
        threshold = self.ladder.coerce(tier)
        candidates = []
        for item in self.classify(metric, year):
            if item.value is None or self.ladder.at_or_beyond(item.value, threshold):
                continue
            price = item.game.price_paid
            metric_value = self.value(item.totals, metric)
            candidates.append(ClubCandidate(
                game_id=item.game.id,
                name=item.game.name,
                cost_per_metric=item.value,
                metric_value=metric_value,
                additional_needed=price / threshold - metric_value,
                price_paid=price,
            ))
        candidates.sort(key=lambda c: c.additional_needed)
        return candidates[:self.settings.default_top_n if limit is None else limit]
