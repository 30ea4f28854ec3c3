"""Memoizing facade over the engines, including the year-in-review bundle."""
import copy
import logging
from typing import Any, Callable, Optional, Union

from cachetools import TTLCache

from playstats.config import Settings, get_settings
from playstats.engines import (
    ActivityAnalyzer,
    CollectionStats,
    IndexEngine,
    MilestoneClassifier,
    RankingEngine,
    SocialStats,
    SuggestionEngine,
    ValueClubClassifier,
)
from playstats.engines.tiers import Tier
from playstats.models import (
    MILESTONES,
    VALUE_CLUBS,
    Achievement,
    ActivityStats,
    IndexSummary,
    Metric,
    PlayTotals,
    RankingRow,
    RatingBreakdown,
    Snapshot,
    SuggestedGame,
    TierEntry,
    TierSummary,
    YearReview,
)

logger = logging.getLogger(__name__)


class StatsService:
    """Owns one snapshot, the engines over it and a TTL cache of their results.

    Cache keys hold the operation name and every parameter, with metrics and
    tiers normalized first, so a changed year, metric or tier never returns
    a stale entry.
    """

    def __init__(self, snapshot: Snapshot, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.cache: TTLCache = TTLCache(maxsize=self.settings.cache_maxsize, ttl=self.settings.cache_ttl_seconds)
        self.load(snapshot)

    def load(self, snapshot: Snapshot) -> None:
        """Swap in a new snapshot and drop every cached result."""
        self.snapshot = snapshot
        self.index = IndexEngine(snapshot, self.settings)
        self.milestones = MilestoneClassifier(snapshot, self.settings)
        self.value_clubs = ValueClubClassifier(snapshot, self.settings)
        self.activity = ActivityAnalyzer(snapshot, self.settings)
        self.ranking = RankingEngine(snapshot, self.settings)
        self.social = SocialStats(snapshot, self.settings)
        self.collection = CollectionStats(snapshot, self.settings)
        self.suggestion_engine = SuggestionEngine(snapshot, self.settings)
        self.invalidate()
        logger.info(f"Loaded snapshot: {len(snapshot.games)} games, {len(snapshot.plays)} plays")

    def invalidate(self) -> None:
        self.cache.clear()

    def _cached(self, key: tuple, compute: Callable[[], Any]) -> Any:
        """Cached result for key; callers always get their own copy."""
        if key in self.cache:
            logger.debug(f"Cache hit for {key}")
            return copy.deepcopy(self.cache[key])
        result = compute()
        self.cache[key] = result
        return copy.deepcopy(result)

    # H-index

    def h_index(self, metric: Union[Metric, str], year: Optional[int] = None) -> int:
        metric = Metric.coerce(metric)
        return self._cached(("h_index", metric, year), lambda: self.index.h_index(metric, year))

    def h_index_through_year(self, metric: Union[Metric, str], year: int) -> int:
        metric = Metric.coerce(metric)
        return self._cached(
            ("h_index_through_year", metric, year),
            lambda: self.index.h_index_through_year(metric, year),
        )

    def people_h_index(self, year: Optional[int] = None) -> int:
        return self._cached(("people_h_index", year), lambda: self.index.people_h_index(year))

    def index_summary(self, year: int) -> list[IndexSummary]:
        return self._cached(("index_summary", year), lambda: self.index.summary(year))

    # Tiers

    def milestone_summary(self, metric: Union[Metric, str], year: Optional[int] = None) -> list[TierSummary]:
        metric = Metric.coerce(metric)
        return self._cached(("milestone_summary", metric, year), lambda: self.milestones.summary(metric, year))

    def milestone_games(self, metric: Union[Metric, str], tier: Tier, year: Optional[int] = None) -> list[TierEntry]:
        metric, tier = Metric.coerce(metric), MILESTONES.coerce(tier)
        return self._cached(
            ("milestone_games", metric, tier, year),
            lambda: self.milestones.games_in_tier(metric, tier, year),
        )

    def value_club_summary(self, metric: Union[Metric, str], year: Optional[int] = None) -> list[TierSummary]:
        metric = Metric.coerce(metric)
        return self._cached(("value_club_summary", metric, year), lambda: self.value_clubs.summary(metric, year))

    def value_club_games(self, metric: Union[Metric, str], tier: Tier, year: Optional[int] = None) -> list[TierEntry]:
        metric, tier = Metric.coerce(metric), VALUE_CLUBS.coerce(tier)
        return self._cached(
            ("value_club_games", metric, tier, year),
            lambda: self.value_clubs.games_in_tier(metric, tier, year),
        )

    # Activity and rankings

    def time_and_activity(self, year: Optional[int] = None) -> ActivityStats:
        return self._cached(("time_and_activity", year), lambda: self.activity.time_and_activity(year))

    def logging_achievements(self, year: Optional[int] = None) -> list[Achievement]:
        return self._cached(("logging_achievements", year), lambda: self.activity.logging_achievements(year))

    def totals(self, year: Optional[int] = None) -> PlayTotals:
        return self._cached(("totals", year), lambda: self.activity.totals(year))

    def top_games(
        self,
        metric: Union[Metric, str],
        year: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[RankingRow]:
        metric = Metric.coerce(metric)
        return self._cached(("top_games", metric, year, limit), lambda: self.ranking.top_games(metric, year, limit))

    # Collection and suggestions

    def played_rating_breakdown(self, year: Optional[int] = None) -> RatingBreakdown:
        return self._cached(("played_rating_breakdown", year), lambda: self.collection.played_rating_breakdown(year))

    def collection_rating_breakdown(self, year: Optional[int] = None) -> RatingBreakdown:
        return self._cached(
            ("collection_rating_breakdown", year),
            lambda: self.collection.collection_rating_breakdown(year),
        )

    def suggestions(self, include_cost_clubs: bool = False) -> list[SuggestedGame]:
        return self._cached(
            ("suggestions", include_cost_clubs),
            lambda: self.suggestion_engine.suggestions(include_cost_clubs),
        )

    # Year in review

    def year_review(self, year: int) -> YearReview:
        return self._cached(("year_review", year), lambda: self._build_year_review(year))

    def _build_year_review(self, year: int) -> YearReview:
        metrics = Metric.ordered()
        review = YearReview(
            year=year,
            totals=self.totals(year),
            indexes=self.index_summary(year),
            new_index_games={m: self.index.new_h_index_games(m, year) for m in metrics},
            milestones={m: self.milestone_summary(m, year) for m in metrics},
            value_clubs={m: self.value_club_summary(m, year) for m in metrics},
            activity=self.time_and_activity(year),
            achievements=self.logging_achievements(year),
            top_games={m: self.top_games(m, year) for m in metrics},
        )
        logger.info(f"Built year review for {year}: {review.totals.total_plays} plays, "
                    f"{len(review.achievements)} achievements")
        return review
