"""Record and result models."""
from playstats.models.game import Game, GameCopy, GameType
from playstats.models.play import Play, Player, Location
from playstats.models.snapshot import Snapshot
from playstats.models.metric import Metric, TierLadder, MILESTONES, VALUE_CLUBS
from playstats.models.analytics import (
    HIndexEntry,
    NewIndexGame,
    IndexSummary,
    TierEntry,
    TierSummary,
    CostPerMetricStats,
    ClubCandidate,
    RankingRow,
    SinglePlay,
)
from playstats.models.activity import (
    DayGame,
    DaySummary,
    DateSpan,
    ActivityStats,
    DailySessionStats,
    Achievement,
    PlayTotals,
)
from playstats.models.social import ShareStats, SoloGame, SoloStats
from playstats.models.collection import (
    ExpansionCounts,
    GameCost,
    CostTotals,
    AvailableYear,
    PlayedGameRating,
    CollectionGameRating,
    RatingBreakdown,
)
from playstats.models.suggestions import Suggestion, SuggestedGame
from playstats.models.review import YearReview

__all__ = [
    "Game",
    "GameCopy",
    "GameType",
    "Play",
    "Player",
    "Location",
    "Snapshot",
    "Metric",
    "TierLadder",
    "MILESTONES",
    "VALUE_CLUBS",
    "HIndexEntry",
    "NewIndexGame",
    "IndexSummary",
    "TierEntry",
    "TierSummary",
    "CostPerMetricStats",
    "ClubCandidate",
    "RankingRow",
    "SinglePlay",
    "DayGame",
    "DaySummary",
    "DateSpan",
    "ActivityStats",
    "DailySessionStats",
    "Achievement",
    "PlayTotals",
    "ShareStats",
    "SoloGame",
    "SoloStats",
    "ExpansionCounts",
    "GameCost",
    "CostTotals",
    "AvailableYear",
    "PlayedGameRating",
    "CollectionGameRating",
    "RatingBreakdown",
    "Suggestion",
    "SuggestedGame",
    "YearReview",
]
