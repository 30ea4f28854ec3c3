"""Year-in-review bundle."""
from pydantic import BaseModel

from playstats.models.activity import Achievement, ActivityStats, PlayTotals
from playstats.models.analytics import IndexSummary, NewIndexGame, RankingRow, TierSummary
from playstats.models.metric import Metric


class YearReview(BaseModel):
    """Everything the year-in-review panel shows for one year."""
    year: int
    totals: PlayTotals
    indexes: list[IndexSummary]
    new_index_games: dict[Metric, list[NewIndexGame]]
    milestones: dict[Metric, list[TierSummary]]
    value_clubs: dict[Metric, list[TierSummary]]
    activity: ActivityStats
    achievements: list[Achievement]
    top_games: dict[Metric, list[RankingRow]]
