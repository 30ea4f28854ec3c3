"""Statistics engines over a play log snapshot."""
from playstats.engines.h_index import IndexEngine
from playstats.engines.tiers import MilestoneClassifier, ValueClubClassifier
from playstats.engines.activity import ActivityAnalyzer
from playstats.engines.ranking import RankingEngine
from playstats.engines.social import SocialStats
from playstats.engines.collection import CollectionStats
from playstats.engines.suggestions import SuggestionEngine

__all__ = [
    "IndexEngine",
    "MilestoneClassifier",
    "ValueClubClassifier",
    "ActivityAnalyzer",
    "RankingEngine",
    "SocialStats",
    "CollectionStats",
    "SuggestionEngine",
]
