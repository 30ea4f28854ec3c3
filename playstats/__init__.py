"""Board game play statistics over an in-memory collection and play log."""
from playstats.config import Settings, configure_logging, get_settings
from playstats.errors import InvalidParameterError, StatsError
from playstats.service import StatsService

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "InvalidParameterError",
    "StatsError",
    "StatsService",
]
