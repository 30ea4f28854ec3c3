"""Metric selector and tier ladders (milestone bands, value clubs)."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from playstats.errors import InvalidParameterError


class Metric(str, Enum):
    """Closed set of accumulation metrics. Declaration order is display order."""
    HOURS = "hours"
    SESSIONS = "sessions"
    PLAYS = "plays"

    @classmethod
    def ordered(cls) -> list["Metric"]:
        return [cls.HOURS, cls.SESSIONS, cls.PLAYS]

    @classmethod
    def coerce(cls, value: Union["Metric", str]) -> "Metric":
        """Resolve a metric selector, failing loudly on anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError("metric", value) from None

    @property
    def position(self) -> int:
        return Metric.ordered().index(self)


ASCENDING = "ascending"
DESCENDING = "descending"


@dataclass(frozen=True)
class TierLadder:
    """Ordered, non-overlapping bands over a value.

    Ascending ladders (milestones) place a value in band [threshold, next).
    Descending ladders (value clubs) place it in band (next, threshold].
    The last band is unbounded in the ladder's direction.
    """

    name: str
    direction: str
    tiers: tuple[tuple[str, float], ...]

    @property
    def values(self) -> list[float]:
        return [value for _, value in self.tiers]

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.tiers]

    def coerce(self, tier: Union[str, float, int]) -> float:
        """Resolve a tier selector (threshold value or tier name)."""
        if isinstance(tier, str):
            for name, value in self.tiers:
                if name == tier.lower():
                    return value
        elif not isinstance(tier, bool):
            for value in self.values:
                if value == tier:
                    return value
        raise InvalidParameterError(f"{self.name} tier", tier)

    def index(self, tier: Union[str, float, int]) -> int:
        return self.values.index(self.coerce(tier))

    def tier_name(self, tier: Union[str, float, int]) -> str:
        return self.names[self.index(tier)]

    def threshold(self, tier: Union[str, float, int]) -> tuple[float, Optional[float]]:
        """(threshold, next threshold or None for the last tier)."""
        idx = self.index(tier)
        values = self.values
        return values[idx], values[idx + 1] if idx + 1 < len(values) else None

    def _reaches(self, value: float, threshold: float) -> bool:
        if self.direction == ASCENDING:
            return value >= threshold
        return value <= threshold

    def contains(self, value: float, tier: Union[str, float, int]) -> bool:
        threshold, next_threshold = self.threshold(tier)
        if not self._reaches(value, threshold):
            return False
        return next_threshold is None or not self._reaches(value, next_threshold)

    def at_or_beyond(self, value: float, tier: Union[str, float, int]) -> bool:
        """Cumulative membership: this band or any better one."""
        threshold, _ = self.threshold(tier)
        return self._reaches(value, threshold)

    def band_index(self, value: Optional[float]) -> int:
        """Index of the band holding value, -1 if below every band (or no value)."""
        if value is None:
            return -1
        idx = -1
        for i, threshold in enumerate(self.values):
            if self._reaches(value, threshold):
                idx = i
        return idx

    def tier_for(self, value: Optional[float]) -> Optional[float]:
        idx = self.band_index(value)
        return self.values[idx] if idx >= 0 else None

    def next_target(self, value: float) -> Optional[float]:
        """The first tier threshold the value has not reached yet."""
        for threshold in self.values:
            if not self._reaches(value, threshold):
                return threshold
        return None


MILESTONES = TierLadder(
    name="milestone",
    direction=ASCENDING,
    tiers=(("fives", 5), ("dimes", 10), ("quarters", 25), ("centuries", 100)),
)

VALUE_CLUBS = TierLadder(
    name="value club",
    direction=DESCENDING,
    tiers=(("five_dollar", 5), ("two_fifty", 2.5), ("one_dollar", 1), ("fifty_cents", 0.5)),
)
