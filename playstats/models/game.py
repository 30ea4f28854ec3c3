"""Game and copy models."""
from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class GameType(str, Enum):
    """Catalog classification of a game entry."""
    BASE = "base"
    EXPANSION = "expansion"
    EXPANDALONE = "expandalone"
    UNKNOWN = "unknown"

    @classmethod
    def from_flags(cls, is_base: bool = False, is_expansion: bool = False, is_expandalone: bool = False) -> "GameType":
        """Classify from source flags. Expandalone wins over base and expansion."""
        if is_expandalone:
            return cls.EXPANDALONE
        if is_base:
            return cls.BASE
        if is_expansion:
            return cls.EXPANSION
        return cls.UNKNOWN


class GameCopy(BaseModel):
    """A physical copy of a game."""
    copy_id: Optional[str] = None
    acquisition_date: Optional[date] = None
    price_paid: Optional[float] = None
    owned: bool = False

    class Config:
        frozen = True


class Game(BaseModel):
    """A catalog entry, with one record per copy ever held."""
    id: int
    name: str
    game_type: GameType = GameType.UNKNOWN
    copies: list[GameCopy] = Field(default_factory=list)
    rating: Optional[float] = None

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _classify_from_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "game_type" in data:
            return data
        flags = ("is_base_game", "is_expansion", "is_expandalone")
        if not any(flag in data for flag in flags):
            return data
        game_type = GameType.from_flags(*(bool(data.get(flag)) for flag in flags))
        data = {k: v for k, v in data.items() if k not in flags}
        data["game_type"] = game_type
        return data

    @property
    def is_base_game(self) -> bool:
        return self.game_type == GameType.BASE

    @property
    def is_expansion(self) -> bool:
        return self.game_type == GameType.EXPANSION

    @property
    def is_expandalone(self) -> bool:
        return self.game_type == GameType.EXPANDALONE

    @property
    def owned_copies(self) -> list[GameCopy]:
        return [copy for copy in self.copies if copy.owned]

    @property
    def is_owned(self) -> bool:
        """True if any copy is currently owned."""
        return any(copy.owned for copy in self.copies)

    @property
    def price_paid(self) -> Optional[float]:
        """Total price paid over owned copies, or None if no owned copy has a price."""
        return sum_prices(self.owned_copies)

    @property
    def acquisition_date(self) -> Optional[date]:
        """Date of the first owned copy, or of the first copy when none is owned."""
        owned = self.owned_copies
        if owned:
            return owned[0].acquisition_date
        return self.copies[0].acquisition_date if self.copies else None

    def acquired_in(self, year: int) -> bool:
        """True if any copy was acquired in the year."""
        return any(copy.acquisition_date and copy.acquisition_date.year == year for copy in self.copies)

    def owned_acquired_through(self, year: int) -> list[GameCopy]:
        """Owned copies acquired in or before the year."""
        return [
            copy for copy in self.owned_copies
            if copy.acquisition_date and copy.acquisition_date.year <= year
        ]


def sum_prices(copies: list[GameCopy]) -> Optional[float]:
    prices = [copy.price_paid for copy in copies if copy.price_paid is not None]
    return sum(prices) if prices else None
