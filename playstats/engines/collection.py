"""Ownership counts, spend and collection diagnostics."""
import logging
from typing import Optional

from playstats.engines.base import BaseEngine
from playstats.models import (
    AvailableYear,
    CollectionGameRating,
    CostTotals,
    ExpansionCounts,
    Game,
    GameCost,
    PlayedGameRating,
    RatingBreakdown,
)
from playstats.models.game import sum_prices

logger = logging.getLogger(__name__)


class CollectionStats(BaseEngine):
    """Collection statistics.

    With a year, ownership counts mean "acquired in that year" regardless of
    current ownership; without one they mean "currently owned".
    """

    name = "collection"

    @staticmethod
    def _held(game: Game, year: Optional[int]) -> bool:
        return game.acquired_in(year) if year is not None else game.is_owned

    def games_owned(self, year: Optional[int] = None) -> int:
        return sum(1 for game in self.snapshot.games if game.is_base_game and self._held(game, year))

    def expansions_owned(self, year: Optional[int] = None) -> ExpansionCounts:
        expansions = sum(1 for game in self.snapshot.games if game.is_expansion and self._held(game, year))
        expandalones = sum(1 for game in self.snapshot.games if game.is_expandalone and self._held(game, year))
        return ExpansionCounts(
            total=expansions + expandalones,
            expandalones=expandalones,
            expansion_only=expansions,
        )

    def entries_owned(self, year: Optional[int] = None) -> int:
        """Copies of any catalog entry: acquired in `year`, or currently owned."""
        count = 0
        for game in self.snapshot.games:
            for copy in game.copies:
                if year is not None:
                    count += bool(copy.acquisition_date and copy.acquisition_date.year == year)
                else:
                    count += copy.owned
        return count

    def total_cost(self, year: Optional[int] = None) -> CostTotals:
        """Spend on owned base game copies (acquired in `year` when given), most expensive first."""
        games = []
        for game in self.snapshot.games:
            if not game.is_base_game:
                continue
            copies = game.owned_copies
            if year is not None:
                copies = [c for c in copies if c.acquisition_date and c.acquisition_date.year == year]
            if copies:
                games.append(GameCost(game_id=game.id, name=game.name, price_paid=sum_prices(copies)))

        games.sort(key=lambda g: g.price_paid or 0, reverse=True)
        return CostTotals(
            total_cost=sum(g.price_paid for g in games if g.price_paid is not None),
            count=len(games),
            games_without_price=sum(1 for g in games if g.price_paid is None),
            games=games,
        )

    def shelf_of_shame(self, year: Optional[int] = None) -> CostTotals:
        """Owned, priced base games that were never played, most expensive first.

        With a year, only copies acquired in or before it count.
        """
        played = {play.game_id for play in self.snapshot.plays}
        games = []
        for game in self.snapshot.games:
            if not game.is_base_game or not game.is_owned or game.id in played:
                continue
            copies = game.owned_acquired_through(year) if year is not None else game.owned_copies
            price = sum_prices(copies)
            if price is not None:
                games.append(GameCost(game_id=game.id, name=game.name, price_paid=price))

        games.sort(key=lambda g: g.price_paid, reverse=True)
        return CostTotals(total_cost=sum(g.price_paid for g in games), count=len(games), games=games)

    def never_played(self, year: Optional[int] = None) -> list[Game]:
        """Base games with no plays: acquired in `year`, or currently owned."""
        played = {play.game_id for play in self.snapshot.plays}
        return [
            game for game in self.snapshot.games
            if game.is_base_game and game.id not in played and self._held(game, year)
        ]

    def missing_price(self) -> list[Game]:
        """Owned base games with an owned copy that has no price."""
        return [
            game for game in self.snapshot.games
            if game.is_base_game and any(copy.price_paid is None for copy in game.owned_copies)
        ]

    def unknown_acquisition_date(self) -> list[Game]:
        """Owned entries of any type with an owned copy lacking an acquisition date."""
        return [
            game for game in self.snapshot.games
            if any(copy.acquisition_date is None for copy in game.owned_copies)
        ]

    def available_years(self) -> list[AvailableYear]:
        """Years with plays or acquisitions, most recent first.

        Acquisition-only years before the first play year are pre-logging.
        """
        play_years = set(self.snapshot.play_years())
        first_play_year = min(play_years) if play_years else None
        years = {year: AvailableYear(year=year, has_plays=True, is_pre_logging=False) for year in play_years}

        for game in self.snapshot.games:
            for copy in game.copies:
                if copy.acquisition_date is None or copy.acquisition_date.year in years:
                    continue
                year = copy.acquisition_date.year
                years[year] = AvailableYear(
                    year=year,
                    has_plays=False,
                    is_pre_logging=first_play_year is not None and year < first_play_year,
                )

        logger.debug(f"Available years: {sorted(years, reverse=True)}")
        return [years[year] for year in sorted(years, reverse=True)]

    @staticmethod
    def _rating_breakdown(games: list) -> RatingBreakdown:
        ratings = [entry.rating for entry in games if entry.rating is not None]
        return RatingBreakdown(
            average=sum(ratings) / len(ratings) if ratings else None,
            rated_count=len(ratings),
            total_count=len(games),
            games=games,
        )

    def played_rating_breakdown(self, year: Optional[int] = None) -> RatingBreakdown:
        """Ratings of games played in `year` (or ever), in catalog order.

        A game counts as owned when any of its plays used an owned copy.
        """
        plays = self.plays_in(year)
        owned_play = {play.game_id for play in plays if play.copy_id is not None}
        games = [
            PlayedGameRating(
                game_id=game.id,
                name=game.name,
                rating=game.rating,
                minutes=totals.minutes,
                plays=totals.plays,
                sessions=totals.sessions,
                owned=game.id in owned_play,
            )
            for game, totals in self.game_totals(plays)
        ]
        return self._rating_breakdown(games)

    def collection_rating_breakdown(self, year: Optional[int] = None) -> RatingBreakdown:
        """Ratings of base games acquired in `year`, or currently owned."""
        games = [
            CollectionGameRating(
                game_id=game.id,
                name=game.name,
                rating=game.rating,
                acquisition_date=game.acquisition_date,
            )
            for game in self.snapshot.games
            if game.is_base_game and self._held(game, year)
        ]
        return self._rating_breakdown(games)
