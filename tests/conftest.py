"""Shared fixtures: small hand-built collections and play logs."""
from datetime import date
from typing import Optional

import pytest

from playstats.config import Settings
from playstats.models import Game, GameCopy, GameType, Location, Play, Player, Snapshot

SELF_ID = 1
ANONYMOUS_ID = 2
HOME_ID = 1


def build_play(
    game_id: int,
    day: str,
    minutes: int = 60,
    players: tuple = (SELF_ID,),
    location_id: Optional[int] = HOME_ID,
    copy_id: Optional[str] = None,
) -> Play:
    return Play(
        game_id=game_id,
        date=date.fromisoformat(day),
        duration_min=minutes,
        players=list(players),
        location_id=location_id,
        copy_id=copy_id,
    )


def build_game(
    game_id: int,
    name: Optional[str] = None,
    game_type: GameType = GameType.BASE,
    price: Optional[float] = None,
    acquired: Optional[str] = None,
    owned: bool = True,
    copies: Optional[list[GameCopy]] = None,
    rating: Optional[float] = None,
) -> Game:
    if copies is None:
        copies = [GameCopy(
            copy_id=f"c{game_id}",
            acquisition_date=date.fromisoformat(acquired) if acquired else None,
            price_paid=price,
            owned=owned,
        )]
    return Game(id=game_id, name=name or f"Game {game_id}", game_type=game_type, copies=copies, rating=rating)


def build_snapshot(games=(), plays=(), **kwargs) -> Snapshot:
    defaults = dict(
        players=[
            Player(player_id=SELF_ID, name="Me"),
            Player(player_id=ANONYMOUS_ID, name="Anonymous"),
            Player(player_id=3, name="Alice"),
            Player(player_id=4, name="Bob"),
            Player(player_id=5, name="Cara"),
        ],
        locations=[
            Location(location_id=HOME_ID, name="Home"),
            Location(location_id=2, name="Cafe"),
            Location(location_id=3, name="Club"),
        ],
        self_player_id=SELF_ID,
        anonymous_player_id=ANONYMOUS_ID,
        home_location_id=HOME_ID,
    )
    defaults.update(kwargs)
    return Snapshot(games=list(games), plays=list(plays), **defaults)


@pytest.fixture
def make_play():
    return build_play


@pytest.fixture
def make_game():
    return build_game


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment and any .env file."""
    return Settings(
        _env_file=None,
        minutes_per_hour=60,
        hours_achievement_step=100,
        sessions_achievement_step=100,
        plays_achievement_step=250,
        default_top_n=3,
        cache_maxsize=256,
        cache_ttl_seconds=300,
    )


@pytest.fixture
def sample_snapshot() -> Snapshot:
    """A two-year log over a mixed collection.

    Through 2022: Azul 2 plays / 2 days / 120 min, Brass 2 plays / 1 day / 180 min.
    In 2023: Azul 1 play, Brass 1 play, Cascadia 3 plays on 3 days, plus a
    play of a game missing from the catalog.
    """
    games = [
        build_game(1, "Azul", price=40, acquired="2022-03-01"),
        build_game(2, "Brass", price=90, acquired="2021-06-01"),
        build_game(3, "Cascadia", price=30, acquired="2023-01-10"),
        build_game(4, "Dune: Rise of Ix", GameType.EXPANSION, price=35, acquired="2023-02-01"),
        build_game(5, "Echoes", GameType.EXPANDALONE, price=None, acquired=None),
        build_game(6, "Fog Shelf", price=50, acquired="2021-05-05"),
        build_game(7, "Gloomhaven", price=25, acquired="2020-01-01", owned=False),
    ]
    plays = [
        build_play(1, "2022-04-02", 60, players=(1, 3), location_id=1, copy_id="c1"),
        build_play(2, "2022-04-02", 120, players=(1, 3, 4), location_id=1, copy_id="c2"),
        build_play(1, "2022-04-09", 60, players=(1,), location_id=1, copy_id="c1"),
        build_play(2, "2022-04-02", 60, players=(1, 4), location_id=2, copy_id="c2"),
        build_play(1, "2023-01-05", 30, players=(1, 3), location_id=2, copy_id="c1"),
        build_play(2, "2023-01-06", 240, players=(1, 3, 4, 5), location_id=3, copy_id="c2"),
        build_play(3, "2023-01-07", 45, players=(1,), location_id=1, copy_id="c3"),
        build_play(3, "2023-01-08", 45, players=(1, 2, 2), location_id=1, copy_id="c3"),
        build_play(3, "2023-01-10", 90, players=(1, 5), location_id=2, copy_id="c3"),
        build_play(99, "2023-02-01", 600, players=(1, 3), location_id=1),
    ]
    return build_snapshot(games, plays)
