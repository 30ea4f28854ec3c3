"""Milestone and value club classifier tests."""
import pytest

from playstats.engines import MilestoneClassifier, ValueClubClassifier
from playstats.engines.tiers import TierClassifier
from playstats.errors import InvalidParameterError
from playstats.models import GameType, Metric


def repeat(make_play, game_id, count, day, minutes=60):
    return [make_play(game_id, day, minutes) for _ in range(count)]


@pytest.fixture
def milestone_snapshot(make_game, make_play, make_snapshot):
    """Play counts through 2022 / through 2023.

    Game 1: 6 / 11 (fives to dimes), Game 2: 3 / 33 (jumps to quarters),
    Game 3: 0 / 7 (new in fives), Game 4: 12 / 12, Game 5: 100 / 100.
    """
    games = [make_game(i, f"Game {i}") for i in range(1, 7)]
    plays = (
        repeat(make_play, 1, 6, "2022-05-01")
        + repeat(make_play, 1, 5, "2023-05-01")
        + repeat(make_play, 2, 3, "2022-05-02")
        + repeat(make_play, 2, 30, "2023-05-02")
        + repeat(make_play, 3, 7, "2023-05-03")
        + repeat(make_play, 4, 12, "2022-05-04")
        + repeat(make_play, 5, 100, "2022-05-05")
        + repeat(make_play, 6, 2, "2023-05-06")
    )
    return make_snapshot(games, plays)


@pytest.fixture
def club_snapshot(make_game, make_play, make_snapshot):
    """Cost per play through 2022 / through 2023.

    Game 1: 20 over 2 / 8 plays (10.00 then 2.50), Game 2: 10 over 3 (3.33),
    Game 3: 5 over 20 (0.25). The rest never qualify.
    """
    games = [
        make_game(1, "Azul", price=20, acquired="2022-01-01"),
        make_game(2, "Brass", price=10, acquired="2022-01-01"),
        make_game(3, "Cascadia", price=5, acquired="2022-01-01"),
        make_game(4, "Expansion", GameType.EXPANSION, price=1, acquired="2022-01-01"),
        make_game(5, "Unpriced", acquired="2022-01-01"),
        make_game(6, "Sold", price=5, acquired="2022-01-01", owned=False),
        make_game(7, "Unplayed", price=30, acquired="2022-01-01"),
    ]
    plays = (
        repeat(make_play, 1, 2, "2022-02-01")
        + repeat(make_play, 1, 6, "2023-02-01")
        + repeat(make_play, 2, 3, "2022-02-02")
        + repeat(make_play, 3, 20, "2022-02-03")
        + repeat(make_play, 4, 10, "2022-02-04")
        + repeat(make_play, 5, 10, "2022-02-05")
        + repeat(make_play, 6, 10, "2022-02-06")
    )
    return make_snapshot(games, plays)


class TestTierClassifier:
    """Test the shared classifier base."""

    def test_base_class_is_abstract(self, sample_snapshot, settings):
        """Only ladders that define a valuation can be built."""
        with pytest.raises(TypeError):
            TierClassifier(sample_snapshot, settings)


class TestMilestones:
    """Test milestone band membership."""

    def test_games_in_tier(self, milestone_snapshot, settings):
        """Members sorted by value, largest first."""
        engine = MilestoneClassifier(milestone_snapshot, settings)
        dimes = engine.games_in_tier(Metric.PLAYS, "dimes", 2023)
        assert [(entry.game_id, entry.value) for entry in dimes] == [(4, 12), (1, 11)]

    def test_tier_by_name_or_value(self, milestone_snapshot, settings):
        engine = MilestoneClassifier(milestone_snapshot, settings)
        assert engine.count_in_tier("plays", "quarters", 2023) == engine.count_in_tier("plays", 25, 2023) == 1

    def test_invalid_selectors(self, milestone_snapshot, settings):
        engine = MilestoneClassifier(milestone_snapshot, settings)
        with pytest.raises(InvalidParameterError):
            engine.count_in_tier(Metric.PLAYS, "sevens")
        with pytest.raises(InvalidParameterError):
            engine.count_in_tier(Metric.PLAYS, 7)
        with pytest.raises(InvalidParameterError):
            engine.count_in_tier("minutes", "fives")

    def test_bands_partition_games(self, milestone_snapshot, settings):
        """Every game with at least five plays sits in exactly one band."""
        engine = MilestoneClassifier(milestone_snapshot, settings)
        for year in (2022, 2023, None):
            members = [entry.game_id for tier in (5, 10, 25, 100)
                       for entry in engine.games_in_tier(Metric.PLAYS, tier, year)]
            assert len(members) == len(set(members))
            qualifying = [item.game.id for item in engine.classify(Metric.PLAYS, year)
                          if item.value is not None and item.value >= 5]
            assert sorted(members) == sorted(qualifying)

    def test_cumulative_count(self, milestone_snapshot, settings):
        """Cumulative counts include every better band."""
        engine = MilestoneClassifier(milestone_snapshot, settings)
        assert [engine.cumulative_count(Metric.PLAYS, tier, 2023) for tier in (5, 10, 25, 100)] == [5, 4, 2, 1]

    def test_hours_boundaries(self, make_game, make_play, make_snapshot, settings):
        """Lower bounds are inclusive, upper bounds exclusive."""
        snapshot = make_snapshot(
            [make_game(1), make_game(2), make_game(3)],
            [make_play(1, "2023-01-01", 300), make_play(2, "2023-01-01", 599), make_play(3, "2023-01-01", 600)],
        )
        engine = MilestoneClassifier(snapshot, settings)
        assert [e.game_id for e in engine.games_in_tier(Metric.HOURS, "fives")] == [2, 1]
        assert [e.game_id for e in engine.games_in_tier(Metric.HOURS, "dimes")] == [3]


class TestMilestoneMovement:
    """Test year-over-year milestone diffing."""

    def test_fives(self, milestone_snapshot, settings):
        engine = MilestoneClassifier(milestone_snapshot, settings)
        entered = engine.entered_games(Metric.PLAYS, "fives", 2023)
        assert [(e.game_id, e.this_year_value) for e in entered] == [(3, 7)]
        assert engine.graduated_count(Metric.PLAYS, "fives", 2023) == 1
        assert engine.skipped_count(Metric.PLAYS, "fives", 2023) == 1
        assert engine.tier_increase(Metric.PLAYS, "fives", 2023) == 0

    def test_dimes_and_quarters(self, milestone_snapshot, settings):
        engine = MilestoneClassifier(milestone_snapshot, settings)
        assert [(e.game_id, e.this_year_value) for e in engine.entered_games(Metric.PLAYS, 10, 2023)] == [(1, 5)]
        assert engine.skipped_count(Metric.PLAYS, 10, 2023) == 1
        assert [(e.game_id, e.value, e.this_year_value) for e in engine.entered_games(Metric.PLAYS, 25, 2023)] == [
            (2, 33, 30)
        ]
        assert engine.skipped_count(Metric.PLAYS, 25, 2023) == 0

    def test_top_band_is_never_skipped(self, milestone_snapshot, settings):
        engine = MilestoneClassifier(milestone_snapshot, settings)
        assert engine.skipped_count(Metric.PLAYS, "centuries", 2023) == 0

    def test_entered_minus_graduated_is_increase(self, milestone_snapshot, settings):
        """Band movement always reconciles with the count change."""
        engine = MilestoneClassifier(milestone_snapshot, settings)
        for metric in Metric.ordered():
            for year in (2021, 2022, 2023, 2024):
                for summary in engine.summary(metric, year):
                    assert len(summary.entered) - summary.graduated == summary.increase

    def test_summary(self, milestone_snapshot, settings):
        summary = MilestoneClassifier(milestone_snapshot, settings).summary(Metric.PLAYS, 2023)
        assert [s.name for s in summary] == ["fives", "dimes", "quarters", "centuries"]
        assert [s.count for s in summary] == [1, 2, 1, 1]
        assert [s.increase for s in summary] == [0, 1, 1, 0]
        assert [s.skipped for s in summary] == [1, 1, 0, 0]

    def test_all_time_summary_has_no_movement(self, milestone_snapshot, settings):
        summary = MilestoneClassifier(milestone_snapshot, settings).summary(Metric.PLAYS)
        assert all(s.increase is None and s.entered == [] for s in summary)


class TestValueClubs:
    """Test value club membership."""

    def test_only_owned_priced_base_games(self, club_snapshot, settings):
        engine = ValueClubClassifier(club_snapshot, settings)
        classified = {item.game.id: item.value for item in engine.classify(Metric.PLAYS, 2022)}
        assert set(classified) == {1, 2, 3, 5, 7}
        assert classified[5] is None
        assert classified[7] is None

    def test_membership(self, club_snapshot, settings):
        engine = ValueClubClassifier(club_snapshot, settings)
        assert [engine.count_in_tier(Metric.PLAYS, tier, 2023) for tier in (5, 2.5, 1, 0.5)] == [1, 1, 0, 1]
        assert [engine.cumulative_count(Metric.PLAYS, tier, 2023) for tier in (5, 2.5, 1, 0.5)] == [3, 2, 1, 1]
        entry = engine.games_in_tier(Metric.PLAYS, "two_fifty", 2023)[0]
        assert (entry.game_id, entry.value, entry.metric_value, entry.price_paid) == (1, 2.5, 8, 20)

    def test_cheapest_first(self, make_game, make_play, make_snapshot, settings):
        snapshot = make_snapshot(
            [make_game(1, price=8), make_game(2, price=10)],
            repeat(make_play, 1, 2, "2023-01-01") + repeat(make_play, 2, 3, "2023-01-01"),
        )
        engine = ValueClubClassifier(snapshot, settings)
        assert [e.game_id for e in engine.games_in_tier(Metric.PLAYS, "five_dollar")] == [2, 1]

    def test_cost_capped_at_price(self, make_game, make_play, make_snapshot, settings):
        """Half an hour on a $3 game costs $3, not $6, per hour."""
        snapshot = make_snapshot([make_game(1, price=3)], [make_play(1, "2023-01-01", 30)])
        engine = ValueClubClassifier(snapshot, settings)
        assert engine.games_in_tier(Metric.HOURS, "five_dollar")[0].value == 3

    def test_movement(self, club_snapshot, settings):
        engine = ValueClubClassifier(club_snapshot, settings)
        summary = engine.summary(Metric.PLAYS, 2023)
        assert [s.increase for s in summary] == [0, 1, 0, 0]
        assert [s.skipped for s in summary] == [1, 0, 0, 0]
        assert [(e.game_id, e.this_year_value) for e in summary[1].entered] == [(1, 6)]
        for s in summary:
            assert len(s.entered) - s.graduated == s.increase


class TestCostPerMetric:
    """Test cost-per-metric statistics and club candidates."""

    def test_stats_include_unplayed_games(self, sample_snapshot, settings):
        stats = ValueClubClassifier(sample_snapshot, settings).cost_per_metric_stats(Metric.PLAYS)
        assert [entry.name for entry in stats.games] == ["Cascadia", "Azul", "Brass", "Fog Shelf"]
        assert stats.game_count == 4
        assert stats.median == pytest.approx((40 / 3 + 30) / 2)
        assert stats.game_average == pytest.approx((10 + 40 / 3 + 30 + 50) / 4)
        assert stats.overall_rate == pytest.approx(210 / 9)

    def test_stats_respect_acquisition_year(self, sample_snapshot, settings):
        engine = ValueClubClassifier(sample_snapshot, settings)
        assert engine.cost_per_metric_stats(Metric.PLAYS, 2020).game_count == 0
        assert engine.cost_per_metric_stats(Metric.PLAYS, 2020).median is None

        stats = engine.cost_per_metric_stats(Metric.PLAYS, 2021)
        assert [entry.name for entry in stats.games] == ["Fog Shelf", "Brass"]
        assert stats.overall_rate is None

    def test_club_candidates(self, sample_snapshot, settings):
        engine = ValueClubClassifier(sample_snapshot, settings)
        candidates = engine.club_candidates(Metric.PLAYS, "five_dollar")
        assert [(c.name, c.additional_needed) for c in candidates] == [("Cascadia", 3), ("Azul", 5), ("Brass", 15)]
        assert len(engine.club_candidates(Metric.PLAYS, 5, limit=2)) == 2
