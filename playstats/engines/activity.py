"""Day-level activity: daily totals, streaks, dry spells and logging achievements."""
import logging
import statistics
from datetime import date, timedelta
from typing import Optional

from playstats.engines.base import BaseEngine
from playstats.models import (
    Achievement,
    ActivityStats,
    DailySessionStats,
    DateSpan,
    DayGame,
    DaySummary,
    Metric,
    PlayTotals,
)

logger = logging.getLogger(__name__)


def longest_streak(dates: list[date]) -> DateSpan:
    """Longest run of consecutive calendar dates. Earliest run wins ties."""
    if not dates:
        return DateSpan()
    best = DateSpan(length=1, start=dates[0], end=dates[0])
    start, length = dates[0], 1
    for prev, curr in zip(dates, dates[1:]):
        if (curr - prev).days == 1:
            length += 1
        else:
            start, length = curr, 1
        if length > best.length:
            best = DateSpan(length=length, start=start, end=curr)
    return best


def longest_dry_spell(dates: list[date]) -> DateSpan:
    """Longest gap of days without plays between two play days."""
    best = DateSpan()
    for prev, curr in zip(dates, dates[1:]):
        gap = (curr - prev).days - 1
        if gap > best.length:
            best = DateSpan(length=gap, start=prev + timedelta(days=1), end=curr - timedelta(days=1))
    return best


class ActivityAnalyzer(BaseEngine):
    """Per-day reductions of the play log and the statistics built on them."""

    name = "activity"

    def daily_totals(self, year: Optional[int] = None) -> list[DaySummary]:
        """One summary per calendar day with plays, sorted by date."""
        days: dict[date, dict[int, DayGame]] = {}
        for play in self.plays_in(year):
            games = days.setdefault(play.date, {})
            game = games.get(play.game_id)
            if game is None:
                game = games[play.game_id] = DayGame(game_id=play.game_id, minutes=0, plays=0)
            game.minutes += play.duration_min
            game.plays += 1

        return [
            DaySummary(
                date=day,
                minutes=sum(game.minutes for game in games.values()),
                plays=sum(game.plays for game in games.values()),
                games=list(games.values()),
            )
            for day, games in sorted(days.items())
        ]

    def time_and_activity(self, year: Optional[int] = None) -> ActivityStats:
        """Longest/shortest/busiest days, longest streak and longest dry spell."""
        days = self.daily_totals(year)
        if not days:
            return ActivityStats()

        longest_day = shortest_day = most_games_day = days[0]
        for day in days[1:]:
            if day.minutes > longest_day.minutes:
                longest_day = day
            if day.minutes < shortest_day.minutes:
                shortest_day = day
            if day.game_count > most_games_day.game_count:
                most_games_day = day

        dates = [day.date for day in days]
        stats = ActivityStats(
            total_days=len(days),
            total_minutes=sum(day.minutes for day in days),
            longest_day=longest_day,
            shortest_day=shortest_day,
            most_games_day=most_games_day,
            longest_streak=longest_streak(dates),
            longest_dry_spell=longest_dry_spell(dates),
        )
        logger.debug(f"Activity for {year or 'all time'}: {stats.total_days} days, "
                     f"streak {stats.longest_streak.length}, dry spell {stats.longest_dry_spell.length}")
        return stats

    def daily_session_stats(self, year: Optional[int] = None) -> DailySessionStats:
        """Median and mean minutes over play days with recorded time."""
        minutes = [day.minutes for day in self.daily_totals(year) if day.minutes > 0]
        if not minutes:
            return DailySessionStats()
        return DailySessionStats(
            median_minutes=statistics.median(minutes),
            average_minutes=statistics.mean(minutes),
        )

    def logging_achievements(self, year: Optional[int] = None) -> list[Achievement]:
        """Dates on which cumulative hours, sessions and plays crossed round numbers.

        The scan always runs over the whole log so running totals are lifetime
        totals; `year` only filters which achievements are returned.
        """
        settings = self.settings
        steps = {
            Metric.HOURS: settings.hours_achievement_step,
            Metric.SESSIONS: settings.sessions_achievement_step,
            Metric.PLAYS: settings.plays_achievement_step,
        }
        targets = dict(steps)
        counts = {Metric.HOURS: 0, Metric.SESSIONS: 0, Metric.PLAYS: 0}
        minutes = 0
        seen_dates = set()
        achievements = []

        for play in sorted(self.snapshot.plays, key=lambda p: p.date):
            minutes += play.duration_min
            counts[Metric.HOURS] = minutes // settings.minutes_per_hour
            if play.date not in seen_dates:
                seen_dates.add(play.date)
                counts[Metric.SESSIONS] += 1
            counts[Metric.PLAYS] += 1

            for metric in Metric.ordered():
                while counts[metric] >= targets[metric]:
                    achievements.append(Achievement(metric=metric, threshold=targets[metric], date=play.date))
                    targets[metric] += steps[metric]

        if year is not None:
            achievements = [a for a in achievements if a.date.year == year]
        achievements.sort(key=lambda a: (a.metric.position, a.threshold))
        return achievements

    def totals(self, year: Optional[int] = None) -> PlayTotals:
        """Headline counts; new-to-me games only when a year is given."""
        plays = self.plays_in(year)
        minutes = sum(play.duration_min for play in plays)

        new_to_me = None
        if year is not None:
            new_to_me = sum(1 for first in self.first_play_dates().values() if first.year == year)

        return PlayTotals(
            total_plays=len(plays),
            total_days=len({play.date for play in plays}),
            total_minutes=minutes,
            total_hours=self.hours(minutes),
            games_played=len({play.game_id for play in plays}),
            new_to_me=new_to_me,
        )
