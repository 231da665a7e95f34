"""
Preset tournaments: the two-legged champions bracket and its conference bracket.
"""
from typing import Iterable, Optional, Sequence

from .bracket import build_bracket
from .derived import DEFAULT_DERIVED_KICKOFF_HOUR, DEFAULT_DERIVED_NAME, DEFAULT_DERIVED_SLUG, build_derived_tournament
from .models import KnockoutResult, TournamentBracket, TournamentParticipant
from .scheduling import DEFAULT_ROUND_SPACING_DAYS, DEFAULT_TIMEZONE, DateLike, LATEST_KICKOFF_HOUR, LEG_HOUR_STEP

CHAMPIONS_NAME = 'Champions League'
CHAMPIONS_SLUG = 'champions-league'
CHAMPIONS_KICKOFF_HOUR = 11
CHAMPIONS_LEGS_PER_TIE = 2
CHAMPIONS_SECOND_LEG_HOUR = 20


def champions_leg_hours(kickoff_hour: int, legs_per_tie: int,
                        leg_kickoff_hours: Optional[Sequence[int]] = None):
    """Leg hours for the champions bracket: [kickoff, 20] unless given, padded to one per leg."""
    if leg_kickoff_hours:
        hours = list(leg_kickoff_hours)
    else:
        hours = [kickoff_hour, CHAMPIONS_SECOND_LEG_HOUR]
    while len(hours) < legs_per_tie:
        hours.append(min(hours[-1] + LEG_HOUR_STEP, LATEST_KICKOFF_HOUR))
    return hours


def build_champions_tournament(participants: Sequence[TournamentParticipant],
                               name: str = CHAMPIONS_NAME,
                               slug: str = CHAMPIONS_SLUG,
                               kickoff_hour: Optional[int] = None,
                               timezone: str = DEFAULT_TIMEZONE,
                               start_date: Optional[DateLike] = None,
                               round_spacing_days: int = DEFAULT_ROUND_SPACING_DAYS,
                               legs_per_tie: int = CHAMPIONS_LEGS_PER_TIE,
                               leg_kickoff_hours: Optional[Sequence[int]] = None) -> TournamentBracket:
    """
    Primary tournament of the season, two legs per tie by default.

    The kickoff hour defaults to the first explicit leg hour, then to 11:00.
    """
    if kickoff_hour is None:
        kickoff_hour = leg_kickoff_hours[0] if leg_kickoff_hours else CHAMPIONS_KICKOFF_HOUR

    return build_bracket(
        participants,
        name=name,
        slug=slug,
        kickoff_hour=kickoff_hour,
        timezone=timezone,
        start_date=start_date,
        round_spacing_days=round_spacing_days,
        legs_per_tie=legs_per_tie,
        leg_kickoff_hours=champions_leg_hours(kickoff_hour, legs_per_tie, leg_kickoff_hours),
    )


def build_conference_tournament(champions: TournamentBracket,
                                round_one_results: Iterable[KnockoutResult],
                                name: str = DEFAULT_DERIVED_NAME,
                                slug: str = DEFAULT_DERIVED_SLUG,
                                kickoff_hour: int = DEFAULT_DERIVED_KICKOFF_HOUR,
                                **options) -> TournamentBracket:
    """Conference bracket for the teams knocked out in round one of champions."""
    return build_derived_tournament(champions, round_one_results, name=name, slug=slug,
                                    kickoff_hour=kickoff_hour, **options)
