"""
Derived (conference) tournaments built from the round-one losers of another bracket.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

import pytz

from .bracket import build_bracket
from .errors import NoEligibleTeamsError
from .models import KnockoutResult, TournamentBracket, TournamentParticipant
from .scheduling import DEFAULT_ROUND_SPACING_DAYS, DEFAULT_TIMEZONE, DateLike

logger = logging.getLogger(__name__)

DEFAULT_DERIVED_NAME = 'Conference League'
DEFAULT_DERIVED_SLUG = 'conference-league'
DEFAULT_DERIVED_KICKOFF_HOUR = 12


def round_one_losers(source: TournamentBracket,
                     round_one_results: Iterable[KnockoutResult]) -> List[TournamentParticipant]:
    """
    Participants of source that lost a round-one result.

    Results whose loser is not a participant of source are skipped. A team
    listed as loser more than once appears once.
    """
    participants_by_team_id = source.participant_by_team_id()
    losers = {}
    for result in round_one_results:
        loser = participants_by_team_id.get(result.loser_team_id)
        if loser is None:
            logger.debug("Skipping result %s: loser %s is not in %s",
                         result.match_id, result.loser_team_id, source.slug)
            continue
        losers[loser.team_id] = loser
    return list(losers.values())


def build_derived_tournament(source: TournamentBracket,
                             round_one_results: Iterable[KnockoutResult],
                             name: str = DEFAULT_DERIVED_NAME,
                             slug: str = DEFAULT_DERIVED_SLUG,
                             kickoff_hour: int = DEFAULT_DERIVED_KICKOFF_HOUR,
                             timezone: Optional[str] = None,
                             start_date: Optional[DateLike] = None,
                             round_spacing_days: int = DEFAULT_ROUND_SPACING_DAYS,
                             legs_per_tie: int = 1,
                             leg_kickoff_hours: Optional[Sequence[Optional[int]]] = None) -> TournamentBracket:
    """
    Build a secondary bracket from the teams that lost in round one of source.

    The timezone falls back to the source bracket's and the start date to one
    day from now. Losers are re-seeded from their league records.
    """
    losers = round_one_losers(source, round_one_results)
    if not losers:
        raise NoEligibleTeamsError(name)

    if start_date is None:
        start_date = datetime.now(pytz.utc) + timedelta(days=1)
    timezone = timezone or source.timezone or DEFAULT_TIMEZONE
    logger.debug("Building %s from %d round-one losers of %s", slug, len(losers), source.slug)

    return build_bracket(
        losers,
        name=name,
        slug=slug,
        kickoff_hour=kickoff_hour,
        timezone=timezone,
        start_date=start_date,
        round_spacing_days=round_spacing_days,
        legs_per_tie=legs_per_tie,
        leg_kickoff_hours=leg_kickoff_hours,
    )
