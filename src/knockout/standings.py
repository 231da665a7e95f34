"""
Qualifier selection from league standings.

Leagues are plain dicts as stored by the league service:

    {'id': 'L1', 'name': 'Premier', 'state': 'completed',
     'standings': [{'teamId': 't1', 'name': 'Lions', 'Pts': 30, 'GD': 12, 'GF': 40}, ...]}
"""
from typing import Dict, Iterable, List

from .models import TournamentParticipant
from .seeding import sort_participants

COMPLETED_STATE = 'completed'
DEFAULT_QUALIFIERS_PER_LEAGUE = 2


def _team_id(row: Dict) -> str:
    return row.get('teamId') or row.get('team_id') or ''


def _display_name(row: Dict) -> str:
    return row.get('name') or _team_id(row)


def sort_standings(rows: Iterable[Dict]) -> List[Dict]:
    """Order table rows by points, goal difference and goals for (all descending), then name."""
    return sorted(
        rows,
        key=lambda row: (
            -(row.get('Pts') or 0),
            -(row.get('GD') or 0),
            -(row.get('GF') or 0),
            _display_name(row).casefold(),
            _display_name(row),
        ),
    )


def league_qualifiers(league: Dict, top_n: int = DEFAULT_QUALIFIERS_PER_LEAGUE) -> List[TournamentParticipant]:
    """Top finishers of a single league as participants."""
    league_id = str(league.get('id', ''))
    league_name = league.get('name') or league_id
    rows = [row for row in league.get('standings') or [] if _team_id(row)]

    qualifiers = []
    for index, row in enumerate(sort_standings(rows)[:top_n]):
        qualifiers.append(TournamentParticipant(
            team_id=str(_team_id(row)),
            team_name=_display_name(row),
            league_id=league_id,
            league_name=league_name,
            league_position=index + 1,
            points=row.get('Pts') or 0,
            goal_difference=row.get('GD') or 0,
            scored=row.get('GF') or 0,
        ))
    return qualifiers


def select_league_qualifiers(leagues: Iterable[Dict],
                             top_n: int = DEFAULT_QUALIFIERS_PER_LEAGUE) -> List[TournamentParticipant]:
    """
    Participants for the primary tournament.

    Takes the top_n finishers of every completed league and returns them in
    seeding order (seeds are not assigned here).
    """
    participants = []
    for league in leagues:
        if league.get('state') != COMPLETED_STATE:
            continue
        participants.extend(league_qualifiers(league, top_n))
    return sort_participants(participants)
