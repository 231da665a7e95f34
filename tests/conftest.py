"""
Shared pytest fixtures for knockout bracket tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os
from datetime import datetime, timezone

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout.models import TournamentParticipant


ISTANBUL = 'Europe/Istanbul'


def make_participant(team_id, league_position, points, goal_difference, scored, league_id, name=None):
    """Build a participant the way the league service reports one."""
    return TournamentParticipant(
        team_id=f'team-{team_id}',
        team_name=name or f'Team {team_id}',
        league_id=league_id,
        league_name=f'League {league_id}',
        league_position=league_position,
        points=points,
        goal_difference=goal_difference,
        scored=scored,
    )


@pytest.fixture
def six_participants():
    """Top two of three leagues, already in seeding order."""
    return [
        make_participant('A1', 1, 60, 25, 55, 'L1'),
        make_participant('A2', 1, 58, 20, 50, 'L2'),
        make_participant('A3', 1, 56, 18, 48, 'L3'),
        make_participant('B1', 2, 52, 15, 40, 'L1'),
        make_participant('B2', 2, 50, 12, 38, 'L2'),
        make_participant('B3', 2, 49, 10, 36, 'L3'),
    ]


@pytest.fixture
def four_participants():
    return [
        make_participant('A1', 1, 60, 25, 55, 'L1'),
        make_participant('A2', 1, 58, 20, 50, 'L2'),
        make_participant('B1', 2, 52, 15, 40, 'L1'),
        make_participant('B2', 2, 50, 12, 38, 'L2'),
    ]


@pytest.fixture
def start_date():
    return datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def leagues():
    """Stored leagues: two completed, one still running."""
    return [
        {
            'id': 'L1', 'name': 'Premier', 'state': 'completed',
            'standings': [
                {'teamId': 't-lions', 'name': 'Lions', 'Pts': 30, 'GD': 12, 'GF': 40},
                {'teamId': 't-tigers', 'name': 'Tigers', 'Pts': 34, 'GD': 15, 'GF': 41},
                {'teamId': 't-bears', 'name': 'Bears', 'Pts': 30, 'GD': 12, 'GF': 38},
                {'name': 'Ghost', 'Pts': 99},
            ],
        },
        {
            'id': 'L2', 'name': 'Championship', 'state': 'completed',
            'standings': [
                {'teamId': 't-eagles', 'name': 'Eagles', 'Pts': 28, 'GD': 9, 'GF': 30},
                {'teamId': 't-hawks', 'name': 'Hawks', 'Pts': 25, 'GD': 4, 'GF': 27},
                {'teamId': 't-owls', 'name': 'Owls', 'Pts': 20, 'GD': -2, 'GF': 22},
            ],
        },
        {
            'id': 'L3', 'name': 'Amateur', 'state': 'active',
            'standings': [
                {'teamId': 't-ducks', 'name': 'Ducks', 'Pts': 40, 'GD': 30, 'GF': 50},
            ],
        },
    ]
