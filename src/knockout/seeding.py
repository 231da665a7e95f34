"""
Seeding helpers: participant ranking, bracket sizing and bracket order.
"""
import math
from typing import Iterable, List

from .errors import InvalidBracketSizeError
from .models import TournamentParticipant


def get_round_name(slots_remaining: int) -> str:
    """Get the name of a round based on how many bracket slots remain."""
    if slots_remaining == 2:
        return "Final"
    elif slots_remaining == 4:
        return "Semi Final"
    elif slots_remaining == 8:
        return "Quarter Final"
    elif slots_remaining == 16:
        return "Round of 16"
    else:
        return f"Round of {slots_remaining}"


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def _ranking_key(participant: TournamentParticipant):
    return (
        participant.league_position,
        -participant.points,
        -participant.goal_difference,
        -participant.scored,
        participant.team_name.casefold(),
        participant.team_name,
    )


def sort_participants(participants: Iterable[TournamentParticipant]) -> List[TournamentParticipant]:
    """
    Order participants for seeding.

    League position first (lower is better), then points, goal difference
    and goals scored (higher is better), then team name.
    """
    return sorted(participants, key=_ranking_key)


def rank_participants(participants: Iterable[TournamentParticipant]) -> List[TournamentParticipant]:
    """Return a new list of participants sorted for seeding with seeds 1..n assigned."""
    return [p.with_seed(index + 1) for index, p in enumerate(sort_participants(participants))]


def build_seed_order(bracket_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order.
    This ensures that if all higher seeds win, they meet in the proper rounds.

    For 8 teams: [1, 8, 4, 5, 2, 7, 3, 6]
    This gives matchups: 1v8, 4v5, 2v7, 3v6
    Winners: 1v4 side, 2v3 side
    Final: 1v2 (if chalk)
    """
    if not isinstance(bracket_size, int) or bracket_size < 1 or (bracket_size & (bracket_size - 1)) != 0:
        raise InvalidBracketSizeError(bracket_size)
    if bracket_size == 1:
        return [1]

    upper_half = build_seed_order(bracket_size // 2)

    # Interleave: pair each upper seed with its complement
    result = []
    for seed in upper_half:
        result.extend([seed, bracket_size + 1 - seed])

    return result
