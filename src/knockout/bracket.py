"""
Single elimination bracket generation.
"""
import logging
import math
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import pytz

from .errors import BracketError, InsufficientParticipantsError, InvalidConfigurationError
from .models import (
    KnockoutMatch,
    KnockoutMatchLeg,
    RoundEntry,
    SeedSlot,
    TournamentBracket,
    TournamentParticipant,
    TournamentRound,
    WinnerSlot,
)
from .scheduling import (
    DEFAULT_ROUND_SPACING_DAYS,
    DEFAULT_TIMEZONE,
    DateLike,
    kickoff_for_round,
    resolve_leg_hours,
    resolve_timezone,
)
from .seeding import (
    build_seed_order,
    calculate_bracket_size,
    calculate_byes,
    get_round_name,
    rank_participants,
)

logger = logging.getLogger(__name__)


def match_id(slug: str, round_number: int, match_number: int) -> str:
    return f"{slug}-R{round_number}-M{match_number}"


def _build_legs(home_seed, away_seed, home_participant, away_participant,
                leg_kickoffs: Sequence[datetime]) -> List[KnockoutMatchLeg]:
    """Legs of a real tie. With several legs the nominal away side hosts the even-indexed ones."""
    legs_per_tie = len(leg_kickoffs)
    legs = []
    for leg_index, scheduled_at in enumerate(leg_kickoffs):
        swap_home = legs_per_tie > 1 and leg_index % 2 == 0
        if swap_home:
            legs.append(KnockoutMatchLeg(
                leg=leg_index + 1,
                scheduled_at=scheduled_at,
                home_seed=away_seed,
                away_seed=home_seed,
                home_participant=away_participant,
                away_participant=home_participant,
            ))
        else:
            legs.append(KnockoutMatchLeg(
                leg=leg_index + 1,
                scheduled_at=scheduled_at,
                home_seed=home_seed,
                away_seed=away_seed,
                home_participant=home_participant,
                away_participant=away_participant,
            ))
    return legs


def _next_round_entries(matches: Sequence[KnockoutMatch]) -> List[RoundEntry]:
    """Byes carry their seed forward; every other match feeds its winner."""
    entries = []
    for match in matches:
        if match.is_bye and match.auto_advance_seed is not None:
            entries.append(SeedSlot(match.auto_advance_seed))
        else:
            entries.append(WinnerSlot(match.id))
    return entries


def build_bracket(participants: Sequence[TournamentParticipant], name: str, slug: str,
                  kickoff_hour: int, timezone: str = DEFAULT_TIMEZONE,
                  start_date: Optional[DateLike] = None,
                  round_spacing_days: int = DEFAULT_ROUND_SPACING_DAYS,
                  legs_per_tie: int = 1,
                  leg_kickoff_hours: Optional[Sequence[Optional[int]]] = None) -> TournamentBracket:
    """
    Build a fully scheduled single elimination bracket.

    Participants are ranked and seeded, placed with the standard bracket
    order and walked round by round. Empty slots become byes that carry
    their seed into the next round; every other match feeds a
    "winner of match" reference forward.

    Args:
        participants: Teams taking part, in any order
        name: Display name of the tournament
        slug: Stable machine id, used as the prefix of every match id
        kickoff_hour: Local hour of the first leg of every match
        timezone: Zone the kickoff hours are expressed in
        start_date: Day of round one (defaults to now)
        round_spacing_days: Calendar days between consecutive rounds
        legs_per_tie: Number of legs played per real match
        leg_kickoff_hours: Optional explicit local hour for each leg

    Returns:
        TournamentBracket with log2(bracket_size) rounds
    """
    if len(participants) < 2:
        raise InsufficientParticipantsError(len(participants))
    if round_spacing_days < 0:
        raise InvalidConfigurationError(f"Round spacing must not be negative (got {round_spacing_days})")
    resolve_timezone(timezone)

    if start_date is None:
        start_date = datetime.now(pytz.utc)
    leg_hours = resolve_leg_hours(kickoff_hour, max(1, legs_per_tie), leg_kickoff_hours)

    seeded = rank_participants(participants)
    participant_by_seed = {p.seed: p for p in seeded}

    bracket_size = calculate_bracket_size(len(seeded))
    total_rounds = int(math.log2(bracket_size))
    logger.debug("Building bracket %s: %d participants, bracket size %d, %d rounds",
                 slug, len(seeded), bracket_size, total_rounds)

    rounds = []
    entries: List[RoundEntry] = [SeedSlot(seed) for seed in build_seed_order(bracket_size)]

    for round_idx in range(total_rounds):
        round_number = round_idx + 1
        round_name = get_round_name(bracket_size // 2 ** round_idx)
        kickoff = kickoff_for_round(start_date, timezone, kickoff_hour, round_idx, round_spacing_days)
        leg_kickoffs = [
            kickoff_for_round(start_date, timezone, hour, round_idx, round_spacing_days)
            for hour in leg_hours
        ]

        matches = []
        for i in range(len(entries) // 2):
            home_entry = entries[i * 2]
            away_entry = entries[i * 2 + 1]
            current_id = match_id(slug, round_number, i + 1)

            home_seed = home_entry.seed if isinstance(home_entry, SeedSlot) else None
            away_seed = away_entry.seed if isinstance(away_entry, SeedSlot) else None
            home_participant = participant_by_seed.get(home_seed)
            away_participant = participant_by_seed.get(away_seed)
            home_source = home_entry if isinstance(home_entry, WinnerSlot) else None
            away_source = away_entry if isinstance(away_entry, WinnerSlot) else None

            has_home = home_participant is not None or home_source is not None
            has_away = away_participant is not None or away_source is not None
            if not has_home and not has_away:
                raise BracketError(f"Match {current_id} has no participant on either side")

            is_bye = has_home != has_away
            if is_bye:
                present = home_participant or away_participant
                auto_advance_seed = present.seed if present is not None else None
                legs = []
            else:
                auto_advance_seed = None
                legs = _build_legs(home_seed, away_seed, home_participant, away_participant, leg_kickoffs)

            matches.append(KnockoutMatch(
                id=current_id,
                round=round_number,
                round_name=round_name,
                scheduled_at=legs[0].scheduled_at if legs else kickoff,
                home_seed=home_seed,
                away_seed=away_seed,
                home_participant=home_participant,
                away_participant=away_participant,
                home_source=home_source,
                away_source=away_source,
                is_bye=is_bye,
                auto_advance_seed=auto_advance_seed,
                legs=tuple(legs),
            ))

        rounds.append(TournamentRound(round=round_number, name=round_name, matches=tuple(matches)))
        entries = _next_round_entries(matches)

    return TournamentBracket(
        name=name,
        slug=slug,
        timezone=timezone,
        kickoff_hour=kickoff_hour,
        participants=tuple(seeded),
        rounds=tuple(rounds),
    )


def summarize_bracket(bracket: TournamentBracket) -> Dict:
    """
    Get bracket data formatted for display.
    """
    matches_per_round = {}
    awaiting_results = 0
    for tournament_round in bracket.rounds:
        actual_matches = [m for m in tournament_round.matches if not m.is_bye]
        matches_per_round[tournament_round.name] = len(actual_matches)
        awaiting_results += sum(1 for m in actual_matches if m.is_placeholder)

    return {
        'name': bracket.name,
        'slug': bracket.slug,
        'seeded_teams': [(p.seed, p.team_name, p.league_name) for p in bracket.participants],
        'bracket_size': bracket.bracket_size,
        'total_rounds': bracket.total_rounds,
        'total_teams': len(bracket.participants),
        'byes': calculate_byes(len(bracket.participants)),
        'matches_per_round': matches_per_round,
        'awaiting_results': awaiting_results,
    }
