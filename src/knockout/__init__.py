"""
Knockout tournament bracket engine.
"""
from .bracket import build_bracket, summarize_bracket
from .derived import build_derived_tournament, round_one_losers
from .errors import (
    BracketError,
    InsufficientParticipantsError,
    InvalidBracketSizeError,
    InvalidConfigurationError,
    NoEligibleTeamsError,
)
from .models import (
    KnockoutMatch,
    KnockoutMatchLeg,
    KnockoutResult,
    SeedSlot,
    TournamentBracket,
    TournamentParticipant,
    TournamentRound,
    WinnerSlot,
)
from .presets import build_champions_tournament, build_conference_tournament
from .scheduling import DEFAULT_TIMEZONE, kickoff_for_round, resolve_leg_hours
from .seeding import build_seed_order, calculate_bracket_size, rank_participants
from .standings import select_league_qualifiers
