"""
Value objects describing a knockout tournament.

All models are immutable. Sequences are stored as tuples so a generated
bracket can be shared freely between callers.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Optional, Tuple, Union


def _pick(data: Dict, *keys, default=None):
    """Return the first key present in data (snake_case or camelCase spelling)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _format_instant(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_instant(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class TournamentParticipant:
    team_id: str
    team_name: str
    league_id: str
    league_name: str
    league_position: int
    points: int = 0
    goal_difference: int = 0
    scored: int = 0
    seed: Optional[int] = None

    def with_seed(self, seed: int) -> 'TournamentParticipant':
        return replace(self, seed=seed)

    def to_dict(self) -> Dict:
        return {
            'team_id': self.team_id,
            'team_name': self.team_name,
            'league_id': self.league_id,
            'league_name': self.league_name,
            'league_position': self.league_position,
            'points': self.points,
            'goal_difference': self.goal_difference,
            'scored': self.scored,
            'seed': self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'TournamentParticipant':
        team_id = str(_pick(data, 'team_id', 'teamId'))
        league_id = str(_pick(data, 'league_id', 'leagueId', default=''))
        return cls(
            team_id=team_id,
            team_name=_pick(data, 'team_name', 'teamName', default=team_id),
            league_id=league_id,
            league_name=_pick(data, 'league_name', 'leagueName', default=league_id),
            league_position=int(_pick(data, 'league_position', 'leaguePosition', default=0)),
            points=int(_pick(data, 'points', default=0)),
            goal_difference=int(_pick(data, 'goal_difference', 'goalDifference', default=0)),
            scored=int(_pick(data, 'scored', default=0)),
            seed=_pick(data, 'seed'),
        )


@dataclass(frozen=True)
class SeedSlot:
    """Round entry occupied by a known seed."""
    seed: int

    def to_dict(self) -> Dict:
        return {'type': 'seed', 'seed': self.seed}


@dataclass(frozen=True)
class WinnerSlot:
    """Round entry filled by whoever wins the referenced match."""
    match_id: str

    def to_dict(self) -> Dict:
        return {'type': 'winner', 'match_id': self.match_id}


RoundEntry = Union[SeedSlot, WinnerSlot]


def _participant_to_dict(participant: Optional[TournamentParticipant]) -> Optional[Dict]:
    return participant.to_dict() if participant is not None else None


def _participant_from_dict(data: Optional[Dict]) -> Optional[TournamentParticipant]:
    return TournamentParticipant.from_dict(data) if data else None


def _source_from_dict(data: Optional[Dict]) -> Optional[WinnerSlot]:
    if not data:
        return None
    return WinnerSlot(match_id=_pick(data, 'match_id', 'matchId'))


@dataclass(frozen=True)
class KnockoutMatchLeg:
    leg: int
    scheduled_at: datetime
    home_seed: Optional[int] = None
    away_seed: Optional[int] = None
    home_participant: Optional[TournamentParticipant] = None
    away_participant: Optional[TournamentParticipant] = None

    def to_dict(self) -> Dict:
        return {
            'leg': self.leg,
            'scheduled_at': _format_instant(self.scheduled_at),
            'home_seed': self.home_seed,
            'away_seed': self.away_seed,
            'home_participant': _participant_to_dict(self.home_participant),
            'away_participant': _participant_to_dict(self.away_participant),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'KnockoutMatchLeg':
        return cls(
            leg=int(data['leg']),
            scheduled_at=_parse_instant(_pick(data, 'scheduled_at', 'scheduledAt')),
            home_seed=_pick(data, 'home_seed', 'homeSeed'),
            away_seed=_pick(data, 'away_seed', 'awaySeed'),
            home_participant=_participant_from_dict(_pick(data, 'home_participant', 'homeParticipant')),
            away_participant=_participant_from_dict(_pick(data, 'away_participant', 'awayParticipant')),
        )


@dataclass(frozen=True)
class KnockoutMatch:
    id: str
    round: int
    round_name: str
    scheduled_at: datetime
    home_seed: Optional[int] = None
    away_seed: Optional[int] = None
    home_participant: Optional[TournamentParticipant] = None
    away_participant: Optional[TournamentParticipant] = None
    home_source: Optional[WinnerSlot] = None
    away_source: Optional[WinnerSlot] = None
    is_bye: bool = False
    auto_advance_seed: Optional[int] = None
    legs: Tuple[KnockoutMatchLeg, ...] = ()

    @property
    def has_home(self) -> bool:
        return self.home_participant is not None or self.home_source is not None

    @property
    def has_away(self) -> bool:
        return self.away_participant is not None or self.away_source is not None

    @property
    def is_placeholder(self) -> bool:
        """True for a real match still waiting on an earlier result."""
        if self.is_bye:
            return False
        return self.home_participant is None or self.away_participant is None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'round': self.round,
            'round_name': self.round_name,
            'scheduled_at': _format_instant(self.scheduled_at),
            'home_seed': self.home_seed,
            'away_seed': self.away_seed,
            'home_participant': _participant_to_dict(self.home_participant),
            'away_participant': _participant_to_dict(self.away_participant),
            'home_source': self.home_source.to_dict() if self.home_source else None,
            'away_source': self.away_source.to_dict() if self.away_source else None,
            'is_bye': self.is_bye,
            'auto_advance_seed': self.auto_advance_seed,
            'legs': [leg.to_dict() for leg in self.legs],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'KnockoutMatch':
        return cls(
            id=data['id'],
            round=int(data['round']),
            round_name=_pick(data, 'round_name', 'roundName', default=''),
            scheduled_at=_parse_instant(_pick(data, 'scheduled_at', 'scheduledAt')),
            home_seed=_pick(data, 'home_seed', 'homeSeed'),
            away_seed=_pick(data, 'away_seed', 'awaySeed'),
            home_participant=_participant_from_dict(_pick(data, 'home_participant', 'homeParticipant')),
            away_participant=_participant_from_dict(_pick(data, 'away_participant', 'awayParticipant')),
            home_source=_source_from_dict(_pick(data, 'home_source', 'homeSource')),
            away_source=_source_from_dict(_pick(data, 'away_source', 'awaySource')),
            is_bye=bool(_pick(data, 'is_bye', 'isBye', default=False)),
            auto_advance_seed=_pick(data, 'auto_advance_seed', 'autoAdvanceSeed'),
            legs=tuple(KnockoutMatchLeg.from_dict(leg) for leg in data.get('legs') or []),
        )


@dataclass(frozen=True)
class TournamentRound:
    round: int
    name: str
    matches: Tuple[KnockoutMatch, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'round': self.round,
            'name': self.name,
            'matches': [match.to_dict() for match in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'TournamentRound':
        return cls(
            round=int(data['round']),
            name=data['name'],
            matches=tuple(KnockoutMatch.from_dict(m) for m in data.get('matches') or []),
        )


@dataclass(frozen=True)
class TournamentBracket:
    name: str
    slug: str
    timezone: str
    kickoff_hour: int
    participants: Tuple[TournamentParticipant, ...] = ()
    rounds: Tuple[TournamentRound, ...] = field(default_factory=tuple)

    @property
    def bracket_size(self) -> int:
        return 2 ** len(self.rounds) if self.rounds else 0

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    def participant_by_team_id(self) -> Dict[str, TournamentParticipant]:
        return {p.team_id: p for p in self.participants if p.team_id}

    def find_match(self, match_id: str) -> Optional[KnockoutMatch]:
        for tournament_round in self.rounds:
            for match in tournament_round.matches:
                if match.id == match_id:
                    return match
        return None

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'slug': self.slug,
            'timezone': self.timezone,
            'kickoff_hour': self.kickoff_hour,
            'participants': [p.to_dict() for p in self.participants],
            'rounds': [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'TournamentBracket':
        return cls(
            name=data['name'],
            slug=data['slug'],
            timezone=data['timezone'],
            kickoff_hour=int(_pick(data, 'kickoff_hour', 'kickoffHour')),
            participants=tuple(TournamentParticipant.from_dict(p) for p in data.get('participants') or []),
            rounds=tuple(TournamentRound.from_dict(r) for r in data.get('rounds') or []),
        )


@dataclass(frozen=True)
class KnockoutResult:
    match_id: str
    winner_team_id: str
    loser_team_id: str

    def to_dict(self) -> Dict:
        return {
            'match_id': self.match_id,
            'winner_team_id': self.winner_team_id,
            'loser_team_id': self.loser_team_id,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'KnockoutResult':
        return cls(
            match_id=str(_pick(data, 'match_id', 'matchId', default='')),
            winner_team_id=str(_pick(data, 'winner_team_id', 'winnerTeamId', default='')),
            loser_team_id=str(_pick(data, 'loser_team_id', 'loserTeamId', default='')),
        )
