"""
Errors raised by the knockout bracket engine.
"""


class BracketError(Exception):
    """Base class for every bracket generation failure."""


class InvalidBracketSizeError(BracketError):
    """Raised when a seed order is requested for a size that is not a power of two."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"Invalid bracket size: {size} (must be a power of two)")


class InsufficientParticipantsError(BracketError):
    """Raised when fewer than two participants are supplied."""

    def __init__(self, count):
        self.count = count
        super().__init__(f"At least two participants required to build bracket (got {count})")


class NoEligibleTeamsError(BracketError):
    """Raised when no round-one loser can be found in the source bracket."""

    def __init__(self, tournament_name):
        self.tournament_name = tournament_name
        super().__init__(f"No eligible teams found for {tournament_name}")


class InvalidConfigurationError(BracketError):
    """Raised for bad scheduling options (timezone, hours, spacing, legs)."""
