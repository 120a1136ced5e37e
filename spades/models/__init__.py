"""Game domain models."""

from spades.models.card import Card
from spades.models.deck import Deck
from spades.models.enums import Phase, SeatingPattern, Suit
from spades.models.errors import ActionError, ErrorCode
from spades.models.game import GameState
from spades.models.game_settings import GameSettings
from spades.models.modes import GAME_MODES, ModeConfig, TeamConfig, get_mode
from spades.models.player import SeatedPlayer
from spades.models.results import BidResult, PlayResult, RoundSummary
from spades.models.teams import TeamLookup, arrange_seating, build_team_lookup
from spades.models.trick import Play

__all__ = [
    "GAME_MODES",
    "ActionError",
    "BidResult",
    "Card",
    "Deck",
    "ErrorCode",
    "GameSettings",
    "GameState",
    "ModeConfig",
    "Phase",
    "Play",
    "PlayResult",
    "RoundSummary",
    "SeatedPlayer",
    "SeatingPattern",
    "Suit",
    "TeamConfig",
    "TeamLookup",
    "arrange_seating",
    "build_team_lookup",
    "get_mode",
]
