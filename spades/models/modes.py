"""Game mode configurations for 3-8 player Spades.

Each mode defines the player count, team structure, deck composition and
seating layout. The 4-player entry is the classic partnership game.
"""

import logging
from dataclasses import dataclass

from spades.constants import (
    CARDS_PER_PLAYER,
    DEFAULT_PLAYER_COUNT,
    RANKS,
    STANDARD_DECK_SIZE,
    TEAM_KEY_PREFIX,
)
from spades.models.card import Card
from spades.models.enums import SUIT_ORDER, SeatingPattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamConfig:
    """Static description of one team in a mode.

    Attributes:
        id: Team key, e.g. "team1"
        size: Number of seated players on the team
        spoiler: Solo team whose scores are doubled

    """

    id: str
    size: int
    spoiler: bool = False


@dataclass(frozen=True)
class ModeConfig:
    """Static configuration for one player count."""

    player_count: int
    teams: tuple[TeamConfig, ...]
    seating_pattern: SeatingPattern
    cards_per_player: int = CARDS_PER_PLAYER
    tricks_per_round: int = CARDS_PER_PLAYER
    layout_seats: int | None = None
    removed_cards: tuple[Card, ...] = ()
    mega_cards: tuple[Card, ...] = ()

    @property
    def total_cards(self) -> int:
        """Cards in the deck, always player_count * cards_per_player."""
        return self.player_count * self.cards_per_player

    @property
    def team_count(self) -> int:
        """Number of teams."""
        return len(self.teams)

    @property
    def has_spoiler(self) -> bool:
        """Whether any team is a spoiler."""
        return any(team.spoiler for team in self.teams)

    @property
    def team_keys(self) -> list[str]:
        """Team keys in order, e.g. ["team1", "team2"]."""
        return [team.id for team in self.teams]

    def get_team(self, team_key: str) -> TeamConfig | None:
        """Get a team config by key."""
        for team in self.teams:
            if team.id == team_key:
                return team
        return None


def _fill_rank_ascending(count: int, ranks: tuple[str, ...], *, mega: bool) -> tuple[Card, ...]:
    """Fill rank by rank (all four suits per rank, in S, H, D, C order)."""
    filled: list[Card] = []
    for rank in ranks:
        for suit in SUIT_ORDER:
            if len(filled) >= count:
                return tuple(filled)
            filled.append(Card(suit, rank, mega))
    return tuple(filled)


def compute_removed_cards(count: int) -> tuple[Card, ...]:
    """Compute which cards to remove from the standard 52-card deck.

    Strips the lowest cards: all 2s, then all 3s, and so on, with partial
    ranks filled in S, H, D, C order.

    Args:
        count: Number of cards to remove

    Returns:
        Cards to remove

    """
    if count <= 0:
        return ()
    return _fill_rank_ascending(count, RANKS, mega=False)


def compute_mega_cards(count: int, *, include_aces: bool = False) -> tuple[Card, ...]:
    """Compute which mega cards to add to the deck.

    Fills rank by rank from 2 upward. Aces are skipped unless
    ``include_aces`` is set, which the 8-player mode needs for a full
    doubled deck.

    Args:
        count: Number of mega cards to add
        include_aces: Allow mega Aces

    Returns:
        Mega cards to add

    """
    if count <= 0:
        return ()
    ranks = RANKS if include_aces else RANKS[:-1]
    return _fill_rank_ascending(count, ranks, mega=True)


def _team(number: int, size: int, *, spoiler: bool = False) -> TeamConfig:
    return TeamConfig(id=f"{TEAM_KEY_PREFIX}{number}", size=size, spoiler=spoiler)


def _extra_cards(player_count: int) -> int:
    return player_count * CARDS_PER_PLAYER - STANDARD_DECK_SIZE


GAME_MODES: dict[int, ModeConfig] = {
    3: ModeConfig(
        player_count=3,
        teams=(_team(1, 1), _team(2, 1), _team(3, 1)),
        seating_pattern=SeatingPattern.POLYGON,
        removed_cards=compute_removed_cards(-_extra_cards(3)),
    ),
    4: ModeConfig(
        player_count=4,
        teams=(_team(1, 2), _team(2, 2)),
        seating_pattern=SeatingPattern.CLASSIC,
    ),
    5: ModeConfig(
        player_count=5,
        teams=(_team(1, 2), _team(2, 2), _team(3, 1, spoiler=True)),
        seating_pattern=SeatingPattern.POLYGON,
        layout_seats=6,
        mega_cards=compute_mega_cards(_extra_cards(5)),
    ),
    6: ModeConfig(
        player_count=6,
        teams=(_team(1, 2), _team(2, 2), _team(3, 2)),
        seating_pattern=SeatingPattern.POLYGON,
        mega_cards=compute_mega_cards(_extra_cards(6)),
    ),
    7: ModeConfig(
        player_count=7,
        teams=(_team(1, 2), _team(2, 2), _team(3, 2), _team(4, 1, spoiler=True)),
        seating_pattern=SeatingPattern.POLYGON,
        layout_seats=8,
        mega_cards=compute_mega_cards(_extra_cards(7)),
    ),
    8: ModeConfig(
        player_count=8,
        teams=(_team(1, 2), _team(2, 2), _team(3, 2), _team(4, 2)),
        seating_pattern=SeatingPattern.POLYGON,
        mega_cards=compute_mega_cards(_extra_cards(8), include_aces=True),
    ),
}


def get_mode(player_count: int) -> ModeConfig:
    """Get the mode configuration for a player count.

    Defaults to the classic 4-player mode if the count isn't defined.
    """
    mode = GAME_MODES.get(player_count)
    if mode is None:
        logger.warning("No mode for %s players, falling back to %d-player mode", player_count, DEFAULT_PLAYER_COUNT)
        return GAME_MODES[DEFAULT_PLAYER_COUNT]
    return mode
