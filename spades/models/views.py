"""Per-player sanitized projection of a game.

This is the only game state a transport layer may send to a client. It
carries the player's own hand and public state, never another hand.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from spades.models.card import Card
from spades.models.modes import ModeConfig
from spades.models.player import SeatedPlayer
from spades.models.results import RoundSummary
from spades.models.trick import Play

if TYPE_CHECKING:
    from spades.models.game import GameState


class CardInfo(BaseModel):
    """Card as sent to clients."""

    suit: str
    rank: str
    mega: bool = False

    @classmethod
    def from_card(cls, card: Card) -> "CardInfo":
        """Build from a domain card."""
        return cls(suit=card.suit.value, rank=card.rank, mega=card.mega)


class PlayInfo(BaseModel):
    """A card on the table with its player."""

    player_id: str
    card: CardInfo

    @classmethod
    def from_play(cls, play: Play) -> "PlayInfo":
        """Build from a domain play."""
        return cls(player_id=play.player_id, card=CardInfo.from_card(play.card))


class PlayerInfo(BaseModel):
    """Public information about a seated player."""

    id: str
    name: str
    team: int | None
    seat_index: int
    is_bot: bool

    @classmethod
    def from_player(cls, player: SeatedPlayer) -> "PlayerInfo":
        """Build from a seated player record."""
        return cls(
            id=player.id,
            name=player.name,
            team=player.team,
            seat_index=player.seat_index,
            is_bot=player.is_bot,
        )


class TeamInfo(BaseModel):
    """Public description of one team in the mode."""

    id: str
    size: int
    spoiler: bool


class ModeInfo(BaseModel):
    """Public description of the game mode."""

    player_count: int
    team_count: int
    teams: list[TeamInfo]
    has_spoiler: bool
    seating_pattern: str
    layout_seats: int | None
    cards_per_player: int
    tricks_per_round: int

    @classmethod
    def from_mode(cls, mode: ModeConfig) -> "ModeInfo":
        """Build from a mode configuration."""
        return cls(
            player_count=mode.player_count,
            team_count=mode.team_count,
            teams=[TeamInfo(id=t.id, size=t.size, spoiler=t.spoiler) for t in mode.teams],
            has_spoiler=mode.has_spoiler,
            seating_pattern=mode.seating_pattern.value,
            layout_seats=mode.layout_seats,
            cards_per_player=mode.cards_per_player,
            tricks_per_round=mode.tricks_per_round,
        )


class RoundSummaryInfo(BaseModel):
    """A finished round as sent to clients."""

    round_number: int
    bids: dict[str, int]
    tricks_taken: dict[str, int]
    team_scores: dict[str, int]
    team_totals: dict[str, int]
    team_books: dict[str, int]
    blind_nil_players: list[str] = Field(default_factory=list)
    moonshot: str | None = None

    @classmethod
    def from_summary(cls, summary: RoundSummary) -> "RoundSummaryInfo":
        """Build from a round summary."""
        return cls(
            round_number=summary.round_number,
            bids=dict(summary.bids),
            tricks_taken=dict(summary.tricks_taken),
            team_scores=dict(summary.team_scores),
            team_totals=dict(summary.team_totals),
            team_books=dict(summary.team_books),
            blind_nil_players=list(summary.blind_nil_players),
            moonshot=summary.moonshot,
        )


class PlayerView(BaseModel):
    """Everything one player is allowed to see."""

    phase: str
    hand: list[CardInfo]
    bids: dict[str, int]
    blind_nil_players: list[str]
    current_trick: list[PlayInfo]
    tricks_taken: dict[str, int]
    scores: dict[str, int]
    books: dict[str, int]
    current_turn_id: str | None
    dealer_index: int
    spades_broken: bool
    round_number: int
    round_history: list[RoundSummaryInfo]
    players: list[PlayerInfo]
    mode: ModeInfo
    player_count: int
    game_settings: dict[str, Any]


def build_player_view(game: "GameState", player_id: str) -> PlayerView:
    """Project a game onto what one player (or a spectator) may see.

    Args:
        game: Live game state
        player_id: Viewer; unknown IDs get an empty hand

    Returns:
        Sanitized view

    """
    return PlayerView(
        phase=game.phase.value,
        hand=[CardInfo.from_card(card) for card in game.get_hand(player_id)],
        bids=game.bids,
        blind_nil_players=sorted(game.blind_nil_players),
        current_trick=[PlayInfo.from_play(play) for play in game.current_trick],
        tricks_taken=game.tricks_taken,
        scores=dict(game.scores),
        books=dict(game.books),
        current_turn_id=game.get_current_turn_player_id(),
        dealer_index=game.dealer_index,
        spades_broken=game.spades_broken,
        round_number=game.round_number,
        round_history=[RoundSummaryInfo.from_summary(summary) for summary in game.round_history],
        players=[PlayerInfo.from_player(player) for player in game.players],
        mode=ModeInfo.from_mode(game.mode),
        player_count=game.player_count,
        game_settings=game.settings.to_wire(),
    )
