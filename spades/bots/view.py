"""Read-only snapshot of a game as bots may see it."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from spades.models.game_settings import GameSettings
from spades.models.modes import ModeConfig, get_mode
from spades.models.player import SeatedPlayer
from spades.models.teams import TeamLookup, build_team_lookup, init_team_scores
from spades.models.trick import Play

if TYPE_CHECKING:
    from spades.models.game import GameState


@dataclass(frozen=True)
class BotView:
    """Everything a bot may read when it decides.

    Holds public game state only. Bots receive their own hand separately,
    so no other player's cards are reachable from here.

    Attributes:
        players: Seated players in turn order
        bids: Player ID -> bid for players who have bid
        tricks_taken: Player ID -> tricks won this round
        current_trick: Plays in the trick being played
        spades_broken: Whether a spade has been played this round
        cards_played: Plays from completed tricks this round
        scores: Team key -> running total
        books: Team key -> book counter
        settings: Rule settings
        mode: Mode configuration
        team_lookup: Team relationships for ``players``
        round_number: 1-indexed round number
        blind_nil_players: Players who bid blind nil this round
        dealer_index: Turn position of the dealer

    """

    players: tuple[SeatedPlayer, ...]
    bids: dict[str, int]
    tricks_taken: dict[str, int]
    current_trick: tuple[Play, ...]
    spades_broken: bool
    cards_played: tuple[Play, ...]
    scores: dict[str, int]
    books: dict[str, int]
    settings: GameSettings
    mode: ModeConfig
    team_lookup: TeamLookup
    round_number: int = 1
    blind_nil_players: frozenset[str] = field(default_factory=frozenset)
    dealer_index: int = 0

    @classmethod
    def from_game(cls, game: "GameState") -> "BotView":
        """Snapshot a live game."""
        return cls(
            players=tuple(game.players),
            bids=game.bids,
            tricks_taken=game.tricks_taken,
            current_trick=tuple(game.current_trick),
            spades_broken=game.spades_broken,
            cards_played=tuple(game.cards_played),
            scores=dict(game.scores),
            books=dict(game.books),
            settings=game.settings,
            mode=game.mode,
            team_lookup=game.team_lookup,
            round_number=game.round_number,
            blind_nil_players=frozenset(game.blind_nil_players),
            dealer_index=game.dealer_index,
        )

    @classmethod
    def build(
        cls,
        players: list[SeatedPlayer],
        *,
        bids: dict[str, int] | None = None,
        tricks_taken: dict[str, int] | None = None,
        current_trick: list[Play] | None = None,
        spades_broken: bool = False,
        cards_played: list[Play] | None = None,
        scores: dict[str, int] | None = None,
        books: dict[str, int] | None = None,
        settings: GameSettings | None = None,
        mode: ModeConfig | None = None,
        round_number: int = 1,
        blind_nil_players: set[str] | None = None,
    ) -> "BotView":
        """Build a snapshot from loose values, filling sensible defaults."""
        mode = mode or get_mode(len(players))
        return cls(
            players=tuple(players),
            bids=dict(bids or {}),
            tricks_taken={p.id: 0 for p in players} | dict(tricks_taken or {}),
            current_trick=tuple(current_trick or ()),
            spades_broken=spades_broken,
            cards_played=tuple(cards_played or ()),
            scores=dict(scores or init_team_scores(mode)),
            books=dict(books or init_team_scores(mode)),
            settings=settings or GameSettings(),
            mode=mode,
            team_lookup=build_team_lookup(mode, players),
            round_number=round_number,
            blind_nil_players=frozenset(blind_nil_players or ()),
        )

    @property
    def player_count(self) -> int:
        """Number of seated players."""
        return len(self.players)

    @property
    def tricks_per_round(self) -> int:
        """Tricks in a full round."""
        return self.mode.tricks_per_round

    def team_score(self, team_key: str | None) -> int:
        """Running total for a team (0 if unknown)."""
        return self.scores.get(team_key, 0) if team_key else 0

    def team_books(self, team_key: str | None) -> int:
        """Book counter for a team (0 if unknown)."""
        return self.books.get(team_key, 0) if team_key else 0
