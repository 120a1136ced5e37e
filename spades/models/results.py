"""Structured results returned by the game state machine."""

from dataclasses import dataclass, field, replace

from spades.models.trick import Play


@dataclass(frozen=True)
class BidResult:
    """Outcome of an accepted bid."""

    all_bids_in: bool
    next_turn_id: str


@dataclass(frozen=True)
class RoundSummary:
    """Immutable snapshot appended to the round history at round end.

    Attributes:
        round_number: 1-indexed round number
        bids: Player ID -> bid
        tricks_taken: Player ID -> tricks won
        team_scores: Team key -> points scored this round
        team_totals: Team key -> running total after this round
        team_books: Team key -> book counter after this round
        blind_nil_players: Player IDs that bid blind nil
        moonshot: Team key that shot the moon, if any

    """

    round_number: int
    bids: dict[str, int]
    tricks_taken: dict[str, int]
    team_scores: dict[str, int]
    team_totals: dict[str, int]
    team_books: dict[str, int]
    blind_nil_players: tuple[str, ...] = ()
    moonshot: str | None = None

    def with_player_renamed(self, old_id: str, new_id: str) -> "RoundSummary":
        """Return a copy with every reference to ``old_id`` replaced."""

        def rename(mapping: dict[str, int]) -> dict[str, int]:
            return {(new_id if pid == old_id else pid): value for pid, value in mapping.items()}

        return replace(
            self,
            bids=rename(self.bids),
            tricks_taken=rename(self.tricks_taken),
            blind_nil_players=tuple(new_id if pid == old_id else pid for pid in self.blind_nil_players),
        )


@dataclass(frozen=True)
class PlayResult:
    """Outcome of an accepted card play.

    Attributes:
        trick_complete: Whether this play completed the trick
        next_turn_id: Player to act next (None once the round is over)
        trick: The completed trick, in play order
        winner_id: Winner of the completed trick
        round_over: Whether the last trick of the round was just played
        round_summary: Summary of the finished round
        game_over: Whether the game has ended
        winning_team: Team key of the winner

    """

    trick_complete: bool
    next_turn_id: str | None
    trick: tuple[Play, ...] = field(default_factory=tuple)
    winner_id: str | None = None
    round_over: bool = False
    round_summary: RoundSummary | None = None
    game_over: bool = False
    winning_team: str | None = None
