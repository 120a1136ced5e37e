"""Game state machine.

A ``GameState`` owns one game from the first deal to game over. All
per-player round state is stored by turn position, and player IDs are a
mutable mapping on top of it, so a reconnecting player can be given a new
ID without touching any round progress.
"""

import logging
import random
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from spades.models.card import Card
from spades.models.deck import Deck
from spades.models.enums import Phase
from spades.models.errors import ActionError, ErrorCode
from spades.models.game_settings import GameSettings
from spades.models.modes import ModeConfig, get_mode
from spades.models.player import SeatedPlayer
from spades.models.preferences import merge_with_defaults, sort_hand
from spades.models.results import BidResult, PlayResult, RoundSummary
from spades.models.scoring import check_moonshot, check_winner, score_round
from spades.models.teams import TeamLookup, build_team_lookup, init_team_scores
from spades.models.trick import Play, determine_trick_winner, validate_play
from spades.models.views import PlayerView, build_player_view

logger = logging.getLogger(__name__)

REPLACEABLE_PROPS = ("is_bot", "user_id")


class GameState:
    """Root aggregate for one game of Spades.

    Attributes:
        mode: Mode configuration for the player count
        players: Seated players in turn order
        settings: Rule settings for this game
        phase: Current lifecycle phase
        dealer_index: Turn position of the dealer
        current_turn_index: Turn position of the player to act
        trick_leader_index: Turn position that led the current trick
        spades_broken: Whether a spade has been played this round
        scores: Team key -> running total
        books: Team key -> book counter
        round_number: 1-indexed round number
        round_history: Summaries of finished rounds
        tricks_played: Completed tricks this round
        winning_team: Team key of the winner once the game is over

    """

    def __init__(
        self,
        players: Sequence[SeatedPlayer],
        preferences: Mapping[str, Mapping[str, str]] | None = None,
        settings: GameSettings | None = None,
        mode_override: ModeConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Create a game and deal the first round.

        Args:
            players: Seated players in turn order (see ``arrange_seating``)
            preferences: Player ID -> preferences (``cardSort``, ``tableColor``)
            settings: Rule settings, defaults if None
            mode_override: Mode to use instead of the one for ``len(players)``
            rng: Random source for the dealer and shuffles

        Raises:
            ValueError: If the players do not fit the mode

        """
        self.mode = mode_override or get_mode(len(players))
        self._validate_players(players)

        self.players: list[SeatedPlayer] = list(players)
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random()  # noqa: S311
        preferences = preferences or {}
        self.preferences: dict[str, dict[str, str]] = {
            p.id: merge_with_defaults(preferences.get(p.id)) for p in self.players
        }

        self._seat_by_id: dict[str, int] = {p.id: index for index, p in enumerate(self.players)}
        self.team_lookup: TeamLookup = build_team_lookup(self.mode, self.players)

        count = self.player_count
        self.phase = Phase.BIDDING
        self.dealer_index = self.rng.randrange(count)
        self.current_turn_index = -1
        self.trick_leader_index = -1
        self.spades_broken = False
        self.scores = init_team_scores(self.mode)
        self.books = init_team_scores(self.mode)
        self.round_number = 0
        self.round_history: list[RoundSummary] = []
        self.tricks_played = 0
        self.winning_team: str | None = None

        self._hands: list[list[Card]] = [[] for _ in range(count)]
        self._bids: list[int | None] = [None] * count
        self._tricks_taken: list[int] = [0] * count
        self._blind_nil: set[int] = set()
        self._current_trick: list[tuple[int, Card]] = []
        self._cards_played: list[tuple[int, Card]] = []

        self._deal_round()

    def _validate_players(self, players: Sequence[SeatedPlayer]) -> None:
        if len(players) != self.mode.player_count:
            raise ValueError(f"Mode needs {self.mode.player_count} players, got {len(players)}")
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate player IDs: {ids}")
        for player in players:
            if player.team_key not in self.mode.team_keys:
                raise ValueError(f"Player {player.id} has team {player.team}, not in {self.mode.team_keys}")

    # ------------------------------------------------------------------
    # Read-only projections keyed by current player ID
    # ------------------------------------------------------------------

    @property
    def player_count(self) -> int:
        """Number of seated players."""
        return self.mode.player_count

    @property
    def player_ids(self) -> list[str]:
        """Player IDs in turn order."""
        return [p.id for p in self.players]

    @property
    def hands(self) -> dict[str, list[Card]]:
        """Player ID -> copy of the player's hand."""
        return {p.id: list(self._hands[i]) for i, p in enumerate(self.players)}

    @property
    def bids(self) -> dict[str, int]:
        """Player ID -> bid, for players who have bid."""
        return {p.id: bid for p, bid in zip(self.players, self._bids, strict=True) if bid is not None}

    @property
    def tricks_taken(self) -> dict[str, int]:
        """Player ID -> tricks won this round."""
        return {p.id: taken for p, taken in zip(self.players, self._tricks_taken, strict=True)}

    @property
    def blind_nil_players(self) -> set[str]:
        """IDs of players who bid blind nil this round."""
        return {self.players[i].id for i in self._blind_nil}

    @property
    def current_trick(self) -> list[Play]:
        """Plays in the trick being played."""
        return [Play(self.players[i].id, card) for i, card in self._current_trick]

    @property
    def cards_played(self) -> list[Play]:
        """Plays from completed tricks this round, in chronological order."""
        return [Play(self.players[i].id, card) for i, card in self._cards_played]

    def get_player(self, player_id: str) -> SeatedPlayer | None:
        """Get a seated player by ID."""
        seat = self._seat_by_id.get(player_id)
        return None if seat is None else self.players[seat]

    def get_hand(self, player_id: str) -> list[Card]:
        """Get a copy of one player's hand (empty for unknown IDs)."""
        seat = self._seat_by_id.get(player_id)
        return [] if seat is None else list(self._hands[seat])

    def get_current_turn_player_id(self) -> str | None:
        """Get the ID of the player who must act, None outside bidding and play."""
        if self.phase not in (Phase.BIDDING, Phase.PLAYING) or self.current_turn_index < 0:
            return None
        return self.players[self.current_turn_index].id

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.phase == Phase.GAME_OVER

    def get_state_for_player(self, player_id: str) -> PlayerView:
        """Get the sanitized view of the game for one player or spectator."""
        return build_player_view(self, player_id)

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def _deal_round(self) -> None:
        self.round_number += 1
        self.phase = Phase.BIDDING
        count = self.player_count
        self._bids = [None] * count
        self._tricks_taken = [0] * count
        self._blind_nil = set()
        self._current_trick = []
        self._cards_played = []
        self.spades_broken = False
        self.tricks_played = 0

        hands = Deck(self.mode, self.rng).deal()
        for seat, hand in enumerate(hands):
            card_sort = self.preferences[self.players[seat].id].get("cardSort")
            self._hands[seat] = sort_hand(hand, card_sort)

        # Bidding starts left of the dealer
        self.current_turn_index = (self.dealer_index + 1) % count
        self.trick_leader_index = self.current_turn_index
        logger.info(
            "Round %d dealt, dealer %s",
            self.round_number,
            self.players[self.dealer_index].id,
        )

    def start_new_round(self) -> ActionError | None:
        """Rotate the dealer and deal the next round.

        Returns:
            None on success, an error if the round is not finished or the
            game is over

        """
        if self.phase == Phase.GAME_OVER:
            return self._reject(ErrorCode.GAME_OVER, "Game is over")
        if self.phase != Phase.SCORING:
            return self._reject(ErrorCode.ROUND_IN_PROGRESS, "Round is still in progress")

        self.dealer_index = (self.dealer_index + 1) % self.player_count
        self._deal_round()
        return None

    def _reject(self, code: ErrorCode, message: str) -> ActionError:
        logger.debug("Rejected action: %s (%s)", message, code)
        return ActionError(code=code, error=message)

    # ------------------------------------------------------------------
    # Bidding
    # ------------------------------------------------------------------

    def place_bid(self, player_id: str, bid: int, *, blind_nil: bool = False) -> BidResult | ActionError:
        """Place a bid for the player whose turn it is.

        Args:
            player_id: Bidding player
            bid: Number of tricks, 0 for nil
            blind_nil: Whether the nil is blind (requires bid 0 and the setting)

        Returns:
            Bid result, or an error with the state unchanged

        """
        if self.phase != Phase.BIDDING:
            return self._reject(ErrorCode.NOT_IN_BIDDING_PHASE, "Not in bidding phase")
        if self.get_current_turn_player_id() != player_id:
            return self._reject(ErrorCode.NOT_YOUR_TURN_TO_BID, "Not your turn to bid")

        max_bid = self.mode.cards_per_player
        if isinstance(bid, bool) or not isinstance(bid, int) or not 0 <= bid <= max_bid:
            return self._reject(ErrorCode.INVALID_BID, f"Bid must be 0-{max_bid}")
        if blind_nil:
            if not self.settings.blind_nil:
                return self._reject(ErrorCode.BLIND_NIL_DISABLED, "Blind nil is not enabled")
            if bid != 0:
                return self._reject(ErrorCode.BLIND_NIL_REQUIRES_ZERO, "Blind nil requires a bid of 0")

        seat = self.current_turn_index
        self._bids[seat] = bid
        if blind_nil:
            self._blind_nil.add(seat)
        logger.debug("Player %s bid %d%s", player_id, bid, " (blind nil)" if blind_nil else "")

        count = self.player_count
        if all(b is not None for b in self._bids):
            self.phase = Phase.PLAYING
            # First lead is left of the dealer
            self.current_turn_index = (self.dealer_index + 1) % count
            self.trick_leader_index = self.current_turn_index
            return BidResult(all_bids_in=True, next_turn_id=self.players[self.current_turn_index].id)

        self.current_turn_index = (self.current_turn_index + 1) % count
        return BidResult(all_bids_in=False, next_turn_id=self.players[self.current_turn_index].id)

    # ------------------------------------------------------------------
    # Card play
    # ------------------------------------------------------------------

    def play_card(self, player_id: str, card: Card) -> PlayResult | ActionError:
        """Play a card for the player whose turn it is.

        Completes the trick when every player has played, and ends the
        round after the last trick.

        Args:
            player_id: Playing player
            card: Card to play (suit, rank and mega must match a held card)

        Returns:
            Play result, or an error with the state unchanged

        """
        if self.phase != Phase.PLAYING:
            return self._reject(ErrorCode.NOT_IN_PLAYING_PHASE, "Not in playing phase")
        if self.get_current_turn_player_id() != player_id:
            return self._reject(ErrorCode.NOT_YOUR_TURN, "Not your turn")

        seat = self.current_turn_index
        hand = self._hands[seat]
        if card not in hand:
            return self._reject(ErrorCode.CARD_NOT_IN_HAND, "You don't have that card")

        validation = validate_play(card, hand, self.current_trick, self.spades_broken)
        if not validation.valid:
            return self._reject(validation.code or ErrorCode.MUST_FOLLOW_SUIT, validation.reason or "Invalid play")

        hand.remove(card)
        self._current_trick.append((seat, card))
        if card.is_spade():
            self.spades_broken = True

        count = self.player_count
        if len(self._current_trick) < count:
            self.current_turn_index = (self.current_turn_index + 1) % count
            return PlayResult(trick_complete=False, next_turn_id=self.players[self.current_turn_index].id)

        completed = tuple(self.current_trick)
        winner_id = determine_trick_winner(completed)
        winner_seat = self._seat_by_id[winner_id]
        self._tricks_taken[winner_seat] += 1
        self.tricks_played += 1
        self._cards_played.extend(self._current_trick)
        self._current_trick = []
        logger.debug("Trick %d won by %s", self.tricks_played, winner_id)

        if self.tricks_played == self.mode.tricks_per_round:
            return self._end_round(winner_id, completed)

        # Winner leads the next trick
        self.trick_leader_index = winner_seat
        self.current_turn_index = winner_seat
        return PlayResult(
            trick_complete=True,
            next_turn_id=winner_id,
            trick=completed,
            winner_id=winner_id,
        )

    def _end_round(self, winner_id: str, trick: tuple[Play, ...]) -> PlayResult:
        self.phase = Phase.SCORING
        bids = self.bids
        tricks_taken = self.tricks_taken
        blind_nil_players = self.blind_nil_players

        moonshot = check_moonshot(self.team_lookup, bids, tricks_taken) if self.settings.moonshot else None
        if moonshot:
            team_scores = init_team_scores(self.mode)
            winner = moonshot
        else:
            results = score_round(
                self.team_lookup,
                bids,
                tricks_taken,
                self.scores,
                self.books,
                book_threshold=self.settings.book_threshold,
                ten_bid_bonus=self.settings.ten_bid_bonus,
                blind_nil_players=blind_nil_players,
            )
            team_scores = {key: result.round_score for key, result in results.items()}
            for key, result in results.items():
                self.scores[key] = result.new_total
                self.books[key] = result.books
            winner = check_winner(self.scores, self.settings.win_target, self.mode)

        summary = RoundSummary(
            round_number=self.round_number,
            bids=bids,
            tricks_taken=tricks_taken,
            team_scores=team_scores,
            team_totals=dict(self.scores),
            team_books=dict(self.books),
            blind_nil_players=tuple(sorted(blind_nil_players)),
            moonshot=moonshot,
        )
        self.round_history.append(summary)
        logger.info("Round %d scored: %s (totals %s)", self.round_number, team_scores, self.scores)

        if winner:
            self.phase = Phase.GAME_OVER
            self.winning_team = winner
            logger.info("Game over, %s wins after %d rounds", winner, self.round_number)

        return PlayResult(
            trick_complete=True,
            next_turn_id=None,
            trick=trick,
            winner_id=winner_id,
            round_over=True,
            round_summary=summary,
            game_over=winner is not None,
            winning_team=winner,
        )

    # ------------------------------------------------------------------
    # Identity changes
    # ------------------------------------------------------------------

    def reassign_identity(self, old_id: str, new_id: str) -> bool:
        """Move a seat from one player ID to another.

        Every ID-keyed view (hand, bid, tricks, blind nil, current trick,
        played cards, preferences, round history) follows automatically or
        is rewritten, and the team lookup is rebuilt.

        Returns:
            False if ``old_id`` is not seated or ``new_id`` already is

        """
        seat = self._seat_by_id.get(old_id)
        if seat is None or (new_id != old_id and new_id in self._seat_by_id):
            return False
        if new_id == old_id:
            return True

        del self._seat_by_id[old_id]
        self._seat_by_id[new_id] = seat
        self.players[seat] = replace(self.players[seat], id=new_id)
        self.preferences[new_id] = self.preferences.pop(old_id)
        self.round_history = [summary.with_player_renamed(old_id, new_id) for summary in self.round_history]
        self.team_lookup = build_team_lookup(self.mode, self.players)
        logger.debug("Seat %d reassigned from %s to %s", seat, old_id, new_id)
        return True

    def replace_player(
        self,
        old_id: str,
        new_id: str,
        new_name: str | None = None,
        props: Mapping[str, Any] | None = None,
    ) -> bool:
        """Hand a seat to a new player, keeping seat, team and progress.

        Args:
            old_id: Current ID of the seat
            new_id: New player ID
            new_name: New display name, unchanged if None
            props: Optional ``is_bot`` / ``user_id`` overrides

        Returns:
            False if the seat could not be reassigned

        """
        if not self.reassign_identity(old_id, new_id):
            return False

        seat = self._seat_by_id[new_id]
        changes: dict[str, Any] = {key: value for key, value in (props or {}).items() if key in REPLACEABLE_PROPS}
        if new_name is not None:
            changes["name"] = new_name
        if changes:
            self.players[seat] = replace(self.players[seat], **changes)
        return True
