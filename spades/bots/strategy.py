"""Disposition calculus: whether a bot should chase or avoid extra tricks.

A positive disposition means SET (take tricks away from the opponents), a
negative one means DUCK (avoid taking books), and 0 is neutral.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from spades.bots.helpers import effective_trick_value, pick_highest, pick_lowest, pick_middle_card
from spades.bots.memory import CardMemory, count_guaranteed_winners, split_tricks
from spades.bots.view import BotView
from spades.models.card import Card
from spades.models.enums import Suit
from spades.models.trick import Play

# Face values used when reading signals
KING = 13
QUEEN = 12
JACK = 11
TEN = 10

# Lean from tricks nobody bid on: few free tricks means SET
HARD_LEAN = 2
FREE_TRICK_LEANS = {2: 1, 3: 0, 4: -1}

# Books (or surplus partner tricks) that push toward SET
BOOK_PRESSURE = 2

# Tricks that must remain for opponents who made their bid to start setting
SET_WINDOW_TRICKS = 4

# Highest card values read as low-card signals
LOW_LEAD_MAX = 7
LOW_DISCARD_MAX = 5


@dataclass
class PlayContext:
    """Everything the play heuristic derives about the table for one decision.

    Attributes:
        view: Read-only game snapshot
        bot_id: Deciding bot
        partner_ids: Teammates (empty for solo teams)
        opponent_ids: Players on every other team
        bot_bid: The bot's own bid
        partner_bid: First partner's bid, None without a partner
        team_bid: Combined non-nil bid of the bot's team
        team_tricks: Tricks the bot's team has taken
        partner_tricks: Tricks the bot's partners have taken
        opp_bid: Combined bid of all opponents
        opp_tricks: Tricks all opponents have taken
        bot_is_nil: The bot bid nil and has not taken a trick
        partner_is_nil: A partner bid nil and has not taken a trick
        nil_opponent_ids: Opponents whose nil is still intact
        seat_position: Number of cards already in the current trick
        memory: Card memory for this decision
        disposition: Own SET/DUCK lean
        opp_disposition: Estimated opponent SET/DUCK lean

    """

    view: BotView
    bot_id: str
    partner_ids: list[str]
    opponent_ids: list[str]
    bot_bid: int
    partner_bid: int | None
    team_bid: int
    team_tricks: int
    partner_tricks: int
    opp_bid: int
    opp_tricks: int
    bot_is_nil: bool
    partner_is_nil: bool
    nil_opponent_ids: list[str]
    seat_position: int
    memory: CardMemory
    disposition: float = 0.0
    opp_disposition: float = 0.0
    urgent_bid: bool = False
    compensate_for_partner: bool = False
    can_guarantee_bid: bool = False
    set_mode: bool = False
    duck_mode: bool = False

    @property
    def partner_id(self) -> str | None:
        """First teammate, if any."""
        return self.partner_ids[0] if self.partner_ids else None

    @property
    def need_more(self) -> bool:
        """Whether the team still needs tricks to make its bid."""
        return self.team_bid > self.team_tricks

    @property
    def tricks_needed(self) -> int:
        """Tricks still missing from the team bid."""
        return self.team_bid - self.team_tricks

    @property
    def tricks_per_round(self) -> int:
        """Tricks in a full round."""
        return self.view.tricks_per_round

    @property
    def last_seat(self) -> int:
        """Seat position of the last player to act in a trick."""
        return self.view.player_count - 1


def _free_trick_lean(free_tricks: int) -> float:
    """Base lean from tricks nobody bid on."""
    if free_tricks <= 1:
        return HARD_LEAN
    return FREE_TRICK_LEANS.get(free_tricks, -HARD_LEAN)


def calculate_disposition(hand: Sequence[Card], ctx: PlayContext) -> float:
    """Calculate the bot's own SET/DUCK disposition."""
    disposition = _free_trick_lean(ctx.tricks_per_round - (ctx.team_bid + ctx.opp_bid))

    # Opponents already made their bid, so setting them is no longer possible
    if ctx.opp_tricks >= ctx.opp_bid:
        disposition = min(disposition, -1)

    team_books = max(0, ctx.team_tricks - ctx.team_bid)
    if team_books >= BOOK_PRESSURE:
        disposition += 1
    elif team_books >= 1 and ctx.opp_tricks < ctx.opp_bid:
        disposition += 0.5

    projected_books = team_books + count_guaranteed_winners(hand, ctx.memory)
    if ctx.team_tricks >= ctx.team_bid and projected_books >= BOOK_PRESSURE:
        disposition += 1

    if ctx.partner_bid:
        partner_excess = ctx.partner_tricks - ctx.partner_bid
        if partner_excess >= BOOK_PRESSURE:
            disposition += 1
        elif partner_excess < 0 and ctx.team_tricks >= ctx.team_bid:
            disposition -= 0.5
        disposition += read_partner_signals(ctx)

    return disposition


def estimate_opponent_disposition(current_trick: Sequence[Play], ctx: PlayContext) -> float:
    """Guess whether the opponents are setting or ducking.

    Mirrors the bot's own calculation from the other side of the table,
    then reads the current trick: trumping a non-spade lead is a strong SET
    signal, discarding off-suit without trumping is a DUCK signal.
    """
    opp_disposition = _free_trick_lean(ctx.tricks_per_round - (ctx.team_bid + ctx.opp_bid))

    if ctx.team_tricks >= ctx.team_bid:
        opp_disposition = min(opp_disposition, -1)

    opp_books = max(0, ctx.opp_tricks - ctx.opp_bid)
    if opp_books >= BOOK_PRESSURE:
        opp_disposition += 1.5
    elif opp_books >= 1 and ctx.team_tricks < ctx.team_bid:
        opp_disposition += 0.5

    tricks_left = ctx.tricks_per_round - (ctx.team_tricks + ctx.opp_tricks)
    if ctx.opp_tricks >= ctx.opp_bid and tricks_left >= SET_WINDOW_TRICKS:
        opp_disposition += 1

    if not current_trick:
        return opp_disposition

    lead = current_trick[0]
    led_suit = lead.card.suit
    opponents = set(ctx.opponent_ids)
    our_side = {ctx.bot_id, *ctx.partner_ids}
    for play in current_trick:
        if play.player_id not in opponents:
            continue
        if led_suit != Suit.SPADES and play.card.is_spade():
            opp_disposition += 1.5
            if lead.player_id in our_side and lead.card.rank_value >= KING:
                opp_disposition += 1
        elif play.card.suit != led_suit and led_suit != Suit.SPADES:
            opp_disposition -= 1

    return opp_disposition


def read_partner_signals(ctx: PlayContext) -> float:
    """Read the partner's card choices for SET/DUCK intent.

    Leading high, trumping, and winning with high cards point to SET.
    Leading low and discarding high off-suit cards point to DUCK. The
    result is clamped to [-1, 1].
    """
    partner_id = ctx.partner_id
    if partner_id is None or ctx.memory.cards_played_count == 0:
        return 0

    signal = 0.0
    signal_count = 0
    for trick in split_tricks(ctx.view.cards_played, ctx.view.player_count):
        partner_play = next((p for p in trick if p.player_id == partner_id), None)
        if partner_play is None:
            continue

        led_suit = trick[0].card.suit
        card = partner_play.card
        value = card.rank_value

        if trick[0].player_id == partner_id:
            if value >= KING:
                signal += 0.5
            elif value >= JACK:
                signal += 0.2
            elif value <= LOW_LEAD_MAX:
                signal -= 0.3
            else:
                continue
            signal_count += 1
        elif card.suit != led_suit:
            if card.is_spade():
                signal += 0.4
            elif value >= KING:
                signal -= 0.5
            elif value <= LOW_DISCARD_MAX:
                signal -= 0.1
            else:
                continue
            signal_count += 1
        else:
            winner = max(trick, key=lambda p: effective_trick_value(p.card, led_suit))
            if winner.player_id == partner_id and value >= QUEEN:
                signal += 0.3
                signal_count += 1

    if signal_count == 0:
        return 0
    return max(-1.0, min(1.0, signal))


def signal_with_follow(cards_of_suit: Sequence[Card], winning_value: float, ctx: PlayContext) -> Card:
    """Follow suit without winning, choosing the card that signals intent.

    A high card tells the partner "I have strength, consider setting", a
    low card tells them "I am ducking".
    """
    under = [c for c in cards_of_suit if c.value < winning_value]
    playable = under or list(cards_of_suit)

    if len(playable) <= 1:
        return playable[0]
    if ctx.disposition > 0 or ctx.set_mode:
        return pick_highest(playable)
    if ctx.disposition < 0 or ctx.duck_mode:
        return pick_lowest(playable)
    return pick_middle_card(playable) or pick_lowest(playable)


def signal_duck(under_cards: Sequence[Card], ctx: PlayContext) -> Card:
    """Duck under the winner, signalling disposition with the card choice."""
    if len(under_cards) <= 1:
        return under_cards[0]
    if ctx.disposition > 0 or ctx.set_mode:
        return pick_highest(under_cards)
    return pick_lowest(under_cards)
