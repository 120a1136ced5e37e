"""Bidding heuristic for bots.

Bids come from a weighted count of likely tricks: spades by rank and
depth, off-suit honor sequences, and ruffing potential from short suits.
Nil is evaluated first. The score situation can then override the honest
count: a desperate team chases whatever still gives it a chance, and a
team that is merely behind stretches when the hand plausibly allows it.
"""

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cache

from spades.bots.view import BotView
from spades.constants import (
    BID_POINTS_MULTIPLIER,
    DEFAULT_PLAYER_COUNT,
    RANK_VALUE,
    TEN_TRICK_THRESHOLD,
)
from spades.models.card import Card
from spades.models.deck import create_deck
from spades.models.enums import OFF_SUITS, Suit
from spades.models.modes import ModeConfig

logger = logging.getLogger(__name__)

ACE = RANK_VALUE["A"]
KING = RANK_VALUE["K"]
QUEEN = RANK_VALUE["Q"]
JACK = RANK_VALUE["J"]
TEN = RANK_VALUE["10"]
LOW_CARD_MAX = 7

# Spade counting
GUARDED_DEPTH = 2
GUARDED_LENGTH = 3
JACK_SPADE_LENGTH = 4
LONG_SPADES = 5

# Ruff credit for a singleton or doubleton with a spade to spare
SHORT_SUIT_RUFF = {1: 0.5, 2: 0.2}

# Nil limits
NIL_JACK_SPADE_LIMIT = 3
NIL_HIGH_CARD_LIMIT = 2
NIL_HONOR_LIMIT = 4
NIL_BARE_KING_LENGTH = 2
NIL_MIN_LOW_CARDS = 6
NIL_PARTNER_COVER_BID = 3
NIL_SAFE_LOW_CARDS = 9
NIL_SAFE_TOP_SPADE = 8
NIL_LOW_CARDS = 8
NIL_TOP_SPADE = 9

# Blind nil: partner bids, score deficits and distance of the leader from the target
BLIND_NIL_MIN_PARTNER_BID = 4
BLIND_NIL_STRONG_PARTNER_BID = 6
BLIND_NIL_STRONG_PARTNER_BOOST = 1.3
BLIND_NIL_DEFICIT_HIGH = 300
BLIND_NIL_DEFICIT_MID = 200
BLIND_NIL_DEFICIT_LOW = 150
BLIND_NIL_PROXIMITY_CLOSE = 100
BLIND_NIL_PROXIMITY_NEAR = 150
BLIND_NIL_PROXIMITY_FAR = 200

# Behind by this much before going for it
GO_FOR_IT_DEFICIT = 100
GO_FOR_IT_FULL_DEFICIT = 300

# Books away from the penalty before feeding the opponents books
BOOK_FEED_MARGIN = 3

# Tricks above raw strength a desperate team will stretch
TEN_BID_STRETCH = 2
SET_BID_STRETCH = 2


@dataclass(frozen=True)
class DesperationContext:
    """Score situation for one bidding decision.

    Attributes:
        desperate: The opponents can reach the win target this round
        opp_can_win: Same as ``desperate``, kept for readers of the score view
        our_score: Bot team's running total
        opp_score: Leading opponent team's running total
        our_books: Bot team's book counter
        opp_books: Leading opponent team's book counter
        win_target: Score that ends the game
        book_threshold: Books per penalty
        tricks_per_round: Tricks in a full round
        opp_bid_total: Sum of the opponent bids placed so far
        has_partner: Whether the bot has a teammate
        ten_bid_bonus: Whether the 10-trick bonus is enabled

    """

    desperate: bool
    opp_can_win: bool
    our_score: int
    opp_score: int
    our_books: int
    opp_books: int
    win_target: int
    book_threshold: int
    tricks_per_round: int
    opp_bid_total: int
    has_partner: bool
    ten_bid_bonus: bool

    @property
    def deficit(self) -> int:
        """Points the bot's team trails the leading opponent by."""
        return self.opp_score - self.our_score


def get_desperation_context(
    view: BotView,
    bot_id: str,
    partner_bid: int | None,
    opponent_bids: Sequence[int],
) -> DesperationContext:
    """Work out whether the opponents can win the game this round.

    The leading opponent team is projected to score its placed bids (or
    every placed opponent bid when its own are not known yet). Reaching the
    win target with that projection makes the bot desperate.

    Args:
        view: Read-only game snapshot
        bot_id: Deciding bot
        partner_bid: Partner's bid, None if not placed or no partner
        opponent_bids: Opponent bids placed so far

    Returns:
        Desperation context

    """
    lookup = view.team_lookup
    our_key = lookup.get_team_key(bot_id)
    opp_keys = lookup.opponent_team_keys(bot_id)
    leader = max(opp_keys, key=view.team_score, default=None)

    opp_bid_total = sum(opponent_bids)
    leader_bids = [view.bids[pid] for pid in lookup.teams_by_key.get(leader, []) if pid in view.bids] if leader else []
    projected_bid = sum(leader_bids) if leader_bids else opp_bid_total
    projected_bid = min(projected_bid, view.tricks_per_round)

    opp_score = view.team_score(leader)
    win_target = view.settings.win_target
    opp_can_win = bool(opponent_bids) and opp_score + projected_bid * BID_POINTS_MULTIPLIER >= win_target

    return DesperationContext(
        desperate=opp_can_win,
        opp_can_win=opp_can_win,
        our_score=view.team_score(our_key),
        opp_score=opp_score,
        our_books=view.team_books(our_key),
        opp_books=view.team_books(leader),
        win_target=win_target,
        book_threshold=view.settings.book_threshold,
        tricks_per_round=view.tricks_per_round,
        opp_bid_total=opp_bid_total,
        has_partner=bool(lookup.get_partner_ids(bot_id)),
        ten_bid_bonus=view.settings.ten_bid_bonus,
    )


@cache
def _virtual_ranks(mode: ModeConfig) -> dict[Card, int]:
    """Rank each card by how many cards of its suit can beat it.

    In a standard deck this is the printed rank. With mega duplicates of
    the honors (8 players) a regular Ace has one card above it, so it is
    valued like a King.
    """
    deck = create_deck(mode)
    ranks: dict[Card, int] = {}
    for card in deck:
        above = sum(1 for other in deck if other.suit == card.suit and other.value > card.value)
        ranks[card] = ACE - above
    return ranks


def _rank_of(card: Card, mode: ModeConfig | None) -> int:
    if mode is None:
        return card.rank_value
    return _virtual_ranks(mode).get(card, card.rank_value)


def _ranked_suit(hand: Sequence[Card], suit: Suit, mode: ModeConfig | None) -> list[int]:
    """Virtual ranks of one suit in the hand, highest first."""
    return sorted((_rank_of(c, mode) for c in hand if c.suit == suit), reverse=True)


def _spade_strength(spades: list[int]) -> float:
    count = len(spades)
    tricks = 0.0
    for depth, rank in enumerate(spades):
        if rank == ACE:
            tricks += 1
        elif rank == KING:
            tricks += 0.9
        elif rank == QUEEN:
            tricks += 0.7 if depth >= GUARDED_DEPTH or count >= GUARDED_LENGTH else 0.3
        elif rank == JACK:
            if count >= JACK_SPADE_LENGTH:
                tricks += 0.5
            elif count >= GUARDED_LENGTH and depth >= GUARDED_DEPTH:
                tricks += 0.3
        elif rank == TEN and count >= LONG_SPADES:
            tricks += 0.3

    if count >= LONG_SPADES:
        tricks += (count - LONG_SPADES + 1) * 0.4
    return tricks


def _off_suit_strength(ranks: list[int]) -> float:
    if not ranks:
        return 0.0
    top = ranks[0]
    if top == ACE:
        tricks = 1.0
        if ranks[1:2] == [KING]:
            tricks += 0.8
            if ranks[2:3] == [QUEEN]:
                tricks += 0.5
        return tricks
    if top == KING:
        return {1: 0.3, 2: 0.4}.get(len(ranks), 0.5)
    if top == QUEEN and len(ranks) >= GUARDED_LENGTH:
        return 0.2
    return 0.0


def _ruff_strength(spades: list[int], suit_lengths: Sequence[int], player_count: int) -> float:
    """Ruffing potential of void and short off-suits.

    A short suit only ruffs while the hand holds more spades than cards of
    that suit. Every extra player at the table is another chance to be
    overtrumped, so the credit shrinks above four players.
    """
    count = len(spades)
    high_spades = 0
    for rank in spades:
        if rank < QUEEN:
            break
        high_spades += 1

    tricks = 0.0
    for length in suit_lengths:
        if count <= length:
            continue
        if length == 0:
            tricks += min(count - high_spades, 1.0)
        else:
            tricks += SHORT_SUIT_RUFF.get(length, 0.0)
    return tricks * min(1.0, DEFAULT_PLAYER_COUNT / player_count)


def estimate_tricks(hand: Sequence[Card], mode: ModeConfig | None = None) -> float:
    """Estimate how many tricks a hand should take.

    Args:
        hand: Cards to evaluate
        mode: Mode whose deck defines card strength (standard deck if None)

    Returns:
        Expected tricks, not rounded

    """
    spades = _ranked_suit(hand, Suit.SPADES, mode)
    off_suits = [_ranked_suit(hand, suit, mode) for suit in OFF_SUITS]
    player_count = mode.player_count if mode else DEFAULT_PLAYER_COUNT

    tricks = _spade_strength(spades)
    tricks += sum(_off_suit_strength(ranks) for ranks in off_suits)
    tricks += _ruff_strength(spades, [len(ranks) for ranks in off_suits], player_count)
    return tricks


def evaluate_nil(hand: Sequence[Card], partner_bid: int | None, *, relaxed: bool = False) -> bool:  # noqa: C901, PLR0911
    """Decide whether a hand can bid nil.

    Rejects any hand holding the Q, K or A of spades, two or more high
    cards, too many honors overall, an off-suit Ace or a short off-suit
    King, or too few low cards. ``relaxed`` loosens the low-card and
    spade thresholds when the team has little left to lose.

    Args:
        hand: Cards to evaluate
        partner_bid: Partner's bid, None if not placed or no partner
        relaxed: Accept riskier hands

    Returns:
        True if the hand should bid nil

    """
    spades = sorted((c.rank_value for c in hand if c.is_spade()), reverse=True)
    highest_spade = spades[0] if spades else 0

    if highest_spade >= QUEEN:
        return False
    if highest_spade == JACK and len(spades) >= NIL_JACK_SPADE_LIMIT:
        return False

    high_cards = sum(1 for c in hand if c.rank_value >= QUEEN)
    if high_cards >= NIL_HIGH_CARD_LIMIT:
        return False

    medium_cards = sum(1 for c in hand if TEN <= c.rank_value <= JACK)
    if high_cards + medium_cards >= NIL_HONOR_LIMIT:
        return False

    for suit in OFF_SUITS:
        ranks = sorted((c.rank_value for c in hand if c.suit == suit), reverse=True)
        if not ranks:
            continue
        if ranks[0] == ACE:
            return False
        if ranks[0] == KING and len(ranks) <= NIL_BARE_KING_LENGTH:
            return False

    slack = 1 if relaxed else 0
    low_cards = sum(1 for c in hand if c.rank_value <= LOW_CARD_MAX)
    if low_cards < NIL_MIN_LOW_CARDS - slack:
        return False

    if partner_bid is not None and partner_bid >= NIL_PARTNER_COVER_BID:
        return True
    if high_cards:
        return False
    if low_cards >= NIL_SAFE_LOW_CARDS - slack and highest_spade <= NIL_SAFE_TOP_SPADE + slack:
        return True

    enough_low = low_cards >= NIL_LOW_CARDS - slack and highest_spade <= NIL_TOP_SPADE + slack
    if partner_bid is None:
        # Nobody to cover a stray ten or jack
        return enough_low and medium_cards <= 1
    return enough_low


def evaluate_blind_nil(view: BotView, bot_id: str, rng: random.Random | None = None) -> bool:
    """Decide whether to bid blind nil, without looking at the hand.

    Only the second bidder of a team considers it, and only when the
    partner bid at least 4 (never after a partner's nil) and it is past the
    first round. The chance grows with the score deficit and with how close
    the leading opponent is to the win target.

    Args:
        view: Read-only game snapshot
        bot_id: Deciding bot
        rng: Random source for the final draw

    Returns:
        True if the bot should bid blind nil

    """
    if not view.settings.blind_nil or view.round_number <= 1:
        return False

    lookup = view.team_lookup
    partner_id = lookup.get_partner_id(bot_id)
    if partner_id is None:
        return False
    partner_bid = view.bids.get(partner_id)
    if partner_bid is None or partner_bid < BLIND_NIL_MIN_PARTNER_BID:
        return False

    leader = max(lookup.opponent_team_keys(bot_id), key=view.team_score, default=None)
    our_score = view.team_score(lookup.get_team_key(bot_id))
    opp_score = view.team_score(leader)
    deficit = opp_score - our_score
    proximity = view.settings.win_target - opp_score

    if deficit < BLIND_NIL_DEFICIT_LOW and proximity > BLIND_NIL_PROXIMITY_FAR:
        return False

    if deficit >= BLIND_NIL_DEFICIT_HIGH and proximity <= BLIND_NIL_PROXIMITY_CLOSE:
        probability = 0.35
    elif deficit >= BLIND_NIL_DEFICIT_HIGH:
        probability = 0.20
    elif deficit >= BLIND_NIL_DEFICIT_MID and proximity <= BLIND_NIL_PROXIMITY_NEAR:
        probability = 0.18
    elif deficit >= BLIND_NIL_DEFICIT_MID:
        probability = 0.12
    elif deficit >= BLIND_NIL_DEFICIT_LOW or proximity <= BLIND_NIL_PROXIMITY_CLOSE:
        probability = 0.08
    else:
        probability = 0.0

    if partner_bid >= BLIND_NIL_STRONG_PARTNER_BID:
        probability *= BLIND_NIL_STRONG_PARTNER_BOOST

    return (rng or random).random() < probability  # noqa: S311


def _ten_bid_target(partner_bid: int | None, has_partner: bool) -> int | None:
    """Own bid that brings the team to exactly ten, if it can be known."""
    if not has_partner:
        return TEN_TRICK_THRESHOLD
    if partner_bid:
        return TEN_TRICK_THRESHOLD - partner_bid
    return None


def _set_bid(desp: DesperationContext, partner_bid: int | None) -> int | None:
    """Own bid that leaves the opponents short of their combined bid."""
    if desp.opp_bid_total <= 0:
        return None
    team_needed = desp.tricks_per_round - desp.opp_bid_total + 1
    return team_needed - (partner_bid or 0)


def _desperate_bid(
    honest: int,
    strength: float,
    desp: DesperationContext,
    partner_bid: int | None,
    cards_per_player: int,
) -> int:
    """Pick the bid with the best chance when the opponents can win now."""
    # Bidding normally still gets us there too
    team_bid = honest + (partner_bid or 0)
    if desp.our_score + team_bid * BID_POINTS_MULTIPLIER >= desp.win_target:
        return honest

    ten_target = _ten_bid_target(partner_bid, desp.has_partner)
    if desp.ten_bid_bonus and ten_target is not None and 0 < ten_target - strength <= TEN_BID_STRETCH:
        return min(ten_target, cards_per_player)

    set_bid = _set_bid(desp, partner_bid)
    if set_bid is not None and 0 < set_bid <= cards_per_player and set_bid - strength <= SET_BID_STRETCH:
        # A committed partner reads the overbid as a call to set
        if partner_bid:
            set_bid = min(set_bid + 1, cards_per_player)
        return set_bid

    if desp.opp_books >= desp.book_threshold - BOOK_FEED_MARGIN:
        return max(1, honest - 1)

    return honest


def _go_for_it_bid(  # noqa: PLR0913
    honest: int,
    strength: float,
    hand: Sequence[Card],
    desp: DesperationContext,
    partner_bid: int | None,
    cards_per_player: int,
    rng: random.Random | None,
) -> int:
    """Stretch when behind, in proportion to how far behind."""
    willingness = min(1.0, desp.deficit / GO_FOR_IT_FULL_DEFICIT)
    draw = (rng or random).random()  # noqa: S311

    if partner_bid != 0 and draw < willingness / 2 and evaluate_nil(hand, partner_bid, relaxed=True):
        return 0

    ten_target = _ten_bid_target(partner_bid, desp.has_partner)
    if desp.ten_bid_bonus and ten_target is not None and 0 < ten_target - strength <= 1 + willingness:
        return min(ten_target, cards_per_player)

    set_bid = _set_bid(desp, partner_bid)
    if set_bid is not None and honest < set_bid <= cards_per_player and set_bid - strength <= willingness * SET_BID_STRETCH:
        return set_bid

    return honest


def bot_bid(  # noqa: PLR0913
    hand: Sequence[Card],
    partner_bid: int | None,
    opponent_bids: Sequence[int],
    view: BotView,
    bot_id: str,
    rng: random.Random | None = None,
) -> int:
    """Choose a bid for a bot.

    Args:
        hand: The bot's hand
        partner_bid: Partner's bid, None if not placed or no partner
        opponent_bids: Opponent bids placed so far
        view: Read-only game snapshot
        bot_id: Deciding bot
        rng: Random source for go-for-it draws

    Returns:
        Bid from 0 (nil) to the cards per player

    """
    cards_per_player = view.mode.cards_per_player
    desp = get_desperation_context(view, bot_id, partner_bid, opponent_bids)
    nil_allowed = partner_bid != 0 or view.settings.double_nil

    if nil_allowed and evaluate_nil(hand, partner_bid, relaxed=desp.desperate):
        logger.debug("Bot %s bids nil", bot_id)
        return 0

    strength = estimate_tricks(hand, view.mode)
    bid = math.floor(strength + 0.5)

    # Cover a partner's nil
    if partner_bid == 0:
        bid = min(cards_per_player, max(bid, 3) + 1)

    if desp.desperate:
        bid = _desperate_bid(bid, strength, desp, partner_bid, cards_per_player)
    else:
        if partner_bid and bid + partner_bid > TEN_TRICK_THRESHOLD:
            bid = max(1, bid - 1)
        if desp.deficit >= GO_FOR_IT_DEFICIT:
            bid = _go_for_it_bid(bid, strength, hand, desp, partner_bid, cards_per_player, rng)

    if bid == 0 and not nil_allowed:
        bid = 1
    if bid != 0:
        bid = max(1, min(cards_per_player, bid))

    logger.debug(
        "Bot %s bids %d (strength %.2f, desperate %s, deficit %d)",
        bot_id,
        bid,
        strength,
        desp.desperate,
        desp.deficit,
    )
    return bid
