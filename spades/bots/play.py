"""Card selection for heuristic bots.

Every decision is a lead or a follow, split by nil situation (own nil,
protecting a partner's nil, busting an opponent's nil) and otherwise by
whether the team still needs tricks and the current disposition. Every
branch ends in a concrete card.
"""

import logging
import random
from collections.abc import Sequence

from spades.bots.helpers import (
    effective_trick_value,
    get_current_winner,
    get_valid_follows,
    get_valid_leads,
    group_by_suit,
    pick_by_disposition,
    pick_highest,
    pick_lowest,
    pick_middle_card,
    pick_random,
    pick_top_from_shortest_suit,
)
from spades.bots.memory import (
    any_opponent_void,
    build_card_memory,
    count_guaranteed_winners,
    is_known_void,
    is_master_card,
)
from spades.bots.strategy import (
    JACK,
    KING,
    QUEEN,
    TEN,
    PlayContext,
    calculate_disposition,
    estimate_opponent_disposition,
    signal_duck,
    signal_with_follow,
)
from spades.bots.view import BotView
from spades.models.card import Card
from spades.models.enums import Suit
from spades.models.trick import Play

logger = logging.getLogger(__name__)

# Rank windows of cards a nil bidder may be forced to win
BUST_LEAD_MIN = 8
BUST_FALLBACK_MIN = 6
BUST_FALLBACK_MAX = 9
BUST_FOLLOW_MIN = 7

# Suit lengths that make a King or a long honor suit worth leading
GUARDED_KING_LENGTH = 2
LONG_SUIT_LENGTH = 4


def build_play_context(hand: Sequence[Card], view: BotView, bot_id: str) -> PlayContext:
    """Derive the table situation for one play decision."""
    lookup = view.team_lookup
    bids = view.bids
    tricks = view.tricks_taken

    partner_ids = lookup.get_partner_ids(bot_id)
    opponent_ids = lookup.get_opponent_ids(bot_id)
    partner_id = partner_ids[0] if partner_ids else None
    bot_bid = bids.get(bot_id, 0)
    bot_tricks = tricks.get(bot_id, 0)
    partner_tricks = sum(tricks.get(pid, 0) for pid in partner_ids)

    memory = build_card_memory(hand, view.cards_played, view.current_trick, view.mode)
    ctx = PlayContext(
        view=view,
        bot_id=bot_id,
        partner_ids=partner_ids,
        opponent_ids=opponent_ids,
        bot_bid=bot_bid,
        partner_bid=bids.get(partner_id) if partner_id else None,
        team_bid=bot_bid + sum(bids.get(pid, 0) for pid in partner_ids),
        team_tricks=bot_tricks + partner_tricks,
        partner_tricks=partner_tricks,
        opp_bid=sum(bids.get(pid, 0) for pid in opponent_ids),
        opp_tricks=sum(tricks.get(pid, 0) for pid in opponent_ids),
        bot_is_nil=bids.get(bot_id) == 0 and bot_tricks == 0,
        partner_is_nil=any(bids.get(pid) == 0 and tricks.get(pid, 0) == 0 for pid in partner_ids),
        nil_opponent_ids=[pid for pid in opponent_ids if bids.get(pid) == 0 and tricks.get(pid, 0) == 0],
        seat_position=len(view.current_trick),
        memory=memory,
    )

    ctx.disposition = calculate_disposition(hand, ctx)
    ctx.opp_disposition = estimate_opponent_disposition(view.current_trick, ctx)

    need_more = ctx.need_more
    if ctx.opp_disposition > 0 and need_more:
        ctx.urgent_bid = True
    if ctx.opp_disposition > 1 and ctx.partner_bid and ctx.partner_tricks < ctx.partner_bid:
        ctx.compensate_for_partner = True
    if ctx.opp_disposition < 0 and ctx.disposition <= 0 and not need_more:
        # Both sides ducking, avoid books harder
        ctx.disposition -= 0.5
    if ctx.opp_disposition > 1 and not need_more:
        ctx.disposition += 0.5

    if need_more and not ctx.bot_is_nil:
        ctx.can_guarantee_bid = count_guaranteed_winners(hand, memory) >= ctx.tricks_needed

    made_bid = not need_more or ctx.can_guarantee_bid
    ctx.set_mode = made_bid and ctx.disposition > 0 and ctx.opp_tricks < ctx.opp_bid
    ctx.duck_mode = made_bid and ctx.disposition < 0
    return ctx


def bot_play_card(
    hand: Sequence[Card],
    view: BotView,
    bot_id: str,
    rng: random.Random | None = None,
) -> Card:
    """Choose a legal card for a bot to play.

    Args:
        hand: The bot's current hand
        view: Read-only game snapshot
        bot_id: Deciding bot
        rng: Random source for tie-breaks

    Returns:
        A card from ``hand`` that is legal to play

    """
    ctx = build_play_context(hand, view, bot_id)
    picker = _CardPicker(list(hand), ctx, rng)
    card = picker.lead() if not view.current_trick else picker.follow(view.current_trick)
    logger.debug(
        "Bot %s plays %s (disposition %.1f, need %d)",
        bot_id,
        card,
        ctx.disposition,
        ctx.tricks_needed,
    )
    return card


def _off_suit(cards: Sequence[Card]) -> list[Card]:
    return [c for c in cards if not c.is_spade()]


def _spades(cards: Sequence[Card]) -> list[Card]:
    return [c for c in cards if c.is_spade()]


def _suit_length(hand: Sequence[Card], suit: Suit) -> int:
    return sum(1 for c in hand if c.suit == suit)


def _highest_trump(trick: Sequence[Play]) -> float:
    return max((p.card.value for p in trick if p.card.is_spade()), default=0)


class _CardPicker:
    """Lead and follow rules for one decision."""

    def __init__(self, hand: list[Card], ctx: PlayContext, rng: random.Random | None) -> None:
        self.hand = hand
        self.ctx = ctx
        self.memory = ctx.memory
        self.rng = rng

    def _master(self, card: Card) -> bool:
        return is_master_card(card, self.memory)

    def _opp_void(self, suit: Suit) -> bool:
        return any_opponent_void(suit, self.ctx.opponent_ids, self.memory)

    def _top_from_shortest(self, candidates: Sequence[Card]) -> Card:
        return pick_top_from_shortest_suit(candidates, self.hand)

    def _shortest_suit(self, groups: dict[Suit, list[Card]], max_len: int | None = None) -> Suit | None:
        best: Suit | None = None
        best_len = self.ctx.tricks_per_round + 1
        for suit in groups:
            length = _suit_length(self.hand, suit)
            if length < best_len and (max_len is None or length <= max_len):
                best, best_len = suit, length
        return best

    # ------------------------------------------------------------------
    # Leading
    # ------------------------------------------------------------------

    def lead(self) -> Card:
        valid = get_valid_leads(self.hand, self.ctx.view.spades_broken)
        ctx = self.ctx

        if ctx.bot_is_nil:
            return self._lead_as_nil(valid)
        if ctx.partner_is_nil:
            return self._lead_to_protect_nil(valid)
        if ctx.nil_opponent_ids:
            return self._lead_to_bust_nil(valid)

        if ctx.need_more:
            if ctx.can_guarantee_bid:
                if ctx.set_mode:
                    return self._lead_in_set_mode(valid)
                if ctx.duck_mode:
                    return self._lead_guaranteed_then_duck(valid)
            return self._lead_when_needing_tricks(valid)

        return self._lead_in_set_mode(valid) if ctx.set_mode else self._lead_in_duck_mode(valid)

    def _lead_as_nil(self, valid: list[Card]) -> Card:
        """Lead the lowest card of the longest suit."""
        best: Card | None = None
        best_len = -1
        for cards in group_by_suit(valid).values():
            lowest = cards[-1]
            if len(cards) > best_len or (len(cards) == best_len and best and lowest.value < best.value):
                best, best_len = lowest, len(cards)
        return best or pick_lowest(valid)

    def _lead_to_protect_nil(self, valid: list[Card]) -> Card:
        off_suit = _off_suit(valid)
        if not off_suit:
            return pick_highest(_spades(valid))

        partner_id = self.ctx.partner_id
        # A partner void in the led suit can shed a dangerous card
        partner_void = [c for c in off_suit if is_known_void(partner_id, c.suit, self.memory)]
        if partner_void:
            void_masters = [c for c in partner_void if self._master(c)]
            if void_masters:
                return self._top_from_shortest(void_masters)
            return pick_highest(partner_void)

        masters = [c for c in off_suit if self._master(c)]
        if masters:
            safe = [c for c in masters if not self._opp_void(c.suit)]
            if safe:
                return self._top_from_shortest(safe)
            return self._top_from_shortest(masters)

        for rank in ("A", "K"):
            honors = [c for c in off_suit if c.rank == rank]
            if honors:
                return self._top_from_shortest(honors)

        groups = group_by_suit(off_suit)
        shortest = self._shortest_suit(groups)
        if shortest is not None:
            return groups[shortest][0]
        return pick_highest(off_suit)

    def _lead_to_bust_nil(self, valid: list[Card]) -> Card:
        """Lead middling cards the nil bidder may be forced to win."""
        off_suit = _off_suit(valid)
        if not off_suit:
            return pick_lowest(valid)

        mid = [c for c in off_suit if BUST_LEAD_MIN <= c.rank_value <= JACK]
        if mid:
            return pick_random(mid, self.rng)
        low_mid = [c for c in off_suit if BUST_FALLBACK_MIN <= c.rank_value <= BUST_FALLBACK_MAX]
        if low_mid:
            return pick_random(low_mid, self.rng)
        return pick_lowest(off_suit)

    def _lead_when_needing_tricks(self, valid: list[Card]) -> Card:  # noqa: C901, PLR0911, PLR0912
        ctx = self.ctx
        off_suit = _off_suit(valid)
        spades = _spades(valid)

        # Opponents are setting us: cash winners before they get trumped
        if ctx.urgent_bid or ctx.compensate_for_partner:
            masters = [c for c in off_suit if self._master(c)]
            if masters:
                safe = [c for c in masters if not self._opp_void(c.suit)]
                return self._top_from_shortest(safe or masters)
            high_spades = [c for c in spades if c.rank_value >= QUEEN]
            if high_spades:
                return pick_highest(high_spades)

        masters = [c for c in off_suit if self._master(c)]
        if masters:
            safe = [c for c in masters if not self._opp_void(c.suit)]
            return self._top_from_shortest(safe or masters)

        aces = [c for c in off_suit if c.rank == "A"]
        safe_aces = [c for c in aces if not self._opp_void(c.suit)]
        if safe_aces or aces:
            return self._top_from_shortest(safe_aces or aces)

        groups = group_by_suit(off_suit)
        for require_safe in (True, False):
            for suit, cards in groups.items():
                if require_safe and self._opp_void(suit):
                    continue
                if len(cards) >= GUARDED_KING_LENGTH and cards[0].rank == "K":
                    return cards[0]

        for suit, cards in groups.items():
            if len(cards) >= LONG_SUIT_LENGTH and cards[0].rank_value >= QUEEN and not self._opp_void(suit):
                return cards[0]

        if spades:
            master_spades = [c for c in spades if self._master(c)]
            if master_spades:
                return pick_highest(master_spades)
            high_spades = [c for c in spades if c.rank_value >= KING]
            if high_spades:
                return pick_highest(high_spades)

        if off_suit:
            # Short suits become voids for later ruffing
            safe_groups = {s: cards for s, cards in groups.items() if not self._opp_void(s)}
            shortest = self._shortest_suit(safe_groups, max_len=2) or self._shortest_suit(groups, max_len=2)
            if shortest is not None:
                return pick_lowest(groups[shortest])
            return pick_highest(off_suit)

        return pick_highest(valid)

    def _lead_guaranteed_then_duck(self, valid: list[Card]) -> Card:
        """Cash exactly the winners the bid needs, then duck."""
        if self.ctx.tricks_needed > 0:
            off_masters = [c for c in _off_suit(valid) if self._master(c)]
            if off_masters:
                return self._top_from_shortest(off_masters)
            master_spades = [c for c in _spades(valid) if self._master(c)]
            if master_spades:
                return pick_highest(master_spades)
        return self._lead_in_duck_mode(valid)

    def _lead_in_set_mode(self, valid: list[Card]) -> Card:
        off_suit = _off_suit(valid)
        spades = _spades(valid)

        # Pull the opponents' trump
        if spades:
            master_spades = [c for c in spades if self._master(c)]
            if master_spades:
                return pick_highest(master_spades)
            high_spades = [c for c in spades if c.rank_value >= QUEEN]
            if high_spades:
                return pick_highest(high_spades)

        masters = [c for c in off_suit if self._master(c)]
        if masters:
            safe = [c for c in masters if not self._opp_void(c.suit)]
            return self._top_from_shortest(safe or masters)

        if not off_suit:
            return pick_highest(valid)

        groups = group_by_suit(off_suit)
        # Make void opponents waste a trump on a worthless card
        for suit, cards in groups.items():
            if self._opp_void(suit):
                return pick_lowest(cards)

        shortest = self._shortest_suit(groups, max_len=2)
        if shortest is not None:
            return pick_lowest(groups[shortest])
        return pick_highest(off_suit)

    def _lead_in_duck_mode(self, valid: list[Card]) -> Card:
        off_suit = _off_suit(valid)
        if not off_suit:
            return pick_lowest(valid)

        non_masters = [c for c in off_suit if not self._master(c)]
        candidates = non_masters or off_suit
        safe = [c for c in candidates if not self._opp_void(c.suit)]
        pool = safe or candidates

        # Long suits are the hardest for opponents to cut
        groups = group_by_suit(pool)
        longest = max(groups, key=lambda suit: _suit_length(self.hand, suit))
        return pick_lowest(groups[longest])

    # ------------------------------------------------------------------
    # Following
    # ------------------------------------------------------------------

    def follow(self, trick: Sequence[Play]) -> Card:
        ctx = self.ctx
        led_suit = trick[0].card.suit
        cards_of_suit = [c for c in self.hand if c.suit == led_suit]
        off_cards = [c for c in self.hand if c.suit != led_suit]
        winner = get_current_winner(trick)
        winning_value = effective_trick_value(winner.card, led_suit)

        if ctx.bot_is_nil:
            card = self._follow_as_nil(cards_of_suit, off_cards, led_suit, winning_value)
        else:
            card = None
            if ctx.partner_is_nil:
                card = self._follow_to_protect_nil(trick, cards_of_suit, led_suit, winning_value)
            if card is None and ctx.nil_opponent_ids:
                card = self._follow_to_bust_nil(trick, cards_of_suit, off_cards, led_suit)
            if card is None:
                winner_is_partner = winner.player_id in ctx.partner_ids
                if cards_of_suit:
                    card = self._follow_suit(trick, cards_of_suit, led_suit, winning_value, winner_is_partner)
                else:
                    card = self._discard(trick, off_cards, led_suit, winner, winner_is_partner)

        legal = get_valid_follows(self.hand, trick)
        return card if card in legal else pick_lowest(legal)

    def _follow_as_nil(
        self,
        cards_of_suit: list[Card],
        off_cards: list[Card],
        led_suit: Suit,
        winning_value: float,
    ) -> Card:
        """Play the highest card that still loses."""
        if cards_of_suit:
            under = [c for c in cards_of_suit if effective_trick_value(c, led_suit) < winning_value]
            return pick_highest(under) if under else pick_lowest(cards_of_suit)

        non_spades = _off_suit(off_cards)
        if non_spades:
            return pick_highest(non_spades)
        return pick_lowest(self.hand)

    def _follow_to_protect_nil(
        self,
        trick: Sequence[Play],
        cards_of_suit: list[Card],
        led_suit: Suit,
        winning_value: float,
    ) -> Card | None:
        partner_ids = set(self.ctx.partner_ids)
        partner_play = next((p for p in trick if p.player_id in partner_ids), None)
        if not cards_of_suit:
            # Trumping is handled by the discard rules
            return None

        if partner_play is None:
            # Win before the nil partner has to play
            beaters = [c for c in cards_of_suit if effective_trick_value(c, led_suit) > winning_value]
            return pick_highest(beaters) if beaters else pick_highest(cards_of_suit)

        if get_current_winner(trick).player_id == partner_play.player_id:
            # The nil partner is winning, overtake them
            partner_value = effective_trick_value(partner_play.card, led_suit)
            beaters = [c for c in cards_of_suit if effective_trick_value(c, led_suit) > partner_value]
            return pick_lowest(beaters) if beaters else None

        beaters = [c for c in cards_of_suit if effective_trick_value(c, led_suit) > winning_value]
        return pick_lowest(beaters) if beaters else pick_lowest(cards_of_suit)

    def _follow_to_bust_nil(
        self,
        trick: Sequence[Play],
        cards_of_suit: list[Card],
        off_cards: list[Card],
        led_suit: Suit,
    ) -> Card | None:
        nil_ids = set(self.ctx.nil_opponent_ids)
        nil_plays = [p for p in trick if p.player_id in nil_ids]

        if nil_plays:
            winner = get_current_winner(trick)
            nil_play = next((p for p in nil_plays if p.player_id == winner.player_id), None)
            if nil_play is None:
                return None
            # Let the nil bidder keep the trick
            if cards_of_suit:
                nil_value = effective_trick_value(nil_play.card, led_suit)
                under = [c for c in cards_of_suit if effective_trick_value(c, led_suit) < nil_value]
                return pick_lowest(under) if under else None
            non_spades = _off_suit(off_cards)
            return pick_lowest(non_spades) if non_spades else pick_lowest(self.hand)

        if cards_of_suit and self.ctx.seat_position <= 1:
            mid = [c for c in cards_of_suit if BUST_FOLLOW_MIN <= c.rank_value <= JACK]
            if mid:
                return pick_random(mid, self.rng)
        return None

    def _partner_card_is_strong(self, trick: Sequence[Play], winning_value: float, threshold: int) -> bool:
        partner_ids = set(self.ctx.partner_ids)
        partner_play = next((p for p in trick if p.player_id in partner_ids), None)
        partner_master = partner_play is not None and self._master(partner_play.card)
        return partner_master or winning_value >= threshold

    def _follow_suit(  # noqa: PLR0911
        self,
        trick: Sequence[Play],
        cards_of_suit: list[Card],
        led_suit: Suit,
        winning_value: float,
        winner_is_partner: bool,
    ) -> Card:
        ctx = self.ctx
        beaters = [c for c in cards_of_suit if effective_trick_value(c, led_suit) > winning_value]

        if ctx.need_more:
            if winner_is_partner:
                # Never overtake a partner's boss card
                if self._partner_card_is_strong(trick, winning_value, KING):
                    if ctx.duck_mode and ctx.can_guarantee_bid:
                        masters = [c for c in cards_of_suit if self._master(c)]
                        if masters and len(cards_of_suit) > len(masters):
                            return pick_highest(masters)
                    return signal_with_follow(cards_of_suit, winning_value, ctx)
                if not ctx.compensate_for_partner or ctx.seat_position == ctx.last_seat:
                    return signal_with_follow(cards_of_suit, winning_value, ctx)

            if ctx.can_guarantee_bid and ctx.set_mode:
                return pick_lowest(beaters) if beaters else signal_with_follow(cards_of_suit, winning_value, ctx)

            if beaters:
                if ctx.urgent_bid and ctx.seat_position <= 1 and len(beaters) > 1:
                    safe = [c for c in beaters if effective_trick_value(c, led_suit) >= QUEEN]
                    if safe:
                        return pick_lowest(safe)
                return pick_lowest(beaters)
            return signal_with_follow(cards_of_suit, winning_value, ctx)

        if ctx.set_mode:
            if winner_is_partner and self._partner_card_is_strong(trick, winning_value, JACK):
                return signal_with_follow(cards_of_suit, winning_value, ctx)
            return pick_lowest(beaters) if beaters else signal_with_follow(cards_of_suit, winning_value, ctx)

        # Duck: avoid books
        if winner_is_partner:
            # Consolidate winners onto the partner's trick
            masters = [c for c in cards_of_suit if self._master(c)]
            if masters and len(cards_of_suit) > len(masters):
                return pick_highest(masters)
            return pick_highest(cards_of_suit)

        under = [c for c in cards_of_suit if effective_trick_value(c, led_suit) < winning_value]
        if under:
            return signal_duck(under, ctx) if ctx.disposition > 0 else pick_lowest(under)
        return pick_lowest(cards_of_suit)

    def _trump_beater(self, spades: list[Card], trick: Sequence[Play], *, high: bool = False) -> Card | None:
        """Pick a spade that beats every trump in the trick."""
        top = _highest_trump(trick)
        beating = [c for c in spades if c.value > top]
        if not beating:
            return None
        return pick_highest(beating) if high else pick_lowest(beating)

    def _discard(  # noqa: C901, PLR0911, PLR0912
        self,
        trick: Sequence[Play],
        off_cards: list[Card],
        led_suit: Suit,
        winner: Play,
        winner_is_partner: bool,
    ) -> Card:
        ctx = self.ctx
        spades = _spades(self.hand)
        non_spades = _off_suit(off_cards)
        can_trump = bool(spades) and led_suit != Suit.SPADES
        winner_is_master = self._master(winner.card)

        if ctx.partner_is_nil:
            return self._discard_for_nil_partner(trick, spades, non_spades, winner, can_trump)

        if winner_is_partner:
            if ctx.urgent_bid and ctx.seat_position == ctx.last_seat - 1 and not winner_is_master and can_trump:
                beater = self._trump_beater(spades, trick)
                if beater:
                    return beater

            if ctx.duck_mode or (ctx.can_guarantee_bid and ctx.disposition < 0):
                # Dump future winners on the partner's trick
                master_spades = [c for c in spades if self._master(c)]
                if master_spades:
                    return pick_highest(master_spades)
                if len(spades) > 1:
                    high_spades = [c for c in spades if c.rank_value >= TEN]
                    if high_spades:
                        return pick_highest(high_spades)
                master_off = [c for c in non_spades if self._master(c)]
                if master_off:
                    return pick_highest(master_off)
                if non_spades:
                    return pick_highest(non_spades)

            return self._dump(non_spades) if non_spades else pick_lowest(self.hand)

        if ctx.need_more:
            if ctx.can_guarantee_bid and ctx.duck_mode:
                # Save high spades for guaranteed tricks later
                return pick_highest(non_spades) if non_spades else pick_lowest(self.hand)

            if can_trump:
                if not (ctx.can_guarantee_bid and ctx.set_mode):
                    partner_id = ctx.partner_id
                    partner_void = partner_id is not None and is_known_void(partner_id, led_suit, self.memory)
                    partner_to_play = partner_id is not None and all(p.player_id != partner_id for p in trick)
                    if partner_void and partner_to_play and len(spades) > 1:
                        # Trump high so the partner can shed a low spade under it
                        beater = self._trump_beater(spades, trick, high=True)
                        if beater:
                            return beater
                beater = self._trump_beater(spades, trick)
                if beater:
                    return beater

            return self._dump(non_spades) if non_spades else pick_lowest(self.hand)

        if ctx.set_mode:
            if not winner_is_master and can_trump:
                beater = self._trump_beater(spades, trick)
                if beater:
                    return beater
            return self._dump(non_spades) if non_spades else pick_lowest(self.hand)

        # Duck: never trump, shed dangerous cards
        master_off = [c for c in non_spades if self._master(c)]
        if master_off:
            return pick_highest(master_off)
        if non_spades:
            return pick_highest(non_spades)
        return pick_lowest(self.hand)

    def _discard_for_nil_partner(
        self,
        trick: Sequence[Play],
        spades: list[Card],
        non_spades: list[Card],
        winner: Play,
        can_trump: bool,
    ) -> Card:
        partner_ids = set(self.ctx.partner_ids)
        partner_played = any(p.player_id in partner_ids for p in trick)

        if partner_played and winner.player_id in partner_ids:
            # The nil partner is winning, trump to rescue them
            if can_trump:
                beater = self._trump_beater(spades, trick)
                if beater:
                    return beater
            return pick_highest(non_spades) if non_spades else pick_lowest(self.hand)

        if not partner_played and can_trump:
            # Take the trick before the partner has to play
            beater = self._trump_beater(spades, trick)
            if beater:
                return beater

        return self._dump(non_spades) if non_spades else pick_lowest(self.hand)

    def _dump(self, candidates: list[Card]) -> Card:
        """Discard while keeping range.

        With the bid made, the disposition picks which non-master to give
        away: a SET lean keeps its high cards, a DUCK lean sheds them.
        """
        ctx = self.ctx
        if not ctx.need_more and not ctx.set_mode:
            non_masters = [c for c in candidates if not self._master(c)]
            if not non_masters:
                return pick_highest(candidates)
            return pick_by_disposition(non_masters, round(ctx.disposition))

        # Shed from the shortest suit to create a void
        groups = group_by_suit(candidates)
        shortest = self._shortest_suit(groups)
        if shortest is None:
            return pick_lowest(candidates)
        cards = groups[shortest]
        if len(cards) == 1:
            return cards[0]
        return pick_middle_card(cards) or pick_lowest(cards)
