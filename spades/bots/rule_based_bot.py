"""Rule-based bot driven by the bidding and play heuristics."""

import logging

from spades.bots.base_bot import BaseBot, BidDecision
from spades.bots.bidding import bot_bid, evaluate_blind_nil
from spades.bots.play import bot_play_card
from spades.bots.view import BotView
from spades.models.card import Card

logger = logging.getLogger(__name__)


class RuleBasedBot(BaseBot):
    """Bot that bids and plays with the heuristic engine.

    Bidding Strategy:
    - Blind nil first, decided from the score alone
    - Otherwise estimate tricks from spades, off-suit honors and ruffs
    - Let desperation or a score deficit override the honest count

    Playing Strategy:
    - Nil situations first (own nil, partner's nil, opponent's nil)
    - Otherwise chase tricks while the bid is short
    - Then set or duck according to the current disposition
    """

    def make_bid(self, view: BotView, hand: list[Card]) -> BidDecision:
        """Make a bid, possibly blind nil."""
        if evaluate_blind_nil(view, self.player_id, self.rng):
            logger.debug("Bot %s bids blind nil", self.player_id)
            return BidDecision(bid=0, blind_nil=True)

        lookup = view.team_lookup
        opponent_bids = [view.bids[pid] for pid in lookup.get_opponent_ids(self.player_id) if pid in view.bids]
        bid = bot_bid(hand, self._partner_bid(view), opponent_bids, view, self.player_id, self.rng)
        return BidDecision(bid=bid)

    def pick_card(self, view: BotView, hand: list[Card]) -> Card:
        """Pick a card with the play heuristic."""
        return bot_play_card(hand, view, self.player_id, self.rng)
