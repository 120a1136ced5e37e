"""Random bot that makes random valid moves."""

from spades.bots.base_bot import BaseBot, BidDecision
from spades.bots.view import BotView
from spades.models.card import Card


class RandomBot(BaseBot):
    """Bot that makes completely random decisions.

    This serves as a baseline for evaluating other bot strategies
    and provides a simple opponent for testing.
    """

    def make_bid(self, view: BotView, _hand: list[Card]) -> BidDecision:
        """Make a random bid between 0 and the cards per player."""
        bid = self.rng.randint(0, view.mode.cards_per_player)
        if bid == 0 and not self._nil_allowed(view):
            bid = 1
        return BidDecision(bid=bid)

    def pick_card(self, view: BotView, hand: list[Card]) -> Card:
        """Pick a random legal card."""
        return self.rng.choice(self._get_valid_cards(view, hand))
