"""Base class for all bot strategies."""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from spades.bots.helpers import get_valid_follows, get_valid_leads
from spades.bots.view import BotView
from spades.models.card import Card


@dataclass(frozen=True)
class BidDecision:
    """A bot's bid, with the blind-nil flag the game needs alongside it."""

    bid: int
    blind_nil: bool = False


class BaseBot(ABC):
    """Abstract base class for bot strategies.

    All bot implementations must inherit from this class and implement
    the make_bid() and pick_card() methods. Bots only read the snapshot
    they are given; the caller feeds their decisions back into the game.
    """

    def __init__(self, player_id: str, rng: random.Random | None = None) -> None:
        """Initialize the bot.

        Args:
            player_id: ID of the player this bot controls
            rng: Random source for tie-breaks and probabilistic choices

        """
        self.player_id = player_id
        self.rng = rng or random.Random()  # noqa: S311

    @abstractmethod
    def make_bid(self, view: BotView, hand: list[Card]) -> BidDecision:
        """Make a bid for the current round.

        Args:
            view: Read-only game snapshot
            hand: Bot's cards for this round

        Returns:
            Bid from 0 (nil) to the cards per player

        """

    @abstractmethod
    def pick_card(self, view: BotView, hand: list[Card]) -> Card:
        """Pick a card to play in the current trick.

        Args:
            view: Read-only game snapshot
            hand: Bot's remaining cards

        Returns:
            A legal card from ``hand``

        """

    def _get_valid_cards(self, view: BotView, hand: list[Card]) -> list[Card]:
        """Get the cards that may legally be played right now."""
        if view.current_trick:
            return get_valid_follows(hand, view.current_trick)
        return get_valid_leads(hand, view.spades_broken)

    def _partner_bid(self, view: BotView) -> int | None:
        partner_id = view.team_lookup.get_partner_id(self.player_id)
        return view.bids.get(partner_id) if partner_id else None

    def _nil_allowed(self, view: BotView) -> bool:
        """Bots never double nil unless the table allows it."""
        return self._partner_bid(view) != 0 or view.settings.double_nil

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__} ({self.player_id})"
