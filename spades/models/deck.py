"""Deck building, shuffling and dealing."""

import random

from spades.constants import CARDS_PER_PLAYER, RANKS
from spades.models.card import Card
from spades.models.enums import SUIT_ORDER
from spades.models.modes import ModeConfig


def create_deck(mode: ModeConfig | None = None) -> list[Card]:
    """Create a deck for a game mode.

    Starts with the standard 52 cards, removes ``mode.removed_cards``
    (3 players) and appends ``mode.mega_cards`` (5-8 players). Without a
    mode, the standard 52-card deck is returned.

    Args:
        mode: Game mode configuration

    Returns:
        Unshuffled list of cards

    """
    deck = [Card(suit, rank) for suit in SUIT_ORDER for rank in RANKS]
    if mode is None:
        return deck

    removed = set(mode.removed_cards)
    deck = [card for card in deck if card not in removed]
    deck.extend(mode.mega_cards)
    return deck


def shuffle(deck: list[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled copy of the deck."""
    shuffled = list(deck)
    (rng or random).shuffle(shuffled)
    return shuffled


def deal(deck: list[Card], player_count: int, cards_per_player: int = CARDS_PER_PLAYER) -> list[list[Card]]:
    """Deal cards round-robin into equal hands.

    Args:
        deck: Cards to deal, typically shuffled
        player_count: Number of hands
        cards_per_player: Hand size

    Returns:
        One hand per player

    Raises:
        ValueError: If the deck is not exactly ``player_count * cards_per_player`` cards

    """
    if player_count <= 0 or len(deck) != player_count * cards_per_player:
        raise ValueError(
            f"Cannot deal {len(deck)} cards as {player_count} hands of {cards_per_player}"
        )

    hands: list[list[Card]] = [[] for _ in range(player_count)]
    for index, card in enumerate(deck):
        hands[index % player_count].append(card)
    return hands


class Deck:
    """A mode-specific deck with its own random source."""

    def __init__(self, mode: ModeConfig, rng: random.Random | None = None) -> None:
        """Initialize an empty deck.

        Args:
            mode: Game mode the deck is built for
            rng: Random source for shuffling (module random if None)

        """
        self.mode = mode
        self.rng = rng
        self.cards: list[Card] = []

    def shuffle(self) -> None:
        """Fill the deck with every card of the mode and shuffle it."""
        self.cards = shuffle(create_deck(self.mode), self.rng)

    def deal(self) -> list[list[Card]]:
        """Shuffle and deal one hand per seat."""
        self.shuffle()
        return deal(self.cards, self.mode.player_count, self.mode.cards_per_player)
