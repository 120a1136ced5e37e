"""Card model and card value helpers."""

from dataclasses import dataclass

from spades.constants import MEGA_RANK_OFFSET, RANK_VALUE
from spades.models.enums import Suit

MEGA_MARKER = "*"

# Shortest card name: one rank character and a suit letter
MIN_NAME_LENGTH = 2


@dataclass(frozen=True)
class Card:
    """Represents a playing card.

    Mega cards are duplicates added to the deck for 5-8 players. A mega
    card ranks half a step above its regular twin, so a mega 7 beats a
    regular 7 and loses to a regular 8.

    Attributes:
        suit: Card suit
        rank: One of "2".."10", "J", "Q", "K", "A"
        mega: Whether this is a mega duplicate

    """

    suit: Suit
    rank: str
    mega: bool = False

    def __post_init__(self) -> None:
        """Validate rank and coerce the suit to the enum."""
        if self.rank not in RANK_VALUE:
            raise ValueError(f"Unknown rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def rank_value(self) -> int:
        """Numeric rank, 2 through 14 (Ace)."""
        return RANK_VALUE[self.rank]

    @property
    def value(self) -> float:
        """Effective comparison value (rank value, +0.5 for mega cards)."""
        return card_value(self)

    def is_spade(self) -> bool:
        """Check if card is a spade (trump)."""
        return self.suit == Suit.SPADES

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse a short card name such as "AS", "10H" or "7C*" (mega).

        Args:
            text: Rank followed by suit letter, optional trailing "*" for mega

        Returns:
            The parsed card

        """
        text = text.strip().upper()
        mega = text.endswith(MEGA_MARKER)
        if mega:
            text = text[: -len(MEGA_MARKER)]
        if len(text) < MIN_NAME_LENGTH:
            raise ValueError(f"Cannot parse card: {text!r}")
        return cls(suit=Suit(text[-1]), rank=text[:-1], mega=mega)

    def __str__(self) -> str:
        """Return short name, e.g. "QS" or "7C*"."""
        marker = MEGA_MARKER if self.mega else ""
        return f"{self.rank}{self.suit.value}{marker}"


def card_value(card: Card) -> float:
    """Get the effective numeric value of a card for comparison purposes."""
    return RANK_VALUE[card.rank] + (MEGA_RANK_OFFSET if card.mega else 0)


def cards(text: str) -> list[Card]:
    """Parse a whitespace-separated list of short card names."""
    return [Card.parse(token) for token in text.split()]


