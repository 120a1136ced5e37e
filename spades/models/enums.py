"""Enums for the game."""

from enum import Enum


class Suit(str, Enum):
    """Card suits. Spades are always trump."""

    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"


# Canonical suit order used for deck building and fill algorithms
SUIT_ORDER = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)
OFF_SUITS = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)


class Phase(str, Enum):
    """Game phases during the lifecycle."""

    BIDDING = "bidding"
    PLAYING = "playing"
    SCORING = "scoring"
    GAME_OVER = "gameOver"


class SeatingPattern(str, Enum):
    """Table layout families."""

    CLASSIC = "classic"
    POLYGON = "polygon"


class RankDirection(str, Enum):
    """Rank ordering inside a suit when sorting a hand."""

    ASC = "asc"
    DESC = "desc"
