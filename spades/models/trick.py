"""Trick engine: play validation and winner resolution."""

from collections.abc import Sequence
from dataclasses import dataclass

from spades.models.card import Card
from spades.models.enums import Suit
from spades.models.errors import ErrorCode


@dataclass(frozen=True)
class Play:
    """A card played by a player in a trick."""

    player_id: str
    card: Card


@dataclass(frozen=True)
class PlayValidation:
    """Result of checking a play against the trick rules."""

    valid: bool
    reason: str | None = None
    code: ErrorCode | None = None


VALID_PLAY = PlayValidation(valid=True)


def led_suit(trick: Sequence[Play]) -> Suit | None:
    """Get the suit led in a trick, None if nothing has been played."""
    return trick[0].card.suit if trick else None


def validate_play(
    card: Card,
    hand: Sequence[Card],
    current_trick: Sequence[Play],
    spades_broken: bool,
) -> PlayValidation:
    """Check whether a card may be played.

    Rules:
    - Leading: a spade may not be led until spades are broken, unless the
      hand holds nothing but spades.
    - Following: a player holding the led suit must follow it; otherwise
      any card is legal, including trump.

    Args:
        card: Card the player wants to play
        hand: Player's current hand (including ``card``)
        current_trick: Plays so far in this trick
        spades_broken: Whether a spade has been played this round

    Returns:
        Validation result with a reason when invalid

    """
    if not current_trick:
        if card.is_spade() and not spades_broken and not all(c.is_spade() for c in hand):
            return PlayValidation(False, "Spades have not been broken yet", ErrorCode.SPADES_NOT_BROKEN)
        return VALID_PLAY

    suit = current_trick[0].card.suit
    if card.suit != suit and any(c.suit == suit for c in hand):
        return PlayValidation(False, f"You must follow suit ({suit.value})", ErrorCode.MUST_FOLLOW_SUIT)
    return VALID_PLAY


def _beats(challenger: Card, winner: Card, suit: Suit) -> bool:
    if challenger.is_spade():
        return not winner.is_spade() or challenger.value > winner.value
    if challenger.suit == suit and winner.suit == suit:
        return challenger.value > winner.value
    return False


def get_current_winner(trick: Sequence[Play]) -> Play:
    """Get the play currently winning a (possibly incomplete) trick.

    Any spade beats every non-spade. Among spades, or among cards of the
    led suit, the highest effective value wins. A card of any other suit
    never wins.
    """
    if not trick:
        raise ValueError("Cannot resolve an empty trick")

    suit = trick[0].card.suit
    winner = trick[0]
    for play in trick[1:]:
        if _beats(play.card, winner.card, suit):
            winner = play
    return winner


def determine_trick_winner(trick: Sequence[Play]) -> str:
    """Determine which player won a completed trick."""
    return get_current_winner(trick).player_id
