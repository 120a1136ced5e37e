"""Card-selection helpers shared by the bidding and play heuristics."""

import math
import random
from collections.abc import Sequence

from spades.models.card import Card
from spades.models.enums import Suit
from spades.models.trick import Play, get_current_winner

# Value added to a spade played off a non-spade lead, so trump always ranks first
TRUMP_BONUS = 100

# Fewest cards that have a middle card
MIDDLE_MIN_CARDS = 3

# Disposition at which picks go to the extremes
HARD_DISPOSITION = 2

__all__ = [
    "effective_trick_value",
    "get_current_winner",
    "get_valid_follows",
    "get_valid_leads",
    "group_by_suit",
    "pick_by_disposition",
    "pick_highest",
    "pick_lowest",
    "pick_middle_card",
    "pick_random",
    "pick_top_from_shortest_suit",
]


def group_by_suit(cards: Sequence[Card]) -> dict[Suit, list[Card]]:
    """Group cards by suit, each group sorted high to low."""
    groups: dict[Suit, list[Card]] = {}
    for card in cards:
        groups.setdefault(card.suit, []).append(card)
    for group in groups.values():
        group.sort(key=lambda c: c.value, reverse=True)
    return groups


def pick_highest(cards: Sequence[Card]) -> Card:
    """Pick the card with the highest effective value."""
    return max(cards, key=lambda c: c.value)


def pick_lowest(cards: Sequence[Card]) -> Card:
    """Pick the card with the lowest effective value."""
    return min(cards, key=lambda c: c.value)


def pick_random(cards: Sequence[Card], rng: random.Random | None = None) -> Card:
    """Pick a random card."""
    return (rng or random).choice(list(cards))  # noqa: S311


def pick_middle_card(cards: Sequence[Card]) -> Card | None:
    """Pick the card closest to the median value.

    Middle cards can neither reliably win nor reliably duck, so they are
    the cheapest to give away. Returns None for two cards or fewer.
    """
    if len(cards) < MIDDLE_MIN_CARDS:
        return None
    ordered = sorted(cards, key=lambda c: c.value)
    return ordered[len(ordered) // 2]


def pick_by_disposition(cards: Sequence[Card], disposition: int) -> Card:
    """Pick a card to give away according to disposition.

    A hard set lean (>= 2) keeps its high cards and gives the lowest, a
    hard duck (<= -2) sheds the highest. Soft leans give the second-lowest
    or second-highest, and neutral gives one from the upper middle.
    """
    ordered = sorted(cards, key=lambda c: c.value)
    if len(ordered) == 1:
        return ordered[0]
    if disposition >= HARD_DISPOSITION:
        return ordered[0]
    if disposition <= -HARD_DISPOSITION:
        return ordered[-1]
    if disposition == 1:
        return ordered[1]
    if disposition == -1:
        return ordered[-2]
    return ordered[math.floor(len(ordered) * 0.65)]


def pick_top_from_shortest_suit(candidates: Sequence[Card], hand: Sequence[Card]) -> Card:
    """Pick the highest candidate from the suit the hand is shortest in.

    Leading top-down from a short suit cashes winners before they can be
    trumped and signals strength to a partner.
    """
    if len(candidates) == 1:
        return candidates[0]

    lengths: dict[Suit, int] = {}
    for card in candidates:
        if card.suit not in lengths:
            lengths[card.suit] = sum(1 for c in hand if c.suit == card.suit)

    shortest = min(lengths, key=lengths.__getitem__)
    return pick_highest([c for c in candidates if c.suit == shortest])


def get_valid_leads(hand: Sequence[Card], spades_broken: bool) -> list[Card]:
    """Get the cards that may legally be led."""
    if spades_broken:
        return list(hand)
    non_spades = [c for c in hand if not c.is_spade()]
    return non_spades or list(hand)


def get_valid_follows(hand: Sequence[Card], trick: Sequence[Play]) -> list[Card]:
    """Get the cards that may legally be played into a started trick."""
    led = trick[0].card.suit
    following = [c for c in hand if c.suit == led]
    return following or list(hand)


def effective_trick_value(card: Card, led_suit: Suit | None) -> float:
    """Value of a card within a trick: trump first, then the led suit."""
    if card.is_spade() and led_suit != Suit.SPADES:
        return TRUMP_BONUS + card.value
    if card.suit == led_suit:
        return card.value
    return 0
