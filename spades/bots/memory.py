"""Card memory: what a bot can deduce from the cards it has seen."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from spades.models.card import Card
from spades.models.deck import create_deck
from spades.models.enums import OFF_SUITS, SUIT_ORDER, Suit
from spades.models.modes import ModeConfig
from spades.models.trick import Play

# Off-suit masters can still be trumped
OFF_SUIT_MASTER_WEIGHT = 0.7


@dataclass
class CardMemory:
    """Outstanding cards and known voids from one bot's point of view.

    Attributes:
        outstanding: Suit -> unseen cards, highest first
        highest_outstanding: Suit -> top unseen effective value (0 if none)
        known_voids: Player ID -> suits the player has failed to follow
        cards_played_count: Cards played this round, current trick included

    """

    outstanding: dict[Suit, list[Card]]
    highest_outstanding: dict[Suit, float]
    known_voids: dict[str, set[Suit]] = field(default_factory=dict)
    cards_played_count: int = 0


def split_tricks(plays: Sequence[Play], player_count: int) -> list[Sequence[Play]]:
    """Split a chronological log into complete tricks."""
    complete = len(plays) - len(plays) % player_count
    return [plays[i : i + player_count] for i in range(0, complete, player_count)]


def _mark_voids(trick: Sequence[Play], voids: dict[str, set[Suit]]) -> None:
    if not trick:
        return
    led = trick[0].card.suit
    for play in trick[1:]:
        if play.card.suit != led:
            voids.setdefault(play.player_id, set()).add(led)


def build_card_memory(
    hand: Sequence[Card],
    cards_played: Sequence[Play],
    current_trick: Sequence[Play],
    mode: ModeConfig,
) -> CardMemory:
    """Rebuild a bot's card memory from what it can see.

    Args:
        hand: The bot's own hand
        cards_played: Plays from completed tricks this round
        current_trick: Plays in the trick being played
        mode: Mode whose deck defines which cards exist

    Returns:
        Fresh card memory

    """
    seen = set(hand)
    seen.update(play.card for play in cards_played)
    seen.update(play.card for play in current_trick)

    outstanding: dict[Suit, list[Card]] = {suit: [] for suit in SUIT_ORDER}
    for card in create_deck(mode):
        if card not in seen:
            outstanding[card.suit].append(card)
    for cards in outstanding.values():
        cards.sort(key=lambda c: c.value, reverse=True)

    highest = {suit: (cards[0].value if cards else 0) for suit, cards in outstanding.items()}

    voids: dict[str, set[Suit]] = {}
    for trick in split_tricks(cards_played, mode.player_count):
        _mark_voids(trick, voids)
    _mark_voids(current_trick, voids)

    return CardMemory(
        outstanding=outstanding,
        highest_outstanding=highest,
        known_voids=voids,
        cards_played_count=len(cards_played) + len(current_trick),
    )


def is_master_card(card: Card, memory: CardMemory | None) -> bool:
    """Check if a card beats every unseen card of its suit."""
    if memory is None:
        return False
    return card.value > memory.highest_outstanding.get(card.suit, 0)


def is_known_void(player_id: str | None, suit: Suit, memory: CardMemory | None) -> bool:
    """Check if a player has shown they hold no cards of a suit."""
    if memory is None or player_id is None:
        return False
    return suit in memory.known_voids.get(player_id, set())


def any_opponent_void(suit: Suit, opponent_ids: Iterable[str], memory: CardMemory | None) -> bool:
    """Check if any opponent is known to be void in a suit."""
    return any(is_known_void(pid, suit, memory) for pid in opponent_ids)


def count_guaranteed_winners(hand: Sequence[Card], memory: CardMemory | None) -> float:
    """Estimate how many future tricks the hand is sure to win.

    With memory, each master spade in an unbroken top run counts 1 and
    each off-suit master in an unbroken top run counts 0.7. Without
    memory, the Ace and King of spades and off-suit Aces are counted.
    """
    by_suit = {suit: sorted((c for c in hand if c.suit == suit), key=lambda c: c.value, reverse=True) for suit in SUIT_ORDER}
    count = 0.0

    if memory is not None:
        for card in by_suit[Suit.SPADES]:
            if not is_master_card(card, memory):
                break
            count += 1
        for suit in OFF_SUITS:
            for card in by_suit[suit]:
                if not is_master_card(card, memory):
                    break
                count += OFF_SUIT_MASTER_WEIGHT
        return count

    spades = by_suit[Suit.SPADES]
    if spades and spades[0].rank == "A":
        count += 1
        if len(spades) > 1 and spades[1].rank == "K":
            count += 1
    for suit in OFF_SUITS:
        if by_suit[suit] and by_suit[suit][0].rank == "A":
            count += OFF_SUIT_MASTER_WEIGHT
    return count
