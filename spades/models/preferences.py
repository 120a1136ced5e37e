"""Player display preferences.

Only the card-sort preference reaches the game engine, where it orders
each dealt hand. Sorting never affects play.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from spades.models.card import Card
from spades.models.enums import RankDirection, Suit

DEFAULTS: dict[str, str] = {
    "cardSort": "C,D,S,H:asc",
    "tableColor": "#0f1923",
}

PRESETS: dict[str, dict[str, str]] = {
    "hearts": {"label": "Hearts", "value": "C,D,S,H:asc"},
    "spadesFirst": {"label": "Spades First", "value": "S,H,D,C:desc"},
    "bridge": {"label": "Bridge", "value": "S,H,D,C:asc"},
    "highFirst": {"label": "High Cards First", "value": "C,D,S,H:desc"},
}

TABLE_COLORS: list[dict[str, str]] = [
    {"label": "Dark Blue", "value": "#0f1923"},
    {"label": "Green Felt", "value": "#1a472a"},
    {"label": "Dark Grey", "value": "#2a2a2a"},
    {"label": "Midnight Purple", "value": "#1a1028"},
    {"label": "Deep Red Felt", "value": "#3a1a1a"},
]

VALID_COLORS = frozenset(color["value"] for color in TABLE_COLORS)


@dataclass(frozen=True)
class CardSort:
    """Parsed card-sort preference.

    Attributes:
        suit_order: Suit -> position (0 first)
        rank_direction: Rank ordering within a suit

    """

    suit_order: dict[Suit, int]
    rank_direction: RankDirection

    def canonical(self) -> str:
        """Format back to the "C,D,S,H:asc" string form."""
        suits = sorted(self.suit_order, key=self.suit_order.__getitem__)
        return f"{','.join(s.value for s in suits)}:{self.rank_direction.value}"


def parse_card_sort(text: str | None) -> CardSort:
    """Parse a card-sort string such as "C,D,S,H:asc".

    The suit part must name all four suits exactly once (case-insensitive),
    otherwise the default sort is returned. Any direction other than
    "desc" means ascending. A preset key such as "bridge" stands for its
    value.
    """
    if not text or not isinstance(text, str):
        return parse_card_sort(DEFAULTS["cardSort"])

    if text in PRESETS:
        text = PRESETS[text]["value"]

    suit_part, _, direction = text.partition(":")
    letters = [s.strip().upper() for s in suit_part.split(",")]
    valid = {suit.value for suit in Suit}
    if len(letters) != len(valid) or set(letters) != valid:
        return parse_card_sort(DEFAULTS["cardSort"])

    rank_direction = RankDirection.DESC if direction.strip() == RankDirection.DESC.value else RankDirection.ASC
    return CardSort(
        suit_order={Suit(letter): index for index, letter in enumerate(letters)},
        rank_direction=rank_direction,
    )


def validate_preferences(prefs: Mapping[str, object]) -> dict[str, str]:
    """Sanitize a preferences payload from a client.

    Card-sort strings are canonicalized (invalid ones become the default)
    and unknown table colors are replaced with the default color. Fields
    that are missing or not strings are left out.
    """
    result: dict[str, str] = {}

    card_sort = prefs.get("cardSort")
    if card_sort and isinstance(card_sort, str):
        result["cardSort"] = parse_card_sort(card_sort).canonical()

    color = prefs.get("tableColor")
    if color and isinstance(color, str):
        result["tableColor"] = color if color in VALID_COLORS else DEFAULTS["tableColor"]

    return result


def merge_with_defaults(prefs: Mapping[str, str] | None) -> dict[str, str]:
    """Fill in any missing preference fields with defaults."""
    return {**DEFAULTS, **(prefs or {})}


def sort_hand(hand: Iterable[Card], card_sort: str | CardSort | None = None) -> list[Card]:
    """Sort a hand by suit position, then by effective value.

    Args:
        hand: Cards to sort
        card_sort: Card-sort string or parsed preference (default if None)

    Returns:
        New sorted list

    """
    parsed = card_sort if isinstance(card_sort, CardSort) else parse_card_sort(card_sort)
    sign = -1 if parsed.rank_direction == RankDirection.DESC else 1
    return sorted(hand, key=lambda card: (parsed.suit_order[card.suit], sign * card.value))
