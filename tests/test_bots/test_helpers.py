"""Tests for bot card-selection helpers and card memory."""

import random

import pytest

from spades.bots.helpers import (
    effective_trick_value,
    get_valid_follows,
    get_valid_leads,
    group_by_suit,
    pick_by_disposition,
    pick_highest,
    pick_lowest,
    pick_middle_card,
    pick_random,
    pick_top_from_shortest_suit,
)
from spades.bots.memory import (
    any_opponent_void,
    build_card_memory,
    count_guaranteed_winners,
    is_known_void,
    is_master_card,
    split_tricks,
)
from spades.models.card import Card, cards
from spades.models.enums import Suit
from spades.models.modes import get_mode
from spades.models.trick import Play


def plays(*pairs: str) -> list[Play]:
    """Build plays from "player:card" strings."""
    return [Play(pair.split(":")[0], Card.parse(pair.split(":")[1])) for pair in pairs]


class TestPickHelpers:
    """Test the basic pickers."""

    def test_group_by_suit_high_to_low(self):
        """Each suit group is sorted from high to low."""
        groups = group_by_suit(cards("3H AH 2S KH"))
        assert groups[Suit.HEARTS] == cards("AH KH 3H")
        assert groups[Suit.SPADES] == cards("2S")
        assert Suit.CLUBS not in groups

    def test_highest_and_lowest_use_mega_value(self):
        """A mega card outranks its regular twin."""
        hand = cards("7C 7C* 2C")
        assert pick_highest(hand) == Card.parse("7C*")
        assert pick_lowest(hand) == Card.parse("2C")

    def test_pick_random_uses_rng(self):
        """The same seed picks the same card."""
        hand = cards("2C 3C 4C 5C 6C")
        assert pick_random(hand, random.Random(9)) == pick_random(hand, random.Random(9))
        assert pick_random(hand, random.Random(9)) in hand

    def test_middle_card(self):
        """The median card, None for two cards or fewer."""
        assert pick_middle_card(cards("2C 9C 5C")) == Card.parse("5C")
        assert pick_middle_card(cards("2C 9C")) is None

    def test_pick_by_disposition(self):
        """Rule: Set keeps high cards, duck sheds them."""
        hand = cards("2C 5C 8C JC AC")
        assert pick_by_disposition(hand, 2) == Card.parse("2C")
        assert pick_by_disposition(hand, -3) == Card.parse("AC")
        assert pick_by_disposition(hand, 1) == Card.parse("5C")
        assert pick_by_disposition(hand, -1) == Card.parse("JC")
        assert pick_by_disposition(hand, 0) == Card.parse("JC")
        assert pick_by_disposition(cards("4D"), 2) == Card.parse("4D")

    def test_top_from_shortest_suit(self):
        """The highest candidate of the shortest suit in the hand."""
        hand = cards("AH 2H 3H KD QD")
        assert pick_top_from_shortest_suit(cards("AH KD QD"), hand) == Card.parse("KD")


class TestLegality:
    """Test legal-card helpers."""

    def test_valid_leads_before_spades_broken(self):
        """Spades are held back until broken."""
        assert get_valid_leads(cards("AS 2H"), spades_broken=False) == cards("2H")
        assert get_valid_leads(cards("AS 2S"), spades_broken=False) == cards("AS 2S")
        assert get_valid_leads(cards("AS 2H"), spades_broken=True) == cards("AS 2H")

    def test_valid_follows(self):
        """Follow the led suit when possible, anything otherwise."""
        trick = plays("p1:5H")
        assert get_valid_follows(cards("AS 2H 3H"), trick) == cards("2H 3H")
        assert get_valid_follows(cards("AS 2D"), trick) == cards("AS 2D")

    def test_effective_trick_value(self):
        """Trump ranks above the led suit, discards are worthless."""
        assert effective_trick_value(Card.parse("2S"), Suit.HEARTS) == 102
        assert effective_trick_value(Card.parse("KH"), Suit.HEARTS) == 13
        assert effective_trick_value(Card.parse("AD"), Suit.HEARTS) == 0
        assert effective_trick_value(Card.parse("2S"), Suit.SPADES) == 2


class TestCardMemory:
    """Test what bots deduce from played cards."""

    def test_split_tricks(self):
        """Only complete tricks are returned."""
        log = plays("a:2H", "b:3H", "c:4H", "d:5H", "a:6C")
        assert len(split_tricks(log, 4)) == 1

    def test_outstanding_excludes_seen_cards(self):
        """Own cards and played cards are no longer outstanding."""
        hand = cards("AH 2C")
        played = plays("p1:KH", "p2:QH", "p3:3H", "p4:4H")
        memory = build_card_memory(hand, played, [], get_mode(4))

        assert Card.parse("AH") not in memory.outstanding[Suit.HEARTS]
        assert Card.parse("KH") not in memory.outstanding[Suit.HEARTS]
        assert memory.highest_outstanding[Suit.HEARTS] == 11
        assert memory.cards_played_count == 4

    def test_master_card(self):
        """A card above every unseen card of its suit is a master."""
        hand = cards("QH 2C")
        played = plays("p1:AH", "p2:KH", "p3:3H", "p4:4H")
        memory = build_card_memory(hand, played, [], get_mode(4))
        assert is_master_card(Card.parse("QH"), memory)
        assert not is_master_card(Card.parse("2C"), memory)
        assert not is_master_card(Card.parse("AS"), None)

    def test_voids_detected(self):
        """Failing to follow marks the player void in the led suit."""
        played = plays("p1:2H", "p2:3S", "p3:4H", "p4:5D")
        memory = build_card_memory(cards("AC"), played, plays("p1:6C", "p2:7D"), get_mode(4))
        assert is_known_void("p2", Suit.HEARTS, memory)
        assert is_known_void("p4", Suit.HEARTS, memory)
        assert is_known_void("p2", Suit.CLUBS, memory)
        assert not is_known_void("p3", Suit.HEARTS, memory)
        assert any_opponent_void(Suit.HEARTS, ["p2", "p4"], memory)
        assert not any_opponent_void(Suit.DIAMONDS, ["p2", "p4"], memory)

    def test_mega_deck_memory(self):
        """Mega twins are tracked as separate cards."""
        hand = cards("7C")
        memory = build_card_memory(hand, [], [], get_mode(6))
        assert Card.parse("7C*") in memory.outstanding[Suit.CLUBS]
        assert Card.parse("7C") not in memory.outstanding[Suit.CLUBS]

    def test_guaranteed_winners_with_memory(self):
        """Master spades count 1, off-suit masters 0.7, each run unbroken."""
        hand = cards("AS KS 2S AH KH 5D")
        memory = build_card_memory(hand, [], [], get_mode(4))
        assert count_guaranteed_winners(hand, memory) == pytest.approx(3.4)

    def test_guaranteed_winners_without_memory(self):
        """Without memory only the top spades and off-suit Aces count."""
        assert count_guaranteed_winners(cards("AS KS AH AD 2C"), None) == pytest.approx(3.4)
        assert count_guaranteed_winners(cards("KS QS"), None) == 0
