"""Tests for cards, game modes and deck building."""

import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from spades.models.card import Card, cards
from spades.models.deck import Deck, create_deck, deal, shuffle
from spades.models.enums import SUIT_ORDER, SeatingPattern, Suit
from spades.models.modes import GAME_MODES, compute_mega_cards, compute_removed_cards, get_mode


class TestCard:
    """Test card values and parsing."""

    def test_rank_values(self):
        """Rule: 2 is lowest, Ace is 14."""
        assert Card(Suit.HEARTS, "2").rank_value == 2
        assert Card(Suit.HEARTS, "10").rank_value == 10
        assert Card(Suit.HEARTS, "A").rank_value == 14

    def test_mega_ranks_between_twin_and_next_rank(self):
        """Rule: A mega card beats its regular twin and loses to the next rank."""
        mega_seven = Card(Suit.CLUBS, "7", mega=True)
        assert mega_seven.value > Card(Suit.CLUBS, "7").value
        assert mega_seven.value < Card(Suit.CLUBS, "8").value

    def test_parse_and_format(self):
        """Short names round-trip, including the mega marker."""
        assert Card.parse("10h") == Card(Suit.HEARTS, "10")
        assert Card.parse("7C*") == Card(Suit.CLUBS, "7", mega=True)
        assert str(Card(Suit.SPADES, "Q")) == "QS"
        assert str(Card(Suit.CLUBS, "7", mega=True)) == "7C*"

    def test_parse_list(self):
        """Whitespace-separated names parse in order."""
        assert cards("AS 2H") == [Card(Suit.SPADES, "A"), Card(Suit.HEARTS, "2")]

    def test_invalid_rank_rejected(self):
        """Unknown ranks raise."""
        with pytest.raises(ValueError, match="Unknown rank"):
            Card(Suit.SPADES, "1")

    def test_suit_is_coerced(self):
        """A suit letter becomes the enum."""
        assert Card("S", "A").suit is Suit.SPADES

    def test_regular_and_mega_twins_differ(self):
        """Mega and regular copies are distinct cards."""
        assert Card(Suit.HEARTS, "5") != Card(Suit.HEARTS, "5", mega=True)


class TestModes:
    """Test the mode registry."""

    @pytest.mark.parametrize("player_count", range(3, 9))
    def test_deck_size_matches_players(self, player_count):
        """Rule: Every mode deals 13 cards to each player."""
        mode = get_mode(player_count)
        assert mode.cards_per_player == 13
        assert len(create_deck(mode)) == player_count * 13

    def test_unknown_count_falls_back_to_four(self):
        """Rule: Unknown player counts get the 4-player mode."""
        assert get_mode(12) is GAME_MODES[4]

    def test_three_player_mode(self):
        """Three solo teams, none of them spoilers, lowest cards removed."""
        mode = get_mode(3)
        assert mode.team_count == 3
        assert not mode.has_spoiler
        assert all(team.size == 1 for team in mode.teams)
        assert len(mode.removed_cards) == 13
        assert Card(Suit.SPADES, "5") in mode.removed_cards
        assert Card(Suit.HEARTS, "5") not in mode.removed_cards

    def test_four_player_mode_is_classic(self):
        """Two teams of two, standard deck."""
        mode = get_mode(4)
        assert mode.seating_pattern == SeatingPattern.CLASSIC
        assert mode.team_keys == ["team1", "team2"]
        assert create_deck(mode) == create_deck()

    def test_five_player_spoiler(self):
        """Teams of 2+2+1, the solo team is a spoiler, six layout seats."""
        mode = get_mode(5)
        assert [team.size for team in mode.teams] == [2, 2, 1]
        assert mode.get_team("team3").spoiler
        assert mode.layout_seats == 6
        assert mode.seating_pattern == SeatingPattern.POLYGON

    def test_seven_player_spoiler(self):
        """Teams of 2+2+2+1, team4 is the spoiler, eight layout seats."""
        mode = get_mode(7)
        assert [team.size for team in mode.teams] == [2, 2, 2, 1]
        assert mode.get_team("team4").spoiler
        assert mode.layout_seats == 8

    @pytest.mark.parametrize("player_count", [5, 6, 7])
    def test_mega_cards_skip_aces(self, player_count):
        """Rule: Mega Aces only exist in 8-player mode."""
        assert all(card.rank != "A" for card in get_mode(player_count).mega_cards)

    def test_eight_player_doubles_deck(self):
        """Every card has a mega twin, Aces included."""
        mode = get_mode(8)
        assert len(mode.mega_cards) == 52
        assert Card(Suit.SPADES, "A", mega=True) in mode.mega_cards

    def test_fill_order(self):
        """Cards fill rank by rank in S, H, D, C order."""
        assert compute_removed_cards(5) == (
            Card(Suit.SPADES, "2"),
            Card(Suit.HEARTS, "2"),
            Card(Suit.DIAMONDS, "2"),
            Card(Suit.CLUBS, "2"),
            Card(Suit.SPADES, "3"),
        )
        assert compute_mega_cards(2) == (Card(Suit.SPADES, "2", mega=True), Card(Suit.HEARTS, "2", mega=True))
        assert compute_mega_cards(0) == ()


class TestDeck:
    """Test shuffling and dealing."""

    @given(seed=st.integers(0, 100000), player_count=st.integers(3, 8))
    @settings(max_examples=40, deadline=None)
    def test_deal_is_complete_and_disjoint(self, seed, player_count):
        """Every card of the mode is dealt exactly once."""
        mode = get_mode(player_count)
        hands = Deck(mode, random.Random(seed)).deal()

        assert len(hands) == player_count
        assert all(len(hand) == 13 for hand in hands)
        dealt = [card for hand in hands for card in hand]
        assert len(set(dealt)) == len(dealt)
        assert sorted(dealt, key=str) == sorted(create_deck(mode), key=str)

    def test_shuffle_is_deterministic_with_seed(self):
        """The same seed gives the same order."""
        deck = create_deck()
        assert shuffle(deck, random.Random(7)) == shuffle(deck, random.Random(7))

    def test_shuffle_does_not_mutate(self):
        """Shuffling returns a copy."""
        deck = create_deck()
        original = list(deck)
        shuffle(deck, random.Random(1))
        assert deck == original

    def test_deal_round_robin(self):
        """Cards go one per player in turn."""
        deck = create_deck()[:8]
        hands = deal(deck, 4, cards_per_player=2)
        assert hands[0] == [deck[0], deck[4]]

    def test_uneven_deal_raises(self):
        """A deck that does not divide evenly cannot be dealt."""
        with pytest.raises(ValueError, match="Cannot deal"):
            deal(create_deck()[:10], 4, cards_per_player=2)

    def test_short_deck_raises(self):
        """Rule: The deck must hold exactly 13 cards per player."""
        with pytest.raises(ValueError, match="Cannot deal 8 cards as 4 hands of 13"):
            deal(create_deck(get_mode(4))[:8], 4)

    def test_full_deck_deals_thirteen_each(self):
        """A full 4-player deck deals four hands of 13."""
        hands = deal(create_deck(get_mode(4)), 4)
        assert [len(hand) for hand in hands] == [13, 13, 13, 13]

    @pytest.mark.parametrize("player_count", [3, 5, 8])
    def test_mode_deck_one_card_short_raises(self, player_count):
        """A mode deck missing a card cannot be dealt."""
        mode = get_mode(player_count)
        with pytest.raises(ValueError):
            deal(create_deck(mode)[1:], player_count)

    def test_standard_deck_has_all_suits(self):
        """52 unique cards, 13 per suit."""
        deck = create_deck()
        assert len(set(deck)) == 52
        for suit in SUIT_ORDER:
            assert sum(1 for c in deck if c.suit == suit) == 13
