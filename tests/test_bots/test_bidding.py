"""Tests for the bidding heuristic."""

import random

import pytest
from conftest import four_players, seated_players

from spades.bots.bidding import (
    bot_bid,
    estimate_tricks,
    evaluate_blind_nil,
    evaluate_nil,
    get_desperation_context,
)
from spades.bots.view import BotView
from spades.models.card import cards
from spades.models.game_settings import GameSettings
from spades.models.modes import get_mode

STRONG = cards("AS KS QS AH KH AD KD AC 3C 4C 2H 2D 3D")
MEDIUM = cards("AS KS AH KH AD 7D 3D 8C 4C 3C 2C 2H 3H")
SHORT = cards("AS KH 5S 2H 3H 4D 5D 6D 7C 8C 9C 10C 6H")
WEAK = cards("2S 3S 2H 3H 4H 5H 2D 3D 4D 5D 2C 3C 4C")


class FixedRandom(random.Random):
    """Random source whose draws always return the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def view(scores=None, books=None, bids=None, players=None, **settings_kwargs):
    """Snapshot of a 4-player table (p1/p3 vs p2/p4) during bidding."""
    return BotView.build(
        players or four_players(),
        bids=bids,
        scores=scores,
        books=books,
        settings=GameSettings(**settings_kwargs),
    )


class TestTrickEstimate:
    """Test hand-strength counting."""

    def test_strong_hand(self):
        """Spade honors plus off-suit A-K runs."""
        assert estimate_tricks(STRONG) == pytest.approx(7.2)

    def test_ruffing_credit(self):
        """A void with spades to spare is worth a trick."""
        hand = cards("2S 3S 4S 2H 3H 4H 5H 6H 2D 3D 4D 5D 6D")
        assert estimate_tricks(hand) == pytest.approx(1.0)

    def test_long_spades(self):
        """Spades beyond four add length credit, short side suits ruff."""
        hand = cards("AS 10S 9S 8S 7S 6S 2H 3H 4H 2D 3D 2C 3C")
        assert estimate_tricks(hand) == pytest.approx(1 + 0.3 + 0.8 + 0.2 * 2)

    def test_mega_deck_devalues_honors(self):
        """With mega Aces in play a regular Ace counts like a King."""
        assert estimate_tricks(MEDIUM, get_mode(8)) < estimate_tricks(MEDIUM, get_mode(4))


class TestBotBid:
    """Test the final bid."""

    def test_strong_hand_bids_high(self):
        """A hand full of honors bids at least 5."""
        assert bot_bid(STRONG, 3, [3, 3], view(), "p1") >= 5

    def test_weak_hand_bids_low(self):
        """An all-low hand bids 2 or less, nil included."""
        assert bot_bid(WEAK, None, [], view(), "p1") <= 2

    def test_weak_hand_goes_nil(self):
        """A hand of low cards bids nil."""
        assert bot_bid(WEAK, None, [], view(), "p1") == 0

    def test_more_players_bid_lower(self):
        """The same hand bids no more at an 8-player table."""
        players = seated_players(8)
        four = bot_bid(MEDIUM, None, [], view(), "p1")
        eight = bot_bid(MEDIUM, None, [], view(players=players, game_mode=8), players[0].id)
        assert eight <= four
        assert four == 5

    def test_covers_partner_nil(self):
        """Rule: With a nil partner the bid is at least 3, plus one."""
        assert bot_bid(WEAK, 0, [3], view(), "p3") == 4

    def test_no_double_nil_by_default(self):
        """A bot does not nil after its partner's nil."""
        assert bot_bid(WEAK, 0, [3], view(), "p3") != 0

    def test_double_nil_when_allowed(self):
        """With double nil on, the partner's nil does not block a nil."""
        assert bot_bid(WEAK, 0, [3], view(double_nil=True), "p3") == 0

    def test_trims_aggressive_team_bid(self):
        """Rule: A combined bid over 10 is trimmed by one."""
        assert bot_bid(STRONG, 5, [2], view(), "p3") == 6

    def test_nil_cover_builds_on_strength(self):
        """A strong hand still adds one for a nil partner."""
        hand = cards("AS KS QS JS 10S 9S 8S 7S 6S 5S 4S 3S 2S")
        assert bot_bid(hand, 0, [], view(), "p3") == 11


class TestDesperation:
    """Test the desperation context and overrides."""

    def test_not_desperate_when_far_from_target(self):
        """Opponents who cannot reach the target this round."""
        desp = get_desperation_context(view(scores={"team1": 100, "team2": 100}), "p1", 3, [3, 3])
        assert desp.desperate is False
        assert desp.our_score == 100
        assert desp.opp_score == 100

    def test_desperate_when_opponents_can_win(self):
        """Opponents at 450 bidding 10 project to 550."""
        desp = get_desperation_context(view(scores={"team1": 100, "team2": 450}), "p1", 3, [5, 5])
        assert desp.desperate is True
        assert desp.opp_can_win is True
        assert desp.opp_bid_total == 10

    def test_context_structure(self):
        """Every field is filled from the view."""
        desp = get_desperation_context(view(), "p1", None, [])
        assert desp.desperate is False
        assert desp.win_target == 500
        assert desp.book_threshold == 10
        assert desp.tricks_per_round == 13
        assert desp.has_partner is True
        assert desp.ten_bid_bonus is True

    def test_spoiler_context(self):
        """The spoiler has no partner and faces the leading team."""
        players = seated_players(5)
        snapshot = view(scores={"team1": 420, "team2": 300, "team3": 0}, players=players, game_mode=5)
        desp = get_desperation_context(snapshot, "p5", None, [4, 4])
        assert desp.has_partner is False
        assert desp.opp_score == 420
        assert desp.desperate is True

    def test_desperation_skips_trim(self):
        """Overbidding is intentional when the opponents can win."""
        desperate = view(scores={"team1": 0, "team2": 450})
        assert bot_bid(STRONG, 5, [5, 5], desperate, "p3") == 7

    def test_set_bid_with_partner_signal(self):
        """Bid to deny the opponents, plus one to signal a committed partner."""
        desperate = view(scores={"team1": 0, "team2": 450})
        assert bot_bid(SHORT, 2, [5, 4], desperate, "p3") == 4

    def test_feeds_books_near_penalty(self):
        """Underbid when the opponents are close to a book penalty."""
        scores = {"team1": 0, "team2": 450}
        near_penalty = view(scores=scores, books={"team1": 0, "team2": 8})
        assert bot_bid(SHORT, None, [6], near_penalty, "p1") == 1
        assert bot_bid(SHORT, None, [6], view(scores=scores), "p1") == 2

    def test_go_for_it_stretches_to_ten(self):
        """Well behind, a hand near the 10-trick bonus stretches for it."""
        behind = view(scores={"team1": 0, "team2": 300})
        assert bot_bid(MEDIUM, 4, [3], behind, "p3", FixedRandom(0.9)) == 6
        assert bot_bid(MEDIUM, 4, [3], view(), "p3", FixedRandom(0.9)) == 5


class TestNilEvaluation:
    """Test nil viability."""

    def test_spade_honor_blocks_nil(self):
        """Rule: The Q, K or A of spades rules out nil."""
        hand = cards("QS 2S 2H 3H 4H 5H 2D 3D 4D 5D 2C 3C 4C")
        assert not evaluate_nil(hand, None)

    def test_off_suit_ace_blocks_nil(self):
        """Rule: An off-suit Ace rules out nil."""
        hand = cards("2S 3S AH 3H 4H 5H 2D 3D 4D 5D 2C 3C 4C")
        assert not evaluate_nil(hand, 4)

    def test_short_king_blocks_nil(self):
        """Rule: A King with at most one guard rules out nil."""
        guarded = cards("2S 3S KH 3H 4H 5H 6H 3D 4D 5D 2C 3C 4C")
        bare = cards("2S 3S KH 2H 3D 4D 5D 6D 7D 3C 4C 5C 6C")
        assert evaluate_nil(guarded, 3)
        assert not evaluate_nil(bare, 3)

    def test_partner_strength_allows_nil(self):
        """A partner bidding 3+ covers a borderline hand."""
        hand = cards("9S 2S JH 10H 3H 4H 5H 2D 3D 9D 8C 3C 4C")
        assert not evaluate_nil(hand, None)
        assert evaluate_nil(hand, 3)

    def test_relaxed_thresholds(self):
        """Desperation accepts fewer low cards."""
        hand = cards("9S 2S 8H 9H 3H 4H 5H 2D 3D 9D 8C 3C 8D")
        assert not evaluate_nil(hand, None)
        assert evaluate_nil(hand, None, relaxed=True)


class TestBlindNil:
    """Test blind nil decisions."""

    def blind_view(self, scores, partner_bid=5, round_number=5, blind_nil=True):
        bids = {} if partner_bid is None else {"p3": partner_bid}
        return BotView.build(
            four_players(),
            bids=bids,
            scores=scores,
            settings=GameSettings(blind_nil=blind_nil),
            round_number=round_number,
        )

    def test_disabled(self):
        """Never when the setting is off."""
        snapshot = self.blind_view({"team1": 0, "team2": 400}, blind_nil=False)
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.0)) is False

    def test_never_in_round_one(self):
        """No score context in the first round."""
        snapshot = self.blind_view({"team1": 0, "team2": 400}, round_number=1)
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.0)) is False

    @pytest.mark.parametrize("partner_bid", [None, 0, 3])
    def test_partner_must_cover(self, partner_bid):
        """Only after a partner bid of 4 or more."""
        snapshot = self.blind_view({"team1": 0, "team2": 400}, partner_bid=partner_bid)
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.0)) is False

    def test_small_deficit(self):
        """Not worth it when close in score and far from the target."""
        snapshot = self.blind_view({"team1": 200, "team2": 250})
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.0)) is False

    def test_probability_table(self):
        """Far behind with the opponents near the target: 35%."""
        snapshot = self.blind_view({"team1": 0, "team2": 450})
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.34)) is True
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.36)) is False

    def test_strong_partner_raises_chance(self):
        """A partner bid of 6+ multiplies the chance by 1.3."""
        snapshot = self.blind_view({"team1": 0, "team2": 450}, partner_bid=6)
        assert evaluate_blind_nil(snapshot, "p1", FixedRandom(0.45)) is True

    def test_spoiler_never_blind_nils(self):
        """Solo players have no partner to cover them."""
        players = seated_players(5)
        snapshot = BotView.build(
            players,
            bids={"p1": 6},
            scores={"team1": 450, "team2": 0, "team3": 0},
            settings=GameSettings(blind_nil=True, game_mode=5),
            round_number=4,
        )
        assert evaluate_blind_nil(snapshot, "p5", FixedRandom(0.0)) is False
