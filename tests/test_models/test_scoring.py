"""Tests for round scoring, moonshot and winner checks."""

from conftest import four_players, seated_players

from spades.models.modes import get_mode
from spades.models.scoring import check_moonshot, check_winner, score_round, score_team
from spades.models.teams import build_team_lookup


class TestScoreTeam:
    """Test scoring of one team."""

    def test_made_bid(self):
        """Rule: Making the bid scores 10 per trick bid."""
        assert score_team(["a", "b"], {"a": 3, "b": 2}, {"a": 3, "b": 2}, 0) == (50, 0)

    def test_overtricks_are_books(self):
        """Rule: Each overtrick is one point and one book."""
        assert score_team(["a", "b"], {"a": 3, "b": 2}, {"a": 4, "b": 3}, 1) == (52, 3)

    def test_missed_bid(self):
        """Rule: Missing the bid loses 10 per trick bid."""
        assert score_team(["a", "b"], {"a": 4, "b": 3}, {"a": 3, "b": 3}, 0) == (-70, 0)

    def test_partners_combine_tricks(self):
        """Rule: The team bid is made with combined tricks."""
        assert score_team(["a", "b"], {"a": 2, "b": 4}, {"a": 5, "b": 1}, 0) == (60, 0)

    def test_nil_made(self):
        """Rule: Nil with no tricks scores exactly +100."""
        score, books = score_team(["a", "b"], {"a": 0, "b": 4}, {"a": 0, "b": 4}, 0)
        assert score == 140
        assert books == 0

    def test_nil_failed_tricks_help_partner(self):
        """Rule: A failed nil is -100 and its tricks count toward the partner's bid."""
        score, books = score_team(["a", "b"], {"a": 0, "b": 4}, {"a": 2, "b": 3}, 0)
        assert score == -100 + 40 + 1
        assert books == 1

    def test_blind_nil(self):
        """Rule: Blind nil is worth 200 either way."""
        made, _ = score_team(["a", "b"], {"a": 0, "b": 3}, {"a": 0, "b": 3}, 0, blind_nil_players={"a"})
        failed, _ = score_team(["a", "b"], {"a": 0, "b": 3}, {"a": 1, "b": 3}, 0, blind_nil_players={"a"})
        assert made == 200 + 30
        assert failed == -200 + 30 + 1

    def test_book_penalty(self):
        """Rule: Reaching the threshold costs 100 and wraps the counter."""
        score, books = score_team(["a", "b"], {"a": 3, "b": 2}, {"a": 5, "b": 3}, 8)
        assert score == 50 + 3 - 100
        assert books == 1

    def test_custom_book_threshold(self):
        """The threshold comes from settings."""
        score, books = score_team(["a"], {"a": 2}, {"a": 7}, 0, book_threshold=5)
        assert score == 20 + 5 - 100
        assert books == 0

    def test_ten_trick_bonus(self):
        """Rule: Taking 10+ tricks on a made bid earns 50."""
        score, _ = score_team(["a", "b"], {"a": 5, "b": 5}, {"a": 5, "b": 5}, 0)
        assert score == 150

    def test_ten_trick_bonus_disabled(self):
        """The bonus can be switched off."""
        score, _ = score_team(["a", "b"], {"a": 5, "b": 5}, {"a": 5, "b": 5}, 0, ten_bid_bonus=False)
        assert score == 100

    def test_ten_trick_bonus_needs_made_bid(self):
        """No bonus when the bid was missed."""
        score, _ = score_team(["a", "b"], {"a": 6, "b": 6}, {"a": 5, "b": 5}, 0)
        assert score == -120

    def test_spoiler_doubles_bid_points(self):
        """Rule: Spoiler bid points are doubled, books are not."""
        assert score_team(["s"], {"s": 3}, {"s": 4}, 0, spoiler=True) == (61, 1)
        assert score_team(["s"], {"s": 3}, {"s": 2}, 0, spoiler=True) == (-60, 0)

    def test_spoiler_nil(self):
        """Rule: Spoiler nil success is doubled and failure costs nothing."""
        assert score_team(["s"], {"s": 0}, {"s": 0}, 0, spoiler=True) == (200, 0)
        assert score_team(["s"], {"s": 0}, {"s": 0}, 0, spoiler=True, blind_nil_players={"s"}) == (400, 0)
        assert score_team(["s"], {"s": 0}, {"s": 2}, 0, spoiler=True) == (0, 2)

    def test_double_nil_failed_tricks_are_books(self):
        """With no trick bid, failed-nil tricks become books."""
        score, books = score_team(["a", "b"], {"a": 0, "b": 0}, {"a": 1, "b": 0}, 0)
        assert score == 0
        assert books == 1


class TestScoreRound:
    """Test scoring every team of a round."""

    def test_four_player_round(self):
        """Both teams are scored and totals accumulate."""
        lookup = build_team_lookup(get_mode(4), four_players())
        results = score_round(
            lookup,
            {"p1": 4, "p2": 3, "p3": 2, "p4": 3},
            {"p1": 4, "p2": 2, "p3": 3, "p4": 4},
            {"team1": 100, "team2": 50},
            {"team1": 2, "team2": 0},
        )
        assert results["team1"].round_score == 61
        assert results["team1"].new_total == 161
        assert results["team1"].books == 3
        assert results["team2"].round_score == 60
        assert results["team2"].books == 0

    def test_spoiler_team_scored_doubled(self):
        """The 5-player spoiler gets double bid points."""
        players = seated_players(5)
        lookup = build_team_lookup(get_mode(5), players)
        bids = {"p1": 2, "p2": 2, "p3": 2, "p4": 2, "p5": 3}
        tricks = {"p1": 2, "p2": 2, "p3": 3, "p4": 3, "p5": 3}
        results = score_round(lookup, bids, tricks, {}, {})
        assert results["team3"].round_score == 60
        assert results["team1"].round_score == 40


class TestMoonshot:
    """Test the all-tricks instant win."""

    def test_moonshot_detected(self):
        """Rule: Bidding and taking all 13 shoots the moon."""
        lookup = build_team_lookup(get_mode(4), four_players())
        bids = {"p1": 7, "p2": 1, "p3": 6, "p4": 1}
        tricks = {"p1": 7, "p2": 0, "p3": 6, "p4": 0}
        assert check_moonshot(lookup, bids, tricks) == "team1"

    def test_all_tricks_without_full_bid(self):
        """Taking every trick without bidding them is not a moonshot."""
        lookup = build_team_lookup(get_mode(4), four_players())
        bids = {"p1": 5, "p2": 1, "p3": 6, "p4": 1}
        tricks = {"p1": 7, "p2": 0, "p3": 6, "p4": 0}
        assert check_moonshot(lookup, bids, tricks) is None


class TestCheckWinner:
    """Test game-over detection."""

    def test_no_one_at_target(self):
        """Below the target nobody wins."""
        assert check_winner({"team1": 499, "team2": 300}) is None

    def test_highest_at_target_wins(self):
        """Rule: The highest score at or above the target wins."""
        assert check_winner({"team1": 520, "team2": 560}) == "team2"
        assert check_winner({"team1": 500, "team2": 300}) == "team1"

    def test_tie_continues(self):
        """A tie for the lead means another round."""
        assert check_winner({"team1": 510, "team2": 510}) is None

    def test_custom_target_and_mode(self):
        """Only the mode's teams count, against the configured target."""
        scores = {"team1": 250, "team2": 100, "team9": 900}
        assert check_winner(scores, 200, get_mode(4)) == "team1"
