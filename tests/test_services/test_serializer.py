"""Tests for round history serialization."""

import json

import pytest
from conftest import bid_all

from spades.models.card import Card
from spades.models.enums import Phase, Suit
from spades.models.results import RoundSummary
from spades.models.trick import Play
from spades.services.game_serializer import (
    deserialize_card,
    deserialize_play,
    deserialize_round_summary,
    serialize_card,
    serialize_play,
    serialize_round_history,
    serialize_round_summary,
)


@pytest.fixture
def summary():
    """A scored round with a blind nil."""
    return RoundSummary(
        round_number=3,
        bids={"p1": 0, "p2": 4, "p3": 5, "p4": 3},
        tricks_taken={"p1": 0, "p2": 4, "p3": 6, "p4": 3},
        team_scores={"team1": 251, "team2": 70},
        team_totals={"team1": 310, "team2": 220},
        team_books={"team1": 1, "team2": 0},
        blind_nil_players=("p1",),
    )


class TestCardSerialization:
    """Test card and play conversion."""

    def test_card_fields(self):
        """Cards serialize to suit letter, rank and mega flag."""
        assert serialize_card(Card(Suit.HEARTS, "10", mega=True)) == {"suit": "H", "rank": "10", "mega": True}

    def test_card_without_mega_flag(self):
        """Older payloads without the mega flag load as regular cards."""
        assert deserialize_card({"suit": "S", "rank": "A"}) == Card(Suit.SPADES, "A")

    def test_play(self):
        """Plays keep the player and the card."""
        play = Play("p2", Card(Suit.CLUBS, "7", mega=True))
        data = serialize_play(play)
        assert data["player_id"] == "p2"
        assert deserialize_play(data) == play


class TestRoundSummarySerialization:
    """Test round summary conversion."""

    def test_json_compatible(self, summary):
        """Output survives a JSON round trip unchanged."""
        data = serialize_round_summary(summary)
        assert json.loads(json.dumps(data)) == data
        assert data["blind_nil_players"] == ["p1"]

    def test_moonshot_only_when_set(self, summary):
        """The moonshot key is omitted for ordinary rounds."""
        assert "moonshot" not in serialize_round_summary(summary)

    def test_restores_summary(self, summary):
        """Deserializing gives back an equal summary."""
        assert deserialize_round_summary(serialize_round_summary(summary)) == summary

    def test_restores_moonshot(self):
        """A moonshot round keeps its winning team."""
        data = {
            "round_number": 1,
            "bids": {"p1": 13},
            "tricks_taken": {"p1": 13},
            "team_scores": {"team1": 500},
            "team_totals": {"team1": 500},
            "team_books": {"team1": 0},
            "moonshot": "team1",
        }
        restored = deserialize_round_summary(data)
        assert restored.moonshot == "team1"
        assert restored.blind_nil_players == ()


class TestRoundHistory:
    """Test whole-game history serialization."""

    def test_empty_before_first_round(self, game):
        """No rounds are recorded while round 1 is in progress."""
        assert serialize_round_history(game) == []

    def test_records_scored_round(self, game):
        """Every finished round is serialized in order."""
        bid_all(game, {"p1": 3, "p2": 3, "p3": 3, "p4": 3})
        while game.phase == Phase.PLAYING:
            player_id = game.get_current_turn_player_id()
            hand = game.get_hand(player_id)
            led = game.current_trick[0].card.suit if game.current_trick else None
            following = [c for c in hand if c.suit == led]
            leads = [c for c in hand if not c.is_spade()] if not game.spades_broken else hand
            card = (following or hand)[0] if led else (leads or hand)[0]
            game.play_card(player_id, card)

        history = serialize_round_history(game)
        assert len(history) == 1
        assert history[0]["round_number"] == 1
        assert sum(history[0]["tricks_taken"].values()) == 13
        assert history[0]["team_totals"] == game.scores
