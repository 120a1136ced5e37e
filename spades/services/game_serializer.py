"""Round history serialization.

Converts cards, plays and round summaries to plain JSON-compatible
dictionaries for the stats subsystem, and back.
"""

from typing import Any

from spades.models.card import Card
from spades.models.enums import Suit
from spades.models.game import GameState
from spades.models.results import RoundSummary
from spades.models.trick import Play


def serialize_card(card: Card) -> dict[str, Any]:
    """Serialize a Card to a dictionary."""
    return {"suit": card.suit.value, "rank": card.rank, "mega": card.mega}


def deserialize_card(data: dict[str, Any]) -> Card:
    """Deserialize a Card from a dictionary."""
    return Card(suit=Suit(data["suit"]), rank=data["rank"], mega=data.get("mega", False))


def serialize_play(play: Play) -> dict[str, Any]:
    """Serialize a Play to a dictionary."""
    return {"player_id": play.player_id, "card": serialize_card(play.card)}


def deserialize_play(data: dict[str, Any]) -> Play:
    """Deserialize a Play from a dictionary."""
    return Play(player_id=data["player_id"], card=deserialize_card(data["card"]))


def serialize_round_summary(summary: RoundSummary) -> dict[str, Any]:
    """Serialize a RoundSummary to a dictionary."""
    data: dict[str, Any] = {
        "round_number": summary.round_number,
        "bids": dict(summary.bids),
        "tricks_taken": dict(summary.tricks_taken),
        "team_scores": dict(summary.team_scores),
        "team_totals": dict(summary.team_totals),
        "team_books": dict(summary.team_books),
        "blind_nil_players": list(summary.blind_nil_players),
    }
    if summary.moonshot:
        data["moonshot"] = summary.moonshot
    return data


def deserialize_round_summary(data: dict[str, Any]) -> RoundSummary:
    """Deserialize a RoundSummary from a dictionary."""
    return RoundSummary(
        round_number=data["round_number"],
        bids=dict(data.get("bids", {})),
        tricks_taken=dict(data.get("tricks_taken", {})),
        team_scores=dict(data.get("team_scores", {})),
        team_totals=dict(data.get("team_totals", {})),
        team_books=dict(data.get("team_books", {})),
        blind_nil_players=tuple(data.get("blind_nil_players", ())),
        moonshot=data.get("moonshot"),
    )


def serialize_round_history(game: GameState) -> list[dict[str, Any]]:
    """Serialize every finished round of a game.

    Args:
        game: Game whose history to serialize

    Returns:
        One dictionary per round, oldest first

    """
    return [serialize_round_summary(summary) for summary in game.round_history]
