"""Shared fixtures for Spades tests."""

import random

import pytest

from spades.models.card import Card
from spades.models.enums import Phase
from spades.models.errors import ActionError
from spades.models.game import GameState
from spades.models.game_settings import GameSettings
from spades.models.modes import get_mode
from spades.models.player import SeatedPlayer
from spades.models.teams import arrange_seating, team_key_to_num


def four_players() -> list[SeatedPlayer]:
    """Classic table in turn order: p1/p3 on team 1, p2/p4 on team 2."""
    return [
        SeatedPlayer(id="p1", name="Alice", team=1, seat_index=0),
        SeatedPlayer(id="p2", name="Bob", team=2, seat_index=1),
        SeatedPlayer(id="p3", name="Carol", team=1, seat_index=2),
        SeatedPlayer(id="p4", name="Dave", team=2, seat_index=3),
    ]


def seated_players(player_count: int) -> list[SeatedPlayer]:
    """Seat ``player_count`` players p1..pN, filling teams in mode order."""
    mode = get_mode(player_count)
    roster: list[SeatedPlayer] = []
    for team in mode.teams:
        for _ in range(team.size):
            number = len(roster) + 1
            roster.append(SeatedPlayer(id=f"p{number}", name=f"Player{number}", team=team_key_to_num(team.id)))
    return arrange_seating(roster, mode)


def set_hands(game: GameState, hands: dict[str, list[Card]]) -> None:
    """Replace dealt hands with fixed ones for scripted scenarios."""
    for player_id, hand in hands.items():
        game._hands[game._seat_by_id[player_id]] = list(hand)  # noqa: SLF001


def bid_all(game: GameState, bids: dict[str, int]) -> None:
    """Place every bid in turn order."""
    while game.phase == Phase.BIDDING:
        player_id = game.get_current_turn_player_id()
        result = game.place_bid(player_id, bids[player_id])
        assert not isinstance(result, ActionError), result


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(42)


@pytest.fixture
def players():
    """Four seated players."""
    return four_players()


@pytest.fixture
def game(players, rng):
    """Four-player game dealt for round 1 with p4 as dealer."""
    game = GameState(players, settings=GameSettings(), rng=rng)
    game.dealer_index = 3
    game.current_turn_index = 0
    game.trick_leader_index = 0
    return game
