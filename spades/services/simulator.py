"""Bot-vs-bot game driver.

Seats a table of bots, feeds their decisions back through the game's own
entry points and runs until the game ends or the round cap is hit.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from spades.bots import BaseBot, RandomBot, RuleBasedBot
from spades.bots.view import BotView
from spades.config import settings as app_settings
from spades.models.enums import Phase
from spades.models.errors import ActionError
from spades.models.game import GameState
from spades.models.game_settings import GameSettings
from spades.models.modes import get_mode
from spades.models.player import SeatedPlayer
from spades.models.teams import arrange_seating, team_key_to_num
from spades.services.game_serializer import serialize_round_history

logger = logging.getLogger(__name__)

BOT_TYPES: dict[str, type[BaseBot]] = {
    "random": RandomBot,
    "rule_based": RuleBasedBot,
}


@dataclass
class SimulationResult:
    """Outcome of a simulated game.

    Attributes:
        winning_team: Team key of the winner, None if the round cap was hit
        rounds_played: Rounds completed
        final_scores: Team key -> final running total
        round_history: Serialized round summaries, oldest first
        players: Seated players in turn order

    """

    winning_team: str | None
    rounds_played: int
    final_scores: dict[str, int]
    round_history: list[dict[str, Any]] = field(default_factory=list)
    players: list[SeatedPlayer] = field(default_factory=list)


class BotGameSimulator:
    """Simulates a game between bot players."""

    def __init__(
        self,
        player_count: int = 4,
        settings: GameSettings | None = None,
        seed: int | None = None,
        bot_types: list[str] | None = None,
    ) -> None:
        """Initialize simulator.

        Args:
            player_count: Number of players (3-8)
            settings: Rule settings, defaults if None
            seed: Seed for dealing and bot decisions, random if None
            bot_types: Bot type per seat ("random" or "rule_based")

        Raises:
            ValueError: If the player count has no mode or a bot type is unknown

        """
        self.mode = get_mode(player_count)
        if self.mode.player_count != player_count:
            raise ValueError(f"No game mode for {player_count} players")

        self.settings = settings or GameSettings(game_mode=player_count)
        self.seed = seed if seed is not None else app_settings.simulation_seed
        self.bot_types = list(bot_types or ["rule_based"] * player_count)
        for bot_type in self.bot_types:
            if bot_type not in BOT_TYPES:
                raise ValueError(f"Unknown bot type: {bot_type}")

        self.game: GameState | None = None
        self.bots: dict[str, BaseBot] = {}

    def _rng(self, offset: int) -> random.Random:
        if self.seed is None:
            return random.Random()  # noqa: S311
        return random.Random(self.seed + offset)  # noqa: S311

    def setup_game(self) -> GameState:
        """Seat the bots and deal the first round."""
        roster: list[SeatedPlayer] = []
        for team in self.mode.teams:
            for _ in range(team.size):
                index = len(roster)
                roster.append(
                    SeatedPlayer(
                        id=f"bot_{index}",
                        name=f"Bot{index + 1}",
                        team=team_key_to_num(team.id),
                        is_bot=True,
                    )
                )

        players = arrange_seating(roster, self.mode)
        self.bots = {}
        for index, player in enumerate(players):
            bot_type = self.bot_types[index] if index < len(self.bot_types) else "rule_based"
            self.bots[player.id] = BOT_TYPES[bot_type](player.id, self._rng(index + 1))

        self.game = GameState(players, settings=self.settings, rng=self._rng(0))
        logger.info("Simulating %d-player game: %s", self.mode.player_count, ", ".join(str(b) for b in self.bots.values()))
        return self.game

    def play_round(self, game: GameState) -> None:
        """Play the current round through bidding, tricks and scoring."""
        while game.phase == Phase.BIDDING:
            player_id = game.get_current_turn_player_id()
            bot = self.bots[player_id]
            decision = bot.make_bid(BotView.from_game(game), game.get_hand(player_id))
            self._check(game.place_bid(player_id, decision.bid, blind_nil=decision.blind_nil))

        while game.phase == Phase.PLAYING:
            player_id = game.get_current_turn_player_id()
            bot = self.bots[player_id]
            card = bot.pick_card(BotView.from_game(game), game.get_hand(player_id))
            self._check(game.play_card(player_id, card))

    @staticmethod
    def _check(result: object) -> None:
        # Bots only choose legal actions, so a rejection is a bug
        if isinstance(result, ActionError):
            raise RuntimeError(f"Bot action rejected: {result.code.value} ({result.error})")

    def play_game(self) -> SimulationResult:
        """Play a complete game."""
        game = self.setup_game()
        max_rounds = app_settings.simulation_max_rounds

        while True:
            self.play_round(game)
            if game.is_game_over() or game.round_number >= max_rounds:
                break
            game.start_new_round()

        if not game.is_game_over():
            logger.warning("Stopped after %d rounds without a winner", game.round_number)

        return SimulationResult(
            winning_team=game.winning_team,
            rounds_played=len(game.round_history),
            final_scores=dict(game.scores),
            round_history=serialize_round_history(game),
            players=list(game.players),
        )
