#!/usr/bin/env python3
"""
CLI script to watch bots play Spades.

This script seats a table of bot players, simulates a complete game and
prints the round-by-round results.
"""

import argparse
import logging
import sys
import time

from spades.config import settings
from spades.constants import MAX_PLAYERS, MIN_PLAYERS
from spades.models.game_settings import GameSettings
from spades.services.simulator import BotGameSimulator, SimulationResult


def print_result(result: SimulationResult) -> None:
    """Print the seating, every round and the final standings."""
    print(f"\n{'=' * 60}")
    print(f"Spades game with {len(result.players)} bots")
    print(f"{'=' * 60}\n")

    for player in result.players:
        print(f"  Seat {player.seat_index}: {player}")

    for summary in result.round_history:
        print(f"\nROUND {summary['round_number']}")
        print("-" * 40)
        bids = ", ".join(f"{pid}={bid}" for pid, bid in summary["bids"].items())
        tricks = ", ".join(f"{pid}={count}" for pid, count in summary["tricks_taken"].items())
        print(f"  Bids:   {bids}")
        print(f"  Tricks: {tricks}")
        if summary["blind_nil_players"]:
            print(f"  Blind nil: {', '.join(summary['blind_nil_players'])}")
        if "moonshot" in summary:
            print(f"  Moonshot by {summary['moonshot']}!")
        for team_key, points in summary["team_scores"].items():
            print(
                f"  {team_key}: {points:+d} (Total: {summary['team_totals'][team_key]}, "
                f"Books: {summary['team_books'][team_key]})"
            )

    print(f"\n{'=' * 60}")
    print("GAME OVER")
    print(f"{'=' * 60}\n")

    standings = sorted(result.final_scores.items(), key=lambda item: item[1], reverse=True)
    for rank, (team_key, score) in enumerate(standings, 1):
        print(f"  {rank}. {team_key}: {score} points")

    if result.winning_team:
        print(f"\nWinner: {result.winning_team} after {result.rounds_played} rounds")
    else:
        print(f"\nNo winner after {result.rounds_played} rounds")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Watch bots play Spades")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        help=f"Number of players ({MIN_PLAYERS}-{MAX_PLAYERS})",
    )
    parser.add_argument(
        "--random",
        type=int,
        default=0,
        help="Number of random bots (rest will be rule-based)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible game")
    parser.add_argument("--win-target", type=int, default=None, help="Score that ends the game")
    parser.add_argument("--blind-nil", action="store_true", help="Allow blind nil bids")

    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )

    if not (MIN_PLAYERS <= args.players <= MAX_PLAYERS):
        print(f"Error: Must have {MIN_PLAYERS}-{MAX_PLAYERS} players")
        sys.exit(1)

    bot_types = ["random" if i < args.random else "rule_based" for i in range(args.players)]

    overrides: dict[str, object] = {"game_mode": args.players, "blind_nil": args.blind_nil}
    if args.win_target is not None:
        overrides["win_target"] = args.win_target
    game_settings = GameSettings(**overrides)

    start_time = time.time()
    simulator = BotGameSimulator(
        player_count=args.players,
        settings=game_settings,
        seed=args.seed,
        bot_types=bot_types,
    )
    result = simulator.play_game()
    print_result(result)
    print(f"\nGame duration: {time.time() - start_time:.1f} seconds")


if __name__ == "__main__":
    main()
