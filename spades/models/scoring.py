"""Round scoring for any team topology.

Scoring is computed per team key from the players the team lookup assigns
to it. Solo spoiler teams have their bid points and bonuses doubled, while
books and book penalties are never doubled.
"""

import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass

from spades.constants import (
    BID_POINTS_MULTIPLIER,
    BLIND_NIL_BONUS,
    BOOK_PENALTY,
    BOOK_PENALTY_THRESHOLD,
    NIL_BONUS,
    SPOILER_MULTIPLIER,
    TEN_TRICK_BONUS,
    TEN_TRICK_THRESHOLD,
    WINNING_SCORE,
)
from spades.models.modes import ModeConfig
from spades.models.teams import TeamLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamRoundScore:
    """Score of one team for one round.

    Attributes:
        round_score: Points gained or lost this round
        new_total: Running total after this round
        books: Book counter after penalties wrap it

    """

    round_score: int
    new_total: int
    books: int


def score_team(
    player_ids: Collection[str],
    bids: Mapping[str, int],
    tricks_taken: Mapping[str, int],
    current_books: int,
    *,
    spoiler: bool = False,
    blind_nil_players: Collection[str] = (),
    book_threshold: int = BOOK_PENALTY_THRESHOLD,
    ten_bid_bonus: bool = True,
) -> tuple[int, int]:
    """Score a single team for a completed round.

    Args:
        player_ids: Players on the team
        bids: Player ID -> bid (0 is nil)
        tricks_taken: Player ID -> tricks won
        current_books: Team's book counter before this round
        spoiler: Double bid points and bonuses, no failed-nil penalty
        blind_nil_players: Players whose nil was blind
        book_threshold: Books per penalty
        ten_bid_bonus: Whether the 10-trick bonus is enabled

    Returns:
        Tuple of (round score, new book counter)

    """
    multiplier = SPOILER_MULTIPLIER if spoiler else 1
    round_score = 0
    books = current_books
    failed_nil_tricks = 0
    combined_bid = 0
    bid_tricks = 0

    for player_id in player_ids:
        bid = bids.get(player_id, 0)
        taken = tricks_taken.get(player_id, 0)
        if bid > 0:
            combined_bid += bid
            bid_tricks += taken
            continue

        bonus = BLIND_NIL_BONUS if player_id in blind_nil_players else NIL_BONUS
        if taken == 0:
            round_score += bonus * multiplier
        else:
            # A spoiler has no partner to protect, so a failed nil costs nothing
            if not spoiler:
                round_score -= bonus
            failed_nil_tricks += taken

    effective_tricks = bid_tricks + failed_nil_tricks
    made_bid = effective_tricks >= combined_bid

    if combined_bid > 0:
        if made_bid:
            overtricks = effective_tricks - combined_bid
            round_score += combined_bid * BID_POINTS_MULTIPLIER * multiplier + overtricks
            books += overtricks
        else:
            round_score -= combined_bid * BID_POINTS_MULTIPLIER * multiplier
    elif failed_nil_tricks > 0:
        # Every player on the team bid nil, so failed-nil tricks are books
        books += failed_nil_tricks

    if ten_bid_bonus and combined_bid > 0 and made_bid:
        team_tricks = sum(tricks_taken.get(pid, 0) for pid in player_ids)
        if team_tricks >= TEN_TRICK_THRESHOLD:
            round_score += TEN_TRICK_BONUS * multiplier

    if book_threshold > 0 and books >= book_threshold:
        penalties = books // book_threshold
        round_score -= penalties * BOOK_PENALTY
        books %= book_threshold

    return round_score, books


def score_round(
    team_lookup: TeamLookup,
    bids: Mapping[str, int],
    tricks_taken: Mapping[str, int],
    current_scores: Mapping[str, int],
    current_books: Mapping[str, int],
    *,
    book_threshold: int = BOOK_PENALTY_THRESHOLD,
    ten_bid_bonus: bool = True,
    blind_nil_players: Collection[str] = (),
) -> dict[str, TeamRoundScore]:
    """Score a completed round for every team.

    Args:
        team_lookup: Team relationships for the seated players
        bids: Player ID -> bid
        tricks_taken: Player ID -> tricks won
        current_scores: Team key -> running total before this round
        current_books: Team key -> book counter before this round
        book_threshold: Books per penalty
        ten_bid_bonus: Whether the 10-trick bonus is enabled
        blind_nil_players: Players whose nil was blind

    Returns:
        Team key -> round score, new total and books

    """
    result: dict[str, TeamRoundScore] = {}
    for team in team_lookup.mode.teams:
        player_ids = team_lookup.teams_by_key[team.id]
        round_score, books = score_team(
            player_ids,
            bids,
            tricks_taken,
            current_books.get(team.id, 0),
            spoiler=team.spoiler,
            blind_nil_players=blind_nil_players,
            book_threshold=book_threshold,
            ten_bid_bonus=ten_bid_bonus,
        )
        result[team.id] = TeamRoundScore(
            round_score=round_score,
            new_total=current_scores.get(team.id, 0) + round_score,
            books=books,
        )
    return result


def check_moonshot(
    team_lookup: TeamLookup,
    bids: Mapping[str, int],
    tricks_taken: Mapping[str, int],
) -> str | None:
    """Find a team that bid and took every trick of the round.

    Returns:
        The moonshot team key, or None

    """
    tricks_per_round = team_lookup.mode.tricks_per_round
    for key, player_ids in team_lookup.teams_by_key.items():
        if not player_ids:
            continue
        combined_bid = sum(bids.get(pid, 0) for pid in player_ids)
        team_tricks = sum(tricks_taken.get(pid, 0) for pid in player_ids)
        if combined_bid == tricks_per_round and team_tricks == tricks_per_round:
            logger.info("Team %s shot the moon", key)
            return key
    return None


def check_winner(
    scores: Mapping[str, int],
    win_target: int = WINNING_SCORE,
    mode: ModeConfig | None = None,
) -> str | None:
    """Check if any team has won the game.

    Among teams at or above the target, the strictly highest score wins.
    A tie for the lead means nobody has won yet.

    Args:
        scores: Team key -> running total
        win_target: Score that ends the game
        mode: Restricts the check to the mode's teams when given

    Returns:
        Winning team key, or None

    """
    keys = mode.team_keys if mode else list(scores)
    contenders = {key: scores.get(key, 0) for key in keys if scores.get(key, 0) >= win_target}
    if not contenders:
        return None

    best = max(contenders.values())
    leaders = [key for key, score in contenders.items() if score == best]
    return leaders[0] if len(leaders) == 1 else None
