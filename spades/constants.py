"""Game constants for Spades."""

# Ranks in ascending order
RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
RANK_VALUE = {rank: value for value, rank in enumerate(RANKS, start=2)}

# Mega cards beat the same rank but lose to the next rank up
MEGA_RANK_OFFSET = 0.5

# Player counts
MIN_PLAYERS = 3
MAX_PLAYERS = 8
DEFAULT_PLAYER_COUNT = 4
CARDS_PER_PLAYER = 13
STANDARD_DECK_SIZE = 52

# Scoring
WINNING_SCORE = 500
BOOK_PENALTY_THRESHOLD = 10
BOOK_PENALTY = 100
NIL_BONUS = 100
BLIND_NIL_BONUS = 200
TEN_TRICK_BONUS = 50
TEN_TRICK_THRESHOLD = 10
BID_POINTS_MULTIPLIER = 10
SPOILER_MULTIPLIER = 2

# Setting ranges (inclusive)
WIN_TARGET_RANGE = (100, 1000)
BOOK_THRESHOLD_RANGE = (5, 15)
GAME_MODE_RANGE = (MIN_PLAYERS, MAX_PLAYERS)

# Team keys are "team1", "team2", ...
TEAM_KEY_PREFIX = "team"
