"""Error codes and the structured error returned for illegal actions."""

from dataclasses import dataclass
from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes for i18n translation on the client."""

    # Phase errors
    NOT_IN_BIDDING_PHASE = "error.notInBiddingPhase"
    NOT_IN_PLAYING_PHASE = "error.notInPlayingPhase"
    ROUND_IN_PROGRESS = "error.roundInProgress"
    GAME_OVER = "error.gameOver"

    # Turn errors
    NOT_YOUR_TURN_TO_BID = "error.notYourTurnToBid"
    NOT_YOUR_TURN = "error.notYourTurn"

    # Bid errors
    INVALID_BID = "error.invalidBid"
    BLIND_NIL_DISABLED = "error.blindNilDisabled"
    BLIND_NIL_REQUIRES_ZERO = "error.blindNilRequiresZero"

    # Card errors
    CARD_NOT_IN_HAND = "error.cardNotInHand"
    SPADES_NOT_BROKEN = "error.spadesNotBroken"
    MUST_FOLLOW_SUIT = "error.mustFollowSuit"


@dataclass(frozen=True)
class ActionError:
    """A rejected action. The game state is left unchanged.

    Attributes:
        code: Machine-readable error code
        error: Human-readable message for the offending client

    """

    code: ErrorCode
    error: str
