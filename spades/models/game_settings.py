"""Per-game rule settings, validated before a game is created."""

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from spades.config import settings
from spades.constants import BOOK_THRESHOLD_RANGE, GAME_MODE_RANGE, WIN_TARGET_RANGE


def _round_and_clamp(value: Any, bounds: tuple[int, int]) -> int:
    low, high = bounds
    # Half-up rounding, matching what clients send from sliders
    rounded = math.floor(float(value) + 0.5)
    return max(low, min(high, rounded))


class GameSettings(BaseModel):
    """Rule variations chosen for one game.

    Accepts snake_case names or the camelCase wire names. Out-of-range
    numbers are rounded and clamped rather than rejected.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    win_target: int = Field(default_factory=lambda: settings.default_win_target, description="Score that ends the game")
    book_threshold: int = Field(
        default_factory=lambda: settings.default_book_threshold,
        validation_alias=AliasChoices("book_threshold", "bookThreshold", "bagThreshold"),
        description="Books per penalty",
    )
    blind_nil: bool = Field(default_factory=lambda: settings.default_blind_nil, description="Allow blind nil bids")
    moonshot: bool = Field(default_factory=lambda: settings.default_moonshot, description="Instant win on all tricks")
    ten_bid_bonus: bool = Field(default_factory=lambda: settings.default_ten_bid_bonus, description="10+ trick bonus")
    game_mode: int = Field(default_factory=lambda: settings.default_game_mode, description="Player count")
    double_nil: bool = Field(default_factory=lambda: settings.default_double_nil, description="Both partners may nil")

    @field_validator("win_target", mode="before")
    @classmethod
    def _clamp_win_target(cls, value: Any) -> int:
        return _round_and_clamp(value, WIN_TARGET_RANGE)

    @field_validator("book_threshold", mode="before")
    @classmethod
    def _clamp_book_threshold(cls, value: Any) -> int:
        return _round_and_clamp(value, BOOK_THRESHOLD_RANGE)

    @field_validator("game_mode", mode="before")
    @classmethod
    def _clamp_game_mode(cls, value: Any) -> int:
        return _round_and_clamp(value, GAME_MODE_RANGE)

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys for clients."""
        return self.model_dump(by_alias=True)
