"""Seated player model."""

from dataclasses import dataclass

from spades.constants import TEAM_KEY_PREFIX


@dataclass
class SeatedPlayer:
    """Represents a player seated at the table.

    Attributes:
        id: Connection-level player identifier (may change on reconnection)
        name: Display name
        team: Team number (1-indexed), None for unassigned
        seat_index: Layout position around the table
        is_bot: Whether this is an AI player
        user_id: Account identifier, None for guests and bots

    """

    id: str
    name: str
    team: int | None = None
    seat_index: int = 0
    is_bot: bool = False
    user_id: str | None = None

    @property
    def team_key(self) -> str | None:
        """Team key such as "team1", or None when unassigned."""
        if self.team is None:
            return None
        return f"{TEAM_KEY_PREFIX}{self.team}"

    def __str__(self) -> str:
        """Return string representation."""
        bot_str = " (Bot)" if self.is_bot else ""
        return f"{self.name}{bot_str} - Team {self.team}"
