"""Team relationships derived from a mode and its seated players."""

from collections.abc import Sequence
from dataclasses import replace

from spades.constants import TEAM_KEY_PREFIX
from spades.models.modes import ModeConfig
from spades.models.player import SeatedPlayer


class TeamLookup:
    """Partner, opponent and spoiler lookups for one set of seated players.

    The lookup is a pure function of ``(mode, players)`` and must be rebuilt
    whenever a player ID changes.

    Attributes:
        teams_by_key: Team key -> player IDs, in seating order

    """

    def __init__(self, mode: ModeConfig, players: Sequence[SeatedPlayer]) -> None:
        """Build the lookup.

        Args:
            mode: Game mode configuration
            players: Seated players

        """
        self.mode = mode
        self._player_ids = [p.id for p in players]
        self.teams_by_key: dict[str, list[str]] = {key: [] for key in mode.team_keys}
        for player in players:
            key = player.team_key
            if key in self.teams_by_key:
                self.teams_by_key[key].append(player.id)

        self._team_of: dict[str, str] = {
            player_id: key for key, ids in self.teams_by_key.items() for player_id in ids
        }

    def get_team_key(self, player_id: str) -> str | None:
        """Get the team key for a player, None if not on a team."""
        return self._team_of.get(player_id)

    def get_partner_ids(self, player_id: str) -> list[str]:
        """Get all teammates of a player (empty for solo teams)."""
        key = self._team_of.get(player_id)
        if key is None:
            return []
        return [pid for pid in self.teams_by_key[key] if pid != player_id]

    def get_partner_id(self, player_id: str) -> str | None:
        """Get the first teammate of a player, if any."""
        partners = self.get_partner_ids(player_id)
        return partners[0] if partners else None

    def get_opponent_ids(self, player_id: str) -> list[str]:
        """Get every seated player on a different team."""
        key = self._team_of.get(player_id)
        if key is None:
            return [pid for pid in self._player_ids if pid != player_id]
        return [pid for pid in self._player_ids if self._team_of.get(pid) != key]

    def is_spoiler(self, player_id: str) -> bool:
        """Check if a player's team is a spoiler team."""
        key = self._team_of.get(player_id)
        if key is None:
            return False
        team = self.mode.get_team(key)
        return bool(team and team.spoiler)

    def opponent_team_keys(self, player_id: str) -> list[str]:
        """Get every team key other than the player's own."""
        own = self._team_of.get(player_id)
        return [key for key in self.teams_by_key if key != own]


def build_team_lookup(mode: ModeConfig, players: Sequence[SeatedPlayer]) -> TeamLookup:
    """Build a team lookup from a mode config and seated players."""
    return TeamLookup(mode, players)


def init_team_scores(mode: ModeConfig) -> dict[str, int]:
    """Initialize a scores or books mapping with 0 for each team."""
    return {key: 0 for key in mode.team_keys}


def get_team_keys(mode: ModeConfig) -> list[str]:
    """Get the team keys for a mode, e.g. ["team1", "team2"]."""
    return mode.team_keys


def team_key_to_num(team_key: str) -> int:
    """Parse a team key like "team1" into its team number."""
    return int(team_key.removeprefix(TEAM_KEY_PREFIX))


def team_num_to_key(team_num: int) -> str:
    """Convert a team number to its key, e.g. 3 -> "team3"."""
    return f"{TEAM_KEY_PREFIX}{team_num}"


def arrange_seating(players: Sequence[SeatedPlayer], mode: ModeConfig) -> list[SeatedPlayer]:
    """Seat players so partners sit directly across from each other.

    Partners are placed half the layout apart. In spoiler modes the layout
    has one more seat than players, and the spoiler sits opposite the empty
    seat. Solo-only modes (3 players) simply take seats 0, 1, 2.

    Args:
        players: Players with team assignments
        mode: Game mode configuration

    Returns:
        New player records with ``seat_index`` set, in turn order

    """
    members: dict[str, list[SeatedPlayer]] = {key: [] for key in mode.team_keys}
    unassigned: list[SeatedPlayer] = []
    for player in players:
        key = player.team_key
        if key in members:
            members[key].append(player)
        else:
            unassigned.append(player)

    layout = mode.layout_seats or mode.player_count
    half = layout // 2
    seats: dict[int, SeatedPlayer] = {}

    pairs = [members[team.id] for team in mode.teams if team.size > 1]
    solos = [p for team in mode.teams if team.size == 1 for p in members[team.id]]
    leftovers = [p for pair in pairs for p in pair[2:]] + unassigned

    for offset, pair in enumerate(pairs):
        for position, player in enumerate(pair[:2]):
            seats[offset + position * half] = player

    # Solo players sit after the first member of each pair
    _fill_free_seats(seats, solos, start=len(pairs))
    _fill_free_seats(seats, leftovers, start=0)

    return [replace(player, seat_index=seat) for seat, player in sorted(seats.items())]


def _fill_free_seats(seats: dict[int, SeatedPlayer], players: list[SeatedPlayer], start: int) -> None:
    seat = start
    for player in players:
        while seat in seats:
            seat += 1
        seats[seat] = player
