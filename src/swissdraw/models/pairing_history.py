"""Draw context carried across matchdays."""

# Swiss Draw
# Copyright (C) 2025  Swiss Draw developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Set

from swissdraw.utils import pair_key


@dataclass
class PairingHistory:
    """
    Tracks pairings, venues and matchday occupancy during a draw.

    One instance is threaded through every matchday of a draw; nothing is
    kept at module level.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Unordered pairs of team ids that have already been drawn together.
    home_counts, away_counts : Counter of str
        Home and away appearances per team id.
    busy : dict of int to set of str
        Team ids already holding a fixture, per matchday.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)
    home_counts: Counter = field(default_factory=Counter)
    away_counts: Counter = field(default_factory=Counter)
    busy: Dict[int, Set[str]] = field(default_factory=dict)

    def record_pair(self, team1_id: str, team2_id: str, matchday: int) -> None:
        """Record that two teams meet on a matchday, venue not yet decided."""
        self.previous_matches.add(pair_key(team1_id, team2_id))
        occupied = self.busy.setdefault(matchday, set())
        occupied.add(team1_id)
        occupied.add(team2_id)

    def record_venue(self, home_id: str, away_id: str) -> None:
        """Count one home game for ``home_id`` and one away game for ``away_id``."""
        self.home_counts[home_id] += 1
        self.away_counts[away_id] += 1

    def add_pairing(self, home_id: str, away_id: str, matchday: int) -> None:
        """Record a pairing together with its venue."""
        self.record_pair(home_id, away_id, matchday)
        self.record_venue(home_id, away_id)

    def have_played(self, team1_id: str, team2_id: str) -> bool:
        """Check if two teams have already been drawn together."""
        return pair_key(team1_id, team2_id) in self.previous_matches

    def is_busy(self, team_id: str, matchday: int) -> bool:
        return team_id in self.busy.get(matchday, ())

    def can_host(self, home_id: str, away_id: str, cap: int) -> bool:
        """True if ``home_id`` may host ``away_id`` without breaking the cap."""
        return self.home_counts[home_id] < cap and self.away_counts[away_id] < cap

    def fixture_count(self, team_id: str) -> int:
        """Number of matchdays on which the team is drawn."""
        return sum(1 for occupied in self.busy.values() if team_id in occupied)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "previous_matches": [sorted(pair) for pair in self.previous_matches],
            "home_counts": dict(self.home_counts),
            "away_counts": dict(self.away_counts),
            "busy": {str(md): sorted(ids) for md, ids in self.busy.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(map(str, pair)) for pair in data.get("previous_matches", [])
            ),
            home_counts=Counter(data.get("home_counts", {})),
            away_counts=Counter(data.get("away_counts", {})),
            busy={int(md): set(ids) for md, ids in data.get("busy", {}).items()},
        )
