"""Standings data classes."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from swissdraw.models.team import Team


class QualificationStatus(Enum):
    """Tier a league position falls into after the Swiss phase."""

    AUTO_QUALIFIED = "auto_qualified"
    PLAYOFF = "playoff"
    ELIMINATED = "eliminated"
    NONE = "none"


@dataclass
class StandingsEntry:
    """One row of the league table.

    Attributes:
        team: The team this row belongs to
        position: 1-based rank, 0 until ranked
        played, won, drawn, lost: Match counts
        goals_for, goals_against: Goals scored and conceded
        points: League points (3 per win, 1 per draw)
    """

    team: Team
    position: int = 0
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict[str, Any]:
        """Serialize entry to dictionary."""
        return {
            "team_id": self.team.id,
            "position": self.position,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
        }
