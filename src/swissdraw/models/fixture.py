"""Fixture data class."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from swissdraw.exceptions import InvalidFixtureException
from swissdraw.models.team import Team
from swissdraw.utils import make_fixture_id, pair_key


@dataclass(frozen=True)
class Fixture:
    """A Swiss-phase match between two teams on a matchday.

    Scores are present exactly when ``played`` is True. Fixtures are values:
    ``with_score`` and ``reset`` return new instances.
    """

    home: Team
    away: Team
    matchday: int
    played: bool = False
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    def __post_init__(self) -> None:
        if self.home.id == self.away.id:
            raise InvalidFixtureException(
                f"{self.home.name} cannot play itself on matchday {self.matchday}"
            )

    @property
    def id(self) -> str:
        """Deterministic id built from both team ids and the matchday."""
        return make_fixture_id(self.home.id, self.away.id, self.matchday)

    @property
    def pair(self) -> frozenset:
        """Unordered pair of team ids."""
        return pair_key(self.home.id, self.away.id)

    @property
    def is_draw(self) -> bool:
        return self.played and self.home_score == self.away_score

    @property
    def winner(self) -> Optional[Team]:
        """The winning team, or None when unplayed or level."""
        if not self.played or self.home_score == self.away_score:
            return None
        return self.home if self.home_score > self.away_score else self.away

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home.id, self.away.id)

    def opponent_of(self, team_id: str) -> Team:
        """Return the other team of this fixture."""
        if team_id == self.home.id:
            return self.away
        if team_id == self.away.id:
            return self.home
        raise ValueError(f"Team {team_id} does not play in fixture {self.id}")

    def with_score(self, home_score: int, away_score: int) -> "Fixture":
        """Return a played copy carrying the given score."""
        return replace(
            self, played=True, home_score=home_score, away_score=away_score
        )

    def reset(self) -> "Fixture":
        """Return an unplayed copy with scores cleared."""
        return replace(self, played=False, home_score=None, away_score=None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize fixture to dictionary (teams by id)."""
        return {
            "id": self.id,
            "home_id": self.home.id,
            "away_id": self.away.id,
            "matchday": self.matchday,
            "played": self.played,
            "home_score": self.home_score,
            "away_score": self.away_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], teams: Dict[str, Team]) -> "Fixture":
        """Deserialize fixture from dictionary, resolving ids against ``teams``."""
        return cls(
            home=teams[data["home_id"]],
            away=teams[data["away_id"]],
            matchday=data["matchday"],
            played=data.get("played", False),
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
        )

    def __str__(self) -> str:
        if self.played:
            return (
                f"MD{self.matchday}: {self.home.name} {self.home_score}-"
                f"{self.away_score} {self.away.name}"
            )
        return f"MD{self.matchday}: {self.home.name} vs {self.away.name}"
