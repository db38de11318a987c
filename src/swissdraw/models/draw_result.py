"""Draw output: ceremony steps, problems and the resulting fixtures."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from swissdraw.models.fixture import Fixture
from swissdraw.models.team import Team


class ProblemKind(Enum):
    """Categories of problems a draw can report."""

    INFEASIBLE = "infeasible"  # request cannot be scheduled at all
    CONSTRAINT_RELAXED = "constraint_relaxed"  # a rule was dropped for a matchday
    RULE_VIOLATION = "rule_violation"  # a fixture breaks a stated rule
    SLOT_SKIPPED = "slot_skipped"  # no eligible opponent for a (team, matchday)
    INCOMPLETE_SCHEDULE = "incomplete_schedule"  # team short of fixtures


@dataclass(frozen=True)
class DrawStep:
    """One team/opponent reveal of the sequential draw, in ceremony order."""

    team: Team
    opponent: Team
    matchday: int
    is_home: bool
    fixture_id: str

    @property
    def home(self) -> Team:
        return self.team if self.is_home else self.opponent

    @property
    def away(self) -> Team:
        return self.opponent if self.is_home else self.team


@dataclass(frozen=True)
class DrawProblem:
    """A human-readable problem found while drawing."""

    kind: ProblemKind
    message: str
    matchday: Optional[int] = None
    team_ids: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.message


@dataclass
class DrawResult:
    """Result of a draw.

    Attributes
    ----------
    fixtures : list of Fixture
        All fixtures, ordered by matchday.
    problems : list of DrawProblem
        Everything the caller should know about; empty for a clean draw.
    steps : list of DrawStep
        Ceremony order for the sequential draw, empty otherwise.
    """

    fixtures: List[Fixture] = field(default_factory=list)
    problems: List[DrawProblem] = field(default_factory=list)
    steps: List[DrawStep] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        """Problem descriptions as plain strings."""
        return [problem.message for problem in self.problems]

    @property
    def is_clean(self) -> bool:
        return not self.problems

    def problems_of(self, kind: ProblemKind) -> List[DrawProblem]:
        return [problem for problem in self.problems if problem.kind is kind]

    def fixtures_for_matchday(self, matchday: int) -> List[Fixture]:
        return [fixture for fixture in self.fixtures if fixture.matchday == matchday]

    def fixtures_for_team(self, team_id: str) -> List[Fixture]:
        return [fixture for fixture in self.fixtures if fixture.involves(team_id)]
