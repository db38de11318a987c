"""League table aggregation for the Swiss phase."""

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

from typing import Dict, List, Sequence, Tuple

from swissdraw.constants import DRAW_POINTS, LOSS_POINTS, WIN_POINTS
from swissdraw.models import (
    Fixture,
    QualificationStatus,
    StandingsEntry,
    Team,
    TournamentRules,
)
from swissdraw.utils import setup_logger

logger = setup_logger(__name__)


class StandingsCalculator:
    """Builds the ranked league table from played fixtures.

    Ranking is by points, then goal difference, then goals scored, all
    descending. Teams still level keep their roster order.
    """

    def calculate(
        self, teams: Sequence[Team], fixtures: Sequence[Fixture]
    ) -> List[StandingsEntry]:
        """Return one entry per team, ranked, with 1-based positions.

        Unplayed fixtures are ignored. Fixtures naming a team outside
        ``teams`` are logged and skipped.
        """
        table: Dict[str, StandingsEntry] = {
            team.id: StandingsEntry(team=team) for team in teams
        }

        for fixture in fixtures:
            if not fixture.played:
                continue
            home = table.get(fixture.home.id)
            away = table.get(fixture.away.id)
            if home is None or away is None:
                logger.warning(
                    f"Skipping fixture {fixture.id}: team not in the roster"
                )
                continue
            self._apply_result(home, fixture.home_score, fixture.away_score)
            self._apply_result(away, fixture.away_score, fixture.home_score)

        standings = sorted(
            table.values(),
            key=lambda entry: (
                -entry.points,
                -entry.goal_difference,
                -entry.goals_for,
            ),
        )
        for position, entry in enumerate(standings, start=1):
            entry.position = position
        return standings

    @staticmethod
    def _apply_result(
        entry: StandingsEntry, scored: int, conceded: int
    ) -> None:
        entry.played += 1
        entry.goals_for += scored
        entry.goals_against += conceded
        if scored > conceded:
            entry.won += 1
            entry.points += WIN_POINTS
        elif scored == conceded:
            entry.drawn += 1
            entry.points += DRAW_POINTS
        else:
            entry.lost += 1
            entry.points += LOSS_POINTS

    @staticmethod
    def qualification_status(
        position: int, rules: TournamentRules
    ) -> QualificationStatus:
        """Tier that a final league position falls into under ``rules``."""
        if 1 <= position <= rules.auto_qualify_top:
            return QualificationStatus.AUTO_QUALIFIED
        if rules.playoff_positions_start <= position <= rules.playoff_positions_end:
            return QualificationStatus.PLAYOFF
        if position >= rules.elimination_position:
            return QualificationStatus.ELIMINATED
        return QualificationStatus.NONE

    def qualification_table(
        self, standings: Sequence[StandingsEntry], rules: TournamentRules
    ) -> List[Tuple[StandingsEntry, QualificationStatus]]:
        """Pair each standings entry with its qualification tier."""
        return [
            (entry, self.qualification_status(entry.position, rules))
            for entry in standings
        ]
