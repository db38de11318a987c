"""Ceremony-ordered Swiss draw.

Teams are taken pot by pot and each one draws its opponent for every
matchday in turn, exactly as in a live draw. The outcome is a list of
:class:`DrawStep` records in reveal order together with the fixtures.
"""

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

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from swissdraw.constants import DEFAULT_DRAW_ATTEMPTS
from swissdraw.models import (
    DrawProblem,
    DrawResult,
    DrawStep,
    Fixture,
    PairingHistory,
    ProblemKind,
    Team,
    TournamentRules,
)
from swissdraw.pairing.swiss_draw import (
    PairingConstraints,
    check_draw_feasibility,
    incomplete_schedule_problems,
    pairing_conflicts,
)
from swissdraw.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class _Attempt:
    """State of one pass of the ceremony."""

    fixtures: List[Fixture] = field(default_factory=list)
    steps: List[DrawStep] = field(default_factory=list)
    skipped: List[DrawProblem] = field(default_factory=list)
    history: PairingHistory = field(default_factory=PairingHistory)


class SequentialDrawEngine:
    """Randomised draw that records every reveal in ceremony order.

    Parameters
    ----------
    rng : random.Random, optional
        Source of randomness. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a private generator when no ``rng`` is given.
    max_attempts : int
        How many times the whole ceremony is re-run looking for a complete
        schedule before the best attempt is returned.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_attempts: int = DEFAULT_DRAW_ATTEMPTS,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_attempts = max(1, max_attempts)

    def conduct_draw(
        self, teams: Sequence[Team], rules: TournamentRules
    ) -> DrawResult:
        """Run the ceremony and return fixtures, steps and problems."""
        teams = list(teams)
        problems = check_draw_feasibility(teams, rules)
        if problems:
            for problem in problems:
                logger.error(f"Sequential draw rejected: {problem.message}")
            return DrawResult(problems=problems)

        # Stable, so roster order is kept inside a pot
        draw_order = sorted(teams, key=lambda team: team.pot)

        best: Optional[_Attempt] = None
        for attempt_number in range(1, self.max_attempts + 1):
            attempt = self._run_ceremony(draw_order, rules)
            if not attempt.skipped:
                logger.info(
                    f"Sequential draw complete on attempt {attempt_number}: "
                    f"{len(attempt.fixtures)} fixtures"
                )
                best = attempt
                break
            logger.debug(
                f"Sequential draw attempt {attempt_number} skipped "
                f"{len(attempt.skipped)} slots"
            )
            if best is None or len(attempt.skipped) < len(best.skipped):
                best = attempt
        else:
            logger.warning(
                f"No complete sequential draw in {self.max_attempts} attempts, "
                f"keeping the best one ({len(best.skipped)} skipped slots)"
            )
            for problem in best.skipped:
                logger.warning(problem.message)

        problems = list(best.skipped)
        problems.extend(
            incomplete_schedule_problems(
                teams, best.history, rules.number_of_matchdays
            )
        )
        fixtures = sorted(best.fixtures, key=lambda fixture: fixture.matchday)
        return DrawResult(fixtures=fixtures, problems=problems, steps=best.steps)

    def _run_ceremony(
        self, draw_order: List[Team], rules: TournamentRules
    ) -> _Attempt:
        attempt = _Attempt()
        constraints = PairingConstraints.from_rules(rules)
        cap = rules.home_away_cap
        # (team id, matchday) -> fixture already holding that slot
        slots: Dict[tuple, Fixture] = {}

        for team in draw_order:
            for matchday in range(1, rules.number_of_matchdays + 1):
                existing = slots.get((team.id, matchday))
                if existing is not None:
                    attempt.steps.append(
                        DrawStep(
                            team=team,
                            opponent=existing.opponent_of(team.id),
                            matchday=matchday,
                            is_home=existing.home.id == team.id,
                            fixture_id=existing.id,
                        )
                    )
                    continue

                eligible = [
                    other
                    for other in draw_order
                    if other.id != team.id
                    and not attempt.history.is_busy(other.id, matchday)
                    and not pairing_conflicts(
                        team, other, matchday, constraints, attempt.history
                    )
                    and (
                        not rules.home_away_balance
                        or attempt.history.can_host(team.id, other.id, cap)
                        or attempt.history.can_host(other.id, team.id, cap)
                    )
                ]
                if not eligible:
                    message = (
                        f"Matchday {matchday}: no eligible opponent left for "
                        f"{team.name}"
                    )
                    logger.debug(message)
                    attempt.skipped.append(
                        DrawProblem(
                            ProblemKind.SLOT_SKIPPED, message, matchday, (team.id,)
                        )
                    )
                    continue

                opponent = self.rng.choice(eligible)
                team_hosts = self._team_hosts(team, opponent, cap, attempt.history)
                home, away = (team, opponent) if team_hosts else (opponent, team)
                fixture = Fixture(home=home, away=away, matchday=matchday)

                attempt.history.add_pairing(home.id, away.id, matchday)
                slots[(home.id, matchday)] = fixture
                slots[(away.id, matchday)] = fixture
                attempt.fixtures.append(fixture)
                attempt.steps.append(
                    DrawStep(
                        team=team,
                        opponent=opponent,
                        matchday=matchday,
                        is_home=team_hosts,
                        fixture_id=fixture.id,
                    )
                )
                logger.debug(f"Drew {fixture}")

        return attempt

    @staticmethod
    def _team_hosts(
        team: Team, opponent: Team, cap: int, history: PairingHistory
    ) -> bool:
        """Decide whether the drawing team hosts its freshly drawn opponent."""
        if history.can_host(team.id, opponent.id, cap):
            return True
        if history.can_host(opponent.id, team.id, cap):
            return False
        return history.home_counts[team.id] <= history.home_counts[opponent.id]
