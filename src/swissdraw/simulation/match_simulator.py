"""Coefficient-weighted match outcome simulation.

Swiss-phase fixtures and knockout matches are simulated from team
coefficients with a fixed home advantage. All randomness comes from one
``random.Random`` so a seeded simulator replays the same scores.
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
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from swissdraw.constants import (
    AWAY_WIN_BAND,
    HOME_ADVANTAGE,
    HOME_WIN_BAND,
    KNOCKOUT_HOME_ADVANTAGE,
    MAX_REGULATION_GOALS,
)
from swissdraw.models import Decision, Fixture, PlayoffMatch, Team
from swissdraw.utils import setup_logger

logger = setup_logger(__name__)


def home_win_probability(home: Team, away: Team, home_advantage: float) -> float:
    """Share of the combined strength held by the home side.

    Falls back to an even 0.5 when the combined strength is not positive.
    """
    home_strength = home.coefficient + home_advantage
    total = home_strength + away.coefficient
    if total <= 0:
        return 0.5
    return home_strength / total


class MatchSimulator:
    """Simulates Swiss-phase fixtures and knockout matches.

    Parameters
    ----------
    rng : random.Random, optional
        Source of randomness. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a private generator when no ``rng`` is given.
    """

    def __init__(
        self, rng: Optional[random.Random] = None, seed: Optional[int] = None
    ) -> None:
        self.random = rng if rng is not None else random.Random(seed)

    def simulate(
        self, fixture: Fixture, allow_draws: bool = True, overwrite: bool = False
    ) -> Fixture:
        """Return a played copy of ``fixture``.

        Args:
            fixture: Fixture to simulate
            allow_draws: When False a level score is broken by one extra goal
            overwrite: Re-simulate a fixture that already has a score

        Returns:
            The played fixture, or the input unchanged if it was already
            played and ``overwrite`` is False
        """
        if fixture.played and not overwrite:
            logger.debug(f"{fixture.id} already played, keeping its score")
            return fixture

        p = home_win_probability(fixture.home, fixture.away, HOME_ADVANTAGE)
        roll = self.random.random()

        if roll < p * HOME_WIN_BAND:
            home_score, away_score = self._decisive_score()
        elif roll > p * AWAY_WIN_BAND:
            away_score, home_score = self._decisive_score()
        else:
            goals = self.random.randint(0, MAX_REGULATION_GOALS)
            home_score = away_score = goals
            if not allow_draws:
                if self.random.random() < p:
                    home_score += 1
                else:
                    away_score += 1

        played = fixture.with_score(home_score, away_score)
        logger.debug(f"Simulated {played}")
        return played

    def _decisive_score(self) -> Tuple[int, int]:
        """Winner scores 1..3, loser strictly fewer."""
        winner_goals = self.random.randint(1, MAX_REGULATION_GOALS)
        return winner_goals, self.random.randint(0, winner_goals - 1)

    def simulate_matchday(
        self,
        fixtures: Sequence[Fixture],
        matchday: int,
        allow_draws: bool = True,
        overwrite: bool = False,
    ) -> List[Fixture]:
        """Return a new fixture list with every fixture of ``matchday`` simulated."""
        simulated = [
            self.simulate(fixture, allow_draws, overwrite)
            if fixture.matchday == matchday
            else fixture
            for fixture in fixtures
        ]
        logger.info(f"Simulated matchday {matchday}")
        return simulated

    def simulate_all(
        self,
        fixtures: Sequence[Fixture],
        allow_draws: bool = True,
        overwrite: bool = False,
    ) -> List[Fixture]:
        """Return a new fixture list with every fixture simulated."""
        simulated = [
            self.simulate(fixture, allow_draws, overwrite) for fixture in fixtures
        ]
        logger.info(f"Simulated {len(simulated)} fixtures")
        return simulated

    def simulate_knockout(
        self, match: PlayoffMatch, extra_time: bool = True, overwrite: bool = False
    ) -> PlayoffMatch:
        """Return a played copy of a knockout match. The score is never level.

        A level score after regulation gets one decisive goal. ``extra_time``
        only controls whether that goal is recorded as extra time or as a
        penalty shoot-out.
        """
        if not match.is_ready:
            logger.debug(f"Knockout match {match.id} is missing a team, skipping")
            return match
        if match.played and not overwrite:
            logger.debug(f"Knockout match {match.id} already played")
            return match

        p = home_win_probability(match.home, match.away, KNOCKOUT_HOME_ADVANTAGE)
        home_score = self.random.randint(0, MAX_REGULATION_GOALS) + (
            1 if self.random.random() < p else 0
        )
        away_score = self.random.randint(0, MAX_REGULATION_GOALS) + (
            1 if self.random.random() < 1 - p else 0
        )

        decided_by = Decision.REGULATION
        if home_score == away_score:
            if self.random.random() < p:
                home_score += 1
            else:
                away_score += 1
            decided_by = Decision.EXTRA_TIME if extra_time else Decision.PENALTIES

        played = replace(
            match,
            home_score=home_score,
            away_score=away_score,
            played=True,
            decided_by=decided_by,
        )
        logger.debug(
            f"Simulated {match.id}: {match.home.name} {home_score}-{away_score} "
            f"{match.away.name} ({decided_by.value})"
        )
        return played
