"""Manual score entry for Swiss-phase fixtures.

Scores are validated before they are written. Fixtures are immutable, so a
recorded score replaces the fixture at the same index of the caller's list.
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

from typing import Any, List, Optional, Sequence, Tuple

from swissdraw.models import Fixture
from swissdraw.utils import setup_logger
from swissdraw.utils.validation import validate_score

logger = setup_logger(__name__)


class ResultRecorder:
    """Records and clears fixture scores.

    This class is responsible for:
    - Validating entered scores (whole numbers from 0 to 20)
    - Writing scores into the fixture list
    - Resetting fixtures to unplayed
    """

    def record_score(
        self,
        fixtures: List[Fixture],
        fixture_id: str,
        home_score: Any,
        away_score: Any,
    ) -> bool:
        """Record the score of one fixture.

        Args:
            fixtures: Fixture list, updated in place
            fixture_id: Id of the fixture to score
            home_score: Goals of the home team, int or numeric string
            away_score: Goals of the away team, int or numeric string

        Returns:
            True if the score was recorded, False if the fixture is unknown or
            a score is invalid
        """
        index = self._find(fixtures, fixture_id)
        if index is None:
            return False

        home_check = validate_score(home_score)
        away_check = validate_score(away_score)
        for check in (home_check, away_check):
            if not check:
                logger.error(f"Rejected score for {fixture_id}: {check.error_message}")
                return False

        fixture = fixtures[index]
        if fixture.played:
            logger.warning(
                f"{fixture_id} already has a score "
                f"({fixture.home_score}-{fixture.away_score}), overwriting"
            )
        fixtures[index] = fixture.with_score(
            home_check.sanitized_value, away_check.sanitized_value
        )
        logger.debug(f"Recorded {fixtures[index]}")
        return True

    def record_scores(
        self,
        fixtures: List[Fixture],
        results: Sequence[Tuple[str, Any, Any]],
    ) -> bool:
        """Record several scores.

        Args:
            fixtures: Fixture list, updated in place
            results: (fixture_id, home_score, away_score) tuples

        Returns:
            True if every score was recorded, False if any was rejected
        """
        success = True
        seen = set()
        for fixture_id, home_score, away_score in results:
            if fixture_id in seen:
                logger.warning(f"Score for {fixture_id} given twice in this batch")
                success = False
                continue
            if not self.record_score(fixtures, fixture_id, home_score, away_score):
                success = False
                continue
            seen.add(fixture_id)
        return success

    def reset_score(self, fixtures: List[Fixture], fixture_id: str) -> bool:
        """Clear the score of a fixture, marking it unplayed.

        Returns:
            True if the fixture was reset, False if it is unknown or unplayed
        """
        index = self._find(fixtures, fixture_id)
        if index is None:
            return False
        if not fixtures[index].played:
            logger.warning(f"{fixture_id} has no score, nothing to reset")
            return False
        fixtures[index] = fixtures[index].reset()
        logger.debug(f"Reset {fixture_id}")
        return True

    @staticmethod
    def _find(fixtures: Sequence[Fixture], fixture_id: str) -> Optional[int]:
        for index, fixture in enumerate(fixtures):
            if fixture.id == fixture_id:
                return index
        logger.error(f"Fixture {fixture_id} not found")
        return None
