"""Validation utilities for rules, rosters and scores.

Each ``validate_*`` function returns a :class:`ValidationResult`; the
``*_strict`` variants raise instead.
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

from collections import Counter
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from swissdraw.constants import (
    AUTO_QUALIFY_TOP_RANGE,
    ELIMINATION_POSITION_RANGE,
    MATCHDAYS_RANGE,
    MAX_RECORDED_SCORE,
    MAX_TEAMS_PER_COUNTRY_RANGE,
    MIN_ROSTER_SIZE,
    PLAYOFF_END_RANGE,
    PLAYOFF_START_RANGE,
    POTS,
)
from swissdraw.exceptions import (
    InvalidConfigurationException,
    InvalidResultException,
    InvalidRosterException,
)

if TYPE_CHECKING:
    from swissdraw.models.rules import TournamentRules
    from swissdraw.models.team import Team


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
        errors: Every individual problem found
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
        errors: Optional[List[str]] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value
        self.errors = errors if errors is not None else []
        if error_message and not self.errors:
            self.errors = [error_message]

    @classmethod
    def from_errors(
        cls, errors: List[str], sanitized_value: Any = None
    ) -> "ValidationResult":
        """Build a result that is valid exactly when ``errors`` is empty."""
        if errors:
            return cls(is_valid=False, error_message="; ".join(errors), errors=errors)
        return cls(is_valid=True, sanitized_value=sanitized_value)

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _check_range(name: str, value: int, bounds: Tuple[int, int]) -> Optional[str]:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        return f"{name} must be an integer, got {value!r}"
    if not low <= value <= high:
        return f"{name} must be between {low} and {high}, got {value}"
    return None


# ========== Rules Validation ==========


def validate_rules(rules: "TournamentRules") -> ValidationResult:
    """Validate every field of a rules configuration.

    Args:
        rules: Rules to validate

    Returns:
        ValidationResult whose ``errors`` list every out-of-range field
    """
    errors = []
    for name, value, bounds in (
        ("number_of_matchdays", rules.number_of_matchdays, MATCHDAYS_RANGE),
        (
            "max_teams_per_country",
            rules.max_teams_per_country,
            MAX_TEAMS_PER_COUNTRY_RANGE,
        ),
        ("auto_qualify_top", rules.auto_qualify_top, AUTO_QUALIFY_TOP_RANGE),
        (
            "playoff_positions_start",
            rules.playoff_positions_start,
            PLAYOFF_START_RANGE,
        ),
        ("playoff_positions_end", rules.playoff_positions_end, PLAYOFF_END_RANGE),
        (
            "elimination_position",
            rules.elimination_position,
            ELIMINATION_POSITION_RANGE,
        ),
    ):
        error = _check_range(name, value, bounds)
        if error:
            errors.append(error)

    if not errors:
        if rules.playoff_positions_start > rules.playoff_positions_end:
            errors.append(
                "playoff_positions_start must not be after playoff_positions_end"
            )
        if rules.auto_qualify_top >= rules.playoff_positions_start:
            errors.append("auto_qualify_top must end before the playoff positions")
        if rules.elimination_position <= rules.playoff_positions_end:
            errors.append("elimination_position must come after the playoff positions")

    return ValidationResult.from_errors(errors, sanitized_value=rules)


def validate_rules_strict(rules: "TournamentRules") -> None:
    """Validate rules and raise exception if invalid.

    Raises:
        InvalidConfigurationException: If any field is out of range
    """
    result = validate_rules(rules)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)


# ========== Roster Validation ==========


def validate_roster(
    teams: Sequence["Team"],
    max_teams_per_country: Optional[int] = None,
    min_teams: int = MIN_ROSTER_SIZE,
) -> ValidationResult:
    """Validate a roster before a draw.

    Checks unique ids, pot values, the minimum roster size and, when given,
    the per-country cap.
    """
    errors = []
    if len(teams) < min_teams:
        errors.append(f"At least {min_teams} teams are required, got {len(teams)}")

    id_counts = Counter(team.id for team in teams)
    duplicates = sorted(team_id for team_id, count in id_counts.items() if count > 1)
    if duplicates:
        errors.append(f"Duplicate team ids: {', '.join(duplicates)}")

    for team in teams:
        if team.pot not in POTS:
            errors.append(f"{team.name} has invalid pot {team.pot!r}")
        if not team.name.strip() or not team.country.strip():
            errors.append(f"Team {team.id} is missing a name or country")

    if max_teams_per_country is not None:
        per_country = Counter(team.country for team in teams)
        for country, count in sorted(per_country.items()):
            if count > max_teams_per_country:
                errors.append(
                    f"{country} has {count} teams, "
                    f"the limit is {max_teams_per_country}"
                )

    return ValidationResult.from_errors(errors, sanitized_value=list(teams))


def validate_roster_strict(
    teams: Sequence["Team"],
    max_teams_per_country: Optional[int] = None,
    min_teams: int = MIN_ROSTER_SIZE,
) -> None:
    """Validate a roster and raise exception if invalid.

    Raises:
        InvalidRosterException: If the roster breaks a roster rule
    """
    result = validate_roster(teams, max_teams_per_country, min_teams)
    if not result.is_valid:
        raise InvalidRosterException(result.error_message)


# ========== Score Validation ==========


def validate_score(value: Any) -> ValidationResult:
    """Validate a manually entered goal count.

    Accepts integers and integer strings between 0 and MAX_RECORDED_SCORE.
    """
    if isinstance(value, bool):
        return ValidationResult(False, f"Invalid score: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value.lstrip("-").isdigit():
            return ValidationResult(False, f"Invalid score: {value!r}")
        value = int(value)
    if not isinstance(value, int):
        return ValidationResult(False, f"Invalid score: {value!r}")
    if value < 0:
        return ValidationResult(False, "Scores cannot be negative")
    if value > MAX_RECORDED_SCORE:
        return ValidationResult(
            False, f"Score {value} seems unrealistic (max {MAX_RECORDED_SCORE})"
        )
    return ValidationResult(True, sanitized_value=value)


def validate_score_strict(value: Any) -> int:
    """Validate a goal count and return it as an int.

    Raises:
        InvalidResultException: If the score is not acceptable
    """
    result = validate_score(value)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value
