"""Fixture-list compliance checking.

Runs a finished Swiss-phase schedule through every structural check and
every draw rule that is switched on, and summarises the outcome as a
:class:`ValidationReport`. Structural and rule criteria are hard failures;
balance and completeness criteria are reported as quality warnings.
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
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from swissdraw.models import Fixture, Team, TournamentRules
from swissdraw.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a schedule criterion."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """How serious a failed criterion is."""

    STRUCTURAL = "STRUCTURAL"  # S1-S3: the schedule is malformed
    RULE = "RULE"  # R1-R4: a switched-on draw rule is broken
    QUALITY = "QUALITY"  # Q1-Q2: legal but unbalanced or incomplete


@dataclass
class CriterionResult:
    """Result of checking a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def criterion_id(self) -> str:
        return self.criterion.split(":")[0].strip()

    @property
    def message(self) -> str:
        return self.description


@dataclass
class ValidationReport:
    """Complete validation report for a schedule."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        applicable = [
            result
            for result in self.criteria_results
            if result.status != CriterionStatus.NOT_APPLICABLE
        ]
        if not applicable:
            return 100.0
        return (self.compliant_count / len(applicable)) * 100.0

    @property
    def is_compliant(self) -> bool:
        return self.overall_status == CriterionStatus.COMPLIANT


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.COMPLIANT,
        description=description,
    )


def _not_applicable(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.NOT_APPLICABLE,
        description=description,
    )


def _violation(
    criterion: str,
    violation_type: ViolationType,
    offenders: List[str],
    label: str,
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=f"{label}: {len(offenders)} found",
        details={"offenders": offenders},
    )


class ScheduleValidator:
    """Checks a Swiss-phase fixture list against its rules."""

    def validate(
        self,
        fixtures: Sequence[Fixture],
        teams: Sequence[Team],
        rules: TournamentRules,
    ) -> ValidationReport:
        """Validate a complete schedule.

        Args:
            fixtures: Every fixture of the Swiss phase
            teams: The roster the schedule was drawn for
            rules: Rules the schedule was drawn under

        Returns:
            ValidationReport listing the result of every criterion
        """
        logger.info(
            f"Validating schedule: {len(fixtures)} fixtures, {len(teams)} teams"
        )
        home_counts = Counter(fixture.home.id for fixture in fixtures)
        away_counts = Counter(fixture.away.id for fixture in fixtures)

        results = [
            self.check_self_pairings(fixtures),
            self.check_once_per_matchday(fixtures),
            self.check_known_teams(fixtures, teams),
            self.check_no_rematches(fixtures, rules),
            self.check_country_protection(fixtures, rules),
            self.check_pot_protection(fixtures, rules),
            self.check_home_away_cap(teams, rules, home_counts, away_counts),
            self.check_home_away_balance(teams, rules, home_counts, away_counts),
            self.check_fixture_counts(fixtures, teams, rules),
        ]

        compliant_count = sum(
            1 for result in results if result.status == CriterionStatus.COMPLIANT
        )
        violations = [
            result
            for result in results
            if result.status == CriterionStatus.VIOLATION
            and result.violation_type != ViolationType.QUALITY
        ]
        quality_warnings = [
            result
            for result in results
            if result.status == CriterionStatus.VIOLATION
            and result.violation_type == ViolationType.QUALITY
        ]
        overall_status = (
            CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT
        )
        if violations:
            summary = (
                f"{len(violations)} criteria failed; "
                f"{len(quality_warnings)} quality warnings"
            )
        else:
            summary = (
                f"All rules satisfied; {len(quality_warnings)} quality "
                "criteria flagged"
            )

        logger.info(f"Schedule validation complete: {summary}")
        return ValidationReport(
            total_criteria=len(results),
            compliant_count=compliant_count,
            violations=violations,
            overall_status=overall_status,
            summary=summary,
            quality_warnings=quality_warnings,
            criteria_results=results,
        )

    # ========== Structural criteria ==========

    def check_self_pairings(self, fixtures: Sequence[Fixture]) -> CriterionResult:
        """S1: No team is paired with itself."""
        offenders = [f.id for f in fixtures if f.home.id == f.away.id]
        if offenders:
            return _violation(
                "S1", ViolationType.STRUCTURAL, offenders, "Self-pairings"
            )
        return _compliant("S1", "No self-pairings")

    def check_once_per_matchday(self, fixtures: Sequence[Fixture]) -> CriterionResult:
        """S2: No team plays twice on the same matchday."""
        appearances = Counter()
        for fixture in fixtures:
            appearances[(fixture.home.id, fixture.matchday)] += 1
            appearances[(fixture.away.id, fixture.matchday)] += 1
        offenders = sorted(
            f"{team_id}@{matchday}"
            for (team_id, matchday), count in appearances.items()
            if count > 1
        )
        if offenders:
            return _violation(
                "S2",
                ViolationType.STRUCTURAL,
                offenders,
                "Teams playing twice on a matchday",
            )
        return _compliant("S2", "Every team plays at most once per matchday")

    def check_known_teams(
        self, fixtures: Sequence[Fixture], teams: Sequence[Team]
    ) -> CriterionResult:
        """S3: Every fixture names rostered teams only."""
        roster = {team.id for team in teams}
        offenders = [
            fixture.id
            for fixture in fixtures
            if fixture.home.id not in roster or fixture.away.id not in roster
        ]
        if offenders:
            return _violation(
                "S3", ViolationType.STRUCTURAL, offenders, "Fixtures with unknown teams"
            )
        return _compliant("S3", "All fixtures use rostered teams")

    # ========== Rule criteria ==========

    def check_no_rematches(
        self, fixtures: Sequence[Fixture], rules: TournamentRules
    ) -> CriterionResult:
        """R1: No pair of teams meets twice."""
        if not rules.no_rematches:
            return _not_applicable("R1", "Rematches are allowed")
        pair_counts = Counter(fixture.pair for fixture in fixtures)
        offenders = sorted(
            "-".join(sorted(pair)) for pair, count in pair_counts.items() if count > 1
        )
        if offenders:
            return _violation("R1", ViolationType.RULE, offenders, "Repeated pairings")
        return _compliant("R1", "No repeated pairings")

    def check_country_protection(
        self, fixtures: Sequence[Fixture], rules: TournamentRules
    ) -> CriterionResult:
        """R2: Teams from the same country never meet."""
        if not rules.country_protection:
            return _not_applicable("R2", "Country protection is off")
        offenders = [
            fixture.id
            for fixture in fixtures
            if fixture.home.country == fixture.away.country
        ]
        if offenders:
            return _violation(
                "R2", ViolationType.RULE, offenders, "Same-country fixtures"
            )
        return _compliant("R2", "No same-country fixtures")

    def check_pot_protection(
        self, fixtures: Sequence[Fixture], rules: TournamentRules
    ) -> CriterionResult:
        """R3: No same-pot fixture on matchday 1."""
        if not rules.pot_protection:
            return _not_applicable("R3", "Pot protection is off")
        offenders = [
            fixture.id
            for fixture in fixtures
            if fixture.matchday == 1 and fixture.home.pot == fixture.away.pot
        ]
        if offenders:
            return _violation(
                "R3", ViolationType.RULE, offenders, "Same-pot fixtures on matchday 1"
            )
        return _compliant("R3", "No same-pot fixtures on matchday 1")

    def check_home_away_cap(
        self,
        teams: Sequence[Team],
        rules: TournamentRules,
        home_counts: Counter,
        away_counts: Counter,
    ) -> CriterionResult:
        """R4: No team exceeds the home or away cap."""
        if not rules.home_away_balance:
            return _not_applicable("R4", "Home/away balance is off")
        cap = rules.home_away_cap
        offenders = [
            team.id
            for team in teams
            if home_counts[team.id] > cap or away_counts[team.id] > cap
        ]
        if offenders:
            return _violation(
                "R4", ViolationType.RULE, offenders, f"Teams over the cap of {cap}"
            )
        return _compliant("R4", f"Every team within the cap of {cap}")

    # ========== Quality criteria ==========

    def check_home_away_balance(
        self,
        teams: Sequence[Team],
        rules: TournamentRules,
        home_counts: Counter,
        away_counts: Counter,
    ) -> CriterionResult:
        """Q1: Home and away games differ by at most one per team."""
        if not rules.home_away_balance:
            return _not_applicable("Q1", "Home/away balance is off")
        offenders = [
            team.id
            for team in teams
            if abs(home_counts[team.id] - away_counts[team.id]) > 1
        ]
        if offenders:
            return _violation(
                "Q1", ViolationType.QUALITY, offenders, "Unbalanced teams"
            )
        return _compliant("Q1", "Every team is home/away balanced")

    def check_fixture_counts(
        self,
        fixtures: Sequence[Fixture],
        teams: Sequence[Team],
        rules: TournamentRules,
    ) -> CriterionResult:
        """Q2: Every team has one fixture per matchday."""
        counts = Counter()
        for fixture in fixtures:
            counts[fixture.home.id] += 1
            counts[fixture.away.id] += 1
        offenders = [
            team.id
            for team in teams
            if counts[team.id] != rules.number_of_matchdays
        ]
        if offenders:
            return _violation(
                "Q2", ViolationType.QUALITY, offenders, "Teams with incomplete schedules"
            )
        return _compliant(
            "Q2", f"Every team has {rules.number_of_matchdays} fixtures"
        )
