"""Main Tournament class - orchestrates the Swiss phase and the playoffs.

This is the primary interface for running a competition end to end: draw,
results, standings and the knockout bracket.
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
from typing import Any, Dict, List, Optional, Tuple

from swissdraw.exceptions import (
    FixtureNotFoundException,
    TournamentStateException,
)
from swissdraw.models import (
    Bracket,
    DrawResult,
    Fixture,
    PlayoffMatch,
    PlayoffRound,
    QualificationStatus,
    StandingsEntry,
    Team,
    TournamentRules,
)
from swissdraw.pairing import PairingEngine, SequentialDrawEngine
from swissdraw.simulation import MatchSimulator
from swissdraw.tournament.playoff_bracket import PlayoffAdvancer, PlayoffBracketBuilder
from swissdraw.tournament.result_recorder import ResultRecorder
from swissdraw.tournament.standings_calculator import StandingsCalculator
from swissdraw.utils import setup_logger
from swissdraw.utils.validation import (
    ValidationResult,
    validate_roster,
    validate_rules_strict,
)

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized
    components:
    - PairingEngine / SequentialDrawEngine: the Swiss-phase draw
    - MatchSimulator: simulated results
    - ResultRecorder: manual score entry
    - StandingsCalculator: the league table
    - PlayoffBracketBuilder / PlayoffAdvancer: the knockout stage
    """

    def __init__(
        self,
        name: str,
        teams: List[Team],
        rules: Optional[TournamentRules] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize a new tournament.

        Args
        ----
        name: Tournament name
        teams: Participating teams, in roster order
        rules: Draw and qualification rules, defaults when omitted
        seed: Seed shared by the sequential draw and the simulator

        Raises
        ------
        InvalidConfigurationException: If the rules are out of range
        """
        self.name = name
        self.teams: List[Team] = list(teams)
        self.rules = rules if rules is not None else TournamentRules()
        validate_rules_strict(self.rules)

        self.fixtures: List[Fixture] = []
        self.bracket: Optional[Bracket] = None
        self.last_draw: Optional[DrawResult] = None

        self.random = random.Random(seed)
        self.simulator = MatchSimulator(rng=self.random)
        self.result_recorder = ResultRecorder()
        self.standings_calculator = StandingsCalculator()
        self.bracket_builder = PlayoffBracketBuilder()
        self.advancer = PlayoffAdvancer()

    # ========== Roster ==========

    def get_team(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def validate_roster(self) -> ValidationResult:
        """Check the roster against the roster rules (size, ids, pots, countries)."""
        return validate_roster(self.teams, self.rules.max_teams_per_country)

    # ========== Draw ==========

    def conduct_draw(self, sequential: bool = False, force: bool = False) -> DrawResult:
        """Draw the Swiss-phase fixtures, replacing any previous draw.

        Args:
            sequential: Use the ceremony-ordered random draw instead of the
                deterministic full draw
            force: Redraw even if scores have already been recorded

        Raises:
            TournamentStateException: If scores exist and ``force`` is False
        """
        if any(fixture.played for fixture in self.fixtures) and not force:
            raise TournamentStateException(
                "Scores have already been recorded, redraw with force=True"
            )

        if sequential:
            engine = SequentialDrawEngine(rng=self.random)
        else:
            engine = PairingEngine()
        result = engine.conduct_draw(self.teams, self.rules)

        self.fixtures = list(result.fixtures)
        self.bracket = None
        self.last_draw = result
        if result.problems:
            logger.warning(
                f"{self.name}: draw finished with {len(result.problems)} problems"
            )
        logger.info(f"{self.name}: drew {len(self.fixtures)} fixtures")
        return result

    def fixtures_for_matchday(self, matchday: int) -> List[Fixture]:
        return [fixture for fixture in self.fixtures if fixture.matchday == matchday]

    def get_fixture(self, fixture_id: str) -> Fixture:
        """Return the fixture with ``fixture_id``.

        Raises:
            FixtureNotFoundException: If no fixture has that id
        """
        for fixture in self.fixtures:
            if fixture.id == fixture_id:
                return fixture
        raise FixtureNotFoundException(f"No fixture with id {fixture_id}")

    # ========== Results ==========

    def simulate_matchday(self, matchday: int) -> List[Fixture]:
        """Simulate every unplayed fixture of a matchday."""
        self._require_fixtures()
        self.fixtures = self.simulator.simulate_matchday(
            self.fixtures, matchday, self.rules.allow_draws
        )
        return self.fixtures_for_matchday(matchday)

    def simulate_all(self) -> List[Fixture]:
        """Simulate every unplayed fixture."""
        self._require_fixtures()
        self.fixtures = self.simulator.simulate_all(
            self.fixtures, self.rules.allow_draws
        )
        return self.fixtures

    def record_score(self, fixture_id: str, home_score: Any, away_score: Any) -> bool:
        """Record a manually entered score.

        A playoff bracket seeded from the old standings is discarded.

        Returns:
            True if recorded, False if a score was rejected

        Raises:
            FixtureNotFoundException: If no fixture has that id
        """
        self.get_fixture(fixture_id)
        recorded = self.result_recorder.record_score(
            self.fixtures, fixture_id, home_score, away_score
        )
        if recorded:
            self._discard_bracket()
        return recorded

    def reset_score(self, fixture_id: str) -> bool:
        """Mark a fixture unplayed again.

        Raises:
            FixtureNotFoundException: If no fixture has that id
        """
        self.get_fixture(fixture_id)
        reset = self.result_recorder.reset_score(self.fixtures, fixture_id)
        if reset:
            self._discard_bracket()
        return reset

    @property
    def swiss_phase_complete(self) -> bool:
        return bool(self.fixtures) and all(
            fixture.played for fixture in self.fixtures
        )

    # ========== Standings ==========

    def standings(self) -> List[StandingsEntry]:
        """Current league table."""
        return self.standings_calculator.calculate(self.teams, self.fixtures)

    def qualification_table(
        self,
    ) -> List[Tuple[StandingsEntry, QualificationStatus]]:
        return self.standings_calculator.qualification_table(
            self.standings(), self.rules
        )

    # ========== Playoffs ==========

    def build_playoffs(self) -> Bracket:
        """Seed the knockout bracket from the current standings.

        Raises:
            TournamentStateException: If no fixtures have been drawn
        """
        self._require_fixtures()
        if not self.swiss_phase_complete:
            logger.warning(
                f"{self.name}: building playoffs before every fixture is played"
            )
        self.bracket = self.bracket_builder.build(self.standings(), self.rules)
        return self.bracket

    def simulate_playoff_round(self, playoff_round: PlayoffRound) -> List[PlayoffMatch]:
        """Simulate one knockout round and advance its winners.

        Raises:
            TournamentStateException: If the bracket has not been built
        """
        bracket = self._require_bracket()
        return self.advancer.simulate_round(
            bracket, playoff_round, self.simulator, self.rules.extra_time_in_knockout
        )

    def play_out_playoffs(self) -> Optional[Team]:
        """Simulate the rest of the knockout stage and return the champion.

        Raises:
            TournamentStateException: If the bracket has not been built
        """
        bracket = self._require_bracket()
        champion = self.advancer.play_out(
            bracket, self.simulator, self.rules.extra_time_in_knockout
        )
        if champion is not None:
            logger.info(f"{self.name}: {champion.name} are champions")
        return champion

    @property
    def champion(self) -> Optional[Team]:
        return self.bracket.champion if self.bracket else None

    def _discard_bracket(self) -> None:
        if self.bracket is not None:
            logger.warning(
                f"{self.name}: standings changed, discarding the playoff bracket"
            )
            self.bracket = None

    def _require_fixtures(self) -> None:
        if not self.fixtures:
            raise TournamentStateException("No fixtures, conduct the draw first")

    def _require_bracket(self) -> Bracket:
        if self.bracket is None:
            raise TournamentStateException("No playoff bracket, build it first")
        return self.bracket

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "name": self.name,
            "rules": self.rules.to_dict(),
            "teams": [team.to_dict() for team in self.teams],
            "fixtures": [fixture.to_dict() for fixture in self.fixtures],
            "bracket": self.bracket.to_dict() if self.bracket else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        teams = [Team.from_dict(team_data) for team_data in data["teams"]]
        tournament = cls(
            name=data.get("name", "Tournament"),
            teams=teams,
            rules=TournamentRules.from_dict(data.get("rules", {})),
        )
        by_id = {team.id: team for team in teams}
        tournament.fixtures = [
            Fixture.from_dict(fixture_data, by_id)
            for fixture_data in data.get("fixtures", [])
        ]
        if data.get("bracket"):
            tournament.bracket = Bracket.from_dict(data["bracket"], by_id)

        logger.info(f"Loaded tournament: {tournament.name}")
        return tournament
