"""Swiss-phase full draw.

Builds the fixture list for every matchday at once. Each matchday is paired
by a bounded backtracking search that honours every active rule; when no
such pairing exists the rules are relaxed one at a time and every relaxation
and resulting rule violation is reported. Venues are assigned afterwards so
that, with home/away balance on, every team ends with at most one more home
than away game (or the reverse).
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

from collections import Counter, defaultdict
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from swissdraw.constants import (
    DEFAULT_SEARCH_LIMIT,
    RULE_COUNTRY_PROTECTION,
    RULE_NO_REMATCHES,
    RULE_POT_PROTECTION,
)
from swissdraw.models import (
    DrawProblem,
    DrawResult,
    Fixture,
    PairingHistory,
    ProblemKind,
    Team,
    TournamentRules,
)
from swissdraw.type_hints import MatchdayPairs
from swissdraw.utils import setup_logger

logger = setup_logger(__name__)

# Rules dropped, in this order, when a matchday cannot be paired
RELAXATION_ORDER = ("pot_protection", "country_protection", "no_rematches")

_RULE_LABELS = {
    "no_rematches": RULE_NO_REMATCHES,
    "country_protection": RULE_COUNTRY_PROTECTION,
    "pot_protection": RULE_POT_PROTECTION,
}


@dataclass(frozen=True)
class PairingConstraints:
    """Pairing rules active for one matchday search."""

    no_rematches: bool
    country_protection: bool
    pot_protection: bool

    @classmethod
    def from_rules(cls, rules: TournamentRules) -> "PairingConstraints":
        return cls(
            no_rematches=rules.no_rematches,
            country_protection=rules.country_protection,
            pot_protection=rules.pot_protection,
        )

    def without(self, rule: str) -> "PairingConstraints":
        return replace(self, **{rule: False})


class _SearchExhausted(Exception):
    """Internal signal: the backtracking search hit its step limit."""


def pairing_conflicts(
    team1: Team,
    team2: Team,
    matchday: int,
    constraints: PairingConstraints,
    history: PairingHistory,
) -> List[str]:
    """Return the labels of every active rule that pairing the two teams breaks."""
    conflicts = []
    if constraints.no_rematches and history.have_played(team1.id, team2.id):
        conflicts.append(RULE_NO_REMATCHES)
    if constraints.country_protection and team1.country == team2.country:
        conflicts.append(RULE_COUNTRY_PROTECTION)
    if constraints.pot_protection and matchday == 1 and team1.pot == team2.pot:
        conflicts.append(RULE_POT_PROTECTION)
    return conflicts


def check_draw_feasibility(
    teams: Sequence[Team], rules: TournamentRules
) -> List[DrawProblem]:
    """Report requests that cannot produce a legal schedule at all.

    Catches empty or duplicated rosters, rosters too small to give every team
    ``number_of_matchdays`` different opponents, and teams left with too few
    opponents once country protection is applied.
    """
    problems = []
    matchdays = rules.number_of_matchdays

    if len(teams) < 2:
        problems.append(
            DrawProblem(
                ProblemKind.INFEASIBLE,
                f"A draw needs at least 2 teams, got {len(teams)}",
            )
        )
        return problems

    id_counts = Counter(team.id for team in teams)
    duplicates = tuple(sorted(tid for tid, count in id_counts.items() if count > 1))
    if duplicates:
        problems.append(
            DrawProblem(
                ProblemKind.INFEASIBLE,
                f"Duplicate team ids in roster: {', '.join(duplicates)}",
                team_ids=duplicates,
            )
        )
        return problems

    if rules.no_rematches and len(teams) < matchdays + 1:
        problems.append(
            DrawProblem(
                ProblemKind.INFEASIBLE,
                f"{matchdays} matchdays without rematches need at least "
                f"{matchdays + 1} teams, got {len(teams)}",
            )
        )
        return problems

    if rules.country_protection:
        per_country = Counter(team.country for team in teams)
        needed = matchdays if rules.no_rematches else 1
        short = [
            team
            for team in teams
            if len(teams) - per_country[team.country] < needed
        ]
        if short:
            names = ", ".join(team.name for team in short)
            problems.append(
                DrawProblem(
                    ProblemKind.INFEASIBLE,
                    f"Too few opponents from other countries for: {names} "
                    f"(each needs {needed})",
                    team_ids=tuple(team.id for team in short),
                )
            )
    return problems


def incomplete_schedule_problems(
    teams: Sequence[Team], history: PairingHistory, matchdays: int
) -> List[DrawProblem]:
    """One INCOMPLETE_SCHEDULE problem per team drawn on fewer than all matchdays."""
    problems = []
    for team in teams:
        count = history.fixture_count(team.id)
        if count < matchdays:
            problems.append(
                DrawProblem(
                    ProblemKind.INCOMPLETE_SCHEDULE,
                    f"{team.name} has {count} of {matchdays} fixtures",
                    team_ids=(team.id,),
                )
            )
    return problems


def balanced_orientation(edges: Sequence[Tuple[str, str]]) -> List[bool]:
    """Orient undirected edges so every node is within one of balanced.

    Returns one flag per edge: True when the first endpoint hosts. Odd-degree
    nodes are joined to a virtual node so every degree is even; each maximal
    walk over unused edges is then closed, and orienting edges along the walks
    gives every real node ``|out - in| <= 1``.
    """
    virtual = None
    ends: List[Tuple[Optional[str], Optional[str]]] = list(edges)
    incident: Dict[Optional[str], List[int]] = defaultdict(list)
    for index, (first, second) in enumerate(ends):
        incident[first].append(index)
        incident[second].append(index)

    odd_nodes = [node for node, indices in incident.items() if len(indices) % 2]
    for node in odd_nodes:
        incident[node].append(len(ends))
        incident[virtual].append(len(ends))
        ends.append((node, virtual))

    used = [False] * len(ends)
    forward = [True] * len(ends)
    cursor = {node: 0 for node in incident}

    for start in list(incident):
        node = start
        while True:
            indices = incident[node]
            while cursor[node] < len(indices) and used[indices[cursor[node]]]:
                cursor[node] += 1
            if cursor[node] == len(indices):
                break
            edge = indices[cursor[node]]
            used[edge] = True
            first, second = ends[edge]
            if node == first:
                forward[edge] = True
                node = second
            else:
                forward[edge] = False
                node = first

    return forward[: len(edges)]


class PairingEngine:
    """Deterministic Swiss full-draw generator.

    Parameters
    ----------
    search_limit : int
        Maximum backtracking steps per matchday search before the search is
        treated as failed.
    """

    def __init__(self, search_limit: int = DEFAULT_SEARCH_LIMIT) -> None:
        self.search_limit = search_limit

    def conduct_draw(
        self, teams: Sequence[Team], rules: TournamentRules
    ) -> DrawResult:
        """Create the fixtures of every matchday.

        Args:
            teams: The roster, in the order used for first-fit pairing
            rules: Draw rules

        Returns:
            DrawResult with fixtures ordered by matchday and every problem found;
            no fixtures when the request or some matchday is infeasible
        """
        teams = list(teams)
        problems = check_draw_feasibility(teams, rules)
        if problems:
            for problem in problems:
                logger.error(f"Draw rejected: {problem.message}")
            return DrawResult(problems=problems)

        logger.info(
            f"Conducting Swiss draw: {len(teams)} teams, "
            f"{rules.number_of_matchdays} matchdays"
        )

        history = PairingHistory()
        pairings: List[Tuple[Team, Team, int]] = []

        for matchday in range(1, rules.number_of_matchdays + 1):
            matchday_pairs = self._pair_matchday(
                teams, matchday, rules, history, problems
            )
            if matchday_pairs is None:
                return DrawResult(problems=problems)
            for team1, team2 in matchday_pairs:
                history.record_pair(team1.id, team2.id, matchday)
                pairings.append((team1, team2, matchday))

        fixtures = self._assign_venues(pairings, rules, history)
        problems.extend(
            incomplete_schedule_problems(teams, history, rules.number_of_matchdays)
        )

        logger.info(
            f"Swiss draw complete: {len(fixtures)} fixtures, {len(problems)} problems"
        )
        return DrawResult(fixtures=fixtures, problems=problems)

    def _pair_matchday(
        self,
        teams: List[Team],
        matchday: int,
        rules: TournamentRules,
        history: PairingHistory,
        problems: List[DrawProblem],
    ) -> Optional[MatchdayPairs]:
        """Pair one matchday, relaxing rules only when nothing else works.

        Returns None, with an INFEASIBLE problem added, when the matchday
        cannot be paired even with every rule relaxed.
        """
        constraints = PairingConstraints.from_rules(rules)
        pairs = self._search_matching(teams, matchday, constraints, history)
        if pairs is not None:
            return pairs

        for rule in RELAXATION_ORDER:
            if not getattr(constraints, rule):
                continue
            constraints = constraints.without(rule)
            message = (
                f"Matchday {matchday}: no pairing satisfies every rule, "
                f"relaxed {_RULE_LABELS[rule]}"
            )
            logger.warning(message)
            problems.append(
                DrawProblem(ProblemKind.CONSTRAINT_RELAXED, message, matchday)
            )
            pairs = self._search_matching(teams, matchday, constraints, history)
            if pairs is not None:
                break

        if pairs is None:
            message = (
                f"Matchday {matchday} could not be paired with every rule relaxed"
            )
            logger.error(message)
            problems.append(DrawProblem(ProblemKind.INFEASIBLE, message, matchday))
            return None

        strict = PairingConstraints.from_rules(rules)
        for team1, team2 in pairs:
            broken = pairing_conflicts(team1, team2, matchday, strict, history)
            if broken:
                problems.append(
                    DrawProblem(
                        ProblemKind.RULE_VIOLATION,
                        f"Matchday {matchday}: {team1.name} vs {team2.name} "
                        f"breaks {', '.join(broken)}",
                        matchday,
                        (team1.id, team2.id),
                    )
                )
        return pairs

    def _search_matching(
        self,
        teams: List[Team],
        matchday: int,
        constraints: PairingConstraints,
        history: PairingHistory,
    ) -> Optional[MatchdayPairs]:
        """Find a complete pairing of the roster for one matchday.

        With an odd roster one team sits out: the team drawn on the most
        matchdays so far, later roster position first.
        """
        if len(teams) % 2 == 0:
            return self._search_perfect(teams, matchday, constraints, history)

        sit_out_order = sorted(
            range(len(teams)),
            key=lambda i: (-history.fixture_count(teams[i].id), -i),
        )
        for index in sit_out_order:
            pool = teams[:index] + teams[index + 1 :]
            pairs = self._search_perfect(pool, matchday, constraints, history)
            if pairs is not None:
                logger.debug(f"Matchday {matchday}: {teams[index].name} sits out")
                return pairs
        return None

    def _search_perfect(
        self,
        pool: List[Team],
        matchday: int,
        constraints: PairingConstraints,
        history: PairingHistory,
    ) -> Optional[MatchdayPairs]:
        """Backtracking first-fit search for a perfect pairing of ``pool``.

        The first unpaired team is always the candidate and partners are tried
        in pool order, so an unconstrained pool pairs exactly like greedy
        first-fit.
        """
        partners = {
            team.id: [
                other
                for other in pool
                if other.id != team.id
                and not pairing_conflicts(team, other, matchday, constraints, history)
            ]
            for team in pool
        }
        if any(not options for options in partners.values()):
            return None

        paired: Set[str] = set()
        result: MatchdayPairs = []
        steps = 0

        def backtrack(start: int) -> bool:
            nonlocal steps
            steps += 1
            if steps > self.search_limit:
                raise _SearchExhausted()
            index = start
            while index < len(pool) and pool[index].id in paired:
                index += 1
            if index == len(pool):
                return True

            candidate = pool[index]
            paired.add(candidate.id)
            for partner in partners[candidate.id]:
                if partner.id in paired:
                    continue
                paired.add(partner.id)
                result.append((candidate, partner))
                if backtrack(index + 1):
                    return True
                result.pop()
                paired.discard(partner.id)
            paired.discard(candidate.id)
            return False

        try:
            found = backtrack(0)
        except _SearchExhausted:
            logger.warning(
                f"Matchday {matchday}: pairing search gave up after "
                f"{self.search_limit} steps"
            )
            return None
        return list(result) if found else None

    def _assign_venues(
        self,
        pairings: List[Tuple[Team, Team, int]],
        rules: TournamentRules,
        history: PairingHistory,
    ) -> List[Fixture]:
        """Turn pairings into fixtures, deciding who hosts."""
        if rules.home_away_balance:
            hosts_first = balanced_orientation(
                [(team1.id, team2.id) for team1, team2, _ in pairings]
            )
        else:
            hosts_first = [True] * len(pairings)

        fixtures = []
        for (team1, team2, matchday), first_hosts in zip(pairings, hosts_first):
            home, away = (team1, team2) if first_hosts else (team2, team1)
            history.record_venue(home.id, away.id)
            fixtures.append(Fixture(home=home, away=away, matchday=matchday))
        return fixtures
