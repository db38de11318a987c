"""Knockout bracket construction and progression.

The bracket is seeded from a slice of the final league table: the best
qualifier meets the worst, the second best meets the second worst, and so
on. Every later round exists from the start with empty slots that the
advancer fills as results come in.
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

from typing import List, Optional, Sequence

from swissdraw.constants import PLAYOFF_TEAM_COUNT
from swissdraw.models import (
    Bracket,
    PlayoffMatch,
    PlayoffRound,
    StandingsEntry,
    Team,
    TournamentRules,
)
from swissdraw.simulation import MatchSimulator
from swissdraw.utils import setup_logger

logger = setup_logger(__name__)


class PlayoffBracketBuilder:
    """Creates a 16-team single-elimination bracket from the standings."""

    def build(
        self, standings: Sequence[StandingsEntry], rules: TournamentRules
    ) -> Bracket:
        """Build the bracket for the playoff positions of ``rules``.

        Returns an empty bracket with an explanation in ``problems`` when
        fewer than 16 teams occupy the playoff positions.
        """
        start = rules.playoff_positions_start
        end = rules.playoff_positions_end
        qualifiers = list(standings[start - 1 : end])[:PLAYOFF_TEAM_COUNT]

        if len(qualifiers) < PLAYOFF_TEAM_COUNT:
            message = (
                f"Playoff bracket needs {PLAYOFF_TEAM_COUNT} teams in positions "
                f"{start}-{end}, found {len(qualifiers)}"
            )
            logger.warning(message)
            return Bracket(problems=[message])

        matches: List[PlayoffMatch] = []
        playoff_round = PlayoffRound.ROUND_OF_16
        match_count = PLAYOFF_TEAM_COUNT // 2
        while playoff_round is not None:
            next_round = playoff_round.next_round
            for index in range(match_count):
                match = PlayoffMatch(
                    id=playoff_round.match_id(index),
                    round=playoff_round,
                    next_match_id=next_round.match_id(index // 2)
                    if next_round
                    else None,
                )
                if playoff_round is PlayoffRound.ROUND_OF_16:
                    match.home = qualifiers[index].team
                    match.away = qualifiers[PLAYOFF_TEAM_COUNT - 1 - index].team
                matches.append(match)
            playoff_round = next_round
            match_count //= 2

        logger.info(
            f"Built playoff bracket for positions {start}-{end}: "
            f"{len(matches)} matches"
        )
        return Bracket(matches=matches)


class PlayoffAdvancer:
    """Moves knockout winners into the matches they feed."""

    def advance(self, bracket: Bracket, match_id: str) -> Optional[Team]:
        """Place the winner of ``match_id`` into its next match.

        The winner goes into the first empty slot of the next match, home
        before away. Calling this again for the same match changes nothing,
        and after a replay the new winner takes the slot of the old one.

        Returns:
            The winner, or None when the match is unknown, unplayed, missing
            a team, level, or its winner could not be placed
        """
        match = bracket.get(match_id)
        if match is None:
            logger.warning(f"Cannot advance unknown playoff match {match_id}")
            return None
        winner = match.winner
        if winner is None:
            logger.debug(f"Playoff match {match_id} has no winner yet")
            return None
        if match.next_match_id is None:
            logger.info(f"{winner.name} wins the final")
            return winner

        parent = bracket.get(match.next_match_id)
        if parent is None:
            logger.warning(
                f"Playoff match {match_id} points at missing match "
                f"{match.next_match_id}"
            )
            return None
        if winner in (parent.home, parent.away):
            return winner
        # A replayed match may have flipped: the old winner gives way
        loser = match.loser
        if loser is not None and parent.home == loser:
            parent.home = winner
            logger.info(f"{winner.name} replaces {loser.name} in {parent.id}")
            return winner
        if loser is not None and parent.away == loser:
            parent.away = winner
            logger.info(f"{winner.name} replaces {loser.name} in {parent.id}")
            return winner
        if parent.home is None:
            parent.home = winner
        elif parent.away is None:
            parent.away = winner
        else:
            logger.warning(
                f"Cannot advance {winner.name}: {parent.id} already has both teams"
            )
            return None

        logger.debug(f"{winner.name} advances from {match_id} to {parent.id}")
        return winner

    def simulate_round(
        self,
        bracket: Bracket,
        playoff_round: PlayoffRound,
        simulator: MatchSimulator,
        extra_time: bool = True,
    ) -> List[PlayoffMatch]:
        """Simulate every ready match of a round and advance the winners.

        Returns:
            The matches of the round after simulation
        """
        for match in bracket.matches_in_round(playoff_round):
            if not match.is_ready:
                continue
            bracket.replace(simulator.simulate_knockout(match, extra_time))
            self.advance(bracket, match.id)
        logger.info(f"Simulated {playoff_round.display_name}")
        return bracket.matches_in_round(playoff_round)

    def play_out(
        self,
        bracket: Bracket,
        simulator: MatchSimulator,
        extra_time: bool = True,
    ) -> Optional[Team]:
        """Simulate the remaining rounds in order and return the champion."""
        if bracket.is_empty:
            logger.warning("Cannot play out an empty bracket")
            return None
        for playoff_round in PlayoffRound:
            self.simulate_round(bracket, playoff_round, simulator, extra_time)
        return bracket.champion
