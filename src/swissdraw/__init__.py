"""Swiss Draw: Swiss-phase draws, simulation, standings and playoffs."""

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

from swissdraw.models import (
    Bracket,
    DrawProblem,
    DrawResult,
    DrawStep,
    Fixture,
    PlayoffMatch,
    PlayoffRound,
    ProblemKind,
    StandingsEntry,
    Team,
    TournamentRules,
)
from swissdraw.pairing import PairingEngine, SequentialDrawEngine
from swissdraw.simulation import MatchSimulator
from swissdraw.tournament import (
    PlayoffAdvancer,
    PlayoffBracketBuilder,
    ResultRecorder,
    StandingsCalculator,
    Tournament,
)

__version__ = "0.1.0"

__all__ = [
    "Bracket",
    "DrawProblem",
    "DrawResult",
    "DrawStep",
    "Fixture",
    "MatchSimulator",
    "PairingEngine",
    "PlayoffAdvancer",
    "PlayoffBracketBuilder",
    "PlayoffMatch",
    "PlayoffRound",
    "ProblemKind",
    "ResultRecorder",
    "SequentialDrawEngine",
    "StandingsCalculator",
    "StandingsEntry",
    "Team",
    "Tournament",
    "TournamentRules",
]
