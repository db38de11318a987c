"""Data models for Swiss Draw."""

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

from swissdraw.models.draw_result import DrawProblem, DrawResult, DrawStep, ProblemKind
from swissdraw.models.fixture import Fixture
from swissdraw.models.pairing_history import PairingHistory
from swissdraw.models.playoff import Bracket, Decision, PlayoffMatch, PlayoffRound
from swissdraw.models.rules import TournamentRules
from swissdraw.models.standings import QualificationStatus, StandingsEntry
from swissdraw.models.team import Team

__all__ = [
    "Bracket",
    "Decision",
    "DrawProblem",
    "DrawResult",
    "DrawStep",
    "Fixture",
    "PairingHistory",
    "PlayoffMatch",
    "PlayoffRound",
    "ProblemKind",
    "QualificationStatus",
    "StandingsEntry",
    "Team",
    "TournamentRules",
]
