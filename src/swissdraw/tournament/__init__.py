"""Tournament management for Swiss Draw.

Standings, manual results, the knockout bracket and the orchestrating
Tournament class.
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

from swissdraw.tournament.playoff_bracket import PlayoffAdvancer, PlayoffBracketBuilder
from swissdraw.tournament.result_recorder import ResultRecorder
from swissdraw.tournament.standings_calculator import StandingsCalculator
from swissdraw.tournament.tournament import Tournament

__all__ = [
    "Tournament",
    "StandingsCalculator",
    "PlayoffBracketBuilder",
    "PlayoffAdvancer",
    "ResultRecorder",
]
