"""Testing tools for Swiss Draw.

This module provides:
- Random Tournament Generator (RTG) with seedable rosters
- Schedule validation runs
- Benchmarking

Use the developer CLI: swissdraw-test
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

from swissdraw.testing.rtg import (
    CoefficientDistribution,
    CountryMode,
    RandomTournamentGenerator,
    RosterFactory,
    RTGConfig,
)

__all__ = [
    "CoefficientDistribution",
    "CountryMode",
    "RandomTournamentGenerator",
    "RosterFactory",
    "RTGConfig",
]
