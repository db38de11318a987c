"""TournamentRules data class."""

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

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, List

from swissdraw.constants import (
    DEFAULT_AUTO_QUALIFY_TOP,
    DEFAULT_ELIMINATION_POSITION,
    DEFAULT_MAX_TEAMS_PER_COUNTRY,
    DEFAULT_NUMBER_OF_MATCHDAYS,
    DEFAULT_PLAYOFF_POSITIONS_END,
    DEFAULT_PLAYOFF_POSITIONS_START,
)
from swissdraw.utils.validation import validate_rules

# camelCase keys accepted by from_dict
_CAMEL_CASE_KEYS = {
    "numberOfMatchdays": "number_of_matchdays",
    "homeAwayBalance": "home_away_balance",
    "countryProtection": "country_protection",
    "noRematches": "no_rematches",
    "potProtection": "pot_protection",
    "maxTeamsPerCountry": "max_teams_per_country",
    "autoQualifyTop": "auto_qualify_top",
    "playoffPositionsStart": "playoff_positions_start",
    "playoffPositionsEnd": "playoff_positions_end",
    "eliminationPosition": "elimination_position",
    "allowDraws": "allow_draws",
    "extraTimeInKnockout": "extra_time_in_knockout",
}


@dataclass
class TournamentRules:
    """Tournament rules configuration.

    Attributes
    ----------
    number_of_matchdays : int
        Rounds each team plays in the Swiss phase (6-10).
    home_away_balance : bool
        Cap home and away appearances at ``home_away_cap`` each.
    country_protection : bool
        Forbid pairing two teams from the same country.
    no_rematches : bool
        Forbid pairing two teams that have already met.
    pot_protection : bool
        Forbid same-pot pairings on matchday 1.
    max_teams_per_country : int
        Roster-level cap, checked by roster validation only.
    auto_qualify_top : int
        Positions 1..N qualify directly.
    playoff_positions_start, playoff_positions_end : int
        Positions entering the knockout playoff.
    elimination_position : int
        Positions from here on are eliminated.
    allow_draws : bool
        Whether a tie is acceptable in the Swiss phase.
    extra_time_in_knockout : bool
        Whether a level knockout match goes to extra time (otherwise penalties).
    """

    number_of_matchdays: int = DEFAULT_NUMBER_OF_MATCHDAYS
    home_away_balance: bool = True
    country_protection: bool = True
    no_rematches: bool = True
    pot_protection: bool = False
    max_teams_per_country: int = DEFAULT_MAX_TEAMS_PER_COUNTRY
    auto_qualify_top: int = DEFAULT_AUTO_QUALIFY_TOP
    playoff_positions_start: int = DEFAULT_PLAYOFF_POSITIONS_START
    playoff_positions_end: int = DEFAULT_PLAYOFF_POSITIONS_END
    elimination_position: int = DEFAULT_ELIMINATION_POSITION
    allow_draws: bool = True
    extra_time_in_knockout: bool = True

    @property
    def home_away_cap(self) -> int:
        """Most home (or away) games a team may get."""
        return math.ceil(self.number_of_matchdays / 2)

    def validate(self) -> List[str]:
        """Return every configuration problem, empty when valid."""
        return validate_rules(self).errors

    def to_dict(self) -> Dict[str, Any]:
        """Serialize rules to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentRules":
        """Deserialize rules from dictionary.

        Keys may be snake_case or the camelCase names found in exported rule files.
        Unknown keys are ignored and missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)
