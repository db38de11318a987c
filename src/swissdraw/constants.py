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

# --- Constants ---

# League points
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Pots (1 strongest .. 4 weakest)
POTS = (1, 2, 3, 4)

# Swiss phase simulation
HOME_ADVANTAGE = 5.0
HOME_WIN_BAND = 0.7  # roll below p * band -> home win
AWAY_WIN_BAND = 1.3  # roll above p * band -> away win
MAX_REGULATION_GOALS = 3

# Knockout simulation
KNOCKOUT_HOME_ADVANTAGE = 0.3

# Manual score entry
MAX_RECORDED_SCORE = 20

# Rule ranges (inclusive)
MATCHDAYS_RANGE = (6, 10)
MAX_TEAMS_PER_COUNTRY_RANGE = (1, 8)
AUTO_QUALIFY_TOP_RANGE = (0, 16)
PLAYOFF_START_RANGE = (9, 17)
PLAYOFF_END_RANGE = (16, 24)
ELIMINATION_POSITION_RANGE = (24, 36)

# Default rules
DEFAULT_NUMBER_OF_MATCHDAYS = 8
DEFAULT_MAX_TEAMS_PER_COUNTRY = 2
DEFAULT_AUTO_QUALIFY_TOP = 8
DEFAULT_PLAYOFF_POSITIONS_START = 9
DEFAULT_PLAYOFF_POSITIONS_END = 24
DEFAULT_ELIMINATION_POSITION = 25

# Roster
MIN_ROSTER_SIZE = 16

# Playoffs
PLAYOFF_TEAM_COUNT = 16
FINAL_MATCH_ID = "final"
ROUND_OF_16 = "round-of-16"
QUARTER_FINALS = "quarter-finals"
SEMI_FINALS = "semi-finals"
FINAL = "final"
ROUND_ID_PREFIXES = {
    ROUND_OF_16: "r16",
    QUARTER_FINALS: "qf",
    SEMI_FINALS: "sf",
    FINAL: FINAL_MATCH_ID,
}
ROUND_NAMES = {
    ROUND_OF_16: "Round of 16",
    QUARTER_FINALS: "Quarter-finals",
    SEMI_FINALS: "Semi-finals",
    FINAL: "Final",
}

# Draw search limits
DEFAULT_SEARCH_LIMIT = 200_000
DEFAULT_DRAW_ATTEMPTS = 50

# Rule labels used in problem reports
RULE_NO_REMATCHES = "no rematches"
RULE_COUNTRY_PROTECTION = "country protection"
RULE_POT_PROTECTION = "pot protection"
