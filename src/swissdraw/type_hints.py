"""Type hints used in Swiss Draw."""

from typing import List, Literal, Tuple

# Seeding pot, 1 strongest
Pot = Literal[1, 2, 3, 4]

# (candidate, partner) pairs for one matchday
MatchdayPairs = List[Tuple["Team", "Team"]]

#  LocalWords:  MatchdayPairs
