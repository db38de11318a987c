"""Knockout bracket data classes.

The bracket is an arena: a flat list of :class:`PlayoffMatch` nodes addressed
by id, each pointing at the match it feeds through ``next_match_id``.
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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from swissdraw.constants import (
    FINAL,
    FINAL_MATCH_ID,
    QUARTER_FINALS,
    ROUND_ID_PREFIXES,
    ROUND_NAMES,
    ROUND_OF_16,
    SEMI_FINALS,
)
from swissdraw.exceptions import PlayoffMatchNotFoundException
from swissdraw.models.team import Team


class PlayoffRound(Enum):
    """Knockout rounds, in playing order."""

    ROUND_OF_16 = ROUND_OF_16
    QUARTER_FINALS = QUARTER_FINALS
    SEMI_FINALS = SEMI_FINALS
    FINAL = FINAL

    @property
    def display_name(self) -> str:
        return ROUND_NAMES[self.value]

    def match_id(self, index: int) -> str:
        """Id of the ``index``-th match of this round."""
        if self is PlayoffRound.FINAL:
            return FINAL_MATCH_ID
        return f"{ROUND_ID_PREFIXES[self.value]}-{index}"

    @property
    def next_round(self) -> Optional["PlayoffRound"]:
        rounds = list(PlayoffRound)
        position = rounds.index(self)
        return rounds[position + 1] if position + 1 < len(rounds) else None


class Decision(Enum):
    """How a knockout match was settled."""

    REGULATION = "regulation"
    EXTRA_TIME = "extra_time"
    PENALTIES = "penalties"


@dataclass
class PlayoffMatch:
    """A node of the knockout bracket.

    Team slots stay None until the feeding matches are decided.
    """

    id: str
    round: PlayoffRound
    home: Optional[Team] = None
    away: Optional[Team] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    played: bool = False
    next_match_id: Optional[str] = None
    decided_by: Optional[Decision] = None

    @property
    def is_ready(self) -> bool:
        """Both teams are known."""
        return self.home is not None and self.away is not None

    @property
    def winner(self) -> Optional[Team]:
        if not self.played or not self.is_ready or self.home_score == self.away_score:
            return None
        return self.home if self.home_score > self.away_score else self.away

    @property
    def loser(self) -> Optional[Team]:
        winner = self.winner
        if winner is None:
            return None
        return self.away if winner is self.home else self.home

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary (teams by id)."""
        return {
            "id": self.id,
            "round": self.round.value,
            "home_id": self.home.id if self.home else None,
            "away_id": self.away.id if self.away else None,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "played": self.played,
            "next_match_id": self.next_match_id,
            "decided_by": self.decided_by.value if self.decided_by else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], teams: Dict[str, Team]) -> "PlayoffMatch":
        """Deserialize match from dictionary, resolving ids against ``teams``."""
        home_id = data.get("home_id")
        away_id = data.get("away_id")
        decided_by = data.get("decided_by")
        return cls(
            id=data["id"],
            round=PlayoffRound(data["round"]),
            home=teams[home_id] if home_id else None,
            away=teams[away_id] if away_id else None,
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            played=data.get("played", False),
            next_match_id=data.get("next_match_id"),
            decided_by=Decision(decided_by) if decided_by else None,
        )


@dataclass
class Bracket:
    """Knockout bracket stored as an arena of matches.

    Attributes
    ----------
    matches : list of PlayoffMatch
        Every match, earliest round first.
    problems : list of str
        Why the bracket is empty, when it is.
    """

    matches: List[PlayoffMatch] = field(default_factory=list)
    problems: List[str] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._index = {match.id: i for i, match in enumerate(self.matches)}

    def __iter__(self) -> Iterator[PlayoffMatch]:
        return iter(self.matches)

    def __len__(self) -> int:
        return len(self.matches)

    @property
    def is_empty(self) -> bool:
        return not self.matches

    def get(self, match_id: str) -> Optional[PlayoffMatch]:
        position = self._index.get(match_id)
        return self.matches[position] if position is not None else None

    def replace(self, match: PlayoffMatch) -> None:
        """Swap in a new version of a match with the same id.

        Raises:
            PlayoffMatchNotFoundException: If the id is not in the bracket
        """
        position = self._index.get(match.id)
        if position is None:
            raise PlayoffMatchNotFoundException(f"No playoff match with id {match.id}")
        self.matches[position] = match

    def matches_in_round(self, playoff_round: PlayoffRound) -> List[PlayoffMatch]:
        return [match for match in self.matches if match.round is playoff_round]

    def feeders_of(self, match_id: str) -> List[PlayoffMatch]:
        """Matches whose winners go into ``match_id``."""
        return [match for match in self.matches if match.next_match_id == match_id]

    @property
    def final(self) -> Optional[PlayoffMatch]:
        return self.get(FINAL_MATCH_ID)

    @property
    def champion(self) -> Optional[Team]:
        final = self.final
        return final.winner if final else None

    @property
    def is_complete(self) -> bool:
        return not self.is_empty and all(match.played for match in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize bracket to dictionary."""
        return {
            "matches": [match.to_dict() for match in self.matches],
            "problems": list(self.problems),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], teams: Dict[str, Team]) -> "Bracket":
        """Deserialize bracket from dictionary."""
        return cls(
            matches=[
                PlayoffMatch.from_dict(match, teams)
                for match in data.get("matches", [])
            ],
            problems=list(data.get("problems", [])),
        )
