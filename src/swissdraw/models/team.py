"""Team data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from swissdraw.type_hints import Pot


@dataclass(frozen=True)
class Team:
    """A competitor in the tournament.

    Attributes
    ----------
    id : str
        Unique identifier within the roster.
    name : str
        Display name.
    country : str
        Country the team belongs to, used by country protection.
    coefficient : float
        Strength coefficient, higher is stronger.
    pot : int
        Seeding pot, 1 (strongest) to 4 (weakest).
    logo : str, optional
        Opaque logo reference, never interpreted here.
    """

    id: str
    name: str
    country: str
    coefficient: float
    pot: Pot
    logo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "coefficient": self.coefficient,
            "pot": self.pot,
            "logo": self.logo,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            country=data["country"],
            coefficient=float(data.get("coefficient", 0.0)),
            pot=int(data["pot"]),
            logo=data.get("logo"),
        )

    def __str__(self) -> str:
        return self.name
