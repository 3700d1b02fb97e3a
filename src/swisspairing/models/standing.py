"""Standing data class."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
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
from typing import Any, Dict


@dataclass
class Standing:
    """Derived record of a participant at a round boundary.

    ``wins`` and ``losses`` are match point totals (own points and
    opponents' points respectively), not game counts.
    """

    id: str
    seed: int
    wins: float = 0.0
    losses: float = 0.0
    differential: int = 0

    @property
    def points(self) -> float:
        return self.wins

    def sort_key(self):
        """Descending wins, descending differential, ascending seed."""
        return (-self.wins, -self.differential, self.seed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "seed": self.seed,
            "wins": self.wins,
            "losses": self.losses,
            "differential": self.differential,
        }
