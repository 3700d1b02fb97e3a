"""Participant data class."""

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
from typing import Any, Dict, Optional


@dataclass
class Participant:
    """A tournament participant as supplied by the participant source.

    Attributes
    ----------
    id : str
        Unique identifier of the participant.
    seed : int
        Immutable registration order. Lower seeds win final standings ties.
    name : str or None
        Display name, for logs and reports only.
    dropped_out : bool
        Soft-drop flag. Dropped participants keep their history but are
        never paired again.
    match_points : float
        Match points accumulated so far, as tracked by the store.
    differential : int
        Game score differential accumulated so far, as tracked by the store.
    """

    id: str
    seed: int
    name: Optional[str] = None
    dropped_out: bool = False
    match_points: float = 0.0
    differential: int = 0

    @property
    def is_active(self) -> bool:
        return not self.dropped_out

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "seed": self.seed,
            "name": self.name,
            "dropped_out": self.dropped_out,
            "match_points": self.match_points,
            "differential": self.differential,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=str(data["id"]),
            seed=int(data["seed"]),
            name=data.get("name"),
            dropped_out=bool(data.get("dropped_out", False)),
            match_points=float(data.get("match_points") or 0.0),
            differential=int(data.get("differential") or 0),
        )
