"""Matchup and RoundPairing data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass(frozen=True)
class Matchup:
    """One pairing of a round. ``player2_id`` is None for the bye."""

    player1_id: str
    player2_id: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    def participant_ids(self) -> List[str]:
        if self.player2_id is None:
            return [self.player1_id]
        return [self.player1_id, self.player2_id]

    def to_dict(self) -> Dict[str, Any]:
        return {"player1_id": self.player1_id, "player2_id": self.player2_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Matchup":
        return cls(player1_id=data["player1_id"], player2_id=data.get("player2_id"))


@dataclass
class RoundPairing:
    """Result of a pairing computation for a single round.

    Attributes
    ----------
    round_number : int
        Round the pairings were computed for.
    matchups : list of Matchup
        Ordered matchups. The bye, if any, is the last entry.
    """

    round_number: int
    matchups: List[Matchup] = field(default_factory=list)

    @property
    def pairs(self) -> List[Matchup]:
        """Matchups with two participants."""
        return [m for m in self.matchups if not m.is_bye]

    @property
    def bye_participant_id(self) -> Optional[str]:
        for matchup in self.matchups:
            if matchup.is_bye:
                return matchup.player1_id
        return None

    def participant_ids(self) -> Set[str]:
        return {pid for m in self.matchups for pid in m.participant_ids()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "matchups": [m.to_dict() for m in self.matchups],
            "bye_participant_id": self.bye_participant_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundPairing":
        return cls(
            round_number=data["round_number"],
            matchups=[Matchup.from_dict(m) for m in data.get("matchups", [])],
        )


#  LocalWords:  RoundPairing
