"""TournamentSettings data class."""

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
from typing import Any, Dict

from swisspairing.constants import (
    DEFAULT_BYE_DIFFERENTIAL,
    DEFAULT_BYE_POINTS,
    MAX_SUGGESTED_ROUNDS,
    SUGGESTED_ROUNDS,
)
from swisspairing.models.pairing_config import PairingConfig


def suggest_number_of_rounds(participant_count: int) -> int:
    """Suggested Swiss round count for a field of ``participant_count``."""
    if participant_count <= 0:
        return 0
    for max_participants, rounds in SUGGESTED_ROUNDS:
        if participant_count <= max_participants:
            return rounds
    return MAX_SUGGESTED_ROUNDS


@dataclass
class TournamentSettings:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    num_rounds : int
        Number of Swiss rounds. Zero means "suggest from the field size".
    bye_points : float
        Match points awarded with a bye.
    bye_differential : int
        Differential awarded with a bye.
    pairing : PairingConfig
        Engine configuration used for every round.
    """

    name: str
    num_rounds: int = 0
    bye_points: float = DEFAULT_BYE_POINTS
    bye_differential: int = DEFAULT_BYE_DIFFERENTIAL
    pairing: PairingConfig = field(default_factory=PairingConfig)

    def rounds_for(self, participant_count: int) -> int:
        """Configured rounds, or the suggestion when none were configured."""
        if self.num_rounds > 0:
            return self.num_rounds
        return suggest_number_of_rounds(participant_count)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "name": self.name,
            "num_rounds": self.num_rounds,
            "bye_points": self.bye_points,
            "bye_differential": self.bye_differential,
            "pairing": self.pairing.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSettings":
        """Deserialize settings from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            num_rounds=int(data.get("num_rounds", 0)),
            bye_points=float(data.get("bye_points", DEFAULT_BYE_POINTS)),
            bye_differential=int(data.get("bye_differential", DEFAULT_BYE_DIFFERENTIAL)),
            pairing=PairingConfig.from_dict(data.get("pairing", {})),
        )
