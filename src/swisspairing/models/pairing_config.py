"""PairingConfig data class."""

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

from swisspairing.constants import (
    BYE_SELECTION_MODES,
    DEFAULT_BYE_SELECTION,
    DEFAULT_DIFFERENTIAL_WEIGHT,
    DEFAULT_RECENCY_WEIGHT,
    DEFAULT_REMATCH_WEIGHT,
    DEFAULT_SEED_MULTIPLIER,
    DEFAULT_SOLVER_WARN_SECONDS,
    DEFAULT_STANDING_POWER,
)
from swisspairing.exceptions import InvalidConfigurationException
from swisspairing.type_hints import ByeSelection


@dataclass
class PairingConfig:
    """Tuning knobs of the Swiss pairing engine.

    Attributes
    ----------
    rematch_weight : float
        Penalty per previous meeting of two participants.
    standing_power : float
        Exponent applied to the match point gap of a pair.
    seed_multiplier : int
        Second half of the key of the node shuffle, with the round number.
    differential_weight : float
        Factor applied to the differential gap of a pair.
    recency_weight : float
        Extra penalty for recent rematches, scaled by how late the last
        meeting was. Zero keeps rematch cost independent of recency.
    bye_selection : str
        ``"standings"`` picks the bye recipient before matching,
        ``"matching"`` lets the solver pick it through the bye slot.
    random_seed : int or None
        Seed for round 1 random pairing. None uses fresh entropy.
    solver_warn_seconds : float
        Log a warning when a single solve takes longer than this.
    """

    rematch_weight: float = DEFAULT_REMATCH_WEIGHT
    standing_power: float = DEFAULT_STANDING_POWER
    seed_multiplier: int = DEFAULT_SEED_MULTIPLIER
    differential_weight: float = DEFAULT_DIFFERENTIAL_WEIGHT
    recency_weight: float = DEFAULT_RECENCY_WEIGHT
    bye_selection: ByeSelection = DEFAULT_BYE_SELECTION
    random_seed: Optional[int] = None
    solver_warn_seconds: float = DEFAULT_SOLVER_WARN_SECONDS

    def validate(self) -> None:
        """Raise InvalidConfigurationException on out-of-range values."""
        if self.bye_selection not in BYE_SELECTION_MODES:
            raise InvalidConfigurationException(
                f"Unknown bye selection '{self.bye_selection}', "
                f"expected one of {', '.join(BYE_SELECTION_MODES)}"
            )
        if self.rematch_weight < 0:
            raise InvalidConfigurationException("rematch_weight must be >= 0")
        if self.standing_power <= 0:
            raise InvalidConfigurationException("standing_power must be > 0")
        if self.differential_weight < 0:
            raise InvalidConfigurationException("differential_weight must be >= 0")
        if self.recency_weight < 0:
            raise InvalidConfigurationException("recency_weight must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "rematch_weight": self.rematch_weight,
            "standing_power": self.standing_power,
            "seed_multiplier": self.seed_multiplier,
            "differential_weight": self.differential_weight,
            "recency_weight": self.recency_weight,
            "bye_selection": self.bye_selection,
            "random_seed": self.random_seed,
            "solver_warn_seconds": self.solver_warn_seconds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingConfig":
        """Deserialize configuration from dictionary."""
        config = cls(
            rematch_weight=float(data.get("rematch_weight", DEFAULT_REMATCH_WEIGHT)),
            standing_power=float(data.get("standing_power", DEFAULT_STANDING_POWER)),
            seed_multiplier=int(data.get("seed_multiplier", DEFAULT_SEED_MULTIPLIER)),
            differential_weight=float(
                data.get("differential_weight", DEFAULT_DIFFERENTIAL_WEIGHT)
            ),
            recency_weight=float(data.get("recency_weight", DEFAULT_RECENCY_WEIGHT)),
            bye_selection=data.get("bye_selection", DEFAULT_BYE_SELECTION),
            random_seed=data.get("random_seed"),
            solver_warn_seconds=float(
                data.get("solver_warn_seconds", DEFAULT_SOLVER_WARN_SECONDS)
            ),
        )
        config.validate()
        return config
