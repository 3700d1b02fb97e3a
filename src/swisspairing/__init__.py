"""Swiss Pairing - Swiss-system tournament pairing with maximum weight matching."""

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

from swisspairing.models import (
    Bye,
    Match,
    Matchup,
    PairingConfig,
    Participant,
    RoundPairing,
    Standing,
    TournamentSettings,
)
from swisspairing.pairing import (
    build_pairing_history,
    calculate_standings,
    create_swiss_pairings,
    max_weight_matching,
)

__version__ = "0.1.0"

__all__ = [
    "Bye",
    "Match",
    "Matchup",
    "PairingConfig",
    "Participant",
    "RoundPairing",
    "Standing",
    "TournamentSettings",
    "build_pairing_history",
    "calculate_standings",
    "create_swiss_pairings",
    "max_weight_matching",
]
