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

from swisspairing.pairing.blossom import matching_weight, max_weight_matching
from swisspairing.pairing.graph import (
    ByeSlot,
    PairingGraph,
    RealParticipant,
    build_pairing_graph,
    edge_weight,
    seeded_shuffle,
)
from swisspairing.pairing.history import (
    PairingHistory,
    build_pairing_history,
    matchup_key,
)
from swisspairing.pairing.standings import calculate_standings
from swisspairing.pairing.swiss import (
    create_swiss_pairings,
    pair_round_one,
    select_bye_participant,
)

__all__ = [
    "ByeSlot",
    "PairingGraph",
    "PairingHistory",
    "RealParticipant",
    "build_pairing_graph",
    "build_pairing_history",
    "calculate_standings",
    "create_swiss_pairings",
    "edge_weight",
    "matching_weight",
    "matchup_key",
    "max_weight_matching",
    "pair_round_one",
    "seeded_shuffle",
    "select_bye_participant",
]
