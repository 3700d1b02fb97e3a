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

from swisspairing.models.match import Bye, Match
from swisspairing.models.matchup import Matchup, RoundPairing
from swisspairing.models.pairing_config import PairingConfig
from swisspairing.models.participant import Participant
from swisspairing.models.standing import Standing
from swisspairing.models.tournament_settings import (
    TournamentSettings,
    suggest_number_of_rounds,
)

__all__ = [
    "Bye",
    "Match",
    "Matchup",
    "PairingConfig",
    "Participant",
    "RoundPairing",
    "Standing",
    "TournamentSettings",
    "suggest_number_of_rounds",
]
