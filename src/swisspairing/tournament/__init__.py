"""Tournament layer: storage contracts, in-memory store and round management."""

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

from swisspairing.tournament.records import (
    find_bye_participant,
    to_bye_record,
    to_match_records,
)
from swisspairing.tournament.results import match_points_for, outcome_from_scores
from swisspairing.tournament.round_manager import RoundManager
from swisspairing.tournament.snapshot import (
    TournamentSnapshot,
    load_snapshot,
    save_snapshot,
)
from swisspairing.tournament.sources import (
    ByeSource,
    MatchSource,
    PairingSink,
    ParticipantSource,
    SettingsSource,
    TournamentBackend,
)
from swisspairing.tournament.store import TournamentStore

__all__ = [
    "ByeSource",
    "MatchSource",
    "PairingSink",
    "ParticipantSource",
    "RoundManager",
    "SettingsSource",
    "TournamentBackend",
    "TournamentSnapshot",
    "TournamentStore",
    "find_bye_participant",
    "load_snapshot",
    "match_points_for",
    "outcome_from_scores",
    "save_snapshot",
    "to_bye_record",
    "to_match_records",
]
