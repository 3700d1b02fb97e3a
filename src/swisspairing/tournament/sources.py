"""Collaborator contracts consumed and fed by the pairing engine."""

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

from typing import List, Protocol

from swisspairing.models import Bye, Match, Participant, TournamentSettings
from swisspairing.type_hints import ByeRecord, MatchRecord


class ParticipantSource(Protocol):
    """Supplies the participants of a tournament as of now."""

    def fetch_participants(self, tournament_id: str) -> List[Participant]: ...


class MatchSource(Protocol):
    """Supplies matches played before a round."""

    def fetch_matches(self, tournament_id: str, before_round: int) -> List[Match]: ...


class ByeSource(Protocol):
    """Supplies byes given before a round."""

    def fetch_byes(self, tournament_id: str, before_round: int) -> List[Bye]: ...


class SettingsSource(Protocol):
    """Supplies the settings of a tournament."""

    def fetch_settings(self, tournament_id: str) -> TournamentSettings: ...


class PairingSink(Protocol):
    """Persists a paired round.

    ``insert_round`` must write the match rows and the bye row as one unit
    and raise DuplicateRoundException if the round already exists.
    """

    def insert_round(
        self,
        tournament_id: str,
        round_number: int,
        match_records: List[MatchRecord],
        bye_record: ByeRecord,
    ) -> None: ...


class TournamentBackend(
    ParticipantSource, MatchSource, ByeSource, SettingsSource, PairingSink, Protocol
):
    """Everything a RoundManager needs from storage."""

    def current_round(self, tournament_id: str) -> int: ...

    def set_current_round(self, tournament_id: str, round_number: int) -> None: ...

    def delete_round(self, tournament_id: str, round_number: int) -> None: ...

    def round_has_results(self, tournament_id: str, round_number: int) -> bool: ...

    def record_result(
        self,
        tournament_id: str,
        round_number: int,
        player1_id: str,
        player2_id: str,
        player1_game_score: int,
        player2_game_score: int,
        player1_points: float,
        player2_points: float,
    ) -> Match: ...


__all__ = [
    "ByeSource",
    "MatchSource",
    "PairingSink",
    "ParticipantSource",
    "SettingsSource",
    "TournamentBackend",
]
