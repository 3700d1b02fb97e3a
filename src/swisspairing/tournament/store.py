"""In-memory tournament storage implementing the engine collaborator contracts."""

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

import threading
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Set

from swisspairing.constants import VALID_MATCH_POINTS
from swisspairing.exceptions import (
    DuplicateParticipantException,
    DuplicateRoundException,
    InvalidResultException,
    MatchNotFoundException,
    ParticipantNotFoundException,
    TournamentException,
    TournamentNotFoundException,
)
from swisspairing.models import Bye, Match, Participant, TournamentSettings
from swisspairing.pairing.standings import calculate_standings
from swisspairing.type_hints import ByeRecord, MatchRecord
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class _TournamentState:
    settings: TournamentSettings
    participants: Dict[str, Participant] = field(default_factory=dict)
    matches: List[Match] = field(default_factory=list)
    byes: List[Bye] = field(default_factory=list)
    rounds: Set[int] = field(default_factory=set)
    current_round: int = 0


class TournamentStore:
    """Thread-safe in-memory store of tournaments, participants, matches and byes.

    Rounds are unique per tournament: inserting a round twice raises
    DuplicateRoundException, and a round's match and bye rows are written
    together or not at all.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tournaments: Dict[str, _TournamentState] = {}

    def _state(self, tournament_id: str) -> _TournamentState:
        state = self._tournaments.get(tournament_id)
        if state is None:
            raise TournamentNotFoundException(f"Unknown tournament: {tournament_id}")
        return state

    # --- Tournaments and participants ---

    def create_tournament(self, tournament_id: str, settings: TournamentSettings) -> None:
        with self._lock:
            if tournament_id in self._tournaments:
                raise TournamentException(f"Tournament {tournament_id} already exists")
            self._tournaments[tournament_id] = _TournamentState(settings=settings)
        logger.info("Created tournament %s (%s)", tournament_id, settings.name)

    def register_participant(
        self, tournament_id: str, participant_id: str, name: Optional[str] = None
    ) -> Participant:
        """Add a participant; the seed is the registration order."""
        with self._lock:
            state = self._state(tournament_id)
            if participant_id in state.participants:
                raise DuplicateParticipantException(
                    f"Participant {participant_id} already registered"
                )
            participant = Participant(
                id=participant_id, seed=len(state.participants) + 1, name=name
            )
            state.participants[participant_id] = participant
            return replace(participant)

    def drop_participant(self, tournament_id: str, participant_id: str) -> None:
        with self._lock:
            state = self._state(tournament_id)
            participant = state.participants.get(participant_id)
            if participant is None:
                raise ParticipantNotFoundException(participant_id)
            participant.dropped_out = True
        logger.info("Participant %s dropped from %s", participant_id, tournament_id)

    # --- Sources ---

    def fetch_settings(self, tournament_id: str) -> TournamentSettings:
        with self._lock:
            return self._state(tournament_id).settings

    def fetch_participants(self, tournament_id: str) -> List[Participant]:
        with self._lock:
            return [replace(p) for p in self._state(tournament_id).participants.values()]

    def fetch_matches(self, tournament_id: str, before_round: int) -> List[Match]:
        with self._lock:
            return [
                replace(m)
                for m in self._state(tournament_id).matches
                if m.round_number < before_round
            ]

    def fetch_byes(self, tournament_id: str, before_round: int) -> List[Bye]:
        with self._lock:
            return [
                replace(b)
                for b in self._state(tournament_id).byes
                if b.round_number < before_round
            ]

    def fetch_round(self, tournament_id: str, round_number: int) -> List[Match]:
        with self._lock:
            return [
                replace(m)
                for m in self._state(tournament_id).matches
                if m.round_number == round_number
            ]

    def current_round(self, tournament_id: str) -> int:
        with self._lock:
            return self._state(tournament_id).current_round

    def set_current_round(self, tournament_id: str, round_number: int) -> None:
        with self._lock:
            self._state(tournament_id).current_round = round_number

    # --- Sink ---

    def insert_round(
        self,
        tournament_id: str,
        round_number: int,
        match_records: List[MatchRecord],
        bye_record: ByeRecord,
    ) -> None:
        """Write the match rows and bye row of a round as one unit."""
        with self._lock:
            state = self._state(tournament_id)
            if round_number in state.rounds:
                raise DuplicateRoundException(
                    f"Round {round_number} of {tournament_id} already exists"
                )

            # Build every row before touching state
            new_matches = []
            for record in match_records:
                for key in ("player1_id", "player2_id"):
                    if record[key] not in state.participants:
                        raise ParticipantNotFoundException(record[key])
                new_matches.append(
                    Match(
                        round_number=round_number,
                        player1_id=record["player1_id"],
                        player2_id=record["player2_id"],
                    )
                )
            new_bye = None
            if bye_record is not None:
                if bye_record["participant_id"] not in state.participants:
                    raise ParticipantNotFoundException(bye_record["participant_id"])
                new_bye = Bye(
                    round_number=round_number,
                    participant_id=bye_record["participant_id"],
                    match_points=float(bye_record.get("match_points") or 0.0),
                    differential=int(bye_record.get("differential") or 0),
                )

            state.matches.extend(new_matches)
            if new_bye is not None:
                state.byes.append(new_bye)
            state.rounds.add(round_number)
            self._refresh_totals(state)
        logger.info(
            "Stored round %s of %s: %s matches%s",
            round_number,
            tournament_id,
            len(match_records),
            ", 1 bye" if bye_record else "",
        )

    def delete_round(self, tournament_id: str, round_number: int) -> None:
        with self._lock:
            state = self._state(tournament_id)
            state.matches = [m for m in state.matches if m.round_number != round_number]
            state.byes = [b for b in state.byes if b.round_number != round_number]
            state.rounds.discard(round_number)
            self._refresh_totals(state)

    def round_has_results(self, tournament_id: str, round_number: int) -> bool:
        with self._lock:
            return any(
                m.has_scores
                for m in self._state(tournament_id).matches
                if m.round_number == round_number
            )

    # --- Results ---

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
    ) -> Match:
        """Enter the game scores and awarded match points of a match.

        The participants may be given in either order.
        """
        for points in (player1_points, player2_points):
            if points not in VALID_MATCH_POINTS:
                raise InvalidResultException(
                    f"Invalid match points: {points} "
                    f"(expected one of {sorted(VALID_MATCH_POINTS)})"
                )
        if player1_game_score < 0 or player2_game_score < 0:
            raise InvalidResultException("Game scores cannot be negative")

        with self._lock:
            state = self._state(tournament_id)
            for index, match in enumerate(state.matches):
                if match.round_number != round_number or match.is_bye:
                    continue
                if (match.player1_id, match.player2_id) == (player1_id, player2_id):
                    updated = replace(
                        match,
                        player1_points=player1_points,
                        player2_points=player2_points,
                        player1_game_score=player1_game_score,
                        player2_game_score=player2_game_score,
                    )
                elif (match.player1_id, match.player2_id) == (player2_id, player1_id):
                    updated = replace(
                        match,
                        player1_points=player2_points,
                        player2_points=player1_points,
                        player1_game_score=player2_game_score,
                        player2_game_score=player1_game_score,
                    )
                else:
                    continue
                state.matches[index] = updated
                self._refresh_totals(state)
                logger.debug(
                    "Recorded round %s: %s (%s) vs %s (%s)",
                    round_number,
                    player1_id,
                    player1_game_score,
                    player2_id,
                    player2_game_score,
                )
                return replace(updated)

        raise MatchNotFoundException(
            f"No round {round_number} match between {player1_id} and {player2_id}"
        )

    def _refresh_totals(self, state: _TournamentState) -> None:
        """Recompute every participant's match points and differential."""
        standings = calculate_standings(
            max(state.rounds, default=0) + 1,
            state.participants.values(),
            state.matches,
            state.byes,
        )
        for standing in standings:
            participant = state.participants[standing.id]
            participant.match_points = standing.wins
            participant.differential = standing.differential
