"""Round management for tournaments.

This module runs the pairing of a round against a storage backend: fetching
the inputs, computing the pairing, writing it back and advancing the round.
Nothing is written and the round does not advance if any step fails.
"""

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

import random
import threading
from typing import List, Optional, Set, Tuple

from swisspairing.exceptions import (
    InputFetchException,
    RoundInProgressException,
)
from swisspairing.models import Match, RoundPairing, Standing, TournamentSettings
from swisspairing.pairing import calculate_standings, create_swiss_pairings
from swisspairing.tournament.records import to_bye_record, to_match_records
from swisspairing.tournament.results import match_points_for
from swisspairing.tournament.sources import TournamentBackend
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

# (tournament id, round number) pairs currently being paired in this process
_rounds_in_progress: Set[Tuple[str, int]] = set()
_rounds_lock = threading.Lock()


class RoundManager:
    """Manages round progression and pairing generation for a tournament.

    This class is responsible for:
    - Generating pairings for the next round from the backend's history
    - Writing each round to the backend as one unit
    - Undoing a round that has no results yet
    - Recording match results
    """

    def __init__(
        self,
        backend: TournamentBackend,
        tournament_id: str,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the round manager.

        Args:
            backend: Storage providing the sources and the pairing sink
            tournament_id: The tournament to manage
            rng: Random source for round 1 pairings, defaults to one seeded
                from the tournament's pairing configuration
        """
        self.backend = backend
        self.tournament_id = tournament_id
        self.rng = rng

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed).

        Returns:
            The last paired round, or 0 if no rounds have been created.
        """
        return self.backend.current_round(self.tournament_id)

    def settings(self) -> TournamentSettings:
        return self.backend.fetch_settings(self.tournament_id)

    def create_next_round(self) -> RoundPairing:
        """Pair, store and start the next round.

        Returns:
            The RoundPairing written to the backend

        Raises:
            RoundInProgressException: If the round is already being paired
            InputFetchException: If participants, matches, byes or settings
                cannot be fetched
            ValueError: If all rounds have already been created
            PairingException: If no valid pairing could be produced
            DuplicateRoundException: If the round already exists in the backend
        """
        round_number = self.current_round_number + 1
        key = (self.tournament_id, round_number)
        with _rounds_lock:
            if key in _rounds_in_progress:
                raise RoundInProgressException(
                    f"Round {round_number} of {self.tournament_id} is already being paired"
                )
            _rounds_in_progress.add(key)
        try:
            return self._create_round(round_number)
        finally:
            with _rounds_lock:
                _rounds_in_progress.discard(key)

    def _create_round(self, round_number: int) -> RoundPairing:
        settings, participants, matches, byes = self._fetch_inputs(round_number)

        active_count = sum(1 for p in participants if p.is_active)
        total_rounds = settings.rounds_for(active_count)
        if round_number > total_rounds:
            raise ValueError(
                f"Cannot create more rounds: already at {total_rounds} rounds"
            )

        logger.info(
            f"Creating round {round_number} of {self.tournament_id} "
            f"with {active_count} active participants"
        )

        pairing = create_swiss_pairings(
            round_number,
            participants,
            matches,
            byes,
            config=settings.pairing,
            rng=self.rng,
        )

        standings = {
            standing.id: standing
            for standing in calculate_standings(round_number, participants, matches, byes)
        }
        match_records = to_match_records(pairing, self.tournament_id, standings)
        bye_record = to_bye_record(pairing, self.tournament_id, settings)

        self.backend.insert_round(
            self.tournament_id, round_number, match_records, bye_record
        )
        self.backend.set_current_round(self.tournament_id, round_number)

        logger.info(
            f"Round {round_number} created: {len(match_records)} matches, "
            f"bye: {bye_record['participant_id'] if bye_record else 'None'}"
        )
        return pairing

    def _fetch_inputs(self, round_number: int):
        try:
            settings = self.backend.fetch_settings(self.tournament_id)
            participants = self.backend.fetch_participants(self.tournament_id)
            matches = self.backend.fetch_matches(self.tournament_id, round_number)
            byes = self.backend.fetch_byes(self.tournament_id, round_number)
        except Exception as e:
            logger.error(f"Failed to fetch inputs for round {round_number}: {e}")
            raise InputFetchException(
                f"Could not fetch inputs for round {round_number} "
                f"of {self.tournament_id}: {e}"
            ) from e
        return settings, participants, matches, byes

    def undo_last_round(self) -> bool:
        """Remove the last round if no results have been recorded for it.

        Returns:
            True if successful, False if no rounds or the last round has results
        """
        round_number = self.current_round_number
        if round_number < 1:
            logger.warning("Cannot undo: no rounds exist")
            return False

        if self.backend.round_has_results(self.tournament_id, round_number):
            logger.warning(f"Cannot undo round {round_number}: results recorded")
            return False

        self.backend.delete_round(self.tournament_id, round_number)
        self.backend.set_current_round(self.tournament_id, round_number - 1)
        logger.info(f"Undid round {round_number}")
        return True

    def record_result(
        self,
        player1_id: str,
        player2_id: str,
        player1_game_score: int,
        player2_game_score: int,
        outcome: str,
        round_number: Optional[int] = None,
    ) -> Match:
        """Record the result of a match.

        Args:
            player1_id: Participant the outcome refers to
            player2_id: Their opponent
            player1_game_score: Games won by player1
            player2_game_score: Games won by player2
            outcome: "win", "timed_win", "draw" or "loss" for player1
            round_number: Round of the match, defaults to the current round

        Returns:
            The updated Match

        Raises:
            InvalidResultException: If the outcome is unknown
            MatchNotFoundException: If the two did not meet in that round
        """
        if round_number is None:
            round_number = self.current_round_number
        player1_points, player2_points = match_points_for(outcome)
        return self.backend.record_result(
            self.tournament_id,
            round_number,
            player1_id,
            player2_id,
            player1_game_score,
            player2_game_score,
            player1_points,
            player2_points,
        )

    def standings(self) -> List[Standing]:
        """Standings including every round played so far."""
        round_number = self.current_round_number + 1
        return calculate_standings(
            round_number,
            self.backend.fetch_participants(self.tournament_id),
            self.backend.fetch_matches(self.tournament_id, round_number),
            self.backend.fetch_byes(self.tournament_id, round_number),
        )
