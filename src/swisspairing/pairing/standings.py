"""Standings calculation from match history."""

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

from typing import Dict, Iterable, List, Optional, Set, Tuple

from swisspairing.models import Bye, Match, Participant, Standing
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def matches_before(round_number: int, matches: Iterable[Match]) -> List[Match]:
    """Matches played strictly before ``round_number``."""
    return [m for m in matches if m.round_number < round_number]


def sort_standings(standings: Iterable[Standing]) -> List[Standing]:
    """Order standings: descending wins, then differential, then ascending seed."""
    return sorted(standings, key=Standing.sort_key)


def calculate_standings(
    round_number: int,
    participants: Iterable[Participant],
    matches: Iterable[Match],
    byes: Optional[Iterable[Bye]] = None,
) -> List[Standing]:
    """Fold match history into ranked standings at the start of a round.

    Parameters
    ----------
    round_number : int
        Target round. Only matches and byes of earlier rounds count.
    participants : iterable of Participant
        Every participant, dropped or not.
    matches : iterable of Match
        Match history. Bye rows (no player 2) add their points to player 1
        and nothing to differential.
    byes : iterable of Bye, optional
        Bye records whose awarded points and differential are folded in.
        A bye already present as a bye row of the same round is not
        counted twice.

    Returns
    -------
    list of Standing
        Sorted by descending wins, descending differential, then ascending
        seed.
    """
    table: Dict[str, Standing] = {}
    for participant in participants:
        table[participant.id] = Standing(id=participant.id, seed=participant.seed)

    bye_rows: Set[Tuple[int, str]] = set()
    for match in matches_before(round_number, matches):
        first = table.get(match.player1_id)
        if first is None:
            logger.warning(
                "Round %s match references unknown participant %s; skipped",
                match.round_number,
                match.player1_id,
            )
            continue

        if match.is_bye:
            first.wins += match.player1_points
            bye_rows.add((match.round_number, match.player1_id))
            continue

        second = table.get(match.player2_id)
        if second is None:
            logger.warning(
                "Round %s match references unknown participant %s; skipped",
                match.round_number,
                match.player2_id,
            )
            continue

        first.wins += match.player1_points
        first.losses += match.player2_points
        second.wins += match.player2_points
        second.losses += match.player1_points

        if match.has_scores:
            margin = match.player1_game_score - match.player2_game_score
            first.differential += margin
            second.differential -= margin

    for bye in byes or ():
        if bye.round_number >= round_number:
            continue
        if (bye.round_number, bye.participant_id) in bye_rows:
            continue
        standing = table.get(bye.participant_id)
        if standing is None:
            logger.warning(
                "Round %s bye references unknown participant %s; skipped",
                bye.round_number,
                bye.participant_id,
            )
            continue
        standing.wins += bye.match_points
        standing.differential += bye.differential

    return sort_standings(table.values())
