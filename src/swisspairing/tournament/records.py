"""Conversion of pairing results into rows for the pairing sink."""

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

from typing import Dict, Iterable, List, Optional

from swisspairing.models import Matchup, RoundPairing, Standing, TournamentSettings
from swisspairing.type_hints import ByeRecord, MatchRecord


def find_bye_participant(matchups: Iterable[Matchup]) -> Optional[str]:
    """Return the participant of the bye matchup, if any."""
    for matchup in matchups:
        if matchup.player1_id is not None and matchup.player2_id is None:
            return matchup.player1_id
    return None


def to_match_records(
    pairing: RoundPairing,
    tournament_id: str,
    standings: Dict[str, Standing],
) -> List[MatchRecord]:
    """Build match rows for the non-bye matchups of a round.

    Scores start empty. Match points and differentials are copied from
    the standings at the start of the round; ``match_order`` follows the
    matchup order, starting at 1.
    """
    records: List[MatchRecord] = []
    for matchup in pairing.pairs:
        first = standings.get(matchup.player1_id)
        second = standings.get(matchup.player2_id)
        records.append(
            {
                "tournament_id": tournament_id,
                "round": pairing.round_number,
                "player1_id": matchup.player1_id,
                "player2_id": matchup.player2_id,
                "player1_score": None,
                "player2_score": None,
                "player1_match_points": first.wins if first else 0,
                "player2_match_points": second.wins if second else 0,
                "differential": first.differential if first else 0,
                "differential2": second.differential if second else 0,
                "match_order": len(records) + 1,
            }
        )
    return records


def to_bye_record(
    pairing: RoundPairing,
    tournament_id: str,
    settings: TournamentSettings,
) -> ByeRecord:
    """Build the bye row of a round, or None if nobody sits out.

    The row carries the points and differential awarded for the bye.
    """
    participant_id = find_bye_participant(pairing.matchups)
    if participant_id is None:
        return None
    return {
        "tournament_id": tournament_id,
        "round_number": pairing.round_number,
        "participant_id": participant_id,
        "match_points": settings.bye_points,
        "differential": settings.bye_differential,
    }
