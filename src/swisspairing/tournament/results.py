"""Match result helpers."""

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

from typing import Tuple

from swisspairing.constants import (
    OUTCOME_DRAW,
    OUTCOME_LOSS,
    OUTCOME_OPPONENT,
    OUTCOME_POINTS,
    OUTCOME_TIMED_WIN,
    OUTCOME_WIN,
)
from swisspairing.exceptions import InvalidResultException
from swisspairing.type_hints import Outcome


def match_points_for(outcome: Outcome) -> Tuple[float, float]:
    """Return (own points, opponent points) for a result outcome.

    Args:
        outcome: One of "win", "timed_win", "draw" or "loss", from the
            point of view of the participant entering the result

    Raises:
        InvalidResultException: If the outcome is unknown
    """
    if outcome not in OUTCOME_POINTS:
        raise InvalidResultException(
            f"Unknown outcome '{outcome}' (expected one of {', '.join(OUTCOME_POINTS)})"
        )
    return OUTCOME_POINTS[outcome], OUTCOME_POINTS[OUTCOME_OPPONENT[outcome]]


def outcome_from_scores(
    own_score: int, opponent_score: int, timed: bool = False
) -> Outcome:
    """Derive an outcome from game scores.

    A higher score is a win (a timed win when the round clock expired), equal
    scores are a draw.
    """
    if own_score > opponent_score:
        return OUTCOME_TIMED_WIN if timed else OUTCOME_WIN
    if own_score < opponent_score:
        return OUTCOME_LOSS
    return OUTCOME_DRAW
