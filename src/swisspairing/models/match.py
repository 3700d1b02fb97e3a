"""Match and bye records."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass
class Match:
    """A single match of a round, as supplied by the match history source.

    ``player2_id`` is None when the row represents a bye. Match points are
    the values already awarded on the row (3 win, 2 timed win, 1.5 draw,
    0 loss) and are never recomputed by the engine.

    Attributes
    ----------
    round_number : int
        Round the match belongs to (1-indexed).
    player1_id : str
        First participant.
    player2_id : str or None
        Second participant, or None for a bye row.
    player1_points : float
        Match points awarded to player 1.
    player2_points : float
        Match points awarded to player 2.
    player1_game_score : int or None
        Games won by player 1, None until scores are entered.
    player2_game_score : int or None
        Games won by player 2, None until scores are entered.
    """

    round_number: int
    player1_id: str
    player2_id: Optional[str] = None
    player1_points: float = 0.0
    player2_points: float = 0.0
    player1_game_score: Optional[int] = None
    player2_game_score: Optional[int] = None

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    @property
    def has_scores(self) -> bool:
        return (
            self.player1_game_score is not None
            and self.player2_game_score is not None
        )

    @property
    def participant_ids(self) -> Tuple[str, ...]:
        if self.player2_id is None:
            return (self.player1_id,)
        return (self.player1_id, self.player2_id)

    def involves(self, participant_id: str) -> bool:
        return participant_id in self.participant_ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "round": self.round_number,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "player1_points": self.player1_points,
            "player2_points": self.player2_points,
            "player1_game_score": self.player1_game_score,
            "player2_game_score": self.player2_game_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        player2_id = data.get("player2_id")
        return cls(
            round_number=int(data["round"]),
            player1_id=str(data["player1_id"]),
            player2_id=str(player2_id) if player2_id is not None else None,
            player1_points=float(data.get("player1_points") or 0.0),
            player2_points=float(data.get("player2_points") or 0.0),
            player1_game_score=data.get("player1_game_score"),
            player2_game_score=data.get("player2_game_score"),
        )


@dataclass
class Bye:
    """Records that a participant received a bye in a round.

    Attributes
    ----------
    round_number : int
        Round of the bye.
    participant_id : str
        Participant receiving the bye.
    match_points : float
        Match points awarded for the bye.
    differential : int
        Differential awarded for the bye.
    """

    round_number: int
    participant_id: str
    match_points: float = 0.0
    differential: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize bye to dictionary."""
        return {
            "round_number": self.round_number,
            "participant_id": self.participant_id,
            "match_points": self.match_points,
            "differential": self.differential,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bye":
        """Deserialize bye from dictionary."""
        return cls(
            round_number=int(data["round_number"]),
            participant_id=str(data["participant_id"]),
            match_points=float(data.get("match_points") or 0.0),
            differential=int(data.get("differential") or 0),
        )
