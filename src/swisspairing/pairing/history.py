"""Index of previous meetings and byes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Set, Tuple

from swisspairing.models import Bye, Match
from swisspairing.type_hints import MatchupKey, PairKey


def matchup_key(first_id: str, second_id: str) -> MatchupKey:
    """Directional ``"idA-idB"`` key; the index stores both orientations."""
    return f"{first_id}-{second_id}"


def pair_key(first_id: str, second_id: str) -> PairKey:
    return frozenset({first_id, second_id})


@dataclass
class PairingHistory:
    """
    Tracks previous meetings and byes ahead of a round.

    Attributes
    ----------
    played_matchups : set of str
        ``"idA-idB"`` keys, in both orientations, for every pair that met.
    latest_round_played : dict of str to int
        Most recent round each pair met, keyed in both orientations.
    play_counts : dict of frozenset to int
        Number of meetings per unordered pair.
    bye_count : dict of str to int
        Number of byes received per participant.
    """

    played_matchups: Set[MatchupKey] = field(default_factory=set)
    latest_round_played: Dict[MatchupKey, int] = field(default_factory=dict)
    play_counts: Dict[FrozenSet[str], int] = field(default_factory=dict)
    bye_count: Dict[str, int] = field(default_factory=dict)

    def add_pairing(self, first_id: str, second_id: str, round_number: int) -> None:
        """Record that two participants met in ``round_number``."""
        forward = matchup_key(first_id, second_id)
        backward = matchup_key(second_id, first_id)
        self.played_matchups.add(forward)
        self.played_matchups.add(backward)
        if round_number > self.latest_round_played.get(forward, 0):
            self.latest_round_played[forward] = round_number
            self.latest_round_played[backward] = round_number
        key = pair_key(first_id, second_id)
        self.play_counts[key] = self.play_counts.get(key, 0) + 1

    def add_bye(self, participant_id: str) -> None:
        self.bye_count[participant_id] = self.bye_count.get(participant_id, 0) + 1

    def have_played(self, first_id: str, second_id: str) -> bool:
        """Check if two participants have previously played each other."""
        return matchup_key(first_id, second_id) in self.played_matchups

    def times_played(self, first_id: str, second_id: str) -> int:
        return self.play_counts.get(pair_key(first_id, second_id), 0)

    def last_round_played(self, first_id: str, second_id: str) -> int:
        """Most recent round the pair met, 0 if never."""
        return self.latest_round_played.get(matchup_key(first_id, second_id), 0)

    def byes_received(self, participant_id: str) -> int:
        return self.bye_count.get(participant_id, 0)

    def bye_recipients(self) -> Set[str]:
        return {pid for pid, count in self.bye_count.items() if count > 0}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "played_matchups": sorted(self.played_matchups),
            "latest_round_played": dict(self.latest_round_played),
            "play_counts": [
                {"pair": sorted(pair), "count": count}
                for pair, count in self.play_counts.items()
            ],
            "bye_count": dict(self.bye_count),
        }


def build_pairing_history(
    round_number: int,
    matches: Iterable[Match],
    byes: Optional[Iterable[Bye]] = None,
) -> PairingHistory:
    """Index matches and byes played before ``round_number``.

    Byes are read from bye records and from bye rows (matches without a
    player 2). A participant's bye in a given round counts once however
    many times it is reported, so the result does not depend on input
    order or duplication.
    """
    history = PairingHistory()
    bye_rounds: Set[Tuple[int, str]] = set()
    seen_matches: Set[Tuple[int, FrozenSet[str]]] = set()

    for match in matches:
        if match.round_number >= round_number:
            continue
        if match.is_bye:
            bye_rounds.add((match.round_number, match.player1_id))
            continue
        # A pair meets at most once per round
        meeting = (match.round_number, pair_key(match.player1_id, match.player2_id))
        if meeting in seen_matches:
            continue
        seen_matches.add(meeting)
        history.add_pairing(match.player1_id, match.player2_id, match.round_number)

    for bye in byes or ():
        if bye.round_number < round_number:
            bye_rounds.add((bye.round_number, bye.participant_id))

    for _, participant_id in bye_rounds:
        history.add_bye(participant_id)

    return history
