"""Swiss system pairing: standings, history, graph and matching for one round."""

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
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from swisspairing.constants import BYE_SELECTION_MATCHING, UNMATCHED
from swisspairing.exceptions import (
    DuplicateParticipantException,
    IncompleteMatchingException,
    UnpairedParticipantsException,
)
from swisspairing.models import (
    Bye,
    Match,
    Matchup,
    PairingConfig,
    Participant,
    RoundPairing,
    Standing,
)
from swisspairing.pairing.blossom import max_weight_matching
from swisspairing.pairing.graph import (
    ByeSlot,
    PairingGraph,
    RealParticipant,
    build_pairing_graph,
)
from swisspairing.pairing.history import PairingHistory, build_pairing_history
from swisspairing.pairing.standings import calculate_standings
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def _active_participants(participants: Iterable[Participant]) -> List[Participant]:
    seen = set()
    active = []
    for participant in participants:
        if participant.id in seen:
            raise DuplicateParticipantException(
                f"Participant {participant.id} supplied more than once"
            )
        seen.add(participant.id)
        if participant.is_active:
            active.append(participant)
    return active


def create_swiss_pairings(
    round_number: int,
    participants: Sequence[Participant],
    matches: Sequence[Match],
    byes: Optional[Sequence[Bye]] = None,
    config: Optional[PairingConfig] = None,
    rng: Optional[random.Random] = None,
) -> RoundPairing:
    """
    Compute the pairings of a Swiss round.

    - round_number: the 1-based round to pair
    - participants: every participant of the tournament; dropped ones are skipped
    - matches: match history; only earlier rounds are used
    - byes: bye history; only earlier rounds are used
    - config: engine configuration, defaults to PairingConfig()
    - rng: random source for round 1, defaults to Random(config.random_seed)

    Round 1 pairs at random. Later rounds solve a maximum weight perfect
    matching over all active participants at once.

    Returns a RoundPairing whose matchups cover every active participant
    exactly once, the bye (if any) last.
    """
    if round_number < 1:
        raise ValueError(f"Invalid round number: {round_number}")
    config = config or PairingConfig()
    config.validate()
    active = _active_participants(participants)

    logger.info(
        "Pairing round %s with %s active participants", round_number, len(active)
    )

    if round_number == 1:
        if rng is None:
            rng = random.Random(config.random_seed)
        return pair_round_one(active, rng)

    return _pair_later_round(round_number, participants, active, matches, byes, config)


def pair_round_one(participants: Sequence[Participant], rng: random.Random) -> RoundPairing:
    """Random pairing for round 1: shuffle, random bye if odd, pair in order."""
    pool = list(participants)
    # random.shuffle is a Fisher-Yates shuffle
    rng.shuffle(pool)

    bye_participant = None
    if len(pool) % 2 == 1:
        bye_participant = pool.pop(rng.randrange(len(pool)))

    matchups = [
        Matchup(player1_id=pool[i].id, player2_id=pool[i + 1].id)
        for i in range(0, len(pool) - 1, 2)
    ]
    if bye_participant is not None:
        matchups.append(Matchup(player1_id=bye_participant.id))
        logger.info("Round 1 bye: %s", bye_participant.display_name)
    return RoundPairing(round_number=1, matchups=matchups)


def select_bye_participant(
    standings: Sequence[Standing], history: PairingHistory
) -> Standing:
    """Choose who sits out when the field is odd.

    Scanning from the bottom of the standings upward, the first participant
    without a bye gets it. If everyone already had one, the fewest byes
    wins, then the lowest match points, then the lowest differential, then
    the lowest standings position.
    """
    if not standings:
        raise ValueError("Cannot select a bye from an empty field")
    for standing in reversed(standings):
        if history.byes_received(standing.id) == 0:
            return standing

    ranked = list(enumerate(standings))
    _, chosen = min(
        ranked,
        key=lambda item: (
            history.byes_received(item[1].id),
            item[1].wins,
            item[1].differential,
            -item[0],
        ),
    )
    return chosen


def _pair_later_round(
    round_number: int,
    participants: Sequence[Participant],
    active: List[Participant],
    matches: Sequence[Match],
    byes: Optional[Sequence[Bye]],
    config: PairingConfig,
) -> RoundPairing:
    """Optimal pairing for rounds 2+."""
    history = build_pairing_history(round_number, matches, byes)
    all_standings = calculate_standings(round_number, participants, matches, byes)
    active_ids = {p.id for p in active}
    standings = [s for s in all_standings if s.id in active_ids]

    bye_standing = None
    pool = standings
    if len(standings) % 2 == 1 and config.bye_selection != BYE_SELECTION_MATCHING:
        bye_standing = select_bye_participant(standings, history)
        pool = [s for s in standings if s.id != bye_standing.id]
        logger.info(
            "Round %s bye: %s (%s previous byes)",
            round_number,
            bye_standing.id,
            history.byes_received(bye_standing.id),
        )

    graph = build_pairing_graph(pool, history, round_number, config)
    mates = _solve(graph, round_number, config)
    pairs, slot_partner = _decode_matching(graph, mates, round_number)

    if slot_partner is not None:
        bye_id = slot_partner
    elif bye_standing is not None:
        bye_id = bye_standing.id
    else:
        bye_id = None

    for first, second in pairs:
        if history.have_played(first, second):
            logger.warning(
                "Round %s: rematch %s vs %s (met %s time(s), last in round %s)",
                round_number,
                first,
                second,
                history.times_played(first, second),
                history.last_round_played(first, second),
            )

    matchups = _order_matchups(pairs, standings)
    if bye_id is not None:
        matchups.append(Matchup(player1_id=bye_id))
    return RoundPairing(round_number=round_number, matchups=matchups)


def _solve(graph: PairingGraph, round_number: int, config: PairingConfig) -> List[int]:
    start_time = time.perf_counter()
    mates = max_weight_matching(graph.edges, max_cardinality=True)
    elapsed = time.perf_counter() - start_time
    logger.debug(
        "Round %s: solved %s nodes / %s edges in %.3fs",
        round_number,
        len(graph.nodes),
        len(graph.edges),
        elapsed,
    )
    if elapsed > config.solver_warn_seconds:
        logger.warning(
            "Round %s: matching %s nodes took %.1fs", round_number, len(graph.nodes), elapsed
        )
    return mates


def _decode_matching(
    graph: PairingGraph, mates: List[int], round_number: int
) -> Tuple[List[Tuple[str, str]], Optional[str]]:
    """Turn solver output into participant pairs and the bye slot's partner.

    Raises if any real participant is left without a partner.
    """
    pairs: List[Tuple[str, str]] = []
    slot_partner: Optional[str] = None
    unmatched: List[str] = []
    for i, node in enumerate(graph.nodes):
        j = mates[i] if i < len(mates) else UNMATCHED
        if j == UNMATCHED:
            if isinstance(node, RealParticipant):
                unmatched.append(node.participant_id)
            continue
        if j < i:
            continue
        partner = graph.nodes[j]
        if isinstance(node, ByeSlot):
            slot_partner = partner.participant_id
        elif isinstance(partner, ByeSlot):
            slot_partner = node.participant_id
        else:
            pairs.append((node.participant_id, partner.participant_id))

    if len(unmatched) > 1:
        logger.critical(
            "Round %s: %s participants left unpaired by the solver: %s",
            round_number,
            len(unmatched),
            ", ".join(unmatched),
        )
        raise UnpairedParticipantsException(unmatched)
    if unmatched:
        raise IncompleteMatchingException(
            f"Round {round_number}: participant {unmatched[0]} has no partner"
        )
    return pairs, slot_partner


def _order_matchups(
    pairs: List[Tuple[str, str]], standings: Sequence[Standing]
) -> List[Matchup]:
    """Display order: higher combined points first, then best standings position.

    Within a pair, the higher-ranked participant is player 1.
    """
    rank: Dict[str, int] = {s.id: index for index, s in enumerate(standings)}
    points: Dict[str, float] = {s.id: s.wins for s in standings}

    ordered = []
    for first, second in pairs:
        if rank[second] < rank[first]:
            first, second = second, first
        ordered.append((first, second))
    ordered.sort(key=lambda pair: (-(points[pair[0]] + points[pair[1]]), rank[pair[0]]))
    return [Matchup(player1_id=first, player2_id=second) for first, second in ordered]
