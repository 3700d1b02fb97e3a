"""Weighted pairing graph over the participants of a round."""

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
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, TypeVar, Union

from swisspairing.models import PairingConfig, Standing
from swisspairing.pairing.history import PairingHistory
from swisspairing.type_hints import WeightedEdge
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RealParticipant:
    """Graph node standing for an active participant."""

    participant_id: str
    seed: int
    points: float
    differential: int

    @classmethod
    def from_standing(cls, standing: Standing) -> "RealParticipant":
        return cls(
            participant_id=standing.id,
            seed=standing.seed,
            points=standing.wins,
            differential=standing.differential,
        )


@dataclass(frozen=True)
class ByeSlot:
    """Synthetic node added when the participant count is odd.

    Whoever is matched with the bye slot receives the bye. The slot has
    zero points and zero differential, which biases the bye toward the
    bottom of the standings, and it counts as having "played" every
    participant once per bye they already received. Its edge to anyone
    above the fewest byes in the field is pushed below every other edge.
    """

    points: float = 0.0
    differential: int = 0


PairingNode = Union[RealParticipant, ByeSlot]


def seeded_shuffle(items: Sequence[T], round_number: int, seed_multiplier: int) -> List[T]:
    """Deterministically shuffle ``items`` for a round.

    Uses a ``random.Random`` seeded with the string
    ``"{round_number}:{seed_multiplier}"``; string seeds are hashed with
    SHA-512 by :mod:`random`, so the same round and multiplier give the
    same permutation on every platform and interpreter run.
    """
    shuffled = list(items)
    random.Random(f"{round_number}:{seed_multiplier}").shuffle(shuffled)
    return shuffled


def times_played(node_a: PairingNode, node_b: PairingNode, history: PairingHistory) -> int:
    """Number of previous meetings between two nodes.

    A bye slot has met a participant once for each bye that participant
    received.
    """
    if isinstance(node_a, ByeSlot) and isinstance(node_b, ByeSlot):
        return 0
    if isinstance(node_a, ByeSlot):
        return history.byes_received(node_b.participant_id)
    if isinstance(node_b, ByeSlot):
        return history.byes_received(node_a.participant_id)
    return history.times_played(node_a.participant_id, node_b.participant_id)


def last_round_played(
    node_a: PairingNode, node_b: PairingNode, history: PairingHistory
) -> int:
    if isinstance(node_a, ByeSlot) or isinstance(node_b, ByeSlot):
        return 0
    return history.last_round_played(node_a.participant_id, node_b.participant_id)


def edge_weight(
    node_a: PairingNode,
    node_b: PairingNode,
    history: PairingHistory,
    round_number: int,
    config: PairingConfig,
) -> float:
    """Desirability of pairing two nodes; higher is better, never positive.

    ``-(|dp| ** standing_power + |dd| * differential_weight + rematch)``
    where the rematch term is ``rematch_weight`` per previous meeting,
    plus ``recency_weight`` scaled by how late the last meeting was.
    """
    point_diff = abs(node_a.points - node_b.points) ** config.standing_power
    differential_diff = (
        abs(node_a.differential - node_b.differential) * config.differential_weight
    )
    meetings = times_played(node_a, node_b, history)
    rematch_penalty = config.rematch_weight * meetings
    if meetings and config.recency_weight:
        last_round = last_round_played(node_a, node_b, history)
        rematch_penalty += config.recency_weight * last_round / round_number
    return -(point_diff + differential_diff + rematch_penalty)


@dataclass
class PairingGraph:
    """Complete weighted graph handed to the matching solver.

    Attributes
    ----------
    nodes : list of PairingNode
        Nodes in solver order; the index of a node is its vertex id.
    edges : list of (int, int, float)
        One edge per unordered node pair.
    """

    nodes: List[PairingNode] = field(default_factory=list)
    edges: List[WeightedEdge] = field(default_factory=list)

    @property
    def bye_index(self) -> Optional[int]:
        for index, node in enumerate(self.nodes):
            if isinstance(node, ByeSlot):
                return index
        return None

    def weight(self, i: int, j: int) -> float:
        lo, hi = min(i, j), max(i, j)
        for a, b, w in self.edges:
            if a == lo and b == hi:
                return w
        raise KeyError((i, j))


def _penalize_repeat_byes(
    nodes: List[PairingNode], edges: List[WeightedEdge], history: PairingHistory
) -> List[WeightedEdge]:
    """Make a repeat bye lose to any bye for someone with the fewest byes.

    The penalty exceeds the total cost of every edge in the graph, so a
    matching that hands the bye to someone with the fewest byes always
    outweighs one that does not.
    """
    real = [node for node in nodes if isinstance(node, RealParticipant)]
    fewest = min(history.byes_received(node.participant_id) for node in real)
    penalty = sum(-w for _, _, w in edges) + 1

    adjusted: List[WeightedEdge] = []
    for i, j, w in edges:
        node_i, node_j = nodes[i], nodes[j]
        if isinstance(node_i, ByeSlot) or isinstance(node_j, ByeSlot):
            partner = node_j if isinstance(node_i, ByeSlot) else node_i
            if history.byes_received(partner.participant_id) > fewest:
                w -= penalty
        adjusted.append((i, j, w))
    return adjusted


def build_pairing_graph(
    standings: Iterable[Standing],
    history: PairingHistory,
    round_number: int,
    config: Optional[PairingConfig] = None,
) -> PairingGraph:
    """Build the complete pairing graph for the given participants.

    Parameters
    ----------
    standings : iterable of Standing
        Standings of the participants to pair. Callers drop inactive
        participants (and a pre-selected bye recipient) beforehand.
    history : PairingHistory
        Meetings and byes before ``round_number``.
    round_number : int
        Round being paired; keys the node shuffle.
    config : PairingConfig, optional
        Weighting parameters.

    Returns
    -------
    PairingGraph
        Shuffled nodes, plus a ByeSlot if the node count was odd, and one
        edge per node pair.
    """
    config = config or PairingConfig()
    nodes: List[PairingNode] = [RealParticipant.from_standing(s) for s in standings]
    if len(nodes) % 2 == 1:
        nodes.append(ByeSlot())
        logger.debug(
            "Odd field in round %s: added bye slot (%s prior bye recipients)",
            round_number,
            len(history.bye_recipients()),
        )

    # Counteract ordering bias of the solver among equal-weight matchings
    nodes = seeded_shuffle(nodes, round_number, config.seed_multiplier)

    edges: List[WeightedEdge] = []
    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            edges.append(
                (i, j, edge_weight(nodes[i], nodes[j], history, round_number, config))
            )
    if any(isinstance(node, ByeSlot) for node in nodes) and len(nodes) > 1:
        edges = _penalize_repeat_byes(nodes, edges, history)
    return PairingGraph(nodes=nodes, edges=edges)
