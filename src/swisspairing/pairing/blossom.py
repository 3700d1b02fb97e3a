"""Maximum weight matching in general graphs (Edmonds blossom algorithm).

Primal-dual implementation running in O(n^3). Odd cycles found while
growing alternating trees are contracted into blossoms and expanded again
when their dual variable reaches zero. Vertex duals, blossom duals and edge
slacks follow the classic formulation of Galil, "Efficient algorithms for
finding maximum matching in graphs" (1986): the slack of edge (i, j) is
``dual[i] + dual[j] - 2 * weight``, with blossom duals folded in through
the blossom structure.

Vertices are non-negative integers. Edges are ``(i, j, weight)`` tuples;
weights may be integers or floats and of any sign. Endpoints of edge ``k``
are numbered ``2k`` (vertex ``i``) and ``2k + 1`` (vertex ``j``).
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

from typing import Iterator, List, Optional, Sequence

from swisspairing.constants import UNMATCHED
from swisspairing.exceptions import InvalidGraphException
from swisspairing.type_hints import Mates, WeightedEdge

# Labels of top-level blossoms while growing alternating trees
FREE = 0
S_LABEL = 1
T_LABEL = 2
# Temporary mark set by _scan_blossom on visited S-blossoms
BREADCRUMB = 4

# Kinds of dual adjustment in a stage
DELTA_VERTEX_DUAL = 1
DELTA_FREE_EDGE = 2
DELTA_S_EDGE = 3
DELTA_T_BLOSSOM = 4


def _validate_edges(edges: Sequence[WeightedEdge]) -> int:
    """Return the number of vertices implied by ``edges``."""
    nvertex = 0
    for i, j, _ in edges:
        if i < 0 or j < 0:
            raise InvalidGraphException(f"Negative vertex id in edge ({i}, {j})")
        if i == j:
            raise InvalidGraphException(f"Self loop on vertex {i}")
        nvertex = max(nvertex, i + 1, j + 1)
    return nvertex


class _BlossomMatcher:
    """State of one maximum weight matching computation."""

    def __init__(self, edges: Sequence[WeightedEdge], max_cardinality: bool):
        self.edges = list(edges)
        self.max_cardinality = max_cardinality
        self.nedge = len(self.edges)
        self.nvertex = nvertex = _validate_edges(self.edges)

        max_weight = max(0, max(w for _, _, w in self.edges))
        # Halving S-S slacks stays exact in integer arithmetic
        self.integer_weights = all(isinstance(w, int) for _, _, w in self.edges)

        # endpoint[p] is the vertex at endpoint p
        self.endpoint = [self.edges[p // 2][p % 2] for p in range(2 * self.nedge)]
        # neighbend[v] lists the remote endpoints of edges incident to v
        self.neighbend: List[List[int]] = [[] for _ in range(nvertex)]
        for k, (i, j, _) in enumerate(self.edges):
            self.neighbend[i].append(2 * k + 1)
            self.neighbend[j].append(2 * k)

        # mate[v] is the remote endpoint of v's matched edge, or -1
        self.mate = nvertex * [UNMATCHED]

        # Indices 0..n-1 are vertices (trivial blossoms), n..2n-1 are
        # non-trivial blossoms.
        self.label = (2 * nvertex) * [FREE]
        # Endpoint through which a blossom got its label, -1 for tree roots
        self.labelend = (2 * nvertex) * [-1]
        self.inblossom = list(range(nvertex))
        self.blossomparent = (2 * nvertex) * [-1]
        self.blossomchilds: List[Optional[List[int]]] = (2 * nvertex) * [None]
        self.blossombase = list(range(nvertex)) + nvertex * [-1]
        # blossomendps[b][i] connects blossomchilds[b][i] to the next child
        self.blossomendps: List[Optional[List[int]]] = (2 * nvertex) * [None]
        # Least-slack edge to a different S-blossom, or to a free vertex
        self.bestedge = (2 * nvertex) * [-1]
        self.blossombestedges: List[Optional[List[int]]] = (2 * nvertex) * [None]
        self.unusedblossoms = list(range(nvertex, 2 * nvertex))
        self.dualvar = nvertex * [max_weight] + nvertex * [0]
        # Edges known to have zero slack
        self.allowedge = self.nedge * [False]
        self.queue: List[int] = []

    def slack(self, k: int):
        i, j, wt = self.edges[k]
        return self.dualvar[i] + self.dualvar[j] - 2 * wt

    def blossom_leaves(self, b: int) -> Iterator[int]:
        if b < self.nvertex:
            yield b
        else:
            for t in self.blossomchilds[b]:
                if t < self.nvertex:
                    yield t
                else:
                    yield from self.blossom_leaves(t)

    def assign_label(self, w: int, t: int, p: int) -> None:
        """Label vertex ``w`` and its top-level blossom, reached through ``p``."""
        b = self.inblossom[w]
        self.label[w] = self.label[b] = t
        self.labelend[w] = self.labelend[b] = p
        self.bestedge[w] = self.bestedge[b] = -1
        if t == S_LABEL:
            self.queue.extend(self.blossom_leaves(b))
        elif t == T_LABEL:
            # The mate of a T-blossom's base becomes an S-vertex
            base = self.blossombase[b]
            self.assign_label(
                self.endpoint[self.mate[base]], S_LABEL, self.mate[base] ^ 1
            )

    def scan_blossom(self, v: int, w: int) -> int:
        """Trace back from ``v`` and ``w`` to find a new blossom or an augmenting path.

        Returns the base vertex of the new blossom, or -1 if the two paths
        reach different roots.
        """
        path = []
        base = -1
        while v != -1 or w != -1:
            b = self.inblossom[v]
            if self.label[b] & BREADCRUMB:
                base = self.blossombase[b]
                break
            path.append(b)
            self.label[b] = S_LABEL | BREADCRUMB
            if self.labelend[b] == -1:
                # Reached a single root
                v = -1
            else:
                # One step back to the T-blossom, one more to the next S-blossom
                v = self.endpoint[self.labelend[b]]
                b = self.inblossom[v]
                v = self.endpoint[self.labelend[b]]
            # Alternate between both paths
            if w != -1:
                v, w = w, v
        for b in path:
            self.label[b] = S_LABEL
        return base

    def add_blossom(self, base: int, k: int) -> None:
        """Contract the odd cycle closed by edge ``k`` into a new S-blossom."""
        v, w, _ = self.edges[k]
        bb = self.inblossom[base]
        bv = self.inblossom[v]
        bw = self.inblossom[w]
        b = self.unusedblossoms.pop()
        self.blossombase[b] = base
        self.blossomparent[b] = -1
        self.blossomparent[bb] = b

        path: List[int] = []
        endps: List[int] = []
        self.blossomchilds[b] = path
        self.blossomendps[b] = endps
        # Trace back from v to the base
        while bv != bb:
            self.blossomparent[bv] = b
            path.append(bv)
            endps.append(self.labelend[bv])
            v = self.endpoint[self.labelend[bv]]
            bv = self.inblossom[v]
        path.append(bb)
        path.reverse()
        endps.reverse()
        endps.append(2 * k)
        # Trace back from w to the base
        while bw != bb:
            self.blossomparent[bw] = b
            path.append(bw)
            endps.append(self.labelend[bw] ^ 1)
            w = self.endpoint[self.labelend[bw]]
            bw = self.inblossom[w]

        self.label[b] = S_LABEL
        self.labelend[b] = self.labelend[bb]
        self.dualvar[b] = 0
        for leaf in self.blossom_leaves(b):
            if self.label[self.inblossom[leaf]] == T_LABEL:
                # Former T-vertices become S-vertices and must be scanned
                self.queue.append(leaf)
            self.inblossom[leaf] = b

        # Least-slack edges from the new blossom to each neighbouring S-blossom
        bestedgeto = (2 * self.nvertex) * [-1]
        for child in path:
            if self.blossombestedges[child] is None:
                nblists = [
                    [p // 2 for p in self.neighbend[leaf]]
                    for leaf in self.blossom_leaves(child)
                ]
            else:
                nblists = [self.blossombestedges[child]]
            for nblist in nblists:
                for edge in nblist:
                    i, j, _ = self.edges[edge]
                    if self.inblossom[j] == b:
                        i, j = j, i
                    bj = self.inblossom[j]
                    if (
                        bj != b
                        and self.label[bj] == S_LABEL
                        and (
                            bestedgeto[bj] == -1
                            or self.slack(edge) < self.slack(bestedgeto[bj])
                        )
                    ):
                        bestedgeto[bj] = edge
            self.blossombestedges[child] = None
            self.bestedge[child] = -1
        self.blossombestedges[b] = [edge for edge in bestedgeto if edge != -1]
        self.bestedge[b] = -1
        for edge in self.blossombestedges[b]:
            if self.bestedge[b] == -1 or self.slack(edge) < self.slack(self.bestedge[b]):
                self.bestedge[b] = edge

    def expand_blossom(self, b: int, endstage: bool) -> None:
        """Dissolve blossom ``b`` back into its sub-blossoms."""
        for s in self.blossomchilds[b]:
            self.blossomparent[s] = -1
            if s < self.nvertex:
                self.inblossom[s] = s
            elif endstage and self.dualvar[s] == 0:
                # Zero-dual sub-blossoms are expanded recursively at stage end
                self.expand_blossom(s, endstage)
            else:
                for leaf in self.blossom_leaves(s):
                    self.inblossom[leaf] = s

        if not endstage and self.label[b] == T_LABEL:
            # Relabel the sub-blossoms on the even path from the entry
            # child to the base; the rest become free or keep their
            # labels from inside.
            entrychild = self.inblossom[self.endpoint[self.labelend[b] ^ 1]]
            childs = self.blossomchilds[b]
            endps = self.blossomendps[b]
            j = childs.index(entrychild)
            if j & 1:
                # Odd position: walk forward and wrap around
                j -= len(childs)
                jstep = 1
                endptrick = 0
            else:
                # Even position: walk backward
                jstep = -1
                endptrick = 1
            p = self.labelend[b]
            while j != 0:
                # Relabel the T-sub-blossom
                self.label[self.endpoint[p ^ 1]] = FREE
                self.label[self.endpoint[endps[j - endptrick] ^ endptrick ^ 1]] = FREE
                self.assign_label(self.endpoint[p ^ 1], T_LABEL, p)
                # Step to the next S-sub-blossom and note its forward endpoint
                self.allowedge[endps[j - endptrick] // 2] = True
                j += jstep
                p = endps[j - endptrick] ^ endptrick
                # Step to the next T-sub-blossom
                self.allowedge[p // 2] = True
                j += jstep
            # The base sub-blossom becomes a T-blossom without relabelling its mate
            bv = childs[j]
            self.label[self.endpoint[p ^ 1]] = self.label[bv] = T_LABEL
            self.labelend[self.endpoint[p ^ 1]] = self.labelend[bv] = p
            self.bestedge[bv] = -1
            # Sub-blossoms on the odd path that were reached from outside
            # keep a T label.
            j += jstep
            while childs[j] != entrychild:
                bv = childs[j]
                if self.label[bv] == S_LABEL:
                    # Reached through its own mate; already handled
                    j += jstep
                    continue
                reached = None
                for leaf in self.blossom_leaves(bv):
                    if self.label[leaf] != FREE:
                        reached = leaf
                        break
                if reached is not None:
                    self.label[reached] = FREE
                    self.label[self.endpoint[self.mate[self.blossombase[bv]]]] = FREE
                    self.assign_label(reached, T_LABEL, self.labelend[reached])
                j += jstep

        self.label[b] = self.labelend[b] = -1
        self.blossomchilds[b] = self.blossomendps[b] = None
        self.blossombase[b] = -1
        self.blossombestedges[b] = None
        self.bestedge[b] = -1
        self.unusedblossoms.append(b)

    def augment_blossom(self, b: int, v: int) -> None:
        """Swap matched and unmatched edges along the even path from ``v`` to the base."""
        # The sub-blossom of b that contains v
        t = v
        while self.blossomparent[t] != b:
            t = self.blossomparent[t]
        if t >= self.nvertex:
            self.augment_blossom(t, v)

        childs = self.blossomchilds[b]
        endps = self.blossomendps[b]
        i = j = childs.index(t)
        if i & 1:
            j -= len(childs)
            jstep = 1
            endptrick = 0
        else:
            jstep = -1
            endptrick = 1
        while j != 0:
            j += jstep
            t = childs[j]
            p = endps[j - endptrick] ^ endptrick
            if t >= self.nvertex:
                self.augment_blossom(t, self.endpoint[p])
            j += jstep
            t = childs[j]
            if t >= self.nvertex:
                self.augment_blossom(t, self.endpoint[p ^ 1])
            self.mate[self.endpoint[p]] = p ^ 1
            self.mate[self.endpoint[p ^ 1]] = p
        # Rotate so that the sub-blossom containing v becomes the base
        self.blossomchilds[b] = childs[i:] + childs[:i]
        self.blossomendps[b] = endps[i:] + endps[:i]
        self.blossombase[b] = self.blossombase[self.blossomchilds[b][0]]

    def augment_matching(self, k: int) -> None:
        """Augment along the path through tight edge ``k`` between two S-vertices."""
        v, w, _ = self.edges[k]
        for s, p in ((v, 2 * k + 1), (w, 2 * k)):
            # Walk from s back to its tree root, flipping edges on the way
            while True:
                bs = self.inblossom[s]
                if bs >= self.nvertex:
                    self.augment_blossom(bs, s)
                self.mate[s] = p
                if self.labelend[bs] == -1:
                    # Reached the single root
                    break
                t = self.endpoint[self.labelend[bs]]
                bt = self.inblossom[t]
                s = self.endpoint[self.labelend[bt]]
                j = self.endpoint[self.labelend[bt] ^ 1]
                if bt >= self.nvertex:
                    self.augment_blossom(bt, j)
                self.mate[j] = self.labelend[bt]
                p = self.labelend[bt] ^ 1

    def _reset_stage(self) -> None:
        nvertex = self.nvertex
        self.label[:] = (2 * nvertex) * [FREE]
        self.bestedge[:] = (2 * nvertex) * [-1]
        self.blossombestedges[nvertex:] = nvertex * [None]
        self.allowedge[:] = self.nedge * [False]
        self.queue[:] = []
        # Every single top-level blossom is the root of a new tree
        for v in range(nvertex):
            if self.mate[v] == UNMATCHED and self.label[self.inblossom[v]] == FREE:
                self.assign_label(v, S_LABEL, -1)

    def _grow_trees(self) -> bool:
        """Scan queued S-vertices; return True once the matching was augmented."""
        while self.queue:
            v = self.queue.pop()
            for p in self.neighbend[v]:
                k = p // 2
                w = self.endpoint[p]
                if self.inblossom[v] == self.inblossom[w]:
                    # Internal edge of a blossom
                    continue
                kslack = None
                if not self.allowedge[k]:
                    kslack = self.slack(k)
                    if kslack <= 0:
                        self.allowedge[k] = True
                if self.allowedge[k]:
                    if self.label[self.inblossom[w]] == FREE:
                        # Free vertex: grow the tree with w as T-vertex
                        self.assign_label(w, T_LABEL, p ^ 1)
                    elif self.label[self.inblossom[w]] == S_LABEL:
                        # Two S-vertices: a blossom or an augmenting path
                        base = self.scan_blossom(v, w)
                        if base >= 0:
                            self.add_blossom(base, k)
                        else:
                            self.augment_matching(k)
                            return True
                    elif self.label[w] == FREE:
                        # w sits inside a T-blossom but was not reached yet;
                        # remember how for a later expansion.
                        self.label[w] = T_LABEL
                        self.labelend[w] = p ^ 1
                elif self.label[self.inblossom[w]] == S_LABEL:
                    b = self.inblossom[v]
                    if self.bestedge[b] == -1 or kslack < self.slack(self.bestedge[b]):
                        self.bestedge[b] = k
                elif self.label[w] == FREE:
                    if self.bestedge[w] == -1 or kslack < self.slack(self.bestedge[w]):
                        self.bestedge[w] = k
        return False

    def _adjust_duals(self) -> bool:
        """Apply the smallest dual change that makes progress.

        Returns False when no further augmentation is possible in this
        stage.
        """
        nvertex = self.nvertex
        deltatype = -1
        delta = deltaedge = deltablossom = None

        # Vertex duals may drop to zero (plain maximum weight only)
        if not self.max_cardinality:
            deltatype = DELTA_VERTEX_DUAL
            delta = min(self.dualvar[:nvertex])

        # Edge between an S-vertex and a free vertex
        for v in range(nvertex):
            if self.label[self.inblossom[v]] == FREE and self.bestedge[v] != -1:
                d = self.slack(self.bestedge[v])
                if deltatype == -1 or d < delta:
                    delta = d
                    deltatype = DELTA_FREE_EDGE
                    deltaedge = self.bestedge[v]

        # Edge between two S-blossoms
        for b in range(2 * nvertex):
            if (
                self.blossomparent[b] == -1
                and self.label[b] == S_LABEL
                and self.bestedge[b] != -1
            ):
                kslack = self.slack(self.bestedge[b])
                if self.integer_weights:
                    d = kslack // 2
                else:
                    d = kslack / 2
                if deltatype == -1 or d < delta:
                    delta = d
                    deltatype = DELTA_S_EDGE
                    deltaedge = self.bestedge[b]

        # Dual of a T-blossom reaching zero
        for b in range(nvertex, 2 * nvertex):
            if (
                self.blossombase[b] >= 0
                and self.blossomparent[b] == -1
                and self.label[b] == T_LABEL
                and (deltatype == -1 or self.dualvar[b] < delta)
            ):
                delta = self.dualvar[b]
                deltatype = DELTA_T_BLOSSOM
                deltablossom = b

        if deltatype == -1:
            # Maximum cardinality reached; a final vertex dual update keeps
            # the duals feasible.
            deltatype = DELTA_VERTEX_DUAL
            delta = max(0, min(self.dualvar[:nvertex]))

        for v in range(nvertex):
            if self.label[self.inblossom[v]] == S_LABEL:
                self.dualvar[v] -= delta
            elif self.label[self.inblossom[v]] == T_LABEL:
                self.dualvar[v] += delta
        for b in range(nvertex, 2 * nvertex):
            if self.blossombase[b] >= 0 and self.blossomparent[b] == -1:
                if self.label[b] == S_LABEL:
                    self.dualvar[b] += delta
                elif self.label[b] == T_LABEL:
                    self.dualvar[b] -= delta

        if deltatype == DELTA_VERTEX_DUAL:
            return False
        if deltatype == DELTA_FREE_EDGE:
            self.allowedge[deltaedge] = True
            i, j, _ = self.edges[deltaedge]
            if self.label[self.inblossom[i]] == FREE:
                i, j = j, i
            self.queue.append(i)
        elif deltatype == DELTA_S_EDGE:
            self.allowedge[deltaedge] = True
            i, _, _ = self.edges[deltaedge]
            self.queue.append(i)
        elif deltatype == DELTA_T_BLOSSOM:
            self.expand_blossom(deltablossom, False)
        return True

    def solve(self) -> Mates:
        nvertex = self.nvertex
        # Each stage augments the matching by one edge or proves optimality
        for _ in range(nvertex):
            self._reset_stage()
            augmented = False
            while True:
                if self._grow_trees():
                    augmented = True
                    break
                if not self._adjust_duals():
                    break
            if not augmented:
                break
            # Zero-dual S-blossoms are expanded at the end of a stage
            for b in range(nvertex, 2 * nvertex):
                if (
                    self.blossomparent[b] == -1
                    and self.blossombase[b] >= 0
                    and self.label[b] == S_LABEL
                    and self.dualvar[b] == 0
                ):
                    self.expand_blossom(b, True)

        # Translate matched endpoints into vertices
        mates = list(self.mate)
        for v in range(nvertex):
            if mates[v] >= 0:
                mates[v] = self.endpoint[mates[v]]
        for v in range(nvertex):
            if mates[v] != UNMATCHED and mates[mates[v]] != v:
                raise InvalidGraphException(
                    f"Inconsistent matching: {v} -> {mates[v]} -> {mates[mates[v]]}"
                )
        return mates


def max_weight_matching(
    edges: Sequence[WeightedEdge], max_cardinality: bool = True
) -> Mates:
    """Compute a maximum weight matching of an undirected graph.

    Parameters
    ----------
    edges : sequence of (int, int, float)
        Undirected weighted edges. Vertices are non-negative integers.
    max_cardinality : bool
        If True, only maximum-cardinality matchings are considered, and
        the heaviest of them is returned. Negative weights are then still
        matched when needed to cover more vertices.

    Returns
    -------
    list of int
        ``mates[v]`` is the vertex matched to ``v``, or -1 if ``v`` is
        unmatched. Vertices with no incident edge are reported as
        unmatched.

    Raises
    ------
    InvalidGraphException
        On self loops or negative vertex ids.
    """
    if not edges:
        return []
    return _BlossomMatcher(edges, max_cardinality).solve()


def matching_weight(edges: Sequence[WeightedEdge], mates: Mates) -> float:
    """Total weight of the matched edges in ``mates``."""
    total = 0
    for i, j, w in edges:
        if i < len(mates) and mates[i] == j:
            total += w
    return total
