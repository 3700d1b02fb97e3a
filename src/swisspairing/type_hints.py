"""Type hints used in Swiss Pairing."""

from typing import Dict, FrozenSet, List, Literal, Optional, Tuple

# "idA-idB" key used by the history index
MatchupKey = str
# Unordered pair of participant ids
PairKey = FrozenSet[str]

ByeSelection = Literal["standings", "matching"]
Outcome = Literal["win", "timed_win", "draw", "loss"]

# (vertex, vertex, weight) edge handed to the matching solver
WeightedEdge = Tuple[int, int, float]
# mate[v] is the vertex matched to v, or -1
Mates = List[int]

# Row handed to the pairing sink
MatchRecord = Dict[str, object]
ByeRecord = Optional[Dict[str, object]]

#  LocalWords:  MatchupKey PairKey
