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

# --- Constants ---
SNAPSHOT_FILE_EXTENSION = ".json"

# Match points awarded per side of a match
WIN_POINTS = 3.0
TIMED_WIN_POINTS = 2.0  # Win on time, round clock expired
DRAW_POINTS = 1.5
LOSS_POINTS = 0.0

# Outcome keys (for result entry)
OUTCOME_WIN = "win"
OUTCOME_TIMED_WIN = "timed_win"
OUTCOME_DRAW = "draw"
OUTCOME_LOSS = "loss"

OUTCOME_POINTS = {
    OUTCOME_WIN: WIN_POINTS,
    OUTCOME_TIMED_WIN: TIMED_WIN_POINTS,
    OUTCOME_DRAW: DRAW_POINTS,
    OUTCOME_LOSS: LOSS_POINTS,
}

# Opponent's points for a given outcome
OUTCOME_OPPONENT = {
    OUTCOME_WIN: OUTCOME_LOSS,
    OUTCOME_TIMED_WIN: OUTCOME_LOSS,
    OUTCOME_DRAW: OUTCOME_DRAW,
    OUTCOME_LOSS: OUTCOME_WIN,
}

VALID_MATCH_POINTS = frozenset(OUTCOME_POINTS.values())

# Bye awards (configurable per tournament)
DEFAULT_BYE_POINTS = WIN_POINTS
DEFAULT_BYE_DIFFERENTIAL = 0

# Pairing graph weighting
DEFAULT_REMATCH_WEIGHT = 100.0
DEFAULT_STANDING_POWER = 2.0
DEFAULT_DIFFERENTIAL_WEIGHT = 0.5
DEFAULT_RECENCY_WEIGHT = 0.0
DEFAULT_SEED_MULTIPLIER = 6781

# Matching solver
UNMATCHED = -1
DEFAULT_SOLVER_WARN_SECONDS = 5.0

# Bye selection modes
BYE_SELECTION_STANDINGS = "standings"  # Pick the bye before matching
BYE_SELECTION_MATCHING = "matching"  # Let the solver pick via the bye slot
BYE_SELECTION_MODES = (BYE_SELECTION_STANDINGS, BYE_SELECTION_MATCHING)
DEFAULT_BYE_SELECTION = BYE_SELECTION_STANDINGS

# Suggested number of rounds by participant count (hosting guide)
SUGGESTED_ROUNDS = [
    (2, 1),
    (4, 2),
    (8, 3),
    (16, 4),
    (32, 5),
    (64, 6),
    (128, 7),
]
MAX_SUGGESTED_ROUNDS = 8
