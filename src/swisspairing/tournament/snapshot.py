"""JSON snapshots of a tournament: settings, participants, matches and byes."""

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

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from swisspairing.constants import SNAPSHOT_FILE_EXTENSION
from swisspairing.exceptions import InvalidConfigurationException, SnapshotLoadException
from swisspairing.models import Bye, Match, Participant, RoundPairing, TournamentSettings
from swisspairing.pairing import calculate_standings, create_swiss_pairings
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

SNAPSHOT_VERSION = 1


@dataclass
class TournamentSnapshot:
    """Everything needed to pair or rank a tournament outside a store."""

    settings: TournamentSettings
    participants: List[Participant] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    byes: List[Bye] = field(default_factory=list)

    @property
    def last_round(self) -> int:
        rounds = [m.round_number for m in self.matches]
        rounds.extend(b.round_number for b in self.byes)
        return max(rounds, default=0)

    def next_round(self, rng=None) -> RoundPairing:
        """Pair the round after the last one in the snapshot."""
        return create_swiss_pairings(
            self.last_round + 1,
            self.participants,
            self.matches,
            self.byes,
            config=self.settings.pairing,
            rng=rng,
        )

    def standings(self):
        return calculate_standings(
            self.last_round + 1, self.participants, self.matches, self.byes
        )

    @classmethod
    def from_store(cls, store, tournament_id: str) -> "TournamentSnapshot":
        """Capture the current state of a tournament held by a store."""
        before = store.current_round(tournament_id) + 1
        return cls(
            settings=store.fetch_settings(tournament_id),
            participants=store.fetch_participants(tournament_id),
            matches=store.fetch_matches(tournament_id, before),
            byes=store.fetch_byes(tournament_id, before),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize snapshot to dictionary."""
        return {
            "version": SNAPSHOT_VERSION,
            "settings": self.settings.to_dict(),
            "participants": [p.to_dict() for p in self.participants],
            "matches": [m.to_dict() for m in self.matches],
            "byes": [b.to_dict() for b in self.byes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSnapshot":
        """Deserialize snapshot from dictionary.

        Participants without a seed are seeded in file order.
        """
        participants = []
        for index, entry in enumerate(data.get("participants", []), start=1):
            if isinstance(entry, str):
                entry = {"id": entry}
            entry = dict(entry)
            entry.setdefault("seed", index)
            participants.append(Participant.from_dict(entry))
        return cls(
            settings=TournamentSettings.from_dict(data.get("settings", {})),
            participants=participants,
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            byes=[Bye.from_dict(b) for b in data.get("byes", [])],
        )


def load_snapshot(path: Union[str, Path]) -> TournamentSnapshot:
    """Read a snapshot file.

    Raises:
        SnapshotLoadException: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotLoadException(f"Cannot read snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotLoadException(f"Snapshot {path} must contain a JSON object")
    try:
        snapshot = TournamentSnapshot.from_dict(data)
    except (KeyError, TypeError, ValueError, InvalidConfigurationException) as e:
        raise SnapshotLoadException(f"Malformed snapshot {path}: {e}") from e

    logger.debug(
        f"Loaded snapshot {path}: {len(snapshot.participants)} participants, "
        f"{len(snapshot.matches)} matches, {len(snapshot.byes)} byes"
    )
    return snapshot


def save_snapshot(snapshot: TournamentSnapshot, path: Union[str, Path]) -> Path:
    """Write a snapshot file, adding the snapshot extension if missing."""
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(SNAPSHOT_FILE_EXTENSION)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2)
    logger.info(f"Saved snapshot to {path}")
    return path
