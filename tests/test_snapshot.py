import json

import pytest

from swisspairing.exceptions import SnapshotLoadException
from swisspairing.models import Bye, Match, Participant, TournamentSettings
from swisspairing.tournament import TournamentSnapshot, load_snapshot, save_snapshot


def _snapshot():
    return TournamentSnapshot(
        settings=TournamentSettings(name="Snap", num_rounds=3),
        participants=[Participant(id=pid, seed=i) for i, pid in enumerate("abc", 1)],
        matches=[Match(1, "a", "b", 3.0, 0.0, 2, 0)],
        byes=[Bye(1, "c", 3.0, 0)],
    )


def test_save_and_load(tmp_path):
    path = save_snapshot(_snapshot(), tmp_path / "nested" / "snap")
    assert path.suffix == ".json"
    loaded = load_snapshot(path)
    assert loaded == _snapshot()
    assert loaded.last_round == 1


def test_next_round_and_standings():
    snapshot = _snapshot()
    assert [s.id for s in snapshot.standings()] == ["a", "c", "b"]
    pairing = snapshot.next_round()
    assert pairing.round_number == 2
    assert pairing.bye_participant_id == "b"


def test_participants_without_seed(tmp_path):
    path = tmp_path / "plain.json"
    path.write_text(json.dumps({"participants": ["x", {"id": "y"}]}), encoding="utf-8")
    snapshot = load_snapshot(path)
    assert [(p.id, p.seed) for p in snapshot.participants] == [("x", 1), ("y", 2)]
    assert snapshot.settings.name == "Untitled Tournament"


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotLoadException):
        load_snapshot(tmp_path / "missing.json")


def test_bad_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotLoadException):
        load_snapshot(path)


def test_malformed_content(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SnapshotLoadException):
        load_snapshot(path)
    path.write_text(json.dumps({"matches": [{"player1_id": "a"}]}), encoding="utf-8")
    with pytest.raises(SnapshotLoadException):
        load_snapshot(path)
    path.write_text(
        json.dumps({"settings": {"pairing": {"bye_selection": "coin"}}}), encoding="utf-8"
    )
    with pytest.raises(SnapshotLoadException):
        load_snapshot(path)
