from swisspairing.models import Matchup, RoundPairing, Standing, TournamentSettings
from swisspairing.tournament import find_bye_participant, to_bye_record, to_match_records


def _pairing():
    return RoundPairing(
        round_number=3,
        matchups=[Matchup("a", "b"), Matchup("c", "d"), Matchup("e")],
    )


def test_find_bye_participant():
    assert find_bye_participant(_pairing().matchups) == "e"
    assert find_bye_participant([Matchup("a", "b")]) is None


def test_match_records_prefilled_from_standings():
    standings = {
        "a": Standing(id="a", seed=1, wins=6.0, differential=3),
        "b": Standing(id="b", seed=2, wins=4.5, differential=-1),
    }
    records = to_match_records(_pairing(), "t9", standings)
    assert len(records) == 2
    assert records[0] == {
        "tournament_id": "t9",
        "round": 3,
        "player1_id": "a",
        "player2_id": "b",
        "player1_score": None,
        "player2_score": None,
        "player1_match_points": 6.0,
        "player2_match_points": 4.5,
        "differential": 3,
        "differential2": -1,
        "match_order": 1,
    }
    assert records[1]["match_order"] == 2
    assert records[1]["player1_match_points"] == 0


def test_bye_record_uses_settings():
    settings = TournamentSettings(name="x", bye_points=1.5, bye_differential=2)
    assert to_bye_record(_pairing(), "t9", settings) == {
        "tournament_id": "t9",
        "round_number": 3,
        "participant_id": "e",
        "match_points": 1.5,
        "differential": 2,
    }
    even = RoundPairing(round_number=1, matchups=[Matchup("a", "b")])
    assert to_bye_record(even, "t9", settings) is None
