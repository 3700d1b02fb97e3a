import math
import random

import pytest

from swisspairing.exceptions import (
    DuplicateParticipantException,
    IncompleteMatchingException,
    InvalidConfigurationException,
    UnpairedParticipantsException,
)
from swisspairing.models import Bye, Match, Matchup, PairingConfig, Participant
from swisspairing.pairing import (
    PairingGraph,
    RealParticipant,
    create_swiss_pairings,
    pair_round_one,
)
from swisspairing.pairing.swiss import _decode_matching


def _participants(*ids):
    return [Participant(id=pid, seed=seed) for seed, pid in enumerate(ids, start=1)]


def _assert_valid_round(pairing, active_ids):
    ids = [pid for m in pairing.matchups for pid in m.participant_ids()]
    assert len(ids) == len(set(ids))
    assert set(ids) == set(active_ids)
    assert len(pairing.matchups) == math.ceil(len(active_ids) / 2)
    byes = [m for m in pairing.matchups if m.is_bye]
    assert len(byes) == len(active_ids) % 2
    if byes:
        assert pairing.matchups[-1].is_bye


def _play_round(pairing, matches, byes):
    """Player 1 wins every match 2-0; byes are worth a win."""
    for matchup in pairing.matchups:
        if matchup.is_bye:
            byes.append(Bye(pairing.round_number, matchup.player1_id, 3.0, 0))
        else:
            matches.append(
                Match(
                    pairing.round_number,
                    matchup.player1_id,
                    matchup.player2_id,
                    3.0,
                    0.0,
                    2,
                    0,
                )
            )


@pytest.mark.parametrize("count", [2, 5, 8, 11])
def test_round_one_covers_everyone(count):
    participants = _participants(*[f"p{i}" for i in range(count)])
    pairing = create_swiss_pairings(
        1, participants, [], config=PairingConfig(random_seed=3)
    )
    _assert_valid_round(pairing, [p.id for p in participants])


def test_round_one_same_seed_same_pairing():
    participants = _participants(*"abcdefg")
    first = pair_round_one(participants, random.Random(42))
    second = pair_round_one(participants, random.Random(42))
    assert first == second


def test_round_one_skips_dropped():
    participants = _participants("a", "b", "c")
    participants[2].dropped_out = True
    pairing = create_swiss_pairings(1, participants, [], rng=random.Random(1))
    assert pairing.matchups in ([Matchup("a", "b")], [Matchup("b", "a")])


def test_pairs_by_points():
    participants = _participants("1", "2", "3", "4")
    # 3 and 4 start with a bye worth a win, nobody has met
    byes = [Bye(1, "3", 3.0, 0), Bye(1, "4", 3.0, 0)]
    pairing = create_swiss_pairings(2, participants, [], byes)
    assert pairing.matchups == [Matchup("3", "4"), Matchup("1", "2")]


def test_rematch_avoided_with_four_participants():
    participants = _participants("a", "b", "c", "d")
    matches = [
        Match(1, "a", "b", 1.5, 1.5, 1, 1),
        Match(1, "c", "d", 1.5, 1.5, 1, 1),
    ]
    pairing = create_swiss_pairings(2, participants, matches)
    _assert_valid_round(pairing, ["a", "b", "c", "d"])
    for matchup in pairing.pairs:
        assert {matchup.player1_id, matchup.player2_id} not in ({"a", "b"}, {"c", "d"})


def test_higher_ranked_is_player1_and_top_board_first():
    participants = _participants("a", "b", "c", "d")
    matches = [
        Match(1, "b", "a", 3.0, 0.0, 2, 0),
        Match(1, "d", "c", 3.0, 0.0, 2, 1),
    ]
    pairing = create_swiss_pairings(2, participants, matches)
    assert pairing.matchups == [Matchup("b", "d"), Matchup("c", "a")]


@pytest.mark.parametrize("bye_selection", ["standings", "matching"])
def test_bye_fairness_five_participants(bye_selection):
    participants = _participants("A", "B", "C", "D", "E")
    config = PairingConfig(bye_selection=bye_selection, random_seed=11)
    matches, byes = [], []
    recipients = []
    for round_number in range(1, 4):
        pairing = create_swiss_pairings(
            round_number, participants, matches, byes, config=config
        )
        _assert_valid_round(pairing, [p.id for p in participants])
        recipients.append(pairing.bye_participant_id)
        _play_round(pairing, matches, byes)
    assert len(set(recipients)) == 3


def test_bye_goes_to_bottom_without_previous_bye():
    participants = _participants("a", "b", "c")
    matches = [Match(1, "a", "b", 3.0, 0.0, 2, 0)]
    byes = [Bye(1, "c", 3.0, 0)]
    pairing = create_swiss_pairings(2, participants, matches, byes)
    assert pairing.matchups == [Matchup("a", "c"), Matchup("b")]


def test_matching_mode_solver_picks_bye():
    participants = _participants("A", "B", "C")
    config = PairingConfig(bye_selection="matching")
    matches = [Match(1, "A", "B", 3.0, 0.0, 2, 0)]
    byes = [Bye(1, "C", 3.0, 0)]

    pairing = create_swiss_pairings(2, participants, matches, byes, config=config)
    assert pairing.matchups == [Matchup("A", "C"), Matchup("B")]

    matches.append(Match(2, "A", "C", 3.0, 0.0, 2, 1))
    byes.append(Bye(2, "B", 3.0, 0))
    pairing = create_swiss_pairings(3, participants, matches, byes, config=config)
    assert pairing.bye_participant_id == "A"
    assert pairing.pairs == [Matchup("C", "B")]


def test_everyone_had_a_bye_fewest_then_lowest_points():
    participants = _participants("a", "b", "c")
    matches = [Match(1, "a", "b", 3.0, 0.0, 2, 0), Match(2, "a", "c", 3.0, 0.0, 2, 0)]
    byes = [Bye(1, "c", 3.0, 0), Bye(2, "b", 3.0, 0), Bye(3, "a", 3.0, 0)]
    pairing = create_swiss_pairings(4, participants, matches, byes)
    # b and c tie on byes, points and differential; c ranks lower
    assert pairing.bye_participant_id == "c"


def test_forced_rematch_when_nothing_else():
    participants = _participants("a", "b")
    matches = [Match(1, "a", "b", 3.0, 0.0, 2, 0)]
    pairing = create_swiss_pairings(2, participants, matches)
    assert pairing.matchups == [Matchup("a", "b")]


def test_dropped_participants_are_not_paired():
    participants = _participants("a", "b", "c", "d", "e")
    participants[0].dropped_out = True
    matches = [Match(1, "a", "b", 3.0, 0.0, 2, 0), Match(1, "c", "d", 3.0, 0.0, 2, 0)]
    pairing = create_swiss_pairings(2, participants, matches, [Bye(1, "e", 3.0, 0)])
    _assert_valid_round(pairing, ["b", "c", "d", "e"])


def test_later_round_is_deterministic():
    participants = _participants(*"abcdefgh")
    matches = [
        Match(1, "a", "b", 3.0, 0.0, 2, 0),
        Match(1, "c", "d", 3.0, 0.0, 2, 1),
        Match(1, "e", "f", 1.5, 1.5, 1, 1),
        Match(1, "g", "h", 0.0, 3.0, 0, 2),
    ]
    assert create_swiss_pairings(2, participants, matches) == create_swiss_pairings(
        2, participants, list(reversed(matches))
    )


def test_invalid_round_number():
    with pytest.raises(ValueError):
        create_swiss_pairings(0, _participants("a", "b"), [])


def test_duplicate_participant_ids():
    participants = _participants("a", "b") + [Participant(id="a", seed=3)]
    with pytest.raises(DuplicateParticipantException):
        create_swiss_pairings(2, participants, [])


def test_invalid_configuration():
    with pytest.raises(InvalidConfigurationException):
        create_swiss_pairings(
            2, _participants("a", "b"), [], config=PairingConfig(bye_selection="lottery")
        )


def _four_node_graph():
    nodes = [
        RealParticipant(participant_id=pid, seed=seed, points=0.0, differential=0)
        for seed, pid in enumerate("abcd", start=1)
    ]
    return PairingGraph(nodes=nodes)


def test_single_unmatched_participant_is_an_error():
    with pytest.raises(IncompleteMatchingException):
        _decode_matching(_four_node_graph(), [1, 0, 2, -1], 2)


def test_several_unmatched_participants_abort_the_round(caplog):
    with pytest.raises(UnpairedParticipantsException) as excinfo:
        _decode_matching(_four_node_graph(), [1, 0, -1, -1], 2)
    assert excinfo.value.participant_ids == ["c", "d"]
    assert any(
        record.levelname == "CRITICAL" and "left unpaired" in record.getMessage()
        for record in caplog.records
    )
