import pytest

from triopairing.controllers.tournament import ResultRecorder
from triopairing.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    ResultNotFoundException,
)
from triopairing.models import MatchData, Player, RoundData


def _setup():
    players = {i: Player(i, f"P{i}") for i in range(1, 7)}
    round_data = RoundData(
        1, matches=[MatchData(1, (1, 2, 3)), MatchData(2, (4, 5, 6))]
    )
    return ResultRecorder(), round_data, players


def _records(players):
    return {pid: (p.points, p.wins, p.losses) for pid, p in players.items()}


def test_complete_round_is_applied():
    recorder, round_data, players = _setup()

    assert recorder.record_round_results(round_data, {1: 2, 2: 6}, players)

    assert round_data.is_completed
    assert players[2].wins == 1 and players[2].points == 1
    assert players[1].losses == 1 and players[1].points == 0
    assert players[6].wins == 1
    assert players[4].losses == 1 and players[5].losses == 1


def test_partial_results_change_nothing():
    recorder, round_data, players = _setup()
    before = _records(players)

    assert not recorder.record_round_results(round_data, {1: 2}, players)

    assert _records(players) == before
    assert not any(m.is_decided for m in round_data.matches)


def test_unknown_match_is_rejected():
    recorder, round_data, players = _setup()
    with pytest.raises(ResultNotFoundException):
        recorder.record_round_results(round_data, {1: 2, 99: 4}, players)
    assert not round_data.matches[0].is_decided


def test_winner_must_have_played():
    recorder, round_data, players = _setup()
    with pytest.raises(InvalidResultException):
        recorder.record_round_results(round_data, {1: 4, 2: 5}, players)
    assert _records(players)[1] == (0, 0, 0)


def test_decided_match_cannot_be_rescored():
    recorder, round_data, players = _setup()
    recorder.record_round_results(round_data, {1: 1, 2: 4}, players)

    with pytest.raises(DuplicateResultException):
        recorder.record_round_results(round_data, {1: 2}, players)
    assert players[1].wins == 1
    assert players[2].wins == 0
