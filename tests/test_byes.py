from triopairing.models import MatchData, Player, RoundData
from triopairing.pairing import (
    PlayerTriple,
    award_bye_points,
    bye_points_for,
    count_byes,
    select_bye_players,
)


def _players(count):
    return [Player(i, f"P{i}") for i in range(1, count + 1)]


def test_count_byes_only_uses_completed_rounds():
    rounds = [
        RoundData(1, matches=[MatchData(1, (1, 2, 3), winner_id=1)]),
        RoundData(2, matches=[MatchData(2, (1, 2, 3))]),
    ]

    assert count_byes(4, rounds) == 1
    assert count_byes(1, rounds) == 0


def test_bye_order():
    players = _players(6)
    players[4].points = 2
    rounds = [RoundData(1, matches=[MatchData(1, (1, 5, 6), winner_id=1)])]
    # 4 already sat out round 1, 5 has more points than 6
    matches = [PlayerTriple(tuple(players[:3]))]

    byes = select_bye_players(players, matches, rounds)

    assert [p.id for p in byes] == [6, 5, 4]


def test_bye_order_falls_back_to_id():
    players = _players(5)
    matches = [PlayerTriple(tuple(players[1:4]))]

    byes = select_bye_players(players, matches, [])

    assert [p.id for p in byes] == [1, 5]


def test_no_byes_when_everyone_plays():
    players = _players(6)
    matches = [PlayerTriple(tuple(players[:3])), PlayerTriple(tuple(players[3:]))]

    assert select_bye_players(players, matches, []) == []


def test_flat_policy():
    assert bye_points_for(Player(1, "Low"), "flat") == 1
    assert bye_points_for(Player(2, "High", points=9), "flat") == 1


def test_underdog_policy():
    assert bye_points_for(Player(1, "Low", points=2), "underdog") == 2
    assert bye_points_for(Player(2, "High", points=3), "underdog") == 1


def test_award_bye_points_does_not_mutate():
    players = _players(2)

    awards = award_bye_points(players, "underdog")

    assert awards == {1: 2, 2: 2}
    assert all(p.points == 0 for p in players)
