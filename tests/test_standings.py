import pytest

from triopairing.controllers.tournament import (
    all_reached_target,
    are_tied,
    calculate_target_matches,
    get_top3,
    has_clear_top3,
    sort_by_standings,
)
from triopairing.models import Player


def _player(player_id, points=0, wins=0, losses=0):
    return Player(player_id, f"P{player_id}", points=points, wins=wins, losses=losses)


@pytest.mark.parametrize(
    "count, target",
    [(3, 3), (4, 3), (5, 4), (6, 4), (7, 5), (9, 5), (10, 6), (12, 6), (13, 8), (20, 8)],
)
def test_target_matches_table(count, target):
    assert calculate_target_matches(count) == target


def test_target_matches_above_table_is_capped():
    # (n - 1) // 2 + 2 only matters while it is below the cap
    assert calculate_target_matches(13) == min(8, 12 // 2 + 2)
    assert calculate_target_matches(100) == 8


def test_standings_order():
    players = [
        _player(1, points=2, wins=2, losses=1),
        _player(2, points=3, wins=2, losses=1),
        _player(3, points=2, wins=1, losses=1),
        _player(4, points=2, wins=2, losses=0),
        _player(5, points=2, wins=2, losses=1),
    ]

    ranked = sort_by_standings(players)

    # points desc, wins desc, losses asc, id asc
    assert [p.id for p in ranked] == [2, 4, 1, 5, 3]


def test_are_tied_needs_full_record():
    assert are_tied(_player(1, 2, 2, 1), _player(2, 2, 2, 1))
    assert not are_tied(_player(1, 2, 2, 1), _player(2, 2, 1, 1))
    assert not are_tied(_player(1, 2, 2, 1), _player(2, 2, 2, 2))


def test_clear_top3_with_fewer_than_four_players():
    players = [_player(i) for i in range(1, 4)]
    assert has_clear_top3(players)


def test_clear_top3_compares_third_and_fourth():
    clear = [
        _player(1, 3, 3, 0),
        _player(2, 2, 2, 1),
        _player(3, 1, 1, 2),
        _player(4, 0, 0, 3),
    ]
    tied = [
        _player(1, 3, 3, 0),
        _player(2, 2, 2, 1),
        _player(3, 1, 1, 2),
        _player(4, 1, 1, 2),
    ]

    assert has_clear_top3(clear)
    assert not has_clear_top3(tied)


def test_get_top3():
    players = [_player(i, points=i) for i in range(1, 6)]
    assert [p.id for p in get_top3(players)] == [5, 4, 3]


def test_all_reached_target():
    players = [_player(i, wins=2, losses=1) for i in range(1, 5)]
    assert all_reached_target(players)

    players[0].losses = 0
    assert not all_reached_target(players)
