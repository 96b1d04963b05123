from math import comb

import pytest

from triopairing.models import MatchData, Player, RoundData, RoundType
from triopairing.pairing import (
    CombinationHistory,
    PlayerTriple,
    generate_all_combinations,
    get_unused_combinations,
    make_key,
    used_combination_keys,
)


def _players(count):
    return [Player(i, f"P{i}") for i in range(1, count + 1)]


@pytest.mark.parametrize("count", [3, 4, 5, 7, 10])
def test_generates_every_triple_once(count):
    triples = generate_all_combinations(_players(count))

    assert len(triples) == comb(count, 3)
    assert len({t.key for t in triples}) == len(triples)
    for triple in triples:
        assert list(triple.key) == sorted(triple.key)
        assert len(set(triple.key)) == 3


@pytest.mark.parametrize("count", [3, 6, 9])
def test_each_player_appears_in_expected_number_of_triples(count):
    triples = generate_all_combinations(_players(count))

    for player_id in range(1, count + 1):
        appearances = sum(1 for t in triples if player_id in t.key)
        assert appearances == comb(count - 1, 2)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_too_few_players_gives_no_triples(count):
    assert generate_all_combinations(_players(count)) == []


def test_generation_ignores_input_order():
    players = _players(5)
    shuffled = [players[3], players[0], players[4], players[2], players[1]]

    assert [t.key for t in generate_all_combinations(shuffled)] == [
        t.key for t in generate_all_combinations(players)
    ]


def test_triple_is_canonical():
    a, b, c = Player(7, "A"), Player(2, "B"), Player(5, "C")

    first = PlayerTriple.of(a, b, c)
    second = PlayerTriple.of(c, a, b)

    assert first.key == (2, 5, 7)
    assert first.key_string == "2-5-7"
    assert first == second
    assert hash(first) == hash(second)
    assert [p.id for p in first] == [2, 5, 7]


def test_triple_rejects_repeated_player():
    player = Player(1, "Solo")
    with pytest.raises(ValueError):
        PlayerTriple((player, player, Player(2, "Other")))


def test_triple_rejects_wrong_size():
    with pytest.raises(ValueError):
        PlayerTriple(tuple(_players(2)))


def test_make_key_sorts_ids():
    assert make_key([9, 1, 4]) == (1, 4, 9)
    with pytest.raises(ValueError):
        make_key([1, 2])


def test_used_keys_cover_every_round_type_and_open_matches():
    rounds = [
        RoundData(1, matches=[MatchData(1, (3, 1, 2), winner_id=1)]),
        RoundData(2, RoundType.TIEBREAKER, matches=[MatchData(2, (2, 4, 5))]),
        # two player matches are never counted
        RoundData(3, RoundType.FINAL, matches=[MatchData(3, (1, 4))]),
    ]

    assert used_combination_keys(rounds) == {(1, 2, 3), (2, 4, 5)}


def test_unused_combinations_exclude_history():
    players = _players(4)
    rounds = [RoundData(1, matches=[MatchData(1, (1, 2, 3), winner_id=2)])]

    unused = get_unused_combinations(players, rounds)

    assert [t.key for t in unused] == [(1, 2, 4), (1, 3, 4), (2, 3, 4)]


def test_history_ignores_incomplete_matches():
    rounds = [
        RoundData(1, matches=[MatchData(1, (4, 6, 5)), MatchData(2, (1, 2))]),
    ]

    history = CombinationHistory.from_rounds(rounds)

    assert history.used_keys == {(4, 5, 6)}
    assert history.has_been_used(PlayerTriple(tuple(_players(6)[3:])))
    assert not history.has_been_used(PlayerTriple(tuple(_players(3))))
