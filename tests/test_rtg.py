import json

import pytest

from triopairing.models import RoundType, TournamentStatus, TournamentType
from triopairing.testing.rtg import (
    RandomTournamentGenerator,
    ResultPattern,
    RTGConfig,
    create_small_tournament,
)


def _regular_keys(rounds):
    return [
        m.player_ids
        for round_data in rounds
        if round_data.round_type == RoundType.REGULAR
        for m in round_data.matches
    ]


@pytest.mark.parametrize("num_players", range(3, 14))
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_every_size_completes_with_final_winner(num_players, seed):
    config = RTGConfig(num_players=num_players, seed=seed)
    tournament_data = RandomTournamentGenerator(config).generate_complete_tournament()

    tournament = tournament_data["tournament"]
    rounds = tournament_data["rounds"]
    final_round = rounds[-1]

    assert tournament.status == TournamentStatus.COMPLETED
    assert final_round.round_type == RoundType.FINAL
    assert len(final_round.matches) == 1
    assert tournament_data["winner_id"] == final_round.matches[0].winner_id
    assert [r.round_type for r in rounds].count(RoundType.FINAL) == 1
    assert [r.round_type for r in rounds].count(RoundType.TIEBREAKER) <= 2
    target = tournament.target_matches
    assert all(p.matches_played >= target for p in tournament_data["players"])


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize(
    "pattern",
    [ResultPattern.RANDOM, ResultPattern.PREDICTABLE, ResultPattern.UPSET_FRIENDLY],
)
def test_rounds_are_disjoint(seed, pattern):
    config = RTGConfig(num_players=11, seed=seed, result_pattern=pattern)
    tournament_data = RandomTournamentGenerator(config).generate_complete_tournament()

    for round_data in tournament_data["rounds"]:
        ids = round_data.participant_ids
        assert len(ids) == len(set(ids))
        assert not set(ids) & set(round_data.bye_player_ids)


@pytest.mark.parametrize("seed", range(5))
def test_regular_rounds_do_not_repeat_triples(seed):
    # 84 combinations for 9 players, far more than the regular rounds need
    config = RTGConfig(num_players=9, seed=seed)
    tournament_data = RandomTournamentGenerator(config).generate_complete_tournament()

    keys = _regular_keys(tournament_data["rounds"])
    assert len(keys) == len(set(keys))


def test_same_seed_same_tournament():
    first = create_small_tournament(8, seed=21).generate_complete_tournament()
    second = create_small_tournament(8, seed=21).generate_complete_tournament()

    assert [r.to_dict() for r in first["rounds"]] == [
        r.to_dict() for r in second["rounds"]
    ]
    assert first["winner_id"] == second["winner_id"]


def test_underdog_policy_completes():
    config = RTGConfig(num_players=8, seed=4, bye_point_policy="underdog")
    tournament_data = RandomTournamentGenerator(config).generate_complete_tournament()

    assert tournament_data["tournament"].is_completed
    bye_points = [
        points
        for round_data in tournament_data["rounds"]
        for points in round_data.bye_points.values()
    ]
    assert set(bye_points) <= {1, 2}


def test_champions_meeting_simulation():
    config = RTGConfig(
        num_players=7, seed=2, tournament_type=TournamentType.CHAMPIONS_MEETING
    )
    tournament_data = RandomTournamentGenerator(config).generate_complete_tournament()

    assert len(tournament_data["rounds"]) == 3
    assert tournament_data["winner_id"] is None


def test_json_export():
    generator = create_small_tournament(6, seed=8)
    tournament_data = generator.generate_complete_tournament()

    exported = json.loads(generator.export_json_format(tournament_data))

    assert exported["tournament_config"]["num_players"] == 6
    assert len(exported["players"]) == 6
    assert all("strength" in p for p in exported["players"])
    assert exported["winner_id"] == tournament_data["winner_id"]
    assert exported["rounds"][-1]["round_type"] == "Final"
