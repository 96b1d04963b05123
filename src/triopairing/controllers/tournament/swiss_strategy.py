"""Hybrid Swiss / round-robin planning for three player tournaments.

Rounds progress Regular -> Tiebreaker -> Final -> Complete:

- Regular rounds run until every player has played the target number of
  matches. Round 1 is a random draw, later rounds use the hybrid selector and
  leftover players get byes with compensation points.
- Once targets are met the final is created straight away when 3rd and 4th
  place are separated, otherwise tiebreaker rounds are played among the
  podium contenders, at most ``max_tiebreaker_rounds`` of them.
- The final is a single match between the top three. Its winner is the
  champion.
"""

# Trio Pairing
# Copyright (C) 2025  Trio Pairing developers
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

from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from triopairing.constants import (
    DEFAULT_BYE_POLICY,
    DEFAULT_MAX_TIEBREAKER_ROUNDS,
    PLAYERS_PER_MATCH,
)
from triopairing.controllers.tournament.standings import (
    all_reached_target,
    are_tied,
    calculate_target_matches,
    get_top3,
    has_clear_top3,
    sort_by_standings,
)
from triopairing.controllers.tournament.strategy import (
    RoundPlan,
    TournamentStrategy,
    count_completed_rounds,
    get_final_round,
    has_completed_final_round,
)
from triopairing.models.enums import PlannerState, RoundType, TournamentType
from triopairing.models.player import Player
from triopairing.pairing import (
    PlayerTriple,
    award_bye_points,
    create_random_first_round,
    select_bye_players,
    select_optimal_matches,
)
from triopairing.utils import setup_logger

if TYPE_CHECKING:
    from triopairing.tournament import Tournament

logger = setup_logger(__name__)


def get_podium_contenders(ranked: Sequence[Player]) -> List[Player]:
    """Players who could still claim a top three finish.

    Everyone from 3rd place down who is tied with 3rd place. When more than
    three players share that record the whole podium is open, so every player
    with at least 3rd place's points joins as well.

    Args:
        ranked: Players already in standings order

    Returns:
        Contenders in standings order
    """
    if len(ranked) < PLAYERS_PER_MATCH:
        return []

    third_place = ranked[2]
    contenders = [p for p in ranked[2:] if are_tied(p, third_place)]

    if len(contenders) > PLAYERS_PER_MATCH:
        contenders.extend(p for p in ranked if p.points >= third_place.points)

    unique = {p.id: p for p in contenders}
    return sort_by_standings(unique.values())


def build_tiebreaker_matches(
    ranked: Sequence[Player], contenders: Sequence[Player]
) -> List[PlayerTriple]:
    """Group contenders into tiebreaker matches by standings position.

    The group is padded up to a multiple of three with the best placed
    players outside the top two who are not contenders yet. It is then cut
    into consecutive triples; this is positional grouping and may repeat an
    earlier combination. Players beyond the last full triple sit out.
    """
    participants = list(contenders)
    contender_ids = {p.id for p in contenders}
    available = [p for p in ranked[2:] if p.id not in contender_ids]

    while len(participants) % PLAYERS_PER_MATCH != 0 and available:
        next_player = available.pop(0)
        participants.append(next_player)
        logger.debug("Added player %s to reach a multiple of 3", next_player.id)

    matches = []
    for i in range(0, len(participants) - PLAYERS_PER_MATCH + 1, PLAYERS_PER_MATCH):
        matches.append(PlayerTriple(tuple(participants[i : i + PLAYERS_PER_MATCH])))
    return matches


class SwissTournamentStrategy(TournamentStrategy):
    """Round planner for the hybrid Swiss / round-robin format.

    Args:
        rng: Random source for the round 1 draw; a fresh unseeded one if omitted
        bye_point_policy: "flat" or "underdog", see ``pairing.byes``
        max_tiebreaker_rounds: Completed tiebreakers after which the final is forced
    """

    tournament_type = TournamentType.SWISS

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        bye_point_policy: str = DEFAULT_BYE_POLICY,
        max_tiebreaker_rounds: int = DEFAULT_MAX_TIEBREAKER_ROUNDS,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.bye_point_policy = bye_point_policy
        self.max_tiebreaker_rounds = max_tiebreaker_rounds

    # ========== State Machine ==========

    def current_state(self, tournament: "Tournament") -> PlannerState:
        players = tournament.get_player_list()
        rounds = tournament.rounds

        if has_completed_final_round(rounds):
            return PlannerState.COMPLETE
        if not all_reached_target(players):
            return PlannerState.REGULAR
        if get_final_round(rounds) is not None:
            # final scheduled but not played yet
            return PlannerState.FINAL

        tiebreakers_played = count_completed_rounds(rounds, RoundType.TIEBREAKER)
        if has_clear_top3(players) or tiebreakers_played >= self.max_tiebreaker_rounds:
            return PlannerState.FINAL
        if not self._select_tiebreaker_matches(players):
            return PlannerState.FINAL
        return PlannerState.TIEBREAKER

    def plan_round(self, tournament: "Tournament", round_number: int) -> RoundPlan:
        players = tournament.get_player_list()
        state = self.current_state(tournament)
        logger.debug(
            "Round %s - Players: %s, Target: %s, State: %s",
            round_number,
            len(players),
            self.calculate_target_matches(len(players)),
            state.value,
        )

        if state == PlannerState.REGULAR:
            return self._plan_regular_round(tournament, round_number)
        if state == PlannerState.TIEBREAKER:
            return self._plan_tiebreaker_round(tournament, round_number)
        if state == PlannerState.FINAL and get_final_round(tournament.rounds) is None:
            return self._plan_final_round(tournament, round_number)

        logger.warning(
            "Round %s requested while the tournament is %s, nothing to plan",
            round_number,
            "complete" if state == PlannerState.COMPLETE else "waiting on its final",
        )
        return RoundPlan(round_type=RoundType.FINAL)

    # ========== Round Builders ==========

    def _plan_regular_round(
        self, tournament: "Tournament", round_number: int
    ) -> RoundPlan:
        """Hybrid Swiss / round-robin round with byes for the leftovers."""
        players = tournament.get_player_list()
        rounds = tournament.rounds

        if round_number == 1:
            matches = create_random_first_round(players, self.rng)
            logger.debug("Round 1: Using random seeding")
        else:
            matches = select_optimal_matches(players, rounds)
            logger.debug("Round %s: Using hybrid Swiss-Round-Robin pairing", round_number)

        bye_players = select_bye_players(players, matches, rounds)
        bye_points = award_bye_points(bye_players, self.bye_point_policy)

        logger.debug(
            "Round %s planned: %s matches, %s byes",
            round_number,
            len(matches),
            len(bye_players),
        )
        return RoundPlan(
            round_type=RoundType.REGULAR,
            matches=matches,
            bye_player_ids=[p.id for p in bye_players],
            bye_points=bye_points,
        )

    def _plan_tiebreaker_round(
        self, tournament: "Tournament", round_number: int
    ) -> RoundPlan:
        """Tiebreaker among the podium contenders, no bye points awarded.

        When the contenders cannot fill a single match (fewer than two of
        them, or nobody left to pad with) the podium is as settled as it will
        get and the final is planned instead.
        """
        matches = self._select_tiebreaker_matches(tournament.get_player_list())
        if not matches:
            logger.info(
                "Round %s: no tiebreaker match can be formed, moving to the final",
                round_number,
            )
            return self._plan_final_round(tournament, round_number)

        logger.debug(
            "Tiebreaker round %s: %s matches", round_number, len(matches)
        )
        return RoundPlan(round_type=RoundType.TIEBREAKER, matches=matches)

    def _select_tiebreaker_matches(self, players: Sequence[Player]) -> List[PlayerTriple]:
        ranked = sort_by_standings(players)
        contenders = get_podium_contenders(ranked)
        logger.debug(
            "Podium contenders: %s players - IDs: %s",
            len(contenders),
            ", ".join(str(p.id) for p in contenders),
        )
        if len(contenders) < 2:
            return []
        return build_tiebreaker_matches(ranked, contenders)

    def _plan_final_round(
        self, tournament: "Tournament", round_number: int
    ) -> RoundPlan:
        """Single championship match between the current top three."""
        top3 = get_top3(tournament.get_player_list())
        if len(top3) < PLAYERS_PER_MATCH:
            logger.warning(
                "Round %s: only %s players, final cannot be played",
                round_number,
                len(top3),
            )
            return RoundPlan(round_type=RoundType.FINAL)

        final_match = PlayerTriple.of(*top3)
        logger.debug("Final championship: %s", final_match.key_string)
        return RoundPlan(round_type=RoundType.FINAL, matches=[final_match])

    # ========== Completion ==========

    def should_complete_tournament(self, tournament: "Tournament") -> bool:
        complete = has_completed_final_round(tournament.rounds)
        logger.debug(
            "Tournament completion check - Players: %s, complete: %s",
            len(tournament.players),
            complete,
        )
        return complete

    def determine_winner(self, tournament: "Tournament") -> Optional[int]:
        """The winner of the final match, None until the final is played."""
        final_round = get_final_round(tournament.rounds)
        if final_round is None or not final_round.is_completed:
            return None
        if not final_round.matches:
            return None
        return final_round.matches[0].winner_id

    def calculate_target_matches(self, player_count: int) -> int:
        return calculate_target_matches(player_count)
