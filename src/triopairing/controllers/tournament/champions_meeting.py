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

from typing import TYPE_CHECKING, Optional

from triopairing.constants import (
    CHAMPIONS_MEETING_ROUNDS,
    CHAMPIONS_MEETING_TARGET_MATCHES,
    FLAT_BYE_POINTS,
    PLAYERS_PER_MATCH,
)
from triopairing.controllers.tournament.strategy import RoundPlan, TournamentStrategy
from triopairing.models.enums import PlannerState, RoundType, TournamentType
from triopairing.pairing import PlayerTriple

if TYPE_CHECKING:
    from triopairing.tournament import Tournament


class ChampionsMeetingStrategy(TournamentStrategy):
    """Placeholder for the Champions Meeting format.

    Players are grouped in registration order, leftovers get a flat bye and
    the event ends after a fixed number of rounds without naming a winner.
    """

    tournament_type = TournamentType.CHAMPIONS_MEETING

    def plan_round(self, tournament: "Tournament", round_number: int) -> RoundPlan:
        if self.should_complete_tournament(tournament):
            return RoundPlan(round_type=RoundType.REGULAR)

        available = tournament.get_player_list()
        matches = []
        while len(available) >= PLAYERS_PER_MATCH:
            matches.append(PlayerTriple(tuple(available[:PLAYERS_PER_MATCH])))
            available = available[PLAYERS_PER_MATCH:]

        return RoundPlan(
            round_type=RoundType.REGULAR,
            matches=matches,
            bye_player_ids=[p.id for p in available],
            bye_points={p.id: FLAT_BYE_POINTS for p in available},
        )

    def current_state(self, tournament: "Tournament") -> PlannerState:
        if self.should_complete_tournament(tournament):
            return PlannerState.COMPLETE
        return PlannerState.REGULAR

    def should_complete_tournament(self, tournament: "Tournament") -> bool:
        completed = sum(1 for r in tournament.rounds if r.is_completed)
        return completed >= CHAMPIONS_MEETING_ROUNDS

    def determine_winner(self, tournament: "Tournament") -> Optional[int]:
        """This format names no champion, so the winner is always None."""
        return None

    def calculate_target_matches(self, player_count: int) -> int:
        return CHAMPIONS_MEETING_TARGET_MATCHES
