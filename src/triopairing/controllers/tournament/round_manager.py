"""Round management for tournaments.

This module turns the strategy's plans into rounds: it numbers rounds and
matches, credits bye points and keeps the round history.
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

from typing import TYPE_CHECKING, List, Optional

from triopairing.controllers.tournament.strategy import RoundPlan, TournamentStrategy
from triopairing.exceptions import PlayerNotFoundException, TournamentStateException
from triopairing.models.tournament import MatchData, RoundData
from triopairing.utils import setup_logger

if TYPE_CHECKING:
    from triopairing.tournament import Tournament

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression for a tournament.

    This class is responsible for:
    - Asking the strategy for the next round's plan
    - Creating the round and its matches from that plan
    - Crediting bye points
    - Tracking round history
    """

    def __init__(self, strategy: TournamentStrategy):
        """Initialize the round manager.

        Args:
            strategy: Planner deciding the content of each round
        """
        self.strategy = strategy
        self.rounds: List[RoundData] = []

    @property
    def current_round(self) -> Optional[RoundData]:
        return self.rounds[-1] if self.rounds else None

    @property
    def completed_rounds_count(self) -> int:
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    def get_round(self, round_number: int) -> Optional[RoundData]:
        """Get data for a specific round.

        Args:
            round_number: The round number (1-indexed)

        Returns:
            RoundData for the specified round, or None if invalid round number
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return None

    def next_match_id(self) -> int:
        return 1 + max(
            (m.match_id for r in self.rounds for m in r.matches), default=0
        )

    def create_next_round(self, tournament: "Tournament") -> RoundData:
        """Plan the next round and add it to the history.

        Args:
            tournament: The tournament the round belongs to

        Returns:
            The newly created round

        Raises:
            TournamentStateException: If the current round is still open or
                the strategy has no match left to plan
        """
        current = self.current_round
        if current is not None and not current.is_completed:
            raise TournamentStateException(
                f"Round {current.round_number} is still open, "
                "finish it before creating another"
            )

        round_number = len(self.rounds) + 1
        plan = self.strategy.plan_round(tournament, round_number)
        if plan.is_empty:
            raise TournamentStateException(
                f"Nothing to play in round {round_number}"
            )
        round_data = self._build_round(round_number, plan)

        for player_id, points in plan.bye_points.items():
            player = tournament.players.get(player_id)
            if player is None:
                raise PlayerNotFoundException(f"Bye player {player_id} not found")
            player.award_bye(points)

        self.rounds.append(round_data)
        logger.info(
            "Created %s round %s: %s matches, %s byes",
            round_data.round_type.value,
            round_number,
            len(round_data.matches),
            len(round_data.bye_player_ids),
        )
        return round_data

    def _build_round(self, round_number: int, plan: RoundPlan) -> RoundData:
        first_id = self.next_match_id()
        matches = [
            MatchData(match_id=first_id + offset, player_ids=triple.key)
            for offset, triple in enumerate(plan.matches)
        ]
        return RoundData(
            round_number=round_number,
            round_type=plan.round_type,
            matches=matches,
            bye_player_ids=list(plan.bye_player_ids),
            bye_points=dict(plan.bye_points),
        )
