"""Common interface of the round planning strategies.

A strategy looks at a tournament snapshot and answers three questions: what
the next round should be, whether the tournament is over and who won. It
never mutates the tournament; applying a plan is the round manager's job.
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

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from triopairing.models.enums import PlannerState, RoundType, TournamentType
from triopairing.models.tournament import RoundData
from triopairing.pairing import PlayerTriple

if TYPE_CHECKING:
    from triopairing.tournament import Tournament


@dataclass
class RoundPlan:
    """What the next round should contain.

    Attributes:
        round_type: Regular, Tiebreaker or Final
        matches: Disjoint triples to create
        bye_player_ids: Players sitting out, in bye priority order
        bye_points: Points to credit each bye player (empty outside regular rounds)
    """

    round_type: RoundType
    matches: List[PlayerTriple] = field(default_factory=list)
    bye_player_ids: List[int] = field(default_factory=list)
    bye_points: Dict[int, int] = field(default_factory=dict)

    @property
    def participant_ids(self) -> List[int]:
        return [pid for triple in self.matches for pid in triple.key]

    @property
    def is_empty(self) -> bool:
        return not self.matches


def get_final_round(rounds: Iterable[RoundData]) -> Optional[RoundData]:
    """The latest Final round, if one was created."""
    finals = [r for r in rounds if r.round_type == RoundType.FINAL]
    if not finals:
        return None
    return max(finals, key=lambda r: r.round_number)


def has_completed_final_round(rounds: Iterable[RoundData]) -> bool:
    final_round = get_final_round(rounds)
    return final_round is not None and final_round.is_completed


def count_completed_rounds(rounds: Iterable[RoundData], round_type: RoundType) -> int:
    return sum(1 for r in rounds if r.is_completed and r.round_type == round_type)


class TournamentStrategy(ABC):
    """Base class for tournament formats."""

    tournament_type: TournamentType

    @abstractmethod
    def plan_round(self, tournament: "Tournament", round_number: int) -> RoundPlan:
        """Decide type, matches and byes of round ``round_number``."""

    @abstractmethod
    def current_state(self, tournament: "Tournament") -> PlannerState:
        """What the next call to ``plan_round`` would produce."""

    @abstractmethod
    def should_complete_tournament(self, tournament: "Tournament") -> bool:
        """Whether the tournament is over after its latest round."""

    @abstractmethod
    def determine_winner(self, tournament: "Tournament") -> Optional[int]:
        """Id of the champion, or None while there is none."""

    @abstractmethod
    def calculate_target_matches(self, player_count: int) -> int:
        """Matches each player should play before the standings count."""
