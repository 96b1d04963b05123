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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from triopairing.constants import PLAYERS_PER_MATCH
from triopairing.exceptions import DuplicateResultException, InvalidResultException
from triopairing.type_hints import CombinationKey


@dataclass
class MatchData:
    """A single match inside a round.

    Attributes
    ----------
    match_id : int
        Identifier unique within the tournament.
    player_ids : tuple of int
        Participants, stored in ascending id order.
    winner_id : int or None
        Winner once decided. A decided match is never re-scored.
    """

    match_id: int
    player_ids: Tuple[int, ...]
    winner_id: Optional[int] = None

    def __post_init__(self) -> None:
        self.player_ids = tuple(sorted(self.player_ids))

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def combination_key(self) -> Optional[CombinationKey]:
        """Canonical key of the participants, None unless exactly three."""
        if len(self.player_ids) != PLAYERS_PER_MATCH:
            return None
        return self.player_ids  # type: ignore[return-value]

    def has_player(self, player_id: int) -> bool:
        return player_id in self.player_ids

    def set_winner(self, winner_id: int) -> None:
        """Record the winner of this match.

        Raises
        ------
        DuplicateResultException
            If the match already has a winner.
        InvalidResultException
            If the winner did not play in this match.
        """
        if self.is_decided:
            raise DuplicateResultException(
                f"Match {self.match_id} already has winner {self.winner_id}"
            )
        if winner_id not in self.player_ids:
            raise InvalidResultException(
                f"Winner {winner_id} is not a player in match {self.match_id}"
            )
        self.winner_id = winner_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "match_id": self.match_id,
            "player_ids": list(self.player_ids),
            "winner_id": self.winner_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchData":
        """Deserialize match from dictionary."""
        return cls(
            match_id=data["match_id"],
            player_ids=tuple(data["player_ids"]),
            winner_id=data.get("winner_id"),
        )
