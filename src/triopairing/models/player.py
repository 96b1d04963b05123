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

from typing import Any, Dict

from triopairing.constants import LOSS_POINTS, WIN_POINTS
from triopairing.exceptions import InvalidPlayerDataException
from triopairing.utils import setup_logger

logger = setup_logger(__name__)


class Player:
    """Represents a player in the tournament.

    Only the cumulative record is tracked here; who played whom is derived
    from the round history when it is needed.

    Attributes:
        id: Stable identifier handed out by the tournament
        name: Display name, unique within a tournament
        points: Match wins plus bye points
        wins: Matches won
        losses: Matches lost
    """

    def __init__(
        self,
        player_id: int,
        name: str,
        points: int = 0,
        wins: int = 0,
        losses: int = 0,
    ) -> None:
        if not name or not name.strip():
            raise InvalidPlayerDataException("Player name must not be empty")
        if min(points, wins, losses) < 0:
            raise InvalidPlayerDataException(
                f"Player record cannot be negative: {points}/{wins}/{losses}"
            )

        self.id: int = player_id
        self.name: str = name.strip()
        self.points: int = points
        self.wins: int = wins
        self.losses: int = losses

    @property
    def matches_played(self) -> int:
        """Number of decided matches the player took part in."""
        return self.wins + self.losses

    def apply_win(self) -> None:
        self.wins += 1
        self.points += WIN_POINTS

    def apply_loss(self) -> None:
        self.losses += 1
        self.points += LOSS_POINTS

    def award_bye(self, points: int) -> None:
        """Credit compensation points for sitting out a round."""
        self.points += points
        logger.debug("Player %s receives %s bye point(s)", self.id, points)

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id}, name={self.name!r}, points={self.points}, "
            f"wins={self.wins}, losses={self.losses})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "points": self.points,
            "wins": self.wins,
            "losses": self.losses,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        """Deserialize player from dictionary."""
        return cls(
            player_id=int(data["id"]),
            name=data["name"],
            points=data.get("points", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
        )
