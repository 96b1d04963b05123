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
from typing import Any, Dict, Optional

from triopairing.constants import (
    BYE_POLICIES,
    DEFAULT_BYE_POLICY,
    DEFAULT_MAX_TIEBREAKER_ROUNDS,
)
from triopairing.exceptions import InvalidConfigurationException
from triopairing.models.enums import TournamentType


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    tournament_type : TournamentType
        Format used to plan rounds.
    bye_point_policy : str
        "flat" awards every bye player the same points, "underdog" gives
        low scorers more.
    max_tiebreaker_rounds : int
        Completed tiebreaker rounds after which the final is forced.
    seed : int or None
        Seed for the first round shuffle; None draws a fresh seed.
    """

    name: str
    tournament_type: TournamentType = TournamentType.SWISS
    bye_point_policy: str = DEFAULT_BYE_POLICY
    max_tiebreaker_rounds: int = DEFAULT_MAX_TIEBREAKER_ROUNDS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.tournament_type, str):
            try:
                self.tournament_type = TournamentType(self.tournament_type)
            except ValueError as e:
                raise InvalidConfigurationException(
                    f"Unsupported tournament type: {self.tournament_type}"
                ) from e
        if self.bye_point_policy not in BYE_POLICIES:
            raise InvalidConfigurationException(
                f"Unknown bye point policy '{self.bye_point_policy}', "
                f"expected one of {', '.join(BYE_POLICIES)}"
            )
        if self.max_tiebreaker_rounds < 0:
            raise InvalidConfigurationException(
                "max_tiebreaker_rounds cannot be negative"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "tournament_type": self.tournament_type.value,
            "bye_point_policy": self.bye_point_policy,
            "max_tiebreaker_rounds": self.max_tiebreaker_rounds,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            tournament_type=data.get("tournament_type", TournamentType.SWISS.value),
            bye_point_policy=data.get("bye_point_policy", DEFAULT_BYE_POLICY),
            max_tiebreaker_rounds=data.get(
                "max_tiebreaker_rounds", DEFAULT_MAX_TIEBREAKER_ROUNDS
            ),
            seed=data.get("seed"),
        )
