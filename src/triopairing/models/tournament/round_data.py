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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from triopairing.models.enums import RoundType
from triopairing.models.tournament.match_data import MatchData


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    round_type : RoundType
        Regular, Tiebreaker or Final.
    matches : list of MatchData
        Matches played in this round.
    bye_player_ids : list of int
        Players left out of every match, in bye priority order.
    bye_points : dict of int to int
        Points each bye player was credited when the round was created.
    """

    round_number: int
    round_type: RoundType = RoundType.REGULAR
    matches: List[MatchData] = field(default_factory=list)
    bye_player_ids: List[int] = field(default_factory=list)
    bye_points: Dict[int, int] = field(default_factory=dict)

    @property
    def is_completed(self) -> bool:
        """True once every match in the round has a winner."""
        return all(match.is_decided for match in self.matches)

    @property
    def participant_ids(self) -> List[int]:
        return [pid for match in self.matches for pid in match.player_ids]

    def get_match(self, match_id: int) -> Optional[MatchData]:
        for match in self.matches:
            if match.match_id == match_id:
                return match
        return None

    def has_player(self, player_id: int) -> bool:
        """Whether the player sits in any match of this round."""
        return any(match.has_player(player_id) for match in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "round_type": self.round_type.value,
            "matches": [m.to_dict() for m in self.matches],
            "bye_player_ids": list(self.bye_player_ids),
            # JSON object keys are strings
            "bye_points": {str(k): v for k, v in self.bye_points.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            round_type=RoundType(data.get("round_type", RoundType.REGULAR.value)),
            matches=[MatchData.from_dict(m) for m in data.get("matches", [])],
            bye_player_ids=list(data.get("bye_player_ids", [])),
            bye_points={int(k): v for k, v in data.get("bye_points", {}).items()},
        )
