"""Three player combinations.

A ``PlayerTriple`` is the unit of pairing: the planner proposes triples, the
history stores their canonical keys and the selector scores them.
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

from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterable, List, Sequence, Set, Tuple

from triopairing.constants import PLAYERS_PER_MATCH
from triopairing.models.player import Player
from triopairing.type_hints import CombinationKey


@dataclass(frozen=True)
class PlayerTriple:
    """Three distinct players, always held in ascending id order.

    Equality and hashing only look at the ids, so two triples built from the
    same players in any order are the same combination.
    """

    players: Tuple[Player, Player, Player] = field(compare=False)
    key: CombinationKey = field(init=False)

    def __post_init__(self) -> None:
        if len(self.players) != PLAYERS_PER_MATCH:
            raise ValueError(
                f"A triple needs exactly {PLAYERS_PER_MATCH} players, "
                f"got {len(self.players)}"
            )
        ordered = tuple(sorted(self.players, key=lambda p: p.id))
        ids = tuple(p.id for p in ordered)
        if len(set(ids)) != PLAYERS_PER_MATCH:
            raise ValueError(f"A triple cannot repeat a player: {ids}")
        # frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "players", ordered)
        object.__setattr__(self, "key", make_key(ids))

    @classmethod
    def of(cls, first: Player, second: Player, third: Player) -> "PlayerTriple":
        return cls((first, second, third))

    @property
    def key_string(self) -> str:
        """Text form of the key, e.g. ``"2-5-9"``."""
        return "-".join(str(pid) for pid in self.key)

    def contains_any(self, player_ids: Set[int]) -> bool:
        return any(pid in player_ids for pid in self.key)

    def __iter__(self):
        return iter(self.players)

    def __str__(self) -> str:
        return f"({', '.join(p.name for p in self.players)})"


def make_key(player_ids: Iterable[int]) -> CombinationKey:
    """Canonical key for any three player ids."""
    ids = tuple(sorted(player_ids))
    if len(ids) != PLAYERS_PER_MATCH:
        raise ValueError(f"A combination key needs 3 ids, got {ids}")
    return ids  # type: ignore[return-value]


def generate_all_combinations(players: Sequence[Player]) -> List[PlayerTriple]:
    """Enumerate every three player grouping.

    Parameters
    ----------
    players : sequence of Player
        Players available for pairing.

    Returns
    -------
    list of PlayerTriple
        C(n, 3) canonical triples, empty when fewer than three players are
        given. Players are ordered by id first so the output is stable.
    """
    ordered = sorted(players, key=lambda p: p.id)
    return [PlayerTriple(combo) for combo in combinations(ordered, PLAYERS_PER_MATCH)]
