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
from typing import Iterable, List, Sequence, Set

from triopairing.models.player import Player
from triopairing.models.tournament import MatchData, RoundData
from triopairing.pairing.combinations import PlayerTriple, generate_all_combinations
from triopairing.type_hints import CombinationKey


@dataclass
class CombinationHistory:
    """
    Tracks which three player combinations have already met.

    Attributes
    ----------
    used_keys : set of tuple of int
        Canonical keys of every combination seen in any round, whatever the
        round type and whether or not the match was decided. Only grows.
    """

    used_keys: Set[CombinationKey] = field(default_factory=set)

    @classmethod
    def from_rounds(cls, rounds: Iterable[RoundData]) -> "CombinationHistory":
        """Build the history by scanning every match of every round."""
        history = cls()
        for round_data in rounds:
            for match in round_data.matches:
                history.add_match(match)
        return history

    def add_match(self, match: MatchData) -> None:
        """Record a match; matches without exactly three players are ignored."""
        key = match.combination_key
        if key is not None:
            self.used_keys.add(key)

    def has_been_used(self, triple: PlayerTriple) -> bool:
        """Check if these three players have already been matched together."""
        return triple.key in self.used_keys


def used_combination_keys(rounds: Iterable[RoundData]) -> Set[CombinationKey]:
    """Keys of every combination already matched in these rounds."""
    return CombinationHistory.from_rounds(rounds).used_keys


def get_unused_combinations(
    players: Sequence[Player], rounds: Iterable[RoundData]
) -> List[PlayerTriple]:
    """All combinations of ``players`` that no earlier match has used."""
    history = CombinationHistory.from_rounds(rounds)
    return [
        triple
        for triple in generate_all_combinations(players)
        if not history.has_been_used(triple)
    ]
