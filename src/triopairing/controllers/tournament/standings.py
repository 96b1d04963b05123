"""Standings order, tie detection and per-player match targets."""

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

from typing import Iterable, List, Tuple

from triopairing.constants import MAX_TARGET_MATCHES, TARGET_MATCH_TABLE
from triopairing.models.player import Player
from triopairing.type_hints import Standings


def standings_key(player: Player) -> Tuple[int, int, int, int]:
    """Sort key: points desc, wins desc, losses asc, id asc."""
    return (-player.points, -player.wins, player.losses, player.id)


def sort_by_standings(players: Iterable[Player]) -> Standings:
    """Players ordered from first place to last."""
    return sorted(players, key=standings_key)


def are_tied(first: Player, second: Player) -> bool:
    """Two players are tied when points, wins and losses all match."""
    return (
        first.points == second.points
        and first.wins == second.wins
        and first.losses == second.losses
    )


def has_clear_top3(players: Iterable[Player]) -> bool:
    """True unless 3rd and 4th place are tied.

    With fewer than four players the podium is always clear.
    """
    ranked = sort_by_standings(players)
    if len(ranked) < 4:
        return True
    return not are_tied(ranked[2], ranked[3])


def get_top3(players: Iterable[Player]) -> List[Player]:
    return sort_by_standings(players)[:3]


def calculate_target_matches(player_count: int) -> int:
    """Matches each player should play before standings count as final.

    | players | target |
    |---------|--------|
    | <= 4    | 3      |
    | <= 6    | 4      |
    | <= 9    | 5      |
    | <= 12   | 6      |
    | > 12    | min(8, (n - 1) // 2 + 2) |
    """
    for max_players, target in TARGET_MATCH_TABLE:
        if player_count <= max_players:
            return target
    return min(MAX_TARGET_MATCHES, (player_count - 1) // 2 + 2)


def all_reached_target(players: Iterable[Player]) -> bool:
    """Whether every player has played at least the target number of matches."""
    player_list = list(players)
    target = calculate_target_matches(len(player_list))
    return all(p.matches_played >= target for p in player_list)
