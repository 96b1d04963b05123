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

from typing import Iterable, List, Sequence

from triopairing.constants import (
    BYE_POLICY_FLAT,
    BYE_POLICY_UNDERDOG,
    FLAT_BYE_POINTS,
    UNDERDOG_BYE_POINTS,
    UNDERDOG_POINTS_THRESHOLD,
)
from triopairing.models.player import Player
from triopairing.models.tournament import RoundData
from triopairing.pairing.combinations import PlayerTriple
from triopairing.type_hints import ByeAwards, ByePolicy


def count_byes(player_id: int, rounds: Iterable[RoundData]) -> int:
    """Completed rounds in which the player sat in no match."""
    return sum(
        1
        for round_data in rounds
        if round_data.is_completed and not round_data.has_player(player_id)
    )


def select_bye_players(
    players: Sequence[Player],
    selected_matches: Iterable[PlayerTriple],
    rounds: Sequence[RoundData],
) -> List[Player]:
    """Players left out of ``selected_matches``, in bye priority order.

    Fewest previous byes first, then lowest points (helping the players who
    are behind), then lowest id so the order is stable.
    """
    matched_ids = {pid for triple in selected_matches for pid in triple.key}
    return sorted(
        (p for p in players if p.id not in matched_ids),
        key=lambda p: (count_byes(p.id, rounds), p.points, p.id),
    )


def bye_points_for(player: Player, policy: ByePolicy = BYE_POLICY_FLAT) -> int:
    """Points a player earns for sitting out a regular round.

    Args:
        player: The bye player, with the record from before this round
        policy: "flat" (everyone gets the same) or "underdog"

    Returns:
        Points to credit
    """
    if policy == BYE_POLICY_UNDERDOG and player.points <= UNDERDOG_POINTS_THRESHOLD:
        return UNDERDOG_BYE_POINTS
    return FLAT_BYE_POINTS


def award_bye_points(
    bye_players: Iterable[Player], policy: ByePolicy = BYE_POLICY_FLAT
) -> ByeAwards:
    """Work out (without applying) the points for each bye player."""
    return {p.id: bye_points_for(p, policy) for p in bye_players}
