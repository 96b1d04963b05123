"""Pairing algorithms for three player matches."""

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

from triopairing.pairing.byes import (
    award_bye_points,
    bye_points_for,
    count_byes,
    select_bye_players,
)
from triopairing.pairing.combinations import (
    PlayerTriple,
    generate_all_combinations,
    make_key,
)
from triopairing.pairing.history import (
    CombinationHistory,
    get_unused_combinations,
    used_combination_keys,
)
from triopairing.pairing.trio_swiss import (
    competitiveness_score,
    create_random_first_round,
    participation_score,
    select_optimal_matches,
)

__all__ = [
    "PlayerTriple",
    "make_key",
    "generate_all_combinations",
    "CombinationHistory",
    "used_combination_keys",
    "get_unused_combinations",
    "participation_score",
    "competitiveness_score",
    "select_optimal_matches",
    "create_random_first_round",
    "count_byes",
    "select_bye_players",
    "bye_points_for",
    "award_bye_points",
]
