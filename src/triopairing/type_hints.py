"""Type hints used in Trio Pairing."""

from typing import Callable, Dict, List, Literal, Tuple

# Player ids are stable integers handed out by the tournament
PlayerId = int
MatchId = int

# Canonical key of a three player match: ids sorted ascending
CombinationKey = Tuple[int, int, int]

# Bye point policies
ByePolicy = Literal["flat", "underdog"]

# match id -> winner id, as submitted when closing a round
MatchResults = Dict[MatchId, PlayerId]

# player id -> points awarded for sitting out
ByeAwards = Dict[PlayerId, int]

# Players listed in a standings order
Standings = List["Player"]

# Callback notified after every committed tournament mutation
TournamentListener = Callable[["Tournament"], None]

#  LocalWords:  CombinationKey ByeAwards
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
