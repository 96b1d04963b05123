"""Tournament controllers: standings, planning strategies, rounds and results."""

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

from triopairing.controllers.tournament.champions_meeting import (
    ChampionsMeetingStrategy,
)
from triopairing.controllers.tournament.result_recorder import ResultRecorder
from triopairing.controllers.tournament.round_manager import RoundManager
from triopairing.controllers.tournament.standings import (
    all_reached_target,
    are_tied,
    calculate_target_matches,
    get_top3,
    has_clear_top3,
    sort_by_standings,
)
from triopairing.controllers.tournament.strategy import RoundPlan, TournamentStrategy
from triopairing.controllers.tournament.strategy_factory import get_strategy
from triopairing.controllers.tournament.swiss_strategy import SwissTournamentStrategy

__all__ = [
    "RoundManager",
    "ResultRecorder",
    "RoundPlan",
    "TournamentStrategy",
    "SwissTournamentStrategy",
    "ChampionsMeetingStrategy",
    "get_strategy",
    "sort_by_standings",
    "are_tied",
    "has_clear_top3",
    "get_top3",
    "calculate_target_matches",
    "all_reached_target",
]
