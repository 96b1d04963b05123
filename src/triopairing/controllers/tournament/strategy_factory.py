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

import random
from typing import Optional, Union

from triopairing.constants import DEFAULT_BYE_POLICY, DEFAULT_MAX_TIEBREAKER_ROUNDS
from triopairing.controllers.tournament.champions_meeting import (
    ChampionsMeetingStrategy,
)
from triopairing.controllers.tournament.strategy import TournamentStrategy
from triopairing.controllers.tournament.swiss_strategy import SwissTournamentStrategy
from triopairing.exceptions import InvalidConfigurationException
from triopairing.models.enums import TournamentType


def get_strategy(
    tournament_type: Union[TournamentType, str],
    rng: Optional[random.Random] = None,
    bye_point_policy: str = DEFAULT_BYE_POLICY,
    max_tiebreaker_rounds: int = DEFAULT_MAX_TIEBREAKER_ROUNDS,
) -> TournamentStrategy:
    """Create the planning strategy for a tournament type.

    Args:
        tournament_type: TournamentType or its string value
        rng: Random source for draws
        bye_point_policy: Bye point policy for Swiss tournaments
        max_tiebreaker_rounds: Tiebreaker cap for Swiss tournaments

    Returns:
        A new strategy instance

    Raises:
        InvalidConfigurationException: If the type is not supported
    """
    try:
        tournament_type = TournamentType(tournament_type)
    except ValueError as e:
        raise InvalidConfigurationException(
            f"Unsupported tournament type: {tournament_type}"
        ) from e

    if tournament_type == TournamentType.SWISS:
        return SwissTournamentStrategy(
            rng=rng,
            bye_point_policy=bye_point_policy,
            max_tiebreaker_rounds=max_tiebreaker_rounds,
        )
    if tournament_type == TournamentType.CHAMPIONS_MEETING:
        return ChampionsMeetingStrategy()
    raise InvalidConfigurationException(
        f"Tournament type '{tournament_type.value}' has no strategy"
    )
