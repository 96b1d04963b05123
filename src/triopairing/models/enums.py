"""Enumerations shared by the tournament models and the planners."""

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

from enum import Enum


class RoundType(Enum):
    """Kind of round, decided by the planner when the round is created."""

    REGULAR = "Regular"
    TIEBREAKER = "Tiebreaker"
    FINAL = "Final"


class PlannerState(Enum):
    """What the planner would do on its next call."""

    REGULAR = "Regular"
    TIEBREAKER = "Tiebreaker"
    FINAL = "Final"
    COMPLETE = "Complete"


class TournamentStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TournamentType(Enum):
    """Tournament formats, each backed by its own planning strategy."""

    SWISS = "swiss"
    CHAMPIONS_MEETING = "champions_meeting"
