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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Every match seats exactly this many players
PLAYERS_PER_MATCH = 3
MIN_PLAYERS_TO_START = PLAYERS_PER_MATCH

# Match outcome statistics
WIN_POINTS = 1
LOSS_POINTS = 0

# Bye points
FLAT_BYE_POINTS = 1
UNDERDOG_BYE_POINTS = 2
# Players at or below this many points get UNDERDOG_BYE_POINTS under the underdog policy
UNDERDOG_POINTS_THRESHOLD = 2

BYE_POLICY_FLAT = "flat"
BYE_POLICY_UNDERDOG = "underdog"
BYE_POLICIES = (BYE_POLICY_FLAT, BYE_POLICY_UNDERDOG)
DEFAULT_BYE_POLICY = BYE_POLICY_FLAT

# Target matches per player, (max player count, target) checked in order
TARGET_MATCH_TABLE = (
    (4, 3),
    (6, 4),
    (9, 5),
    (12, 6),
)
MAX_TARGET_MATCHES = 8

# Tiebreaker rounds allowed before the final is forced
DEFAULT_MAX_TIEBREAKER_ROUNDS = 2

# Weight of the wins variance in the competitiveness score
WIN_VARIANCE_WEIGHT = 0.5

# Champions Meeting placeholder format
CHAMPIONS_MEETING_ROUNDS = 3
CHAMPIONS_MEETING_TARGET_MATCHES = 3
