"""Hybrid Swiss and round-robin selection of three player matches.

Regular rounds never repeat a combination while unused combinations remain
(round-robin guarantee). Among the unused ones, players who have played the
fewest matches go first and, between equally rested groups, the group with the
closest records wins (Swiss-style pairing).
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

import random
import statistics
from typing import Iterable, List, Sequence, Set, Tuple

from triopairing.constants import PLAYERS_PER_MATCH, WIN_VARIANCE_WEIGHT
from triopairing.models.player import Player
from triopairing.models.tournament import RoundData
from triopairing.pairing.combinations import PlayerTriple, generate_all_combinations
from triopairing.pairing.history import get_unused_combinations
from triopairing.utils import setup_logger

logger = setup_logger(__name__)


def participation_score(triple: PlayerTriple) -> float:
    """Average matches played by the three players; lower pairs first."""
    return sum(p.matches_played for p in triple.players) / PLAYERS_PER_MATCH


def competitiveness_score(triple: PlayerTriple) -> float:
    """
    Swiss-style closeness of a triple, lower is closer.

    Population variance of the points plus half the population variance of
    the wins, so points weigh more than wins.
    """
    points_variance = statistics.pvariance([p.points for p in triple.players])
    wins_variance = statistics.pvariance([p.wins for p in triple.players])
    return float(points_variance) + WIN_VARIANCE_WEIGHT * float(wins_variance)


def _selection_key(triple: PlayerTriple) -> Tuple[float, float]:
    return participation_score(triple), competitiveness_score(triple)


def _greedy_disjoint(
    candidates: Iterable[PlayerTriple], player_count: int
) -> List[PlayerTriple]:
    """Walk candidates in order, keeping each one that shares no player."""
    selected: List[PlayerTriple] = []
    used_ids: Set[int] = set()
    for triple in candidates:
        if triple.contains_any(used_ids):
            continue
        selected.append(triple)
        used_ids.update(triple.key)
        # Stop if we can't form more 3-player matches
        if player_count - len(used_ids) < PLAYERS_PER_MATCH:
            break
    return selected


def select_optimal_matches(
    players: Sequence[Player], rounds: Iterable[RoundData]
) -> List[PlayerTriple]:
    """Pick a set of disjoint triples for the next regular round.

    This is a greedy heuristic, not an optimal matching: an early low-scored
    pick may consume players another usable combination needed.

    When the history has used up every combination while players are still
    short of their target, the full combination set is scored instead, so
    repeats only ever happen once nothing new is left.

    Parameters
    ----------
    players : sequence of Player
        Players available this round.
    rounds : iterable of RoundData
        Round history of the tournament.

    Returns
    -------
    list of PlayerTriple
        Pairwise disjoint triples, possibly empty.
    """
    if len(players) < PLAYERS_PER_MATCH:
        return []

    candidates = get_unused_combinations(players, rounds)
    if not candidates:
        logger.info(
            "Every combination of %s players has been used, allowing repeats",
            len(players),
        )
        candidates = generate_all_combinations(players)

    # sorted() is stable, so equal scores keep ascending id order
    ranked = sorted(candidates, key=_selection_key)
    selected = _greedy_disjoint(ranked, len(players))

    logger.debug(
        "Selected %s matches from %s candidates: %s",
        len(selected),
        len(candidates),
        ", ".join(t.key_string for t in selected),
    )
    return selected


def create_random_first_round(
    players: Sequence[Player], rng: random.Random
) -> List[PlayerTriple]:
    """Shuffle players and cut the list into consecutive triples.

    Up to two players are left over; they become the round's byes.
    """
    # Sort first so a seeded rng gives the same draw whatever the input order
    shuffled = sorted(players, key=lambda p: p.id)
    rng.shuffle(shuffled)

    matches = []
    for i in range(0, len(shuffled) - PLAYERS_PER_MATCH + 1, PLAYERS_PER_MATCH):
        matches.append(PlayerTriple(tuple(shuffled[i : i + PLAYERS_PER_MATCH])))
    return matches
