"""Random Tournament Generator (RTG) - Internal testing system for trio pairings.

This module plays whole tournaments with simulated winners so the planner can
be exercised end to end: every registered player gets a hidden strength and
each match is decided by a weighted draw according to the result pattern.
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

import argparse
import json
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from triopairing.constants import DEFAULT_BYE_POLICY, DEFAULT_MAX_TIEBREAKER_ROUNDS
from triopairing.exceptions import TournamentException
from triopairing.models import MatchData, Player, TournamentType
from triopairing.tournament import Tournament
from triopairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultPattern(Enum):
    """Result generation patterns for tournaments."""

    REALISTIC = "realistic"
    UPSET_FRIENDLY = "upset_friendly"
    PREDICTABLE = "predictable"
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    seed: Optional[int] = None
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    tournament_type: TournamentType = TournamentType.SWISS
    bye_point_policy: str = DEFAULT_BYE_POLICY
    max_tiebreaker_rounds: int = DEFAULT_MAX_TIEBREAKER_ROUNDS
    strength_range: Tuple[int, int] = (1, 100)
    # guard against a planner that never reaches its final
    max_rounds: int = 100


class PlayerFactory:
    """Factory for creating tournament players with hidden strengths."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def register_players(self, tournament: Tournament) -> Dict[int, int]:
        """Add the configured number of players.

        Returns:
            Hidden strength per player id
        """
        strengths = {}
        min_strength, max_strength = self.config.strength_range
        for i in range(self.config.num_players):
            strength = self.random.randint(min_strength, max_strength)
            player = tournament.add_player(self._generate_name(i + 1, strength))
            strengths[player.id] = strength

        logger.info("Registered %s players", len(strengths))
        return strengths

    def _generate_name(self, number: int, strength: int) -> str:
        if strength < 25:
            prefix = "Rookie"
        elif strength < 50:
            prefix = "Regular"
        elif strength < 75:
            prefix = "Veteran"
        else:
            prefix = "Ace"
        return f"{prefix}-{number:03d}"


class ResultSimulator:
    """Simulates match winners for tournaments."""

    def __init__(self, config: RTGConfig, strengths: Dict[int, int]):
        self.config = config
        self.strengths = strengths
        self.random = (
            random.Random(config.seed + 1)
            if config.seed is not None
            else random.Random()
        )

    def simulate_match(self, match: MatchData) -> int:
        """Pick the winner of a three player match."""
        player_ids = list(match.player_ids)
        if self.config.result_pattern == ResultPattern.RANDOM:
            return self.random.choice(player_ids)

        weights = [self._weight(self.strengths.get(pid, 1)) for pid in player_ids]
        return self.random.choices(player_ids, weights=weights)[0]

    def _weight(self, strength: int) -> float:
        if self.config.result_pattern == ResultPattern.PREDICTABLE:
            return float(strength**3)
        if self.config.result_pattern == ResultPattern.UPSET_FRIENDLY:
            return 1.0 / strength
        return float(strength)


class RandomTournamentGenerator:
    """Plays complete tournaments with simulated results."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.player_factory = PlayerFactory(config)

    def generate_complete_tournament(self) -> Dict:
        """Generate a complete tournament with players and round results.

        Raises:
            TournamentException: If no winner is decided within ``max_rounds``
        """
        logger.info(
            "Generating tournament: %s players, %s results",
            self.config.num_players,
            self.config.result_pattern.value,
        )

        tournament = Tournament(
            name=f"RTG {self.config.num_players} players",
            tournament_type=self.config.tournament_type,
            bye_point_policy=self.config.bye_point_policy,
            max_tiebreaker_rounds=self.config.max_tiebreaker_rounds,
            seed=self.config.seed,
        )
        strengths = self.player_factory.register_players(tournament)
        simulator = ResultSimulator(self.config, strengths)

        round_data = tournament.start()
        while round_data is not None:
            if len(tournament.rounds) > self.config.max_rounds:
                raise TournamentException(
                    f"No result after {self.config.max_rounds} rounds"
                )
            results = {
                match.match_id: simulator.simulate_match(match)
                for match in round_data.matches
            }
            round_data = tournament.advance(results)

        logger.info(
            "Generated tournament finished after %s rounds, winner %s",
            len(tournament.rounds),
            tournament.winner_id,
        )
        return {
            "config": self.config,
            "tournament": tournament,
            "players": tournament.get_player_list(),
            "strengths": strengths,
            "rounds": tournament.rounds,
            "standings": tournament.standings(),
            "winner_id": tournament.winner_id,
        }

    def export_json_format(self, tournament_data: Dict) -> str:
        export_data = {
            "tournament_config": {
                "num_players": self.config.num_players,
                "seed": self.config.seed,
                "result_pattern": self.config.result_pattern.value,
                "tournament_type": self.config.tournament_type.value,
                "bye_point_policy": self.config.bye_point_policy,
            },
            "players": [
                dict(player.to_dict(), strength=tournament_data["strengths"][player.id])
                for player in tournament_data["players"]
            ],
            "rounds": [r.to_dict() for r in tournament_data["rounds"]],
            "winner_id": tournament_data["winner_id"],
        }
        return json.dumps(export_data, indent=2)


def format_standings(players: List[Player]) -> str:
    """Plain text standings table."""
    lines = [f"{'#':>3} {'Name':20s} {'Pts':>4} {'W':>3} {'L':>3}"]
    for rank, player in enumerate(players, start=1):
        lines.append(
            f"{rank:>3} {player.name:20s} {player.points:>4} "
            f"{player.wins:>3} {player.losses:>3}"
        )
    return "\n".join(lines)


def create_small_tournament(
    num_players: int = 6, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create small tournament for testing."""
    config = RTGConfig(
        num_players=num_players,
        seed=seed,
        result_pattern=ResultPattern.REALISTIC,
    )
    return RandomTournamentGenerator(config)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Random Tournament Generator (RTG)")
    parser.add_argument(
        "--players",
        type=int,
        default=9,
        help="Number of players in the tournament (default: 9)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
        help="How match winners are drawn",
    )
    args = parser.parse_args()

    generator = RandomTournamentGenerator(
        RTGConfig(
            num_players=args.players,
            seed=args.seed,
            result_pattern=ResultPattern(args.pattern),
        )
    )
    tournament = generator.generate_complete_tournament()
    print("Generated Tournament:")
    print(f"Players: {len(tournament['players'])}")
    print(f"Rounds: {len(tournament['rounds'])}")
    print(format_standings(tournament["standings"]))
