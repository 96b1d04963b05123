"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for running a three player tournament. It owns
the players and the round history and delegates planning to a strategy,
round creation to the RoundManager and result entry to the ResultRecorder.
Every mutation runs as one transaction: on failure the previous state is
restored, on success the registered listeners are notified.
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

import json
import random
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from triopairing.constants import (
    DEFAULT_BYE_POLICY,
    DEFAULT_MAX_TIEBREAKER_ROUNDS,
    MIN_PLAYERS_TO_START,
    SAVE_FILE_EXTENSION,
)
from triopairing.controllers.tournament import (
    ResultRecorder,
    RoundManager,
    get_strategy,
    sort_by_standings,
)
from triopairing.exceptions import (
    DuplicatePlayerException,
    FileLoadException,
    FileSaveException,
    PlayerNotFoundException,
    RoundNotFoundException,
    TournamentException,
    TournamentStateException,
    TrioPairingException,
)
from triopairing.models import (
    PlannerState,
    Player,
    RoundData,
    TournamentConfig,
    TournamentStatus,
    TournamentType,
)
from triopairing.type_hints import MatchResults, PlayerId, TournamentListener
from triopairing.utils import setup_logger

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized managers:
    - TournamentStrategy: decides what each round contains
    - RoundManager: turns plans into rounds and credits byes
    - ResultRecorder: validates and applies match winners

    Args:
        name: Tournament name
        tournament_type: Format, "swiss" or "champions_meeting"
        bye_point_policy: "flat" or "underdog"
        max_tiebreaker_rounds: Tiebreakers allowed before the final is forced
        seed: Seed for the round 1 draw
        rng: Random source; overrides ``seed`` when given
    """

    def __init__(
        self,
        name: str,
        tournament_type: Union[TournamentType, str] = TournamentType.SWISS,
        bye_point_policy: str = DEFAULT_BYE_POLICY,
        max_tiebreaker_rounds: int = DEFAULT_MAX_TIEBREAKER_ROUNDS,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        # Configuration
        self.config = TournamentConfig(
            name=name,
            tournament_type=tournament_type,
            bye_point_policy=bye_point_policy,
            max_tiebreaker_rounds=max_tiebreaker_rounds,
            seed=seed,
        )
        self.rng = rng if rng is not None else random.Random(seed)

        # Specialized managers
        self.strategy = get_strategy(
            self.config.tournament_type,
            rng=self.rng,
            bye_point_policy=self.config.bye_point_policy,
            max_tiebreaker_rounds=self.config.max_tiebreaker_rounds,
        )
        self.round_manager = RoundManager(self.strategy)
        self.result_recorder = ResultRecorder()

        # State
        self.players: Dict[int, Player] = {}
        self.status = TournamentStatus.NOT_STARTED
        self.winner_id: Optional[int] = None
        self._next_player_id = 1
        self._listeners: List[TournamentListener] = []

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def tournament_type(self) -> TournamentType:
        return self.config.tournament_type

    @property
    def rounds(self) -> List[RoundData]:
        return self.round_manager.rounds

    @property
    def current_round(self) -> Optional[RoundData]:
        return self.round_manager.current_round

    @property
    def is_started(self) -> bool:
        return self.status != TournamentStatus.NOT_STARTED

    @property
    def is_completed(self) -> bool:
        return self.status == TournamentStatus.COMPLETED

    @property
    def winner(self) -> Optional[Player]:
        if self.winner_id is None:
            return None
        return self.players.get(self.winner_id)

    @property
    def planner_state(self) -> PlannerState:
        """What the next round would be, or Complete once a winner is known."""
        if self.is_completed:
            return PlannerState.COMPLETE
        if not self.is_started:
            return PlannerState.REGULAR
        return self.strategy.current_state(self)

    @property
    def target_matches(self) -> int:
        return self.strategy.calculate_target_matches(len(self.players))

    # ========== Listeners ==========

    def add_listener(self, listener: TournamentListener) -> None:
        """Register a callback run after every committed change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TournamentListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        """Run every listener; a failing listener cannot undo a commit."""
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Tournament listener %r failed", listener)

    # ========== Player Management ==========

    def get_player_list(self) -> List[Player]:
        """Get tournament players in registration order."""
        return [self.players[pid] for pid in sorted(self.players)]

    def get_player(self, player_id: PlayerId) -> Player:
        player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFoundException(f"Player {player_id} not found")
        return player

    def find_player(self, name: str) -> Optional[Player]:
        """Look a player up by name, ignoring case."""
        wanted = name.strip().casefold()
        for player in self.players.values():
            if player.name.casefold() == wanted:
                return player
        return None

    def add_player(self, name: str) -> Player:
        """Register a new player.

        Args:
            name: Display name, unique within the tournament ignoring case

        Returns:
            The created player

        Raises:
            TournamentStateException: If the tournament has started
            DuplicatePlayerException: If the name is already taken
        """
        self._require_status(TournamentStatus.NOT_STARTED, "add players")
        if self.find_player(name) is not None:
            raise DuplicatePlayerException(f"Player '{name.strip()}' already exists")

        with self._transaction("add player"):
            player = Player(self._next_player_id, name)
            self.players[player.id] = player
            self._next_player_id += 1
        logger.info("Added player: %s (%s)", player.name, player.id)
        return player

    def remove_player(self, player_id: int) -> Player:
        """Unregister a player before the tournament starts.

        Raises:
            TournamentStateException: If the tournament has started
            PlayerNotFoundException: If no such player exists
        """
        self._require_status(TournamentStatus.NOT_STARTED, "remove players")
        player = self.get_player(player_id)
        with self._transaction("remove player"):
            del self.players[player_id]
        logger.info("Removed player: %s (%s)", player.name, player_id)
        return player

    # ========== Round Management ==========

    def get_round(self, round_number: int) -> RoundData:
        round_data = self.round_manager.get_round(round_number)
        if round_data is None:
            raise RoundNotFoundException(
                f"Round {round_number} does not exist, "
                f"{len(self.rounds)} round(s) created"
            )
        return round_data

    def start(self) -> RoundData:
        """Start the tournament and create round 1.

        Raises:
            TournamentStateException: If already started or short of players
        """
        self._require_status(TournamentStatus.NOT_STARTED, "start")
        if len(self.players) < MIN_PLAYERS_TO_START:
            raise TournamentStateException(
                f"At least {MIN_PLAYERS_TO_START} players are needed to start, "
                f"{len(self.players)} registered"
            )

        with self._transaction("start"):
            self.status = TournamentStatus.IN_PROGRESS
            round_data = self.round_manager.create_next_round(self)
        logger.info(
            "Tournament '%s' started with %s players, target %s matches each",
            self.name,
            len(self.players),
            self.target_matches,
        )
        return round_data

    def record_results(self, results: MatchResults) -> bool:
        """Record winners for the current round.

        Nothing is applied unless the results complete the round.

        Args:
            results: Mapping of match id to winner id

        Returns:
            True if the current round is complete afterwards
        """
        self._require_status(TournamentStatus.IN_PROGRESS, "record results")
        round_data = self._require_current_round()
        with self._transaction("record results"):
            completed = self.result_recorder.record_round_results(
                round_data, results, self.players
            )
        return completed

    def advance(self, results: Optional[MatchResults] = None) -> Optional[RoundData]:
        """Close the current round and move the tournament on.

        Records ``results`` if given, then either completes the tournament or
        creates the next round, all in one transaction.

        Returns:
            The new round, or None when the tournament has just completed

        Raises:
            TournamentStateException: If the current round is not complete
        """
        self._require_status(TournamentStatus.IN_PROGRESS, "advance")
        round_data = self._require_current_round()

        with self._transaction("advance"):
            if results:
                self.result_recorder.record_round_results(
                    round_data, results, self.players
                )
            if not round_data.is_completed:
                raise TournamentStateException(
                    f"Round {round_data.round_number} still has undecided matches"
                )

            if self.strategy.should_complete_tournament(self):
                self._complete()
                return None
            next_round = self.round_manager.create_next_round(self)
        return next_round

    def _complete(self) -> None:
        self.status = TournamentStatus.COMPLETED
        self.winner_id = self.strategy.determine_winner(self)
        winner = self.winner
        logger.info(
            "Tournament '%s' completed after %s rounds, winner: %s",
            self.name,
            len(self.rounds),
            winner.name if winner else "None",
        )

    # ========== Standings ==========

    def standings(self) -> List[Player]:
        """Players ranked by points, then wins, then fewest losses."""
        return sort_by_standings(self.players.values())

    # ========== Transactions ==========

    def _require_status(self, status: TournamentStatus, action: str) -> None:
        if self.status != status:
            logger.warning("Cannot %s while tournament is %s", action, self.status.value)
            raise TournamentStateException(
                f"Cannot {action}: tournament is {self.status.value.replace('_', ' ')}"
            )

    def _require_current_round(self) -> RoundData:
        round_data = self.current_round
        if round_data is None:
            raise TournamentStateException("No round has been created yet")
        return round_data

    def _snapshot(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.get_player_list()],
            "rounds": [r.to_dict() for r in self.rounds],
            "status": self.status.value,
            "winner_id": self.winner_id,
            "next_player_id": self._next_player_id,
        }

    def _restore(
        self,
        snapshot: Dict[str, Any],
        players: Dict[int, Player],
        rounds: List[RoundData],
        rng_state: Any,
    ) -> None:
        # Reset in place, callers may hold references to these objects
        self.players.clear()
        self.players.update(players)
        for data in snapshot["players"]:
            player = self.players[data["id"]]
            player.points = data["points"]
            player.wins = data["wins"]
            player.losses = data["losses"]

        self.round_manager.rounds[:] = rounds
        for round_data, data in zip(rounds, snapshot["rounds"]):
            for match, match_data in zip(round_data.matches, data["matches"]):
                match.winner_id = match_data["winner_id"]

        self.status = TournamentStatus(snapshot["status"])
        self.winner_id = snapshot["winner_id"]
        self._next_player_id = snapshot["next_player_id"]
        self.rng.setstate(rng_state)

    @contextmanager
    def _transaction(self, action: str) -> Iterator[None]:
        """Run a mutation atomically.

        Domain errors roll back and propagate unchanged; anything else rolls
        back and is re-raised as TournamentException. Listeners run only when
        the committed state differs from the snapshot.
        """
        snapshot = self._snapshot()
        players = dict(self.players)
        rounds = list(self.rounds)
        rng_state = self.rng.getstate()
        try:
            yield
        except TrioPairingException:
            self._restore(snapshot, players, rounds, rng_state)
            raise
        except Exception as e:
            logger.exception("Unexpected error during %s, rolling back", action)
            self._restore(snapshot, players, rounds, rng_state)
            raise TournamentException(f"Failed to {action}: {e}") from e

        if self._snapshot() != snapshot:
            self._notify()

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "config": self.config.to_dict(),
            "players": [p.to_dict() for p in self.get_player_list()],
            "rounds": [r.to_dict() for r in self.rounds],
            "status": self.status.value,
            "winner_id": self.winner_id,
            "next_player_id": self._next_player_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary containing tournament data

        Returns:
            Reconstructed Tournament object
        """
        config = TournamentConfig.from_dict(data.get("config", {}))
        tournament = cls(
            name=config.name,
            tournament_type=config.tournament_type,
            bye_point_policy=config.bye_point_policy,
            max_tiebreaker_rounds=config.max_tiebreaker_rounds,
            seed=config.seed,
        )

        players = [Player.from_dict(p_data) for p_data in data.get("players", [])]
        tournament.players = {p.id: p for p in players}
        tournament.round_manager.rounds = [
            RoundData.from_dict(r) for r in data.get("rounds", [])
        ]
        tournament.status = TournamentStatus(
            data.get("status", TournamentStatus.NOT_STARTED.value)
        )
        tournament.winner_id = data.get("winner_id")
        tournament._next_player_id = data.get(
            "next_player_id", max(tournament.players, default=0) + 1
        )

        logger.info("Loaded tournament: %s", tournament.name)
        return tournament

    def save(self, path: Union[str, Path]) -> Path:
        """Write the tournament to a JSON file.

        A missing extension is completed with ``SAVE_FILE_EXTENSION``.

        Returns:
            The path written to
        """
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(SAVE_FILE_EXTENSION)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=4)
        except OSError as e:
            logger.exception("Error saving tournament:")
            raise FileSaveException(f"Could not save tournament to {path}: {e}") from e
        logger.info("Tournament saved to %s", path)
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Tournament":
        """Read a tournament written by ``save``.

        Raises:
            FileLoadException: If the file is missing or not a valid save
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.exception("Error loading tournament:")
            raise FileLoadException(f"Could not load tournament from {path}: {e}") from e

        try:
            return cls.from_dict(data)
        except (KeyError, TypeError, ValueError, TrioPairingException) as e:
            raise FileLoadException(f"{path} is not a valid tournament file: {e}") from e
