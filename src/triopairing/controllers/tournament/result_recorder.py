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

from typing import Dict, List, Tuple

from triopairing.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    PlayerNotFoundException,
    ResultNotFoundException,
)
from triopairing.models.player import Player
from triopairing.models.tournament import MatchData, RoundData
from triopairing.type_hints import MatchResults
from triopairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating every submitted winner before anything changes
    - Applying a round's results only once they complete the round
    - Updating player statistics (win: +1 win and +1 point, loss: +1 loss)
    """

    def record_round_results(
        self,
        round_data: RoundData,
        results: MatchResults,
        players: Dict[int, Player],
    ) -> bool:
        """Record the winners of a round's matches.

        Results are all-or-nothing: if the submitted winners together with
        those already recorded do not decide every match, nothing is applied.

        Args:
            round_data: The round the matches belong to
            results: Mapping of match id to winner id
            players: Dictionary of all players (id -> Player)

        Returns:
            True if the round is complete afterwards, False if nothing was applied

        Raises:
            ResultNotFoundException: A match id is not part of this round
            DuplicateResultException: A match already has a winner
            InvalidResultException: A winner did not play in the match
            PlayerNotFoundException: A participant is not a tournament player
        """
        validated = [
            self._validate_result_entry(round_data, match_id, winner_id, players)
            for match_id, winner_id in results.items()
        ]

        decided_after = sum(1 for m in round_data.matches if m.is_decided) + len(
            validated
        )
        if decided_after < len(round_data.matches):
            logger.info(
                "Round %s: %s of %s matches would be decided, no results applied",
                round_data.round_number,
                decided_after,
                len(round_data.matches),
            )
            return False

        for match, winner_id in validated:
            self._record_match_result(match, winner_id, players)

        logger.info("Round %s completed", round_data.round_number)
        return True

    def _validate_result_entry(
        self,
        round_data: RoundData,
        match_id: int,
        winner_id: int,
        players: Dict[int, Player],
    ) -> Tuple[MatchData, int]:
        """Validate a result entry before recording.

        Returns:
            The match and its winner id
        """
        match = round_data.get_match(match_id)
        if match is None:
            logger.error(
                "Match %s not found in round %s. Available matches: %s",
                match_id,
                round_data.round_number,
                ", ".join(str(m.match_id) for m in round_data.matches),
            )
            raise ResultNotFoundException(
                f"Match {match_id} not found in round {round_data.round_number}"
            )

        if match.is_decided:
            raise DuplicateResultException(
                f"Match {match_id} already has winner {match.winner_id}"
            )

        if not match.has_player(winner_id):
            logger.error(
                "Winner %s not found in match %s. Match players: %s",
                winner_id,
                match_id,
                match.player_ids,
            )
            raise InvalidResultException(
                f"Winner {winner_id} is not a player in match {match_id}"
            )

        missing: List[int] = [pid for pid in match.player_ids if pid not in players]
        if missing:
            raise PlayerNotFoundException(
                f"Match {match_id} refers to unknown players {missing}"
            )

        return match, winner_id

    def _record_match_result(
        self, match: MatchData, winner_id: int, players: Dict[int, Player]
    ) -> None:
        match.set_winner(winner_id)
        for player_id in match.player_ids:
            if player_id == winner_id:
                players[player_id].apply_win()
            else:
                players[player_id].apply_loss()
        logger.debug("Recorded: match %s won by %s", match.match_id, winner_id)
