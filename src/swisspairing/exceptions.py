"""Exceptions for use in Swiss Pairing"""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
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


# ========== Base Application Exception ==========


class SwissPairingException(Exception):
    """Base exception for all Swiss Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all package-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SwissPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidGraphException(PairingException):
    """Raised when the matching solver is handed a malformed graph."""

    pass


class IncompleteMatchingException(PairingException):
    """Raised when the solver leaves a participant without a partner."""

    pass


class UnpairedParticipantsException(PairingException):
    """Raised when more than one participant is left unpaired after matching."""

    def __init__(self, participant_ids):
        self.participant_ids = list(participant_ids)
        super().__init__(
            f"{len(self.participant_ids)} participants left unpaired: "
            f"{', '.join(self.participant_ids)}"
        )


class DuplicateParticipantException(PairingException):
    """Raised when the same participant id is supplied twice."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(SwissPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentNotFoundException(TournamentException):
    """Raised when a requested tournament does not exist."""

    pass


class InputFetchException(TournamentException):
    """Raised when participants, matches or byes cannot be fetched for a round."""

    pass


class DuplicateRoundException(TournamentException):
    """Raised when pairings for a (tournament, round) already exist."""

    pass


class RoundInProgressException(TournamentException):
    """Raised when a round is already being paired or cannot be changed."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(SwissPairingException):
    """Base exception for participant-related errors."""

    pass


class ParticipantNotFoundException(ParticipantException):
    """Raised when a requested participant cannot be found."""

    pass


# ========== Result Exceptions ==========


class ResultException(SwissPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., unknown match point value)."""

    pass


class MatchNotFoundException(ResultException):
    """Raised when no match exists for the given round and participants."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Snapshot Exceptions ==========


class SnapshotException(SwissPairingException):
    """Base exception for tournament snapshot files."""

    pass


class SnapshotLoadException(SnapshotException):
    """Raised when a snapshot file cannot be read or parsed."""

    pass
