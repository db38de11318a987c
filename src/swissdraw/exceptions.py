"""Exceptions for use in Swiss Draw"""

# Swiss Draw
# Copyright (C) 2025  Swiss Draw developers
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


class SwissDrawException(Exception):
    """Base exception for all Swiss Draw errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every package-specific error with a single except clause.
    """

    pass


# ========== Draw Exceptions ==========


class DrawException(SwissDrawException):
    """Base exception for draw-related errors."""

    pass


class InvalidFixtureException(DrawException):
    """Raised when a fixture would pair a team with itself."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(SwissDrawException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when the tournament is in an invalid state for the requested operation."""

    pass


class FixtureNotFoundException(TournamentException):
    """Raised when a requested fixture does not exist."""

    pass


# ========== Result Exceptions ==========


class ResultException(SwissDrawException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


# ========== Bracket Exceptions ==========


class BracketException(SwissDrawException):
    """Base exception for playoff bracket errors."""

    pass


class PlayoffMatchNotFoundException(BracketException):
    """Raised when a bracket does not contain the requested match."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(SwissDrawException):
    """Base exception for validation errors."""

    pass


class InvalidRosterException(ValidationException):
    """Raised when a roster breaks a roster-level rule."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissDrawException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
