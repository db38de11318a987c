"""Shared helpers for Swiss Draw."""

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

import logging
import os

PACKAGE_LOGGER_NAME = "swissdraw"
LOG_LEVEL_ENV = "SWISSDRAW_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the package logger.

    The package logger gets a single stream handler the first time this is
    called. Its level comes from the ``SWISSDRAW_LOG_LEVEL`` environment
    variable and defaults to WARNING.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        package_logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return logging.getLogger(name)


def make_fixture_id(home_id: str, away_id: str, matchday: int) -> str:
    """Build the deterministic fixture id ``home-away-matchday``."""
    return f"{home_id}-{away_id}-{matchday}"


def pair_key(team1_id: str, team2_id: str) -> frozenset:
    """Unordered key for a pair of teams."""
    return frozenset({team1_id, team2_id})
