"""Utility helpers shared across Bracketeer."""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
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
import sys

from bracketeer.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_log_level() -> int:
    """Resolve the log level from the environment, falling back to the default."""
    requested = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).strip().upper()
    if requested not in _VALID_LEVELS:
        requested = DEFAULT_LOG_LEVEL
    return getattr(logging, requested)


def setup_logger(name: str) -> logging.Logger:
    """Return a configured logger for ``name``.

    Calling this repeatedly for the same name does not stack handlers.

    Args:
        name: Logger name, normally the calling module's ``__name__``

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(get_log_level())
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
