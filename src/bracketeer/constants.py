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

# --- Constants ---

APP_NAME = "Bracketeer"
APP_VERSION = "0.1.0"

# Environment variable overriding the default log level
LOG_LEVEL_ENV_VAR = "BRACKETEER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

# Scoring weights
MATCH_WIN_POINTS = 3.0
GAME_WIN_POINTS = 1.0
GAME_LOSS_POINTS = -0.5

# Best-of-three matches
GAMES_PER_MATCH = 3
GAMES_TO_WIN = 2

# Bounded search caps
ROUND_ROBIN_MAX_ATTEMPTS = 1000
SWISS_MAX_SEARCH_STEPS = 20000

# Player names
MAX_PLAYER_NAME_LENGTH = 30
PLAYER_NAME_DISALLOWED_PATTERN = r"[^a-zA-Z0-9\s'\-.]"

# Format tags (serialized form of the Format enum)
FORMAT_ROUND_ROBIN = "round-robin"
FORMAT_SINGLE_ELIMINATION = "single-elimination"
FORMAT_DOUBLE_ELIMINATION = "double-elimination"
FORMAT_SWISS = "swiss"
FORMAT_GROUP_STAGE = "group-stage"

# Bracket tags
BRACKET_WINNERS = "winners"
BRACKET_LOSERS = "losers"
BRACKET_GRAND_FINALS = "grand-finals"

# Stage tags
STAGE_GROUPS = "groups"
STAGE_PLAYOFFS = "playoffs"

# Seeding methods
SEEDING_RANDOM = "random"
SEEDING_SEEDED = "seeded"

# Group names, which also caps the number of groups
GROUP_NAMES = "ABCDEFGH"

# Player count limits per format
ROUND_ROBIN_MIN_PLAYERS = 3
ROUND_ROBIN_MAX_PLAYERS = 12
SWISS_MIN_PLAYERS = 4
SWISS_MAX_PLAYERS = 100
SWISS_MIN_ROUNDS = 1
SWISS_MAX_ROUNDS = 10
SWISS_DEFAULT_MAX_ROUNDS = 7
SINGLE_ELIMINATION_MIN_PLAYERS = 2
SINGLE_ELIMINATION_MAX_PLAYERS = 128
DOUBLE_ELIMINATION_MIN_PLAYERS = 3
DOUBLE_ELIMINATION_MAX_PLAYERS = 64
GROUP_STAGE_MIN_PLAYERS = 8
GROUP_STAGE_MAX_PLAYERS = 64
GROUP_STAGE_MIN_GROUPS = 2
GROUP_STAGE_MIN_PLAYERS_PER_GROUP = 3
GROUP_STAGE_DEFAULT_PLAYERS_PER_GROUP = 4
GROUP_STAGE_DEFAULT_ADVANCING = 2

# Tiebreaker Keys
TB_QUALITY = "quality"
TB_WIN_PERCENTAGE = "win_percentage"
TB_GAME_DIFFERENTIAL = "game_differential"
TB_GAMES_WON = "games_won"

# Order applied after points and head-to-head
DEFAULT_TIEBREAK_ORDER = [
    TB_QUALITY,
    TB_WIN_PERCENTAGE,
    TB_GAME_DIFFERENTIAL,
    TB_GAMES_WON,
]
