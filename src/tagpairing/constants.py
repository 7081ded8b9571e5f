# Tag Pairing
# Copyright (C) 2025  Tag Pairing developers
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
DEFAULT_SAVE_FILE = f"tournament{SAVE_FILE_EXTENSION}"
STORAGE_KEY = "onepiece_tournament"

# Game outcome points
PRIORITY_WIN_POINTS = 3
NON_PRIORITY_WIN_POINTS = 2
# A solo team's only player always sits at the effective priority table
SOLO_WIN_POINTS = PRIORITY_WIN_POINTS

# Bye points (configurable per tournament)
DEFAULT_BYE_POINTS = 3

# Solo teams field a sentinel in the player 2 slot
NON_PLAYER_NAME = "NonPlayer"

# Tournament formats
FORMAT_SWISS = "swiss"
FORMAT_ROUND_ROBIN = "roundrobin"
DEFAULT_FORMAT = FORMAT_SWISS
TOURNAMENT_FORMATS = (FORMAT_SWISS, FORMAT_ROUND_ROBIN)

FORMAT_NAMES = {
    FORMAT_SWISS: "Swiss",
    FORMAT_ROUND_ROBIN: "Round Robin",
}

# Sides of a match
TEAM1 = "team1"
TEAM2 = "team2"
WINNER_SIDES = (TEAM1, TEAM2)

# Priority preference keys
PLAYER1 = "player1"
PLAYER2 = "player2"

# Game slots inside a match
GAME_A = 0  # player 1s
GAME_B = 1  # player 2s

# Match id prefixes
MATCH_ID_PREFIX = "match"
BYE_ID_PREFIX = "bye"

# Official minimum for OMW% and OOMW%
MIN_WIN_RATE = 0.333

MIN_TEAMS_TO_START = 2

# Official Swiss round count, (max team count, rounds)
OFFICIAL_SWISS_ROUNDS = (
    (8, 3),
    (16, 4),
    (32, 5),
    (64, 6),
    (128, 7),
    (256, 8),
    (512, 9),
    (1024, 10),
)
MAX_OFFICIAL_SWISS_ROUNDS = 11

LOG_LEVEL_ENV_VAR = "TAGPAIRING_LOG_LEVEL"
