"""Tag Pairing: a 2v2 card game tournament manager.

Teams of two players are paired round by round under a Swiss or round-robin
format, every match is played over two games, and standings are decided by
match points followed by OMW% and OOMW%.
"""

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

APP_NAME = "Tag Pairing"
APP_VERSION = "0.3.0"
