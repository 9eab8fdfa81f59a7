# Twophase, copyright 2022 Zach Wegner
#
# This file is part of Twophase.
#
# Twophase is free software: you can redistribute it and/or modify it under the
# terms of the GNU Affero General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# Twophase is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU Affero General Public License for more
# details.
#
# You should have received a copy of the GNU Affero General Public License
# along with Twophase.  If not, see <https://www.gnu.org/licenses/>.

import os

# Settings, each of which can be overridden with a TWOPHASE_* environment
# variable

# Where the move/pruning tables get cached
TABLE_DIR = os.environ.get('TWOPHASE_TABLE_DIR', 'rsrc/tables')

# Longest solution to search for, in moves
MAX_DEPTH = int(os.environ.get('TWOPHASE_MAX_DEPTH', 30))

# Wall-clock budget for one search, in seconds
TIMEOUT = float(os.environ.get('TWOPHASE_TIMEOUT', 10))

# Threads used to build tables
WORKERS = int(os.environ.get('TWOPHASE_WORKERS', 4))

# Print progress and timing messages
VERBOSE = os.environ.get('TWOPHASE_VERBOSE', '1') not in ('', '0')
