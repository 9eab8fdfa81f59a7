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

import config
import coord
import cube
import moves
import search
import tables
from search import Status
from util import log, sched_background_task

class SolverError(Exception):
    pass

# The search ran out of depth. Every cube has a solution, so this means the
# max depth was too small
class NoSolutionError(SolverError):
    pass

class SolverTimeoutError(SolverError):
    pass

# Turn whatever we were given into a CoordCube: a CoordCube, a sticker Cube,
# or a scramble (string or list of moves) applied to a solved cube
def get_coord_cube(puzzle):
    if isinstance(puzzle, coord.CoordCube):
        return puzzle
    if isinstance(puzzle, cube.Cube):
        return coord.CoordCube.from_cube(puzzle)
    if isinstance(puzzle, (str, list, tuple)):
        return moves.run_moves(coord.SOLVED, moves.parse_moves(puzzle))
    raise TypeError('cannot solve a %s' % type(puzzle).__name__)

# Stands in for a timeout that wasn't passed, since None means no time limit
DEFAULT = object()

class Solver:
    def __init__(self, table_dir=None, max_depth=None, timeout=DEFAULT, workers=None):
        self.table_dir = table_dir if table_dir is not None else config.TABLE_DIR
        self.max_depth = max_depth if max_depth is not None else config.MAX_DEPTH
        self.timeout = timeout if timeout is not DEFAULT else config.TIMEOUT
        self.workers = workers if workers is not None else config.WORKERS
        self.tables = None

    # Tables are loaded the first time they're needed
    def get_tables(self):
        if self.tables is None:
            self.tables = tables.get_tables(self.table_dir, self.workers)
        return self.tables

    def search(self, puzzle, max_depth=None, timeout=DEFAULT):
        cc = get_coord_cube(puzzle)
        if max_depth is None:
            max_depth = self.max_depth
        if timeout is DEFAULT:
            timeout = self.timeout
        result = search.two_phase(self.get_tables(), cc, max_depth=max_depth,
                timeout=timeout)
        log('search: %s, %s moves, %s nodes, %.3fs' % (result.status.name,
                len(result.moves) if result.moves is not None else '-',
                result.nodes, result.elapsed))
        return result

    # Solve a cube, returning a list of move strings. The two phases are
    # searched separately, so the solution gets one last pass to merge any
    # turns of the same face
    def solve(self, puzzle, max_depth=None, timeout=DEFAULT):
        result = self.search(puzzle, max_depth=max_depth, timeout=timeout)
        if result.status == Status.EXHAUSTED:
            raise NoSolutionError('no solution within %s moves' %
                    (max_depth if max_depth is not None else self.max_depth))
        elif result.status == Status.TIMEOUT:
            raise SolverTimeoutError('no solution found in %.3fs' % result.elapsed)
        return cube.simplify_alg([moves.MOVE_STRS[m] for m in result.moves])

    # Solve on the background thread, and call callback(moves, error) with
    # either the solution or the exception when done. Any error goes to the
    # callback, so one bad request can't take down the background thread
    def solve_async(self, puzzle, callback, max_depth=None, timeout=DEFAULT):
        sched_background_task(self.async_solve, puzzle, callback, max_depth,
                timeout)

    def async_solve(self, puzzle, callback, max_depth, timeout):
        try:
            solution = self.solve(puzzle, max_depth=max_depth, timeout=timeout)
        except Exception as e:
            callback(None, e)
            return
        callback(solution, None)

# Random state scramble generator: pick a random reachable cube, solve it, and
# invert the solution
def gen_random_state_scramble(solver=None):
    if solver is None:
        solver = Solver()
    cc = coord.random_state()
    solution = solver.solve(cc)
    return cube.invert_alg(solution).split()
