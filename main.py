#!/usr/bin/env python

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

import argparse
import sys

import config
import cube
import solver
from util import time_execution

def main(argv=None):
    parser = argparse.ArgumentParser(description='Solve a 3x3x3 cube with the '
            'two-phase algorithm')
    parser.add_argument('scramble', nargs='*', help='scramble to solve, e.g. '
            "R U R' U'. A random move scramble is used if none is given")
    parser.add_argument('-d', '--max-depth', type=int, default=config.MAX_DEPTH,
            help='longest solution to look for, in moves')
    parser.add_argument('-t', '--timeout', type=float, default=config.TIMEOUT,
            help='give up after this many seconds')
    parser.add_argument('--table-dir', default=config.TABLE_DIR,
            help='directory to cache move/pruning tables in')
    parser.add_argument('--workers', type=int, default=config.WORKERS,
            help='threads to use when building tables')
    parser.add_argument('--build-tables', action='store_true',
            help='just build (or check) the table cache and exit')
    parser.add_argument('--random-state', action='store_true',
            help='generate and print a random state scramble')
    args = parser.parse_args(argv)

    s = solver.Solver(table_dir=args.table_dir, max_depth=args.max_depth,
            timeout=args.timeout, workers=args.workers)

    if args.build_tables:
        with time_execution('tables'):
            s.get_tables()
        return 0

    try:
        if args.random_state:
            print(' '.join(solver.gen_random_state_scramble(s)))
            return 0

        if args.scramble:
            scramble = ' '.join(args.scramble)
        else:
            scramble = ' '.join(cube.gen_random_move_scramble())
            print('scramble: %s' % scramble)

        solution = s.solve(scramble)
    except (solver.SolverError, ValueError) as e:
        print('error: %s' % e, file=sys.stderr)
        return 1

    print('solution (%s moves): %s' % (len(solution), ' '.join(solution)))
    return 0

if __name__ == '__main__':
    sys.exit(main())
