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

import array

import combi
import coord
import cube
from coord import CoordCube

################################################################################
## Elementary moves ############################################################
################################################################################

# Clockwise quarter turn of each face, as a cubie-level transformation. For
# each position, cp/ep give the piece that moves into that position, and
# co/eo how much it gets twisted on the way.
GENERATORS = [
    # U
    CoordCube.make(cp=[3, 0, 1, 2, 4, 5, 6, 7], co=[0] * 8,
            ep=[3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11], eo=[0] * 12),
    # D
    CoordCube.make(cp=[0, 1, 2, 3, 5, 6, 7, 4], co=[0] * 8,
            ep=[0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11], eo=[0] * 12),
    # R
    CoordCube.make(cp=[4, 1, 2, 0, 7, 5, 6, 3], co=[2, 0, 0, 1, 1, 0, 0, 2],
            ep=[8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0], eo=[0] * 12),
    # L
    CoordCube.make(cp=[0, 2, 6, 3, 4, 1, 5, 7], co=[0, 1, 2, 0, 0, 2, 1, 0],
            ep=[0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11], eo=[0] * 12),
    # F
    CoordCube.make(cp=[1, 5, 2, 3, 0, 4, 6, 7], co=[1, 2, 0, 0, 2, 1, 0, 0],
            ep=[0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11],
            eo=[0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0]),
    # B
    CoordCube.make(cp=[0, 1, 3, 7, 4, 5, 2, 6], co=[0, 0, 1, 2, 0, 0, 2, 1],
            ep=[0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7],
            eo=[0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1]),
]

# All 18 moves, indexed by 3 * face + turn - 1. The half and counter-clockwise
# turns are just the quarter turn applied two and three times.
MOVE_CUBES = []
for g in GENERATORS:
    m = g
    for turn in range(3):
        MOVE_CUBES.append(m)
        m = m.compose(g)

N_MOVES = len(MOVE_CUBES)

MOVE_FACE = [m // 3 for m in range(N_MOVES)]
MOVE_TURN = [m % 3 + 1 for m in range(N_MOVES)]
MOVE_STRS = [cube.move_str(f, t) for [f, t] in zip(MOVE_FACE, MOVE_TURN)]

def move_index(face, turn):
    return 3 * face + turn - 1

# Convert any alg accepted by cube.parse_alg into a list of move indices
def parse_moves(alg):
    return [move_index(f, t) for [f, t] in cube.parse_alg(alg)]

def run_moves(cc, moves):
    for m in moves:
        cc = cc.compose(MOVE_CUBES[m])
    return cc

# Phase 2 only allows moves that keep the cube in G1: any U/D turn, and half
# turns of the other faces
PHASE_2_MOVES = [m for m in range(N_MOVES) if MOVE_FACE[m] < 2 or MOVE_TURN[m] == 2]
PHASE_2_FORBIDDEN = [m for m in range(N_MOVES) if m not in PHASE_2_MOVES]
assert PHASE_2_MOVES == [0, 1, 2, 3, 4, 5, 7, 10, 13, 16]

# Don't turn the same face twice in a row, and only turn the opposite face
# if it's lower (so D U is allowed but not U D)
def is_canonical(last, m):
    face = MOVE_FACE[m]
    last_face = MOVE_FACE[last]
    return not (face == last_face or face & ~1 == last_face)

# Successor lists: for each previous move, the moves that can follow it
SUCCESSORS_1 = [[m for m in range(N_MOVES) if is_canonical(last, m)]
        for last in range(N_MOVES)]
SUCCESSORS_2 = [[m for m in PHASE_2_MOVES if is_canonical(last, m)]
        for last in range(N_MOVES)]
FIRST_MOVES_1 = list(range(N_MOVES))
FIRST_MOVES_2 = list(PHASE_2_MOVES)

# The first phase 2 move after each phase 1 move. Phase 1 can end on a
# quarter turn that lands in G1 one move early (R from an R' cube gets to
# R2), so a half turn of that same face is allowed to start phase 2, and the
# two get merged into one move by join_moves().
PHASE_2_FIRST_MOVES = [[m for m in PHASE_2_MOVES if is_canonical(last, m) or
            (MOVE_FACE[m] == MOVE_FACE[last] and last not in PHASE_2_MOVES)]
        for last in range(N_MOVES)]

def join_moves(moves_1, moves_2):
    if moves_1 and moves_2 and MOVE_FACE[moves_1[-1]] == MOVE_FACE[moves_2[0]]:
        turn = (MOVE_TURN[moves_1[-1]] + MOVE_TURN[moves_2[0]]) % 4
        assert turn, (moves_1, moves_2)
        merged = move_index(MOVE_FACE[moves_2[0]], turn)
        return list(moves_1[:-1]) + [merged] + list(moves_2[1:])
    return list(moves_1) + list(moves_2)

################################################################################
## Move tables #################################################################
################################################################################

# Table layouts: coordinate name -> (array type, exclusive bound on values).
# The ur_to_df table is only ever read inside phase 2, but a quarter turn of
# R/L/F/B takes its six edges out of the U/D layers, where the index can get
# as big as 12!/6!, so it needs wider entries.
MOVE_TABLE_TYPES = {
    'twist': ('H', coord.N_TWIST),
    'flip': ('H', coord.N_FLIP),
    'fr_to_br': ('H', coord.N_FR_TO_BR),
    'urf_to_dlf': ('H', coord.N_URF_TO_DLF),
    'ur_to_ul': ('H', coord.N_UR_TO_UL),
    'ub_to_df': ('H', coord.N_UB_TO_DF),
    'ur_to_df': ('I', combi.FACTORIAL[12] // combi.FACTORIAL[6]),
    'parity': ('B', coord.N_PARITY),
}

# For every value of a coordinate, build a cube with that value, apply each
# of the 18 moves and see where the coordinate ends up. The result is a list
# of rows, one array of 18 successors per coordinate value.
def gen_move_table(name):
    [typecode, _] = MOVE_TABLE_TYPES[name]
    c = coord.COORDS[name]
    table = []
    for i in range(c.size):
        cc = c.make(i)
        table.append(array.array(typecode, [c.get(cc.compose(m))
                for m in MOVE_CUBES]))
    return table

# The phase 1 slice coordinate moves exactly like the location part of the
# fr_to_br coordinate, so we derive its table instead of building it
def gen_slice_table(fr_to_br_move):
    n = coord.N_SLICE_PERM
    return [array.array('H', [f // n for f in fr_to_br_move[s * n]])
            for s in range(coord.N_SLICE)]

# At the start of phase 2 the six U/D edges UR..DF are tracked as two separate
# coordinates during phase 1 (which keeps those move tables small). Once all
# twelve edges are back in their layers, both coordinates are below 336
# (8 * 7 * 6), and this table merges them into the phase 2 ur_to_df
# coordinate. Pairs that put two pieces in the same place get -1.
N_MERGE = 336

def gen_merge_table():
    ur_to_ul = [combi.unrank_subset(i, (0, 1, 2), coord.N_EDGE, fill=False)
            for i in range(N_MERGE)]
    ub_to_df = [combi.unrank_subset(i, (3, 4, 5), coord.N_EDGE, fill=False)
            for i in range(N_MERGE)]
    table = []
    for a in ur_to_ul:
        row = array.array('h')
        for b in ub_to_df:
            if any(x is not None and y is not None for [x, y] in zip(a, b)):
                row.append(-1)
                continue
            merged = [x if x is not None else y for [x, y] in zip(a, b)]
            row.append(combi.rank_subset(merged, range(6)))
        table.append(row)
    return table
