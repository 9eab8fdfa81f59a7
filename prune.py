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

import coord
import moves

# Pruning tables give, for a pair of coordinates, the minimum number of moves
# needed to solve both of them together. Since that ignores everything else
# about the cube, it's a lower bound on the moves needed to finish the phase,
# and the search can cut any branch where the bound is more than the number of
# moves left.
#
# The values all fit in 4 bits, and these tables have about a million entries
# each, so we store two entries per byte. The low nibble holds the even index.

UNKNOWN = 15

# Lookup table: 1 for each byte value that has an unknown nibble, else 0
HAS_UNKNOWN = bytes(int(b & 0x0F == UNKNOWN or b >> 4 == UNKNOWN)
        for b in range(256))

class PackedTable:
    def __init__(self, size, data=None):
        self.size = size
        if data is None:
            data = bytearray(b'\xff' * packed_len(size))
        if len(data) != packed_len(size):
            raise ValueError('expected %s bytes for %s entries, got %s' %
                    (packed_len(size), size, len(data)))
        self.data = bytearray(data)

    @classmethod
    def from_values(cls, values):
        values = bytes(values)
        size = len(values)
        if size & 1:
            values += bytes([UNKNOWN])
        data = bytearray(lo | hi << 4 for [lo, hi] in zip(values[0::2], values[1::2]))
        return cls(size, data)

    def get(self, i):
        return (self.data[i >> 1] >> ((i & 1) << 2)) & 0x0F

    def set(self, i, value):
        assert 0 <= value <= UNKNOWN, value
        shift = (i & 1) << 2
        b = self.data[i >> 1] & ~(0x0F << shift)
        self.data[i >> 1] = b | value << shift

    # Whether every entry has been filled in. For an odd size the last high
    # nibble is padding, so skip that byte and check its low nibble by hand.
    def is_complete(self):
        n = self.size >> 1
        if 1 in self.data[:n].translate(HAS_UNKNOWN):
            return False
        return not (self.size & 1) or self.get(self.size - 1) != UNKNOWN

    def max_depth(self):
        return max(self.get(i) for i in range(self.size))

    def __len__(self):
        return self.size

def packed_len(size):
    return (size + 1) >> 1

# Fill in a pruning table by breadth-first search from the solved position,
# which is always index 0. <neighbors> gives the indices reachable from an
# index with one move. Each pass expands exactly the positions found on the
# previous pass, so the first depth we reach a position at is its distance.
# This works on a plain bytearray (one entry per byte) for speed, and packs
# the result at the end.
def gen_prune_table(size, neighbors):
    depths = bytearray([UNKNOWN]) * size
    depths[0] = 0
    current = [0]
    depth = 0
    while current:
        depth += 1
        next = []
        for i in current:
            for c in neighbors(i):
                if depths[c] == UNKNOWN:
                    if depth >= UNKNOWN:
                        raise RuntimeError('pruning table depth %s does not fit '
                                'in 4 bits' % depth)
                    depths[c] = depth
                    next.append(c)
        current = next

    missing = depths.count(UNKNOWN)
    if missing:
        raise RuntimeError('pruning table incomplete: %s of %s entries unreached' %
                (missing, size))
    return PackedTable.from_values(depths)

################################################################################
## Table definitions ###########################################################
################################################################################

# Index layouts. Phase 1 tables are over all 18 moves, phase 2 tables only
# over the 10 phase 2 moves, with the corner parity as a third coordinate.

SLICE_TWIST_SIZE = coord.N_SLICE * coord.N_TWIST
SLICE_FLIP_SIZE = coord.N_SLICE * coord.N_FLIP
SLICE_URF_TO_DLF_PARITY_SIZE = coord.N_SLICE_PERM * coord.N_URF_TO_DLF * 2
SLICE_UR_TO_DF_PARITY_SIZE = coord.N_SLICE_PERM * coord.N_UR_TO_DF * 2

def slice_twist_index(slice, twist):
    return coord.N_SLICE * twist + slice

def slice_flip_index(slice, flip):
    return coord.N_SLICE * flip + slice

def phase_2_index(perm, slice_perm, parity):
    return (coord.N_SLICE_PERM * perm + slice_perm) * 2 + parity

def gen_slice_twist_table(slice_move, twist_move):
    n = coord.N_SLICE
    def neighbors(i):
        [twist, slice] = divmod(i, n)
        return [n * t + s for [t, s] in zip(twist_move[twist], slice_move[slice])]
    return gen_prune_table(SLICE_TWIST_SIZE, neighbors)

def gen_slice_flip_table(slice_move, flip_move):
    n = coord.N_SLICE
    def neighbors(i):
        [flip, slice] = divmod(i, n)
        return [n * f + s for [f, s] in zip(flip_move[flip], slice_move[slice])]
    return gen_prune_table(SLICE_FLIP_SIZE, neighbors)

# Shared by both phase 2 tables: <perm_move> is the urf_to_dlf or ur_to_df
# move table. The slice_perm coordinate is just fr_to_br, which stays below 24
# under phase 2 moves.
def gen_phase_2_table(size, perm_move, fr_to_br_move, parity_move):
    n = coord.N_SLICE_PERM
    phase_2_moves = moves.PHASE_2_MOVES
    def neighbors(i):
        [rest, parity] = divmod(i, 2)
        [perm, slice_perm] = divmod(rest, n)
        [p_m, s_m, par_m] = [perm_move[perm], fr_to_br_move[slice_perm],
                parity_move[parity]]
        return [(n * p_m[m] + s_m[m]) * 2 + par_m[m] for m in phase_2_moves]
    return gen_prune_table(size, neighbors)

def gen_slice_urf_to_dlf_parity_table(urf_to_dlf_move, fr_to_br_move, parity_move):
    return gen_phase_2_table(SLICE_URF_TO_DLF_PARITY_SIZE, urf_to_dlf_move,
            fr_to_br_move, parity_move)

def gen_slice_ur_to_df_parity_table(ur_to_df_move, fr_to_br_move, parity_move):
    return gen_phase_2_table(SLICE_UR_TO_DF_PARITY_SIZE, ur_to_df_move,
            fr_to_br_move, parity_move)
