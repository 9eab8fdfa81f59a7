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

import collections
import random

import combi
import cube

# The cubie-level cube representation used by the solver. Instead of sticker
# colors (see cube.py), a cube is four vectors:
#   * cp: for each corner position, the corner that sits there
#   * co: for each corner position, the twist of that corner (0-2), i.e. which
#       of its stickers is on the U/D face
#   * ep/eo: the same for edges, with flips (0-1)
# All the search coordinates are ranks of some part of these vectors.

CORNER_NAMES = ['URF', 'UFL', 'ULB', 'UBR', 'DFR', 'DLF', 'DBL', 'DRB']
EDGE_NAMES = ['UR', 'UF', 'UL', 'UB', 'DR', 'DF', 'DL', 'DB',
        'FR', 'FL', 'BL', 'BR']

N_CORNER = 8
N_EDGE = 12

# Coordinate sizes
N_TWIST = 2187          # 3^7 corner orientations
N_FLIP = 2048           # 2^11 edge orientations
N_SLICE = 495           # 12 choose 4 positions of the E-slice edges
N_SLICE_PERM = 24       # 4! orders of the E-slice edges
N_FR_TO_BR = 11880      # 12! / 8! placements of FR, FL, BL, BR
N_URF_TO_DLF = 20160    # 8! / 2! placements of URF..DLF
N_UR_TO_UL = 1320       # 12! / 9! placements of UR, UF, UL
N_UB_TO_DF = 1320       # 12! / 9! placements of UB, DR, DF
N_UR_TO_DF = 20160      # 8! / 2! placements of UR..DF within the U/D layers
N_CORNER_PERM = 40320   # 8!
N_EDGE_PERM = 479001600 # 12!
N_PARITY = 2

SLICE_EDGES = (8, 9, 10, 11)

IDENTITY_8 = tuple(range(N_CORNER))
IDENTITY_12 = tuple(range(N_EDGE))
ZERO_8 = (0,) * N_CORNER
ZERO_12 = (0,) * N_EDGE

class CubeError(ValueError):
    pass

def check_pieces(kind, perm, orient, n, r):
    if len(perm) != n or len(orient) != n:
        raise CubeError('%s vectors must have %s entries, got %s and %s' %
                (kind, n, len(perm), len(orient)))
    if sorted(perm) != list(range(n)):
        raise CubeError('%s permutation %s is not a permutation of 0..%s' %
                (kind, list(perm), n - 1))
    for o in orient:
        if o not in range(r):
            raise CubeError('%s orientation %r out of range 0..%s' % (kind, o, r - 1))
    if sum(orient) % r:
        raise CubeError('%s orientations %s sum to %s, which is not a multiple of %s' %
                (kind, list(orient), sum(orient), r))

class CoordCube:
    def __init__(self, cp=IDENTITY_8, co=ZERO_8, ep=IDENTITY_12, eo=ZERO_12):
        [cp, co, ep, eo] = [tuple(cp), tuple(co), tuple(ep), tuple(eo)]
        check_pieces('corner', cp, co, N_CORNER, 3)
        check_pieces('edge', ep, eo, N_EDGE, 2)
        # Every face turn swaps corners and edges with the same parity
        if combi.parity(cp) != combi.parity(ep):
            raise CubeError('corner and edge permutations have different parity')
        self.cp = cp
        self.co = co
        self.ep = ep
        self.eo = eo

    # Build a cube from vectors that are known to be good, skipping the checks.
    # This is used for all the cubes generated while building tables
    @classmethod
    def make(cls, cp, co, ep, eo):
        self = cls.__new__(cls)
        self.cp = tuple(cp)
        self.co = tuple(co)
        self.ep = tuple(ep)
        self.eo = tuple(eo)
        return self

    # Convert a sticker-based cube into vectors. Each corner's twist is the
    # index of its U/D sticker, and each edge is flipped if its stickers are
    # in the opposite order from the solved edge.
    @classmethod
    def from_cube(cls, puzzle):
        cp = []
        co = []
        for [i, corner] in enumerate(puzzle.corners):
            twist = [j for [j, c] in enumerate(corner) if c in (cube.W, cube.Y)]
            if len(corner) != 3 or len(twist) != 1:
                raise CubeError('bad corner %r at %s' % (corner, CORNER_NAMES[i]))
            [t] = twist
            piece = tuple(corner[(t + j) % 3] for j in range(3))
            if piece not in cube.CORNERS:
                raise CubeError('no corner has colors %r (at %s)' %
                        (corner, CORNER_NAMES[i]))
            cp.append(cube.CORNERS.index(piece))
            co.append(t)

        ep = []
        eo = []
        for [i, edge] in enumerate(puzzle.edges):
            edge = tuple(edge)
            if edge in cube.EDGES:
                ep.append(cube.EDGES.index(edge))
                eo.append(0)
            elif edge[::-1] in cube.EDGES:
                ep.append(cube.EDGES.index(edge[::-1]))
                eo.append(1)
            else:
                raise CubeError('no edge has colors %r (at %s)' %
                        (edge, EDGE_NAMES[i]))

        return cls(cp, co, ep, eo)

    def to_cube(self):
        corners = tuple(cube.rotate(cube.CORNERS[c], o)
                for [c, o] in zip(self.cp, self.co))
        edges = tuple(cube.EDGES[e][::-1] if o else cube.EDGES[e]
                for [e, o] in zip(self.ep, self.eo))
        return cube.Cube(edges=edges, corners=corners)

    @classmethod
    def from_scalar(cls, name, value):
        coord = COORDS[name]
        if not 0 <= value < coord.size:
            raise CubeError('%s coordinate %s out of range 0..%s' %
                    (name, value, coord.size - 1))
        return coord.make(value)

    def to_scalar(self, name):
        return COORDS[name].get(self)

    # Apply the transformation <other> to this cube: the piece at position i
    # of the result is the piece of self at position other.cp[i], with the
    # twists added up
    def compose(self, other):
        [acp, aco, aep, aeo] = [self.cp, self.co, self.ep, self.eo]
        cp = tuple(acp[j] for j in other.cp)
        co = tuple((aco[j] + o) % 3 for [j, o] in zip(other.cp, other.co))
        ep = tuple(aep[j] for j in other.ep)
        eo = tuple((aeo[j] + o) % 2 for [j, o] in zip(other.ep, other.eo))
        return CoordCube.make(cp, co, ep, eo)

    def inverse(self):
        cp = [0] * N_CORNER
        co = [0] * N_CORNER
        for [i, [c, o]] in enumerate(zip(self.cp, self.co)):
            cp[c] = i
            co[c] = -o % 3
        ep = [0] * N_EDGE
        eo = [0] * N_EDGE
        for [i, [e, o]] in enumerate(zip(self.ep, self.eo)):
            ep[e] = i
            eo[e] = o
        return CoordCube.make(cp, co, ep, eo)

    def corner_parity(self):
        return combi.parity(self.cp)

    def edge_parity(self):
        return combi.parity(self.ep)

    def is_solved(self):
        return self == SOLVED

    def __eq__(self, other):
        if not isinstance(other, CoordCube):
            return NotImplemented
        return (self.cp == other.cp and self.co == other.co and
                self.ep == other.ep and self.eo == other.eo)

    def __hash__(self):
        return hash((self.cp, self.co, self.ep, self.eo))

    def __repr__(self):
        return 'CoordCube(cp=%s, co=%s, ep=%s, eo=%s)' % (list(self.cp),
                list(self.co), list(self.ep), list(self.eo))

SOLVED = CoordCube()

# A uniformly random reachable cube: any orientations, and any pair of
# permutations with matching parity
def random_state(rng=random):
    while True:
        cp = combi.unrank_subset(rng.randrange(N_CORNER_PERM), IDENTITY_8, N_CORNER)
        ep = combi.unrank_subset(rng.randrange(N_EDGE_PERM), IDENTITY_12, N_EDGE)
        if combi.parity(cp) == combi.parity(ep):
            break
    co = combi.unrank_orient(rng.randrange(N_TWIST), N_CORNER, 3)
    eo = combi.unrank_orient(rng.randrange(N_FLIP), N_EDGE, 2)
    return CoordCube(cp, co, ep, eo)

################################################################################
## Coordinates #################################################################
################################################################################

# Each coordinate gets a getter (cube -> index) and a maker (index -> some cube
# with that index, solved everywhere else)

def get_twist(cc):
    return combi.rank_orient(cc.co, 3)

def make_twist(twist):
    co = combi.unrank_orient(twist, N_CORNER, 3)
    return CoordCube.make(IDENTITY_8, co, IDENTITY_12, ZERO_12)

def get_flip(cc):
    return combi.rank_orient(cc.eo, 2)

def make_flip(flip):
    eo = combi.unrank_orient(flip, N_EDGE, 2)
    return CoordCube.make(IDENTITY_8, ZERO_8, IDENTITY_12, eo)

# The slice edges are ranked from the right, so that FRtoBR < 24 exactly when
# all four are in the E slice, and the solved cube has index 0
def get_fr_to_br(cc):
    return combi.rank_subset(cc.ep, SLICE_EDGES, from_right=True)

def make_fr_to_br(index):
    ep = combi.unrank_subset(index, SLICE_EDGES, N_EDGE, from_right=True)
    return CoordCube.make(IDENTITY_8, ZERO_8, ep, ZERO_12)

def get_slice(cc):
    return get_fr_to_br(cc) // N_SLICE_PERM

def make_slice(index):
    return make_fr_to_br(index * N_SLICE_PERM)

def get_slice_perm(cc):
    return get_fr_to_br(cc) % N_SLICE_PERM

def make_slice_perm(index):
    return make_fr_to_br(index)

def corner_coord(pieces):
    def get(cc):
        return combi.rank_subset(cc.cp, pieces)
    def make(index):
        cp = combi.unrank_subset(index, pieces, N_CORNER)
        return CoordCube.make(cp, ZERO_8, IDENTITY_12, ZERO_12)
    return [get, make]

def edge_coord(pieces):
    def get(cc):
        return combi.rank_subset(cc.ep, pieces)
    def make(index):
        ep = combi.unrank_subset(index, pieces, N_EDGE)
        return CoordCube.make(IDENTITY_8, ZERO_8, ep, ZERO_12)
    return [get, make]

def get_parity(cc):
    return combi.parity(cc.cp)

def make_parity(parity):
    cp = (1, 0, *IDENTITY_8[2:]) if parity else IDENTITY_8
    return CoordCube.make(cp, ZERO_8, IDENTITY_12, ZERO_12)

Coord = collections.namedtuple('Coord', 'size get make')

COORDS = {
    'twist': Coord(N_TWIST, get_twist, make_twist),
    'flip': Coord(N_FLIP, get_flip, make_flip),
    'slice': Coord(N_SLICE, get_slice, make_slice),
    'slice_perm': Coord(N_SLICE_PERM, get_slice_perm, make_slice_perm),
    'fr_to_br': Coord(N_FR_TO_BR, get_fr_to_br, make_fr_to_br),
    'urf_to_dlf': Coord(N_URF_TO_DLF, *corner_coord(range(6))),
    'ur_to_ul': Coord(N_UR_TO_UL, *edge_coord(range(0, 3))),
    'ub_to_df': Coord(N_UB_TO_DF, *edge_coord(range(3, 6))),
    # Only meaningful in phase 2, where these six edges are all somewhere in
    # the U and D layers. Elsewhere the index goes up to 12!/6!
    'ur_to_df': Coord(N_UR_TO_DF, *edge_coord(range(6))),
    'corner_perm': Coord(N_CORNER_PERM, *corner_coord(range(8))),
    'edge_perm': Coord(N_EDGE_PERM, *edge_coord(range(12))),
    'parity': Coord(N_PARITY, get_parity, make_parity),
}
