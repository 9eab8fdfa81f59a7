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

import random

################################################################################
## Cube logic ##################################################################
################################################################################

# Colors double as face indices: the center of face U is white, etc.
[W, Y, R, O, G, B] = range(6)

# Pieces are listed in the usual solver order, each as a tuple of sticker
# colors. Corners start with the U/D sticker and go clockwise, edges start with
# the U/D sticker, or the F/B sticker for the four E-slice edges.
#                URF        UFL        ULB        UBR
CORNERS = ((W, R, G), (W, G, O), (W, O, B), (W, B, R),
#                DFR        DLF        DBL        DRB
        (Y, G, R), (Y, O, G), (Y, B, O), (Y, R, B))
#              UR      UF      UL      UB
EDGES = ((W, R), (W, G), (W, O), (W, B),
#              DR      DF      DL      DB
        (Y, R), (Y, G), (Y, O), (Y, B),
#              FR      FL      BL      BR
        (G, R), (G, O), (B, O), (B, R))

# Face tables: for each of the six faces, the corner positions and edge
# positions on that face, in the order pieces travel during a clockwise turn
# (the piece in slot 0 moves to slot 1, etc.), along with which sticker of each
# piece faces the turning face.
#         corner pos     corner idx    edge pos        edge idx
up    = [0, 1, 2, 3], [0, 0, 0, 0], [0, 1,  2, 3], [0, 0, 0, 0]
down  = [5, 4, 7, 6], [0, 0, 0, 0], [5, 4,  7, 6], [0, 0, 0, 0]
right = [4, 0, 3, 7], [2, 1, 2, 1], [8, 0, 11, 4], [1, 1, 1, 1]
left  = [2, 1, 5, 6], [1, 2, 1, 2], [10, 2, 9, 6], [1, 1, 1, 1]
front = [1, 0, 4, 5], [1, 2, 1, 2], [9, 1,  8, 5], [0, 1, 0, 1]
back  = [3, 2, 6, 7], [1, 2, 1, 2], [11, 3, 10, 7], [0, 1, 0, 1]

faces = [up, down, right, left, front, back]

FACE_STR = 'UDRLFB'
INV_FACE_STR = {f: i for [i, f] in enumerate(FACE_STR)}
TURN_STR = {-1: "'", 1: '', 2: '2', 3: "'"}
INV_TURN_STR = {v: k for [k, v] in TURN_STR.items()}
assert INV_TURN_STR["'"] == 3

class Cube:
    def __init__(self, edges=EDGES, corners=CORNERS):
        self.edges = edges
        self.corners = corners

    def turn(self, face, n):
        [self.edges, self.corners] = TURNS[face][n % 4](self.edges, self.corners)
        return self

    def run_alg(self, alg):
        if isinstance(alg, (str, list, tuple)):
            alg = parse_alg(alg)
        for [face, n] in alg:
            self.turn(face, n)
        return self

    def __eq__(self, other):
        return self.edges == other.edges and self.corners == other.corners

    def __repr__(self):
        return 'Cube(edges=%r, corners=%r)' % (self.edges, self.corners)

    # To make a copy, just return a new cube object with the same attributes,
    # since they're all immutable
    def copy(self):
        return Cube(self.edges, self.corners)

def rotate(l, n):
    return (*l[-n:], *l[:-n]) if n else tuple(l)

# Metabrogramming. Generate a function for each turn of each face, which
# shuffles the piece tuples around directly. For each face we work out where
# every piece comes from (and how much its stickers rotate) for one clockwise
# quarter turn, then stack that up to get half and counter-clockwise turns.
TURNS = []
def gen_turns():
    for F in range(6):
        FR = {0: lambda e, c: (e, c)}
        TURNS.append(FR)
        [cidx, cflip, eidx, eflip] = faces[F]

        # (source position, sticker rotation) for each position
        quarter_c = [(i, 0) for i in range(8)]
        quarter_e = [(i, 0) for i in range(12)]
        for k in range(4):
            n = (k + 1) % 4
            quarter_c[cidx[n]] = (cidx[k], (cflip[n] - cflip[k]) % 3)
            quarter_e[eidx[n]] = (eidx[k], (eflip[n] - eflip[k]) % 2)

        C = [(i, 0) for i in range(8)]
        E = [(i, 0) for i in range(12)]
        for n in range(1, 4):
            C = [(C[s][0], (C[s][1] + r) % 3) for [s, r] in quarter_c]
            E = [(E[s][0], (E[s][1] + r) % 2) for [s, r] in quarter_e]

            idxs = []
            for [e, f] in E:
                if f == 0:
                    idxs.append('e[%s]' % e)
                else:
                    idxs.append('(e[%s][1], e[%s][0])' % (e, e))

            cidxs = []
            for [c, f] in C:
                if f == 0:
                    cidxs.append('c[%s]' % c)
                else:
                    [x, y, z] = [(i - f) % 3 for i in range(3)]
                    cidxs.append('(c[%s][%s], c[%s][%s], c[%s][%s])' % (c, x, c, y, c, z))

            name = 'turn_%s_%s' % (FACE_STR[F], n)
            code = '''
def {name}(e, c):
    return (({i}),
        ({c}))'''.format(name=name, i=', '.join(idxs), c=', '.join(cidxs))
            ctx = {}
            exec(code, ctx)
            FR[n] = ctx[name]

gen_turns()

SOLVED_CUBE = Cube()

################################################################################
## Notation ####################################################################
################################################################################

def move_str(face, turn):
    return FACE_STR[face] + TURN_STR[turn]

def parse_move(move):
    return (INV_FACE_STR[move[0]], INV_TURN_STR[move[1:]])

def parse_rot(m):
    m = m.replace("2'", '2')
    if m.endswith("'"):
        return 3
    elif m.endswith('2'):
        return 2
    # E.g. a Ub perm alg has R3 in it
    elif m.endswith('3'):
        return 3
    return 1

def parse_alg(alg):
    if isinstance(alg, (list, tuple)):
        if all(isinstance(m, tuple) for m in alg):
            return list(alg)
        alg = ' '.join(alg)

    moves = []
    for move in alg.split():
        if move[0] not in FACE_STR or move[1:] not in ("", "'", '2', "2'", '3'):
            raise ValueError('invalid move: %r' % move)
        moves.append((INV_FACE_STR[move[0]], parse_rot(move)))
    return moves

def alg_str(moves):
    return ' '.join(move_str(f, t) for [f, t] in parse_alg(moves))

def invert_alg(alg):
    moves = []
    for [face, turn] in reversed(parse_alg(alg)):
        moves.append(move_str(face, 4 - turn))
    return ' '.join(moves)

# Merge consecutive turns of the same face and drop any that cancel out.
# Turns of the opposite face in between don't block a merge, since they
# commute: U D U' is just D.
def simplify_alg(alg):
    moves = []
    for [face, turn] in parse_alg(alg):
        i = len(moves) - 1
        if i >= 0 and moves[i][0] == face ^ 1:
            i -= 1
        if i >= 0 and moves[i][0] == face:
            turn = (moves[i][1] + turn) % 4
            del moves[i]
        if turn:
            moves.append((face, turn))
    return [move_str(f, t) for [f, t] in moves]

def gen_random_move_scramble(length=25):
    scramble = []
    all_faces = set(range(6))
    blocked_faces = set()
    turns = [-1, 1, 2]
    for i in range(length):
        face = random.choice(sorted(all_faces - blocked_faces))
        # Only allow one turn of each of an opposing pair of faces in a row.
        # E.g. F B' is allowed, F B' F is not
        if face ^ 1 not in blocked_faces:
            blocked_faces = set()
        blocked_faces.add(face)

        turn = random.choice(turns)
        scramble.append(move_str(face, turn))
    return scramble
