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
import enum
import time

import moves
import prune

# This is Kociemba's two-phase algorithm. The first phase puts a random cube
# into the G1 group (i.e. cubes that can be solved using only
# <U,D,R2,L2,F2,B2> moves). The second phase solves the cube completely using
# only the G1 moves.
#
# For phase 1, the cube is three coordinates: corner orientation (twist),
# edge orientation (flip) and which four positions hold the E-slice edges
# (slice). Phase 1 is done when all three are 0.
# For phase 2, it's the permutation of six corners (urf_to_dlf), of six U/D
# edges (ur_to_df), of the E-slice edges (slice_perm), and the corner
# parity, which pins down the last two corners and edges.
#
# Both phases are iterative deepening searches, pruned by lookup tables: if the
# table says the current twist/slice pair needs at least 5 moves to solve,
# then the entire phase 1 needs at least 5 moves as well. Phase 1 depths are
# tried in increasing order, and every time phase 1 reaches G1 we immediately
# try to finish with a short phase 2 search. The first complete solution
# within the depth limit wins.

Status = enum.Enum('Status', 'SOLVED EXHAUSTED TIMEOUT')

Result = collections.namedtuple('Result', 'status moves phase_1_length nodes elapsed')

INF = float('+inf')

# Longest phase 2 search we try from any phase 1 solution
MAX_PHASE_2_DEPTH = 10

# A phase 1 node that's already in G1 is only searched further if there are at
# least this many moves left: getting out of G1 and back in takes that many
# moves, and anything shorter just finds the same cube again.
PHASE_1_DETOUR = 5

# How often (in nodes) to check the clock
TIMEOUT_CHECK_NODES = 256

class SearchTimeout(Exception):
    pass

class Deadline:
    def __init__(self, timeout=None):
        self.start = time.monotonic()
        self.end = None if timeout is None else self.start + timeout

    def elapsed(self):
        return time.monotonic() - self.start

    def expired(self):
        return self.end is not None and time.monotonic() >= self.end

    def check(self):
        if self.expired():
            raise SearchTimeout()

# Search for move sequences of exactly <depth> moves from <root>, calling
# on_leaf(path, node) for each one that ends at a node with bound 0. As soon
# as on_leaf returns something other than None, that's returned from here.
#   * first_moves: the moves to try from the root
#   * successors: for each move, the list of moves that may follow it
#   * step(node, move): the node after a move
#   * bound(node): lower bound on moves needed to solve the node
#   * detour: only expand nodes that already have bound 0 when at least this
#       many moves remain after them
# Rather than recursing, this keeps an explicit stack of nodes, move
# iterators and moves, one entry per depth.
def search_depth(ctx, root, depth, first_moves, successors, step, bound,
        on_leaf, detour=INF):
    if depth == 0:
        if bound(root) == 0:
            return on_leaf([], root)
        return None

    nodes = [root] + [None] * depth
    move_iters = [iter(first_moves)] + [None] * depth
    path = [None] * depth
    d = 0
    while d >= 0:
        m = next(move_iters[d], None)
        if m is None:
            d -= 1
            continue

        ctx.count_node()
        child = step(nodes[d], m)
        left = depth - d - 1
        h = bound(child)
        # Prune the search if this move leads to a position needing too many
        # moves to solve
        if h > left:
            continue

        path[d] = m
        if left == 0:
            result = on_leaf(path, child)
            if result is not None:
                return result
        elif h or left >= detour:
            nodes[d + 1] = child
            move_iters[d + 1] = iter(successors[m])
            d += 1

    return None

class SearchContext:
    def __init__(self, tables, cc, max_depth, timeout):
        self.tables = tables
        self.max_depth = max_depth
        self.deadline = Deadline(timeout)
        self.nodes = 0

        t = tables
        self.root_1 = (cc.to_scalar('flip'), cc.to_scalar('twist'),
                cc.to_scalar('slice'))
        # Phase 2 coordinates at the root. These are all tracked through the
        # phase 1 moves when a phase 1 solution is found.
        self.root_2 = (cc.to_scalar('urf_to_dlf'), cc.to_scalar('fr_to_br'),
                cc.to_scalar('ur_to_ul'), cc.to_scalar('ub_to_df'),
                cc.to_scalar('parity'))

        [flip_move, twist_move, slice_move] = [t.flip_move, t.twist_move,
                t.slice_move]
        [slice_twist, slice_flip] = [t.slice_twist_prune, t.slice_flip_prune]
        n_slice = len(slice_move)

        def step_1(node, m):
            [flip, twist, slice] = node
            return (flip_move[flip][m], twist_move[twist][m], slice_move[slice][m])

        def bound_1(node):
            [flip, twist, slice] = node
            return max(slice_flip.get(n_slice * flip + slice),
                    slice_twist.get(n_slice * twist + slice))

        [urf_move, ur_df_move, fr_br_move, parity_move] = [t.urf_to_dlf_move,
                t.ur_to_df_move, t.fr_to_br_move, t.parity_move]
        [slice_urf, slice_ur] = [t.slice_urf_to_dlf_parity_prune,
                t.slice_ur_to_df_parity_prune]

        def step_2(node, m):
            [urf, ur_df, slice_perm, parity] = node
            return (urf_move[urf][m], ur_df_move[ur_df][m],
                    fr_br_move[slice_perm][m], parity_move[parity][m])

        def bound_2(node):
            [urf, ur_df, slice_perm, parity] = node
            return max(slice_urf.get(prune.phase_2_index(urf, slice_perm, parity)),
                    slice_ur.get(prune.phase_2_index(ur_df, slice_perm, parity)))

        self.step_1 = step_1
        self.bound_1 = bound_1
        self.step_2 = step_2
        self.bound_2 = bound_2

    def count_node(self):
        self.nodes += 1
        if self.nodes % TIMEOUT_CHECK_NODES == 0:
            self.deadline.check()

    # Replay a phase 1 solution on the phase 2 coordinates, and merge the two
    # halves of the U/D edges into ur_to_df
    def get_phase_2_node(self, path_1):
        t = self.tables
        [urf, fr_br, ur_ul, ub_df, parity] = self.root_2
        for m in path_1:
            urf = t.urf_to_dlf_move[urf][m]
            fr_br = t.fr_to_br_move[fr_br][m]
            ur_ul = t.ur_to_ul_move[ur_ul][m]
            ub_df = t.ub_to_df_move[ub_df][m]
            parity = t.parity_move[parity][m]
        ur_df = t.merge_ur_to_df[ur_ul][ub_df]
        assert ur_df >= 0 and fr_br < 24, (path_1, ur_ul, ub_df, fr_br)
        return (urf, ur_df, fr_br, parity)

    # Called at each phase 1 solution: try to finish the cube in phase 2,
    # within the moves left over. Returns the full solution or None.
    def phase_2(self, path_1, node_1):
        depth_1 = len(path_1)
        max_depth_2 = min(MAX_PHASE_2_DEPTH, self.max_depth - depth_1)
        node = self.get_phase_2_node(path_1)
        h = self.bound_2(node)
        if h > max_depth_2:
            return None

        # The first phase 2 move has to follow on from the last phase 1 move
        if path_1:
            first_moves = moves.PHASE_2_FIRST_MOVES[path_1[-1]]
        else:
            first_moves = moves.FIRST_MOVES_2

        for depth_2 in range(h, max_depth_2 + 1):
            path_2 = search_depth(self, node, depth_2, first_moves,
                    moves.SUCCESSORS_2, self.step_2, self.bound_2,
                    lambda path, node: list(path))
            if path_2 is not None:
                return moves.join_moves(path_1, path_2)
        return None

    def result(self, status, solution=None, phase_1_length=None):
        return Result(status, solution, phase_1_length, self.nodes,
                self.deadline.elapsed())

# Main driver: look for a solution of at most <max_depth> moves to the cube
# <cc>, giving up after <timeout> seconds (None for no limit). Running out of
# depth or time is reported in the result's status rather than raised.
def two_phase(tables, cc, max_depth=30, timeout=None):
    ctx = SearchContext(tables, cc, max_depth, timeout)
    try:
        for depth_1 in range(max_depth + 1):
            ctx.deadline.check()
            solution = search_depth(ctx, ctx.root_1, depth_1, moves.FIRST_MOVES_1,
                    moves.SUCCESSORS_1, ctx.step_1, ctx.bound_1, ctx.phase_2,
                    detour=PHASE_1_DETOUR)
            if solution is not None:
                return ctx.result(Status.SOLVED, solution, depth_1)
    except SearchTimeout:
        return ctx.result(Status.TIMEOUT)
    return ctx.result(Status.EXHAUSTED)
