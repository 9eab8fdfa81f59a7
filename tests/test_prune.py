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

import pytest

import coord
import moves
import prune
from prune import PackedTable

def test_packed_get_set():
    table = PackedTable(5)
    assert len(table.data) == 3
    assert all(table.get(i) == prune.UNKNOWN for i in range(5))
    table.set(0, 3)
    table.set(1, 9)
    table.set(4, 0)
    assert [table.get(i) for i in range(5)] == [3, 9, 15, 15, 0]
    # Low nibble is the even index
    assert table.data[0] == 0x93
    table.set(1, 2)
    assert table.get(0) == 3 and table.get(1) == 2

def test_packed_from_values():
    table = PackedTable.from_values([1, 2, 3])
    assert table.size == 3
    assert bytes(table.data) == bytes([0x21, 0xF3])
    assert table.is_complete()
    assert table.max_depth() == 3

def test_packed_incomplete():
    assert not PackedTable.from_values([1, 15, 3, 4]).is_complete()
    assert not PackedTable.from_values([1, 2, 15]).is_complete()
    assert not PackedTable(4).is_complete()

def test_packed_bad_length():
    with pytest.raises(ValueError):
        PackedTable(5, bytearray(2))

def test_gen_prune_table_cycle():
    # Distances around a cycle of 10
    table = prune.gen_prune_table(10, lambda i: [(i + 1) % 10, (i - 1) % 10])
    assert [table.get(i) for i in range(10)] == [0, 1, 2, 3, 4, 5, 4, 3, 2, 1]

def test_gen_prune_table_unreachable():
    with pytest.raises(RuntimeError, match='unreached'):
        prune.gen_prune_table(10, lambda i: [(i + 2) % 10])

def test_gen_prune_table_too_deep():
    with pytest.raises(RuntimeError, match='4 bits'):
        prune.gen_prune_table(20, lambda i: [min(i + 1, 19)])

def test_tables_complete(engine):
    for table in [engine.slice_twist_prune, engine.slice_flip_prune,
            engine.slice_urf_to_dlf_parity_prune, engine.slice_ur_to_df_parity_prune]:
        assert table.is_complete()
        assert table.get(0) == 0
    assert len(engine.slice_twist_prune) == 495 * 2187
    assert len(engine.slice_flip_prune) == 495 * 2048
    assert len(engine.slice_urf_to_dlf_parity_prune) == 24 * 20160 * 2
    assert len(engine.slice_ur_to_df_parity_prune) == 24 * 20160 * 2

def phase_1_bounds(engine, cc):
    [slice, twist, flip] = [cc.to_scalar('slice'), cc.to_scalar('twist'),
            cc.to_scalar('flip')]
    return [engine.slice_twist_prune.get(prune.slice_twist_index(slice, twist)),
            engine.slice_flip_prune.get(prune.slice_flip_index(slice, flip))]

def phase_2_bounds(engine, cc):
    [slice_perm, parity] = [cc.to_scalar('slice_perm'), cc.to_scalar('parity')]
    return [engine.slice_urf_to_dlf_parity_prune.get(prune.phase_2_index(
                cc.to_scalar('urf_to_dlf'), slice_perm, parity)),
            engine.slice_ur_to_df_parity_prune.get(prune.phase_2_index(
                cc.to_scalar('ur_to_df'), slice_perm, parity))]

# Any cube reachable in d moves has bounds of at most d
def test_phase_1_admissible(engine, rng):
    for _ in range(200):
        d = rng.randrange(1, 15)
        path = [rng.randrange(18) for _ in range(d)]
        cc = moves.run_moves(coord.SOLVED, path)
        assert max(phase_1_bounds(engine, cc)) <= d

def test_phase_2_admissible(engine, rng):
    for _ in range(200):
        d = rng.randrange(1, 20)
        path = [rng.choice(moves.PHASE_2_MOVES) for _ in range(d)]
        cc = moves.run_moves(coord.SOLVED, path)
        assert max(phase_2_bounds(engine, cc)) <= d

def test_one_move_bounds(engine):
    for m in range(18):
        cc = moves.MOVE_CUBES[m]
        bounds = phase_1_bounds(engine, cc)
        if m in moves.PHASE_2_MOVES:
            assert bounds == [0, 0]
            assert max(phase_2_bounds(engine, cc)) == 1
        else:
            assert max(bounds) == 1
