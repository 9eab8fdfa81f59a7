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

import pytest

import moves
import prune
import tables
import util

def test_cache_files_written(engine, table_dir):
    names = tables.MOVE_TABLE_NAMES + ['merge_ur_to_df'] + list(tables.PRUNE_TABLES)
    for name in names:
        assert os.path.exists(os.path.join(table_dir, '%s.bin' % name)), name
    # Only the real files, no leftover temp files
    assert not [f for f in os.listdir(table_dir) if f.endswith('.tmp')]

def test_get_tables_is_shared(engine, table_dir):
    assert tables.get_tables(table_dir) is engine
    assert tables.get_tables(table_dir + os.sep) is engine

def test_cached_tables_match(engine, table_dir):
    twist = tables.load_move_table(table_dir, 'twist')
    assert twist == engine.twist_move
    merge = tables.load_merge_table(table_dir)
    assert merge == engine.merge_ur_to_df
    slice_flip = tables.load_prune_table(table_dir, 'slice_flip', {})
    assert slice_flip.data == engine.slice_flip_prune.data

def test_move_table_encoding(engine):
    data = tables.encode_move_table('parity', engine.parity_move)
    assert len(data) == 2 * 18
    assert tables.decode_move_table('parity', data) == engine.parity_move

def test_decode_rejects_bad_data(engine):
    data = tables.encode_move_table('twist', engine.twist_move)
    with pytest.raises(ValueError):
        tables.decode_move_table('twist', data[:-2])
    with pytest.raises(ValueError):
        tables.decode_move_table('twist', b'\xff\xff' + data[2:])
    with pytest.raises(ValueError):
        tables.decode_merge_table(b'\x00' * 10)
    with pytest.raises(ValueError):
        tables.decode_prune_table('slice_twist', b'\x00' * 10)
    # Right size, but never filled in
    size = prune.packed_len(prune.SLICE_TWIST_SIZE)
    with pytest.raises(ValueError):
        tables.decode_prune_table('slice_twist', b'\xff' * size)

# A corrupt cache file gets thrown away, rebuilt, and saved again
def test_corrupt_cache_rebuilt(engine, tmp_path):
    path = str(tmp_path)
    filename = os.path.join(path, 'twist.bin')
    with open(filename, 'wb') as f:
        f.write(b'garbage')

    table = tables.load_move_table(path, 'twist')
    assert table == engine.twist_move
    with open(filename, 'rb') as f:
        assert f.read() == tables.encode_move_table('twist', engine.twist_move)

def test_missing_cache_built_once(tmp_path):
    path = str(tmp_path / 'sub')
    calls = []
    def build():
        calls.append(1)
        return [1, 2, 3]
    encode = bytes
    decode = lambda data: list(data)

    assert tables.load_or_build(path, 'test', build, encode, decode) == [1, 2, 3]
    assert tables.load_or_build(path, 'test', build, encode, decode) == [1, 2, 3]
    assert len(calls) == 1

# If the cache can't be written, we still get the table
def test_unwritable_cache(tmp_path):
    blocker = tmp_path / 'file'
    blocker.write_bytes(b'')
    path = str(blocker / 'tables')
    table = tables.load_or_build(path, 'test', lambda: [7], bytes, list)
    assert table == [7]
    assert not os.path.exists(os.path.join(path, 'test.bin'))

def test_run_tasks():
    results = util.run_tasks([(pow, (2, i)) for i in range(10)], workers=3)
    assert results == [2 ** i for i in range(10)]

def test_run_tasks_error():
    def fail():
        raise KeyError('boom')
    with pytest.raises(KeyError):
        util.run_tasks([(abs, (-1,)), (fail, ())], workers=2)

def test_slice_table(engine):
    assert len(engine.slice_move) == 495
    assert engine.slice_move == moves.gen_slice_table(engine.fr_to_br_move)
