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
import os
import threading

import config
import coord
import moves
import prune
from util import log, run_tasks, time_execution

# All the precomputed tables the search needs. These take a while to generate
# (tens of seconds), so each one is cached on disk as a raw binary file,
# <name>.bin in the table directory. A cache file that's missing or doesn't
# look right just gets rebuilt and written out again, so deleting the
# directory is always safe.
#
# Once built, a Tables object is never modified, so any number of searches
# can share one.

MOVE_TABLE_NAMES = ['twist', 'flip', 'fr_to_br', 'urf_to_dlf', 'ur_to_ul',
        'ub_to_df', 'ur_to_df', 'parity']

# Pruning table name -> (size, builder, names of the move tables it needs)
PRUNE_TABLES = {
    'slice_twist': (prune.SLICE_TWIST_SIZE, prune.gen_slice_twist_table,
        ['slice', 'twist']),
    'slice_flip': (prune.SLICE_FLIP_SIZE, prune.gen_slice_flip_table,
        ['slice', 'flip']),
    'slice_urf_to_dlf_parity': (prune.SLICE_URF_TO_DLF_PARITY_SIZE,
        prune.gen_slice_urf_to_dlf_parity_table,
        ['urf_to_dlf', 'fr_to_br', 'parity']),
    'slice_ur_to_df_parity': (prune.SLICE_UR_TO_DF_PARITY_SIZE,
        prune.gen_slice_ur_to_df_parity_table,
        ['ur_to_df', 'fr_to_br', 'parity']),
}

class Tables:
    def __init__(self, move_tables, merge_table, prune_tables):
        self.twist_move = move_tables['twist']
        self.flip_move = move_tables['flip']
        self.slice_move = move_tables['slice']
        self.fr_to_br_move = move_tables['fr_to_br']
        self.urf_to_dlf_move = move_tables['urf_to_dlf']
        self.ur_to_ul_move = move_tables['ur_to_ul']
        self.ub_to_df_move = move_tables['ub_to_df']
        self.ur_to_df_move = move_tables['ur_to_df']
        self.parity_move = move_tables['parity']

        self.merge_ur_to_df = merge_table

        self.slice_twist_prune = prune_tables['slice_twist']
        self.slice_flip_prune = prune_tables['slice_flip']
        self.slice_urf_to_dlf_parity_prune = prune_tables['slice_urf_to_dlf_parity']
        self.slice_ur_to_df_parity_prune = prune_tables['slice_ur_to_df_parity']

################################################################################
## Serialization ###############################################################
################################################################################

# Helper to flatten a list of lists into just a list. I'd usually use
# sum(ll, []) but that has some O(n^2) behavior apparently
def flatten(ll):
    return [i for l in ll for i in l]

# Create an array of the given type from the given data, split into rows,
# checking the size and that every value is in [lo, hi)
def make_rows(typecode, data, n_rows, row_len, lo, hi):
    a = array.array(typecode)
    if len(data) != n_rows * row_len * a.itemsize:
        raise ValueError('expected %s bytes, got %s' %
                (n_rows * row_len * a.itemsize, len(data)))
    a.frombytes(data)
    if min(a) < lo or max(a) >= hi:
        raise ValueError('values out of range [%s, %s)' % (lo, hi))
    return [a[i:i+row_len] for i in range(0, len(a), row_len)]

def encode_rows(typecode, rows):
    return array.array(typecode, flatten(rows)).tobytes()

def decode_move_table(name, data):
    [typecode, bound] = moves.MOVE_TABLE_TYPES[name]
    size = coord.COORDS[name].size
    return make_rows(typecode, data, size, moves.N_MOVES, 0, bound)

def encode_move_table(name, table):
    [typecode, _] = moves.MOVE_TABLE_TYPES[name]
    return encode_rows(typecode, table)

def decode_merge_table(data):
    return make_rows('h', data, moves.N_MERGE, moves.N_MERGE, -1, coord.N_UR_TO_DF)

def encode_merge_table(table):
    return encode_rows('h', table)

def decode_prune_table(name, data):
    [size, _, _] = PRUNE_TABLES[name]
    table = prune.PackedTable(size, data)
    if not table.is_complete():
        raise ValueError('table has unfilled entries')
    return table

def encode_prune_table(table):
    return bytes(table.data)

################################################################################
## Caching #####################################################################
################################################################################

def cache_path(path, name):
    return os.path.join(path, '%s.bin' % name)

# Read and decode a cached table. Returns None if there's no usable cache
def load_cached(path, name, decode):
    filename = cache_path(path, name)
    if not os.path.exists(filename):
        return None
    try:
        with open(filename, 'rb') as f:
            data = f.read()
        return decode(data)
    except (OSError, ValueError) as e:
        log('discarding table cache %s: %s' % (filename, e))
        return None

# Write a table out to the cache. Write to a temp file and rename, so a
# partially written file never gets picked up. A failure here only means the
# table gets rebuilt next time.
def save_cached(path, name, data):
    filename = cache_path(path, name)
    tmp_filename = filename + '.tmp'
    try:
        os.makedirs(path, exist_ok=True)
        with open(tmp_filename, 'wb') as f:
            f.write(data)
        os.replace(tmp_filename, filename)
    except OSError as e:
        log('could not save table cache %s: %s' % (filename, e))

def load_or_build(path, name, build, encode, decode):
    table = load_cached(path, name, decode)
    if table is None:
        with time_execution('built table %s' % name):
            table = build()
        save_cached(path, name, encode(table))
    return table

def load_move_table(path, name):
    return load_or_build(path, name, lambda: moves.gen_move_table(name),
            lambda t: encode_move_table(name, t),
            lambda d: decode_move_table(name, d))

def load_merge_table(path):
    return load_or_build(path, 'merge_ur_to_df', moves.gen_merge_table,
            encode_merge_table, decode_merge_table)

def load_prune_table(path, name, move_tables):
    [_, gen, deps] = PRUNE_TABLES[name]
    def build():
        return gen(*[move_tables[d] for d in deps])
    return load_or_build(path, name, build, encode_prune_table,
            lambda d: decode_prune_table(name, d))

# Load all the tables, building whatever isn't cached. Every table is its own
# task: first the move tables (plus the merge table, which needs nothing
# else), then the pruning tables, which are built from the move tables.
def load_tables(path=None, workers=None):
    if path is None:
        path = config.TABLE_DIR
    with time_execution('loaded tables from %s' % path):
        tasks = [(load_move_table, (path, name)) for name in MOVE_TABLE_NAMES]
        tasks.append((load_merge_table, (path,)))
        results = run_tasks(tasks, workers)

        move_tables = dict(zip(MOVE_TABLE_NAMES, results))
        merge_table = results[-1]
        move_tables['slice'] = moves.gen_slice_table(move_tables['fr_to_br'])

        names = list(PRUNE_TABLES)
        results = run_tasks([(load_prune_table, (path, name, move_tables))
                for name in names], workers)
        prune_tables = dict(zip(names, results))

    return Tables(move_tables, merge_table, prune_tables)

# Tables are built once per table directory per process and shared
TABLE_CACHE = {}
TABLE_LOCK = threading.Lock()

def get_tables(path=None, workers=None):
    if path is None:
        path = config.TABLE_DIR
    key = os.path.abspath(path)
    with TABLE_LOCK:
        if key not in TABLE_CACHE:
            TABLE_CACHE[key] = load_tables(path, workers)
        return TABLE_CACHE[key]
