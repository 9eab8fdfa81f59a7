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

import pytest

import solver
import tables

# Building all the tables takes a while, so do it once for the whole session,
# in a temp directory so the tests also exercise the cache

@pytest.fixture(scope='session')
def table_dir(tmp_path_factory):
    return str(tmp_path_factory.mktemp('tables'))

@pytest.fixture(scope='session')
def engine(table_dir):
    return tables.get_tables(table_dir)

@pytest.fixture(scope='session')
def cube_solver(table_dir, engine):
    return solver.Solver(table_dir=table_dir, max_depth=30, timeout=300)

@pytest.fixture
def rng():
    return random.Random(1234)
