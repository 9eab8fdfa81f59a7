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

import cube
import main

def test_solve_scramble(engine, table_dir, capsys):
    assert main.main(['--table-dir', table_dir, 'R', 'U']) == 0
    out = capsys.readouterr().out
    assert "solution (2 moves): U' R'" in out

def test_solve_quoted_scramble(engine, table_dir, capsys):
    assert main.main(['--table-dir', table_dir, "F U'"]) == 0
    assert "solution (2 moves): U F'" in capsys.readouterr().out

def test_build_tables(engine, table_dir):
    assert main.main(['--table-dir', table_dir, '--build-tables']) == 0

def test_invalid_scramble(engine, table_dir, capsys):
    assert main.main(['--table-dir', table_dir, 'R', 'X']) == 1
    captured = capsys.readouterr()
    assert 'error:' in captured.err
    assert 'solution' not in captured.out

def test_depth_too_small(engine, table_dir, capsys):
    assert main.main(['--table-dir', table_dir, '-d', '1', 'R', 'U']) == 1
    assert 'no solution within 1 moves' in capsys.readouterr().err

def test_random_move_scramble(engine, table_dir, capsys):
    assert main.main(['--table-dir', table_dir, '-t', '300']) == 0
    lines = capsys.readouterr().out.splitlines()
    [scramble] = [l[len('scramble: '):] for l in lines if l.startswith('scramble: ')]
    solution = lines[-1].split(': ')[1]
    c = cube.Cube().run_alg(scramble).run_alg(solution)
    assert c == cube.SOLVED_CUBE
