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

import threading

import pytest

import coord
import cube
import solver
from coord import CubeError
from search import Status

SUPERFLIP = "U R2 F B R B2 R U2 L B2 R U' D' R2 F R' L B2 U2 F2"

def test_solve_solved(cube_solver):
    assert cube_solver.solve(cube.Cube()) == []
    assert cube_solver.solve(coord.SOLVED) == []
    assert cube_solver.solve('') == []

def test_solve_scramble(cube_solver):
    scramble = "R U R' U' F2 D L'"
    solution = cube_solver.solve(scramble)
    c = cube.Cube().run_alg(scramble).run_alg(solution)
    assert c == cube.SOLVED_CUBE

def test_solve_inputs_agree(cube_solver):
    scramble = "B' L2 U F"
    from_str = cube_solver.solve(scramble)
    assert cube_solver.solve(scramble.split()) == from_str
    assert cube_solver.solve(cube.Cube().run_alg(scramble)) == from_str
    assert cube_solver.solve(coord.CoordCube.from_cube(
            cube.Cube().run_alg(scramble))) == from_str

def test_search_result(cube_solver):
    result = cube_solver.search("R U")
    assert result.status == Status.SOLVED
    assert len(result.moves) == 2

def test_invalid_cube(cube_solver):
    corners = list(cube.CORNERS)
    corners[0] = cube.rotate(corners[0], 1)
    twisted = cube.Cube(corners=tuple(corners))
    with pytest.raises(CubeError):
        cube_solver.solve(twisted)
    with pytest.raises(ValueError):
        cube_solver.solve('R Q')
    with pytest.raises(TypeError):
        cube_solver.solve(12)

# Two swapped edges and nothing else can't be reached by turning faces
def test_edge_swap_rejected(cube_solver):
    edges = list(cube.EDGES)
    [edges[6], edges[7]] = [edges[7], edges[6]]
    with pytest.raises(CubeError, match='parity'):
        cube_solver.solve(cube.Cube(edges=tuple(edges)))
    with pytest.raises(CubeError, match='parity'):
        cube_solver.solve(coord.CoordCube(ep=[0, 1, 2, 3, 4, 5, 7, 6, 8, 9, 10, 11]))

def test_no_solution(cube_solver):
    with pytest.raises(solver.NoSolutionError):
        cube_solver.solve('R U', max_depth=1)

def test_timeout(cube_solver):
    with pytest.raises(solver.SolverTimeoutError):
        cube_solver.solve(SUPERFLIP, timeout=0.01)

def test_error_hierarchy():
    assert issubclass(solver.NoSolutionError, solver.SolverError)
    assert issubclass(solver.SolverTimeoutError, solver.SolverError)
    assert not issubclass(solver.NoSolutionError, solver.SolverTimeoutError)

def test_solver_defaults(tmp_path):
    s = solver.Solver(table_dir=str(tmp_path))
    assert s.max_depth == 30
    assert s.timeout == 10
    assert s.tables is None

    s = solver.Solver(table_dir=str(tmp_path), timeout=None)
    assert s.timeout is None

def test_no_time_limit(cube_solver):
    assert cube_solver.solve("R U'", timeout=None) == ['U', "R'"]

# Solutions never turn the same face twice in a row
def test_solution_simplified(cube_solver, rng):
    for _ in range(5):
        scramble = [rng.choice('UDRLFB') + rng.choice(["", "2", "'"])
                for _ in range(8)]
        solution = cube_solver.solve(scramble)
        assert cube.simplify_alg(solution) == solution
        c = cube.Cube().run_alg(scramble).run_alg(solution)
        assert c == cube.SOLVED_CUBE

def test_solve_async(cube_solver):
    done = threading.Event()
    results = []
    def callback(solution, error):
        results.append((solution, error))
        done.set()

    cube_solver.solve_async("F U'", callback)
    assert done.wait(300)
    assert results == [(['U', "F'"], None)]

    done.clear()
    cube_solver.solve_async('R U', callback, max_depth=1)
    assert done.wait(300)
    [solution, error] = results[-1]
    assert solution is None
    assert isinstance(error, solver.NoSolutionError)

def test_random_state_scramble(cube_solver):
    scramble = solver.gen_random_state_scramble(cube_solver)
    assert 0 < len(scramble) <= 30
    c = cube.Cube().run_alg(scramble)
    solution = cube_solver.solve(c)
    assert c.run_alg(solution) == cube.SOLVED_CUBE

# A request that fails with something other than a solver error still gets
# its callback, and the background thread keeps serving later requests
def test_solve_async_after_bad_input(cube_solver):
    done = threading.Event()
    results = []
    def callback(solution, error):
        results.append((solution, error))
        if len(results) == 2:
            done.set()

    cube_solver.solve_async(12, callback)
    cube_solver.solve_async('R', callback)
    assert done.wait(300)
    [[solution, error], second] = results
    assert solution is None
    assert isinstance(error, TypeError)
    assert second == (["R'"], None)
