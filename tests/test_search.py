import multiprocessing
from itertools import combinations, permutations

import pytest

import search as search_module
from board import Board, check_solution, collinear
from logging_utils import configure_logging
from search import search, solve


def placements(boards):
    return [b.placement for b in boards]


def test_single_queen():
    result = solve(1)
    assert placements(result) == [(0,)]
    assert result[0].placed_count == 1


@pytest.mark.parametrize("size", [2, 3])
def test_no_solutions_for_two_and_three(size):
    assert solve(size) == []


def test_four_queens():
    assert placements(solve(4)) == [(1, 3, 0, 2), (2, 0, 3, 1)]


@pytest.mark.parametrize("size", range(1, 9))
def test_solutions_are_legal(size):
    for b in solve(size):
        assert b.placed_count == size
        assert -1 not in b.queen_column
        assert check_solution(b.placement)
        points = list(b.queens())
        assert len(points) == size
        for (r1, c1), (r2, c2) in combinations(points, 2):
            assert r1 != r2 and c1 != c2
            assert r1 - c1 != r2 - c2
            assert r1 + c1 != r2 + c2
        for p1, p2, p3 in combinations(points, 3):
            assert not collinear(*p1, *p2, *p3)


@pytest.mark.parametrize("size", [4, 6, 7])
def test_partitions_cover_solve(size):
    combined = []
    for col in range(size):
        part = search(size, col)
        assert all(b.queen_column[0] == col for b in part)
        combined.extend(part)
    assert placements(combined) == placements(solve(size))
    assert len(set(placements(combined))) == len(combined)


def test_search_rejects_out_of_range_column():
    with pytest.raises(ValueError):
        search(4, 4)
    with pytest.raises(ValueError):
        search(4, -1)


def test_solve_rejects_non_positive_size():
    with pytest.raises(ValueError):
        solve(0)


def test_solutions_are_independent_snapshots():
    result = solve(4)
    assert result[0] is not result[1]
    assert result[0].attack_count is not result[1].attack_count
    result[0].remove_queen(3, 2)
    assert result[1].placement == (2, 0, 3, 1)
    assert placements(solve(4))[0] == (1, 3, 0, 2)


def test_search_unwinds_after_each_branch(monkeypatch):
    boards = []
    real_init = Board.__init__

    def tracking_init(self, size):
        real_init(self, size)
        boards.append(self)

    monkeypatch.setattr(Board, "__init__", tracking_init)
    search(6, 1)
    live = boards[0]
    # only the seeded row-0 queen is left after the recursion returns
    assert live.placement == (1, -1, -1, -1, -1, -1)
    assert live.placed_count == 1


def test_parallel_matches_sequential():
    sequential = placements(solve(8, workers=1))
    parallel = placements(solve(8, workers=3))
    assert parallel == sequential


def test_small_boards_skip_the_pool(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("pool should not start")

    monkeypatch.setattr(search_module.cf, "ProcessPoolExecutor", fail)
    assert placements(solve(4, workers=4)) == [(1, 3, 0, 2), (2, 0, 3, 1)]


def test_pool_failure_falls_back_to_sequential(monkeypatch, log_messages):
    def broken(*args, **kwargs):
        raise OSError("no semaphores")

    monkeypatch.setattr(search_module.cf, "ProcessPoolExecutor", broken)
    assert placements(solve(8, workers=2)) == placements(solve(8, workers=1))
    assert any("falling back" in m for m in log_messages)


@pytest.mark.parametrize("size", range(1, 8))
def test_solve_matches_brute_force(size):
    expected = [p for p in permutations(range(size)) if check_solution(p)]
    assert placements(solve(size)) == expected


def test_spawned_workers_follow_the_log_level(capfd):
    configure_logging("INFO")
    context = multiprocessing.get_context("spawn")
    result = solve(8, workers=2, log_level="INFO", mp_context=context)
    assert placements(result) == placements(solve(8, workers=1))
    err = capfd.readouterr().err
    assert "DEBUG" not in err
    assert "line detected" not in err


def test_workers_without_log_level_stay_silent(capfd):
    context = multiprocessing.get_context("spawn")
    solve(8, workers=2, mp_context=context)
    err = capfd.readouterr().err
    assert "DEBUG" not in err
    assert "line detected" not in err
