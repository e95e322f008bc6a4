from __future__ import annotations

from helpers import make_branch

from branchhop.git.recency import sort_by_recency


def test_three_branches_load_in_commit_time_order() -> None:
    b2 = make_branch("b2", 100)
    b0 = make_branch("b0", 300)
    b1 = make_branch("b1", 200)

    ordered = sort_by_recency([b2, b0, b1])

    assert [branch.real_name for branch in ordered] == ["b0", "b1", "b2"]


def test_branches_without_commit_sort_last_in_load_order() -> None:
    branches = [
        make_branch("empty-a"),
        make_branch("old", 1),
        make_branch("empty-b"),
        make_branch("new", 2),
    ]

    ordered = sort_by_recency(branches)

    assert [branch.real_name for branch in ordered] == ["new", "old", "empty-a", "empty-b"]


def test_ties_keep_load_order() -> None:
    branches = [make_branch("first", 5), make_branch("second", 5), make_branch("third", 5)]

    assert sort_by_recency(branches) == branches


def test_sort_does_not_mutate_input() -> None:
    branches = [make_branch("a", 1), make_branch("b", 2)]

    sort_by_recency(branches)

    assert [branch.real_name for branch in branches] == ["a", "b"]
