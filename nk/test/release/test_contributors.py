from __future__ import annotations

from nk.release.contributors import aggregate
from nk.release.model import Contributor
from nk.test.fakes import make_commit


def test_counts_and_order() -> None:
    commits = [
        make_commit(1, "a", author="Bob"),
        make_commit(2, "b", author="Ada"),
        make_commit(3, "c", author="Cy"),
        make_commit(4, "d", author="Bob"),
        make_commit(5, "e", author="Ada"),
        make_commit(6, "f", author="Ada"),
    ]

    assert aggregate(commits) == (
        Contributor("Ada", "ada@example.com", 3),
        Contributor("Bob", "bob@example.com", 2),
        Contributor("Cy", "cy@example.com", 1),
    )


def test_identity_is_exact_name_and_email() -> None:
    commits = [
        make_commit(1, "a", author="Ada", email="ada@example.com"),
        make_commit(2, "b", author="Ada", email="ada@work.example"),
        make_commit(3, "c", author="ada", email="ada@example.com"),
    ]

    contributors = aggregate(commits)

    assert len(contributors) == 3
    # equal counts: name, then email, byte order
    assert [c.identity for c in contributors] == [
        ("Ada", "ada@example.com"),
        ("Ada", "ada@work.example"),
        ("ada", "ada@example.com"),
    ]


def test_counts_sum_to_commit_total() -> None:
    commits = [make_commit(i, "x", author=f"dev{i % 3}") for i in range(10)]
    assert sum(c.commit_count for c in aggregate(commits)) == len(commits)


def test_empty() -> None:
    assert aggregate([]) == ()
