import logging

from contrib_cards.models import RepoContribution
from contrib_cards.ranking import PLACEHOLDER_NAME, top_repositories


def repo(name, count, private=False):
    return RepoContribution(name, contribution_count=count, is_private=private)


def test_top_n_sorted_descending():
    repos = [repo("a", 10), repo("b", 30), repo("c", 20)]

    ranked = top_repositories(repos, 2)

    assert [(r.name_with_owner, r.contribution_count) for r in ranked] == [("b", 30), ("c", 20)]


def test_ties_keep_insertion_order():
    repos = [repo("a", 5), repo("b", 9), repo("c", 5), repo("d", 5)]

    ranked = top_repositories(repos, 4)

    assert [r.name_with_owner for r in ranked] == ["b", "a", "c", "d"]


def test_private_repos_are_excluded_by_default():
    repos = [repo("secret", 100, private=True), repo("public", 1)]

    assert [r.name_with_owner for r in top_repositories(repos, 5)] == ["public"]
    assert [r.name_with_owner for r in top_repositories(repos, 5, include_private=True)] == ["secret", "public"]


def test_placeholder_when_nothing_is_left(caplog):
    caplog.set_level(logging.WARNING)

    ranked = top_repositories([repo("secret", 3, private=True)], 5)

    assert len(ranked) == 1
    assert ranked[0].name_with_owner == PLACEHOLDER_NAME
    assert ranked[0].contribution_count == 0
    assert ranked[0].stargazer_count == 0
    assert "No contributions found" in caplog.text


def test_placeholder_for_empty_input():
    ranked = top_repositories([], 5)

    assert [r.name_with_owner for r in ranked] == [PLACEHOLDER_NAME]
