"""Unit tests for models."""

import pytest

from .models import (
    AccountSelector,
    AccountType,
    CloneOutcome,
    CloneResult,
    PaginationCursor,
    Repository,
)


def describe_AccountType():
    def it_maps_cli_flags():
        assert AccountType.from_flag("org") is AccountType.ORGANIZATION
        assert AccountType.from_flag("user") is AccountType.USER

    def it_rejects_unknown_flags():
        with pytest.raises(ValueError):
            AccountType.from_flag("team")

    def it_uses_rest_path_segments():
        assert AccountType.ORGANIZATION.value == "orgs"
        assert AccountType.USER.value == "users"

    def it_flips_to_the_opposite_type():
        assert AccountType.ORGANIZATION.opposite() is AccountType.USER
        assert AccountType.USER.opposite() is AccountType.ORGANIZATION


def describe_AccountSelector():
    def it_flips_without_mutating():
        selector = AccountSelector(AccountType.ORGANIZATION, "octocat")
        flipped = selector.flipped()

        assert flipped == AccountSelector(AccountType.USER, "octocat")
        assert selector.account_type is AccountType.ORGANIZATION

    def it_renders_as_path():
        assert str(AccountSelector(AccountType.USER, "octocat")) == "users/octocat"


def describe_PaginationCursor():
    def it_advances_by_one():
        cursor = PaginationCursor(page=3, per_page=50)
        assert cursor.next() == PaginationCursor(page=4, per_page=50)

    @pytest.mark.parametrize("page,per_page", [(0, 100), (1, 0), (-1, -1)])
    def it_rejects_values_below_one(page, per_page):
        with pytest.raises(ValueError):
            PaginationCursor(page=page, per_page=per_page)


def describe_Repository():
    def it_parses_listing_items():
        item = {"name": "Hello-World", "clone_url": "https://github.com/octocat/Hello-World.git", "id": 1}
        assert Repository.from_api(item) == Repository("Hello-World", "https://github.com/octocat/Hello-World.git")

    def it_rejects_items_without_clone_url():
        with pytest.raises(ValueError):
            Repository.from_api({"name": "Hello-World"})

    def it_rejects_non_string_fields():
        with pytest.raises(ValueError):
            Repository.from_api({"name": 1, "clone_url": "https://x/a.git"})

    def it_rejects_non_objects():
        with pytest.raises(ValueError):
            Repository.from_api(["Hello-World"])


def describe_CloneResult():
    @pytest.mark.parametrize(
        "outcome,counted",
        [
            (CloneOutcome.CLONED, True),
            (CloneOutcome.SKIPPED, True),
            (CloneOutcome.DRY_RUN, True),
            (CloneOutcome.FAILED, False),
        ],
    )
    def it_counts_everything_but_failures(outcome, counted):
        result = CloneResult(Repository("a", "https://x/a.git"), outcome)
        assert result.counts_toward_total is counted
