"""Data models and constants for cloning an account's repositories."""

from dataclasses import dataclass, replace
from enum import Enum

DEFAULT_PER_PAGE = 100
GIT_ALREADY_EXISTS_EXIT_CODE = 128  # git's exit code when the destination directory is taken


class AccountType(Enum):
    """GitHub account type, valued by its REST path segment."""

    ORGANIZATION = "orgs"
    USER = "users"

    @classmethod
    def from_flag(cls, value: str) -> "AccountType":
        """Map the CLI spelling ("org" / "user") to an account type."""
        try:
            return {"org": cls.ORGANIZATION, "user": cls.USER}[value]
        except KeyError:
            raise ValueError(f"Invalid account type: {value!r}") from None

    @property
    def label(self) -> str:
        return "Organization" if self is AccountType.ORGANIZATION else "User"

    def opposite(self) -> "AccountType":
        return AccountType.USER if self is AccountType.ORGANIZATION else AccountType.ORGANIZATION


@dataclass(frozen=True)
class Repository:
    """One entry of an account's repository listing."""

    name: str
    clone_url: str

    @classmethod
    def from_api(cls, item: object) -> "Repository":
        """Build from a listing item, raising ValueError if it has no usable name/clone_url."""
        if not isinstance(item, dict):
            raise ValueError(f"expected an object, got {type(item).__name__}")
        name = item.get("name")
        clone_url = item.get("clone_url")
        if not isinstance(name, str) or not isinstance(clone_url, str):
            raise ValueError(f"repository entry is missing name or clone_url: {item!r}")
        return cls(name=name, clone_url=clone_url)


@dataclass(frozen=True)
class AccountSelector:
    account_type: AccountType
    account: str

    def flipped(self) -> "AccountSelector":
        return replace(self, account_type=self.account_type.opposite())

    def __str__(self) -> str:
        return f"{self.account_type.value}/{self.account}"


@dataclass(frozen=True)
class PaginationCursor:
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {self.per_page}")

    def next(self) -> "PaginationCursor":
        return replace(self, page=self.page + 1)


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit counters from the most recent API response."""

    limit: int
    remaining: int
    reset: int  # unix timestamp


class CloneOutcome(Enum):
    CLONED = "cloned"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"
    FAILED = "failed"


@dataclass
class CloneResult:
    """Result of one clone task."""

    repository: Repository
    outcome: CloneOutcome
    error: str | None = None

    @property
    def counts_toward_total(self) -> bool:
        # Hard failures are reported but never counted as processed.
        return self.outcome is not CloneOutcome.FAILED
