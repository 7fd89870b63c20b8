"""Clone every repository of a GitHub organization or user.

Walks the account's repository listing page by page and clones each page
concurrently with git before moving on to the next.
"""

from .cli import main
from .driver import CloneOptions, CloneRun
from .github import GitHubClient
from .models import AccountType, Repository

__all__ = ["main", "CloneOptions", "CloneRun", "GitHubClient", "AccountType", "Repository"]
