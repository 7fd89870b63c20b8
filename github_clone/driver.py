"""Walk the listing page by page, cloning each page before fetching the next."""

import os
from dataclasses import dataclass

from .clone_repos import clone_repositories
from .console import Console
from .errors import AccountNotFoundError, OutputDirectoryError
from .github import GitHubClient
from .models import DEFAULT_PER_PAGE, AccountSelector, AccountType, PaginationCursor
from .retry_policy import resolve_not_found


@dataclass
class CloneOptions:
    account: str
    account_type: AccountType = AccountType.ORGANIZATION
    output_dir: str | None = None  # defaults to the account name
    start_page: int = 1
    per_page: int = DEFAULT_PER_PAGE
    all_pages: bool = False
    no_prompt: bool = False
    dry_run: bool = False
    git: str = "git"

    def __post_init__(self):
        if self.output_dir is None:
            self.output_dir = self.account


@dataclass
class RunState:
    has_retried: bool = False
    first_run: bool = True
    total_cloned: int = 0


class CloneRun:
    """The fetch -> clone -> decide loop for a single invocation."""

    def __init__(self, options: CloneOptions, client: GitHubClient, console: Console):
        self.options = options
        self.client = client
        self.console = console
        self.state = RunState()
        self.selector = AccountSelector(options.account_type, options.account)

    def describe(self) -> str:
        """One-line summary of what this run is about to do."""
        opts = self.options
        parts = ["Dry run cloning" if opts.dry_run else "Cloning"]
        parts.append(" all repos of " if opts.all_pages else " ")
        parts.append(f"{self.selector} into ")
        if opts.output_dir == ".":
            parts.append("the current directory.")
        else:
            parts.append(f'"{opts.output_dir}".')
        if not opts.all_pages:
            prompts = "disabled" if opts.no_prompt else "enabled"
            parts.append(
                f" Starting at page {opts.start_page} with {opts.per_page} repositories per page"
                f" and prompts {prompts}."
            )
        return "".join(parts)

    def run(self) -> int:
        """Clone page after page until the listing, or the user, says stop.

        Returns the number of repositories processed (cloned, skipped or
        reported by a dry run). Errors that end the run are raised.
        """
        opts = self.options
        cursor = PaginationCursor(opts.start_page, opts.per_page)

        while True:
            if self.state.first_run:
                self.console.info(self.describe())
                self.state.first_run = False

            try:
                repositories = self.client.fetch_page(self.selector, cursor)
            except AccountNotFoundError:
                decision = resolve_not_found(
                    self.selector,
                    self.state.has_retried,
                    no_prompt=opts.no_prompt,
                    console=self.console,
                )
                if not decision.retry:
                    raise AccountNotFoundError(decision.reason) from None
                self.state.has_retried = True
                self.selector = self.selector.flipped()
                continue

            if not opts.all_pages:
                self.console.info(
                    f"Cloning {len(repositories)} repositories from {opts.account} starting from page {cursor.page}…"
                )
            self._ensure_output_dir()
            stats = clone_repositories(
                repositories,
                opts.output_dir,
                console=self.console,
                dry_run=opts.dry_run,
                git=opts.git,
            )
            self.state.total_cloned += stats["completed"]

            if not self._should_continue(len(repositories), cursor):
                break
            cursor = cursor.next()
            self.console.info(f"Cloning page {cursor.page} of {opts.account}")

        all_prefix = "all " if opts.all_pages else ""
        self.console.info(f"Done cloning {all_prefix}{self.state.total_cloned} repos from {opts.account}. Bye bye!")
        return self.state.total_cloned

    def _ensure_output_dir(self):
        output_dir = self.options.output_dir
        if self.options.dry_run or output_dir == ".":
            return
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(f"Error creating output directory {output_dir}: {e}") from e

    def _should_continue(self, count: int, cursor: PaginationCursor) -> bool:
        # A short page is the last page
        if count < cursor.per_page:
            return False

        opts = self.options
        self.console.info(f"\nCloned {count} repositories from {opts.account}!\n")

        if opts.all_pages:
            return True

        if opts.no_prompt:
            self.console.notice("There seem to be more repos, but interactive prompts are disabled.")
            return False

        return self.console.confirm(f"Continue cloning on page {cursor.page + 1} of {opts.account}? (Y/n): ")
