"""Clone a page of repositories concurrently."""

from concurrent.futures import ThreadPoolExecutor

from ..console import Console
from ..models import CloneOutcome, CloneResult, Repository
from .git_clone import clone_repo


def summarize(results: list[CloneResult]) -> dict:
    """Count outcomes. "completed" is everything except hard failures."""
    stats = {outcome.value: 0 for outcome in CloneOutcome}
    for result in results:
        stats[result.outcome.value] += 1
    stats["completed"] = sum(1 for result in results if result.counts_toward_total)
    return stats


def clone_repositories(
    repositories: list[Repository],
    output_dir: str,
    *,
    console: Console,
    dry_run: bool = False,
    git: str = "git",
) -> dict:
    """Run one clone task per repository and wait for all of them.

    Tasks share nothing; a slow clone only delays the return of this call.
    Returns dict with counts: cloned, skipped, dry_run, failed, completed.
    """
    if not repositories:
        return summarize([])

    def process_one(repository: Repository) -> CloneResult:
        return clone_repo(repository, output_dir, console=console, dry_run=dry_run, git=git)

    with ThreadPoolExecutor(max_workers=len(repositories)) as executor:
        results = list(executor.map(process_one, repositories))

    return summarize(results)
