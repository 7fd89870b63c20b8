"""Clone a single repository by running git."""

import os
import subprocess
from pathlib import Path

from ..console import Console
from ..models import GIT_ALREADY_EXISTS_EXIT_CODE, CloneOutcome, CloneResult, Repository

# Never block on credentials: no terminal prompts, ssh in batch mode
NON_INTERACTIVE_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_SSH_COMMAND": "ssh -oBatchMode=yes",
}


def destination_for(repository: Repository, output_dir: str) -> str:
    """Directory the clone lands in."""
    if output_dir == ".":
        return repository.name
    return str(Path(output_dir) / repository.name)


def clone_repo(
    repository: Repository,
    output_dir: str,
    *,
    console: Console,
    dry_run: bool = False,
    git: str = "git",
) -> CloneResult:
    """Clone one repository into output_dir.

    Never raises for a git failure: the result says what happened. Exit code
    128 from git is taken to mean the destination already exists.
    """
    if dry_run:
        console.report(f"Would have cloned {repository.clone_url} to {destination_for(repository, output_dir)}")
        return CloneResult(repository, CloneOutcome.DRY_RUN)

    console.debug(f"Cloning {repository.clone_url}...")
    output = None if console.verbose else subprocess.DEVNULL
    try:
        proc = subprocess.run(
            [git, "clone", repository.clone_url],
            cwd=None if output_dir == "." else output_dir,
            env={**os.environ, **NON_INTERACTIVE_ENV},
            stdin=subprocess.DEVNULL,
            stdout=output,
            stderr=output,
        )
    except (OSError, ValueError) as e:
        console.error(f"Error cloning repository {repository.name}: {e}")
        return CloneResult(repository, CloneOutcome.FAILED, error=str(e))

    if proc.returncode == 0:
        return CloneResult(repository, CloneOutcome.CLONED)

    if proc.returncode == GIT_ALREADY_EXISTS_EXIT_CODE:
        console.info(f"Skipping {repository.name} because it already exists")
        return CloneResult(repository, CloneOutcome.SKIPPED)

    error = f"git exited with status {proc.returncode}"
    console.error(f"Error cloning repository {repository.name}: {error}")
    return CloneResult(repository, CloneOutcome.FAILED, error=error)
