"""Unit tests for running git clone."""

import io
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from ..console import Console
from ..models import CloneOutcome, Repository
from .git_clone import clone_repo, destination_for

REPO = Repository("Hello-World", "https://github.com/octocat/Hello-World.git")


def _console(**kwargs):
    return Console(stdout=io.StringIO(), stderr=io.StringIO(), **kwargs)


def _completed(returncode):
    return subprocess.CompletedProcess(args=["git", "clone"], returncode=returncode)


def describe_destination_for():
    def it_nests_under_the_output_dir():
        assert destination_for(REPO, "octocat") == "octocat/Hello-World"

    def it_uses_the_bare_name_for_the_current_directory():
        assert destination_for(REPO, ".") == "Hello-World"


def describe_clone_repo():
    @pytest.fixture
    def run():
        with patch("github_clone.clone_repos.git_clone.subprocess.run") as mock:
            mock.return_value = _completed(0)
            yield mock

    def describe_dry_run():
        def it_reports_without_spawning_or_touching_disk(run: MagicMock, tmp_path):
            console = _console()

            result = clone_repo(REPO, str(tmp_path / "out"), console=console, dry_run=True)

            assert result.outcome is CloneOutcome.DRY_RUN
            run.assert_not_called()
            assert not (tmp_path / "out").exists()
            assert console._stdout.getvalue() == (
                f"Would have cloned {REPO.clone_url} to {tmp_path / 'out' / 'Hello-World'}\n"
            )

        def it_reports_bare_names_for_the_current_directory(run: MagicMock):
            console = _console()
            clone_repo(REPO, ".", console=console, dry_run=True)
            assert console._stdout.getvalue().endswith(" to Hello-World\n")

        def it_reports_even_when_quieter_quiet(run: MagicMock):
            console = _console(quieter_quiet=True)
            clone_repo(REPO, ".", console=console, dry_run=True)
            assert console._stdout.getvalue() == f"Would have cloned {REPO.clone_url} to Hello-World\n"

    def describe_live():
        def it_runs_git_clone_in_the_output_dir(run: MagicMock):
            result = clone_repo(REPO, "octocat", console=_console(), git="/usr/bin/git")

            assert result.outcome is CloneOutcome.CLONED
            args, kwargs = run.call_args
            assert args[0] == ["/usr/bin/git", "clone", REPO.clone_url]
            assert kwargs["cwd"] == "octocat"

        def it_inherits_the_working_directory_for_dot(run: MagicMock):
            clone_repo(REPO, ".", console=_console())
            assert run.call_args.kwargs["cwd"] is None

        def it_disables_interactive_authentication(run: MagicMock):
            with patch.dict("os.environ", {"HOME": "/home/test"}):
                clone_repo(REPO, "octocat", console=_console())

            env = run.call_args.kwargs["env"]
            assert env["GIT_TERMINAL_PROMPT"] == "0"
            assert env["GIT_SSH_COMMAND"] == "ssh -oBatchMode=yes"
            assert env["HOME"] == "/home/test"
            assert run.call_args.kwargs["stdin"] is subprocess.DEVNULL

        def it_hides_git_output_unless_verbose(run: MagicMock):
            clone_repo(REPO, "octocat", console=_console())
            assert run.call_args.kwargs["stdout"] is subprocess.DEVNULL

            clone_repo(REPO, "octocat", console=_console(verbose=True))
            assert run.call_args.kwargs["stdout"] is None

        def it_skips_when_the_destination_exists(run: MagicMock):
            run.return_value = _completed(128)
            console = _console()

            result = clone_repo(REPO, "octocat", console=console)

            assert result.outcome is CloneOutcome.SKIPPED
            assert result.counts_toward_total
            assert "Skipping Hello-World because it already exists" in console._stdout.getvalue()

        def it_reports_other_exit_codes_as_failures(run: MagicMock):
            run.return_value = _completed(1)
            console = _console()

            result = clone_repo(REPO, "octocat", console=console)

            assert result.outcome is CloneOutcome.FAILED
            assert result.error == "git exited with status 1"
            assert "Error cloning repository Hello-World" in console._stderr.getvalue()

        def it_reports_spawn_failures_without_raising(run: MagicMock):
            run.side_effect = FileNotFoundError(2, "No such file or directory", "git")
            console = _console()

            result = clone_repo(REPO, "octocat", console=console)

            assert result.outcome is CloneOutcome.FAILED
            assert "No such file or directory" in result.error
            assert "Error cloning repository Hello-World" in console._stderr.getvalue()

        def it_reports_unspawnable_arguments_without_raising(run: MagicMock):
            run.side_effect = ValueError("embedded null byte")
            repo = Repository("bad", "https://x/bad\x00.git")
            console = _console()

            result = clone_repo(repo, "octocat", console=console)

            assert result.outcome is CloneOutcome.FAILED
            assert result.error == "embedded null byte"
            assert "Error cloning repository bad" in console._stderr.getvalue()
