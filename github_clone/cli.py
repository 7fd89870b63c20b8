"""Command-line entry point for cloning a GitHub account's repositories."""

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .console import Console
from .driver import CloneOptions, CloneRun
from .errors import EXIT_LOCAL_ERROR, GithubCloneError, ValidationError
from .github import GitHubClient
from .models import DEFAULT_PER_PAGE, AccountType
from .rate_limit import RateLimitTracker
from .settings import get_settings


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on bad arguments; usage errors here exit with 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_LOCAL_ERROR, f"{self.prog}: error: {message}\n")


def _package_version() -> str:
    try:
        return version("github-clone")
    except PackageNotFoundError:
        return "0.0.0-dev"


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=Path(sys.argv[0]).name or "github-clone",
        description="Clone all repositories of a GitHub organization or user",
        allow_abbrev=False,
    )
    parser.add_argument(
        "account",
        nargs="?",
        help="GitHub account (organization or user) to clone",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="account_type",
        type=AccountType.from_flag,
        default=AccountType.ORGANIZATION,
        metavar="{org,user}",
        help='What type of GitHub account to clone, either "org" or "user" (default: org)',
    )
    parser.add_argument(
        "-u",
        "--user",
        action="store_true",
        help="Alias to --type user",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="The directory to clone the repos to (default: the account name)",
    )
    parser.add_argument(
        "-p",
        "--page",
        type=int,
        default=1,
        help="The page number to start cloning from (default: 1)",
    )
    parser.add_argument(
        "-pp",
        "--per-page",
        type=int,
        default=DEFAULT_PER_PAGE,
        help=f"The number of repositories to clone per page (default: {DEFAULT_PER_PAGE})",
    )
    parser.add_argument(
        "-V",
        "--verbose",
        action="store_true",
        help="Print verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress unnecessary, informational, output",
    )
    parser.add_argument(
        "-qq",
        "--quieter-quiet",
        action="store_true",
        help="Suppress all output. Errors will still be printed",
    )
    parser.add_argument(
        "-np",
        "--no-prompt",
        action="store_true",
        help="Disable all interactive prompts",
    )
    parser.add_argument(
        "-a",
        "--all",
        dest="all_pages",
        action="store_true",
        help="Clone all pages without prompting",
    )
    parser.add_argument(
        "-dr",
        "--dry",
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Only report what would be cloned",
    )
    parser.add_argument(
        "--token",
        "--pat",
        dest="token",
        default=None,
        help=(
            "GitHub fine-grained token (Repository Metadata and Contents read-only) or personal access "
            "token (full repo access). Falls back to GITHUB_TOKEN"
        ),
    )
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Print the version and exit",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> CloneOptions:
    if args.page < 1:
        raise ValidationError("Invalid page number provided")
    if args.per_page < 1:
        raise ValidationError("Invalid items number provided")

    return CloneOptions(
        account=args.account,
        account_type=AccountType.USER if args.user else args.account_type,
        output_dir=args.output,
        start_page=args.page,
        per_page=args.per_page,
        all_pages=args.all_pages,
        no_prompt=args.no_prompt,
        dry_run=args.dry_run,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"{parser.prog} {_package_version()}")
        return 0

    if not args.account:
        print(f"Usage: {parser.prog} [options] <account name>")
        parser.print_help()
        return EXIT_LOCAL_ERROR

    console = Console(verbose=args.verbose, quiet=args.quiet, quieter_quiet=args.quieter_quiet)
    try:
        options = _options_from_args(args)
    except ValidationError as e:
        console.error(str(e))
        return e.exit_code

    settings = get_settings()
    options.git = settings.git_executable
    token = args.token or settings.github_token

    rate_limit = RateLimitTracker(console)
    client = GitHubClient(token=token, rate_limit=rate_limit, console=console, settings=settings)
    try:
        if token:
            login = client.validate_token()
            snapshot = rate_limit.snapshot
            if snapshot is None:
                # Rate limiting disabled, as on some GitHub Enterprise servers
                console.info(f"Authenticated as @{login}!")
            elif not console.verbose:
                console.info(
                    f"Authenticated as @{login}! Rate limit has {snapshot.remaining} of {snapshot.limit} "
                    f"requests remaining, resetting {rate_limit.formatted_reset_time()}"
                )
        else:
            console.notice(
                "No personal access token provided. This may result in rate limiting. "
                "Check out the --token/--pat flag using --help to find out more."
            )

        CloneRun(options, client, console).run()
    except GithubCloneError as e:
        console.error(str(e))
        return e.exit_code
    finally:
        client.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
