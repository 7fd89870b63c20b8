"""Errors that end a run, each carrying the process exit code it maps to."""

EXIT_LOCAL_ERROR = 1
EXIT_REMOTE_ERROR = 2


class GithubCloneError(Exception):
    """Base class for errors that terminate the run."""

    exit_code = EXIT_LOCAL_ERROR


class ValidationError(GithubCloneError):
    """Bad flags or arguments."""


class TransportError(GithubCloneError):
    """The request could not be sent or its response could not be received."""


class DecodeError(GithubCloneError):
    """The repository listing payload could not be decoded."""


class ApiError(GithubCloneError):
    """GitHub answered with a status the run cannot continue from."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        detail = f": {message}" if message else ""
        super().__init__(f"Error making request to GitHub API: HTTP {status_code}{detail}")


class TokenValidationError(GithubCloneError):
    """The configured token was rejected by the /user endpoint."""


class OutputDirectoryError(GithubCloneError):
    """The output directory could not be created."""


class InputError(GithubCloneError):
    """Standard input could not be read while prompting."""


class RateLimitError(GithubCloneError):
    exit_code = EXIT_REMOTE_ERROR

    def __init__(self, reset_time: str, authenticated: bool):
        self.reset_time = reset_time
        self.authenticated = authenticated
        message = f"Rate limit exceeded. Please try again {reset_time}."
        if not authenticated:
            message += (
                "\nAuthenticated users have a higher rate limit (5000 instead of 60 requests per hour)."
                " Please consider using a token."
            )
        super().__init__(message)


class AccountNotFoundError(GithubCloneError):
    exit_code = EXIT_REMOTE_ERROR
