"""GitHub REST client: repository listing pages and token validation."""

import logging
from urllib.parse import quote, urlencode

import httpx
import requests
from github import Auth, Github, GithubException

from .console import Console
from .errors import AccountNotFoundError, ApiError, DecodeError, RateLimitError, TokenValidationError, TransportError
from .models import AccountSelector, AccountType, PaginationCursor, Repository
from .rate_limit import RateLimitTracker
from .settings import Settings, get_settings

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("github").setLevel(logging.ERROR)
logging.getLogger("urllib3").setLevel(logging.ERROR)

USER_AGENT = "github-clone"
API_VERSION = "2022-11-28"


def _error_message(resp: httpx.Response) -> str | None:
    """Pull GitHub's "message" field out of an error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


class GitHubClient:
    """Issues one listing request per call and classifies the response.

    Retrying is left to the caller: every call produces exactly one
    list of repositories or one exception.
    """

    def __init__(
        self,
        token: str | None = None,
        rate_limit: RateLimitTracker | None = None,
        console: Console | None = None,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.token = token or None
        self.console = console or Console()
        self.rate_limit = rate_limit or RateLimitTracker(self.console)

        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self._client = httpx.Client(
            base_url=self.settings.github_api_url,
            headers=headers,
            timeout=self.settings.request_timeout,
            transport=transport,
        )

    def fetch_page(self, selector: AccountSelector, cursor: PaginationCursor) -> list[Repository]:
        """Fetch one page of the account's repository listing.

        Raises:
            RateLimitError: 403 while the tracked rate limit is exhausted.
            AccountNotFoundError: 404.
            ApiError: any other non-200 status.
            TransportError: the request could not be completed.
            DecodeError: the 200 body is not a list of repositories.
        """
        path = f"/{selector.account_type.value}/{quote(selector.account, safe='')}/repos"
        params = {"page": cursor.page, "per_page": cursor.per_page}
        if selector.account_type is AccountType.ORGANIZATION and self.token:
            # Includes private repositories the token can see
            params["type"] = "all"

        self.console.debug(f"Request URL: {self.settings.github_api_url.rstrip('/')}{path}?{urlencode(params)}")
        try:
            resp = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"Error making request to GitHub API: {exc}") from exc

        self.rate_limit.update(resp.headers)

        if resp.status_code == 200:
            return self._decode_listing(resp)

        if resp.status_code == 403 and self.rate_limit.is_exhausted():
            raise RateLimitError(self.rate_limit.formatted_reset_time(), authenticated=bool(self.token))

        if resp.status_code == 404:
            raise AccountNotFoundError(f"{selector.account_type.label} {selector.account} not found")

        raise ApiError(resp.status_code, _error_message(resp))

    def _decode_listing(self, resp: httpx.Response) -> list[Repository]:
        try:
            body = resp.json()
        except ValueError as exc:
            raise DecodeError(f"Error decoding response body: {exc}") from exc
        if not isinstance(body, list):
            raise DecodeError(f"Error decoding response body: expected a list, got {type(body).__name__}")
        try:
            return [Repository.from_api(item) for item in body]
        except ValueError as exc:
            raise DecodeError(f"Error decoding response body: {exc}") from exc

    def validate_token(self) -> str:
        """Confirm the token against GET /user and return the authenticated login.

        Also records the rate-limit counters from that response, when it carries
        any. No second request is made for them.
        """
        if not self.token:
            raise TokenValidationError("No token provided")

        github = Github(
            auth=Auth.Token(self.token),
            base_url=self.settings.github_api_url,
            user_agent=USER_AGENT,
            timeout=int(self.settings.request_timeout),
            retry=None,
        )
        try:
            user = github.get_user()
            login = user.login
            headers = user.raw_headers
        except GithubException as e:
            raise TokenValidationError(
                f"Couldn't authenticate with GitHub API (HTTP {e.status}). "
                "Please check your token, see --token in --help."
            ) from e
        except requests.RequestException as e:
            raise TransportError(f"Error making request to GitHub API: {e}") from e
        finally:
            github.close()

        if not login:
            raise TokenValidationError("Couldn't authenticate with GitHub API. Please check your token.")

        self.rate_limit.update(headers)
        return login

    def close(self):
        self._client.close()
