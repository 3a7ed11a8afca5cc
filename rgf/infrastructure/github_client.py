"""GitHub REST API client for fork listing and rate limit status."""

import logging
from typing import Any, Dict, List, Optional

import requests

from rgf.config import Settings
from rgf.domain.fork import Fork, RateLimit
from rgf.domain.repository import PageCursor, RepositoryIdentifier

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a GitHub API call cannot be completed."""
    pass


class BadStatusError(FetchError):
    """Raised when GitHub answers with a non-success HTTP status."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"Response status not okay: {status}{detail}")


class TransportError(FetchError):
    """Raised when the request fails or the response cannot be understood."""
    pass


class GitHubClient:
    """Client for the GitHub REST API. Issues exactly one request per call, no retries."""

    # GitHub caps per_page at 100 for list endpoints
    MAX_PAGE_SIZE = 100
    REQUEST_TIMEOUT_SECONDS = 30

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """
        Initialize GitHub REST client.

        Args:
            settings: Run settings carrying the API URL, user agent and token
            session: HTTP session to use. A new one is created if None.
        """
        self.api_url = settings.api_url
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.user_agent,
        })

        # Add authorization header if token is available
        if settings.token:
            self.session.headers["Authorization"] = f"Bearer {settings.token}"
        else:
            logger.warning("No GitHub token given. Using unauthenticated requests (limited rate).")

    def close(self):
        self.session.close()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute a GET request and decode the JSON body.

        Args:
            path: API path starting with "/"
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            BadStatusError: If the response status is not 2xx
            TransportError: If the request fails or the body is not JSON
        """
        url = f"{self.api_url}{path}"
        logger.info(f"GET {url} {params or {}}")

        try:
            response = self.session.get(url, params=params, timeout=self.REQUEST_TIMEOUT_SECONDS)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"GitHub returned HTTP {response.status_code} for {url}")
            raise BadStatusError(response.status_code, response.text[:500])

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON in response from {url}: {e}") from e

    def list_forks(self, repository: RepositoryIdentifier, cursor: PageCursor) -> List[Fork]:
        """
        Fetch one page of forks, newest first.

        Args:
            repository: Repository whose forks are listed
            cursor: Page size and page number

        Returns:
            Forks in the order returned by GitHub
        """
        page_size = cursor.page_size
        if page_size > self.MAX_PAGE_SIZE:
            logger.warning(f"per_page {page_size} exceeds GitHub maximum, using {self.MAX_PAGE_SIZE}")
            page_size = self.MAX_PAGE_SIZE

        data = self._get(
            f"/repos/{repository.owner}/{repository.name}/forks",
            params={"sort": "newest", "per_page": page_size, "page": cursor.page},
        )
        if not isinstance(data, list):
            raise TransportError(f"Expected a list of forks, got {type(data).__name__}")

        forks = []
        for node in data:
            try:
                fork = Fork(
                    full_name=node["full_name"],
                    clone_url=node["clone_url"],
                    forks_count=int(node["forks_count"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise TransportError(f"Malformed fork entry in response: {e}") from e
            forks.append(fork)

        logger.info(f"Fetched {len(forks)} forks of {repository} (page {cursor.page})")
        return forks

    def get_rate_limit(self) -> RateLimit:
        """Fetch the current core API quota."""
        data = self._get("/rate_limit")
        try:
            rate = data["rate"]
            return RateLimit(
                used=int(rate["used"]),
                limit=int(rate["limit"]),
                remaining=int(rate["remaining"]),
                reset=int(rate["reset"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed rate limit response: {e}") from e
