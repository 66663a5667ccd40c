"""
Polite HTTP Fetcher

Fetches search result pages with per-domain politeness: an allow-list of
job board hosts, a minimum delay plus random jitter between requests to the
same domain group, a cap on concurrent requests per group, and browser-like
headers per site. Nothing is retried; failures are logged and reported to
the caller as an empty result for that URL.
"""

from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from fnmatch import fnmatch
from urllib.parse import urljoin, urlsplit
import asyncio
import random
import time

import httpx
from bs4 import BeautifulSoup

from jobseeker.core.exceptions import DisallowedDomainError, FetchError
from jobseeker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"

# Redirect hops followed per fetch, each checked against the allow-list
MAX_REDIRECTS = 5


@dataclass(frozen=True)
class DomainGroup:
    """Politeness settings for one job board's hostnames."""

    name: str
    domain_glob: str
    hosts: Tuple[str, ...]
    delay: float
    jitter: float
    max_concurrent: int
    headers: Dict[str, str] = field(default_factory=dict)

    def matches(self, host: str) -> bool:
        return fnmatch(host, self.domain_glob)


def _site_headers(origin: str, language: str) -> Dict[str, str]:
    return {
        "Referer": f"{origin}/",
        "Origin": origin,
        "Accept": HTML_ACCEPT,
        "Accept-Language": language,
    }


def default_domain_groups(
    delay: float = 2.0,
    overrides: Optional[Dict[str, Dict[str, float]]] = None,
) -> List[DomainGroup]:
    """
    Build the politeness table for the supported job boards.

    LinkedIn and Indeed get longer jitter and a single connection because
    they block automated traffic faster than SEEK does.

    Args:
        delay: Baseline delay between requests in seconds
        overrides: Per-group replacements keyed by group name, e.g.
            ``{"linkedin": {"delay": 5.0}}``

    Returns:
        List[DomainGroup]: One entry per job board
    """
    overrides = overrides or {}
    table = [
        dict(
            name="seek",
            domain_glob="*seek.com.au*",
            hosts=("seek.com.au", "www.seek.com.au"),
            delay=delay,
            jitter=1.0,
            max_concurrent=2,
            headers=_site_headers("https://www.seek.com.au", "en-AU,en;q=0.9"),
        ),
        dict(
            name="linkedin",
            domain_glob="*linkedin.com*",
            hosts=("linkedin.com", "www.linkedin.com", "au.linkedin.com"),
            delay=delay,
            jitter=2.0,
            max_concurrent=1,
            headers=_site_headers("https://www.linkedin.com", "en-US,en;q=0.9"),
        ),
        dict(
            name="indeed",
            domain_glob="*indeed.com*",
            hosts=("indeed.com", "www.indeed.com", "au.indeed.com"),
            delay=delay,
            jitter=2.0,
            max_concurrent=1,
            headers=_site_headers("https://au.indeed.com", "en-US,en;q=0.9"),
        ),
    ]

    groups = []
    for entry in table:
        entry.update(overrides.get(entry["name"], {}))
        groups.append(DomainGroup(**entry))
    return groups


@dataclass
class FetchResult:
    """Outcome of fetching one URL."""

    url: str
    document: Optional[BeautifulSoup] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.document is not None


class PoliteFetcher:
    """
    Async HTTP fetcher enforcing per-domain-group politeness.

    Usage::

        async with PoliteFetcher(default_domain_groups(2.0)) as fetcher:
            result = await fetcher.fetch(url)
    """

    def __init__(
        self,
        groups: Sequence[DomainGroup],
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            groups: Politeness table; hosts outside it are never fetched
            timeout_seconds: Fixed per-request timeout
            client: HTTP client to use instead of creating one
            user_agent: User-Agent header sent with every request
            sleep: Coroutine used to wait between requests
        """
        self.groups = list(groups)
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.session: Optional[httpx.AsyncClient] = client
        self._owns_session = client is None
        self._sleep = sleep

        self._allowed_hosts = {host for group in self.groups for host in group.hosts}
        self._semaphores = {
            group.name: asyncio.Semaphore(max(1, group.max_concurrent))
            for group in self.groups
        }
        self._turn_locks = {group.name: asyncio.Lock() for group in self.groups}
        self._last_request: Dict[str, float] = {}

        self._stats = {
            "requests": 0,
            "errors": 0,
        }

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.cleanup()

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self.session is None:
            self.session = httpx.AsyncClient(
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
                follow_redirects=False,
            )
            self._owns_session = True

    async def cleanup(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self.session is not None and self._owns_session:
            await self.session.aclose()
            self.session = None

        logger.info(
            "Fetcher closed",
            requests=self._stats["requests"],
            errors=self._stats["errors"],
        )

    def group_for(self, url: str) -> DomainGroup:
        """
        Resolve the domain group for a URL.

        Raises:
            DisallowedDomainError: If the host is not allow-listed
        """
        try:
            host = (urlsplit(url).hostname or "").lower()
        except ValueError as e:
            raise DisallowedDomainError(url, "") from e

        if host in self._allowed_hosts:
            for group in self.groups:
                if host in group.hosts and group.matches(host):
                    return group
        raise DisallowedDomainError(url, host)

    async def _wait_turn(self, group: DomainGroup) -> None:
        """Sleep until the group's delay plus jitter has passed since its last request."""
        async with self._turn_locks[group.name]:
            wait = group.delay + (random.uniform(0, group.jitter) if group.jitter > 0 else 0.0)
            last = self._last_request.get(group.name)
            if last is not None:
                remaining = wait - (time.monotonic() - last)
                if remaining > 0:
                    await self._sleep(remaining)
            self._last_request[group.name] = time.monotonic()

    async def _send(self, url: str, group: DomainGroup) -> httpx.Response:
        headers = {"User-Agent": self.user_agent, **group.headers}
        logger.info("Visiting", url=url, group=group.name)
        self._stats["requests"] += 1

        try:
            # Redirects are followed by _request so every hop is checked first
            return await self.session.get(
                url,
                headers=headers,
                timeout=self.timeout_seconds,
                follow_redirects=False,
            )
        except httpx.TimeoutException as e:
            raise FetchError(url, f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, f"Request failed: {e}") from e
        except httpx.InvalidURL as e:
            raise FetchError(url, f"Invalid URL: {e}") from e

    async def _request(self, url: str, group: DomainGroup) -> BeautifulSoup:
        if self.session is None:
            await self.initialize()

        async with self._semaphores[group.name]:
            await self._wait_turn(group)
            response = await self._send(url, group)

            hops = 0
            while response.is_redirect:
                hops += 1
                if hops > MAX_REDIRECTS:
                    raise FetchError(url, f"Too many redirects (more than {MAX_REDIRECTS})")

                location = response.headers["Location"]
                try:
                    next_url = urljoin(str(response.url), location)
                except ValueError as e:
                    raise FetchError(url, f"Invalid redirect location: {location}") from e
                # Raises before anything is sent to a host outside the allow-list
                next_group = self.group_for(next_url)
                response = await self._send(next_url, next_group)

        if not response.is_success:
            raise FetchError(
                url,
                f"HTTP error {response.status_code}",
                status_code=response.status_code,
            )

        return BeautifulSoup(response.content, "html.parser")

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch and parse one page.

        Args:
            url: Page URL

        Returns:
            FetchResult: Parsed document, or the error that prevented it
        """
        try:
            group = self.group_for(url)
            document = await self._request(url, group)
            return FetchResult(url=url, document=document)

        except FetchError as e:
            self._stats["errors"] += 1
            logger.error(
                "Error scraping page",
                url=e.url,
                status_code=e.status_code,
                error=e.message,
            )
            return FetchResult(url=url, error=e)

    async def fetch_all(self, urls: Sequence[str]) -> List[FetchResult]:
        """
        Fetch several pages concurrently and wait for all of them.

        Concurrency is bounded per domain group; results are returned in the
        order of ``urls``.
        """
        return list(await asyncio.gather(*(self.fetch(url) for url in urls)))

    def get_stats(self) -> Dict[str, int]:
        """Get fetch statistics."""
        return self._stats.copy()
