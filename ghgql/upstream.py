import json
import logging
import typing

import httpx

from .config import Settings
from .errors import UpstreamFetchError

logger = logging.getLogger(__name__)


class GitHubUserClient:
    """Fetches raw user records from the GitHub REST API.

    Each ``fetch`` opens its own ``httpx.AsyncClient`` and issues exactly one
    GET; nothing is cached or retried. The status code is ignored unless
    ``settings.raise_for_status`` is set, so GitHub's JSON error bodies come
    back as ordinary records.
    """

    def __init__(
        self, settings: Settings = None, transport: httpx.AsyncBaseTransport = None
    ) -> None:
        self.settings = settings or Settings()
        self.transport = transport

    def user_url(self, login: str) -> str:
        return f'{self.settings.api_url.rstrip("/")}/users/{login}'

    def build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.http_timeout_seconds),
            headers={
                'Accept': 'application/vnd.github+json',
                'User-Agent': self.settings.user_agent,
            },
            transport=self.transport,
        )

    async def fetch(self, login: str) -> typing.Any:
        url = self.user_url(login)
        logger.debug('GET %s', url)
        async with self.build_client() as client:
            try:
                async with client.stream('GET', url) as response:
                    body = await response.aread()
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                logger.warning('Upstream request to %s failed: %s', url, exc)
                raise UpstreamFetchError(login, url, str(exc) or type(exc).__name__) from exc

        if self.settings.raise_for_status and not response.is_success:
            logger.warning('Upstream %s answered %s', url, response.status_code)
            raise UpstreamFetchError(
                login,
                url,
                f'upstream answered HTTP {response.status_code}',
                status_code=response.status_code,
            )

        try:
            return json.loads(body)
        except ValueError as exc:
            logger.warning('Upstream %s returned a non-JSON body', url)
            raise UpstreamFetchError(
                login, url, 'response body is not valid JSON', status_code=response.status_code
            ) from exc
