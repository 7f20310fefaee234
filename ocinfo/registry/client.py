"""HTTP client for an OpenComponents registry.

Lists the components published at a registry root and fetches every
component's ``~info`` document concurrently. A metadata batch is
all-or-nothing: the first failing request cancels the rest and the whole
fetch fails.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ocinfo.config import Settings
from ocinfo.errors import FetchError, RegistryError
from ocinfo.registry.models import ComponentMetadata, RegistryDocument

LOG = logging.getLogger(__name__)

INFO_SUFFIX = "~info"

_INVALID_REGISTRY_MSG = "oc registry url is not valid"

# Every ~info request goes out at once; the default pool caps at 100
UNBOUNDED_LIMITS = httpx.Limits(max_connections=None, max_keepalive_connections=None)


def info_url(href: str) -> str:
    """Return the ``~info`` endpoint of a component href."""
    return f"{href.rstrip('/')}/{INFO_SUFFIX}"


class RegistryClient:
    """Async registry client wrapping a single ``httpx.AsyncClient``.

    Parameters
    ----------
    settings : Settings | None
        Runtime settings; read from the environment when *None*.
    transport : httpx.AsyncBaseTransport | None
        Custom transport, mainly for tests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=None,
            limits=UNBOUNDED_LIMITS,
            follow_redirects=True,
            headers={
                "Accept": "application/json",
                "User-Agent": self.settings.user_agent,
            },
        )

    async def __aenter__(self) -> RegistryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- requests ------------------------------------------------------------

    async def _get_json(self, url: str) -> Any:
        response = await self._client.get(url)
        response.raise_for_status()
        return response.json()

    async def list_components(self, url: str) -> list[str]:
        """Return the component hrefs published at a registry root."""
        LOG.debug("Listing components at %s", url)
        try:
            body = await self._get_json(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise RegistryError(_INVALID_REGISTRY_MSG) from exc

        document = RegistryDocument.from_dict(body)
        if not document.is_valid:
            raise RegistryError(_INVALID_REGISTRY_MSG)

        LOG.debug("Registry lists %d components", len(document.components))
        return document.components

    async def fetch_info(self, href: str) -> ComponentMetadata:
        """Fetch and parse the ``~info`` document of one component."""
        if not isinstance(href, str):
            reason = f"component href must be a string, got {type(href).__name__}"
            raise FetchError(repr(href), TypeError(reason))

        url = info_url(href)
        try:
            body = await self._get_json(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise FetchError(href, exc) from exc

        if not isinstance(body, dict):
            raise FetchError(href, ValueError(f"expected a JSON object from {url}"))

        LOG.debug("Fetched %s", url)
        return ComponentMetadata.from_dict(body)

    async def fetch_all(self, hrefs: list[str]) -> list[ComponentMetadata]:
        """Fetch every component's metadata concurrently, in input order.

        Raises the first FetchError; outstanding requests are cancelled.
        """
        LOG.debug("Fetching info for %d components", len(hrefs))
        tasks = [asyncio.ensure_future(self.fetch_info(href)) for href in hrefs]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise


async def collect_metadata(
    url: str,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ComponentMetadata]:
    """List a registry and fetch the metadata of all its components."""
    async with RegistryClient(settings=settings, transport=transport) as client:
        hrefs = await client.list_components(url)
        return await client.fetch_all(hrefs)
