"""Page query backed by the data service's search endpoint.

A search request for one page is a GET on ``{url}/{collection}`` with the
page window, the sort order and ``type=search`` as query parameters. The
access token travels in the ``access_token`` cookie. The service answers
with the page's ``documents`` and the collection's ``total``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from ...core.enums import SortDirection
from ...core.exceptions import TransportError
from ...models import PageResult
from .http_client import HTTPClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionSettings:
    """Where and how to reach a collection.

    Attributes:
        url: Data service URL; ``https://`` is assumed when no scheme is given
        collection: Name of the collection to fetch
        token: Access token sent as the ``access_token`` cookie
        order_by: Stable key the collection is sorted by
        direction: Sort direction of ``order_by``
        timeout: Per-request timeout in seconds
    """

    url: str
    collection: str
    token: str
    order_by: str = "id"
    direction: SortDirection = SortDirection.ASC
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate settings."""
        for name in ("url", "collection", "token", "order_by"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def base_url(self) -> str:
        url = self.url.rstrip("/")
        if "://" not in url:
            url = f"https://{url}"
        return url

    @property
    def collection_path(self) -> str:
        return "/" + quote(self.collection, safe="")


class CollectionSearch:
    """Page query running search requests against one collection.

    Instances are stateless between calls and can be awaited concurrently.

    Example:
        >>> settings = ConnectionSettings(url="db-demo.example.io", collection="movies", token="...")
        >>> async with CollectionSearch(settings) as search:
        ...     page = await search(100, 0)
    """

    def __init__(self, settings: ConnectionSettings, client: HTTPClient | None = None) -> None:
        self._settings = settings
        self._owns_client = client is None
        self._client = client or HTTPClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers={"Cookie": f"access_token={settings.token}"},
        )

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    def build_params(self, limit: int, offset: int) -> dict[str, str]:
        """Query parameters for the page at ``offset``."""
        sort = [{self._settings.order_by: self._settings.direction.value}]
        return {
            "limit": str(limit),
            "offset": str(offset),
            "sort": json.dumps(sort, separators=(",", ":")),
            "type": "search",
        }

    async def __call__(self, limit: int, offset: int) -> PageResult:
        body = await self._client.get(
            self._settings.collection_path,
            params=self.build_params(limit, offset),
        )
        return self._parse(body, offset)

    def _parse(self, body: Any, offset: int) -> PageResult:
        try:
            return PageResult.model_validate(body)
        except ValidationError as exc:
            raise TransportError(
                f"Malformed search response for {self._settings.collection!r} "
                f"at offset {offset}: {exc.error_count()} validation error(s)"
            ) from exc

    async def close(self) -> None:
        """Close the HTTP client if this search created it."""
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self) -> CollectionSearch:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
