"""Metropolitan Museum of Art collection client."""

from __future__ import annotations

import logging

from ...clients.collection import CollectionClient
from ...config import DEFAULT_CONCURRENCY, DEFAULT_OBJECT_CACHE_CAPACITY, DEFAULT_PAGE_SIZE
from ...core.cancellation import CancellationToken
from ...models.events import RetryEventHandler
from ...runtime.resolver import IdentifierPage
from ...runtime.rest import HTTPRequest, RawResponse, RetryConfig, RetryingTransport
from .config import (
    AUTOCOMPLETE_PATH,
    BASE_URL,
    DEPARTMENTS_PATH,
    OBJECTS_PATH,
    SEARCH_PATH,
    object_path,
    related_path,
)
from .schemas import (
    AutocompleteResponse,
    Department,
    DepartmentsResponse,
    MetObject,
    ObjectIDsResponse,
    ObjectQuery,
)

logger = logging.getLogger(__name__)


def _decode_ids(response: RawResponse) -> ObjectIDsResponse:
    return ObjectIDsResponse.model_validate(response.json())


def _decode_object(response: RawResponse) -> MetObject:
    return MetObject.model_validate(response.json())


class MetClient(CollectionClient[MetObject]):
    """Client for the Met collection API.

    The ``/objects`` listing is not paginated: its first page carries every
    matching identifier, so resolution finishes after one request.
    """

    def __init__(
        self,
        query: ObjectQuery | None = None,
        *,
        transport: RetryingTransport | None = None,
        base_url: str = BASE_URL,
        retry: RetryConfig | None = None,
        on_retry: RetryEventHandler | None = None,
        concurrency: int = DEFAULT_CONCURRENCY,
        page_size: int = DEFAULT_PAGE_SIZE,
        object_cache_capacity: int = DEFAULT_OBJECT_CACHE_CAPACITY,
    ) -> None:
        """Initialize Met client.

        Args:
            query: Filters applied to the ``/objects`` listing
            transport: Pre-built transport (overrides base_url/retry/on_retry)
            base_url: API root
            retry: Retry policy for the default transport
            on_retry: Retry hook for the default transport
            concurrency: Detail fetches issued together per window
            page_size: Passed to the resolver; ignored by the API
            object_cache_capacity: Records kept by the per-identifier cache
        """
        super().__init__(
            transport or RetryingTransport(base_url, retry=retry, on_retry=on_retry),
            concurrency=concurrency,
            page_size=page_size,
            object_cache_capacity=object_cache_capacity,
        )
        self.query = query or ObjectQuery()

    async def fetch_id_page(
        self,
        page: int,
        page_size: int,
        cancellation: CancellationToken | None = None,
    ) -> IdentifierPage:
        if page > 1:
            # Everything was delivered on page 1
            return IdentifierPage(total=0, ids=[])

        params = self.query.to_params()
        response = await self.transport.execute(
            lambda: HTTPRequest(url=OBJECTS_PATH, params=params or None),
            _decode_ids,
            cancellation=cancellation,
        )
        return IdentifierPage(total=response.total, ids=response.object_ids)

    async def fetch_object(
        self,
        object_id: int,
        cancellation: CancellationToken | None = None,
    ) -> MetObject:
        return await self.transport.execute(
            lambda: HTTPRequest(url=object_path(object_id)),
            _decode_object,
            cancellation=cancellation,
        )

    async def fetch_departments(
        self, cancellation: CancellationToken | None = None
    ) -> list[Department]:
        response = await self.transport.execute(
            lambda: HTTPRequest(url=DEPARTMENTS_PATH),
            lambda r: DepartmentsResponse.model_validate(r.json()),
            cancellation=cancellation,
        )
        return response.departments

    async def search(
        self,
        text: str,
        *,
        has_images: bool | None = None,
        department_id: int | None = None,
        cancellation: CancellationToken | None = None,
    ) -> list[int]:
        """Identifiers of records matching a free-text search.

        Args:
            text: Search terms (must not be empty)
            has_images: Restrict to records with images
            department_id: Restrict to one department
            cancellation: Optional cancellation token

        Returns:
            Matching identifiers, empty when nothing matches

        Raises:
            ValueError: If ``text`` is empty
        """
        if not text.strip():
            raise ValueError("search text must not be empty")

        params: dict[str, str] = {"q": text}
        if has_images is not None:
            params["hasImages"] = "true" if has_images else "false"
        if department_id is not None:
            params["departmentId"] = str(department_id)

        response = await self.transport.execute(
            lambda: HTTPRequest(url=SEARCH_PATH, params=params),
            _decode_ids,
            cancellation=cancellation,
        )
        logger.debug(f"Search {text!r} matched {response.total} objects")
        return response.object_ids

    async def autocomplete(
        self, term: str, *, cancellation: CancellationToken | None = None
    ) -> list[str]:
        response = await self.transport.execute(
            lambda: HTTPRequest(url=AUTOCOMPLETE_PATH, params={"q": term}),
            lambda r: AutocompleteResponse.model_validate(r.json()),
            cancellation=cancellation,
        )
        return response.terms

    async def related_object_ids(
        self, object_id: int, *, cancellation: CancellationToken | None = None
    ) -> list[int]:
        """Identifiers the API lists as related to ``object_id``."""
        response = await self.transport.execute(
            lambda: HTTPRequest(url=related_path(object_id)),
            _decode_ids,
            cancellation=cancellation,
        )
        return response.object_ids

    async def __aenter__(self) -> MetClient:
        return self
