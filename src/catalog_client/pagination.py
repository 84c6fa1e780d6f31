"""Lazy, forward-only pagination over ``Link`` header relations.

A list action whose response carries a ``Link`` header resolves with a
``PageSequence`` instead of a plain list:

```python
pages = await api.Accounts.list(size=25)
async for items in pages:
    for account in items:
        ...

# or, flattened
accounts = await (await api.Accounts.list()).collect()
```

The first page is the one the action already fetched. Each further advance
issues a GET for the ``next`` relation of the previous page. A sequence is
single-pass and owned by one consumer: it cannot be restarted, and advancing
the same instance from two tasks at once is not supported.
"""

import logging
import re
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any
from urllib.parse import urljoin

logger = logging.getLogger(__name__)

# <url> followed by its ;-separated parameters, up to the next <
_LINK_ENTRY_RE = re.compile(r"<([^>]*)>([^<]*)")
_REL_PARAM_RE = re.compile(r';\s*rel\s*=\s*(?:"([^"]*)"|([^\s;,]+))', re.IGNORECASE)

LinkSet = dict[str, str]
FetchPage = Callable[[str], Awaitable[tuple[Any, LinkSet]]]


def parse_link_header(value: str | None, base_url: str | None = None) -> LinkSet:
    """Parse an RFC 8288 ``Link`` header into a relation -> URL mapping.

    Entries look like ``<url>; rel="name"`` and are comma separated. Every
    relation is kept, including ones the pager ignores; a ``rel`` listing
    several space-separated names registers the URL under each. Entries
    without a ``rel`` parameter are skipped. When ``base_url`` is given,
    relative targets are resolved against it.
    """
    links: LinkSet = {}
    if not value:
        return links

    for match in _LINK_ENTRY_RE.finditer(value):
        url, params = match.group(1).strip(), match.group(2)
        rel_match = _REL_PARAM_RE.search(params)
        if not url or not rel_match:
            continue
        if base_url:
            url = urljoin(base_url, url)
        rel = rel_match.group(1) if rel_match.group(1) is not None else rel_match.group(2)
        for name in rel.lower().split():
            # First occurrence wins, as with repeated header entries
            links.setdefault(name, url)

    return links


class PageCursor:
    """Pagination state: where we are, and where ``next`` points.

    ``next_url`` is cleared when the server offers no ``next`` relation, when
    ``next`` points at a page that was already fetched, or when the page just
    fetched is the ``last`` one. ``first_url`` and ``last_url`` keep the most
    recent ``first`` and ``last`` relations, so a consumer can start a new
    listing from the top or tell how far the walk has come.
    """

    def __init__(self, current_url: str | None, links: LinkSet):
        self.current_url = current_url
        self.next_url: str | None = None
        self.last_url: str | None = None
        self.first_url: str | None = None
        self.visited: set[str] = set()
        if current_url:
            self.visited.add(current_url)
        self._apply(links)

    @property
    def exhausted(self) -> bool:
        return self.next_url is None

    def moved_to(self, url: str, links: LinkSet) -> None:
        """Record that the page at ``url`` was fetched and carried ``links``."""
        self.current_url = url
        self.visited.add(url)
        self._apply(links)

    def _apply(self, links: LinkSet) -> None:
        self.first_url = links.get("first", self.first_url)
        self.last_url = links.get("last", self.last_url)

        next_url = links.get("next")
        if next_url is None or next_url in self.visited:
            self.next_url = None
        elif self.current_url is not None and self.current_url == self.last_url:
            self.next_url = None
        else:
            self.next_url = next_url

    def __repr__(self) -> str:
        return f"PageCursor(current_url={self.current_url!r}, next_url={self.next_url!r})"


class PageSequence:
    """Async iterator yielding one list of items per page.

    Args:
        first_items: Items of the page that was already fetched
        links: Link relations parsed from that page's response
        fetch_page: Coroutine function fetching a page URL and returning
            ``(items, links)``; errors it raises propagate to the consumer
        url: URL the first page was fetched from, if known
    """

    def __init__(
        self,
        first_items: Any,
        links: LinkSet,
        fetch_page: FetchPage,
        *,
        url: str | None = None,
    ):
        self._first_items = first_items
        self._first_pending = True
        self._fetch_page = fetch_page
        self._cursor = PageCursor(url, links)
        self._pages_yielded = 0

    @property
    def cursor(self) -> PageCursor:
        return self._cursor

    @property
    def pages_yielded(self) -> int:
        return self._pages_yielded

    @property
    def exhausted(self) -> bool:
        return not self._first_pending and self._cursor.exhausted

    def __aiter__(self) -> "PageSequence":
        return self

    async def __anext__(self) -> Any:
        if self._first_pending:
            self._first_pending = False
            items, self._first_items = self._first_items, None
            self._pages_yielded += 1
            return items

        next_url = self._cursor.next_url
        if next_url is None:
            raise StopAsyncIteration

        logger.debug(f"Fetching page {self._pages_yielded + 1} from {next_url}")
        # The cursor only moves once the fetch succeeded, so a failed advance can be retried
        items, links = await self._fetch_page(next_url)
        self._cursor.moved_to(next_url, links)
        self._pages_yielded += 1
        return items

    async def items(self) -> AsyncIterator[Any]:
        """Iterate over the remaining items of every remaining page."""
        async for page in self:
            if isinstance(page, list):
                for item in page:
                    yield item
            else:
                yield page

    async def collect(self) -> list[Any]:
        """Fetch every remaining page and return all items in order."""
        return [item async for item in self.items()]

    def __repr__(self) -> str:
        return f"PageSequence(pages_yielded={self._pages_yielded}, cursor={self._cursor!r})"
