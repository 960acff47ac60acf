"""Sequential pagination walk over the explorer API.

Pages are requested one at a time starting at API page 1. The walk ends when
the server reports ``page == totalPage``; there is no empty-page detection and
no iteration cap, so a server reporting a wrong total will loop or truncate.
Any request, decode or normalization error stops the walk immediately.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from . import oklink_client
from .logging_setup import get_logger
from .models import Inscription, Page
from .normalizers import normalize_response

# (wallet, 1-based page) -> raw response body
type PageFetcher = Callable[[str, int], str]

_logger = get_logger("inscription_export.pagination")


def oklink_fetcher(api_key: str) -> PageFetcher:
    """Bind ``api_key`` into a :data:`PageFetcher` backed by the OKLink client."""

    def _fetch(wallet: str, page: int) -> str:
        return oklink_client.get_transaction_list(
            api_key, wallet, page, limit=oklink_client.PAGE_SIZE
        )

    return _fetch


def iter_pages(fetch_page: PageFetcher, wallet: str) -> Iterator[Page]:
    """Yield normalized pages in order until the last reported page."""

    p = 0
    while True:
        _logger.info("fetching page %d", p + 1)
        body = fetch_page(wallet, p + 1)
        page = normalize_response(oklink_client.decode_response(body))
        _logger.info("fetched page %d out of %d", page.page, page.total_pages)
        yield page
        if page.is_last:
            return
        p += 1


def fetch_inscriptions(
    api_key: str,
    wallet: str,
    *,
    fetch_page: PageFetcher | None = None,
) -> list[Inscription]:
    """Walk every page for ``wallet`` and return all inscriptions in order.

    ``fetch_page`` replaces the HTTP call (tests, alternative transports).
    Nothing is returned when any page fails; the partial accumulator is
    discarded with the raised exception.
    """

    fetcher = fetch_page if fetch_page is not None else oklink_fetcher(api_key)
    inscriptions: list[Inscription] = []
    for page in iter_pages(fetcher, wallet):
        inscriptions.extend(page.inscriptions)
    return inscriptions


__all__ = ["PageFetcher", "fetch_inscriptions", "iter_pages", "oklink_fetcher"]
