"""Adoptium Marketplace catalog client: paginated version listing plus fallback merge."""
from __future__ import annotations

import json
import logging
import time
from typing import Callable, Iterable, List, Optional
from urllib.parse import quote, urlencode

from constants import Constants
from common.errors import CatalogError, CatalogTimeoutError, NetworkError
from common.http_client import robust_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from catalog.filter import filter_releases
from catalog.models import CatalogQuery, CatalogRecord
from catalog.schema import validate_page

logger = logging.getLogger(__name__)


def build_page_url(
    query: CatalogQuery,
    page: int,
    *,
    base_url: Optional[str] = None,
    page_size: Optional[int] = None,
) -> str:
    """Return the listing URL for ``page`` of ``query``.

    Everything except the page index is fixed for a given query.
    """
    base = (base_url or Constants.CATALOG_BASE_URL).rstrip("/")
    version_range = quote(Constants.CATALOG_VERSION_RANGE, safe=",")
    params = urlencode([
        ("project", "jdk"),
        ("sort_method", "DEFAULT"),
        ("sort_order", "DESC"),
        ("os", query.os),
        ("architecture", query.arch),
        ("image_type", query.image_type),
        ("jvm_impl", query.jvm_impl.lower()),
        ("page_size", page_size or Constants.CATALOG_PAGE_SIZE),
        ("page", page),
    ])
    return f"{base}/v1/assets/version/{quote(query.vendor, safe='')}/{version_range}?{params}"


def _decode_page(status_code: int, text: str, url: str) -> List[CatalogRecord]:
    """Turn one HTTP response into records; an empty list ends pagination."""
    if status_code == 404:
        # The marketplace answers 404 past the last page for some vendors.
        return []
    if not 200 <= status_code < 300:
        raise NetworkError(
            f"Catalog request to {safe_url(url)} failed with HTTP {status_code}",
            url=url,
            status_code=status_code,
        )
    if not text or not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog page is not valid JSON: {exc}", url=url) from exc
    if data is None:
        return []
    validate_page(data, url=url)
    return [CatalogRecord.from_dict(item) for item in data]


def fetch_all(
    query: CatalogQuery,
    fallback: Iterable[CatalogRecord] = (),
    *,
    base_url: Optional[str] = None,
    page_size: Optional[int] = None,
    max_pages: Optional[int] = None,
    deadline_sec: Optional[float] = None,
    clock: Callable[[], float] = time.monotonic,
) -> List[CatalogRecord]:
    """Retrieve every release for ``query`` and append the filtered fallback set.

    The marketplace exposes no page count, so pages are requested from 0
    until one comes back empty. Any page failure aborts the whole fetch and
    no partial result is returned. Fallback records are not deduplicated
    against remote ones.

    Raises:
        NetworkError: transport failure or non-success status.
        CatalogError: malformed page body, or ``max_pages`` reached without an empty page.
        CatalogTimeoutError: ``deadline_sec`` elapsed before pagination finished.
    """
    max_pages = Constants.CATALOG_MAX_PAGES if max_pages is None else max_pages
    deadline = Constants.CATALOG_FETCH_DEADLINE_SEC if deadline_sec is None else deadline_sec
    started = clock()

    records: List[CatalogRecord] = []
    page_index = 0
    with Timer() as t:
        while True:
            if page_index >= max_pages:
                raise CatalogError(
                    f"Catalog for {query.vendor} did not end after {max_pages} pages"
                )
            url = build_page_url(query, page_index, base_url=base_url, page_size=page_size)
            elapsed = clock() - started
            if deadline and elapsed > deadline:
                raise CatalogTimeoutError(elapsed, deadline, url=url)
            if page_index == 0 and is_debug_enabled(logger):
                # url is identical except page index so print it once
                logger.debug("Gathering available versions from '%s'", url)

            status_code, _, text = robust_get(url)
            page = _decode_page(status_code, text, url)
            if not page:
                break
            records.extend(page)
            page_index += 1

    if is_debug_enabled(logger):
        logger.debug(
            "Retrieved %d available versions for %s in %d pages (%d ms): %s",
            len(records),
            query.vendor,
            page_index,
            t.duration_ms(),
            ", ".join(r.version for r in records),
            extra=extra_context(
                event="catalog_fetch",
                component="catalog",
                action="fetch_all",
                outcome="success",
                count=len(records),
                pages=page_index,
                duration_ms=t.duration_ms()
            )
        )

    records.extend(
        filter_releases(fallback, query.os, query.arch, query.image_type, query.jvm_impl)
    )
    return records
