"""Pick the single best catalog release for a requested version specifier."""
from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from common.errors import NotFoundError
from common.logging_utils import extra_context, is_debug_enabled
from catalog.fetcher import fetch_all
from catalog.models import CatalogQuery, CatalogRecord
from versioning.matcher import rank_versions, satisfies, validate_specifier
from versioning.models import DownloadCandidate

logger = logging.getLogger(__name__)

FetchFunc = Callable[[CatalogQuery, Sequence[CatalogRecord]], List[CatalogRecord]]


class PackageResolver:
    """Resolve specifiers against one vendor/platform query.

    The fallback records and the fetch function are injected, so vendor
    differences are configuration rather than subclasses.
    """

    def __init__(
        self,
        query: CatalogQuery,
        fallback: Sequence[CatalogRecord] = (),
        fetch: FetchFunc = fetch_all,
    ):
        self.query = query
        self.fallback = tuple(fallback)
        self.fetch = fetch

    def available_candidates(self) -> List[DownloadCandidate]:
        """Fetch the catalog and turn every record with binaries into a candidate.

        Raw remote pages are not pre-filtered, so empty records are dropped here.
        """
        records = self.fetch(self.query, self.fallback)
        return [
            DownloadCandidate(version=record.version, url=record.binaries[0].package.link)
            for record in records
            if record.binaries
        ]

    def resolve(self, specifier: str) -> DownloadCandidate:
        """Return the newest candidate satisfying ``specifier``.

        Raises:
            NotFoundError: no candidate satisfies ``specifier``; lists every known version.
            SpecifierError: ``specifier`` is not a valid range.
            NetworkError, CatalogError: propagated from the fetch.
        """
        validate_specifier(specifier)
        candidates = self.available_candidates()
        satisfied = rank_versions(
            (c for c in candidates if satisfies(specifier, c.version)),
            key=lambda c: c.version,
        )

        if is_debug_enabled(logger):
            logger.debug(
                "Resolution of '%s': %d of %d candidates satisfy",
                specifier,
                len(satisfied),
                len(candidates),
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    outcome="resolved" if satisfied else "not_found",
                    candidate_count=len(candidates)
                )
            )

        if not satisfied:
            raise NotFoundError(specifier, [c.version for c in candidates])
        return satisfied[0]


def find_package_for_download(
    specifier: str,
    query: CatalogQuery,
    fallback: Sequence[CatalogRecord] = (),
) -> DownloadCandidate:
    """Resolve ``specifier`` for ``query`` with the default marketplace fetcher."""
    return PackageResolver(query, fallback).resolve(specifier)
