"""Structural filtering of catalog records by platform dimensions."""
from __future__ import annotations

from typing import Iterable, List

from catalog.models import CatalogRecord


def filter_releases(
    records: Iterable[CatalogRecord],
    os_name: str,
    arch: str,
    image_type: str,
    jvm_impl: str,
) -> List[CatalogRecord]:
    """Keep records with at least one binary matching all four dimensions.

    Binaries are pruned to the matching subset and comparisons ignore case.
    Records left without binaries are dropped; input order is preserved.
    """
    result = []
    for record in records:
        binaries = [b for b in record.binaries if b.matches(os_name, arch, image_type, jvm_impl)]
        if binaries:
            result.append(record.with_binaries(binaries))
    return result
