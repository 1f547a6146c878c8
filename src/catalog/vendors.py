"""Vendor profiles and the fallback dataset loader.

Vendor-specific behavior is plain configuration: a default JVM
implementation, a display name, and optionally a fallback dataset supplied by
the caller.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List

from constants import JvmImplementation, Vendor
from common.errors import CatalogError
from catalog.models import CatalogRecord
from catalog.schema import validate_page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VendorProfile:
    """Static settings of a marketplace vendor."""
    vendor: Vendor
    display_name: str
    jvm_impl: JvmImplementation = JvmImplementation.HOTSPOT


VENDOR_PROFILES = {
    Vendor.ADOPTIUM: VendorProfile(Vendor.ADOPTIUM, "Temurin"),
    Vendor.REDHAT: VendorProfile(Vendor.REDHAT, "Red Hat"),
    Vendor.ALIBABA: VendorProfile(Vendor.ALIBABA, "Dragonwell"),
    Vendor.IBM: VendorProfile(Vendor.IBM, "Semeru", JvmImplementation.OPENJ9),
    Vendor.MICROSOFT: VendorProfile(Vendor.MICROSOFT, "Microsoft"),
    Vendor.AZUL: VendorProfile(Vendor.AZUL, "Zulu"),
    Vendor.HUAWEI: VendorProfile(Vendor.HUAWEI, "Bisheng"),
}


def get_profile(vendor: str) -> VendorProfile:
    """Look up the profile for a vendor name (case-insensitive).

    Raises:
        ValueError: for a vendor the marketplace does not serve.
    """
    return VENDOR_PROFILES[Vendor(vendor.strip().lower())]


def load_fallback(path: str) -> List[CatalogRecord]:
    """Read a fallback dataset stored in the marketplace response format.

    Raises:
        OSError: the file cannot be read.
        CatalogError: the content is not a valid record array.
    """
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"Fallback file {path} is not valid JSON: {exc}") from exc
    validate_page(data, url=path)
    records = [CatalogRecord.from_dict(item) for item in data]
    logger.debug("Loaded %d fallback releases from %s", len(records), path)
    return records
