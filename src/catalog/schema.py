"""JSON Schema for one page of the marketplace version listing.

Only the fields used by filtering and resolution are required; the
marketplace is free to add others.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from jsonschema import Draft7Validator

from common.errors import CatalogError

_STRING = {"type": "string"}

PACKAGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["link"],
    "properties": {"link": _STRING},
}

BINARY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["os", "architecture", "image_type", "jvm_impl", "package"],
    "properties": {
        "os": _STRING,
        "architecture": _STRING,
        "image_type": _STRING,
        "jvm_impl": _STRING,
        "package": PACKAGE_SCHEMA,
    },
}

RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["openjdk_version_data", "binaries"],
    "properties": {
        "binaries": {"type": "array", "items": BINARY_SCHEMA},
        "openjdk_version_data": {
            "type": "object",
            "required": ["openjdk_version"],
            "properties": {
                "openjdk_version": _STRING,
                "major": {"type": ["integer", "null"]},
                "minor": {"type": ["integer", "null"]},
                "build": {"type": ["integer", "null"]},
                "security": {"type": ["integer", "null"]},
            },
        },
    },
}

PAGE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": RECORD_SCHEMA,
}

_PAGE_VALIDATOR = Draft7Validator(PAGE_SCHEMA)


def validate_page(data: Any, *, url: Optional[str] = None) -> None:
    """Validate a decoded page strictly and raise on the first error.

    Raises:
        CatalogError: naming the JSON path of the first violation.
    """
    errs = sorted(_PAGE_VALIDATOR.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join(str(p) for p in first.path)
        raise CatalogError(f"Invalid catalog page at '{path}': {first.message}", url=url)
