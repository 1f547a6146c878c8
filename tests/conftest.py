"""Shared fixtures: marketplace-shaped records and fake HTTP pages."""
import json
import os
import re

import pytest

from catalog.models import CatalogQuery, CatalogRecord
from constants import Constants

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def record_dict(version, binaries=None, vendor="microsoft"):
    """Marketplace JSON for one release; binaries default to a linux/x64 hotspot jdk."""
    if binaries is None:
        binaries = [binary_dict()]
    digits = re.match(r"\D*(\d+)", version)
    return {
        "openjdk_version_data": {
            "openjdk_version": version,
            "major": int(digits.group(1)) if digits else None,
            "minor": 0,
            "build": 0,
        },
        "binaries": binaries,
        "vendor": vendor,
        "release_name": f"jdk-{version}",
        "release_link": f"https://example.test/releases/{version}",
    }


def binary_dict(os_name="linux", arch="x64", image_type="jdk", jvm_impl="hotspot", link=None):
    """Marketplace JSON for one binary."""
    return {
        "os": os_name,
        "architecture": arch,
        "image_type": image_type,
        "jvm_impl": jvm_impl,
        "package": {
            "link": link or f"https://example.test/{os_name}-{arch}-{image_type}.tar.gz",
            "name": "archive.tar.gz",
            "sha256sum": "0" * 64,
            "sha256sum_link": "https://example.test/archive.sha256.txt",
        },
    }


def make_record(version, binaries=None, vendor="microsoft"):
    """Parsed CatalogRecord built from :func:`record_dict`."""
    return CatalogRecord.from_dict(record_dict(version, binaries, vendor))


def page_response(records):
    """(status, headers, text) tuple as returned by robust_get."""
    return 200, {"Content-Type": "application/json"}, json.dumps(records)


@pytest.fixture
def linux_query():
    """Query for a linux/x64 hotspot jdk from Microsoft."""
    return CatalogQuery(vendor="microsoft", os="linux", arch="x64", image_type="jdk", jvm_impl="hotspot")


@pytest.fixture
def catalog_data():
    """Multi-platform sample catalog in marketplace format."""
    with open(os.path.join(DATA_DIR, "microsoft_catalog.json"), encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo any Constants mutation a test performs."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)
