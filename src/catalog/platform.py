"""Translate local platform names into the marketplace vocabulary."""
from __future__ import annotations

import platform
import sys
from typing import Optional

# Marketplace spells some operating systems differently from sys.platform.
PLATFORM_MAP = {
    "darwin": "mac",
    "win32": "windows",
    "cygwin": "windows",
    "windows": "windows",
}

ARCHITECTURE_MAP = {
    "amd64": "x64",
    "x86_64": "x64",
    "arm64": "aarch64",
    "i386": "x86",
    "i686": "x86",
}


def map_platform(name: str) -> str:
    """Map an OS identifier such as ``darwin`` to the catalog name (``mac``)."""
    key = name.strip().lower()
    return PLATFORM_MAP.get(key, key)


def map_architecture(name: str) -> str:
    """Map a machine identifier such as ``amd64`` to the catalog name (``x64``)."""
    key = name.strip().lower()
    return ARCHITECTURE_MAP.get(key, key)


def detect_platform(sys_platform: Optional[str] = None) -> str:
    """Catalog OS name of the running interpreter."""
    name = sys_platform or sys.platform
    if name.startswith("linux"):
        name = "linux"
    return map_platform(name)


def detect_architecture(machine: Optional[str] = None) -> str:
    """Catalog architecture name of the running machine."""
    return map_architecture(machine or platform.machine())
