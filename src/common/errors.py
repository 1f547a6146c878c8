"""Error taxonomy for catalog fetching and package resolution."""
from __future__ import annotations

from typing import Optional, Sequence


class ResolutionError(Exception):
    """Base class for every failure surfaced by a resolution."""


class NetworkError(ResolutionError):
    """A catalog page could not be transported (connection failure or non-2xx status)."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CatalogTimeoutError(NetworkError):
    """The overall fetch deadline expired before pagination finished."""

    def __init__(self, elapsed: float, deadline: float, *, url: Optional[str] = None):
        super().__init__(
            f"Catalog fetch exceeded deadline of {deadline:g}s (elapsed {elapsed:.1f}s)",
            url=url,
        )
        self.elapsed = elapsed
        self.deadline = deadline


class CatalogError(ResolutionError):
    """A catalog page arrived but its body is not a valid record array."""

    def __init__(self, message: str, *, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NotFoundError(ResolutionError):
    """No candidate satisfies the requested specifier."""

    def __init__(self, specifier: str, available_versions: Sequence[str]):
        self.specifier = specifier
        self.available_versions = list(available_versions)
        available = ", ".join(self.available_versions)
        message = f"Could not find satisfied version for SemVer '{specifier}'."
        if available:
            message += f"\nAvailable versions: {available}"
        super().__init__(message)


class SpecifierError(ResolutionError, ValueError):
    """The requested version specifier is not a valid semver range."""
