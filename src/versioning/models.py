"""Data models for package resolution."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DownloadCandidate:
    """A release eligible for download: canonical version and archive URL."""
    version: str
    url: str
