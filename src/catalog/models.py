"""Data models for Adoptium Marketplace catalog records.

Only the fields needed for filtering and resolution are modelled strictly;
everything else is carried as optional metadata. Instances are immutable.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from common.errors import CatalogError
from versioning.normalize import normalize_version


@dataclass(frozen=True)
class Package:
    """Download descriptor of a binary; checksum/signature links are informational."""
    link: str
    name: Optional[str] = None
    sha256sum: Optional[str] = None
    sha256sum_link: Optional[str] = None
    signature_link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Package":
        return cls(
            link=data["link"],
            name=data.get("name"),
            sha256sum=data.get("sha256sum"),
            sha256sum_link=data.get("sha256sum_link"),
            signature_link=data.get("signature_link"),
        )


@dataclass(frozen=True)
class Binary:
    """One platform-specific artifact of a release."""
    os: str
    architecture: str
    image_type: str
    jvm_impl: str
    package: Package

    def matches(self, os_name: str, arch: str, image_type: str, jvm_impl: str) -> bool:
        """Case-insensitive match on all four filter dimensions."""
        return (
            self.os.lower() == os_name.lower()
            and self.architecture.lower() == arch.lower()
            and self.image_type.lower() == image_type.lower()
            and self.jvm_impl.lower() == jvm_impl.lower()
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Binary":
        return cls(
            os=data["os"],
            architecture=data["architecture"],
            image_type=data["image_type"],
            jvm_impl=data["jvm_impl"],
            package=Package.from_dict(data["package"]),
        )


@dataclass(frozen=True)
class VersionData:
    """Structured OpenJDK version as published by the marketplace."""
    openjdk_version: str
    major: Optional[int] = None
    minor: Optional[int] = None
    build: Optional[int] = None
    security: Optional[int] = None
    patch: Optional[str] = None
    pre: Optional[str] = None
    optional: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionData":
        return cls(
            openjdk_version=data["openjdk_version"],
            major=data.get("major"),
            minor=data.get("minor"),
            build=data.get("build"),
            security=data.get("security"),
            patch=None if data.get("patch") is None else str(data["patch"]),
            pre=data.get("pre"),
            optional=data.get("optional"),
        )


@dataclass(frozen=True)
class CatalogRecord:
    """One vendor release: a version plus its platform-specific binaries."""
    version_data: VersionData
    binaries: Tuple[Binary, ...] = field(default_factory=tuple)
    vendor: Optional[str] = None
    release_name: Optional[str] = None
    release_link: Optional[str] = None

    @property
    def version(self) -> str:
        """Canonical semver string used for matching and ranking."""
        return normalize_version(self.version_data.openjdk_version)

    def with_binaries(self, binaries: Iterable[Binary]) -> "CatalogRecord":
        """Return a copy carrying only ``binaries``; other fields are shared."""
        return replace(self, binaries=tuple(binaries))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogRecord":
        """Build a record from one element of a catalog response.

        Raises:
            CatalogError: when a required field is missing or has the wrong shape.
        """
        try:
            return cls(
                version_data=VersionData.from_dict(data["openjdk_version_data"]),
                binaries=tuple(Binary.from_dict(b) for b in data.get("binaries") or ()),
                vendor=data.get("vendor"),
                release_name=data.get("release_name"),
                release_link=data.get("release_link"),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise CatalogError(f"Malformed catalog record: {exc!r}") from exc


@dataclass(frozen=True)
class CatalogQuery:
    """Vendor plus the four dimensions a resolution is filtered on.

    ``os`` and ``arch`` are expected in catalog vocabulary, see ``catalog.platform``.
    """
    vendor: str
    os: str
    arch: str
    image_type: str = "jdk"
    jvm_impl: str = "hotspot"
