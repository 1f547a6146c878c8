"""Semantic-version matching and build-aware ranking of candidate versions."""
from __future__ import annotations

import functools
import re
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

import semantic_version

from common.errors import SpecifierError

_NUMERIC = re.compile(r"^\d+$")
_PRERELEASE_COMPARATOR = re.compile(r"(\d+)\.(\d+)\.(\d+)-[0-9A-Za-z]")

T = TypeVar("T")


def _parse_version(text: str) -> Optional[semantic_version.Version]:
    """Parse a strict semver string, or return None if it is malformed."""
    try:
        return semantic_version.Version(text.strip())
    except (ValueError, AttributeError):
        return None


@functools.lru_cache(maxsize=128)
def _parse_spec(specifier: str) -> semantic_version.NpmSpec:
    """Parse an npm-style range, mapping parse failures to SpecifierError."""
    if not specifier:
        raise SpecifierError("Version specifier must not be empty")
    try:
        return semantic_version.NpmSpec(specifier)
    except ValueError as exc:
        raise SpecifierError(f"Invalid version specifier '{specifier}': {exc}") from exc


def validate_specifier(specifier: str) -> None:
    """Raise :class:`SpecifierError` unless ``specifier`` can be matched against."""
    spec_text = (specifier or "").strip()
    exact = _parse_version(spec_text)
    if exact is None or not exact.build:
        _parse_spec(spec_text)


def _allows_prerelease_of(spec_text: str, candidate: semantic_version.Version) -> bool:
    """True if some comparator in ``spec_text`` is a pre-release of the candidate's release."""
    target = (candidate.major, candidate.minor, candidate.patch)
    return any(
        tuple(int(part) for part in m.groups()) == target
        for m in _PRERELEASE_COMPARATOR.finditer(spec_text)
    )


def satisfies(specifier: str, candidate_version: str) -> bool:
    """Return True if ``candidate_version`` falls in the range ``specifier``.

    A specifier that is a full version with build metadata (``11.0.17+8``)
    must match exactly, build included; npm ranges ignore build metadata.
    A pre-release candidate only matches when the range itself names a
    pre-release of the same ``major.minor.patch``, upper bounds included
    (``<17`` never admits ``17.0.0-beta``).
    Malformed candidates never match. Malformed specifiers raise
    :class:`SpecifierError`.
    """
    spec_text = (specifier or "").strip()
    exact = _parse_version(spec_text)
    if exact is not None and exact.build:
        candidate = _parse_version(candidate_version or "")
        return candidate is not None and compare_build(str(exact), str(candidate)) == 0

    spec = _parse_spec(spec_text)
    candidate = _parse_version(candidate_version or "")
    if candidate is None:
        return False
    if candidate.prerelease and not _allows_prerelease_of(spec_text, candidate):
        return False
    return spec.match(candidate)


def _compare_identifiers(a: str, b: str) -> int:
    """Compare two dot-separated identifiers the way semver orders pre-release parts."""
    a_num = bool(_NUMERIC.match(a))
    b_num = bool(_NUMERIC.match(b))
    if a_num and b_num:
        if int(a) != int(b):
            return -1 if int(a) < int(b) else 1
    elif a_num:
        return -1
    elif b_num:
        return 1
    if a == b:
        return 0
    return -1 if a < b else 1


def _compare_builds(a: Tuple[str, ...], b: Tuple[str, ...]) -> int:
    """Order build metadata; a version with build outranks the same one without."""
    for left, right in zip(a, b):
        result = _compare_identifiers(left, right)
        if result:
            return result
    if len(a) == len(b):
        return 0
    return -1 if len(a) < len(b) else 1


def compare_build(a: str, b: str) -> int:
    """Total ascending order over version strings, build metadata included.

    Semver precedence decides first; equal precedence is broken on build
    identifiers, so ``17.0.7+9`` sorts after ``17.0.7+7``. Strings that do
    not parse sort before every valid version and lexically among themselves.
    """
    va = _parse_version(a or "")
    vb = _parse_version(b or "")
    if va is None or vb is None:
        if va is not None:
            return 1
        if vb is not None:
            return -1
        left, right = (a or "").strip(), (b or "").strip()
        return (left > right) - (left < right)

    pa = va.truncate("prerelease")
    pb = vb.truncate("prerelease")
    if pa < pb:
        return -1
    if pa > pb:
        return 1
    return _compare_builds(tuple(va.build), tuple(vb.build))


ranking_key = functools.cmp_to_key(compare_build)


def rank_versions(items: Iterable[T], key: Optional[Callable[[T], str]] = None) -> List[T]:
    """Return ``items`` newest first; equal versions keep their input order.

    ``key`` extracts the version string from each item and defaults to the
    item itself.
    """
    if key is None:
        return sorted(items, key=ranking_key, reverse=True)
    return sorted(items, key=lambda item: ranking_key(key(item)), reverse=True)
