"""Normalization of catalog version strings into canonical semver form.

Catalog entries encode versions inconsistently: some vendors publish
``16.0.2.7.1`` where the trailing numbers are really build metadata, others
prefix the string with ``jdk-`` or omit the minor and patch components
(``17+35``). Comparison is only well defined once every string has the
``MAJOR.MINOR.PATCH[-PRE][+BUILD]`` shape.
"""
from __future__ import annotations

import re

_JDK_PREFIX = re.compile(r"^jdk-?(?=\d)", re.IGNORECASE)
_VERSION_SHAPE = re.compile(
    r"^(?P<core>\d+(?:\.\d+)*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def normalize_version(raw: str) -> str:
    """Return ``raw`` rewritten as ``MAJOR.MINOR.PATCH[-PRE][+BUILD]``.

    - a leading ``jdk-``/``jdk`` prefix is removed
    - missing minor/patch components are padded with ``0``
    - numeric components beyond the third move into the build metadata,
      ahead of any build already present (``16.0.2.7.1`` -> ``16.0.2+7.1``)
    - leading zeros in core components are dropped
    - pre-release identifiers are preserved

    Strings without a numeric core are returned stripped but otherwise
    untouched; the matcher treats them as non-matching.
    """
    if raw is None:
        return ""
    text = _JDK_PREFIX.sub("", raw.strip())
    match = _VERSION_SHAPE.match(text)
    if not match:
        return text

    core = [str(int(part)) for part in match.group("core").split(".")]
    build_parts = core[3:]
    core = (core + ["0", "0"])[:3]
    if match.group("build"):
        build_parts.append(match.group("build"))

    result = ".".join(core)
    if match.group("pre"):
        result += "-" + match.group("pre")
    if build_parts:
        result += "+" + ".".join(build_parts)
    return result
