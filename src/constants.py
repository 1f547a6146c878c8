"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    CATALOG_ERROR = 3
    NOT_FOUND = 4
    USAGE_ERROR = 5


class Vendor(Enum):
    """Vendors publishing builds through the Adoptium Marketplace.

    Args:
        Enum (string): Vendor path segment used by the marketplace API.
    """

    ADOPTIUM = "adoptium"
    REDHAT = "redhat"
    ALIBABA = "alibaba"
    IBM = "ibm"
    MICROSOFT = "microsoft"
    AZUL = "azul"
    HUAWEI = "huawei"


class JvmImplementation(Enum):
    """JVM implementations known to the marketplace."""

    HOTSPOT = "hotspot"
    OPENJ9 = "openj9"


class ImageType(Enum):
    """Package image types."""

    JDK = "jdk"
    JRE = "jre"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    CATALOG_BASE_URL = "https://marketplace-api.adoptium.net"
    CATALOG_VERSION_RANGE = "[1.0,100.0]"  # every plausible Java version
    CATALOG_PAGE_SIZE = 20
    CATALOG_MAX_PAGES = 1000
    CATALOG_FETCH_DEADLINE_SEC = 300
    SUPPORTED_VENDORS = [v.value for v in Vendor]
    SUPPORTED_JVM_IMPLS = [j.value for j in JvmImplementation]
    SUPPORTED_IMAGE_TYPES = [i.value for i in ImageType]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3

    ENV_CONFIG = "JDKRESOLVE_CONFIG"
    ENV_LOG_LEVEL = "JDKRESOLVE_LOG_LEVEL"
    CONFIG_FILE_NAMES = ["jdkresolve.yml", "jdkresolve.yaml"]


# YAML keys mapped onto Constants attributes, with the type each value is coerced to.
_CONFIG_KEYS = {
    "catalog": {
        "base_url": ("CATALOG_BASE_URL", str),
        "page_size": ("CATALOG_PAGE_SIZE", int),
        "max_pages": ("CATALOG_MAX_PAGES", int),
        "deadline_sec": ("CATALOG_FETCH_DEADLINE_SEC", float),
    },
    "http": {
        "request_timeout": ("REQUEST_TIMEOUT", float),
        "retry_max": ("HTTP_RETRY_MAX", int),
        "retry_base_delay_sec": ("HTTP_RETRY_BASE_DELAY_SEC", float),
    },
}


def _candidate_config_paths() -> list:
    """Return config file locations in lookup order."""
    paths = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        paths.append(env_path)
    paths.extend(os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILE_NAMES)
    xdg = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    paths.extend(os.path.join(xdg, "jdkresolve", name) for name in Constants.CONFIG_FILE_NAMES)
    return paths


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first YAML config found, or the explicit ``path`` when given.

    Returns an empty dict when no file exists.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = [path] if path else _candidate_config_paths()
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        with open(candidate, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded config from %s", candidate)
        return data
    if path:
        raise FileNotFoundError(path)
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply a parsed config mapping onto ``Constants``.

    Unknown keys are ignored; values that cannot be coerced are logged and skipped.
    """
    for section, keys in _CONFIG_KEYS.items():
        values = cfg.get(section)
        if not isinstance(values, dict):
            continue
        for key, (attr, cast) in keys.items():
            if key not in values or values[key] is None:
                continue
            try:
                setattr(Constants, attr, cast(values[key]))
            except (TypeError, ValueError):
                logger.warning("Invalid value for %s.%s: %r", section, key, values[key])
