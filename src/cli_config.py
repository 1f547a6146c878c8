"""CLI configuration overrides for runtime tunables (catalog endpoint, paging, deadline).

Loads the YAML config file first and then applies CLI flags, which have the
highest precedence.
"""

from __future__ import annotations

import logging

from constants import Constants, _load_yaml_config, apply_config

logger = logging.getLogger(__name__)


def load_config(args) -> None:
    """Apply the YAML config (explicit ``--config`` or the default locations).

    Raises:
        FileNotFoundError: an explicit ``--config`` path does not exist.
        yaml.YAMLError: the config file cannot be parsed.
    """
    cfg = _load_yaml_config(getattr(args, "CONFIG", None))
    if cfg:
        apply_config(cfg)


def apply_catalog_overrides(args) -> None:
    """Apply CLI overrides for catalog tunables onto ``Constants``."""
    if getattr(args, "BASE_URL", None):
        Constants.CATALOG_BASE_URL = args.BASE_URL
    if getattr(args, "PAGE_SIZE", None) is not None:
        Constants.CATALOG_PAGE_SIZE = int(args.PAGE_SIZE)
    if getattr(args, "MAX_PAGES", None) is not None:
        Constants.CATALOG_MAX_PAGES = int(args.MAX_PAGES)
    if getattr(args, "DEADLINE", None) is not None:
        Constants.CATALOG_FETCH_DEADLINE_SEC = float(args.DEADLINE)
    logger.debug(
        "Catalog settings: base_url=%s page_size=%s max_pages=%s deadline=%ss",
        Constants.CATALOG_BASE_URL,
        Constants.CATALOG_PAGE_SIZE,
        Constants.CATALOG_MAX_PAGES,
        Constants.CATALOG_FETCH_DEADLINE_SEC,
    )
