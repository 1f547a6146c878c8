"""jdkresolve - Resolve a Java version specifier to a concrete marketplace build.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

import yaml

from constants import ExitCodes
from common.errors import (
    CatalogError,
    CatalogTimeoutError,
    NetworkError,
    NotFoundError,
    SpecifierError,
)
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import apply_catalog_overrides, load_config
from catalog.models import CatalogQuery
from catalog.platform import detect_architecture, detect_platform, map_architecture, map_platform
from catalog.vendors import get_profile, load_fallback
from versioning.resolver import PackageResolver

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def build_query(args) -> CatalogQuery:
    """Build the catalog query from CLI arguments, filling platform defaults."""
    profile = get_profile(args.VENDOR)
    os_name = map_platform(args.OS) if args.OS else detect_platform()
    arch = map_architecture(args.ARCH) if args.ARCH else detect_architecture()
    jvm_impl = args.JVM_IMPL or profile.jvm_impl.value
    return CatalogQuery(
        vendor=profile.vendor.value,
        os=os_name,
        arch=arch,
        image_type=args.IMAGE_TYPE,
        jvm_impl=jvm_impl,
    )


def format_result(candidate, query, output_format) -> str:
    """Render the resolved candidate for stdout."""
    if output_format == "json":
        return json.dumps({
            "version": candidate.version,
            "url": candidate.url,
            "vendor": query.vendor,
            "distribution": get_profile(query.vendor).display_name,
            "os": query.os,
            "arch": query.arch,
            "image_type": query.image_type,
            "jvm_impl": query.jvm_impl,
        }, indent=2)
    return f"{candidate.version} {candidate.url}"


def run(args) -> int:
    """Resolve according to parsed ``args`` and return the process exit code."""
    try:
        load_config(args)
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Failed to load config: %s", exc)
        return ExitCodes.FILE_ERROR.value
    apply_catalog_overrides(args)

    query = build_query(args)
    fallback = []
    if args.FALLBACK_FILE:
        try:
            fallback = load_fallback(args.FALLBACK_FILE)
        except OSError as exc:
            logger.error("Cannot read fallback file: %s", exc)
            return ExitCodes.FILE_ERROR.value
        except CatalogError as exc:
            logger.error("%s", exc)
            return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "Resolving '%s' for %s",
            args.VERSION,
            query,
            extra=extra_context(event="function_entry", component="cli", action="run")
        )

    resolver = PackageResolver(query, fallback)
    try:
        candidate = resolver.resolve(args.VERSION)
    except SpecifierError as exc:
        logger.error("%s", exc)
        return ExitCodes.USAGE_ERROR.value
    except CatalogTimeoutError as exc:
        logger.error("%s", exc)
        return ExitCodes.CONNECTION_ERROR.value
    except NetworkError as exc:
        logger.error("Catalog connection error: %s", exc)
        return ExitCodes.CONNECTION_ERROR.value
    except CatalogError as exc:
        logger.error("Catalog returned malformed data: %s", exc)
        return ExitCodes.CATALOG_ERROR.value
    except NotFoundError as exc:
        logger.error("%s", exc)
        return ExitCodes.NOT_FOUND.value

    logger.info(
        "Resolved Java %s (%s) from %s",
        candidate.version,
        get_profile(query.vendor).display_name,
        candidate.url,
    )
    if not args.QUIET:
        print(format_result(candidate, query, args.OUTPUT_FORMAT))
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
