"""Argument parsing functionality for jdkresolve."""

import argparse
from constants import Constants


def _positive_int(text):
    """argparse type for integers greater than zero."""
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _non_negative_float(text):
    """argparse type for floats >= 0."""
    value = float(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {text}")
    return value


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="jdkresolve",
        description=(
            "jdkresolve - Resolve a Java version specifier to a downloadable build "
            "from the Adoptium Marketplace"
        ),
        add_help=True,
    )

    parser.add_argument("-v", "--java-version",
                        dest="VERSION",
                        help="Version specifier, i.e: 17, 16.0.x, 11.0.17, '>=11 <17'",
                        action="store", type=str,
                        required=True)
    parser.add_argument("--vendor",
                        dest="VENDOR",
                        help="Marketplace vendor (default: adoptium)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_VENDORS,
                        default="adoptium")
    parser.add_argument("--os",
                        dest="OS",
                        help="Target operating system (default: detected from the running host)",
                        action="store", type=str)
    parser.add_argument("--arch",
                        dest="ARCH",
                        help="Target architecture (default: detected from the running host)",
                        action="store", type=str)
    parser.add_argument("--image-type",
                        dest="IMAGE_TYPE",
                        help="Package image type (default: jdk)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_IMAGE_TYPES,
                        default="jdk")
    parser.add_argument("--jvm-impl",
                        dest="JVM_IMPL",
                        help="JVM implementation (default: the vendor's own)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_JVM_IMPLS)
    parser.add_argument("--fallback-file",
                        dest="FALLBACK_FILE",
                        help="JSON file of extra releases, in marketplace response format",
                        action="store", type=str)

    parser.add_argument("--base-url",
                        dest="BASE_URL",
                        help=f"Marketplace API base URL (default: {Constants.CATALOG_BASE_URL})",
                        action="store", type=str)
    parser.add_argument("--page-size",
                        dest="PAGE_SIZE",
                        help="Records requested per catalog page",
                        action="store", type=_positive_int)
    parser.add_argument("--max-pages",
                        dest="MAX_PAGES",
                        help="Abort if the catalog has not ended after this many pages",
                        action="store", type=_positive_int)
    parser.add_argument("--deadline",
                        dest="DEADLINE",
                        help="Overall catalog fetch deadline in seconds (0 disables)",
                        action="store", type=_non_negative_float)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store", type=str)

    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json, default: text)",
                        action="store",
                        type=str.lower,
                        choices=["text", "json"],
                        default="text")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)
