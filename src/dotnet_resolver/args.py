"""Argument parsing functionality for dotnet-resolver."""

import argparse

from .constants import HostArch, HostOS


def _add_common_options(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)


def _add_platform_options(parser):
    parser.add_argument("--os",
                        dest="HOST_OS",
                        help="Target operating system (default: current host)",
                        action="store",
                        type=str.lower,
                        choices=[o.value for o in HostOS])
    parser.add_argument("--arch",
                        dest="HOST_ARCH",
                        help="Target architecture (default: current host)",
                        action="store",
                        type=str.lower,
                        choices=[a.value for a in HostArch])
    parser.add_argument("--musl",
                        dest="MUSL",
                        help="Select musl builds on Linux (default: detected)",
                        action="store_true",
                        default=None)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="dotnet-resolver",
        description=".NET SDK version resolver",
        add_help=True,
    )
    sub = parser.add_subparsers(dest="action", required=True)

    list_parser = sub.add_parser("list", help="List known SDK versions")
    _add_common_options(list_parser)
    list_parser.add_argument("--include-prerelease",
                             dest="INCLUDE_PRERELEASE",
                             help="Also print preview and rc versions",
                             action="store_true")

    resolve_parser = sub.add_parser("resolve", help="Resolve a version, range or alias")
    _add_common_options(resolve_parser)
    resolve_parser.add_argument("REQUEST",
                                help="Version, partial version, range or alias (lts, sts, latest)")

    range_parser = sub.add_parser("range", help="Translate a global.json into a version range")
    _add_common_options(range_parser)
    range_parser.add_argument("PATH", help="Path to global.json")
    range_parser.add_argument("--resolve",
                              dest="RESOLVE",
                              help="Also resolve the range against known versions",
                              action="store_true")

    download_parser = sub.add_parser("download", help="Print the SDK archive URL for a platform")
    _add_common_options(download_parser)
    _add_platform_options(download_parser)
    download_parser.add_argument("REQUEST", help="Exact SDK version or alias")

    script_parser = sub.add_parser("install-script", help="Fetch the dotnet-install script if missing")
    _add_common_options(script_parser)
    script_parser.add_argument("DIRECTORY", help="Directory to store the script in")
    script_parser.add_argument("--os",
                               dest="HOST_OS",
                               help="Target operating system (default: current host)",
                               action="store",
                               type=str.lower,
                               choices=[o.value for o in HostOS])

    return parser.parse_args(argv)
