"""dotnet-resolver - .NET SDK version resolution from the command line.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from .args import parse_args
from .common.logging_utils import configure_logging
from .config import load_settings
from .constants import ExitCodes, HostArch, HostOS
from .errors import ConstraintFileError, FetchError, ResolverError
from .platform_support import detect_host, is_musl
from .registry.install_script import ensure_install_script
from .versioning.matcher import pick_highest
from .versioning.service import (
    list_known_versions,
    parse_constraint_file,
    resolve_version,
    select_download_asset,
)

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


def _host_platform(args):
    """OS, architecture and musl flag from the CLI, filling gaps from the host."""
    host_os = HostOS(args.HOST_OS) if getattr(args, "HOST_OS", None) else None
    host_arch = HostArch(args.HOST_ARCH) if getattr(args, "HOST_ARCH", None) else None
    musl = getattr(args, "MUSL", None)
    if host_os is None or host_arch is None:
        detected_os, detected_arch, detected_musl = detect_host()
        host_os = host_os or detected_os
        host_arch = host_arch or detected_arch
        if musl is None:
            musl = detected_musl and host_os == detected_os
    elif musl is None:
        musl = host_os == HostOS.LINUX and is_musl()
    return host_os, host_arch, bool(musl)


def run_list(args, settings) -> int:
    listing = list_known_versions(settings)
    for version in listing.versions:
        if version.prerelease and not args.INCLUDE_PRERELEASE:
            continue
        print(version)
    if listing.latest is not None:
        logger.info("latest -> %s", listing.latest)
    return ExitCodes.SUCCESS.value


def run_resolve(args, settings) -> int:
    print(resolve_version(args.REQUEST, settings))
    return ExitCodes.SUCCESS.value


def run_range(args, settings) -> int:
    try:
        with open(args.PATH, encoding="utf-8") as handle:
            content = handle.read()
    except OSError as e:
        logger.error("Unable to read %s: %s", args.PATH, e)
        return ExitCodes.FILE_ERROR.value

    version_range = parse_constraint_file(args.PATH, content)
    if version_range is None:
        logger.warning("No SDK constraint found in %s", args.PATH)
        return ExitCodes.NO_MATCH.value

    print(version_range)
    if args.RESOLVE:
        version = pick_highest(version_range, list_known_versions(settings).versions)
        if version is None:
            logger.error("No known %s version satisfies %s", settings.tool_name, version_range)
            return ExitCodes.NO_MATCH.value
        print(version)
    return ExitCodes.SUCCESS.value


def run_download(args, settings) -> int:
    host_os, host_arch, musl = _host_platform(args)
    asset = select_download_asset(args.REQUEST, host_os, host_arch, settings, musl=musl)
    print(json.dumps({"url": asset.url, "filename": asset.filename, "checksum": asset.checksum}, indent=2))
    return ExitCodes.SUCCESS.value


def run_install_script(args, settings) -> int:
    host_os = HostOS(args.HOST_OS) if args.HOST_OS else detect_host()[0]
    print(ensure_install_script(args.DIRECTORY, host_os, settings))
    return ExitCodes.SUCCESS.value


_ACTIONS = {
    "list": run_list,
    "resolve": run_resolve,
    "range": run_range,
    "download": run_download,
    "install-script": run_install_script,
}


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        settings = load_settings(args.CONFIG)
        return _ACTIONS[args.action](args, settings)
    except FetchError as e:
        logger.error("%s", e)
        return ExitCodes.CONNECTION_ERROR.value
    except ConstraintFileError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value
    except ResolverError as e:
        logger.error("%s", e)
        return ExitCodes.RESOLUTION_ERROR.value


if __name__ == "__main__":
    sys.exit(main())
