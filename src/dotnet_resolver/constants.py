"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NO_MATCH = 3
    RESOLUTION_ERROR = 4


class HostOS(Enum):
    """Operating systems a .NET SDK build can target.

    Args:
        Enum (string): Operating system identifiers.
    """

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class HostArch(Enum):
    """CPU architectures a .NET SDK build can target.

    Args:
        Enum (string): Architecture identifiers, as used in runtime identifiers.
    """

    X86 = "x86"
    X64 = "x64"
    ARM = "arm"
    ARM64 = "arm64"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for default configuration values; not intended to provide behavior.
    Runtime overrides are applied to a ResolverSettings instance, never here.
    """

    TOOL_NAME = ".NET"
    BIN_NAME = "dotnet"
    VERSION_FILE = "global.json"

    RELEASES_INDEX_URL = (
        "https://dotnetcli.blob.core.windows.net/dotnet/release-metadata/releases-index.json"
    )
    SDK_REPO_URL = "https://github.com/dotnet/sdk"
    TAG_PREFIX = "v"
    INSTALL_SCRIPT_BASE_URL = "https://dot.net/v1/"
    INSTALL_SCRIPT_UNIX = "dotnet-install.sh"
    INSTALL_SCRIPT_WINDOWS = "dotnet-install.ps1"

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    GIT_TIMEOUT = 120  # Timeout in seconds for git ls-remote

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_PREFIX = "DOTNET_RESOLVER_"
    ENV_LOG_LEVEL = "DOTNET_RESOLVER_LOG_LEVEL"
    CONFIG_SECTION = "resolver"

    ALIAS_LATEST = "latest"
    ALIAS_LTS = "lts"
    ALIAS_STS = "sts"
    ALIAS_CANARY = "canary"
