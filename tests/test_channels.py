"""Tests for alias resolution and SDK build selection."""

import pytest
import semantic_version

from dotnet_resolver.errors import AssetNotFoundError, ReleaseNotFoundError, VersionParseError
from dotnet_resolver.versioning.channels import (
    channel_version_of,
    find_channel,
    find_sdk,
    is_known_alias,
    iter_channel_sdks,
    resolve_alias,
    select_asset,
    select_channel,
)
from dotnet_resolver.versioning.models import ChannelRelease, ReleaseChannel, ReleaseFile, ReleaseSdk

V = semantic_version.Version


def _channel(version, latest, release_type):
    return ReleaseChannel(
        channel_version=version,
        latest_sdk=latest,
        release_type=release_type,
        releases_json=f"https://example.test/{version}/releases.json",
    )


CHANNELS = [
    _channel("9.0", "9.0.100", "sts"),
    _channel("8.0", "8.0.100", "lts"),
    _channel("7.0", "7.0.410", "sts"),
    _channel("6.0", "6.0.428", "lts"),
]


def _file(name, rid):
    return ReleaseFile(name=name, url=f"https://download.test/{name}", hash="abc123", rid=rid)


SDK_800 = ReleaseSdk(
    version="8.0.100",
    version_display="8.0.100",
    files=(
        ReleaseFile(name="dotnet-sdk-rhel.6-x64.tar.gz", url="https://download.test/rhel", hash="x"),
        _file("dotnet-sdk-linux-x64.tar.gz", "linux-x64"),
        _file("dotnet-sdk-linux-musl-x64.tar.gz", "linux-musl-x64"),
        _file("dotnet-sdk-osx-arm64.pkg", "osx-arm64"),
        _file("dotnet-sdk-osx-arm64.tar.gz", "osx-arm64"),
        _file("dotnet-sdk-win-x64.exe", "win-x64"),
        _file("dotnet-sdk-win-x64.zip", "win-x64"),
    ),
)


class TestResolveAlias:
    """Alias to channel to version."""

    def test_lts(self):
        assert resolve_alias("lts", CHANNELS) == V("8.0.100")

    def test_sts(self):
        assert resolve_alias("sts", CHANNELS) == V("9.0.100")

    def test_latest_is_first_channel(self):
        assert resolve_alias("latest", CHANNELS) == V("9.0.100")

    def test_case_insensitive(self):
        channels = [_channel("8.0", "8.0.100", "LTS")]
        assert resolve_alias("Lts", channels) == V("8.0.100")

    def test_unknown_alias(self):
        assert resolve_alias("edge", CHANNELS) is None

    def test_no_matching_channel(self):
        assert resolve_alias("lts", [_channel("9.0", "9.0.100", "sts")]) is None

    def test_latest_of_empty_index(self):
        assert select_channel("latest", []) is None

    def test_corrupt_latest_sdk_is_an_error(self):
        with pytest.raises(VersionParseError):
            resolve_alias("lts", [_channel("8.0", "eight", "lts")])

    def test_known_aliases(self):
        assert is_known_alias("LATEST")
        assert is_known_alias("sts")
        assert not is_known_alias("canary")


class TestChannelLookup:
    """Channel keys and release flattening."""

    def test_channel_version_of(self):
        assert channel_version_of(V("8.0.304")) == "8.0"

    def test_find_channel(self):
        assert find_channel(CHANNELS, "7.0").latest_sdk == "7.0.410"
        assert find_channel(CHANNELS, "5.0") is None

    def test_iter_prefers_sdks_list(self):
        other = ReleaseSdk(version="8.0.101")
        releases = [
            ChannelRelease(sdk=other, sdks=(other, SDK_800)),
            ChannelRelease(sdk=ReleaseSdk(version="8.0.100-rc.2.23502.2")),
        ]
        versions = [sdk.version for sdk in iter_channel_sdks(releases)]
        assert versions == ["8.0.101", "8.0.100", "8.0.100-rc.2.23502.2"]

    def test_find_sdk(self):
        releases = [ChannelRelease(sdk=SDK_800)]
        assert find_sdk(releases, V("8.0.100")) is SDK_800

    def test_find_sdk_missing(self):
        with pytest.raises(ReleaseNotFoundError) as exc:
            find_sdk([ChannelRelease(sdk=SDK_800)], V("8.0.101"))
        assert "8.0.101" in str(exc.value)


class TestSelectAsset:
    """Matching files by runtime identifier and extension."""

    def test_linux(self):
        asset = select_asset(SDK_800, "linux-x64", ".tar.gz")
        assert asset.filename == "dotnet-sdk-linux-x64.tar.gz"
        assert asset.url == "https://download.test/dotnet-sdk-linux-x64.tar.gz"
        assert asset.checksum == "abc123"

    def test_musl(self):
        assert select_asset(SDK_800, "linux-musl-x64", ".tar.gz").filename == "dotnet-sdk-linux-musl-x64.tar.gz"

    def test_skips_other_extensions(self):
        assert select_asset(SDK_800, "osx-arm64", ".tar.gz").filename == "dotnet-sdk-osx-arm64.tar.gz"
        assert select_asset(SDK_800, "win-x64", ".zip").filename == "dotnet-sdk-win-x64.zip"

    def test_no_match_names_rid(self):
        with pytest.raises(AssetNotFoundError) as exc:
            select_asset(SDK_800, "linux-arm", ".tar.gz")
        assert exc.value.rid == "linux-arm"
        assert str(exc.value) == "Unable to install .NET, unable to find build fitting linux-arm."
