"""Tests for the install script cache."""

import os
from unittest.mock import patch

import pytest

from dotnet_resolver.config import ResolverSettings
from dotnet_resolver.constants import HostOS
from dotnet_resolver.errors import FetchError
from dotnet_resolver.registry.install_script import ensure_install_script, install_script_name

SETTINGS = ResolverSettings(install_script_base_url="https://scripts.test/v1/")


class TestInstallScript:
    """Download-once behavior."""

    def test_script_names(self):
        assert install_script_name(HostOS.WINDOWS) == "dotnet-install.ps1"
        assert install_script_name(HostOS.LINUX) == "dotnet-install.sh"
        assert install_script_name(HostOS.MACOS) == "dotnet-install.sh"

    @patch("dotnet_resolver.registry.install_script.get_text")
    def test_downloads_when_missing(self, mock_get_text, tmp_path):
        mock_get_text.return_value = "#!/bin/sh\necho install\n"
        path = ensure_install_script(tmp_path / "cache", HostOS.LINUX, SETTINGS)
        assert path == tmp_path / "cache" / "dotnet-install.sh"
        assert path.read_text(encoding="utf-8") == "#!/bin/sh\necho install\n"
        assert mock_get_text.call_args[0][0] == "https://scripts.test/v1/dotnet-install.sh"
        if os.name == "posix":
            assert os.access(path, os.X_OK)

    @patch("dotnet_resolver.registry.install_script.get_text")
    def test_existing_script_is_not_refetched(self, mock_get_text, tmp_path):
        existing = tmp_path / "dotnet-install.ps1"
        existing.write_text("stale", encoding="utf-8")
        path = ensure_install_script(tmp_path, HostOS.WINDOWS, SETTINGS)
        assert path == existing
        assert path.read_text(encoding="utf-8") == "stale"
        mock_get_text.assert_not_called()

    @patch("dotnet_resolver.registry.install_script.get_text")
    def test_download_failure(self, mock_get_text, tmp_path):
        mock_get_text.side_effect = FetchError("Failed to retrieve install script dotnet-install.sh")
        with pytest.raises(FetchError):
            ensure_install_script(tmp_path, HostOS.LINUX, SETTINGS)
        assert not (tmp_path / "dotnet-install.sh").exists()

    @patch("dotnet_resolver.registry.install_script.get_text")
    def test_failed_write_leaves_no_script(self, mock_get_text, tmp_path):
        """A failed write must not leave a file that later calls would reuse."""
        mock_get_text.return_value = "#!/bin/sh\necho install\n"
        with patch("dotnet_resolver.registry.install_script.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(FetchError):
                ensure_install_script(tmp_path, HostOS.LINUX, SETTINGS)
        assert list(tmp_path.iterdir()) == []

        path = ensure_install_script(tmp_path, HostOS.LINUX, SETTINGS)
        assert mock_get_text.call_count == 2
        assert path.read_text(encoding="utf-8") == "#!/bin/sh\necho install\n"
