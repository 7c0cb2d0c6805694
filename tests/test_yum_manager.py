# tests/test_yum_manager.py
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from common.redhat.yum_manager import YumManager


@pytest.fixture
def yum_manager():
    mock_logger = MagicMock()
    mock_app_settings = MagicMock()
    with (
        patch("common.redhat.yum_manager.run_elevated_command") as mock_run_elevated,
        patch("common.redhat.yum_manager.run_command") as mock_run_cmd,
        patch("common.redhat.yum_manager.command_exists", return_value=True),
    ):
        yield (
            YumManager(logger=mock_logger),
            mock_run_elevated,
            mock_run_cmd,
            mock_app_settings,
        )


def test_falls_back_to_dnf():
    with patch(
        "common.redhat.yum_manager.command_exists",
        side_effect=lambda name: name == "dnf",
    ):
        assert YumManager(logger=MagicMock()).tool == "dnf"


def test_no_package_tool():
    with patch("common.redhat.yum_manager.command_exists", return_value=False):
        with pytest.raises(FileNotFoundError):
            YumManager(logger=MagicMock())


def test_is_installed(yum_manager):
    manager, _, mock_run_cmd, settings = yum_manager
    assert manager.is_installed("opendaylight", settings) is True
    assert mock_run_cmd.call_args.args[0] == ["rpm", "-q", "opendaylight"]

    mock_run_cmd.side_effect = subprocess.CalledProcessError(1, "rpm")
    assert manager.is_installed("opendaylight", settings) is False


def test_install_only_missing(yum_manager):
    manager, mock_run_elevated, mock_run_cmd, settings = yum_manager
    mock_run_cmd.side_effect = [
        MagicMock(),
        subprocess.CalledProcessError(1, "rpm"),
    ]

    assert manager.install(["java-1.7.0-openjdk", "opendaylight"], settings) is True
    mock_run_elevated.assert_called_once_with(
        ["yum", "install", "-y", "opendaylight"],
        settings,
        current_logger=manager.logger,
    )


def test_install_nothing_missing(yum_manager):
    manager, mock_run_elevated, _, settings = yum_manager
    assert manager.install("opendaylight", settings) is False
    mock_run_elevated.assert_not_called()


def test_add_repository_cleans_metadata_on_change(yum_manager):
    manager, mock_run_elevated, _, settings = yum_manager
    with patch(
        "common.redhat.yum_manager.write_file_content", return_value=True
    ) as mock_write:
        assert manager.add_repository("opendaylight-helium", "[x]\n", settings) is True

    assert mock_write.call_args.args[0].name == "opendaylight-helium.repo"
    assert mock_write.call_args.kwargs["mode"] == "0644"
    mock_run_elevated.assert_called_once_with(
        ["yum", "clean", "metadata"], settings, current_logger=manager.logger
    )


def test_add_repository_unchanged(yum_manager):
    manager, mock_run_elevated, _, settings = yum_manager
    with patch("common.redhat.yum_manager.write_file_content", return_value=False):
        assert manager.add_repository("opendaylight-helium", "[x]\n", settings) is False
    mock_run_elevated.assert_not_called()
