# tests/test_apt_manager.py
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from common.debian.apt_manager import AptManager


@pytest.fixture
def apt_manager():
    """Fixture to initialize AptManager with mocked dependencies."""
    mock_logger = MagicMock()
    mock_app_settings = MagicMock()
    with (
        patch(
            "common.debian.apt_manager.run_elevated_command"
        ) as mock_run_elevated,
        patch("common.debian.apt_manager.run_command") as mock_run_cmd,
        patch("common.debian.apt_manager.command_exists", return_value=True),
    ):
        manager = AptManager(logger=mock_logger)
        yield (
            manager,
            mock_logger,
            mock_run_elevated,
            mock_run_cmd,
            mock_app_settings,
        )


def test_init_without_apt_get():
    with patch("common.debian.apt_manager.command_exists", return_value=False):
        with pytest.raises(FileNotFoundError):
            AptManager(logger=MagicMock())


def test_install_new_package(apt_manager):
    """Test installation of a new package."""
    manager, logger, mock_run_elevated, mock_run_cmd, mock_app_settings = (
        apt_manager
    )
    mock_run_cmd.side_effect = subprocess.CalledProcessError(1, "cmd")

    assert manager.install(["opendaylight"], mock_app_settings, update_first=False) is True

    logger.info.assert_any_call("Marking package for installation: opendaylight")
    mock_run_elevated.assert_called_once_with(
        ["apt-get", "install", "-yq", "opendaylight"],
        mock_app_settings,
        current_logger=logger,
    )


def test_install_updates_first(apt_manager):
    manager, logger, mock_run_elevated, mock_run_cmd, mock_app_settings = (
        apt_manager
    )
    mock_run_cmd.return_value = MagicMock(stdout="not-installed")

    manager.install("openjdk-7-jre-headless", mock_app_settings)

    commands = [c.args[0] for c in mock_run_elevated.call_args_list]
    assert commands == [
        ["apt-get", "update", "-yq"],
        ["apt-get", "install", "-yq", "openjdk-7-jre-headless"],
    ]


def test_install_already_installed(apt_manager):
    """Test installation of an already installed package."""
    manager, logger, mock_run_elevated, mock_run_cmd, mock_app_settings = (
        apt_manager
    )
    mock_run_cmd.return_value = MagicMock(stdout="installed")

    assert manager.install(["opendaylight"], mock_app_settings) is False

    logger.info.assert_any_call(
        "Package 'opendaylight' is already installed. Skipping."
    )
    mock_run_elevated.assert_not_called()


def test_install_failure_propagates(apt_manager):
    manager, _, mock_run_elevated, mock_run_cmd, mock_app_settings = apt_manager
    mock_run_cmd.side_effect = subprocess.CalledProcessError(1, "dpkg-query")
    mock_run_elevated.side_effect = subprocess.CalledProcessError(100, "apt-get")

    with pytest.raises(subprocess.CalledProcessError):
        manager.install(["opendaylight"], mock_app_settings, update_first=False)


def test_ppa_source_stem():
    assert AptManager.ppa_source_stem("ppa:odl-team/helium") == "odl-team-ubuntu-helium"


def test_add_ppa_when_missing(apt_manager, tmp_path):
    manager, _, mock_run_elevated, _, mock_app_settings = apt_manager
    with patch("common.debian.apt_manager.APT_SOURCES_DIR", tmp_path):
        assert manager.add_ppa("ppa:odl-team/helium", mock_app_settings) is True

    commands = [c.args[0] for c in mock_run_elevated.call_args_list]
    assert commands == [
        ["add-apt-repository", "-y", "ppa:odl-team/helium"],
        ["apt-get", "update", "-yq"],
    ]


def test_add_ppa_already_configured(apt_manager, tmp_path):
    manager, _, mock_run_elevated, _, mock_app_settings = apt_manager
    (tmp_path / "odl-team-ubuntu-helium-trusty.list").write_text("deb ...")
    with patch("common.debian.apt_manager.APT_SOURCES_DIR", tmp_path):
        assert manager.add_ppa("ppa:odl-team/helium", mock_app_settings) is False
    mock_run_elevated.assert_not_called()
