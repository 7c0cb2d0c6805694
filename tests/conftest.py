# tests/conftest.py
import logging
import os
import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from odl_installer.config_models import (
    AppSettings,
    InitSystem,
    InstallMethod,
    OsFamily,
)
from odl_installer.facts import HostFacts


@pytest.fixture(autouse=True)
def _clear_odl_env(monkeypatch):
    """Keep ODL_* variables from the developer's shell out of the settings."""
    for key in list(os.environ):
        if key.startswith("ODL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def odl_home(tmp_path) -> Path:
    home = tmp_path / "opt" / "opendaylight-0.2.2"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def app_settings(odl_home) -> AppSettings:
    """Settings pointing the controller home at a temporary directory."""
    return AppSettings(home_dir=odl_home)


@pytest.fixture
def tarball_settings(odl_home) -> AppSettings:
    return AppSettings(home_dir=odl_home, install_method=InstallMethod.TARBALL)


@pytest.fixture
def redhat_facts() -> HostFacts:
    return HostFacts(
        os_family=OsFamily.REDHAT,
        operating_system="centos",
        major_release="7",
        init_system=InitSystem.SYSTEMD,
    )


@pytest.fixture
def debian_facts() -> HostFacts:
    return HostFacts(
        os_family=OsFamily.DEBIAN,
        operating_system="ubuntu",
        major_release="14.04",
        init_system=InitSystem.UPSTART,
    )


def _fake_elevated(command, app_settings=None, check=True, capture_output=False,
                   cmd_input=None, current_logger=None, **kwargs):
    """Carry out the file commands the installer runs with sudo, locally."""
    tool = command[0]
    if tool == "tee":
        Path(command[1]).write_text(cmd_input or "", encoding="utf-8")
    elif tool == "mkdir":
        Path(command[-1]).mkdir(parents=True, exist_ok=True)
    elif tool == "test":
        if not Path(command[-1]).is_file():
            raise subprocess.CalledProcessError(1, command)
    elif tool == "cp":
        shutil.copy2(command[-2], command[-1])
    elif tool == "cat":
        return subprocess.CompletedProcess(
            command, 0, stdout=Path(command[1]).read_text(encoding="utf-8"), stderr=""
        )
    return subprocess.CompletedProcess(command, 0, stdout="", stderr="")


@pytest.fixture
def fake_elevated(mocker):
    """
    Patch the elevated runner used by file_utils so writes land on the local
    filesystem. Returns the mock for call inspection.
    """
    return mocker.patch(
        "common.file_utils.run_elevated_command", side_effect=_fake_elevated
    )
