# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the installer.

This module includes functions for reading /etc/os-release, reloading
systemd, and managing a service under either systemd or upstart.
"""

import logging
import shlex
from pathlib import Path
from typing import Dict, Optional, Union

from odl_installer.config import UPSTART_JOB_DIR
from odl_installer.config_models import AppSettings, InitSystem

from .command_utils import (
    get_symbols,
    log_installer,
    run_command,
    run_elevated_command,
)

module_logger = logging.getLogger(__name__)


def parse_os_release(content: str) -> Dict[str, str]:
    """
    Parse os-release(5) formatted text into a dictionary.

    Comments and blank lines are skipped; quoted values are unquoted.
    """
    values: Dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw_value = line.partition("=")
        parts = shlex.split(raw_value) if raw_value else []
        values[key.strip()] = parts[0] if parts else ""
    return values


def read_os_release(
    path: Union[str, Path] = "/etc/os-release",
) -> Dict[str, str]:
    """Read and parse the os-release file. A missing file yields {}."""
    os_release_path = Path(path)
    if not os_release_path.is_file():
        module_logger.warning(f"{os_release_path} not found.")
        return {}
    return parse_os_release(os_release_path.read_text(encoding="utf-8"))


def systemd_reload(
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Reload the systemd daemon.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_installer(
        f"{symbols.get('gear', '⚙️')} Reloading systemd daemon...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_elevated_command(
        ["systemctl", "daemon-reload"],
        app_settings,
        current_logger=logger_to_use,
    )
    log_installer(
        f"{symbols.get('success', '✅')} Systemd daemon reloaded.",
        "success",
        logger_to_use,
        app_settings,
    )


def is_service_active(
    service_name: str,
    init_system: InitSystem,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """Return True if the service is currently running."""
    if init_system == InitSystem.SYSTEMD:
        result = run_command(
            ["systemctl", "is-active", "--quiet", f"{service_name}.service"],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=current_logger,
        )
        return result.returncode == 0

    result = run_elevated_command(
        ["initctl", "status", service_name],
        app_settings,
        check=False,
        capture_output=True,
        current_logger=current_logger,
    )
    return result.returncode == 0 and "start/running" in (result.stdout or "")


def is_service_enabled(
    service_name: str,
    init_system: InitSystem,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Return True if the service starts at boot.

    Upstart jobs start at boot through their "start on" stanza, so an
    upstart service counts as enabled when its job file exists.
    """
    if init_system == InitSystem.SYSTEMD:
        result = run_command(
            ["systemctl", "is-enabled", "--quiet", f"{service_name}.service"],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=current_logger,
        )
        return result.returncode == 0
    return (UPSTART_JOB_DIR / f"{service_name}.conf").exists()


def enable_service(
    service_name: str,
    init_system: InitSystem,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    if init_system == InitSystem.SYSTEMD:
        run_elevated_command(
            ["systemctl", "enable", f"{service_name}.service"],
            app_settings,
            current_logger=current_logger,
        )


def start_service(
    service_name: str,
    init_system: InitSystem,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    if init_system == InitSystem.SYSTEMD:
        command = ["systemctl", "start", f"{service_name}.service"]
    else:
        command = ["initctl", "start", service_name]
    run_elevated_command(command, app_settings, current_logger=current_logger)


def restart_service(
    service_name: str,
    init_system: InitSystem,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    if init_system == InitSystem.SYSTEMD:
        command = ["systemctl", "restart", f"{service_name}.service"]
    else:
        command = ["initctl", "restart", service_name]
    run_elevated_command(command, app_settings, current_logger=current_logger)
