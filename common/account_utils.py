# common/account_utils.py
# -*- coding: utf-8 -*-
"""
Helpers to check for and create the system group and user that own the
controller on the tarball route.
"""

import grp
import logging
import pwd
from pathlib import Path
from typing import Optional, Union

from odl_installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer, run_elevated_command

module_logger = logging.getLogger(__name__)

NOLOGIN_SHELL = "/sbin/nologin"


def group_exists(group_name: str) -> bool:
    try:
        grp.getgrnam(group_name)
    except KeyError:
        return False
    return True


def user_exists(user_name: str) -> bool:
    try:
        pwd.getpwnam(user_name)
    except KeyError:
        return False
    return True


def ensure_system_group(
    group_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Create ``group_name`` as a system group unless it already exists.

    Returns:
        bool: True if the group was created.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if group_exists(group_name):
        logger_to_use.debug(f"Group '{group_name}' already exists.")
        return False

    symbols = get_symbols(app_settings)
    run_elevated_command(
        ["groupadd", "--system", group_name],
        app_settings,
        current_logger=logger_to_use,
    )
    log_installer(
        f"{symbols.get('success', '✅')} Created system group '{group_name}'.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def ensure_system_user(
    user_name: str,
    group_name: str,
    home_dir: Union[str, Path],
    app_settings: Optional[AppSettings],
    shell: str = NOLOGIN_SHELL,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Create ``user_name`` as a system user whose primary group is
    ``group_name`` and whose home is ``home_dir``. The home directory is not
    created here; it comes from the extracted archive.

    Returns:
        bool: True if the user was created.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if user_exists(user_name):
        logger_to_use.debug(f"User '{user_name}' already exists.")
        return False

    symbols = get_symbols(app_settings)
    run_elevated_command(
        [
            "useradd",
            "--system",
            "--gid",
            group_name,
            "--home-dir",
            str(home_dir),
            "--no-create-home",
            "--shell",
            shell,
            user_name,
        ],
        app_settings,
        current_logger=logger_to_use,
    )
    log_installer(
        f"{symbols.get('success', '✅')} Created system user '{user_name}'.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True
