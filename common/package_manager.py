# common/package_manager.py
# -*- coding: utf-8 -*-
"""
Selects the package manager for an OS family.
"""

import logging
from typing import Optional, Union

from common.debian.apt_manager import AptManager
from common.redhat.yum_manager import YumManager
from odl_installer.config_models import OsFamily

PackageManager = Union[AptManager, YumManager]


def get_package_manager(
    os_family: OsFamily, logger: Optional[logging.Logger] = None
) -> PackageManager:
    """
    Return an AptManager for Debian hosts and a YumManager for RedHat hosts.

    Raises:
        ValueError: ``os_family`` has no package manager.
    """
    if os_family == OsFamily.DEBIAN:
        return AptManager(logger=logger)
    if os_family == OsFamily.REDHAT:
        return YumManager(logger=logger)
    raise ValueError(f"No package manager for OS family '{os_family}'")
