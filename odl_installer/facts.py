# odl_installer/facts.py
# -*- coding: utf-8 -*-
"""
Host fact detection and platform validation.

Facts (OS family, operating system, release, init system) are read from
/etc/os-release and the running init system unless overridden through the
settings, which in turn can come from ODL_-prefixed environment variables.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from common.command_utils import get_symbols, log_installer
from common.system_utils import read_os_release
from odl_installer.config import (
    DEBIAN_OS_IDS,
    LENIENT_RELEASE_OS,
    OS_RELEASE_PATH,
    REDHAT_OS_IDS,
    SUPPORTED_RELEASES,
    SYSTEMD_RUNTIME_DIR,
)
from odl_installer.config_models import AppSettings, InitSystem, OsFamily

module_logger = logging.getLogger(__name__)


class UnsupportedPlatformError(Exception):
    """The host OS family, OS or release is not supported."""


@dataclass(frozen=True)
class HostFacts:
    """Facts about the host that drive branching."""

    os_family: Optional[OsFamily]
    operating_system: str
    major_release: str
    init_system: InitSystem


def os_family_from_release(os_release: Dict[str, str]) -> Optional[OsFamily]:
    """
    Map os-release ID / ID_LIKE values to an OS family, or None.
    """
    candidates = [os_release.get("ID", "").lower()]
    candidates.extend(os_release.get("ID_LIKE", "").lower().split())
    for candidate in candidates:
        if candidate in REDHAT_OS_IDS:
            return OsFamily.REDHAT
        if candidate in DEBIAN_OS_IDS:
            return OsFamily.DEBIAN
    return None


def major_release_from_release(os_release: Dict[str, str]) -> str:
    """
    Return the release the supported-release table is keyed on: the full
    VERSION_ID for Ubuntu ("14.04"), the part before the first dot otherwise.
    """
    version_id = os_release.get("VERSION_ID", "")
    if os_release.get("ID", "").lower() == "ubuntu":
        return version_id
    return version_id.split(".")[0]


def detect_init_system(
    runtime_dir: Union[str, Path] = SYSTEMD_RUNTIME_DIR,
) -> InitSystem:
    """systemd when its runtime directory exists, upstart otherwise."""
    if Path(runtime_dir).is_dir():
        return InitSystem.SYSTEMD
    return InitSystem.UPSTART


def detect_host_facts(
    app_settings: AppSettings,
    os_release_path: Union[str, Path] = OS_RELEASE_PATH,
    current_logger: Optional[logging.Logger] = None,
) -> HostFacts:
    """
    Gather host facts, preferring explicit settings over detection.
    """
    logger_to_use = current_logger if current_logger else module_logger
    os_release = read_os_release(os_release_path)

    os_family = app_settings.os_family or os_family_from_release(os_release)
    init_system = app_settings.init_system or detect_init_system()

    facts = HostFacts(
        os_family=os_family,
        operating_system=os_release.get("ID", "").lower(),
        major_release=major_release_from_release(os_release),
        init_system=init_system,
    )
    logger_to_use.debug(f"Detected host facts: {facts}")
    return facts


def validate_platform(
    facts: HostFacts,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Abort on hosts the installer cannot handle.

    Raises:
        UnsupportedPlatformError: The OS family or OS is unknown, or the OS
            release is unsupported and strict checking is enabled.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if facts.os_family is None:
        raise UnsupportedPlatformError(
            f"Unsupported OS family for OS '{facts.operating_system or 'unknown'}'. "
            f"Supported families: {', '.join(f.value for f in OsFamily)}."
        )

    supported = SUPPORTED_RELEASES.get(facts.operating_system)
    if supported is None:
        raise UnsupportedPlatformError(
            f"Unsupported OS: {facts.operating_system or 'unknown'}. "
            f"Supported: {', '.join(sorted(SUPPORTED_RELEASES))}."
        )

    if facts.major_release in supported:
        return

    message = (
        f"Unsupported OS release: {facts.operating_system} {facts.major_release}. "
        f"Supported releases: {', '.join(supported)}."
    )
    if (
        facts.operating_system in LENIENT_RELEASE_OS
        or not app_settings.strict_os_check
    ):
        log_installer(
            f"{symbols.get('warning', '!')} {message}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return
    raise UnsupportedPlatformError(message)
