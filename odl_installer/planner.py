# odl_installer/planner.py
# -*- coding: utf-8 -*-
"""
Resource planner.

Chooses, from the install method and the host's OS family, the ordered list
of components the orchestrator applies.
"""

import logging
from typing import List, Optional

from odl_installer.config_models import AppSettings, InstallMethod, OsFamily
from odl_installer.facts import HostFacts, UnsupportedPlatformError
from odl_installer.registry import ComponentRegistry

PACKAGE_ROUTE: List[str] = ["repository", "package"]
TARBALL_ROUTE: List[str] = ["java", "account", "archive", "service-unit"]
CONFIGURATORS: List[str] = [
    "karaf-features",
    "rest-port",
    "log-levels",
    "credentials",
    "l3-forwarding",
]
SERVICE: str = "service"


class UnknownInstallMethodError(Exception):
    """The install method is not one the planner knows."""


class ResourcePlanner:
    """Builds the ordered component plan for a host."""

    def __init__(
        self,
        app_settings: AppSettings,
        facts: HostFacts,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.facts = facts
        self.logger = logger or logging.getLogger(__name__)

    def route(self) -> List[str]:
        """
        Components specific to the install method.

        Raises:
            UnknownInstallMethodError: The install method is not known.
            UnsupportedPlatformError: The OS family is not known.
        """
        if self.facts.os_family not in (OsFamily.REDHAT, OsFamily.DEBIAN):
            raise UnsupportedPlatformError(
                f"Unsupported OS family: {self.facts.os_family}"
            )

        method = self.app_settings.install_method
        if method == InstallMethod.PACKAGE:
            return list(PACKAGE_ROUTE)
        if method == InstallMethod.TARBALL:
            return list(TARBALL_ROUTE)
        raise UnknownInstallMethodError(
            f"Unknown install method '{method}'. Expected one of: "
            f"{', '.join(m.value for m in InstallMethod)}."
        )

    def plan(self) -> List[str]:
        """
        Return component names in the order they must be applied.
        """
        names = self.route() + list(CONFIGURATORS)
        if self.app_settings.manage_service:
            names.append(SERVICE)

        ordered = ComponentRegistry.resolve_dependencies(
            names, allowed=set(names)
        )
        self.logger.info(
            f"Planned components ({self.app_settings.install_method.value} "
            f"route on {self.facts.os_family.value}): {', '.join(ordered)}"
        )
        return ordered
