# odl_installer/components/package/package_installer.py
# -*- coding: utf-8 -*-
"""
Package installer module.

Installs the controller through the OS package manager.
"""

import logging
from typing import Optional

from common.command_utils import log_installer
from common.package_manager import get_package_manager
from odl_installer.base_component import BaseComponent
from odl_installer.config_models import AppSettings, OsFamily
from odl_installer.facts import HostFacts
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="package",
    metadata={
        "dependencies": ["repository"],
        "subscribes": [],
        "description": "OpenDaylight controller package (rpm or deb)",
    },
)
class PackageInstaller(BaseComponent):
    """
    Installer for the controller package.

    The package brings its own service unit, user and Java dependency.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        facts: HostFacts,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, facts, logger)
        self.package_manager = get_package_manager(
            facts.os_family, logger=self.logger
        )

    @property
    def package_name(self) -> str:
        if self.facts.os_family == OsFamily.REDHAT:
            return self.app_settings.redhat.package_name
        return self.app_settings.debian.package_name

    def install(self) -> bool:
        symbols = self.app_settings.symbols
        log_installer(
            f"{symbols.get('package', '')} Installing package '{self.package_name}'...",
            "info",
            self.logger,
            self.app_settings,
        )
        self.changed = self.package_manager.install(
            [self.package_name], self.app_settings
        )

        if not self.is_installed():
            self.logger.error(
                f"Package '{self.package_name}' is not installed after installation."
            )
            return False
        return True

    def is_installed(self) -> bool:
        return self.package_manager.is_installed(
            self.package_name, self.app_settings
        )

    def configure(self) -> bool:
        """
        Configuration is handled by the configurator components. This method is a no-op.
        """
        return True

    def is_configured(self) -> bool:
        return True
