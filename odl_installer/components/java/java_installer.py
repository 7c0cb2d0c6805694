# odl_installer/components/java/java_installer.py
# -*- coding: utf-8 -*-
"""
Java runtime installer module, used on the tarball route where no package
pulls Java in as a dependency.
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
    name="java",
    metadata={
        "dependencies": [],
        "subscribes": [],
        "description": "Java runtime for the extracted controller",
    },
)
class JavaInstaller(BaseComponent):
    """
    Installer for the Java runtime package.
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
    def java_package(self) -> str:
        if self.facts.os_family == OsFamily.REDHAT:
            return self.app_settings.redhat.java_package
        return self.app_settings.debian.java_package

    def install(self) -> bool:
        log_installer(
            f"{self.app_settings.symbols.get('package', '')} Installing Java runtime '{self.java_package}'...",
            "info",
            self.logger,
            self.app_settings,
        )
        self.changed = self.package_manager.install(
            [self.java_package], self.app_settings
        )
        return self.is_installed()

    def is_installed(self) -> bool:
        return self.package_manager.is_installed(
            self.java_package, self.app_settings
        )

    def configure(self) -> bool:
        return True

    def is_configured(self) -> bool:
        return True
