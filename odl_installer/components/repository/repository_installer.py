# odl_installer/components/repository/repository_installer.py
# -*- coding: utf-8 -*-
"""
Repository installer module.

Registers the package repository that carries the controller package: a yum
.repo file on RedHat hosts, a PPA on Debian hosts.
"""

import logging
from typing import Optional

from common.command_utils import log_installer
from common.file_utils import read_file_content
from common.package_manager import get_package_manager
from common.template_utils import render_template
from odl_installer.base_component import BaseComponent
from odl_installer.config import SCRIPT_VERSION
from odl_installer.config_models import AppSettings, OsFamily
from odl_installer.facts import HostFacts
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="repository",
    metadata={
        "dependencies": [],
        "subscribes": [],
        "description": "Package repository (yum repo or PPA) carrying the controller",
    },
)
class RepositoryInstaller(BaseComponent):
    """
    Installer for the controller's package repository.
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

    def install(self) -> bool:
        """
        Register the repository for the host's OS family.
        """
        symbols = self.app_settings.symbols
        log_installer(
            f"{symbols.get('step', '')} Registering the OpenDaylight package repository...",
            "info",
            self.logger,
            self.app_settings,
        )
        if self.facts.os_family == OsFamily.REDHAT:
            self.changed = self.package_manager.add_repository(
                self.app_settings.redhat.repo_name,
                self._render_yum_repo(),
                self.app_settings,
            )
        else:
            self.changed = self.package_manager.add_ppa(
                self.app_settings.debian.ppa, self.app_settings
            )
        return True

    def is_installed(self) -> bool:
        if self.facts.os_family == OsFamily.REDHAT:
            repo_path = self.package_manager.repo_file_path(
                self.app_settings.redhat.repo_name
            )
            return (
                read_file_content(repo_path, self.app_settings, self.logger)
                == self._render_yum_repo()
            )
        return self.package_manager.has_ppa(self.app_settings.debian.ppa)

    def configure(self) -> bool:
        """
        Nothing to configure for a repository. This method is a no-op.
        """
        return True

    def is_configured(self) -> bool:
        return True

    def _render_yum_repo(self) -> str:
        redhat = self.app_settings.redhat
        return render_template(
            self.app_settings.templates.yum_repo,
            {
                "repo_name": redhat.repo_name,
                "repo_description": redhat.repo_description,
                "baseurl": redhat.baseurl,
                "gpgcheck": 1 if redhat.gpgcheck else 0,
                "script_version": SCRIPT_VERSION,
            },
            self.app_settings,
            template_name="yum repository",
            current_logger=self.logger,
        )
