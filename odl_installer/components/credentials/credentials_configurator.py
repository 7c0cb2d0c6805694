# odl_installer/components/credentials/credentials_configurator.py
# -*- coding: utf-8 -*-
"""
Credentials configurator module.

Renders Karaf's users.properties with the configured admin username and
password.
"""

from pathlib import Path
from typing import Dict

from odl_installer.base_configurator import BaseConfigurator
from odl_installer.config import USERS_PROPERTIES
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="credentials",
    metadata={
        "dependencies": ["package", "archive"],
        "subscribes": [],
        "description": "Controller admin credentials in users.properties",
    },
)
class CredentialsConfigurator(BaseConfigurator):
    """
    Configurator for the controller admin account.
    """

    def desired_files(self) -> Dict[Path, str]:
        content = self.render(
            self.app_settings.templates.users_properties,
            "users.properties",
            username=self.app_settings.username,
            password=self.app_settings.password,
        )
        return {self.config_path(USERS_PROPERTIES): content}

    def configure(self) -> bool:
        result = super().configure()
        if self.changed:
            self.logger.info(
                f"Credentials for user '{self.app_settings.username}' updated."
            )
        return result
