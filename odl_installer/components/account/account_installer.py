# odl_installer/components/account/account_installer.py
# -*- coding: utf-8 -*-
"""
Account installer module.

Creates the system group and user that own the extracted controller.
"""

from common.account_utils import (
    ensure_system_group,
    ensure_system_user,
    group_exists,
    user_exists,
)
from odl_installer.base_component import BaseComponent
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="account",
    metadata={
        "dependencies": [],
        "subscribes": [],
        "description": "System user and group owning the controller",
    },
)
class AccountInstaller(BaseComponent):
    """
    Installer for the controller's system group and user.
    """

    def install(self) -> bool:
        settings = self.app_settings
        group_created = ensure_system_group(
            settings.odl_group, settings, current_logger=self.logger
        )
        user_created = ensure_system_user(
            settings.odl_user,
            settings.odl_group,
            settings.odl_home,
            settings,
            current_logger=self.logger,
        )
        self.changed = group_created or user_created
        return True

    def is_installed(self) -> bool:
        return group_exists(self.app_settings.odl_group) and user_exists(
            self.app_settings.odl_user
        )

    def configure(self) -> bool:
        return True

    def is_configured(self) -> bool:
        return True
