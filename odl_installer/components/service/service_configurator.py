# odl_installer/components/service/service_configurator.py
# -*- coding: utf-8 -*-
"""
Service configurator module.

Keeps the controller service enabled and running, and restarts it when a
component it subscribes to changed the host.
"""

from common.command_utils import log_installer
from common.system_utils import (
    enable_service,
    is_service_active,
    is_service_enabled,
    restart_service,
    start_service,
)
from odl_installer.base_component import BaseComponent
from odl_installer.registry import ComponentRegistry

_WATCHED = [
    "package",
    "archive",
    "service-unit",
    "karaf-features",
    "rest-port",
    "log-levels",
    "credentials",
    "l3-forwarding",
]


@ComponentRegistry.register(
    name="service",
    metadata={
        "dependencies": list(_WATCHED),
        "subscribes": list(_WATCHED),
        "description": "Controller service enabled at boot and running",
    },
)
class ServiceConfigurator(BaseComponent):
    """
    Configurator for the controller's init system service.

    The unit itself comes from the package or from the service-unit
    component; this component only manages its state.
    """

    _started = False

    @property
    def service_name(self) -> str:
        return self.app_settings.service_name

    def install(self) -> bool:
        return True

    def is_installed(self) -> bool:
        return True

    def _is_active(self) -> bool:
        return is_service_active(
            self.service_name,
            self.facts.init_system,
            self.app_settings,
            current_logger=self.logger,
        )

    def _is_enabled(self) -> bool:
        return is_service_enabled(
            self.service_name,
            self.facts.init_system,
            self.app_settings,
            current_logger=self.logger,
        )

    def configure(self) -> bool:
        symbols = self.app_settings.symbols

        if not self._is_enabled():
            enable_service(
                self.service_name,
                self.facts.init_system,
                self.app_settings,
                current_logger=self.logger,
            )
            self.changed = True

        if not self._is_active():
            log_installer(
                f"{symbols.get('rocket', '')} Starting service '{self.service_name}'...",
                "info",
                self.logger,
                self.app_settings,
            )
            start_service(
                self.service_name,
                self.facts.init_system,
                self.app_settings,
                current_logger=self.logger,
            )
            self.changed = True
            self._started = True

        if not self._is_active():
            self.logger.error(
                f"Service '{self.service_name}' is not running after start."
            )
            return False
        return True

    def is_configured(self) -> bool:
        return self._is_enabled() and self._is_active()

    def refresh(self) -> bool:
        """Restart the service so that changed files take effect."""
        if self._started:
            # Started during this run, so it already read the new files.
            return True
        log_installer(
            f"{self.app_settings.symbols.get('gear', '')} Restarting service '{self.service_name}' to apply changes...",
            "info",
            self.logger,
            self.app_settings,
        )
        restart_service(
            self.service_name,
            self.facts.init_system,
            self.app_settings,
            current_logger=self.logger,
        )
        self.changed = True
        return True
