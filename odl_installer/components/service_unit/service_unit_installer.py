# odl_installer/components/service_unit/service_unit_installer.py
# -*- coding: utf-8 -*-
"""
Service unit installer module.

On the tarball route nothing ships an init script, so this component places
a systemd unit or an upstart job for the controller.
"""

from pathlib import Path

from common.file_utils import read_file_content, write_file_content
from common.system_utils import systemd_reload
from common.template_utils import render_template
from odl_installer.base_component import BaseComponent
from odl_installer.config import (
    SCRIPT_VERSION,
    SYSTEMD_UNIT_DIR,
    UPSTART_JOB_DIR,
)
from odl_installer.config_models import InitSystem
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="service-unit",
    metadata={
        "dependencies": ["archive", "account"],
        "subscribes": [],
        "description": "systemd unit or upstart job for the extracted controller",
    },
)
class ServiceUnitInstaller(BaseComponent):
    """
    Installer for the controller's init system definition.
    """

    @property
    def unit_path(self) -> Path:
        name = self.app_settings.service_name
        if self.facts.init_system == InitSystem.SYSTEMD:
            return SYSTEMD_UNIT_DIR / f"{name}.service"
        return UPSTART_JOB_DIR / f"{name}.conf"

    def render_unit(self) -> str:
        settings = self.app_settings
        if self.facts.init_system == InitSystem.SYSTEMD:
            template = settings.templates.systemd_unit
        else:
            template = settings.templates.upstart_job
        return render_template(
            template,
            {
                "service_name": settings.service_name,
                "home_dir": settings.odl_home,
                "odl_user": settings.odl_user,
                "odl_group": settings.odl_group,
                "java_opts": settings.java_opts,
                "script_version": SCRIPT_VERSION,
            },
            settings,
            template_name=f"{self.facts.init_system.value} unit",
            current_logger=self.logger,
        )

    def install(self) -> bool:
        self.changed = write_file_content(
            self.unit_path,
            self.render_unit(),
            self.app_settings,
            mode="0644",
            current_logger=self.logger,
        )
        if self.changed and self.facts.init_system == InitSystem.SYSTEMD:
            systemd_reload(self.app_settings, self.logger)
        return True

    def is_installed(self) -> bool:
        return (
            read_file_content(self.unit_path, self.app_settings, self.logger)
            == self.render_unit()
        )

    def configure(self) -> bool:
        return True

    def is_configured(self) -> bool:
        return True
