# odl_installer/components/l3_forwarding/l3_configurator.py
# -*- coding: utf-8 -*-
"""
L3 forwarding configurator module.

Toggles OVSDB layer 3 forwarding in etc/custom.properties.
"""

from common.file_utils import (
    apply_line_edit,
    ensure_line_in_file,
    read_file_content,
)
from odl_installer.base_configurator import BaseConfigurator
from odl_installer.config import CUSTOM_PROPERTIES
from odl_installer.registry import ComponentRegistry

L3_FWD_MATCH = r"^\s*#?\s*ovsdb\.l3\.fwd\.enabled\s*="


@ComponentRegistry.register(
    name="l3-forwarding",
    metadata={
        "dependencies": ["package", "archive"],
        "subscribes": [],
        "description": "OVSDB L3 forwarding switch in custom.properties",
    },
)
class L3ForwardingConfigurator(BaseConfigurator):
    @property
    def desired_line(self) -> str:
        value = "yes" if self.app_settings.enable_l3 else "no"
        return f"ovsdb.l3.fwd.enabled={value}"

    def configure(self) -> bool:
        self.changed = ensure_line_in_file(
            self.config_path(CUSTOM_PROPERTIES),
            self.desired_line,
            self.app_settings,
            match=L3_FWD_MATCH,
            owner=self.file_owner(),
            current_logger=self.logger,
        )
        return True

    def is_configured(self) -> bool:
        content = read_file_content(
            self.config_path(CUSTOM_PROPERTIES), self.app_settings, self.logger
        )
        if content is None:
            return False
        lines = content.splitlines()
        return apply_line_edit(lines, self.desired_line, L3_FWD_MATCH) == lines
