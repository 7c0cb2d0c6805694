# odl_installer/components/log_levels/log_level_configurator.py
# -*- coding: utf-8 -*-
"""
Log level configurator module.

Adds one ``log4j.logger.<name> = <LEVEL>`` line per configured logger to the
pax logging configuration, replacing an existing line for the same logger.
"""

import re
from pathlib import Path
from typing import Dict, List

from common.file_utils import (
    apply_line_edit,
    ensure_line_in_file,
    read_file_content,
)
from odl_installer.base_configurator import BaseConfigurator
from odl_installer.config import PAX_LOGGING_CFG
from odl_installer.registry import ComponentRegistry


def log_level_line(logger_name: str, level: str) -> str:
    return f"log4j.logger.{logger_name} = {level}"


def log_level_match(logger_name: str) -> str:
    """Regex matching any existing level line for exactly this logger."""
    return rf"^\s*log4j\.logger\.{re.escape(logger_name)}\s*="


@ComponentRegistry.register(
    name="log-levels",
    metadata={
        "dependencies": ["package", "archive"],
        "subscribes": [],
        "description": "Per-logger log4j levels in org.ops4j.pax.logging.cfg",
    },
)
class LogLevelConfigurator(BaseConfigurator):
    """
    Configurator for custom logger verbosity.
    """

    @property
    def logging_cfg(self) -> Path:
        return self.config_path(PAX_LOGGING_CFG)

    def desired_lines(self) -> Dict[str, str]:
        """Map of match regex to the line that must be present."""
        return {
            log_level_match(name): log_level_line(name, level)
            for name, level in self.app_settings.log_levels.items()
        }

    def configure(self) -> bool:
        for match, line in self.desired_lines().items():
            if ensure_line_in_file(
                self.logging_cfg,
                line,
                self.app_settings,
                match=match,
                owner=self.file_owner(),
                current_logger=self.logger,
            ):
                self.changed = True
        return True

    def is_configured(self) -> bool:
        if not self.app_settings.log_levels:
            return True
        content = read_file_content(
            self.logging_cfg, self.app_settings, self.logger
        )
        if content is None:
            return False
        lines: List[str] = content.splitlines()
        for match, line in self.desired_lines().items():
            if apply_line_edit(lines, line, match) != lines:
                return False
        return True
