"""
Base configurator class for components that manage controller configuration
files.

A configurator installs nothing; it renders files under the controller home
directory. Most configurators describe their files through
``desired_files()`` and inherit the write and check logic from here.
"""

from pathlib import Path
from typing import Dict, Optional

from common.file_utils import read_file_content, write_file_content
from common.template_utils import render_template
from odl_installer.base_component import BaseComponent
from odl_installer.config import SCRIPT_VERSION
from odl_installer.config_models import InstallMethod


class BaseConfigurator(BaseComponent):
    """
    Base class for configuration-file components.
    """

    def install(self) -> bool:
        """
        Installation is handled by the route components. This method is a no-op.
        """
        self.logger.debug(
            f"{self.__class__.__name__} does not handle installation. Skipping."
        )
        return True

    def is_installed(self) -> bool:
        return True

    def config_path(self, relative_path: str) -> Path:
        """Absolute path of a file under the controller home directory."""
        return self.app_settings.odl_home / relative_path

    def file_owner(self) -> Optional[str]:
        """
        "user:group" for files written on the tarball route. On the package
        route the package owns its files and ownership is left alone.
        """
        if self.app_settings.install_method == InstallMethod.TARBALL:
            return f"{self.app_settings.odl_user}:{self.app_settings.odl_group}"
        return None

    def render(self, template: str, template_name: str, **values) -> str:
        values.setdefault("script_version", SCRIPT_VERSION)
        return render_template(
            template,
            values,
            self.app_settings,
            template_name=template_name,
            current_logger=self.logger,
        )

    def desired_files(self) -> Dict[Path, str]:
        """
        Map of absolute path to the full content the file must have.
        """
        return {}

    def configure(self) -> bool:
        for path, content in self.desired_files().items():
            if write_file_content(
                path,
                content,
                self.app_settings,
                owner=self.file_owner(),
                backup=True,
                current_logger=self.logger,
            ):
                self.changed = True
        return True

    def is_configured(self) -> bool:
        for path, content in self.desired_files().items():
            if read_file_content(path, self.app_settings, self.logger) != content:
                return False
        return True
