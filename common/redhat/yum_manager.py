# common/redhat/yum_manager.py
# -*- coding: utf-8 -*-
import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from common.command_utils import (
    command_exists,
    run_command,
    run_elevated_command,
)
from common.file_utils import write_file_content
from odl_installer.config import YUM_REPOS_DIR
from odl_installer.config_models import AppSettings


class YumManager:
    """
    A manager for RedHat-family packages and .repo files, mirroring
    AptManager for yum (or dnf where yum is absent).
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the YumManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if command_exists("yum"):
            self.tool = "yum"
        elif command_exists("dnf"):
            self.tool = "dnf"
        else:
            self.logger.critical(
                "Neither 'yum' nor 'dnf' found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'yum' not found. Is this a RedHat-based system?"
            )

    def is_installed(self, pkg_name: str, app_settings: AppSettings) -> bool:
        """
        Returns True if rpm reports ``pkg_name`` as installed.
        """
        try:
            run_command(
                ["rpm", "-q", pkg_name],
                app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError:
            return False
        return True

    def install(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
    ) -> bool:
        """
        Installs one or more packages.

        Returns:
            True if anything was installed, False if every package was
            already present.
        """
        if not isinstance(packages, list):
            packages = [packages]

        packages_to_install = [
            pkg for pkg in packages if not self.is_installed(pkg, app_settings)
        ]
        if not packages_to_install:
            self.logger.info("All requested packages are already installed.")
            return False

        self.logger.info(
            f"Committing installation for: {', '.join(packages_to_install)}"
        )
        run_elevated_command(
            [self.tool, "install", "-y"] + packages_to_install,
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info("Packages installed successfully.")
        return True

    @staticmethod
    def repo_file_path(repo_name: str) -> Path:
        return YUM_REPOS_DIR / f"{repo_name}.repo"

    def add_repository(
        self,
        repo_name: str,
        repo_content: str,
        app_settings: AppSettings,
    ) -> bool:
        """
        Writes ``repo_content`` to /etc/yum.repos.d/<repo_name>.repo.

        Returns:
            True if the repository file changed.
        """
        repo_path = self.repo_file_path(repo_name)
        self.logger.info(f"Ensuring repository file: {repo_path}")
        changed = write_file_content(
            repo_path,
            repo_content,
            app_settings,
            mode="0644",
            current_logger=self.logger,
        )
        if changed:
            run_elevated_command(
                [self.tool, "clean", "metadata"],
                app_settings,
                current_logger=self.logger,
            )
        return changed
