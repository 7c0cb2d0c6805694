# common/debian/apt_manager.py
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
from odl_installer.config_models import AppSettings

APT_SOURCES_DIR = Path("/etc/apt/sources.list.d")


class AptManager:
    """
    A manager for Debian apt packages and PPAs using the command-line tools.

    Failures from apt-get and add-apt-repository are not caught here; they
    reach the caller as CalledProcessError.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the AptManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("apt-get"):
            self.logger.critical(
                "'apt-get' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'apt-get' not found. Is this a Debian-based system?"
            )

    def update(self, app_settings: AppSettings) -> None:
        """
        Updates the list of available packages using 'apt-get update'.
        """
        self.logger.info("Updating apt package lists via 'apt-get update'...")
        run_elevated_command(
            ["apt-get", "update", "-yq"],
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info("Apt package lists updated successfully.")

    def is_installed(self, pkg_name: str, app_settings: AppSettings) -> bool:
        """
        Returns True if dpkg reports ``pkg_name`` as installed.
        """
        try:
            result = run_command(
                ["dpkg-query", "-W", "-f=${db:Status-Status}", pkg_name],
                app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError:
            return False
        status = (result.stdout or "").strip()
        return status == "installed"

    def install(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
        update_first: bool = True,
    ) -> bool:
        """
        Installs one or more packages using 'apt-get install'.

        Args:
            packages: A single package name or a list of package names.
            app_settings: The application settings.
            update_first: Whether to update the package lists before installing.

        Returns:
            True if anything was installed, False if every package was
            already present.
        """
        if not isinstance(packages, list):
            packages = [packages]

        packages_to_install = []
        for pkg_name in packages:
            if self.is_installed(pkg_name, app_settings):
                self.logger.info(
                    f"Package '{pkg_name}' is already installed. Skipping."
                )
            else:
                self.logger.info(
                    f"Marking package for installation: {pkg_name}"
                )
                packages_to_install.append(pkg_name)

        if not packages_to_install:
            self.logger.info("All requested packages are already installed.")
            return False

        if update_first:
            self.update(app_settings)

        self.logger.info(
            f"Committing installation for: {', '.join(packages_to_install)}"
        )
        run_elevated_command(
            ["apt-get", "install", "-yq"] + packages_to_install,
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info("Packages installed successfully.")
        return True

    @staticmethod
    def ppa_source_stem(ppa: str) -> str:
        """
        Return the sources.list.d file-name stem add-apt-repository uses for
        a PPA, e.g. 'ppa:odl-team/helium' -> 'odl-team-ubuntu-helium'.
        """
        owner, _, name = ppa.removeprefix("ppa:").partition("/")
        return f"{owner}-ubuntu-{name}"

    def has_ppa(self, ppa: str) -> bool:
        """
        Returns True if a sources file for ``ppa`` already exists.
        """
        stem = self.ppa_source_stem(ppa)
        return any(APT_SOURCES_DIR.glob(f"{stem}-*"))

    def add_ppa(
        self, ppa: str, app_settings: AppSettings, update_after: bool = True
    ) -> bool:
        """
        Adds a PPA with add-apt-repository unless it is already configured.

        Returns:
            True if the PPA was added.
        """
        if self.has_ppa(ppa):
            self.logger.info(f"Repository {ppa} already configured.")
            return False

        self.logger.info(f"Adding repository: {ppa}")
        run_elevated_command(
            ["add-apt-repository", "-y", ppa],
            app_settings,
            current_logger=self.logger,
        )
        if update_after:
            self.update(app_settings)
        return True
