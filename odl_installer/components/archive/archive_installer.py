# odl_installer/components/archive/archive_installer.py
# -*- coding: utf-8 -*-
"""
Archive installer module.

Downloads the controller distribution tarball, extracts it into the
versioned home directory and hands the tree to the controller user.
"""

import tempfile
from pathlib import Path

from common.command_utils import log_installer
from common.download_utils import download_file, extract_tarball
from common.file_utils import ensure_ownership, path_owned_by
from odl_installer.base_component import BaseComponent
from odl_installer.config import KARAF_BINARY
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="archive",
    metadata={
        "dependencies": ["java", "account"],
        "subscribes": [],
        "description": "Controller distribution tarball extracted into the install directory",
    },
)
class ArchiveInstaller(BaseComponent):
    """
    Installer for the controller distribution tarball.

    Extraction only happens when ``bin/karaf`` is absent, so an existing
    install directory is never overwritten.
    """

    @property
    def karaf_binary(self) -> Path:
        return self.app_settings.odl_home / KARAF_BINARY

    def install(self) -> bool:
        settings = self.app_settings
        symbols = settings.symbols
        home = settings.odl_home

        if not self.karaf_binary.exists():
            url = settings.resolved_tarball_url
            log_installer(
                f"{symbols.get('step', '')} Installing OpenDaylight {settings.odl_version} from {url} into {home}...",
                "info",
                self.logger,
                settings,
            )
            with tempfile.TemporaryDirectory(prefix="odl-") as tmp_dir:
                archive_path = download_file(
                    url,
                    Path(tmp_dir) / Path(url).name,
                    settings,
                    timeout=settings.download_timeout,
                    current_logger=self.logger,
                )
                extract_tarball(
                    archive_path,
                    home,
                    settings,
                    strip_components=1,
                    current_logger=self.logger,
                )
            self.changed = True

        if not self.karaf_binary.exists():
            self.logger.error(
                f"{self.karaf_binary} missing after extracting the archive."
            )
            return False

        if not path_owned_by(home, settings.odl_user, settings.odl_group):
            ensure_ownership(
                home,
                settings.odl_user,
                settings.odl_group,
                settings,
                recursive=True,
                current_logger=self.logger,
            )
            self.changed = True
        return True

    def is_installed(self) -> bool:
        return self.karaf_binary.exists() and path_owned_by(
            self.app_settings.odl_home,
            self.app_settings.odl_user,
            self.app_settings.odl_group,
        )

    def configure(self) -> bool:
        return True

    def is_configured(self) -> bool:
        return True
