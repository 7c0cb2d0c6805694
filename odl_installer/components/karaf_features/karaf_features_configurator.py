# odl_installer/components/karaf_features/karaf_features_configurator.py
# -*- coding: utf-8 -*-
"""
Karaf features configurator module.

Renders org.apache.karaf.features.cfg so that featuresBoot lists exactly the
configured default and extra features.
"""

from pathlib import Path
from typing import Dict, List

from odl_installer.base_configurator import BaseConfigurator
from odl_installer.config import KARAF_FEATURES_CFG
from odl_installer.registry import ComponentRegistry


def parse_features_boot(content: str) -> List[str]:
    """
    Return the features listed on the featuresBoot line of a Karaf features
    configuration, or [] if there is none.
    """
    for line in content.splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip() == "featuresBoot":
            return [f.strip() for f in value.split(",") if f.strip()]
    return []


@ComponentRegistry.register(
    name="karaf-features",
    metadata={
        "dependencies": ["package", "archive"],
        "subscribes": [],
        "description": "Karaf boot features (default + extra)",
    },
)
class KarafFeaturesConfigurator(BaseConfigurator):
    """
    Configurator for the Karaf boot feature list.
    """

    def features_repositories(self) -> List[str]:
        settings = self.app_settings
        return [
            repo.format(
                odl_version=settings.odl_version,
                odl_release=settings.odl_release,
            )
            for repo in settings.features_repositories
        ]

    def desired_files(self) -> Dict[Path, str]:
        content = self.render(
            self.app_settings.templates.karaf_features,
            "Karaf features configuration",
            features_boot=",".join(self.app_settings.boot_features),
            features_repositories=",".join(self.features_repositories()),
        )
        return {self.config_path(KARAF_FEATURES_CFG): content}
