# odl_installer/components/rest_port/rest_port_configurator.py
# -*- coding: utf-8 -*-
"""
REST port configurator module.

Renders the REST connector file (Tomcat's tomcat-server.xml or Jetty's
jetty.xml) with the configured northbound port.
"""

from pathlib import Path
from typing import Dict

from odl_installer.base_configurator import BaseConfigurator
from odl_installer.config import JETTY_XML, TOMCAT_SERVER_XML
from odl_installer.config_models import RestConnector
from odl_installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="rest-port",
    metadata={
        "dependencies": ["package", "archive"],
        "subscribes": [],
        "description": "REST connector port (tomcat-server.xml or jetty.xml)",
    },
)
class RestPortConfigurator(BaseConfigurator):
    """
    Configurator for the northbound REST port.
    """

    @property
    def connector_path(self) -> Path:
        if self.app_settings.rest_connector == RestConnector.JETTY:
            return self.config_path(JETTY_XML)
        return self.config_path(TOMCAT_SERVER_XML)

    def desired_files(self) -> Dict[Path, str]:
        templates = self.app_settings.templates
        if self.app_settings.rest_connector == RestConnector.JETTY:
            template = templates.jetty
        else:
            template = templates.tomcat_server
        content = self.render(
            template,
            f"{self.app_settings.rest_connector.value} connector",
            rest_port=self.app_settings.rest_port,
        )
        return {self.connector_path: content}
