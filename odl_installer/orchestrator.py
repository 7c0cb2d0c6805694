# odl_installer/orchestrator.py
# -*- coding: utf-8 -*-
"""
Orchestrator for the installer components.

This module provides the InstallerOrchestrator class, which detects host
facts, plans the components for the host, and converges them in order.
Components that changed the host notify their subscribers, which are then
refreshed (for example, the service is restarted after a configuration file
was rewritten).
"""

import logging
from typing import Dict, List, Optional, Set

import odl_installer.components  # noqa: F401  (registers all components)
from common.command_utils import log_installer
from odl_installer.base_component import BaseComponent
from odl_installer.config_models import AppSettings
from odl_installer.facts import (
    HostFacts,
    detect_host_facts,
    validate_platform,
)
from odl_installer.planner import ResourcePlanner
from odl_installer.registry import ComponentRegistry


class ComponentFailedError(Exception):
    """A component did not reach its desired state."""

    def __init__(self, component: str, phase: str):
        super().__init__(f"Component '{component}' failed during {phase}.")
        self.component = component
        self.phase = phase


class InstallerOrchestrator:
    """
    Drives the planned components to their desired state.

    Errors raised by native tools propagate unchanged; a component that
    reports failure aborts the run with ComponentFailedError. Nothing is
    rolled back.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
        facts: Optional[HostFacts] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            app_settings: The application settings.
            logger: Optional logger instance. If not provided, a new logger will be created.
            facts: Pre-detected host facts. Detected lazily when omitted.
        """
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._facts = facts

    @property
    def facts(self) -> HostFacts:
        if self._facts is None:
            self._facts = detect_host_facts(
                self.app_settings, current_logger=self.logger
            )
        return self._facts

    def plan(self) -> List[str]:
        """
        Validate the platform and return the component names to apply, in order.

        Raises:
            UnsupportedPlatformError: The host is not supported.
            UnknownInstallMethodError: The install method is not known.
        """
        validate_platform(self.facts, self.app_settings, self.logger)
        return ResourcePlanner(self.app_settings, self.facts, self.logger).plan()

    def _select(self, component_names: Optional[List[str]]) -> List[str]:
        planned = self.plan()
        if not component_names:
            return planned

        unknown = [name for name in component_names if name not in planned]
        if unknown:
            raise ValueError(
                f"Components not part of the plan for this host: {', '.join(unknown)}. "
                f"Planned: {', '.join(planned)}"
            )
        return ComponentRegistry.resolve_dependencies(
            component_names, allowed=set(planned)
        )

    def _instantiate(self, name: str) -> BaseComponent:
        return ComponentRegistry.get_component(name)(
            self.app_settings, self.facts, self.logger
        )

    def apply(
        self, component_names: Optional[List[str]] = None, dry_run: bool = False
    ) -> List[str]:
        """
        Converge the planned components (or the named ones and their
        dependencies).

        Returns:
            Names of the components that changed the host, in order.

        Raises:
            ComponentFailedError: A component returned False.
        """
        symbols = self.app_settings.symbols
        names = self._select(component_names)

        if dry_run:
            log_installer(
                f"{symbols.get('info', '')} Dry run; would apply: {', '.join(names)}",
                "info",
                self.logger,
                self.app_settings,
            )
            return []

        changed: List[str] = []
        changed_set: Set[str] = set()
        for name in names:
            component = self._instantiate(name)
            log_installer(
                f"{symbols.get('step', '')} Applying component: {name}",
                "info",
                self.logger,
                self.app_settings,
            )

            if not component.is_installed():
                if not component.install():
                    raise ComponentFailedError(name, "install")
            else:
                self.logger.debug(f"Component '{name}' already installed.")

            if not component.is_configured():
                if not component.configure():
                    raise ComponentFailedError(name, "configure")
            else:
                self.logger.debug(f"Component '{name}' already configured.")

            triggers = [s for s in component.get_subscriptions() if s in changed_set]
            if triggers:
                self.logger.info(
                    f"Refreshing '{name}' after changes in: {', '.join(triggers)}"
                )
                if not component.refresh():
                    raise ComponentFailedError(name, "refresh")

            if component.changed:
                changed.append(name)
                changed_set.add(name)
                log_installer(
                    f"{symbols.get('success', '')} Component '{name}' changed.",
                    "success",
                    self.logger,
                    self.app_settings,
                )

        log_installer(
            f"{symbols.get('sparkles', '')} Apply finished. Changed: {', '.join(changed) or 'nothing'}",
            "success",
            self.logger,
            self.app_settings,
        )
        return changed

    def status(
        self, component_names: Optional[List[str]] = None
    ) -> Dict[str, Dict[str, bool]]:
        """
        Report whether each planned component is installed and configured.
        """
        result: Dict[str, Dict[str, bool]] = {}
        for name in self._select(component_names):
            component = self._instantiate(name)
            result[name] = {
                "installed": component.is_installed(),
                "configured": component.is_configured(),
            }
        return result
