"""
Base component class for all component modules.

Every desired-state resource the installer manages (a repository, a package,
a rendered configuration file, a running service) is a component. This module
defines the interface the orchestrator drives.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from odl_installer.config_models import AppSettings
from odl_installer.facts import HostFacts


class BaseComponent(ABC):
    """
    Base class for all component modules.

    ``install``/``configure`` bring the host to the desired state and return
    True on success. ``is_installed``/``is_configured`` report whether that
    state already holds, which lets the orchestrator skip work. Components
    set ``self.changed`` when they modified the host so that subscribed
    components can be refreshed.
    """

    # Class-level metadata set by the registry decorator
    metadata: Dict[str, Any] = {
        "dependencies": [],  # Components that must be applied first
        "subscribes": [],  # Components whose changes trigger refresh()
        "description": "",
    }

    def __init__(
        self,
        app_settings: AppSettings,
        facts: HostFacts,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the component.

        Args:
            app_settings: The application settings.
            facts: Detected facts about the host.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.facts = facts
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.changed = False

    @abstractmethod
    def install(self) -> bool:
        """
        Install the component.

        Returns:
            True if the installation was successful, False otherwise.
        """

    @abstractmethod
    def configure(self) -> bool:
        """
        Configure the component.

        Returns:
            True if the configuration was successful, False otherwise.
        """

    @abstractmethod
    def is_installed(self) -> bool:
        """
        Check if the component is installed.
        """

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Check if the component is configured.
        """

    def refresh(self) -> bool:
        """
        React to a change in a subscribed component. No-op by default.
        """
        return True

    def get_subscriptions(self) -> List[str]:
        return list(self.metadata.get("subscribes", []))
