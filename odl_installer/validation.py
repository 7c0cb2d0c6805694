# odl_installer/validation.py
# -*- coding: utf-8 -*-
"""
Post-install verification.

Black-box checks of the host after an apply: the controller is present and
running, and its configuration files reflect the configured options.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import requests

from common.file_utils import read_file_content
from common.package_manager import get_package_manager
from common.system_utils import is_service_active
from odl_installer.components.karaf_features.karaf_features_configurator import (
    parse_features_boot,
)
from odl_installer.components.log_levels.log_level_configurator import (
    log_level_line,
)
from odl_installer.config import (
    JETTY_XML,
    KARAF_BINARY,
    KARAF_FEATURES_CFG,
    PAX_LOGGING_CFG,
    TOMCAT_SERVER_XML,
)
from odl_installer.config_models import (
    AppSettings,
    InstallMethod,
    OsFamily,
    RestConnector,
)
from odl_installer.facts import HostFacts

module_logger = logging.getLogger(__name__)

RESTCONF_MODULES_PATH = "/restconf/modules"


@dataclass
class CheckResult:
    name: str
    passed: bool
    detail: str = ""


def check_controller_present(
    app_settings: AppSettings, facts: HostFacts, logger: logging.Logger
) -> CheckResult:
    if app_settings.install_method == InstallMethod.PACKAGE:
        if facts.os_family == OsFamily.REDHAT:
            package = app_settings.redhat.package_name
        else:
            package = app_settings.debian.package_name
        manager = get_package_manager(facts.os_family, logger=logger)
        installed = manager.is_installed(package, app_settings)
        return CheckResult(
            "controller-present",
            installed,
            f"package '{package}' {'installed' if installed else 'not installed'}",
        )

    karaf = app_settings.odl_home / KARAF_BINARY
    return CheckResult(
        "controller-present",
        karaf.exists(),
        f"{karaf} {'exists' if karaf.exists() else 'missing'}",
    )


def check_service_running(
    app_settings: AppSettings, facts: HostFacts, logger: logging.Logger
) -> CheckResult:
    active = is_service_active(
        app_settings.service_name,
        facts.init_system,
        app_settings,
        current_logger=logger,
    )
    return CheckResult(
        "service-running",
        active,
        f"{app_settings.service_name} {'active' if active else 'inactive'}",
    )


def check_features(
    app_settings: AppSettings, logger: logging.Logger
) -> CheckResult:
    """featuresBoot must hold exactly the configured default + extra set."""
    path = app_settings.odl_home / KARAF_FEATURES_CFG
    content = read_file_content(path, app_settings, logger)
    if content is None:
        return CheckResult("features", False, f"{path} missing")

    actual = parse_features_boot(content)
    expected = app_settings.boot_features
    passed = sorted(actual) == sorted(expected)
    detail = f"featuresBoot = {','.join(actual)}"
    if not passed:
        detail += f" (expected {','.join(expected)})"
    return CheckResult("features", passed, detail)


def check_rest_port(
    app_settings: AppSettings, logger: logging.Logger
) -> CheckResult:
    if app_settings.rest_connector == RestConnector.JETTY:
        path = app_settings.odl_home / JETTY_XML
        needle = f'<Property name="jetty.port" default="{app_settings.rest_port}" />'
    else:
        path = app_settings.odl_home / TOMCAT_SERVER_XML
        needle = f'<Connector port="{app_settings.rest_port}" protocol="HTTP/1.1"'

    content = read_file_content(path, app_settings, logger)
    if content is None:
        return CheckResult("rest-port", False, f"{path} missing")
    passed = needle in content
    return CheckResult(
        "rest-port",
        passed,
        f"port {app_settings.rest_port} {'found' if passed else 'not found'} in {path}",
    )


def check_log_levels(
    app_settings: AppSettings, logger: logging.Logger
) -> List[CheckResult]:
    if not app_settings.log_levels:
        return []
    path = app_settings.odl_home / PAX_LOGGING_CFG
    content = read_file_content(path, app_settings, logger)
    lines = content.splitlines() if content else []

    results = []
    for name, level in app_settings.log_levels.items():
        line = log_level_line(name, level)
        results.append(
            CheckResult(f"log-level:{name}", line in lines, line)
        )
    return results


def check_rest_api(
    app_settings: AppSettings, logger: logging.Logger, timeout: int = 10
) -> CheckResult:
    """Authenticated GET against the controller's RESTCONF modules list."""
    url = f"http://127.0.0.1:{app_settings.rest_port}{RESTCONF_MODULES_PATH}"
    try:
        response = requests.get(
            url,
            auth=(app_settings.username, app_settings.password),
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning(f"REST check against {url} failed: {e}")
        return CheckResult("rest-api", False, f"{url}: {e}")
    return CheckResult(
        "rest-api",
        response.status_code == 200,
        f"{url} returned HTTP {response.status_code}",
    )


def verify_installation(
    app_settings: AppSettings,
    facts: HostFacts,
    check_rest: bool = False,
    current_logger: Optional[logging.Logger] = None,
) -> List[CheckResult]:
    """
    Run every acceptance check and return the results in a fixed order.
    """
    logger_to_use = current_logger if current_logger else module_logger

    results = [
        check_controller_present(app_settings, facts, logger_to_use),
    ]
    if app_settings.manage_service:
        results.append(check_service_running(app_settings, facts, logger_to_use))
    results.append(check_features(app_settings, logger_to_use))
    results.append(check_rest_port(app_settings, logger_to_use))
    results.extend(check_log_levels(app_settings, logger_to_use))
    if check_rest:
        results.append(check_rest_api(app_settings, logger_to_use))

    for result in results:
        level = logging.INFO if result.passed else logging.WARNING
        logger_to_use.log(
            level,
            f"{'PASS' if result.passed else 'FAIL'} {result.name}: {result.detail}",
        )
    return results
