# odl_installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the OpenDaylight installer.

This module defines truly static values, such as the supported operating
system releases, fixed filesystem locations used by the init systems, and the
paths of the controller's configuration files relative to its home directory.

Mutable runtime configuration (REST port, features, credentials, install
method) is handled by 'odl_installer/config_models.py' and
'odl_installer/config_loader.py'.
"""

from pathlib import Path

SCRIPT_VERSION: str = "1.0"

OS_RELEASE_PATH: Path = Path("/etc/os-release")
SYSTEMD_RUNTIME_DIR: Path = Path("/run/systemd/system")

SYSTEMD_UNIT_DIR: Path = Path("/usr/lib/systemd/system")
UPSTART_JOB_DIR: Path = Path("/etc/init")
YUM_REPOS_DIR: Path = Path("/etc/yum.repos.d")

# Configuration files, relative to the controller home directory.
KARAF_FEATURES_CFG: str = "etc/org.apache.karaf.features.cfg"
PAX_LOGGING_CFG: str = "etc/org.ops4j.pax.logging.cfg"
USERS_PROPERTIES: str = "etc/users.properties"
CUSTOM_PROPERTIES: str = "etc/custom.properties"
JETTY_XML: str = "etc/jetty.xml"
TOMCAT_SERVER_XML: str = "configuration/tomcat-server.xml"
KARAF_BINARY: str = "bin/karaf"

# Operating systems this installer knows how to handle, keyed by the
# os-release ID. Values are the major releases that are supported.
SUPPORTED_RELEASES: dict[str, list[str]] = {
    "centos": ["7"],
    "rhel": ["7"],
    "fedora": ["22", "23"],
    "ubuntu": ["14.04", "16.04"],
}

# OS IDs where an unsupported release only warns instead of failing.
LENIENT_RELEASE_OS: list[str] = ["fedora"]

REDHAT_OS_IDS: list[str] = ["rhel", "centos", "fedora"]
DEBIAN_OS_IDS: list[str] = ["debian", "ubuntu"]

LOG4J_LEVELS: list[str] = [
    "TRACE",
    "DEBUG",
    "INFO",
    "WARN",
    "ERROR",
    "FATAL",
    "OFF",
    "ALL",
]

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}
