# odl_installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the installer, including
defaults, type annotations, and descriptions. It utilizes Pydantic for data
validation and pydantic-settings so every field can also be supplied through
an ``ODL_``-prefixed environment variable (nested fields use ``__``).
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from odl_installer.config import LOG4J_LEVELS, SYMBOLS

# --- Default Static Values (can be overridden by config file/env/cli) ---
ODL_VERSION_DEFAULT: str = "0.2.2"
ODL_RELEASE_DEFAULT: str = "Helium-SR2"
INSTALL_ROOT_DEFAULT: str = "/opt"
REST_PORT_DEFAULT: int = 8080
ODL_USERNAME_DEFAULT: str = "admin"
ODL_PASSWORD_DEFAULT: str = "admin"
ODL_USER_DEFAULT: str = "odl"
ODL_GROUP_DEFAULT: str = "odl"
SERVICE_NAME_DEFAULT: str = "opendaylight"
JAVA_OPTS_DEFAULT: str = "-Xmx1024m"

DEFAULT_FEATURES: List[str] = [
    "config",
    "standard",
    "region",
    "package",
    "kar",
    "ssh",
    "management",
]

FEATURES_REPOSITORIES_DEFAULT: List[str] = [
    "mvn:org.apache.karaf.features/standard/3.0.1/xml/features",
    "mvn:org.apache.karaf.features/enterprise/3.0.1/xml/features",
    "mvn:org.ops4j.pax.web/pax-web-features/3.1.0/xml/features",
    "mvn:org.apache.karaf.features/spring/3.0.1/xml/features",
    "mvn:org.opendaylight.integration/features-integration/{odl_version}-{odl_release}/xml/features",
]

TARBALL_URL_DEFAULT: str = (
    "https://nexus.opendaylight.org/content/groups/public/org/opendaylight/"
    "integration/distribution-karaf/{odl_version}-{odl_release}/"
    "distribution-karaf-{odl_version}-{odl_release}.tar.gz"
)

SYMBOLS_DEFAULT: Dict[str, str] = dict(SYMBOLS)

KARAF_FEATURES_TEMPLATE_DEFAULT: str = """\
# org.apache.karaf.features.cfg managed by odl-installer V{script_version}
# Changes made here will be overwritten on the next run.

#
# Comma separated list of features repositories to register by default
#
featuresRepositories = {features_repositories}

#
# Comma separated list of features to install at startup
#
featuresBoot = {features_boot}

#
# Defines if the boot features are started in asynchronous mode (in a dedicated thread)
#
featuresBootAsynchronous=false
"""

TOMCAT_SERVER_TEMPLATE_DEFAULT: str = """\
<?xml version='1.0' encoding='utf-8'?>
<!-- tomcat-server.xml managed by odl-installer V{script_version} -->
<Server>
  <Service name="Catalina">
    <Connector port="{rest_port}" protocol="HTTP/1.1"
               connectionTimeout="20000"
               redirectPort="8443" />
    <Engine name="Catalina" defaultHost="localhost">
      <Host name="localhost" appBase=""
            unpackWARs="false" autoDeploy="false"
            deployOnStartup="false" createDirs="false">
        <Valve className="org.apache.catalina.valves.AccessLogValve"
               directory="logs" prefix="web_access_log_" suffix=".txt"
               resolveHosts="false" rotatable="true" fileDateFormat="yyyy-MM"
               pattern="%h %l %u %t &quot;%r&quot; %s %b" />
      </Host>
    </Engine>
  </Service>
</Server>
"""

JETTY_TEMPLATE_DEFAULT: str = """\
<?xml version="1.0"?>
<!DOCTYPE Configure PUBLIC "-//Jetty//Configure//EN" "http://www.eclipse.org/jetty/configure.dtd">
<!-- jetty.xml managed by odl-installer V{script_version} -->
<Configure class="org.eclipse.jetty.server.Server">
  <Call name="addConnector">
    <Arg>
      <New class="org.eclipse.jetty.server.nio.SelectChannelConnector">
        <Set name="host"><Property name="jetty.host" /></Set>
        <Set name="port">
          <Property name="jetty.port" default="{rest_port}" />
        </Set>
        <Set name="maxIdleTime">300000</Set>
        <Set name="Acceptors">2</Set>
        <Set name="statsOn">false</Set>
        <Set name="confidentialPort">8443</Set>
        <Set name="lowResourcesConnections">20000</Set>
        <Set name="lowResourcesMaxIdleTime">5000</Set>
      </New>
    </Arg>
  </Call>
</Configure>
"""

SYSTEMD_UNIT_TEMPLATE_DEFAULT: str = """\
# {service_name}.service managed by odl-installer V{script_version}
[Unit]
Description=OpenDaylight SDN Controller
Documentation=https://wiki.opendaylight.org/view/Main_Page http://www.opendaylight.org/
After=network.target

[Service]
Type=forking
ExecStart={home_dir}/bin/start
ExecStop={home_dir}/bin/stop
Environment="JAVA_OPTS={java_opts}"
User={odl_user}
Group={odl_group}
SuccessExitStatus=143
LimitNOFILE=102400
Restart=on-failure

[Install]
WantedBy=multi-user.target
"""

UPSTART_JOB_TEMPLATE_DEFAULT: str = """\
# {service_name}.conf managed by odl-installer V{script_version}
description "OpenDaylight SDN Controller"

start on (local-filesystems and net-device-up IFACE!=lo)
stop on runlevel [!2345]

setuid {odl_user}
setgid {odl_group}

env JAVA_OPTS="{java_opts}"
chdir {home_dir}

respawn
exec {home_dir}/bin/karaf server
"""

USERS_PROPERTIES_TEMPLATE_DEFAULT: str = """\
# users.properties managed by odl-installer V{script_version}
#
# user=password,role1,role2,...,_g_:group1,...
#
{username} = {password},_g_:admingroup
_g_\\:admingroup = group,admin,manager,viewer
"""

YUM_REPO_TEMPLATE_DEFAULT: str = """\
# {repo_name}.repo managed by odl-installer V{script_version}
[{repo_name}]
name={repo_description}
baseurl={baseurl}
enabled=1
gpgcheck={gpgcheck}
"""


class InstallMethod(str, Enum):
    """How the controller gets onto the host."""

    PACKAGE = "package"
    TARBALL = "tarball"


class OsFamily(str, Enum):
    """Operating system families the installer can branch on."""

    REDHAT = "RedHat"
    DEBIAN = "Debian"


class InitSystem(str, Enum):
    SYSTEMD = "systemd"
    UPSTART = "upstart"


class RestConnector(str, Enum):
    """Which file carries the REST port for the installed controller."""

    TOMCAT = "tomcat"
    JETTY = "jetty"


INSTALL_METHOD_ALIASES: Dict[str, str] = {
    "rpm": InstallMethod.PACKAGE.value,
    "deb": InstallMethod.PACKAGE.value,
    "pkg": InstallMethod.PACKAGE.value,
    "archive": InstallMethod.TARBALL.value,
}


class RedHatSettings(BaseModel):
    """Package route settings for RedHat-family hosts."""

    repo_name: str = Field(
        default="opendaylight-helium", description="Name of the yum repository."
    )
    repo_description: str = Field(
        default="OpenDaylight Helium repository",
        description="Human readable name written to the .repo file.",
    )
    baseurl: str = Field(
        default="http://cbs.centos.org/repos/nfv7-opendaylight-2-release/$basearch/os/",
        description="Base URL of the yum repository.",
    )
    gpgcheck: bool = Field(
        default=False, description="Whether yum checks package signatures."
    )
    package_name: str = Field(
        default="opendaylight", description="Controller package name."
    )
    java_package: str = Field(
        default="java-1.7.0-openjdk",
        description="Java runtime package installed on the tarball route.",
    )


class DebianSettings(BaseModel):
    """Package route settings for Debian-family hosts."""

    ppa: str = Field(
        default="ppa:odl-team/helium",
        description="PPA that carries the controller package.",
    )
    package_name: str = Field(
        default="opendaylight", description="Controller package name."
    )
    java_package: str = Field(
        default="openjdk-7-jre-headless",
        description="Java runtime package installed on the tarball route.",
    )


class TemplateSettings(BaseModel):
    """Templates for every rendered file. Placeholders use str.format syntax."""

    karaf_features: str = Field(
        default=KARAF_FEATURES_TEMPLATE_DEFAULT,
        description="Supports {features_boot}, {features_repositories}, {script_version}.",
    )
    tomcat_server: str = Field(
        default=TOMCAT_SERVER_TEMPLATE_DEFAULT,
        description="Supports {rest_port}, {script_version}.",
    )
    jetty: str = Field(
        default=JETTY_TEMPLATE_DEFAULT,
        description="Supports {rest_port}, {script_version}.",
    )
    systemd_unit: str = Field(
        default=SYSTEMD_UNIT_TEMPLATE_DEFAULT,
        description="Supports {service_name}, {home_dir}, {odl_user}, {odl_group}, {java_opts}.",
    )
    upstart_job: str = Field(
        default=UPSTART_JOB_TEMPLATE_DEFAULT,
        description="Supports {service_name}, {home_dir}, {odl_user}, {odl_group}, {java_opts}.",
    )
    users_properties: str = Field(
        default=USERS_PROPERTIES_TEMPLATE_DEFAULT,
        description="Supports {username}, {password}, {script_version}.",
    )
    yum_repo: str = Field(
        default=YUM_REPO_TEMPLATE_DEFAULT,
        description="Supports {repo_name}, {repo_description}, {baseurl}, {gpgcheck}.",
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ODL_", env_nested_delimiter="__", extra="ignore"
    )

    install_method: InstallMethod = Field(
        default=InstallMethod.PACKAGE,
        description="Install route: 'package' (rpm/deb) or 'tarball'.",
    )
    os_family: Optional[OsFamily] = Field(
        default=None,
        description="Override the detected OS family (RedHat or Debian).",
    )
    init_system: Optional[InitSystem] = Field(
        default=None,
        description="Override the detected init system (systemd or upstart).",
    )
    strict_os_check: bool = Field(
        default=True,
        description="Abort on unsupported OS releases instead of warning.",
    )

    odl_version: str = Field(
        default=ODL_VERSION_DEFAULT,
        description="Controller version; names the install directory.",
    )
    odl_release: str = Field(
        default=ODL_RELEASE_DEFAULT,
        description="Release name used in the default tarball URL and feature repo.",
    )
    install_root: Path = Field(
        default=Path(INSTALL_ROOT_DEFAULT),
        description="Directory holding the versioned install directory.",
    )
    home_dir: Optional[Path] = Field(
        default=None,
        description="Controller home. Defaults to <install_root>/opendaylight-<version>.",
    )
    tarball_url: str = Field(
        default=TARBALL_URL_DEFAULT,
        description="Distribution tarball URL. Supports {odl_version} and {odl_release}.",
    )
    download_timeout: int = Field(
        default=300, gt=0, description="HTTP timeout for downloads in seconds."
    )

    rest_port: int = Field(
        default=REST_PORT_DEFAULT,
        ge=1,
        le=65535,
        description="Port the northbound REST API listens on.",
    )
    rest_connector: RestConnector = Field(
        default=RestConnector.TOMCAT,
        description="Which REST connector file to render (tomcat or jetty).",
    )
    default_features: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FEATURES),
        description="Karaf features always installed at boot.",
    )
    extra_features: List[str] = Field(
        default_factory=list,
        description="Additional Karaf features installed at boot.",
    )
    features_repositories: List[str] = Field(
        default_factory=lambda: list(FEATURES_REPOSITORIES_DEFAULT),
        description="Karaf feature repositories. Supports {odl_version} and {odl_release}.",
    )
    log_levels: Dict[str, str] = Field(
        default_factory=dict,
        description="Logger name to log4j level overrides.",
    )
    username: str = Field(
        default=ODL_USERNAME_DEFAULT, description="Controller admin username."
    )
    password: str = Field(
        default=ODL_PASSWORD_DEFAULT,
        description="Controller admin password.",
        exclude=True,
    )
    enable_l3: bool = Field(
        default=False, description="Enable OVSDB L3 forwarding."
    )

    odl_user: str = Field(
        default=ODL_USER_DEFAULT,
        description="System user owning the controller (tarball route).",
    )
    odl_group: str = Field(
        default=ODL_GROUP_DEFAULT,
        description="System group owning the controller (tarball route).",
    )
    service_name: str = Field(
        default=SERVICE_NAME_DEFAULT, description="Init system service name."
    )
    manage_service: bool = Field(
        default=True, description="Ensure the service is enabled and running."
    )
    java_opts: str = Field(
        default=JAVA_OPTS_DEFAULT,
        description="JAVA_OPTS exported by the service unit.",
    )

    redhat: RedHatSettings = Field(default_factory=RedHatSettings)
    debian: DebianSettings = Field(default_factory=DebianSettings)
    templates: TemplateSettings = Field(default_factory=TemplateSettings)

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )

    @field_validator("install_method", mode="before")
    @classmethod
    def _normalise_install_method(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            return INSTALL_METHOD_ALIASES.get(lowered, lowered)
        return value

    @field_validator("os_family", mode="before")
    @classmethod
    def _normalise_os_family(cls, value):
        if isinstance(value, str):
            for family in OsFamily:
                if family.value.lower() == value.strip().lower():
                    return family
        return value

    @field_validator("log_levels")
    @classmethod
    def _validate_log_levels(cls, value: Dict[str, str]) -> Dict[str, str]:
        normalised = {}
        for logger_name, level in value.items():
            level_upper = str(level).strip().upper()
            if level_upper not in LOG4J_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}' for logger '{logger_name}'. "
                    f"Expected one of: {', '.join(LOG4J_LEVELS)}"
                )
            normalised[logger_name.strip()] = level_upper
        return normalised

    @property
    def odl_home(self) -> Path:
        """The controller home directory, keyed by the installed version."""
        if self.home_dir is not None:
            return Path(self.home_dir)
        return Path(self.install_root) / f"opendaylight-{self.odl_version}"

    @property
    def resolved_tarball_url(self) -> str:
        return self.tarball_url.format(
            odl_version=self.odl_version, odl_release=self.odl_release
        )

    @property
    def boot_features(self) -> List[str]:
        """Default plus extra features, de-duplicated with order preserved."""
        features: List[str] = []
        for feature in [*self.default_features, *self.extra_features]:
            feature = feature.strip()
            if feature and feature not in features:
                features.append(feature)
        return features
