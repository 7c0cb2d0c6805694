from pathlib import Path

import pytest
from pydantic import ValidationError

from odl_installer.config_models import (
    DEFAULT_FEATURES,
    AppSettings,
    InstallMethod,
    OsFamily,
    RestConnector,
)


def test_defaults():
    settings = AppSettings()
    assert settings.install_method == InstallMethod.PACKAGE
    assert settings.rest_port == 8080
    assert settings.rest_connector == RestConnector.TOMCAT
    assert settings.default_features == DEFAULT_FEATURES
    assert settings.username == "admin"
    assert settings.odl_home == Path("/opt/opendaylight-0.2.2")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("rpm", InstallMethod.PACKAGE),
        ("deb", InstallMethod.PACKAGE),
        ("Package", InstallMethod.PACKAGE),
        ("tarball", InstallMethod.TARBALL),
        ("archive", InstallMethod.TARBALL),
    ],
)
def test_install_method_aliases(value, expected):
    assert AppSettings(install_method=value).install_method == expected


def test_unknown_install_method_rejected():
    with pytest.raises(ValidationError):
        AppSettings(install_method="docker")


def test_os_family_case_insensitive():
    assert AppSettings(os_family="redhat").os_family == OsFamily.REDHAT
    assert AppSettings(os_family="DEBIAN").os_family == OsFamily.DEBIAN


def test_rest_port_range():
    with pytest.raises(ValidationError):
        AppSettings(rest_port=0)
    with pytest.raises(ValidationError):
        AppSettings(rest_port=70000)


def test_log_levels_upper_cased_and_validated():
    settings = AppSettings(log_levels={" org.opendaylight.ovsdb ": "trace"})
    assert settings.log_levels == {"org.opendaylight.ovsdb": "TRACE"}
    with pytest.raises(ValidationError):
        AppSettings(log_levels={"org.opendaylight": "LOUD"})


def test_boot_features_merge_and_dedupe():
    settings = AppSettings(
        default_features=["config", "standard"],
        extra_features=["odl-ovsdb-openstack", " config ", ""],
    )
    assert settings.boot_features == ["config", "standard", "odl-ovsdb-openstack"]


def test_home_dir_override_and_version(tmp_path):
    assert AppSettings(odl_version="0.3.0").odl_home == Path("/opt/opendaylight-0.3.0")
    assert AppSettings(home_dir=tmp_path).odl_home == tmp_path


def test_resolved_tarball_url():
    url = AppSettings().resolved_tarball_url
    assert url.endswith("distribution-karaf-0.2.2-Helium-SR2.tar.gz")
    assert "{" not in url


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ODL_REST_PORT", "7777")
    monkeypatch.setenv("ODL_INSTALL_METHOD", "rpm")
    monkeypatch.setenv("ODL_REDHAT__GPGCHECK", "true")
    settings = AppSettings()
    assert settings.rest_port == 7777
    assert settings.install_method == InstallMethod.PACKAGE
    assert settings.redhat.gpgcheck is True


def test_password_excluded_from_dump():
    assert "password" not in AppSettings(password="s3cret").model_dump()


def test_default_java_opts():
    assert AppSettings().java_opts == "-Xmx1024m"
