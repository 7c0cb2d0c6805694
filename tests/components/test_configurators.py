from odl_installer.components.credentials.credentials_configurator import (
    CredentialsConfigurator,
)
from odl_installer.components.karaf_features.karaf_features_configurator import (
    KarafFeaturesConfigurator,
    parse_features_boot,
)
from odl_installer.components.l3_forwarding.l3_configurator import (
    L3ForwardingConfigurator,
)
from odl_installer.components.log_levels.log_level_configurator import (
    LogLevelConfigurator,
)
from odl_installer.components.rest_port.rest_port_configurator import (
    RestPortConfigurator,
)
from odl_installer.config_models import AppSettings, InstallMethod

PAX_LOGGING = """\
log4j.rootLogger=INFO, async, osgi:*
log4j.logger.org.opendaylight.ovsdb = INFO
log4j.appender.out.maxFileSize=1MB
"""


def test_parse_features_boot():
    content = "featuresRepositories = a\nfeaturesBoot = config, standard,ssh\n"
    assert parse_features_boot(content) == ["config", "standard", "ssh"]
    assert parse_features_boot("nothing=here\n") == []


def test_karaf_features_renders_exact_feature_set(fake_elevated, odl_home, redhat_facts, mock_logger):
    settings = AppSettings(home_dir=odl_home, extra_features=["odl-ovsdb-openstack"])
    configurator = KarafFeaturesConfigurator(settings, redhat_facts, mock_logger)

    assert configurator.is_configured() is False
    assert configurator.configure() is True
    assert configurator.changed is True

    content = (odl_home / "etc/org.apache.karaf.features.cfg").read_text()
    assert parse_features_boot(content) == [
        "config",
        "standard",
        "region",
        "package",
        "kar",
        "ssh",
        "management",
        "odl-ovsdb-openstack",
    ]
    assert "features-integration/0.2.2-Helium-SR2/xml/features" in content
    assert configurator.is_configured() is True


def test_configurator_is_idempotent(fake_elevated, app_settings, redhat_facts, mock_logger):
    KarafFeaturesConfigurator(app_settings, redhat_facts, mock_logger).configure()
    fake_elevated.reset_mock()

    second = KarafFeaturesConfigurator(app_settings, redhat_facts, mock_logger)
    second.configure()

    assert second.changed is False
    fake_elevated.assert_not_called()


def test_configurator_owner_only_on_tarball_route(fake_elevated, odl_home, debian_facts, mock_logger):
    package = CredentialsConfigurator(AppSettings(home_dir=odl_home), debian_facts, mock_logger)
    tarball = CredentialsConfigurator(
        AppSettings(home_dir=odl_home, install_method=InstallMethod.TARBALL),
        debian_facts,
        mock_logger,
    )
    assert package.file_owner() is None
    assert tarball.file_owner() == "odl:odl"

    tarball.configure()
    chown_calls = [c.args[0] for c in fake_elevated.call_args_list if c.args[0][0] == "chown"]
    assert chown_calls == [["chown", "odl:odl", str(odl_home / "etc/users.properties")]]


def test_rest_port_tomcat(fake_elevated, odl_home, redhat_facts, mock_logger):
    settings = AppSettings(home_dir=odl_home, rest_port=7777)
    RestPortConfigurator(settings, redhat_facts, mock_logger).configure()

    content = (odl_home / "configuration/tomcat-server.xml").read_text()
    assert '<Connector port="7777" protocol="HTTP/1.1"' in content


def test_rest_port_jetty(fake_elevated, odl_home, redhat_facts, mock_logger):
    settings = AppSettings(home_dir=odl_home, rest_port=8181, rest_connector="jetty")
    configurator = RestPortConfigurator(settings, redhat_facts, mock_logger)
    configurator.configure()

    assert configurator.connector_path == odl_home / "etc/jetty.xml"
    assert '<Property name="jetty.port" default="8181" />' in configurator.connector_path.read_text()


def test_log_levels_replace_and_append(fake_elevated, odl_home, redhat_facts, mock_logger):
    cfg = odl_home / "etc/org.ops4j.pax.logging.cfg"
    cfg.parent.mkdir(parents=True)
    cfg.write_text(PAX_LOGGING)
    settings = AppSettings(
        home_dir=odl_home,
        log_levels={
            "org.opendaylight.ovsdb": "trace",
            "org.opendaylight.ovsdb.lib": "INFO",
        },
    )
    configurator = LogLevelConfigurator(settings, redhat_facts, mock_logger)

    assert configurator.is_configured() is False
    configurator.configure()

    lines = cfg.read_text().splitlines()
    assert lines == [
        "log4j.rootLogger=INFO, async, osgi:*",
        "log4j.logger.org.opendaylight.ovsdb = TRACE",
        "log4j.appender.out.maxFileSize=1MB",
        "log4j.logger.org.opendaylight.ovsdb.lib = INFO",
    ]
    assert configurator.changed is True
    assert configurator.is_configured() is True


def test_log_levels_empty_is_configured(odl_home, redhat_facts, mock_logger):
    configurator = LogLevelConfigurator(AppSettings(home_dir=odl_home), redhat_facts, mock_logger)
    assert configurator.is_configured() is True


def test_credentials(fake_elevated, odl_home, redhat_facts, mock_logger):
    settings = AppSettings(home_dir=odl_home, username="odladmin", password="s3cret")
    CredentialsConfigurator(settings, redhat_facts, mock_logger).configure()

    content = (odl_home / "etc/users.properties").read_text()
    assert "odladmin = s3cret,_g_:admingroup" in content


def test_l3_forwarding_toggle(fake_elevated, odl_home, redhat_facts, mock_logger):
    props = odl_home / "etc/custom.properties"
    props.parent.mkdir(parents=True)
    props.write_text("of.address = 0.0.0.0\n# ovsdb.l3.fwd.enabled=yes\n")

    enabled = L3ForwardingConfigurator(
        AppSettings(home_dir=odl_home, enable_l3=True), redhat_facts, mock_logger
    )
    assert enabled.is_configured() is False
    enabled.configure()
    assert props.read_text() == "of.address = 0.0.0.0\novsdb.l3.fwd.enabled=yes\n"
    assert enabled.is_configured() is True

    disabled = L3ForwardingConfigurator(
        AppSettings(home_dir=odl_home, enable_l3=False), redhat_facts, mock_logger
    )
    disabled.configure()
    assert props.read_text() == "of.address = 0.0.0.0\novsdb.l3.fwd.enabled=no\n"


def test_line_configurators_chown_on_tarball_route(fake_elevated, odl_home, redhat_facts, mock_logger):
    settings = AppSettings(
        home_dir=odl_home,
        install_method=InstallMethod.TARBALL,
        log_levels={"org.opendaylight.ovsdb": "DEBUG"},
    )
    LogLevelConfigurator(settings, redhat_facts, mock_logger).configure()
    L3ForwardingConfigurator(settings, redhat_facts, mock_logger).configure()

    chown_calls = [c.args[0] for c in fake_elevated.call_args_list if c.args[0][0] == "chown"]
    assert chown_calls == [
        ["chown", "odl:odl", str(odl_home / "etc/org.ops4j.pax.logging.cfg")],
        ["chown", "odl:odl", str(odl_home / "etc/custom.properties")],
    ]
