import pytest
from pytest_mock import MockerFixture

from odl_installer.base_component import BaseComponent
from odl_installer.config_models import AppSettings
from odl_installer.orchestrator import ComponentFailedError, InstallerOrchestrator
from odl_installer.registry import ComponentRegistry


class FakeComponent(BaseComponent):
    """Records calls into a shared journal; behaviour set through class attributes."""

    journal: list = []
    installed = True
    configured = True
    install_ok = True
    configure_ok = True
    changes = False

    def _log(self, action):
        self.journal.append((self.component_name, action))

    def install(self):
        self._log("install")
        self.changed = self.changes
        return self.install_ok

    def configure(self):
        self._log("configure")
        self.changed = self.changes
        return self.configure_ok

    def is_installed(self):
        return self.installed

    def is_configured(self):
        return self.configured

    def refresh(self):
        self._log("refresh")
        return True


@pytest.fixture
def fake_registry(monkeypatch, mocker: MockerFixture):
    monkeypatch.setattr(ComponentRegistry, "_registry", {})
    journal = []
    plan = []

    def add(name, deps=(), subscribes=(), **behaviour):
        attrs = dict(behaviour, journal=journal)
        cls = type(f"Fake_{name}", (FakeComponent,), attrs)
        ComponentRegistry.register(
            name,
            {"dependencies": list(deps), "subscribes": list(subscribes), "description": name},
        )(cls)
        plan.append(name)

    mocker.patch("odl_installer.orchestrator.validate_platform")
    planner = mocker.patch("odl_installer.orchestrator.ResourcePlanner")
    planner.return_value.plan.side_effect = lambda: list(plan)
    return add, journal


@pytest.fixture
def orchestrator(redhat_facts, mock_logger):
    return InstallerOrchestrator(AppSettings(), mock_logger, facts=redhat_facts)


def test_apply_converges_only_what_is_out_of_state(fake_registry, orchestrator):
    add, journal = fake_registry
    add("repository", installed=False, changes=True)
    add("package", deps=["repository"])
    add("rest-port", deps=["package"], configured=False, changes=True)

    changed = orchestrator.apply()

    assert journal == [("repository", "install"), ("rest-port", "configure")]
    assert changed == ["repository", "rest-port"]


def test_apply_refreshes_subscribers_after_change(fake_registry, orchestrator):
    add, journal = fake_registry
    add("rest-port", configured=False, changes=True)
    add("credentials")
    add("service", deps=["rest-port", "credentials"], subscribes=["rest-port", "credentials"])

    orchestrator.apply()

    assert journal == [("rest-port", "configure"), ("service", "refresh")]


def test_apply_no_refresh_without_changes(fake_registry, orchestrator):
    add, journal = fake_registry
    add("rest-port")
    add("service", deps=["rest-port"], subscribes=["rest-port"])

    assert orchestrator.apply() == []
    assert journal == []


def test_apply_fails_fast_without_rollback(fake_registry, orchestrator):
    add, journal = fake_registry
    add("repository", installed=False, changes=True)
    add("package", deps=["repository"], installed=False, install_ok=False)
    add("rest-port", deps=["package"], configured=False)

    with pytest.raises(ComponentFailedError) as excinfo:
        orchestrator.apply()

    assert excinfo.value.component == "package"
    assert excinfo.value.phase == "install"
    assert journal == [("repository", "install"), ("package", "install")]


def test_apply_native_errors_propagate(fake_registry, orchestrator, mocker: MockerFixture):
    add, _ = fake_registry
    add("package", installed=False)
    mocker.patch.object(
        ComponentRegistry.get_component("package"),
        "install",
        side_effect=OSError("disk full"),
    )
    with pytest.raises(OSError, match="disk full"):
        orchestrator.apply()


def test_apply_dry_run_changes_nothing(fake_registry, orchestrator):
    add, journal = fake_registry
    add("package", installed=False)
    assert orchestrator.apply(dry_run=True) == []
    assert journal == []


def test_apply_selected_components_with_dependencies(fake_registry, orchestrator):
    add, journal = fake_registry
    add("repository", installed=False)
    add("package", deps=["repository"], installed=False)
    add("rest-port", configured=False)

    orchestrator.apply(["package"])

    assert journal == [("repository", "install"), ("package", "install")]


def test_apply_rejects_unplanned_component(fake_registry, orchestrator):
    add, _ = fake_registry
    add("package")
    with pytest.raises(ValueError, match="archive"):
        orchestrator.apply(["archive"])


def test_status(fake_registry, orchestrator):
    add, journal = fake_registry
    add("package", installed=False)
    add("rest-port", configured=False)

    assert orchestrator.status() == {
        "package": {"installed": False, "configured": True},
        "rest-port": {"installed": True, "configured": False},
    }
    assert journal == []


def test_facts_detected_lazily(mocker: MockerFixture, redhat_facts, mock_logger):
    detect = mocker.patch(
        "odl_installer.orchestrator.detect_host_facts", return_value=redhat_facts
    )
    orchestrator = InstallerOrchestrator(AppSettings(), mock_logger)
    assert orchestrator.facts is redhat_facts
    assert orchestrator.facts is redhat_facts
    detect.assert_called_once()
