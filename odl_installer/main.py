# odl_installer/main.py
# -*- coding: utf-8 -*-
"""
Command-line interface for the OpenDaylight installer.
"""

import functools
import subprocess
from typing import Any, Dict, Optional, Tuple

import click
import requests

from common.logging_config import setup_logging
from odl_installer.config_loader import DEFAULT_CONFIG_FILE, load_app_settings
from odl_installer.config_models import AppSettings
from odl_installer.facts import UnsupportedPlatformError
from odl_installer.orchestrator import ComponentFailedError, InstallerOrchestrator
from odl_installer.planner import UnknownInstallMethodError
from odl_installer.registry import ComponentRegistry
from odl_installer.validation import verify_installation

# Failures that end a run with a message instead of a traceback.
RUN_ERRORS = (
    UnsupportedPlatformError,
    UnknownInstallMethodError,
    ComponentFailedError,
    ValueError,
    subprocess.CalledProcessError,
    requests.RequestException,
    OSError,
)


def _parse_log_levels(ctx, param, values: Tuple[str, ...]) -> Optional[Dict[str, str]]:
    if not values:
        return None
    levels: Dict[str, str] = {}
    for value in values:
        logger_name, sep, level = value.partition("=")
        if not sep or not logger_name.strip() or not level.strip():
            raise click.BadParameter(
                f"'{value}' is not in LOGGER=LEVEL form.", ctx=ctx, param=param
            )
        levels[logger_name.strip()] = level.strip()
    return levels


def settings_options(func):
    """Options shared by every command that needs the settings."""

    @click.option(
        "--config",
        "config_file",
        default=DEFAULT_CONFIG_FILE,
        show_default=True,
        type=click.Path(dir_okay=False),
        help="YAML configuration file.",
    )
    @click.option(
        "--install-method",
        help="Install route: package (rpm/deb) or tarball.",
    )
    @click.option("--os-family", help="Override the detected OS family.")
    @click.option("--rest-port", type=int, help="Northbound REST port.")
    @click.option(
        "--feature",
        "extra_features",
        multiple=True,
        help="Extra Karaf feature to install at boot. Repeatable.",
    )
    @click.option(
        "--default-feature",
        "default_features",
        multiple=True,
        help="Replaces the default Karaf boot features. Repeatable.",
    )
    @click.option(
        "--log-level",
        "log_levels",
        multiple=True,
        callback=_parse_log_levels,
        help="LOGGER=LEVEL override for the controller's logging. Repeatable.",
    )
    @click.option("--username", help="Controller admin username.")
    @click.option("--password", help="Controller admin password.")
    @click.option(
        "--enable-l3/--disable-l3",
        "enable_l3",
        default=None,
        help="Toggle OVSDB L3 forwarding.",
    )
    @click.option("--tarball-url", help="Distribution tarball URL.")
    @click.option("--verbose", "-v", is_flag=True, help="Debug logging.")
    @functools.wraps(func)
    def wrapper(
        config_file,
        install_method,
        os_family,
        rest_port,
        extra_features,
        default_features,
        log_levels,
        username,
        password,
        enable_l3,
        tarball_url,
        verbose,
        **kwargs,
    ):
        logger = setup_logging(log_level="DEBUG" if verbose else None)
        overrides: Dict[str, Any] = {
            "install_method": install_method,
            "os_family": os_family,
            "rest_port": rest_port,
            "extra_features": list(extra_features) or None,
            "default_features": list(default_features) or None,
            "log_levels": log_levels,
            "username": username,
            "password": password,
            "enable_l3": enable_l3,
            "tarball_url": tarball_url,
        }
        app_settings = load_app_settings(
            overrides, config_file, current_logger=logger
        )
        return func(app_settings, logger, **kwargs)

    return wrapper


@click.group()
def cli():
    """
    Install and configure the OpenDaylight SDN controller.
    """


@cli.command(name="apply")
@click.option(
    "--component",
    "components",
    multiple=True,
    help="Only apply this component (and its dependencies). Repeatable.",
)
@click.option("--dry-run", is_flag=True, help="Only show what would be applied.")
@settings_options
def apply_command(app_settings: AppSettings, logger, components, dry_run):
    """
    Converge the host to the configured state.
    """
    orchestrator = InstallerOrchestrator(app_settings, logger)
    try:
        changed = orchestrator.apply(list(components) or None, dry_run=dry_run)
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e
    if dry_run:
        click.echo("Dry run complete; nothing changed.")
    else:
        click.echo(f"Changed: {', '.join(changed) if changed else 'nothing'}")


@cli.command(name="plan")
@settings_options
def plan_command(app_settings: AppSettings, logger):
    """
    Print the components that would be applied, in order.
    """
    orchestrator = InstallerOrchestrator(app_settings, logger)
    try:
        names = orchestrator.plan()
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e
    for name in names:
        click.echo(name)


@cli.command(name="status")
@settings_options
def status_command(app_settings: AppSettings, logger):
    """
    Show whether each planned component is installed and configured.
    """
    orchestrator = InstallerOrchestrator(app_settings, logger)
    try:
        status = orchestrator.status()
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e
    for name, state in status.items():
        installed = "installed" if state["installed"] else "not installed"
        configured = "configured" if state["configured"] else "not configured"
        click.echo(f"{name}: {installed}, {configured}")


@cli.command(name="verify")
@click.option(
    "--check-rest",
    is_flag=True,
    help="Also query the controller's REST API with the admin credentials.",
)
@settings_options
def verify_command(app_settings: AppSettings, logger, check_rest):
    """
    Check that the controller is installed, running and configured.
    """
    orchestrator = InstallerOrchestrator(app_settings, logger)
    try:
        results = verify_installation(
            app_settings,
            orchestrator.facts,
            check_rest=check_rest,
            current_logger=logger,
        )
    except RUN_ERRORS as e:
        raise click.ClickException(str(e)) from e

    for result in results:
        click.echo(
            f"[{'PASS' if result.passed else 'FAIL'}] {result.name}: {result.detail}"
        )
    failed = [r.name for r in results if not r.passed]
    if failed:
        raise click.ClickException(f"Failed checks: {', '.join(failed)}")


@cli.command(name="list")
def list_command():
    """
    List the registered components.
    """
    components = ComponentRegistry.get_all_components()
    for name in sorted(components):
        description = components[name].metadata.get("description", "")
        deps = ", ".join(sorted(ComponentRegistry.get_component_dependencies(name)))
        click.echo(f"{name}: {description}")
        if deps:
            click.echo(f"  depends on: {deps}")


def main():
    cli()


if __name__ == "__main__":
    main()
