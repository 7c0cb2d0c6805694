# common/template_utils.py
# -*- coding: utf-8 -*-
"""
Rendering of the str.format templates used for configuration files.
"""

import logging
from typing import Any, Mapping, Optional

from odl_installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer

module_logger = logging.getLogger(__name__)


def render_template(
    template: str,
    values: Mapping[str, Any],
    app_settings: Optional[AppSettings] = None,
    template_name: str = "template",
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Render ``template`` with ``values``.

    Rendering is deterministic: the same template and values always produce
    the same text. Unused values are ignored.

    Raises:
        KeyError: The template references a placeholder not in ``values``.
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        return template.format(**values)
    except KeyError as e_key:
        symbols = get_symbols(app_settings)
        log_installer(
            f"{symbols.get('error', '❌')} Missing placeholder key {e_key} for {template_name}.",
            "error",
            logger_to_use,
            app_settings,
        )
        raise
