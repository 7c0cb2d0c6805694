# common/download_utils.py
# -*- coding: utf-8 -*-
"""
Downloading distribution archives over HTTP and unpacking them with tar.

Failures are logged and re-raised unchanged; nothing here retries.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from odl_installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer, run_elevated_command

module_logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_file(
    url: str,
    download_to_path: Union[str, Path],
    app_settings: Optional[AppSettings] = None,
    timeout: int = 300,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Download ``url`` to ``download_to_path``.

    Args:
        url: The URL to fetch.
        download_to_path: The file path where the download is saved.
        app_settings: Application settings for log symbols.
        timeout: Request timeout in seconds.
        current_logger: Logger to use.

    Returns:
        The path of the downloaded file.

    Raises:
        requests.exceptions.RequestException: Any HTTP or network failure.
        OSError: The file could not be written.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    download_path = Path(download_to_path)
    log_installer(
        f"{symbols.get('package', '📦')} Downloading {url} to {download_path}",
        "info",
        logger_to_use,
        app_settings,
    )

    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(download_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except requests.exceptions.HTTPError as http_err:
        log_installer(
            f"{symbols.get('error', '❌')} HTTP error downloading {url}: {http_err}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise
    except requests.exceptions.RequestException as req_err:
        log_installer(
            f"{symbols.get('error', '❌')} Failed to download {url}: {req_err}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise
    except OSError as io_err:
        log_installer(
            f"{symbols.get('error', '❌')} File I/O error saving {download_path}: {io_err}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    log_installer(
        f"{symbols.get('success', '✅')} Downloaded {url}",
        "success",
        logger_to_use,
        app_settings,
    )
    return download_path


def extract_tarball(
    archive_path: Union[str, Path],
    target_dir: Union[str, Path],
    app_settings: Optional[AppSettings],
    strip_components: int = 1,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Extract a gzip tarball into ``target_dir`` with ``tar``, stripping the
    given number of leading path components.
    """
    logger_to_use = current_logger if current_logger else module_logger
    run_elevated_command(
        ["mkdir", "-p", str(target_dir)],
        app_settings,
        current_logger=logger_to_use,
    )
    command = [
        "tar",
        "-xzf",
        str(archive_path),
        "-C",
        str(target_dir),
    ]
    if strip_components:
        command.append(f"--strip-components={strip_components}")
    run_elevated_command(command, app_settings, current_logger=logger_to_use)
