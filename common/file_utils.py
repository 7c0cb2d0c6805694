# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions: backing up files, writing files only when their
content changes, idempotent single-line edits, and ownership fix-ups.
"""

import datetime
import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from odl_installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer, run_elevated_command

module_logger = logging.getLogger(__name__)


def backup_file(
    file_path: Union[str, Path],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Backup a specified file to a timestamped backup file.

    Parameters:
        file_path: The path of the file to be backed up.
        app_settings: Application settings, used for log symbols.
        current_logger: Logger instance to use. Defaults to the module logger.

    Returns:
        bool: True if the backup succeeded or no backup was needed (the file
            does not exist), False if the copy failed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    try:
        run_elevated_command(
            ["test", "-f", str(file_path)],
            app_settings,
            check=True,
            capture_output=True,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError:
        log_installer(
            f"{symbols.get('info', 'ℹ️')} File {file_path} does not exist or is not a regular file. No backup needed.",
            "info",
            logger_to_use,
            app_settings,
        )
        return True

    timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    backup_path = f"{file_path}.bak.{timestamp}"
    try:
        run_elevated_command(
            ["cp", "-a", str(file_path), backup_path],
            app_settings,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Failed to backup {file_path} to {backup_path}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return False

    log_installer(
        f"{symbols.get('success', '✅')} Backed up {file_path} to {backup_path}",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def read_file_content(
    file_path: Union[str, Path],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Return the content of a file, or None when it does not exist.

    Files the current user cannot read are read through an elevated ``cat``.
    """
    path = Path(file_path)
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        result = run_elevated_command(
            ["cat", str(path)],
            app_settings,
            capture_output=True,
            current_logger=current_logger,
        )
        return result.stdout


def write_file_content(
    file_path: Union[str, Path],
    content: str,
    app_settings: Optional[AppSettings],
    mode: Optional[str] = None,
    owner: Optional[str] = None,
    backup: bool = False,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Write ``content`` to ``file_path`` only if the file does not already hold
    exactly that content.

    Parameters:
        file_path: Destination file.
        content: Desired file content.
        app_settings: Application settings.
        mode: Optional chmod mode applied after writing (e.g. "0644").
        owner: Optional "user:group" applied after writing.
        backup: Take a timestamped backup of the previous content first.
        current_logger: Logger to use.

    Returns:
        bool: True if the file was changed, False if it already matched.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    path = Path(file_path)

    existing = read_file_content(path, app_settings, logger_to_use)
    if existing == content:
        log_installer(
            f"{symbols.get('info', 'ℹ️')} {path} already up to date.",
            "debug",
            logger_to_use,
            app_settings,
        )
        return False

    if existing is not None and backup:
        backup_file(path, app_settings, current_logger=logger_to_use)

    if not path.parent.exists():
        run_elevated_command(
            ["mkdir", "-p", str(path.parent)],
            app_settings,
            current_logger=logger_to_use,
        )

    run_elevated_command(
        ["tee", str(path)],
        app_settings,
        cmd_input=content,
        capture_output=True,
        current_logger=logger_to_use,
    )
    if mode:
        run_elevated_command(
            ["chmod", mode, str(path)],
            app_settings,
            current_logger=logger_to_use,
        )
    if owner:
        run_elevated_command(
            ["chown", owner, str(path)],
            app_settings,
            current_logger=logger_to_use,
        )

    log_installer(
        f"{symbols.get('success', '✅')} Wrote {path}",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def apply_line_edit(
    lines: List[str], line: str, match: Optional[str] = None
) -> List[str]:
    """
    Return ``lines`` edited so that ``line`` is present.

    If ``line`` is already present the list is returned unchanged. Otherwise
    every line matching the regex ``match`` is replaced by ``line``; when
    nothing matches, ``line`` is appended.
    """
    if line in lines:
        return list(lines)

    if match:
        pattern = re.compile(match)
        replaced = False
        edited: List[str] = []
        for existing in lines:
            if pattern.search(existing):
                if not replaced:
                    edited.append(line)
                    replaced = True
                # Further matches collapse into the single replacement.
                continue
            edited.append(existing)
        if replaced:
            return edited

    return [*lines, line]


def ensure_line_in_file(
    file_path: Union[str, Path],
    line: str,
    app_settings: Optional[AppSettings],
    match: Optional[str] = None,
    owner: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Make sure ``line`` is present in ``file_path``, replacing lines matching
    ``match`` when given. A missing file is created with just that line.
    ``owner`` ("user:group") is applied whenever the file is written.

    Returns:
        bool: True if the file was changed.
    """
    existing = read_file_content(file_path, app_settings, current_logger)
    lines = existing.splitlines() if existing else []
    edited = apply_line_edit(lines, line, match)
    if edited == lines and existing is not None:
        return False

    new_content = "\n".join(edited) + "\n"
    return write_file_content(
        file_path,
        new_content,
        app_settings,
        owner=owner,
        current_logger=current_logger,
    )


def ensure_ownership(
    path: Union[str, Path],
    user: str,
    group: str,
    app_settings: Optional[AppSettings],
    recursive: bool = True,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Set ``user:group`` ownership on ``path`` (recursively by default).
    """
    logger_to_use = current_logger if current_logger else module_logger
    command = ["chown"]
    if recursive:
        command.append("-R")
    command.extend([f"{user}:{group}", str(path)])
    log_installer(
        f"Ensuring ownership ({user}:{group}) for {path}",
        "debug",
        logger_to_use,
        app_settings,
    )
    run_elevated_command(command, app_settings, current_logger=logger_to_use)


def path_owned_by(path: Union[str, Path], user: str, group: str) -> bool:
    """Return True if ``path`` exists and is owned by ``user:group``."""
    p = Path(path)
    if not p.exists():
        return False
    return p.owner() == user and p.group() == group
