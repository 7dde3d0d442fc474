"""Shared subprocess and validation helpers."""

from __future__ import annotations

import re
import subprocess

from loguru import logger

from vlanprov.exceptions import ExternalOperationError, InvalidInputError


def _run_cmd(cmd: list[str], timeout: int = 30) -> str:
    """Run a read-only subprocess command and return stdout."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        return result.stdout
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug(f"Command {cmd[0]} failed: {e}")
        return ""


def _run_checked(cmd: list[str], timeout: int | None = None) -> str:
    """Run a subprocess command that must succeed; raise ExternalOperationError on failure."""
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise ExternalOperationError(f"Command not found: {cmd[0]}", command=cmd) from e
    except subprocess.TimeoutExpired as e:
        raise ExternalOperationError(f"Command timed out: {' '.join(cmd)}", command=cmd) from e

    if result.returncode != 0:
        stderr = result.stderr.strip() or result.stdout.strip()
        raise ExternalOperationError(
            f"{' '.join(cmd)} failed (exit {result.returncode}): {stderr}",
            command=cmd,
            returncode=result.returncode,
        )
    return result.stdout


def _validate_interface_name(name: str) -> bool:
    """Validate interface name to prevent injection."""
    return bool(re.match(r"^[a-zA-Z0-9._-]+$", name))


def _require_interface_name(name: str) -> str:
    if not _validate_interface_name(name):
        raise InvalidInputError(f"Invalid interface name: {name!r}")
    return name
